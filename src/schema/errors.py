"""
Exceptions raised by the override layer.

All of them signal programmer errors in override rules (a rule naming a
column or index the live schema does not have). They propagate to the
caller; the override layer never handles them itself.
"""


class OverrideError(Exception):
    """Base exception for table override errors."""

    pass


class MissingColumnError(OverrideError):
    """Raised when a row transformer cannot find a column it requires."""

    def __init__(self, table_name: str, column_name: str):
        self.table_name = table_name
        self.column_name = column_name
        super().__init__(
            f"Column '{column_name}' not found in row of table '{table_name}'"
        )


class OverrideValidationError(OverrideError):
    """Raised when an override rule does not match the introspected table."""

    def __init__(self, table_name: str, problems: list[str]):
        self.table_name = table_name
        self.problems = list(problems)
        super().__init__(
            f"Override for table '{table_name}' does not match schema: "
            + "; ".join(self.problems)
        )
