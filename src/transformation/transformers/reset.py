"""
Value reset transformer.

Replaces a column's source value with the column's schema-declared default,
for values that only make sense in the source instance's operational context.
"""

from dataclasses import dataclass, replace

from schema.errors import MissingColumnError
from schema.model import Row, Table, find_column

from .base import RowTransformer


@dataclass(frozen=True)
class ResetToDefaultTransformer(RowTransformer):
    """
    Reset one column to its declared default.

    Examples:
        severity_id = 3 -> severity_id = <column default>
    """

    column_name: str

    def transform(self, row: Row, table: Table) -> Row:
        """Return the row with the configured column reset."""
        position = find_column(row, self.column_name)
        if position < 0:
            raise MissingColumnError(table.name, self.column_name)

        column = row[position]
        transformed = list(row)
        transformed[position] = replace(column, value=column.get_initial_value())

        if column.value != transformed[position].value:
            self._record_applied(table)

        return transformed

    def columns(self) -> list[str]:
        return [self.column_name]
