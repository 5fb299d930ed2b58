"""
Schema validation of override rules.

A rule that names a column or index the live schema lacks can only be
detected against an introspected table. These checks let tests (and
callers, once per run) catch such rules before any row is exported.
"""

from schema.errors import OverrideValidationError
from schema.model import Table
from utils.logging import ContextLogger

from .registry import DEFAULT_REGISTRY, OverrideRegistry


def validate_override(table: Table, registry: OverrideRegistry | None = None) -> list[str]:
    """
    Check the table's rule against its introspected shape.

    Column checks are skipped when ``table.columns`` is empty.

    Args:
        table: Table as produced by introspection (before overrides)
        registry: Registry to consult (default: DEFAULT_REGISTRY)

    Returns:
        List of problems (empty if the rule matches or none is registered)
    """
    if registry is None:
        registry = DEFAULT_REGISTRY

    rule = registry.get(table.name)
    if rule is None:
        return []

    problems = []

    for index_name in rule.extend_indexes:
        if index_name not in table.unique_indexes:
            problems.append(f"index to extend '{index_name}' does not exist")
    if rule.main_unique_index_name and rule.main_unique_index_name not in table.unique_indexes:
        problems.append(f"pinned index '{rule.main_unique_index_name}' does not exist")

    if table.columns:
        known = set(table.columns)
        checks = [
            ("virtual index", rule.virtual_index_columns or ()),
            ("unexported", sorted(rule.unexport_columns or ())),
            ("index extension", [c for cols in rule.extend_indexes.values() for c in cols]),
            (
                "reference",
                list(rule.reference_rewrite.column_mapping) if rule.reference_rewrite else [],
            ),
            (
                "row transformer",
                rule.row_transformer.columns() if rule.row_transformer else [],
            ),
        ]
        for label, columns in checks:
            for column in columns:
                if column not in known:
                    problems.append(f"{label} column '{column}' does not exist")

    if problems:
        ContextLogger(__name__, table_name=table.name).warning(
            "Override does not match schema", problems=problems
        )

    return problems


def ensure_valid_override(table: Table, registry: OverrideRegistry | None = None) -> None:
    """
    Raise if the table's rule does not match its introspected shape.

    Raises:
        OverrideValidationError: With every problem found
    """
    problems = validate_override(table, registry)
    if problems:
        raise OverrideValidationError(table.name, problems)
