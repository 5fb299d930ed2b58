"""
Override application entry point.

Called exactly once per table, after introspection and before the table is
handed to the dependency-graph builder or the export layer.
"""

import logging
from collections.abc import Iterable

from prometheus_client import Counter

from schema.model import Table
from utils.tracing import add_span_attributes, add_span_event, trace_operation

from .registry import DEFAULT_REGISTRY, OverrideRegistry

logger = logging.getLogger(__name__)


TABLE_OVERRIDES_APPLIED = Counter(
    "table_overrides_applied_total",
    "Total override effects applied to tables",
    ["table_name", "effect"],
)


def apply_overrides(table: Table, registry: OverrideRegistry | None = None) -> Table:
    """
    Apply the registered override for ``table``, if any.

    Args:
        table: Table as produced by introspection
        registry: Registry to consult (default: DEFAULT_REGISTRY)

    Returns:
        Corrected table, or the input table when no override is registered

    Raises:
        OverrideError: If the rule names an index the table does not have
    """
    if registry is None:
        registry = DEFAULT_REGISTRY

    rule = registry.get(table.name)
    if rule is None:
        return table

    with trace_operation("apply_overrides", table=table.name):
        corrected = registry.apply(table)
        effects = rule.effects()
        add_span_event("override_applied", effects=effects)
        add_span_attributes(main_unique_index=corrected.main_unique_index_name or "none")

    for effect in effects:
        TABLE_OVERRIDES_APPLIED.labels(table_name=table.name, effect=effect).inc()
    logger.debug(f"Applied override to {table.name}: {', '.join(effects)}")

    return corrected


def apply_overrides_to_all(
    tables: Iterable[Table],
    registry: OverrideRegistry | None = None,
) -> dict[str, Table]:
    """
    Apply overrides to every introspected table.

    Returns:
        Table name -> corrected table, in input order
    """
    if registry is None:
        registry = DEFAULT_REGISTRY

    corrected = {}
    for table in tables:
        corrected[table.name] = apply_overrides(table, registry)

    overridden = sum(1 for name in corrected if name in registry)
    logger.info(f"Applied overrides to {overridden} of {len(corrected)} tables")

    return corrected
