"""
Table metadata entities.

Tables, unique indexes and references are built once per synchronization run
by the introspection layer, corrected by the override layer, then treated as
read-mostly configuration. Rows are the per-record view handed to row
transformers and to serialization.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Iterable

if TYPE_CHECKING:
    from transformation.transformers.base import RowTransformer

# Reserved name of every index that is asserted by an override rather than
# enforced by a database constraint
VIRTUAL_INDEX_NAME = "virtual_main_unique_index"


@dataclass(frozen=True)
class UniqueIndex:
    """Named, ordered set of columns that identifies a row."""

    name: str
    columns: tuple[str, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "columns", tuple(self.columns))

    @property
    def is_virtual(self) -> bool:
        """True when the index is an override assertion, not a constraint."""
        return self.name == VIRTUAL_INDEX_NAME


@dataclass
class Reference:
    """
    Outgoing foreign-key edge.

    Attributes:
        table_name: Referenced table
        column_mapping: Local column name -> referenced column name
    """

    table_name: str
    column_mapping: dict[str, str] = field(default_factory=dict)

    def copy(self) -> Reference:
        return Reference(self.table_name, dict(self.column_mapping))


@dataclass
class Table:
    """
    Exportable shape of one database table.

    Attributes:
        name: Lowercase table name, unique across the model
        columns: Column names in catalog order (empty when not introspected)
        pk_sequence: Sequence generating primary keys ("" = as introspected)
        unique_indexes: Index name -> UniqueIndex
        main_unique_index_name: Identity key used for row matching ("" = unset)
        unexport_columns: Columns omitted from serialized rows
        references: Outgoing foreign-key edges, in introspection order
        row_mod_callback: Transformer applied to each row before export
    """

    name: str
    columns: list[str] = field(default_factory=list)
    pk_sequence: str = ""
    unique_indexes: dict[str, UniqueIndex] = field(default_factory=dict)
    main_unique_index_name: str = ""
    unexport_columns: set[str] = field(default_factory=set)
    references: list[Reference] = field(default_factory=list)
    row_mod_callback: RowTransformer | None = None

    @property
    def main_unique_index(self) -> UniqueIndex | None:
        """Identity key index, or None when unset."""
        if not self.main_unique_index_name:
            return None
        return self.unique_indexes.get(self.main_unique_index_name)

    @property
    def has_virtual_main_index(self) -> bool:
        index = self.main_unique_index
        return index is not None and index.is_virtual

    def copy(self) -> Table:
        """
        Return a copy that owns its mutable containers.

        Unique indexes are immutable and shared; references are copied so a
        rewrite on the copy never reaches the original.
        """
        return Table(
            name=self.name,
            columns=list(self.columns),
            pk_sequence=self.pk_sequence,
            unique_indexes=dict(self.unique_indexes),
            main_unique_index_name=self.main_unique_index_name,
            unexport_columns=set(self.unexport_columns),
            references=[ref.copy() for ref in self.references],
            row_mod_callback=self.row_mod_callback,
        )


@dataclass
class RowColumn:
    """
    One column of an exported record.

    Attributes:
        column_name: Column name
        column_type: Catalog type name (text, numeric, boolean, bytea, ...)
        value: Current value read from the source instance
        initial_value: Schema-declared default for the column
    """

    column_name: str
    column_type: str = ""
    value: Any = None
    initial_value: Any = None

    def get_initial_value(self) -> Any:
        return self.initial_value


# Ordered column-name/value pairs of one exported record
Row = list[RowColumn]


def find_column(row: Row, column_name: str) -> int:
    """
    Locate a column by exact name.

    Returns:
        Position of the first matching column, or -1 if absent
    """
    for i, column in enumerate(row):
        if column.column_name == column_name:
            return i
    return -1


def choose_main_unique_index(indexes: Iterable[UniqueIndex]) -> UniqueIndex | None:
    """
    Pick an identity key among real unique indexes.

    Called by the introspection layer to fill main_unique_index_name before
    overrides run; a pinned or virtual index from an override replaces the
    choice afterwards.

    The narrowest index wins; indexes of equal width are ordered by name so
    the choice is stable across runs regardless of catalog order.

    Args:
        indexes: Candidate indexes

    Returns:
        Chosen index, or None if there are no candidates
    """
    candidates = sorted(indexes, key=lambda index: (len(index.columns), index.name))
    return candidates[0] if candidates else None
