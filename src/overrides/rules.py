"""
Override rule description.

A TableOverride is a small, immutable description of every correction one
table needs. Applying it to an introspected Table returns a corrected copy;
each effect fully re-sets its target field, so applying a rule twice gives
the same result as applying it once.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from schema.errors import OverrideError
from schema.model import VIRTUAL_INDEX_NAME, Reference, Table, UniqueIndex
from transformation.transformers.base import RowTransformer


@dataclass(frozen=True)
class ReferenceRewrite:
    """
    Replace edges to a non-portable table with one edge to a portable one.

    Attributes:
        from_table: Referenced table whose rows are not portable
        to_table: Replacement referenced table
        column_mapping: Local column name -> column of ``to_table``
    """

    from_table: str
    to_table: str
    column_mapping: Mapping[str, str] = field(hash=False)

    def __post_init__(self):
        object.__setattr__(self, "column_mapping", MappingProxyType(dict(self.column_mapping)))

    def apply(self, references: list[Reference]) -> list[Reference]:
        """Return references with edges to ``from_table`` retargeted in place."""
        rewritten = []
        replaced = False
        for ref in references:
            if ref.table_name != self.from_table:
                rewritten.append(ref)
            elif not replaced:
                rewritten.append(Reference(self.to_table, dict(self.column_mapping)))
                replaced = True
        return rewritten


@dataclass(frozen=True)
class TableOverride:
    """
    Corrections for one table.

    Attributes:
        pk_sequence: Literal primary-key sequence name
        virtual_index_columns: Columns of a virtual identity key
        main_unique_index_name: Real index pinned as identity key
        unexport_columns: Columns dropped from exported rows
        extend_indexes: Real index name -> columns appended to it
        reference_rewrite: Retargeting of one non-portable reference
        row_transformer: Transformer installed as row callback
        reason: Why the table needs the override
    """

    pk_sequence: str | None = None
    virtual_index_columns: tuple[str, ...] | None = None
    main_unique_index_name: str | None = None
    unexport_columns: frozenset[str] | None = None
    extend_indexes: Mapping[str, tuple[str, ...]] = field(default_factory=dict, hash=False)
    reference_rewrite: ReferenceRewrite | None = None
    row_transformer: RowTransformer | None = None
    reason: str = ""

    def __post_init__(self):
        if self.virtual_index_columns is not None and self.main_unique_index_name:
            raise ValueError(
                "An override either injects a virtual index or pins a real one, not both"
            )
        if self.virtual_index_columns is not None:
            if not self.virtual_index_columns:
                raise ValueError("Virtual index needs at least one column")
            object.__setattr__(
                self, "virtual_index_columns", tuple(self.virtual_index_columns)
            )
        if self.unexport_columns is not None:
            object.__setattr__(self, "unexport_columns", frozenset(self.unexport_columns))
        object.__setattr__(
            self,
            "extend_indexes",
            MappingProxyType({
                name: tuple(columns) for name, columns in self.extend_indexes.items()
            }),
        )

    @property
    def virtual_index(self) -> UniqueIndex | None:
        if self.virtual_index_columns is None:
            return None
        return UniqueIndex(VIRTUAL_INDEX_NAME, self.virtual_index_columns)

    def effects(self) -> list[str]:
        """Names of the effects this rule applies."""
        effects = []
        if self.pk_sequence:
            effects.append("pk_sequence")
        if self.virtual_index_columns is not None:
            effects.append("virtual_index")
        if self.main_unique_index_name:
            effects.append("pinned_index")
        if self.extend_indexes:
            effects.append("index_extension")
        if self.unexport_columns is not None:
            effects.append("unexport_columns")
        if self.reference_rewrite is not None:
            effects.append("reference_rewrite")
        if self.row_transformer is not None:
            effects.append("row_transformer")
        return effects

    def apply(self, table: Table) -> Table:
        """
        Apply every effect of the rule to a copy of ``table``.

        Raises:
            OverrideError: If an index to extend or pin is missing
        """
        corrected = table.copy()

        if self.pk_sequence:
            corrected.pk_sequence = self.pk_sequence

        for index_name, columns in self.extend_indexes.items():
            index = corrected.unique_indexes.get(index_name)
            if index is None:
                raise OverrideError(
                    f"Cannot extend missing index '{index_name}' of table '{table.name}'"
                )
            added = tuple(c for c in columns if c not in index.columns)
            corrected.unique_indexes[index_name] = UniqueIndex(
                index_name, index.columns + added
            )

        if self.virtual_index_columns is not None:
            corrected.unique_indexes[VIRTUAL_INDEX_NAME] = self.virtual_index
            corrected.main_unique_index_name = VIRTUAL_INDEX_NAME
        elif self.main_unique_index_name:
            if self.main_unique_index_name not in corrected.unique_indexes:
                raise OverrideError(
                    f"Cannot pin missing index '{self.main_unique_index_name}' "
                    f"of table '{table.name}'"
                )
            corrected.main_unique_index_name = self.main_unique_index_name

        if self.unexport_columns is not None:
            corrected.unexport_columns = set(self.unexport_columns)

        if self.reference_rewrite is not None:
            corrected.references = self.reference_rewrite.apply(corrected.references)

        if self.row_transformer is not None:
            corrected.row_mod_callback = self.row_transformer

        return corrected

    def describe(self) -> dict:
        """Auditable summary of the rule."""
        summary: dict = {"effects": self.effects()}
        if self.reason:
            summary["reason"] = self.reason
        if self.pk_sequence:
            summary["pk_sequence"] = self.pk_sequence
        if self.virtual_index_columns is not None:
            summary["virtual_index"] = list(self.virtual_index_columns)
        if self.main_unique_index_name:
            summary["main_unique_index"] = self.main_unique_index_name
        if self.extend_indexes:
            summary["extend_indexes"] = {
                name: list(columns) for name, columns in self.extend_indexes.items()
            }
        if self.unexport_columns is not None:
            summary["unexport_columns"] = sorted(self.unexport_columns)
        if self.reference_rewrite is not None:
            summary["reference_rewrite"] = {
                "from": self.reference_rewrite.from_table,
                "to": self.reference_rewrite.to_table,
                "columns": dict(self.reference_rewrite.column_mapping),
            }
        if self.row_transformer is not None:
            summary["row_transformer"] = self.row_transformer.get_type()
        return summary
