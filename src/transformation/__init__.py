"""
Row transformation for table export.

Provides the row transformer contract, the concrete transformers installed
by table overrides, and the helpers the serialization layer calls per row.
"""

from transformation.transform import (
    apply_row_transform,
    exportable_columns,
    prepare_row_for_export,
    prepare_rows_for_export,
)
from transformation.transformers import (
    HostRewriteTransformer,
    ResetToDefaultTransformer,
    RowTransformer,
)

__all__ = [
    "RowTransformer",
    "ResetToDefaultTransformer",
    "HostRewriteTransformer",
    "apply_row_transform",
    "exportable_columns",
    "prepare_row_for_export",
    "prepare_rows_for_export",
]
