"""
Table metadata model shared with the introspection and export layers.

Provides the passive entities the override layer corrects:
- Table: one database table's exportable shape
- UniqueIndex: real or virtual identity key candidate
- Reference: one outgoing foreign-key edge
- RowColumn / Row: one exported record, column by column
"""

from .errors import MissingColumnError, OverrideError, OverrideValidationError
from .model import (
    VIRTUAL_INDEX_NAME,
    Reference,
    Row,
    RowColumn,
    Table,
    UniqueIndex,
    choose_main_unique_index,
    find_column,
)

__version__ = "1.0.0"
__all__ = [
    "VIRTUAL_INDEX_NAME",
    "Table",
    "UniqueIndex",
    "Reference",
    "RowColumn",
    "Row",
    "find_column",
    "choose_main_unique_index",
    "OverrideError",
    "MissingColumnError",
    "OverrideValidationError",
]
