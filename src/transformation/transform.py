"""
Export boundary for row transformation.

The serialization layer calls prepare_row_for_export once per row, just
before writing it, so the table's installed transformer runs exactly once
and unexported columns never reach the output.
"""

from schema.model import Row, Table
from utils.tracing import trace_operation


def apply_row_transform(table: Table, row: Row) -> Row:
    """
    Run the table's row transformer, if any.

    Args:
        table: Table the row belongs to
        row: Row as read from the source instance

    Returns:
        Transformed row (the input row when no transformer is installed)
    """
    callback = table.row_mod_callback
    if callback is None:
        return row

    with trace_operation(
        "transform_row",
        table=table.name,
        column_count=len(row),
    ):
        return callback(row, table)


def exportable_columns(table: Table, row: Row) -> Row:
    """Return the row without the table's unexported columns."""
    if not table.unexport_columns:
        return list(row)
    return [
        column for column in row if column.column_name not in table.unexport_columns
    ]


def prepare_row_for_export(table: Table, row: Row) -> Row:
    """
    Transform a row and drop its unexported columns.

    The transformer sees the full row, so it may read columns that are
    not exported.
    """
    return exportable_columns(table, apply_row_transform(table, row))


def prepare_rows_for_export(table: Table, rows: list[Row]) -> list[Row]:
    """Prepare multiple rows of the same table."""
    return [prepare_row_for_export(table, row) for row in rows]
