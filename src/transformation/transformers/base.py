"""
Base row transformer class and shared metrics.

A row transformer is installed on a Table by an override rule and invoked
once per exported row, just before serialization.
"""

import logging
from abc import ABC, abstractmethod

from prometheus_client import Counter, Histogram

from schema.model import Row, Table

logger = logging.getLogger(__name__)


# Metrics
ROW_TRANSFORMATIONS_APPLIED = Counter(
    "row_transformations_applied_total",
    "Total rows changed by row transformers",
    ["transformer_type", "table_name"],
)

ROW_TRANSFORMATION_TIME = Histogram(
    "row_transformation_seconds",
    "Time to transform a row",
    ["transformer_type"],
    buckets=[0.0001, 0.0005, 0.001, 0.005, 0.01, 0.05, 0.1],
)

ROW_TRANSFORMATION_ERRORS = Counter(
    "row_transformation_errors_total",
    "Row transformation errors",
    ["transformer_type", "error_type"],
)


class RowTransformer(ABC):
    """
    Base class for per-row export transformers.

    Implementations must be deterministic and stateless: the same row
    content always yields the same output. The input row is never mutated;
    changed columns are replaced in a new list.
    """

    @abstractmethod
    def transform(self, row: Row, table: Table) -> Row:
        """
        Transform one exported row.

        Args:
            row: Columns of the row, in any order
            table: Table the row belongs to

        Returns:
            Transformed row
        """
        pass

    def __call__(self, row: Row, table: Table) -> Row:
        with ROW_TRANSFORMATION_TIME.labels(transformer_type=self.get_type()).time():
            try:
                return self.transform(row, table)
            except Exception as e:
                ROW_TRANSFORMATION_ERRORS.labels(
                    transformer_type=self.get_type(),
                    error_type=type(e).__name__,
                ).inc()
                logger.error(
                    f"{self.get_type()} failed on table {table.name}: {e}"
                )
                raise

    def columns(self) -> list[str]:
        """Columns this transformer requires, for schema validation."""
        return []

    def get_type(self) -> str:
        """Get transformer type for metrics."""
        return self.__class__.__name__

    def _record_applied(self, table: Table) -> None:
        ROW_TRANSFORMATIONS_APPLIED.labels(
            transformer_type=self.get_type(),
            table_name=table.name,
        ).inc()
