"""
Host rewrite transformer.

Rewrites URLs embedded in stored content so they no longer name the source
instance. Only rows whose marker column carries a given prefix are touched.
"""

import logging
import re
from dataclasses import dataclass, field, replace
from typing import Any

from schema.errors import MissingColumnError
from schema.model import Row, Table, find_column

from .base import RowTransformer

logger = logging.getLogger(__name__)

DEFAULT_PLACEHOLDER_HOST = "{SERVER_FQDN}"


@dataclass(frozen=True)
class HostRewriteTransformer(RowTransformer):
    """
    Replace the host of ``scheme://<host>/<path_prefix>/`` URLs in a payload.

    Examples:
        https://old-host.example/os-images/foo.raw
            -> https://{SERVER_FQDN}/os-images/foo.raw

    Attributes:
        marker_column: Column whose text value selects the rows to rewrite
        marker_prefix: Prefix the marker value must start with
        payload_column: Column holding the content to rewrite
        path_prefix: First path segment of the URLs to rewrite
        placeholder_host: Host written in place of the original one
        scheme: URL scheme to match
    """

    marker_column: str
    marker_prefix: str
    payload_column: str
    path_prefix: str
    placeholder_host: str = DEFAULT_PLACEHOLDER_HOST
    scheme: str = "https"
    _text_pattern: re.Pattern = field(init=False, repr=False, compare=False)
    _bytes_pattern: re.Pattern = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        pattern = (
            re.escape(self.scheme) + "://[^/]+/" + re.escape(self.path_prefix) + "/"
        )
        object.__setattr__(self, "_text_pattern", re.compile(pattern))
        object.__setattr__(self, "_bytes_pattern", re.compile(pattern.encode()))

    @property
    def replacement(self) -> str:
        return f"{self.scheme}://{self.placeholder_host}/{self.path_prefix}/"

    def matches(self, row: Row) -> bool:
        """True when the row's marker column selects it for rewriting."""
        position = find_column(row, self.marker_column)
        if position < 0:
            return False
        marker = row[position].value
        if isinstance(marker, (bytes, bytearray, memoryview)):
            marker = bytes(marker).decode("utf-8", errors="replace")
        return isinstance(marker, str) and marker.startswith(self.marker_prefix)

    def transform(self, row: Row, table: Table) -> Row:
        """Return the row with payload URLs rewritten, if selected."""
        if not self.matches(row):
            return row

        position = find_column(row, self.payload_column)
        if position < 0:
            raise MissingColumnError(table.name, self.payload_column)

        column = row[position]
        if column.value is None:
            return row

        logger.debug(
            f"Rewriting {self.path_prefix} URLs in {table.name}.{self.payload_column}"
        )
        rewritten = self.rewrite(column.value)
        transformed = list(row)
        transformed[position] = replace(column, value=rewritten)

        if rewritten != column.value:
            self._record_applied(table)

        return transformed

    def rewrite(self, payload: Any) -> Any:
        """
        Rewrite every matching URL in ``payload``.

        Raises:
            TypeError: If payload is neither text nor binary
        """
        replacement = self.replacement
        if isinstance(payload, str):
            return self._text_pattern.sub(lambda _: replacement, payload)
        if isinstance(payload, (bytes, bytearray, memoryview)):
            encoded = replacement.encode()
            return self._bytes_pattern.sub(lambda _: encoded, bytes(payload))
        raise TypeError(
            f"Cannot rewrite payload of type {type(payload).__name__}"
        )

    def columns(self) -> list[str]:
        return [self.marker_column, self.payload_column]
