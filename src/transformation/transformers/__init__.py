"""
Row transformers installed by table overrides.

Supports:
- Resetting a column to its schema default
- Rewriting instance-specific URL hosts inside stored content
"""

from .base import RowTransformer
from .reset import ResetToDefaultTransformer
from .rewrite import DEFAULT_PLACEHOLDER_HOST, HostRewriteTransformer
from .rules import create_image_pillar_rewrite, create_severity_reset

__all__ = [
    "RowTransformer",
    "ResetToDefaultTransformer",
    "HostRewriteTransformer",
    "DEFAULT_PLACEHOLDER_HOST",
    "create_severity_reset",
    "create_image_pillar_rewrite",
]
