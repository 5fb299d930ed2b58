"""
Table override layer.

Augments introspected table metadata with hand-authored corrections:
- Primary-key sequence names introspection cannot determine
- Virtual or pinned identity keys for cross-instance row matching
- Columns that must not leave the source instance
- Foreign keys retargeted away from non-portable tables
- Row transformers applied just before export

Usage:
    from overrides import apply_overrides

    table = apply_overrides(introspected_table)
"""

from .apply import apply_overrides, apply_overrides_to_all
from .registry import DEFAULT_REGISTRY, OverrideRegistry
from .rules import ReferenceRewrite, TableOverride
from .validation import ensure_valid_override, validate_override

__version__ = "1.0.0"
__all__ = [
    "apply_overrides",
    "apply_overrides_to_all",
    "OverrideRegistry",
    "DEFAULT_REGISTRY",
    "TableOverride",
    "ReferenceRewrite",
    "validate_override",
    "ensure_valid_override",
]
