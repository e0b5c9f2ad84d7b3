"""
Re-export fields module for cleaner imports.

This allows: from derivekit.fields import serde
Instead of: from derivekit.meta.fields.metadata import serde
"""

from .meta.fields.metadata import (
    MISSING,
    FieldOptions,
    serde,
    annotate,
    read_field_options,
    field_options,
    declared_fields,
)

__all__ = [
    "MISSING",
    "FieldOptions",
    "serde",
    "annotate",
    "read_field_options",
    "field_options",
    "declared_fields",
]
