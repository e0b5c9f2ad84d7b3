"""Field metadata store."""

from .metadata import (
    MISSING,
    EMPTY_OPTIONS,
    FieldOptions,
    serde,
    annotate,
    read_field_options,
    field_options,
    field_types,
    declared_fields,
    collect_field_options,
    strip_annotated,
)

__all__ = [
    "MISSING",
    "EMPTY_OPTIONS",
    "FieldOptions",
    "serde",
    "annotate",
    "read_field_options",
    "field_options",
    "field_types",
    "declared_fields",
    "collect_field_options",
    "strip_annotated",
]
