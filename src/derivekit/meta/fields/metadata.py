"""
MIT License

Copyright (c) 2025 Sébastien Gachoud

Permission is hereby granted, free of charge, to any person obtaining a copy
of this software and associated documentation files (the "Software"), to deal
in the Software without restriction, including without limitation the rights
to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
copies of the Software, and to permit persons to whom the Software is
furnished to do so, subject to the following conditions:

The above copyright notice and this permission notice shall be included in all
copies or substantial portions of the Software.

THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
SOFTWARE.

-------------------------------------------------------------------------------

Author: Sébastien Gachoud
Created: 2026-10-18
Description: Per-field options attached to a class. Options are written with `annotate` or
            declared inline with `Annotated[..., serde(...)]`, and read back as a merged view
            over the class hierarchy. The table is schema: it is shared by all instances.
🦙
"""

from __future__ import annotations

__author__ = "Sébastien Gachoud"
__license__ = "MIT"

import inspect
import logging
from typing import Annotated, Any, Callable, ClassVar, get_args, get_origin, get_type_hints

logger = logging.getLogger(__name__)

type Annotation = Any
type Transform = Callable[[Any], Any]
type DefaultFactory = Callable[[], Any]

_TABLE_ATTRIBUTE = "__field_options__"


class _Missing:
    """Marker of an option left unset."""

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


class FieldOptions:
    """Options of a single field.

    Attributes:
        rename (str | None): Key used for the field in serialized records.
        default (Any): Value given to the field when construction leaves it unset. A callable
            is treated as a zero-argument producer and invoked.
        default_factory (DefaultFactory | None): Explicit producer, takes precedence over
            `default`. Use it to produce a callable value.
        transform (Transform | None): Applied to the value on serialization only.
    """

    __slots__ = ("rename", "default", "default_factory", "transform")

    def __init__(
        self,
        rename: str | None = None,
        default: Any = MISSING,
        default_factory: DefaultFactory | None = None,
        transform: Transform | None = None,
    ) -> None:
        object.__setattr__(self, "rename", rename)
        object.__setattr__(self, "default", default)
        object.__setattr__(self, "default_factory", default_factory)
        object.__setattr__(self, "transform", transform)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"FieldOptions are immutable, cannot set '{name}'.")

    @property
    def has_default(self) -> bool:
        """Whether the field declares a default value or a default factory."""
        return self.default_factory is not None or self.default is not MISSING

    def produce_default(self) -> Any:
        """Produce the default value of the field.

        Returns:
            Any: The result of the default factory, of the callable default, or the plain default.
        """
        if self.default_factory is not None:
            return self.default_factory()
        if callable(self.default):
            return self.default()
        return self.default

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FieldOptions):
            return NotImplemented
        return all(getattr(self, k) == getattr(other, k) for k in self.__slots__)

    def __hash__(self) -> int:
        return hash((self.rename, self.has_default))

    def __repr__(self) -> str:
        options = ", ".join(
            f"{k}={getattr(self, k)!r}"
            for k in self.__slots__
            if getattr(self, k) not in (None, MISSING)
        )
        return f"FieldOptions({options})"


EMPTY_OPTIONS = FieldOptions()


def serde(
    *,
    rename: str | None = None,
    default: Any = MISSING,
    default_factory: DefaultFactory | None = None,
    transform: Transform | None = None,
) -> FieldOptions:
    """Declare the options of a field. Meant to be used as `Annotated` metadata.

    Examples:
        >>> class Account:
        ...     balance: Annotated[int, serde(rename="bal", transform=lambda v: v / 100)]
        ...     created_at: Annotated[str, serde(default="today", rename="createdAt")]

    Returns:
        FieldOptions: The options.
    """
    return FieldOptions(
        rename=rename,
        default=default,
        default_factory=default_factory,
        transform=transform,
    )


def _owner(target: Any) -> type:
    return target if isinstance(target, type) else type(target)


def annotate(target: Any, field_name: str, options: FieldOptions) -> None:
    """Attach options to a field of a class. A second annotation of the same field replaces the
    first one.

    Args:
        target (Any): The class, or an instance of the class.
        field_name (str): The name of the field.
        options (FieldOptions): The options of the field.
    """
    cls = _owner(target)
    table = cls.__dict__.get(_TABLE_ATTRIBUTE)
    if table is None:
        table = {}
        # type.__setattr__ bypasses metaclasses forbidding class attribute assignment.
        type.__setattr__(cls, _TABLE_ATTRIBUTE, table)
    table[field_name] = options
    logger.debug("Annotated field '%s' of '%s' with %r.", field_name, cls.__qualname__, options)


def read_field_options(target: Any) -> dict[str, FieldOptions]:
    """Read the options of every annotated field of a class. Tables of base classes are merged,
    the most derived class winning for a given field.

    Args:
        target (Any): The class, or an instance of the class.

    Returns:
        dict[str, FieldOptions]: Field name to options. Empty if nothing was annotated.
    """
    merged: dict[str, FieldOptions] = {}
    for klass in reversed(_owner(target).__mro__):
        merged.update(klass.__dict__.get(_TABLE_ATTRIBUTE, {}))
    return merged


def field_options(target: Any, field_name: str) -> FieldOptions:
    """Options of a single field, empty options if the field was never annotated."""
    return read_field_options(target).get(field_name, EMPTY_OPTIONS)


def field_types(target: Any) -> dict[str, Annotation]:
    """Resolved type hints of a class, `Annotated` extras included. Unresolvable forward
    references fall back to the raw annotations.

    Args:
        target (Any): The class, or an instance of the class.

    Returns:
        dict[str, Annotation]: Field name to annotation.
    """
    cls = _owner(target)
    try:
        return get_type_hints(cls, include_extras=True)
    except (NameError, TypeError) as e:
        logger.warning(
            "Could not resolve the annotations of '%s' (%s). Falling back to raw annotations,"
            " Annotated field options and Option fields of the class are not detected.",
            cls.__qualname__,
            e,
        )
        hints: dict[str, Annotation] = {}
        for klass in reversed(cls.__mro__):
            hints.update(inspect.get_annotations(klass))
        return hints


def strip_annotated(annotation: Annotation) -> Annotation:
    """Remove `Annotated` layers from an annotation. Ex.: Annotated[int, ...] -> int"""
    while get_origin(annotation) is Annotated:
        annotation = get_args(annotation)[0]
    return annotation


def _is_class_var(annotation: Annotation) -> bool:
    annotation = strip_annotated(annotation)
    if isinstance(annotation, str):
        return annotation.startswith(("ClassVar", "typing.ClassVar"))
    return annotation is ClassVar or get_origin(annotation) is ClassVar


def declared_fields(target: Any) -> tuple[str, ...]:
    """Names of the instance fields a class declares, in declaration order: annotated names
    that are not ClassVar, then annotated metadata fields.

    Args:
        target (Any): The class, or an instance of the class.

    Returns:
        tuple[str, ...]: The field names.
    """
    names = [k for k, v in field_types(target).items() if not _is_class_var(v)]
    names.extend(k for k in read_field_options(target) if k not in names)
    return tuple(names)


def collect_field_options(target: Any) -> dict[str, FieldOptions]:
    """Harvest options declared with `Annotated[..., serde(...)]` and annotate the class with
    them. Fields already annotated explicitly keep their options. When several FieldOptions
    are given in the same Annotated, the last one wins.

    Args:
        target (Any): The class, or an instance of the class.

    Returns:
        dict[str, FieldOptions]: The options that were annotated.
    """
    cls = _owner(target)
    existing = read_field_options(cls)
    collected: dict[str, FieldOptions] = {}
    for name, annotation in field_types(cls).items():
        if name in existing or get_origin(annotation) is not Annotated:
            continue
        for extra in get_args(annotation)[1:]:
            if isinstance(extra, FieldOptions):
                collected[name] = extra
    for name, options in collected.items():
        annotate(cls, name, options)
    return collected
