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
Description: Serialize and Deserialize capabilities. They convert between an instance and a
            plain record, using the field options of the class:
            - rename: key of the field in the record.
            - default: value of the field when construction leaves it unset.
            - transform: applied to the value on serialization only.
            The record format is permissive. Unknown keys are ignored and missing keys leave
            the fields at their constructor or default value.
🦙
"""

__author__ = "Sébastien Gachoud"
__license__ = "MIT"

import inspect
import logging
from collections.abc import Mapping
from types import MemberDescriptorType
from typing import Any, Final, get_origin

from ...types import Option, is_option_like
from ..classes.derive import blank_instance, define_member, origin_class
from ..fields.metadata import (
    EMPTY_OPTIONS,
    MISSING,
    Annotation,
    declared_fields,
    field_types,
    read_field_options,
    strip_annotated,
)
from .registry import Capability, register_capability

logger = logging.getLogger(__name__)

Serialize: Final = "Serialize"
Deserialize: Final = "Deserialize"


def _slot_names(cls: type) -> list[str]:
    names: list[str] = []
    for klass in cls.__mro__:
        slots = klass.__dict__.get("__slots__", ())
        names.extend([slots] if isinstance(slots, str) else slots)
    return names


def public_fields(source: Any) -> dict[str, Any]:
    """The public fields of a mapping or of an object, in their natural order. Names starting
    with an underscore are private and left out.

    Args:
        source (Any): A mapping, or an object with instance fields (`__dict__` and/or slots).

    Returns:
        dict[str, Any]: Field name to value.
    """
    if isinstance(source, Mapping):
        items = dict(source)
    else:
        items = {}
        for name in _slot_names(type(source)):
            value = getattr(source, name, MISSING)
            if value is not MISSING:
                items[name] = value
        items.update(getattr(source, "__dict__", {}))
    return {k: v for k, v in items.items() if isinstance(k, str) and not k.startswith("_")}


def has_field_value(instance: Any, name: str) -> bool:
    """Check if a field holds a value on the instance itself. Class level values do not count."""
    value = getattr(instance, "__dict__", {}).get(name, MISSING)
    if value is MISSING and isinstance(
        inspect.getattr_static(type(instance), name, None), MemberDescriptorType
    ):
        value = getattr(instance, name, MISSING)
    return value is not MISSING


def is_option_field(annotation: Annotation) -> bool:
    """Check if an annotation declares an Option. Ex.: Option[int], Annotated[Option[int], ...]"""
    annotation = strip_annotated(annotation)
    origin = get_origin(annotation) or annotation
    return isinstance(origin, type) and issubclass(origin, Option)


def _incoming(types: dict[str, Annotation], name: str, value: Any) -> Any:
    if value is not None and not is_option_like(value) and is_option_field(types.get(name)):
        return Option.some(value)
    return value


def serialize(instance: Any) -> dict[str, Any]:
    """Convert an instance to a record.

    Each public field is written under its `rename` or its own name. Option-like values are
    unwrapped to their content, or None when empty, before `transform` is applied.

    Args:
        instance (Any): The instance to serialize.

    Returns:
        dict[str, Any]: A new record. The instance is left untouched.
    """
    options = read_field_options(instance)
    record: dict[str, Any] = {}
    for name, value in public_fields(instance).items():
        field = options.get(name, EMPTY_OPTIONS)
        if is_option_like(value):
            value = value.unwrap_or(None)
        record[field.rename or name] = (
            field.transform(value) if field.transform is not None else value
        )
    return record


def constructor_fields(cls: type) -> tuple[str, ...]:
    """Public parameter names of the original constructor of a class. Ex.: (id, balance)"""
    try:
        parameters = inspect.signature(origin_class(cls)).parameters.values()
    except (TypeError, ValueError):
        return ()
    return tuple(
        p.name
        for p in parameters
        if p.kind in (p.POSITIONAL_OR_KEYWORD, p.KEYWORD_ONLY) and not p.name.startswith("_")
    )


def known_fields(cls: type, instance: Any) -> set[str]:
    """Field names an instance of `cls` can receive: declared fields and fields already set.
    A class declaring nothing falls back to its constructor parameters.

    Args:
        cls (type): The class.
        instance (Any): A fresh instance of the class.

    Returns:
        set[str]: The field names.
    """
    known = set(declared_fields(cls))
    if not known:
        known.update(constructor_fields(cls))
    known.update(public_fields(instance))
    return known


def deserialize[T](cls: type[T], data: Mapping[str, Any]) -> T:
    """Build an instance of `cls` from a record.

    A renamed field is read from its external key, or from its own name when the record lacks
    the external key. Other fields are read from their own name. Keys matching no field are
    ignored. `transform` is never inverted.

    Args:
        cls (type[T]): The class to instantiate. It is constructed without arguments.
        data (Mapping[str, Any]): The record.

    Returns:
        T: The new instance.
    """
    instance = blank_instance(cls)
    options = read_field_options(cls)
    types = field_types(cls)
    renamed = {field.rename: name for name, field in options.items() if field.rename}
    known = known_fields(cls, instance)
    for key, value in data.items():
        if key in renamed:
            name = renamed[key]
        elif key in known and options.get(key, EMPTY_OPTIONS).rename not in data:
            name = key
        else:
            logger.debug("Ignoring key '%s' while deserializing '%s'.", key, cls.__qualname__)
            continue
        setattr(instance, name, _incoming(types, name, value))
    return instance


def from_object[T](cls: type[T], source: Any) -> T:
    """Build an instance of `cls` from the fields of another object.

    Every public field of `source` that `cls` also has is copied by identical name. Renames are
    not consulted.

    Args:
        cls (type[T]): The class to instantiate. It is constructed without arguments.
        source (Any): An object or a mapping.

    Returns:
        T: The new instance.
    """
    instance = blank_instance(cls)
    types = field_types(cls)
    known = known_fields(cls, instance)
    for name, value in public_fields(source).items():
        if name in known:
            setattr(instance, name, _incoming(types, name, value))
    return instance


def apply_defaults(instance: Any) -> None:
    """Give their default to the fields of the instance that hold no value yet.

    Args:
        instance (Any): The instance to complete.
    """
    for name, field in read_field_options(instance).items():
        if field.has_default and not has_field_value(instance, name):
            setattr(instance, name, field.produce_default())


def _serialize_method(self: Any) -> dict[str, Any]:
    """Convert the instance to a record. See derivekit.serialize."""
    return serialize(self)


def _deserialize_method(cls: type, data: Mapping[str, Any]) -> Any:
    """Build an instance from a record. See derivekit.deserialize."""
    return deserialize(cls, data)


def _from_object_method(cls: type, source: Any) -> Any:
    """Build an instance from the fields of another object. See derivekit.from_object."""
    return from_object(cls, source)


class SerializeCapability(Capability):
    """Installs `instance.serialize()`."""

    name = Serialize

    @staticmethod
    def extend_instance_behavior(cls: type) -> None:
        define_member(cls, "serialize", _serialize_method)


class DeserializeCapability(Capability):
    """Installs `Class.deserialize(data)`, `Class.from_object(source)` and the field defaults."""

    name = Deserialize

    @staticmethod
    def extend_type_behavior(cls: type) -> None:
        define_member(cls, "deserialize", classmethod(_deserialize_method))
        define_member(cls, "from_object", classmethod(_from_object_method))

    on_instance_init = staticmethod(apply_defaults)


register_capability(SerializeCapability())
register_capability(DeserializeCapability())
