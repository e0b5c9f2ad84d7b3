"""Composition engine."""

from .derive import (
    compose,
    derive,
    define_member,
    blank_instance,
    initialize_instance,
    origin_class,
)

__all__ = [
    "compose",
    "derive",
    "define_member",
    "blank_instance",
    "initialize_instance",
    "origin_class",
]
