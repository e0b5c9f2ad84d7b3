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
Description: Built-in capabilities besides serialization. This module registers:
            - Debug: `debug()` JSON rendering and a field listing `__repr__`.
            - Default: `Class.default()` zero-argument construction with field defaults.
🦙
"""

__author__ = "Sébastien Gachoud"
__license__ = "MIT"

import json
from typing import Any, Final

from ..classes.derive import blank_instance, define_member
from .registry import Capability, register_capability
from .serde import apply_defaults, public_fields

Debug: Final = "Debug"
Default: Final = "Default"


# Debug
def debug(instance: Any) -> str:
    """Render the public fields of an instance as indented JSON. Values JSON cannot encode are
    rendered with repr.

    Examples:
        >>> print(debug(User("1", "John")))
        {
          "id": "1",
          "name": "John"
        }
    """
    return json.dumps(public_fields(instance), indent=2, default=repr)


def _debug_method(self: Any) -> str:
    """Render the public fields as indented JSON. See derivekit.debug."""
    return debug(self)


def _repr_method(self: Any) -> str:
    fields = ", ".join(f"{k}={v!r}" for k, v in public_fields(self).items())
    return f"{type(self).__name__}({fields})"


class DebugCapability(Capability):
    """Installs `instance.debug()` and `repr(instance)`."""

    name = Debug

    @staticmethod
    def extend_instance_behavior(cls: type) -> None:
        define_member(cls, "debug", _debug_method)
        define_member(cls, "__repr__", _repr_method)


register_capability(DebugCapability())


# Default
def _default_method(cls: type) -> Any:
    """Build an instance without arguments, field defaults applied."""
    instance = blank_instance(cls)
    apply_defaults(instance)
    return instance


class DefaultCapability(Capability):
    """Installs `Class.default()`."""

    name = Default

    @staticmethod
    def extend_type_behavior(cls: type) -> None:
        define_member(cls, "default", classmethod(_default_method))


register_capability(DefaultCapability())
