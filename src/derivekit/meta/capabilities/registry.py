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
Description: This module provides the capability registry. A capability is a named bundle of
            hooks that the composition engine applies to a derived class:
            - extend_instance_behavior(cls): installs instance methods.
            - extend_type_behavior(cls): installs class level methods.
            - on_instance_init(instance): runs on every construction of the derived class.
            All the hooks are optional. The registry is process wide and is expected to be
            filled at import time, before any composition.
🦙
"""

from __future__ import annotations

__author__ = "Sébastien Gachoud"
__license__ = "MIT"

import logging
from functools import lru_cache
from typing import Any, Callable, Self

from ...exceptions import CapabilityError, DuplicateCapabilityError

logger = logging.getLogger(__name__)

type ClassHook = Callable[[type], None]
type InstanceHook = Callable[[Any], None]


class Capability:
    """Base class of a capability. Sub-classes set `name` and define the hooks they need as
    static methods. A capability without hooks is legal but inert.

    Examples:
        >>> class Greet(Capability):
        ...     name = "Greet"
        ...
        ...     @staticmethod
        ...     def extend_instance_behavior(cls: type) -> None:
        ...         define_member(cls, "greet", lambda self: f"hello {self.name}")
    """

    name: str = ""
    registered: bool = False
    extend_instance_behavior: ClassHook | None = None
    extend_type_behavior: ClassHook | None = None
    on_instance_init: InstanceHook | None = None

    def __repr__(self) -> str:
        return f"<{type(self).__name__} '{self.name}'>"


class HousingCapability(Capability):
    """House capability hooks given as independent callables. The `set_*` setters are refused once
    the capability is registered."""

    def __init__(
        self,
        name: str,
        extend_instance_behavior: ClassHook | None = None,
        extend_type_behavior: ClassHook | None = None,
        on_instance_init: InstanceHook | None = None,
    ) -> None:
        self.name = name
        self.extend_instance_behavior = extend_instance_behavior or self.extend_instance_behavior
        self.extend_type_behavior = extend_type_behavior or self.extend_type_behavior
        self.on_instance_init = on_instance_init or self.on_instance_init

    def _check_unregistered(self, hook_name: str) -> None:
        if self.registered:
            raise CapabilityError(
                f"Cannot set '{hook_name}' of {self!r}, the capability is already registered."
            )

    def set_instance_extender(self, hook: ClassHook) -> ClassHook:
        """Set the instance behavior extender. Can be used as a decorator.

        Args:
            hook (ClassHook): The hook to set.

        Raises:
            CapabilityError: Raised when the capability is already registered.

        Returns:
            ClassHook: The hook, unchanged.
        """
        self._check_unregistered("extend_instance_behavior")
        self.extend_instance_behavior = hook
        return hook

    def set_type_extender(self, hook: ClassHook) -> ClassHook:
        """Set the type behavior extender. Can be used as a decorator.

        Args:
            hook (ClassHook): The hook to set.

        Raises:
            CapabilityError: Raised when the capability is already registered.

        Returns:
            ClassHook: The hook, unchanged.
        """
        self._check_unregistered("extend_type_behavior")
        self.extend_type_behavior = hook
        return hook

    def set_instance_initializer(self, hook: InstanceHook) -> InstanceHook:
        """Set the instance initializer. Can be used as a decorator.

        Args:
            hook (InstanceHook): The hook to set.

        Raises:
            CapabilityError: Raised when the capability is already registered.

        Returns:
            InstanceHook: The hook, unchanged.
        """
        self._check_unregistered("on_instance_init")
        self.on_instance_init = hook
        return hook

    @classmethod
    def from_capability(cls, capability: Capability) -> Self:
        """Create a HousingCapability holding the hooks of another capability."""
        return cls(
            capability.name,
            extend_instance_behavior=capability.extend_instance_behavior,
            extend_type_behavior=capability.extend_type_behavior,
            on_instance_init=capability.on_instance_init,
        )


class CapabilityRegistry:
    """
    A class to hold all the capabilities, by name.

    Attributes:
        strict (bool): Default composition policy for unknown feature names. When False, an
            unknown name is logged and skipped. When True, it raises UnknownCapabilityError.
    """

    __capabilities: dict[str, Capability]

    def __init__(self, strict: bool = False) -> None:
        self.__capabilities = {}
        self.strict = strict

    def register(self, capability: Capability, *, replace: bool = False) -> Capability:
        """Register a capability under its name.

        Args:
            capability (Capability): The capability to register.
            replace (bool): If True, a capability already registered under the same name is
                replaced. Otherwise a duplicate name raises.

        Raises:
            DuplicateCapabilityError: Raised when the name is already registered and replace is
                False.

        Returns:
            Capability: The registered capability, so the method can decorate a class
                instance expression.
        """
        name = capability.name
        if name in self.__capabilities and not replace:
            raise DuplicateCapabilityError(
                f"A capability named '{name}' is already registered"
                f" ({self.__capabilities[name]!r}). Use replace=True to override it."
            )
        self.__capabilities[name] = capability
        capability.registered = True
        logger.debug("Registered capability %r.", capability)
        return capability

    def lookup(self, name: str) -> Capability | None:
        """Get the capability registered under a name.

        Args:
            name (str): The name of the capability.

        Returns:
            Capability | None: The capability or None if no capability is registered.
        """
        return self.__capabilities.get(name)

    def has_capability(self, name: str) -> bool:
        """Check if a capability is registered under a name."""
        return name in self.__capabilities

    def list_registered_capabilities(self) -> list[str]:
        """Get all registered names for debugging/introspection."""
        return list(self.__capabilities)

    def __contains__(self, name: str) -> bool:
        return self.has_capability(name)

    def __len__(self) -> int:
        return len(self.__capabilities)


@lru_cache(1)
def capability_registry() -> CapabilityRegistry:
    """Default capability registry. Built-in capabilities register into it at import time.

    Returns:
        CapabilityRegistry: the registry instance.
    """
    return CapabilityRegistry()


def register_capability(capability: Capability, *, replace: bool = False) -> Capability:
    """This function is a shortcut to `capability_registry().register()`."""
    return capability_registry().register(capability, replace=replace)


def lookup_capability(name: str) -> Capability | None:
    """This function is a shortcut to `capability_registry().lookup()`."""
    return capability_registry().lookup(name)
