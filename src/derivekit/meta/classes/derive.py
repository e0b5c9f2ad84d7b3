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
Description: This module provides the composition engine. `compose` builds a new class from a
            base class and an ordered list of feature names, layering the hooks of each
            registered capability onto it. `derive` is the class decorator form.
🦙
"""

__author__ = "Sébastien Gachoud"
__license__ = "MIT"

import inspect
import logging
from collections.abc import Iterable
from typing import Any, Callable

from ...exceptions import UnknownCapabilityError
from ..capabilities.registry import Capability, CapabilityRegistry, capability_registry
from ..fields.metadata import collect_field_options

logger = logging.getLogger(__name__)


def define_member(cls: type, name: str, member: Any) -> None:
    """Install a member on a class. Defines it if absent, overwrites it if present.

    Args:
        cls (type): The class to extend.
        name (str): The name of the member.
        member (Any): A function, classmethod, staticmethod, property or plain value.
    """
    if name in cls.__dict__:
        logger.debug("Overwriting member '%s' of '%s'.", name, cls.__qualname__)
    type.__setattr__(cls, name, member)


def _run_hooks(instance: Any, capabilities: tuple[Capability, ...]) -> None:
    for capability in capabilities:
        if capability.on_instance_init is not None:
            capability.on_instance_init(instance)


def initialize_instance(instance: Any) -> None:
    """Run the init hooks of every derived layer of the instance class, base-most first.

    Args:
        instance (Any): The instance to initialize.
    """
    for klass in reversed(type(instance).__mro__):
        _run_hooks(instance, klass.__dict__.get("__capabilities__", ()))


def origin_class(cls: type) -> type:
    """The user class a derived class was built from, through any number of compositions."""
    while "__derive_base__" in cls.__dict__:
        cls = cls.__dict__["__derive_base__"]
    return cls


def blank_instance[T](cls: type[T]) -> T:
    """Construct an instance without arguments.

    The class is called normally when its original constructor accepts no arguments. Otherwise
    the instance is allocated without running the original constructor, and only the init hooks
    of the capabilities run. Fields the constructor would have set are then absent.

    Args:
        cls (type[T]): The class to instantiate.

    Returns:
        T: The new instance.
    """
    try:
        inspect.signature(origin_class(cls)).bind()
    except TypeError:
        instance = cls.__new__(cls)
        initialize_instance(instance)
        return instance
    except ValueError:
        # No signature available (builtins). Let the call decide.
        pass
    return cls()


def _resolve(
    features: tuple[str, ...], strict: bool, registry: CapabilityRegistry, owner: str
) -> tuple[Capability, ...]:
    capabilities = []
    for name in features:
        capability = registry.lookup(name)
        if capability is None:
            if strict:
                raise UnknownCapabilityError(
                    f"Cannot derive '{name}' for class '{owner}'. No capability is registered"
                    f" under that name. Known capabilities: "
                    f"{registry.list_registered_capabilities()}."
                )
            logger.warning(
                "Unknown capability '%s' requested for class '%s'. The feature is skipped.",
                name,
                owner,
            )
            continue
        capabilities.append(capability)
    return tuple(capabilities)


def compose[T](
    base: type[T],
    features: Iterable[str],
    *,
    strict: bool | None = None,
    registry: CapabilityRegistry | None = None,
) -> type[T]:
    """Build a new class from `base` with the capabilities named in `features`.

    The new class subclasses `base` and keeps its name, qualified name, module and docstring. Its
    constructor forwards every argument to `base`, then runs the `on_instance_init` hook of each
    capability in order. After creation, each capability extends the class in order, through
    `extend_instance_behavior` then `extend_type_behavior`. A later capability may overwrite a
    member installed by an earlier one. Every call builds a new, independent class.

    Examples:
        >>> class User:
        ...     def __init__(self, id: str, balance: int):
        ...         self.id = id
        ...         self.balance = balance
        >>> User = compose(User, ["Serialize", "Deserialize"])
        >>> User("1", 100).serialize()
        {'id': '1', 'balance': 100}

    Args:
        base (type[T]): The class to extend.
        features (Iterable[str]): The capability names, in application order.
        strict (bool | None): Raise on unknown names instead of logging and skipping them. None
            defers to the registry policy.
        registry (CapabilityRegistry | None): Where to look capabilities up. Defaults to the
            process wide registry.

    Raises:
        UnknownCapabilityError: Raised in strict mode when a name is not registered.

    Returns:
        type[T]: The derived class.
    """
    registry = registry if registry is not None else capability_registry()
    strict = registry.strict if strict is None else strict
    features = tuple(features)
    capabilities = _resolve(features, strict, registry, base.__qualname__)

    def __init__(self: Any, *args: Any, **kwargs: Any) -> None:
        super(derived, self).__init__(*args, **kwargs)
        _run_hooks(self, capabilities)

    __init__.__qualname__ = f"{base.__qualname__}.__init__"
    __init__.__doc__ = getattr(base.__init__, "__doc__", None)

    namespace: dict[str, Any] = {
        "__init__": __init__,
        "__module__": base.__module__,
        "__qualname__": base.__qualname__,
        "__doc__": base.__doc__,
        "__features__": features,
        "__capabilities__": capabilities,
        "__derive_base__": base,
    }
    derived = type(base)(base.__name__, (base,), namespace)

    collect_field_options(derived)
    for capability in capabilities:
        if capability.extend_instance_behavior is not None:
            capability.extend_instance_behavior(derived)
        if capability.extend_type_behavior is not None:
            capability.extend_type_behavior(derived)

    logger.debug(
        "Derived '%s' with %s (requested %s).",
        derived.__qualname__,
        [c.name for c in capabilities],
        list(features),
    )
    return derived


def derive(
    *features: str,
    strict: bool | None = None,
    registry: CapabilityRegistry | None = None,
) -> Callable[[type], type]:
    """Class decorator form of `compose`.

    Examples:
        >>> @derive(Serialize, Deserialize)
        ... class User:
        ...     id: str = ""

    Args:
        *features (str): The capability names, in application order.
        strict (bool | None): See `compose`.
        registry (CapabilityRegistry | None): See `compose`.

    Returns:
        Callable[[type], type]: The decorator.
    """

    def decorator(base: type) -> type:
        return compose(base, features, strict=strict, registry=registry)

    return decorator
