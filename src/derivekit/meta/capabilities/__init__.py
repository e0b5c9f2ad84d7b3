"""Capability registry and built-in capabilities."""

from .registry import (
    Capability,
    HousingCapability,
    CapabilityRegistry,
    capability_registry,
    register_capability,
    lookup_capability,
)

# Import the built-in capabilities to register them
from .serde import (
    Serialize,
    Deserialize,
    SerializeCapability,
    DeserializeCapability,
    serialize,
    deserialize,
    from_object,
    apply_defaults,
    public_fields,
)
from .known_capabilities import (
    Debug,
    Default,
    DebugCapability,
    DefaultCapability,
    debug,
)

__all__ = [
    # Registry
    "Capability",
    "HousingCapability",
    "CapabilityRegistry",
    "capability_registry",
    "register_capability",
    "lookup_capability",
    # Feature names
    "Serialize",
    "Deserialize",
    "Debug",
    "Default",
    # Built-in capabilities
    "SerializeCapability",
    "DeserializeCapability",
    "DebugCapability",
    "DefaultCapability",
    # Free functions
    "serialize",
    "deserialize",
    "from_object",
    "apply_defaults",
    "public_fields",
    "debug",
]
