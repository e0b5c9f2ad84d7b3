"""
Re-export capabilities module for cleaner imports.

This allows: from derivekit.capabilities import Capability, register_capability
Instead of: from derivekit.meta.capabilities.registry import Capability, register_capability
"""

from .meta.capabilities import (
    Capability,
    HousingCapability,
    CapabilityRegistry,
    capability_registry,
    register_capability,
    lookup_capability,
    Serialize,
    Deserialize,
    Debug,
    Default,
)
from .meta.classes.derive import define_member

__all__ = [
    "Capability",
    "HousingCapability",
    "CapabilityRegistry",
    "capability_registry",
    "register_capability",
    "lookup_capability",
    "define_member",
    "Serialize",
    "Deserialize",
    "Debug",
    "Default",
]
