"""
derivekit: Capability composition for Python classes.

This library provides:
- A field metadata store (rename, default, transform) declared with Annotated or annotate()
- A process wide capability registry
- compose/derive to build classes from a base class and an ordered list of capabilities
- Serialize, Deserialize, Debug and Default built-in capabilities
- Option and Result value types with a first-match-wins matcher
"""

import logging

from .exceptions import (
    TracedException,
    DeriveError,
    CapabilityError,
    UnknownCapabilityError,
    DuplicateCapabilityError,
    UnwrapError,
    NoMatchingPatternError,
)
from .types import Option, Result, OptionLike, ResultLike
from .meta.fields.metadata import FieldOptions, serde, annotate, read_field_options
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
    serialize,
    deserialize,
    from_object,
    debug,
)
from .meta.classes.derive import compose, derive, define_member, blank_instance
from .matching import Match, match

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"
__author__ = "Sébastien Gachoud"
__license__ = "MIT"

__all__ = [
    # Version info
    "__version__",
    "__author__",
    "__license__",
    # Errors
    "TracedException",
    "DeriveError",
    "CapabilityError",
    "UnknownCapabilityError",
    "DuplicateCapabilityError",
    "UnwrapError",
    "NoMatchingPatternError",
    # Value types
    "Option",
    "Result",
    "OptionLike",
    "ResultLike",
    # Field metadata
    "FieldOptions",
    "serde",
    "annotate",
    "read_field_options",
    # Capabilities
    "Capability",
    "HousingCapability",
    "CapabilityRegistry",
    "capability_registry",
    "register_capability",
    "lookup_capability",
    "Serialize",
    "Deserialize",
    "Debug",
    "Default",
    # Composition
    "compose",
    "derive",
    "define_member",
    "blank_instance",
    # Serialization
    "serialize",
    "deserialize",
    "from_object",
    "debug",
    # Matching
    "Match",
    "match",
]
