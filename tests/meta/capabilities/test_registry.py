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
Description: Tests for the capability registry.
🦙
"""

__author__ = "Sébastien Gachoud"
__license__ = "MIT"

import pytest

from derivekit.capabilities import (
    Capability,
    CapabilityRegistry,
    HousingCapability,
    capability_registry,
    lookup_capability,
)
from derivekit.exceptions import CapabilityError, DuplicateCapabilityError


@pytest.fixture
def registry():
    """A registry isolated from the process wide one."""
    return CapabilityRegistry()


# =============================================================================
# Registration and lookup
# =============================================================================


class TestRegistration:
    """Test register and lookup."""

    def test_register_and_lookup(self, registry):
        """Test that a registered capability is found by name."""
        capability = HousingCapability("Inert")

        assert registry.register(capability) is capability
        assert registry.lookup("Inert") is capability
        assert registry.has_capability("Inert")
        assert "Inert" in registry
        assert len(registry) == 1

    def test_lookup_missing(self, registry):
        """Test that an unknown name yields no capability."""
        assert registry.lookup("Missing") is None
        assert not registry.has_capability("Missing")

    def test_duplicate_name_raises(self, registry):
        """Test that registering a name twice fails fast."""
        registry.register(HousingCapability("Twice"))

        with pytest.raises(DuplicateCapabilityError, match="Twice"):
            registry.register(HousingCapability("Twice"))

    def test_replace(self, registry):
        """Test that replace=True keeps the last registration."""
        first = registry.register(HousingCapability("Twice"))
        second = registry.register(HousingCapability("Twice"), replace=True)

        assert registry.lookup("Twice") is second
        assert registry.lookup("Twice") is not first

    def test_list_registered_capabilities(self, registry):
        """Test introspection of the registered names, in registration order."""
        registry.register(HousingCapability("B"))
        registry.register(HousingCapability("A"))

        assert registry.list_registered_capabilities() == ["B", "A"]

    def test_strict_policy_default(self):
        """Test the registry strictness attribute."""
        assert not CapabilityRegistry().strict
        assert CapabilityRegistry(strict=True).strict


# =============================================================================
# Capabilities
# =============================================================================


class TestCapabilities:
    """Test capability descriptors."""

    def test_inert_capability(self):
        """Test that a capability without hooks is legal."""
        capability = HousingCapability("Inert")

        assert capability.extend_instance_behavior is None
        assert capability.extend_type_behavior is None
        assert capability.on_instance_init is None
        assert repr(capability) == "<HousingCapability 'Inert'>"

    def test_housing_decorators(self):
        """Test setting hooks with the decorator setters."""
        capability = HousingCapability("Decorated")

        @capability.set_instance_extender
        def extend(cls):
            cls.extended = True

        @capability.set_type_extender
        def extend_type(cls):
            cls.typed = True

        @capability.set_instance_initializer
        def init(instance):
            instance.ready = True

        assert capability.extend_instance_behavior is extend
        assert capability.extend_type_behavior is extend_type
        assert capability.on_instance_init is init

    def test_setters_refused_once_registered(self, registry):
        """Test that the hooks of a registered capability cannot be replaced."""
        capability = HousingCapability("Sealed")
        assert not capability.registered

        registry.register(capability)
        assert capability.registered

        with pytest.raises(CapabilityError) as exc_info:
            capability.set_instance_extender(lambda cls: None)
        assert "Sealed" in str(exc_info.value)
        with pytest.raises(CapabilityError):
            capability.set_type_extender(lambda cls: None)
        with pytest.raises(CapabilityError):
            capability.set_instance_initializer(lambda instance: None)

        assert capability.extend_instance_behavior is None
        assert capability.extend_type_behavior is None
        assert capability.on_instance_init is None

    def test_subclass_hooks(self):
        """Test hooks declared as static methods of a Capability subclass."""

        class Flag(Capability):
            """Test"""

            name = "Flag"

            @staticmethod
            def on_instance_init(instance):
                instance.flag = True

        capability = Flag()

        class Target:
            """Test"""

        target = Target()
        capability.on_instance_init(target)
        assert target.flag
        assert capability.extend_instance_behavior is None

    def test_from_capability(self):
        """Test copying the hooks of a capability into a HousingCapability."""

        class Flag(Capability):
            """Test"""

            name = "Flag"

            @staticmethod
            def extend_type_behavior(cls):
                cls.flag = True

        housing = HousingCapability.from_capability(Flag())

        assert housing.name == "Flag"
        assert housing.extend_type_behavior is Flag.extend_type_behavior


# =============================================================================
# Process wide registry
# =============================================================================


class TestDefaultRegistry:
    """Test the process wide registry."""

    def test_singleton(self):
        """Test that the default registry is a single instance."""
        assert capability_registry() is capability_registry()

    @pytest.mark.parametrize("name", ["Serialize", "Deserialize", "Debug", "Default"])
    def test_builtin_capabilities_registered(self, name):
        """Test that built-in capabilities register themselves at import."""
        capability = lookup_capability(name)

        assert capability is not None
        assert capability.name == name
