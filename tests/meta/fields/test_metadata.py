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
Description: Tests for the field metadata store.
🦙
"""

__author__ = "Sébastien Gachoud"
__license__ = "MIT"

import logging
from typing import Annotated, ClassVar

import pytest

from derivekit.fields import FieldOptions, MISSING, annotate, field_options, read_field_options, serde
from derivekit.meta.fields.metadata import (
    collect_field_options,
    declared_fields,
    field_types,
    strip_annotated,
)


# =============================================================================
# FieldOptions
# =============================================================================


class TestFieldOptions:
    """Test the FieldOptions record."""

    def test_empty_options(self):
        """Test options with nothing set."""
        options = FieldOptions()

        assert options.rename is None
        assert options.default is MISSING
        assert options.transform is None
        assert not options.has_default

    def test_immutable(self):
        """Test that options cannot be modified."""
        options = serde(rename="bal")

        with pytest.raises(AttributeError):
            options.rename = "balance"  # type: ignore

    def test_plain_default(self):
        """Test a plain default value."""
        options = serde(default="X")

        assert options.has_default
        assert options.produce_default() == "X"

    def test_falsy_default_is_a_default(self):
        """Test that falsy values are valid defaults."""
        assert serde(default=0).has_default
        assert serde(default=None).produce_default() is None

    def test_callable_default_is_invoked(self):
        """Test that a callable default is a zero-argument producer."""
        options = serde(default=list)

        first, second = options.produce_default(), options.produce_default()
        assert first == []
        assert first is not second

    def test_default_factory_wins(self):
        """Test that default_factory takes precedence and can produce a callable."""
        options = serde(default="X", default_factory=lambda: len)

        assert options.produce_default() is len

    def test_equality_and_repr(self):
        """Test value equality and repr."""
        assert serde(rename="a") == serde(rename="a")
        assert serde(rename="a") != serde(rename="b")
        assert repr(serde(rename="a")) == "FieldOptions(rename='a')"


# =============================================================================
# annotate / read_field_options
# =============================================================================


class TestAnnotate:
    """Test annotate and read_field_options."""

    def test_read_without_annotation(self):
        """Test that a class without annotation has an empty table."""

        class Plain:
            """Test"""

        assert read_field_options(Plain) == {}
        assert read_field_options(Plain()) == {}
        assert field_options(Plain, "missing") == FieldOptions()

    def test_annotate_class(self):
        """Test annotating a class and reading it from an instance."""

        class Account:
            """Test"""

        annotate(Account, "balance", serde(rename="bal"))

        assert read_field_options(Account()) == {"balance": serde(rename="bal")}

    def test_annotate_through_instance(self):
        """Test that annotating an instance annotates its class."""

        class Account:
            """Test"""

        annotate(Account(), "balance", serde(rename="bal"))

        assert field_options(Account, "balance").rename == "bal"

    def test_last_write_wins(self):
        """Test that a second annotation replaces the first."""

        class Account:
            """Test"""

        annotate(Account, "balance", serde(rename="bal"))
        annotate(Account, "balance", serde(default=0))

        options = field_options(Account, "balance")
        assert options.rename is None
        assert options.default == 0

    def test_inherited_options(self):
        """Test that tables merge over the hierarchy, the most derived class winning."""

        class Base:
            """Test"""

        class Child(Base):
            """Test"""

        annotate(Base, "a", serde(rename="A"))
        annotate(Base, "b", serde(rename="B"))
        annotate(Child, "b", serde(rename="BB"))

        assert read_field_options(Child) == {"a": serde(rename="A"), "b": serde(rename="BB")}
        assert read_field_options(Base)["b"].rename == "B"

    def test_table_is_not_shared_with_base(self):
        """Test that annotating a subclass leaves its base untouched."""

        class Base:
            """Test"""

        class Child(Base):
            """Test"""

        annotate(Base, "a", serde(rename="A"))
        annotate(Child, "c", serde(rename="C"))

        assert "c" not in read_field_options(Base)


# =============================================================================
# Annotated declarations
# =============================================================================


class TestAnnotated:
    """Test harvesting options declared with Annotated."""

    def test_collect(self):
        """Test that FieldOptions found in Annotated metadata are annotated."""

        class Account:
            """Test"""

            id: str
            balance: Annotated[int, serde(rename="bal"), "unrelated"]

        collected = collect_field_options(Account)

        assert collected == {"balance": serde(rename="bal")}
        assert read_field_options(Account) == {"balance": serde(rename="bal")}

    def test_explicit_annotation_is_kept(self):
        """Test that explicit annotations win over Annotated declarations."""

        class Account:
            """Test"""

            balance: Annotated[int, serde(rename="bal")]

        annotate(Account, "balance", serde(rename="explicit"))
        collect_field_options(Account)

        assert field_options(Account, "balance").rename == "explicit"

    def test_declared_fields(self):
        """Test the declared instance fields of a class."""

        class Account:
            """Test"""

            registry: ClassVar[dict] = {}
            id: str
            balance: Annotated[int, serde(rename="bal")]

        annotate(Account, "extra", serde(default=1))

        assert declared_fields(Account) == ("id", "balance", "extra")

    def test_strip_annotated(self):
        """Test removing Annotated layers."""
        assert strip_annotated(Annotated[int, "meta"]) is int
        assert strip_annotated(int) is int

    def test_unresolvable_annotations_are_reported(self, caplog):
        """Test the fallback to raw annotations when a forward reference cannot be resolved."""

        class Node:
            """Test"""

            value: int
            parent: "UndefinedNode"

        with caplog.at_level(logging.WARNING, logger="derivekit.meta.fields.metadata"):
            hints = field_types(Node)

        assert hints == {"value": int, "parent": "UndefinedNode"}
        assert "Node" in caplog.text
        assert "raw annotations" in caplog.text
        assert declared_fields(Node) == ("value", "parent")
