"""
Tests for structural compatibility between descriptors and collections.
"""

import unittest
from decimal import Decimal
from fractions import Fraction

import pytest
from parameterized import parameterized

from typedparams import (
    IncompatibleError,
    arrayp,
    assert_compatible,
    boolp,
    floatp,
    intp,
    iterablep,
    nullp,
    objectp,
    parameters,
    stringp,
)

DESCRIPTORS = [
    ("null", nullp()),
    ("bool", boolp(default=True)),
    ("int", intp(minimum=0, maximum=9)),
    ("float", floatp(default=1.5)),
    ("string", stringp(regex=r"^[a-z]+$")),
    ("array", arrayp(a=intp(), b=arrayp(c=stringp()))),
    ("iterable", iterablep(stringp(), K=stringp())),
    ("object", objectp(Decimal)),
]


class TestReflexive(unittest.TestCase):
    @parameterized.expand(DESCRIPTORS)
    def test_compatible_with_itself(self, name, param):
        """Every descriptor is compatible with itself."""
        assert_compatible(param, param)
        param.assert_compatible(param)


class TestIncompatible:
    """Mismatches name the aspect that differs, in both directions."""

    def _assert_both_ways(self, a, b):
        with pytest.raises(IncompatibleError) as forward:
            assert_compatible(a, b)
        with pytest.raises(IncompatibleError) as backward:
            assert_compatible(b, a)
        assert forward.value.constraint == backward.value.constraint
        assert forward.value.path == backward.value.path
        return forward.value

    def test_kind(self):
        error = self._assert_both_ways(intp(), floatp())
        assert error.constraint == "kind"

    def test_regex(self):
        error = self._assert_both_ways(stringp("^a$"), stringp("^b$"))
        assert error.constraint == "regex"

    def test_class(self):
        error = self._assert_both_ways(objectp(Decimal), objectp(Fraction))
        assert error.constraint == "class"

    def test_array_keys(self):
        error = self._assert_both_ways(arrayp(a=intp()), arrayp(a=intp(), b=intp()))
        assert error.constraint == "keys"

    def test_nested_key_path(self):
        error = self._assert_both_ways(
            arrayp(outer=arrayp(a=stringp("^a$"))),
            arrayp(outer=arrayp(a=stringp())),
        )
        assert error.field == "outer.a"
        assert error.constraint == "regex"

    def test_iterable_key(self):
        error = self._assert_both_ways(iterablep(intp()), iterablep(intp(), K=stringp()))
        assert error.field == "key"

    def test_iterable_value(self):
        error = self._assert_both_ways(iterablep(intp()), iterablep(floatp()))
        assert error.field == "value"

    def test_collection_against_descriptor(self):
        self._assert_both_ways(parameters(a=intp()), intp())

    def test_non_descriptor_rejected(self):
        with pytest.raises(TypeError, match="got str"):
            assert_compatible(intp(), "int")
        with pytest.raises(TypeError, match="got int"):
            assert_compatible(1, intp())


class TestCompatible:
    def test_scalar_bounds_ignored(self):
        assert_compatible(intp(), intp(minimum=1, default=3))
        assert_compatible(floatp(maximum=1.0), floatp())

    def test_description_ignored(self):
        assert_compatible(stringp(description="a"), stringp(description="b"))

    def test_collections(self):
        assert_compatible(
            parameters(a=intp(), b=stringp()),
            parameters(b=stringp(), a=intp(default=1)),
        )

    def test_subclass_is_not_same_class(self):
        class Money(Decimal):
            pass

        with pytest.raises(IncompatibleError):
            assert_compatible(objectp(Decimal), objectp(Money))
