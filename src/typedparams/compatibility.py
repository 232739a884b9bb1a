"""
Structural compatibility between descriptors.

Two descriptors are compatible when they have the same kind and identical
variant constraints. This is exact equivalence, not assignability: an
``intp()`` is compatible with ``intp(minimum=1)`` because numeric kinds
only compare their kind, while two strings with different patterns are not.
"""

from typing import Any, Callable, Dict

from .descriptors import Parameter
from .errors import IncompatibleError
from .kinds import Kind
from .parameters import Parameters


def assert_compatible(a: Any, b: Any) -> None:
    """
    Assert that two descriptors (or two collections) are compatible.

    Raises:
        IncompatibleError: Naming the mismatched aspect (kind, regex,
            class, keys) with the nested key path where relevant
        TypeError: If either side is neither a descriptor nor a collection
    """
    if isinstance(a, Parameters) or isinstance(b, Parameters):
        _assert_parameters(a, b)
        return
    for side in (a, b):
        if not isinstance(side, Parameter):
            raise TypeError(f"Expected a descriptor or Parameters, got {type(side).__name__}")
    if a.kind != b.kind:
        raise IncompatibleError(
            f"Expected kind `{a.kind.value}`, provided `{b.kind.value}`",
            expected=a.kind.value,
            constraint="kind",
        )
    _COMPATIBILITY[a.kind](a, b)


def _assert_parameters(a: Any, b: Any) -> None:
    if not (isinstance(a, Parameters) and isinstance(b, Parameters)):
        raise IncompatibleError(
            "Cannot compare a parameter collection with a single parameter",
            constraint="kind",
        )
    missing = [name for name in a if name not in b]
    extra = [name for name in b if name not in a]
    if missing or extra:
        raise IncompatibleError(
            f"Parameter keys differ: missing {missing}, extra {extra}",
            constraint="keys",
        )
    for name in a:
        try:
            assert_compatible(a[name], b[name])
        except IncompatibleError as e:
            raise e.at(name) from None


def _always(a: Any, b: Any) -> None:
    return None


def _assert_string(a: Any, b: Any) -> None:
    if a.regex != b.regex:
        raise IncompatibleError(
            f"Expected regex `{a.regex}`, provided `{b.regex}`",
            expected=a.regex.pattern,
            constraint="regex",
        )


def _assert_object(a: Any, b: Any) -> None:
    if a.class_name is not b.class_name:
        raise IncompatibleError(
            f"Expected class `{a.class_name.__qualname__}`, provided `{b.class_name.__qualname__}`",
            expected=a.class_name.__qualname__,
            constraint="class",
        )


def _assert_array(a: Any, b: Any) -> None:
    _assert_parameters(a.parameters, b.parameters)


def _assert_iterable(a: Any, b: Any) -> None:
    for name in ("key", "value"):
        try:
            assert_compatible(getattr(a, name), getattr(b, name))
        except IncompatibleError as e:
            raise e.at(name) from None


_COMPATIBILITY: Dict[Kind, Callable[[Any, Any], None]] = {
    Kind.NULL: _always,
    Kind.BOOL: _always,
    Kind.INT: _always,
    Kind.FLOAT: _always,
    Kind.STRING: _assert_string,
    Kind.ARRAY: _assert_array,
    Kind.ITERABLE: _assert_iterable,
    Kind.OBJECT: _assert_object,
}

if set(_COMPATIBILITY) != set(Kind):
    raise RuntimeError(f"Missing compatibility checks for: {set(Kind) - set(_COMPATIBILITY)}")
