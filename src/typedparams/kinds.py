"""
Kind tags and runtime type tags.

Descriptors form a closed set of variants, each identified by a ``Kind``.
Runtime values are classified by ``type_tag_of`` into one of the canonical
type tags (null, bool, int, float, string, array, object).
"""

from collections.abc import Mapping
from enum import Enum
from typing import Any, Dict


class Kind(str, Enum):
    """Descriptor variant tag."""

    NULL = "null"
    BOOL = "bool"
    INT = "int"
    FLOAT = "float"
    STRING = "string"
    ARRAY = "array"
    ITERABLE = "iterable"
    OBJECT = "object"


# Runtime type tags
TYPE_NULL = "null"
TYPE_BOOL = "bool"
TYPE_INT = "int"
TYPE_FLOAT = "float"
TYPE_STRING = "string"
TYPE_ARRAY = "array"
TYPE_OBJECT = "object"

# Runtime type tag accepted by each descriptor kind
KIND_TYPE_TAGS: Dict[Kind, str] = {
    Kind.NULL: TYPE_NULL,
    Kind.BOOL: TYPE_BOOL,
    Kind.INT: TYPE_INT,
    Kind.FLOAT: TYPE_FLOAT,
    Kind.STRING: TYPE_STRING,
    Kind.ARRAY: TYPE_ARRAY,
    Kind.ITERABLE: TYPE_ARRAY,
    Kind.OBJECT: TYPE_OBJECT,
}


class _Missing:
    """Marker for an absent default value."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"

    def __reduce__(self):
        return (_Missing, ())


MISSING: Any = _Missing()


def type_tag_of(value: Any) -> str:
    """
    Return the canonical type tag of a runtime value.

    ``bool`` is checked before ``int`` since ``True`` is an ``int`` in Python.
    Mappings, lists and tuples are all ``array``; anything else is ``object``.

    Example:
        >>> type_tag_of(10.10)
        'float'
        >>> type_tag_of({})
        'array'
    """
    if value is None:
        return TYPE_NULL
    if isinstance(value, bool):
        return TYPE_BOOL
    if isinstance(value, int):
        return TYPE_INT
    if isinstance(value, float):
        return TYPE_FLOAT
    if isinstance(value, str):
        return TYPE_STRING
    if isinstance(value, (Mapping, list, tuple)):
        return TYPE_ARRAY
    return TYPE_OBJECT
