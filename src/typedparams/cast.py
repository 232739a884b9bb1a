"""
Typed cast wrapper.

``cast(value)`` computes the value's type tag once; each ``as_*`` accessor
returns the value only when the tag matches, giving call sites an explicit
alternative to implicit coercion.

Example:
    >>> cast("hello").as_string()
    'hello'
    >>> cast("hello").as_int()
    Traceback (most recent call last):
    ...
    typedparams.errors.TypeMismatchError: Cast requested `int`, value is `string`
"""

from dataclasses import dataclass, field
from typing import Any

from .errors import TypeMismatchError
from .kinds import (
    TYPE_ARRAY,
    TYPE_BOOL,
    TYPE_FLOAT,
    TYPE_INT,
    TYPE_NULL,
    TYPE_OBJECT,
    TYPE_STRING,
    type_tag_of,
)


@dataclass(frozen=True)
class CastValue:
    """
    Immutable holder of a value and its type tag.

    Attributes:
        value: The wrapped value
        type: Canonical type tag computed at construction
    """

    value: Any
    type: str = field(init=False)

    def __post_init__(self):
        object.__setattr__(self, "type", type_tag_of(self.value))

    def _as(self, tag: str) -> Any:
        if self.type != tag:
            raise TypeMismatchError(
                f"Cast requested `{tag}`, value is `{self.type}`",
                value=self.value,
                expected=tag,
            )
        return self.value

    def mixed(self) -> Any:
        return self.value

    def as_null(self) -> None:
        return self._as(TYPE_NULL)

    def as_bool(self) -> bool:
        return self._as(TYPE_BOOL)

    def as_int(self) -> int:
        return self._as(TYPE_INT)

    def as_float(self) -> float:
        return self._as(TYPE_FLOAT)

    def as_string(self) -> str:
        return self._as(TYPE_STRING)

    def as_array(self) -> Any:
        return self._as(TYPE_ARRAY)

    def as_object(self) -> Any:
        return self._as(TYPE_OBJECT)


def cast(value: Any) -> CastValue:
    return CastValue(value)
