"""
Bound arguments.

``Arguments`` is the immutable result of binding a ``Parameters``
collection against a concrete mapping. It only holds names declared by the
collection.
"""

from collections.abc import Mapping
from typing import Any, Dict, Iterator

from .cast import CastValue
from .errors import KeyNotFoundError


class Arguments(Mapping):
    """
    Ordered immutable mapping of validated values.

    Attributes:
        parameters: The collection these arguments were bound against
    """

    __slots__ = ("_parameters", "_values")

    def __init__(self, parameters: Any, values: Dict[str, Any]):
        self._parameters = parameters
        self._values = dict(values)

    @property
    def parameters(self) -> Any:
        return self._parameters

    def __getitem__(self, name: str) -> Any:
        try:
            return self._values[name]
        except KeyError:
            raise KeyNotFoundError(f"Argument `{name}` not found", path=(name,)) from None

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __repr__(self) -> str:
        return f"Arguments({self._values!r})"

    def cast(self, name: str) -> CastValue:
        """Return the named value wrapped for typed extraction."""
        return CastValue(self[name])

    def to_dict(self) -> Dict[str, Any]:
        """Return a plain dict copy, preserving order."""
        return dict(self._values)
