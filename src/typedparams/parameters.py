"""
Named parameter collections.

``Parameters`` is an ordered, immutable mapping from name to descriptor.
Each name is either required or optional: optional when it was added with
``with_optional`` or when its descriptor carries a default, required
otherwise. The two key sets always partition the collection.

Example:
    >>> from typedparams import parameters, stringp, intp
    >>> params = parameters(foo=stringp()).with_optional("bar", intp())
    >>> sorted(params.required_keys()), sorted(params.optional_keys())
    (['foo'], ['bar'])
"""

from collections.abc import Mapping
from typing import Any, Dict, FrozenSet, Iterator, List, Tuple

from .errors import KeyNotFoundError


class Parameters(Mapping):
    """
    Ordered immutable collection of named descriptors.

    Args:
        **parameters: Initial descriptors; each is required unless it has a default
    """

    __slots__ = ("_parameters", "_optional")

    def __init__(self, **parameters: Any):
        for name, parameter in parameters.items():
            _check_entry(name, parameter)
        self._parameters: Dict[str, Any] = dict(parameters)
        self._optional: FrozenSet[str] = frozenset()

    @classmethod
    def _build(cls, parameters: Dict[str, Any], optional: FrozenSet[str]) -> "Parameters":
        collection = cls.__new__(cls)
        collection._parameters = parameters
        collection._optional = optional & frozenset(parameters)
        return collection

    def __getitem__(self, name: str) -> Any:
        try:
            return self._parameters[name]
        except KeyError:
            raise KeyNotFoundError(f"Parameter `{name}` not found", path=(name,)) from None

    def __iter__(self) -> Iterator[str]:
        return iter(self._parameters)

    def __len__(self) -> int:
        return len(self._parameters)

    def __contains__(self, name: object) -> bool:
        return name in self._parameters

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Parameters):
            return NotImplemented
        return (
            list(self._parameters.items()) == list(other._parameters.items())
            and self.optional_keys() == other.optional_keys()
        )

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    __hash__ = None

    def __repr__(self) -> str:
        return f"Parameters(required={self.required_list()}, optional={self.optional_list()})"

    def with_required(self, name: str, parameter: Any) -> "Parameters":
        """Return a copy with ``name`` set to ``parameter`` and not marked optional."""
        return self._with(name, parameter, self._optional - {name})

    def with_optional(self, name: str, parameter: Any) -> "Parameters":
        """Return a copy with ``name`` set to ``parameter`` and marked optional."""
        return self._with(name, parameter, self._optional | {name})

    def _with(self, name: str, parameter: Any, optional: FrozenSet[str]) -> "Parameters":
        _check_entry(name, parameter)
        parameters = dict(self._parameters)
        # Replacing keeps the original position
        parameters[name] = parameter
        return self._build(parameters, optional)

    def without(self, *names: str) -> "Parameters":
        """Return a copy without ``names``; absent names are ignored."""
        parameters = {k: v for k, v in self._parameters.items() if k not in names}
        return self._build(parameters, self._optional)

    def has(self, *names: str) -> bool:
        """True if every name exists (required or optional)."""
        return all(name in self._parameters for name in names)

    def is_optional(self, name: str) -> bool:
        parameter = self[name]
        return name in self._optional or parameter.has_default

    def is_required(self, name: str) -> bool:
        return not self.is_optional(name)

    def required_keys(self) -> FrozenSet[str]:
        return frozenset(self.required_list())

    def optional_keys(self) -> FrozenSet[str]:
        return frozenset(self.optional_list())

    def required_list(self) -> List[str]:
        """Required names in declaration order."""
        return [name for name in self._parameters if not self.is_optional(name)]

    def optional_list(self) -> List[str]:
        """Optional names in declaration order."""
        return [name for name in self._parameters if self.is_optional(name)]

    def schema(self) -> Dict[str, Dict[str, Any]]:
        """Describe every parameter as a plain dict, keyed by name."""
        from .schema import describe_parameters

        return describe_parameters(self)


def _check_entry(name: Any, parameter: Any) -> None:
    from .descriptors import Parameter

    if not isinstance(name, str):
        raise TypeError(f"Parameter name must be a string, got {type(name).__name__}")
    if not isinstance(parameter, Parameter):
        raise TypeError(
            f"Parameter `{name}` must be a descriptor, got {type(parameter).__name__}"
        )


def _collection_of(source: Any) -> Parameters:
    if isinstance(source, Parameters):
        return source
    parameters = getattr(source, "parameters", None)
    if isinstance(parameters, Parameters):
        return parameters
    raise TypeError(f"Expected Parameters or ArrayParameter, got {type(source).__name__}")


def take_keys(source: Any) -> List[str]:
    """Return the names of a collection (or array parameter) in order."""
    return list(_collection_of(source).keys())


def take_from(source: Any, *names: str) -> Iterator[Tuple[str, Any]]:
    """
    Yield ``(name, descriptor)`` pairs in request order.

    Raises:
        KeyNotFoundError: When a name is absent (raised on iteration)
    """
    collection = _collection_of(source)
    for name in names:
        if name not in collection:
            raise KeyNotFoundError(f"Key `{name}` not found", path=(name,))
        yield name, collection[name]


def select_from(source: Any, *names: str) -> Parameters:
    """
    Build a new collection with only ``names``, in request order.

    Each selected entry keeps its required/optional classification.

    Raises:
        KeyNotFoundError: If any requested name is absent from ``source``
    """
    collection = _collection_of(source)
    selected = Parameters()
    for name, parameter in take_from(collection, *names):
        if collection.is_optional(name):
            selected = selected.with_optional(name, parameter)
        else:
            selected = selected.with_required(name, parameter)
    return selected
