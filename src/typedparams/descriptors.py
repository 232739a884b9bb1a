"""
Parameter descriptors.

A descriptor declares the accepted shape of one piece of data. The set of
variants is closed, one per ``Kind``:

- NullParameter: only ``None``
- BoolParameter: only ``bool``
- IntParameter: ``int`` (not ``bool``), optional bounds and accepted values
- FloatParameter: ``float``, optional bounds
- StringParameter: ``str`` matching a ``Regex``
- ArrayParameter: a mapping bound against a nested ``Parameters``
- IterableParameter: a mapping or sequence with key and value descriptors
- ObjectParameter: an instance of a given class

Descriptors are frozen dataclasses. Every ``with_*`` method returns a new
descriptor built with ``dataclasses.replace``, which re-runs the default
check, so a descriptor never holds a default that violates its own rules.

Example:
    >>> from typedparams import stringp
    >>> name = stringp(regex=r"^[a-z]+$", default="abcd")
    >>> name("hello")
    'hello'
    >>> name.with_default("ABC")
    Traceback (most recent call last):
    ...
    typedparams.errors.ConstraintViolationError: Argument value provided `ABC` does not match the regex `^[a-z]+$`
"""

from dataclasses import dataclass, field, replace
from typing import Any, ClassVar, Dict, Optional, Tuple, Union

from .kinds import MISSING, Kind
from .parameters import Parameters
from .regex import Regex
from . import validators


@dataclass(frozen=True)
class Parameter:
    """
    Base descriptor.

    Attributes:
        description: Free text describing the parameter
        default: Default value, ``MISSING`` when absent
    """

    kind: ClassVar[Kind]

    description: str = ""
    default: Any = MISSING

    def __post_init__(self):
        if not isinstance(self.description, str):
            raise TypeError("Parameter description must be a string")
        self._check()
        if self.has_default:
            object.__setattr__(self, "default", validators.validate_value(self, self.default))

    def _check(self) -> None:
        """Normalize and check variant-specific fields."""

    @property
    def has_default(self) -> bool:
        return self.default is not MISSING

    def validate(self, value: Any) -> Any:
        """
        Validate ``value`` and return it, normalized for array/iterable kinds.

        Raises:
            TypeMismatchError: If the value kind differs from this descriptor
            ConstraintViolationError: If a variant constraint fails
        """
        return validators.validate_value(self, value)

    def __call__(self, value: Any) -> Any:
        return self.validate(value)

    def with_description(self, description: str) -> "Parameter":
        return replace(self, description=description)

    def with_default(self, default: Any) -> "Parameter":
        return replace(self, default=default)

    def without_default(self) -> "Parameter":
        return replace(self, default=MISSING)

    def assert_compatible(self, other: "Parameter") -> None:
        """Raise ``IncompatibleError`` unless ``other`` is structurally equivalent."""
        from .compatibility import assert_compatible

        assert_compatible(self, other)

    def schema(self) -> Dict[str, Any]:
        """Describe this parameter as a plain dict."""
        from .schema import describe

        return describe(self)


@dataclass(frozen=True)
class NullParameter(Parameter):
    kind: ClassVar[Kind] = Kind.NULL


@dataclass(frozen=True)
class BoolParameter(Parameter):
    kind: ClassVar[Kind] = Kind.BOOL


@dataclass(frozen=True)
class IntParameter(Parameter):
    """
    Integer descriptor.

    Attributes:
        minimum: Smallest accepted value (inclusive)
        maximum: Largest accepted value (inclusive)
        accept: Exhaustive tuple of accepted values, empty for any
    """

    kind: ClassVar[Kind] = Kind.INT

    minimum: Optional[int] = None
    maximum: Optional[int] = None
    accept: Tuple[int, ...] = ()

    def _check(self) -> None:
        object.__setattr__(self, "accept", tuple(self.accept))
        for bound in (self.minimum, self.maximum, *self.accept):
            if bound is not None and (isinstance(bound, bool) or not isinstance(bound, int)):
                raise TypeError(f"Int constraint `{bound!r}` must be an int")
        _check_bounds(self.minimum, self.maximum)

    def with_minimum(self, minimum: Optional[int]) -> "IntParameter":
        return replace(self, minimum=minimum)

    def with_maximum(self, maximum: Optional[int]) -> "IntParameter":
        return replace(self, maximum=maximum)

    def with_accept(self, *accept: int) -> "IntParameter":
        return replace(self, accept=accept)


@dataclass(frozen=True)
class FloatParameter(Parameter):
    """
    Float descriptor.

    Attributes:
        minimum: Smallest accepted value (inclusive)
        maximum: Largest accepted value (inclusive)
    """

    kind: ClassVar[Kind] = Kind.FLOAT

    minimum: Optional[float] = None
    maximum: Optional[float] = None

    def _check(self) -> None:
        for bound in (self.minimum, self.maximum):
            if bound is not None and (isinstance(bound, bool) or not isinstance(bound, (int, float))):
                raise TypeError(f"Float constraint `{bound!r}` must be a number")
        _check_bounds(self.minimum, self.maximum)

    def with_minimum(self, minimum: Optional[float]) -> "FloatParameter":
        return replace(self, minimum=minimum)

    def with_maximum(self, maximum: Optional[float]) -> "FloatParameter":
        return replace(self, maximum=maximum)


@dataclass(frozen=True)
class StringParameter(Parameter):
    """
    String descriptor constrained by a regex.

    Attributes:
        regex: Regex the whole string must match (default: any string)
    """

    kind: ClassVar[Kind] = Kind.STRING

    regex: Regex = field(default_factory=Regex)

    def _check(self) -> None:
        if isinstance(self.regex, str):
            object.__setattr__(self, "regex", Regex(self.regex))
        elif not isinstance(self.regex, Regex):
            raise TypeError("StringParameter regex must be a Regex or a pattern string")

    def with_regex(self, regex: Union[Regex, str]) -> "StringParameter":
        """Return a copy with another regex; a present default is revalidated."""
        return replace(self, regex=regex)


@dataclass(frozen=True)
class ArrayParameter(Parameter):
    """
    Mapping descriptor with a nested named collection.

    Attributes:
        parameters: Nested collection every input mapping is bound against
    """

    kind: ClassVar[Kind] = Kind.ARRAY

    parameters: Parameters = field(default_factory=Parameters)

    def _check(self) -> None:
        if not isinstance(self.parameters, Parameters):
            raise TypeError("ArrayParameter parameters must be a Parameters collection")

    def with_required(self, **parameters: Parameter) -> "ArrayParameter":
        collection = self.parameters
        for name, parameter in parameters.items():
            collection = collection.with_required(name, parameter)
        return replace(self, parameters=collection)

    def with_optional(self, **parameters: Parameter) -> "ArrayParameter":
        collection = self.parameters
        for name, parameter in parameters.items():
            collection = collection.with_optional(name, parameter)
        return replace(self, parameters=collection)

    def without(self, *names: str) -> "ArrayParameter":
        return replace(self, parameters=self.parameters.without(*names))


@dataclass(frozen=True)
class IterableParameter(Parameter):
    """
    Keyed or ordered collection descriptor.

    Mappings are checked key by key; lists and tuples use their indices as
    keys, so the default key descriptor is an ``IntParameter``.

    Attributes:
        value: Descriptor every member must satisfy
        key: Descriptor every key (or index) must satisfy
    """

    kind: ClassVar[Kind] = Kind.ITERABLE

    value: Optional[Parameter] = None
    key: Parameter = field(default_factory=IntParameter)

    def _check(self) -> None:
        if not isinstance(self.value, Parameter):
            raise TypeError("IterableParameter requires a value Parameter")
        if not isinstance(self.key, Parameter):
            raise TypeError("IterableParameter key must be a Parameter")


@dataclass(frozen=True)
class ObjectParameter(Parameter):
    """
    Object descriptor.

    Attributes:
        class_name: Class accepted values must be instances of
    """

    kind: ClassVar[Kind] = Kind.OBJECT

    class_name: type = object

    def _check(self) -> None:
        if not isinstance(self.class_name, type):
            raise TypeError("ObjectParameter class_name must be a class")


def _check_bounds(minimum: Any, maximum: Any) -> None:
    if minimum is not None and maximum is not None and minimum > maximum:
        raise ValueError(f"Minimum `{minimum}` is greater than maximum `{maximum}`")
