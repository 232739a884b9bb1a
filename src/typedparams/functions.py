"""
Builder functions for descriptors and collections.

Example:
    >>> from typedparams import arrayp, stringp, intp, assert_array
    >>> payload = arrayp(one=stringp(), two=intp(default=222))
    >>> assert_array(payload, {"one": "foo"})
    {'one': 'foo', 'two': 222}
"""

from dataclasses import replace
from typing import Any, Dict, Optional, Union

from .arguments import Arguments
from .descriptors import (
    ArrayParameter,
    BoolParameter,
    FloatParameter,
    IntParameter,
    IterableParameter,
    NullParameter,
    ObjectParameter,
    Parameter,
    StringParameter,
)
from .kinds import MISSING
from .parameters import Parameters, select_from, take_from, take_keys  # noqa: F401
from .regex import PATTERN_DEFAULT, Regex
from .settings import ValidationSettings
from .validators import bind, validate_value


def nullp(description: str = "", default: Any = MISSING) -> NullParameter:
    return NullParameter(description=description, default=default)


def boolp(description: str = "", default: Any = MISSING) -> BoolParameter:
    return BoolParameter(description=description, default=default)


def intp(
    description: str = "",
    default: Any = MISSING,
    minimum: Optional[int] = None,
    maximum: Optional[int] = None,
    accept: tuple = (),
) -> IntParameter:
    return IntParameter(
        description=description,
        default=default,
        minimum=minimum,
        maximum=maximum,
        accept=accept,
    )


def floatp(
    description: str = "",
    default: Any = MISSING,
    minimum: Optional[float] = None,
    maximum: Optional[float] = None,
) -> FloatParameter:
    return FloatParameter(
        description=description,
        default=default,
        minimum=minimum,
        maximum=maximum,
    )


def stringp(
    regex: Union[Regex, str] = PATTERN_DEFAULT,
    description: str = "",
    default: Any = MISSING,
) -> StringParameter:
    """String descriptor; ``regex`` must match the whole value."""
    return StringParameter(description=description, default=default, regex=regex)


def arrayp(**parameters: Any) -> ArrayParameter:
    """
    Mapping descriptor with named members.

    Each member is required unless it carries a default. ``description``
    and ``default`` configure the array itself, unless they are passed a
    descriptor: then they are members like any other, in call order.

    Example:
        >>> list(arrayp(description=stringp(), name=stringp()).parameters)
        ['description', 'name']
    """
    options = {}
    for name in ("description", "default"):
        if name in parameters and not isinstance(parameters[name], Parameter):
            options[name] = parameters.pop(name)
    return ArrayParameter(parameters=Parameters(**parameters), **options)


def iterablep(
    V: Parameter,
    K: Optional[Parameter] = None,
    description: str = "",
    default: Any = MISSING,
) -> IterableParameter:
    """Iterable descriptor: values must satisfy ``V``, keys ``K`` (default int)."""
    if K is None:
        K = IntParameter()
    return IterableParameter(description=description, default=default, value=V, key=K)


def objectp(class_name: type, description: str = "", default: Any = MISSING) -> ObjectParameter:
    return ObjectParameter(description=description, default=default, class_name=class_name)


def parameters(**parameters: Parameter) -> Parameters:
    return Parameters(**parameters)


def arguments(
    parameters: Parameters,
    values: Dict[str, Any],
    settings: Optional[ValidationSettings] = None,
) -> Arguments:
    """Bind ``values`` against ``parameters``."""
    return bind(parameters, values, settings)


def assert_array(parameter: ArrayParameter, values: Dict[str, Any]) -> Dict[str, Any]:
    """Validate a mapping against an array descriptor and return the normalized dict."""
    return validate_value(parameter, values)


def array_from(parameter: ArrayParameter, *names: str) -> ArrayParameter:
    """Return a copy of ``parameter`` keeping only ``names`` (in request order)."""
    return replace(parameter, parameters=select_from(parameter, *names), default=MISSING)


parameters_from = select_from
