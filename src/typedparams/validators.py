"""
Value validation and argument binding.

Implements the validation logic for descriptors and collections:
- Type-first validation per descriptor kind
- Regex, bounds, accepted values and class constraints
- Iterable key/value validation with path reporting
- Binding a mapping against a ``Parameters`` collection: undeclared keys,
  missing required keys, per-key validation, default injection and
  recursion into nested array descriptors

All failures are raised immediately; no partial result is ever returned.
"""

import copy
import logging
from collections.abc import Mapping
from typing import Any, Callable, Dict, Optional

from .arguments import Arguments
from .errors import (
    ConstraintViolationError,
    ContractError,
    MissingRequiredError,
    TypeMismatchError,
    UnknownKeyError,
)
from .kinds import KIND_TYPE_TAGS, TYPE_ARRAY, TYPE_OBJECT, Kind, type_tag_of
from .settings import DEFAULT_SETTINGS, KeyOrder, ValidationSettings

logger = logging.getLogger(__name__)


def validate_value(
    parameter: Any,
    value: Any,
    settings: Optional[ValidationSettings] = None,
) -> Any:
    """
    Validate a value against a descriptor.

    Returns the value unchanged for scalar kinds, or a normalized structure
    for array and iterable kinds.

    Raises:
        TypeMismatchError: If the value's type tag differs from the kind
        ConstraintViolationError: If a variant constraint fails
        MissingRequiredError, UnknownKeyError: From nested array binding

    Example:
        >>> from typedparams import intp
        >>> validate_value(intp(minimum=1), 5)
        5
    """
    kind = parameter.kind
    if not _kind_matches(parameter, value):
        raise TypeMismatchError(
            f"Argument value provided is not of type {kind.value}",
            value=value,
            expected=kind.value,
        )
    return _VALIDATORS[kind](parameter, value, settings or DEFAULT_SETTINGS)


def _kind_matches(parameter: Any, value: Any) -> bool:
    """
    Type-first gate.

    Object descriptors also accept instances of builtin subclasses
    (IntEnum, NamedTuple, OrderedDict) of their own class, which
    ``type_tag_of`` would tag as scalars or arrays.
    """
    tag = type_tag_of(value)
    if parameter.kind == Kind.OBJECT:
        if tag == TYPE_OBJECT:
            return True
        return parameter.class_name is not object and isinstance(value, parameter.class_name)
    return tag == KIND_TYPE_TAGS[parameter.kind]


def _validate_scalar(parameter: Any, value: Any, settings: ValidationSettings) -> Any:
    return value


def _validate_numeric(parameter: Any, value: Any, settings: ValidationSettings) -> Any:
    """Validate accepted values and bounds (int/float)."""
    accept = getattr(parameter, "accept", ())
    if accept and value not in accept:
        raise ConstraintViolationError(
            f"Argument value provided `{value}` is not an accepted value in `{list(accept)}`",
            value=value,
            constraint=list(accept),
        )
    if parameter.minimum is not None and value < parameter.minimum:
        raise ConstraintViolationError(
            f"Argument value provided `{value}` is less than `{parameter.minimum}`",
            value=value,
            constraint=parameter.minimum,
        )
    if parameter.maximum is not None and value > parameter.maximum:
        raise ConstraintViolationError(
            f"Argument value provided `{value}` is greater than `{parameter.maximum}`",
            value=value,
            constraint=parameter.maximum,
        )
    return value


def _validate_string(parameter: Any, value: str, settings: ValidationSettings) -> str:
    if not parameter.regex.match(value):
        raise ConstraintViolationError(
            f"Argument value provided `{value}` does not match the regex `{parameter.regex}`",
            value=value,
            constraint=parameter.regex.pattern,
        )
    return value


def _validate_object(parameter: Any, value: Any, settings: ValidationSettings) -> Any:
    if not isinstance(value, parameter.class_name):
        raise ConstraintViolationError(
            f"Argument value provided is not an instance of `{parameter.class_name.__qualname__}`",
            value=value,
            constraint=parameter.class_name.__qualname__,
        )
    return value


def _validate_array(parameter: Any, value: Any, settings: ValidationSettings) -> Dict[str, Any]:
    if not isinstance(value, Mapping):
        raise TypeMismatchError(
            "Argument value provided is not a mapping",
            value=value,
            expected=Kind.ARRAY.value,
        )
    return bind(parameter.parameters, value, settings).to_dict()


def _validate_iterable(parameter: Any, value: Any, settings: ValidationSettings) -> Any:
    """Validate every key and member; the first failure wins."""
    if isinstance(value, Mapping):
        items = value.items()
    else:
        items = enumerate(value)

    validated = {}
    for key, member in items:
        try:
            validate_value(parameter.key, key, settings)
            validated[key] = validate_value(parameter.value, member, settings)
        except ContractError as e:
            raise e.at(key) from None

    if isinstance(value, Mapping):
        return validated
    return list(validated.values())


# Exhaustive dispatch over the closed set of kinds
_VALIDATORS: Dict[Kind, Callable[[Any, Any, ValidationSettings], Any]] = {
    Kind.NULL: _validate_scalar,
    Kind.BOOL: _validate_scalar,
    Kind.INT: _validate_numeric,
    Kind.FLOAT: _validate_numeric,
    Kind.STRING: _validate_string,
    Kind.ARRAY: _validate_array,
    Kind.ITERABLE: _validate_iterable,
    Kind.OBJECT: _validate_object,
}

if set(_VALIDATORS) != set(Kind):
    raise RuntimeError(f"Missing validators for: {set(Kind) - set(_VALIDATORS)}")


def bind(
    parameters: Any,
    values: Any,
    settings: Optional[ValidationSettings] = None,
) -> Arguments:
    """
    Bind a mapping of values against a collection.

    Steps:
        1. Reject any key not declared in the collection
        2. Reject any required key that is absent and has no default
        3. Validate every present value against its descriptor
        4. Inject defaults for absent keys that have one

    Keys present in the input keep their input order, followed by defaulted
    keys in declaration order (``settings.key_order`` may switch to
    declaration order). Absent optional keys without a default are omitted.

    Args:
        parameters: The ``Parameters`` collection to bind against
        values: Input mapping
        settings: Optional ``ValidationSettings``

    Returns:
        Arguments with every validated value

    Raises:
        UnknownKeyError: If an input key is not declared
        MissingRequiredError: If a required key is absent
        TypeMismatchError, ConstraintViolationError: If a value fails
            validation; the error path starts with the offending key

    Example:
        >>> from typedparams import parameters, stringp, intp
        >>> params = parameters(one=stringp(), two=intp(default=222))
        >>> bind(params, {"one": "foo"}).to_dict()
        {'one': 'foo', 'two': 222}
    """
    settings = settings or DEFAULT_SETTINGS
    if not isinstance(values, Mapping):
        raise TypeMismatchError(
            "Arguments must be provided as a mapping",
            value=values,
            expected=TYPE_ARRAY,
        )

    for key in values:
        if key not in parameters:
            logger.debug(f"Undeclared argument `{key}` (declared: {list(parameters)})")
            raise UnknownKeyError(
                f"Argument `{key}` is not declared, expected one of {list(parameters)}",
                path=(key,),
                value=values[key],
            )

    for name in parameters:
        if name in values:
            continue
        if parameters.is_required(name):
            raise MissingRequiredError(
                f"Missing required argument `{name}`",
                path=(name,),
            )

    validated: Dict[str, Any] = {}
    for key, value in values.items():
        try:
            validated[key] = validate_value(parameters[key], value, settings)
        except ContractError as e:
            logger.debug(f"Argument `{key}` failed validation: {e}")
            raise e.at(key) from None

    for name in parameters:
        if name not in values and parameters[name].has_default:
            validated[name] = _default_of(parameters[name])

    if settings.key_order == KeyOrder.DECLARED:
        validated = {name: validated[name] for name in parameters if name in validated}

    return Arguments(parameters, validated)


def _default_of(parameter: Any) -> Any:
    # Containers are copied so callers cannot mutate a descriptor's default
    if type_tag_of(parameter.default) == TYPE_ARRAY:
        return copy.deepcopy(parameter.default)
    return parameter.default


def assert_named_argument(name: str, parameter: Any, value: Any) -> Any:
    """
    Validate a single named value.

    Raises:
        ContractError: The validation error, located under ``name``
    """
    try:
        return validate_value(parameter, value)
    except ContractError as e:
        raise e.at(name) from None
