"""
typedparams: runtime parameter descriptors.

Declare the expected shape of data as immutable descriptors, then validate,
normalize and cast values against them:
- Scalar descriptors (null, bool, int, float, regex-constrained string)
- Array descriptors with named, nested members and defaults
- Iterable descriptors with key and value descriptors
- Object descriptors by class
- Argument binding with default injection and fail-fast errors
- Structural compatibility checks
- Typed casts and validated function calls

Example:
    >>> from typedparams import arrayp, intp, stringp, assert_array
    >>> payload = arrayp(
    ...     one=stringp(),
    ...     two=intp(default=222),
    ...     nest=arrayp(nestOne=intp(default=1), nestTwo=intp(default=2)),
    ... )
    >>> assert_array(payload, {"one": "foo", "nest": {}})
    {'one': 'foo', 'nest': {'nestOne': 1, 'nestTwo': 2}, 'two': 222}
"""

from .arguments import Arguments
from .calls import CallValidator, validated, validates
from .cast import CastValue, cast
from .compatibility import assert_compatible
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
from .errors import (
    ArityMismatchError,
    ConstraintViolationError,
    ContractError,
    IncompatibleError,
    InferenceError,
    KeyNotFoundError,
    MissingAnnotationError,
    MissingRequiredError,
    ParameterError,
    ReturnError,
    SchemaDeclarationError,
    TypeMismatchError,
    UnknownKeyError,
    UnsupportedTypeError,
)
from .functions import (
    array_from,
    arguments,
    arrayp,
    assert_array,
    boolp,
    floatp,
    intp,
    iterablep,
    nullp,
    objectp,
    parameters,
    parameters_from,
    stringp,
)
from .inference import DescriptorInference, SignatureInference
from .kinds import MISSING, Kind, type_tag_of
from .parameters import Parameters, select_from, take_from, take_keys
from .regex import PATTERN_DEFAULT, Regex
from .schema import describe, parameter_from_schema, parameters_from_schema
from .settings import KeyOrder, ValidationSettings, parse_settings
from .validators import assert_named_argument, bind, validate_value

__version__ = "0.3.0"

__all__ = [
    # Descriptors
    "Parameter",
    "NullParameter",
    "BoolParameter",
    "IntParameter",
    "FloatParameter",
    "StringParameter",
    "ArrayParameter",
    "IterableParameter",
    "ObjectParameter",
    "Regex",
    "PATTERN_DEFAULT",
    "Kind",
    "MISSING",
    # Builders
    "nullp",
    "boolp",
    "intp",
    "floatp",
    "stringp",
    "arrayp",
    "iterablep",
    "objectp",
    "parameters",
    "arguments",
    "assert_array",
    "array_from",
    "parameters_from",
    # Collections
    "Parameters",
    "Arguments",
    "select_from",
    "take_keys",
    "take_from",
    # Engine
    "validate_value",
    "bind",
    "assert_named_argument",
    "assert_compatible",
    "cast",
    "CastValue",
    "type_tag_of",
    # Calls
    "validated",
    "validates",
    "CallValidator",
    "DescriptorInference",
    "SignatureInference",
    # Schema
    "describe",
    "parameters_from_schema",
    "parameter_from_schema",
    # Settings
    "ValidationSettings",
    "KeyOrder",
    "parse_settings",
    # Errors
    "ContractError",
    "TypeMismatchError",
    "ConstraintViolationError",
    "MissingRequiredError",
    "ArityMismatchError",
    "UnknownKeyError",
    "KeyNotFoundError",
    "IncompatibleError",
    "ParameterError",
    "ReturnError",
    "InferenceError",
    "MissingAnnotationError",
    "UnsupportedTypeError",
    "SchemaDeclarationError",
]
