"""
Schema export and in-memory declarations.

``describe`` turns a descriptor into a plain dict; ``parameters_from_schema``
builds a ``Parameters`` collection back from a dict in the same shape. The
declarations are already-decoded Python values: no text format is read or
written here.

Example declaration:
    {
        "query": {"type": "string", "regex": "^[a-z]+$"},
        "limit": {"type": "int", "default": 10, "minimum": 1, "maximum": 100},
        "options": {
            "type": "array",
            "parameters": {
                "temperature": {"type": "float", "default": 0.7},
            },
        },
        "tags": {"type": "iterable", "parameters": {"V": {"type": "string"}}},
    }

Documents are checked against ``DECLARATION_SCHEMA`` (JSON Schema draft
2020-12) before any descriptor is built, so every structural problem is
reported at once.
"""

import importlib
import logging
from typing import Any, Callable, Dict

from jsonschema import Draft202012Validator

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
from .errors import ContractError, SchemaDeclarationError
from .kinds import Kind
from .parameters import Parameters
from .regex import PATTERN_DEFAULT

logger = logging.getLogger(__name__)


DECLARATION_SCHEMA: Dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "$defs": {
        "parameter": {
            "type": "object",
            "required": ["type"],
            "properties": {
                "type": {"enum": [kind.value for kind in Kind]},
                "description": {"type": "string"},
                "default": {},
                "required": {"type": "boolean"},
                "regex": {"type": "string"},
                "minimum": {"type": ["number", "null"]},
                "maximum": {"type": ["number", "null"]},
                "accept": {"type": "array", "items": {"type": "integer"}},
                "parameters": {
                    "type": "object",
                    "additionalProperties": {"$ref": "#/$defs/parameter"},
                },
                "className": {"type": "string", "minLength": 1},
            },
            "additionalProperties": False,
            "allOf": [
                {
                    "if": {"properties": {"type": {"const": "object"}}},
                    "then": {"required": ["className"]},
                },
                {
                    "if": {"properties": {"type": {"const": "iterable"}}},
                    "then": {
                        "required": ["parameters"],
                        "properties": {
                            "parameters": {
                                "required": ["V"],
                                "propertyNames": {"enum": ["K", "V"]},
                            }
                        },
                    },
                },
            ],
        },
    },
    "type": "object",
    "additionalProperties": {"$ref": "#/$defs/parameter"},
}

_validator = Draft202012Validator(DECLARATION_SCHEMA)


def class_path(cls: type) -> str:
    """Dotted import path of a class (e.g. "decimal.Decimal")."""
    return f"{cls.__module__}.{cls.__qualname__}"


def resolve_class(path: str) -> type:
    """
    Import the class named by a dotted path.

    The longest importable module prefix is imported, then the remaining
    parts are looked up as attributes.

    Raises:
        SchemaDeclarationError: If the path does not resolve to a class
    """
    parts = path.split(".")
    for index in range(len(parts) - 1, 0, -1):
        module_name = ".".join(parts[:index])
        try:
            target: Any = importlib.import_module(module_name)
        except ImportError:
            continue
        try:
            for attribute in parts[index:]:
                target = getattr(target, attribute)
        except AttributeError:
            break
        if isinstance(target, type):
            return target
        break
    raise SchemaDeclarationError([f"Cannot resolve class `{path}`"])


def _describe_base(parameter: Parameter) -> Dict[str, Any]:
    result: Dict[str, Any] = {
        "type": parameter.kind.value,
        "description": parameter.description,
    }
    # Absent key means no default; null is a real default
    if parameter.has_default:
        result["default"] = parameter.default
    return result


def _describe_scalar(parameter: Parameter) -> Dict[str, Any]:
    return _describe_base(parameter)


def _describe_int(parameter: IntParameter) -> Dict[str, Any]:
    result = _describe_base(parameter)
    result["minimum"] = parameter.minimum
    result["maximum"] = parameter.maximum
    result["accept"] = list(parameter.accept)
    return result


def _describe_float(parameter: FloatParameter) -> Dict[str, Any]:
    result = _describe_base(parameter)
    result["minimum"] = parameter.minimum
    result["maximum"] = parameter.maximum
    return result


def _describe_string(parameter: StringParameter) -> Dict[str, Any]:
    result = _describe_base(parameter)
    result["regex"] = parameter.regex.pattern
    return result


def _describe_array(parameter: ArrayParameter) -> Dict[str, Any]:
    result = _describe_base(parameter)
    result["parameters"] = describe_parameters(parameter.parameters)
    return result


def _describe_iterable(parameter: IterableParameter) -> Dict[str, Any]:
    result = _describe_base(parameter)
    result["parameters"] = {
        "K": describe(parameter.key),
        "V": describe(parameter.value),
    }
    return result


def _describe_object(parameter: ObjectParameter) -> Dict[str, Any]:
    result = _describe_base(parameter)
    result["className"] = class_path(parameter.class_name)
    return result


_DESCRIBERS: Dict[Kind, Callable[[Any], Dict[str, Any]]] = {
    Kind.NULL: _describe_scalar,
    Kind.BOOL: _describe_scalar,
    Kind.INT: _describe_int,
    Kind.FLOAT: _describe_float,
    Kind.STRING: _describe_string,
    Kind.ARRAY: _describe_array,
    Kind.ITERABLE: _describe_iterable,
    Kind.OBJECT: _describe_object,
}

if set(_DESCRIBERS) != set(Kind):
    raise RuntimeError(f"Missing describers for: {set(Kind) - set(_DESCRIBERS)}")


def describe(parameter: Parameter) -> Dict[str, Any]:
    """Describe a descriptor as a plain dict."""
    return _DESCRIBERS[parameter.kind](parameter)


def describe_parameters(parameters: Parameters) -> Dict[str, Dict[str, Any]]:
    """Describe a collection as ``{name: {"required": bool, ...}}``."""
    result = {}
    for name, parameter in parameters.items():
        entry = {"required": parameters.is_required(name)}
        entry.update(describe(parameter))
        result[name] = entry
    return result


def check_declaration(document: Any) -> None:
    """
    Check a declaration document against ``DECLARATION_SCHEMA``.

    Raises:
        SchemaDeclarationError: Listing every problem found
    """
    errors = sorted(_validator.iter_errors(document), key=lambda e: e.json_path)
    if errors:
        raise SchemaDeclarationError([f"{e.json_path}: {e.message}" for e in errors])


def parameters_from_schema(document: Dict[str, Any]) -> Parameters:
    """
    Build a collection from a declaration document.

    Entries with ``"required": false`` are added as optional; other entries
    are required unless they declare a default. A present ``"default"`` key
    is a default even when it is ``None``.

    Args:
        document: Mapping of names to parameter declarations

    Returns:
        Parameters collection in document order

    Raises:
        SchemaDeclarationError: If the document is malformed
        ContractError: If a declared default violates its own declaration
    """
    check_declaration(document)
    collection = _build_parameters(document, ())
    logger.debug(f"Loaded {len(collection)} parameter declaration(s): {list(collection)}")
    return collection


def parameter_from_schema(declaration: Dict[str, Any]) -> Parameter:
    """Build a single descriptor from one declaration."""
    check_declaration({"parameter": declaration})
    return _build(declaration, ())


def _build_parameters(document: Dict[str, Any], path: tuple) -> Parameters:
    collection = Parameters()
    for name, declaration in document.items():
        parameter = _build(declaration, path + (name,))
        if declaration.get("required", True):
            collection = collection.with_required(name, parameter)
        else:
            collection = collection.with_optional(name, parameter)
    return collection


def _build(declaration: Dict[str, Any], path: tuple) -> Parameter:
    kind = Kind(declaration["type"])
    options: Dict[str, Any] = {"description": declaration.get("description", "")}
    if "default" in declaration:
        options["default"] = declaration["default"]

    # Nested declarations locate their own errors
    if kind == Kind.ARRAY:
        options["parameters"] = _build_parameters(declaration.get("parameters", {}), path)
    elif kind == Kind.ITERABLE:
        members = declaration["parameters"]
        options["value"] = _build(members["V"], path + ("V",))
        if "K" in members:
            options["key"] = _build(members["K"], path + ("K",))

    try:
        if kind in (Kind.INT, Kind.FLOAT):
            options["minimum"] = declaration.get("minimum")
            options["maximum"] = declaration.get("maximum")
        if kind == Kind.INT:
            options["accept"] = tuple(declaration.get("accept", ()))
        elif kind == Kind.STRING:
            options["regex"] = declaration.get("regex", PATTERN_DEFAULT)
        elif kind == Kind.OBJECT:
            options["class_name"] = resolve_class(declaration["className"])
        return _FACTORIES[kind](**options)
    except ContractError as e:
        raise e.at(*path) from None


_FACTORIES: Dict[Kind, Callable[..., Parameter]] = {
    Kind.NULL: NullParameter,
    Kind.BOOL: BoolParameter,
    Kind.INT: IntParameter,
    Kind.FLOAT: FloatParameter,
    Kind.STRING: StringParameter,
    Kind.ARRAY: ArrayParameter,
    Kind.ITERABLE: IterableParameter,
    Kind.OBJECT: ObjectParameter,
}

if set(_FACTORIES) != set(Kind):
    raise RuntimeError(f"Missing factories for: {set(Kind) - set(_FACTORIES)}")
