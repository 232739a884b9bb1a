"""
Tests for signature inference and validated calls.
"""

from collections import OrderedDict
from decimal import Decimal
from enum import IntEnum
from typing import Annotated, Dict, List, Mapping, NamedTuple, Optional, Sequence, Tuple, Union

import pytest

from typedparams import (
    ArityMismatchError,
    CallValidator,
    ConstraintViolationError,
    FloatParameter,
    InferenceError,
    IntParameter,
    IterableParameter,
    KeyNotFoundError,
    MissingAnnotationError,
    NullParameter,
    ObjectParameter,
    ParameterError,
    ReturnError,
    SignatureInference,
    StringParameter,
    TypeMismatchError,
    UnsupportedTypeError,
    ValidationSettings,
    intp,
    parameters,
    stringp,
    validated,
    validates,
)
from typedparams.errors import callable_name


class Color(IntEnum):
    RED = 1
    GREEN = 2


class Point(NamedTuple):
    x: int
    y: int


def paint(color: Color) -> Color:
    return color


def origin_of(point: Point, labels: OrderedDict) -> Point:
    return point


def double(value: Annotated[int, intp(minimum=0)]) -> int:
    return value * 2


def greet(name: str, punctuation: str = "!") -> str:
    return f"hello {name}{punctuation}"


def broken(value: int) -> int:
    return str(value)


def nothing() -> None:
    return None


def unannotated(value) -> int:
    return value


def no_return(value: int):
    return value


def optional_value(value: Optional[int]) -> int:
    return 0


class Adder:
    def __call__(self, a: int, b: int = 0) -> int:
        return a + b


class TestSignatureInference:
    """Type hints map to descriptors."""

    def test_arguments_in_signature_order(self):
        inferred = SignatureInference().infer_arguments(greet)
        assert list(inferred) == ["name", "punctuation"]
        assert inferred.required_list() == ["name"]
        assert inferred["punctuation"].default == "!"

    def test_return(self):
        inference = SignatureInference()
        assert inference.infer_return(greet) == StringParameter()
        assert inference.infer_return(nothing) == NullParameter()

    def test_annotated_metadata(self):
        inferred = SignatureInference().infer_arguments(double)
        assert inferred["value"] == intp(minimum=0)

    def test_parameter_lookup(self):
        inference = SignatureInference()
        assert inference.parameter(greet, "name") == StringParameter()
        with pytest.raises(KeyNotFoundError, match="Parameter `zz` doesn't exist"):
            inference.parameter(greet, "zz")

    @pytest.mark.parametrize(
        "annotation, expected",
        [
            (int, IntParameter()),
            (float, FloatParameter()),
            (type(None), NullParameter()),
            (List[int], IterableParameter(value=IntParameter())),
            (Sequence[str], IterableParameter(value=StringParameter())),
            (Tuple[float, ...], IterableParameter(value=FloatParameter())),
            (
                Dict[str, float],
                IterableParameter(key=StringParameter(), value=FloatParameter()),
            ),
            (
                Mapping[str, List[int]],
                IterableParameter(
                    key=StringParameter(),
                    value=IterableParameter(value=IntParameter()),
                ),
            ),
            (Decimal, ObjectParameter(class_name=Decimal)),
        ],
    )
    def test_descriptor_for(self, annotation, expected):
        assert SignatureInference().descriptor_for(annotation, "x") == expected

    @pytest.mark.parametrize(
        "annotation",
        [Optional[int], Union[int, str], list, dict, Tuple[int, int], List],
    )
    def test_unsupported(self, annotation):
        with pytest.raises(UnsupportedTypeError):
            SignatureInference().descriptor_for(annotation, "x")

    def test_union_message(self):
        with pytest.raises(UnsupportedTypeError) as exc_info:
            SignatureInference().infer_arguments(optional_value)
        assert exc_info.value.message == "Parameter `value` of type union is not supported"

    def test_missing_annotation(self):
        with pytest.raises(MissingAnnotationError) as exc_info:
            SignatureInference().infer_arguments(unannotated)
        assert exc_info.value.field == "value"

    def test_missing_return_annotation(self):
        with pytest.raises(MissingAnnotationError):
            SignatureInference().infer_return(no_return)

    def test_variadic_rejected(self):
        def variadic(*values: int) -> int:
            return 0

        with pytest.raises(UnsupportedTypeError):
            SignatureInference().infer_arguments(variadic)

    def test_invalid_default(self):
        def bad_default(value: int = "x") -> int:
            return 0

        with pytest.raises(InferenceError) as exc_info:
            SignatureInference().infer_arguments(bad_default)
        assert isinstance(exc_info.value.__cause__, TypeMismatchError)

    def test_callable_instance(self):
        inferred = SignatureInference().infer_arguments(Adder())
        assert list(inferred) == ["a", "b"]

    def test_cached(self):
        inference = SignatureInference()
        assert inference.infer_arguments(greet) is inference.infer_arguments(greet)


class TestValidated:
    """Arguments and return values are checked around the call."""

    def test_valid_call(self):
        assert validated(double, 21) == 42
        assert validated(greet, "bob", punctuation="?") == "hello bob?"

    def test_default_injected(self):
        assert validated(greet, name="bob") == "hello bob!"

    def test_parameter_error(self):
        with pytest.raises(ParameterError) as exc_info:
            validated(double, -1)
        error = exc_info.value
        assert error.parameter == "value"
        assert isinstance(error.cause, ConstraintViolationError)
        assert error.__cause__ is error.cause
        assert error.kind == "ConstraintViolationError"
        assert str(error) == (
            f"`{callable_name(double)}` ConstraintViolationError -> "
            "[value]: Argument value provided `-1` is less than `0`"
        )

    def test_return_error(self):
        with pytest.raises(ReturnError) as exc_info:
            validated(broken, 1)
        assert isinstance(exc_info.value.cause, TypeMismatchError)
        assert str(exc_info.value) == (
            f"`{callable_name(broken)}` TypeMismatchError -> "
            "Argument value provided is not of type int"
        )

    def test_return_check_disabled(self):
        validator = CallValidator(settings=ValidationSettings(validate_return=False))
        assert validator(broken, 1) == "1"

    def test_too_many_positional(self):
        with pytest.raises(ParameterError) as exc_info:
            validated(double, 1, 2)
        assert isinstance(exc_info.value.cause, ArityMismatchError)
        assert exc_info.value.parameter is None

    def test_positional_and_keyword(self):
        with pytest.raises(ParameterError) as exc_info:
            validated(double, 1, value=2)
        assert exc_info.value.parameter == "value"

    def test_unknown_keyword(self):
        with pytest.raises(ParameterError) as exc_info:
            validated(greet, "bob", shout=True)
        assert exc_info.value.parameter == "shout"

    def test_inference_error_propagates(self):
        with pytest.raises(MissingAnnotationError):
            validated(unannotated, 1)

    def test_callable_instance(self):
        assert validated(Adder(), 1, b=2) == 3

    def test_builtin_subclass_annotations(self):
        """Enum, NamedTuple and OrderedDict annotations accept their instances."""
        assert validated(paint, Color.RED) is Color.RED
        point = Point(0, 0)
        assert validated(origin_of, point, OrderedDict(a=1)) is point

    def test_builtin_subclass_rejects_plain_value(self):
        with pytest.raises(ParameterError) as exc_info:
            validated(paint, 1)
        assert exc_info.value.parameter == "color"
        assert isinstance(exc_info.value.cause, TypeMismatchError)

    def test_parameter_error_to_dict(self):
        with pytest.raises(ParameterError) as exc_info:
            validated(greet, 1)
        data = exc_info.value.to_dict()
        assert data["error"] == "parameter"
        assert data["cause"] == "type"
        assert data["field"] == "name"
        assert data["function"] == callable_name(greet)


class StaticInference:
    """Collaborator returning fixed descriptors."""

    def infer_arguments(self, function):
        return parameters(text=stringp(regex=r"^\w+$"))

    def infer_return(self, function):
        return IntParameter()


class TestCustomInference:
    def test_collaborator_used(self):
        validator = CallValidator(inference=StaticInference())
        assert validator(lambda text: len(text), "abc") == 3

    def test_collaborator_constraint(self):
        validator = CallValidator(inference=StaticInference())
        with pytest.raises(ParameterError):
            validator(lambda text: len(text), "a b")


class TestValidatesDecorator:
    def test_bare(self):
        @validates
        def add(a: int, b: int = 0) -> int:
            return a + b

        assert add(1, b=2) == 3
        assert add.__name__ == "add"
        with pytest.raises(ParameterError):
            add("1")

    def test_with_options(self):
        @validates(settings=ValidationSettings(validate_return=False))
        def label(a: int) -> int:
            return f"#{a}"

        assert label(1) == "#1"
