"""
Tests for settings models and error reporting.
"""

import pytest
from pydantic import ValidationError

from typedparams import (
    ArityMismatchError,
    ConstraintViolationError,
    ContractError,
    IncompatibleError,
    KeyNotFoundError,
    KeyOrder,
    MissingRequiredError,
    SchemaDeclarationError,
    TypeMismatchError,
    UnknownKeyError,
    ValidationSettings,
    bind,
    parameters,
    parse_settings,
    stringp,
)
from typedparams.settings import DEFAULT_SETTINGS


class TestSettings:
    def test_defaults(self):
        settings = parse_settings()
        assert settings is DEFAULT_SETTINGS
        assert settings.key_order == KeyOrder.INPUT
        assert settings.validate_return is True

    def test_parse(self):
        settings = parse_settings({"key_order": "declared", "validate_return": False})
        assert settings.key_order == KeyOrder.DECLARED
        assert settings.validate_return is False

    def test_unknown_key_rejected(self):
        with pytest.raises(ValidationError):
            parse_settings({"strict": True})

    def test_invalid_value_rejected(self):
        with pytest.raises(ValidationError):
            parse_settings({"key_order": "random"})

    def test_frozen(self):
        with pytest.raises(ValidationError):
            ValidationSettings().key_order = KeyOrder.DECLARED


class TestErrorHierarchy:
    """Errors are catchable as the closest builtin exception."""

    @pytest.mark.parametrize(
        "error_class, builtin, code",
        [
            (TypeMismatchError, TypeError, "type"),
            (ConstraintViolationError, ValueError, "constraint"),
            (MissingRequiredError, TypeError, "required"),
            (ArityMismatchError, TypeError, "arity"),
            (UnknownKeyError, ArityMismatchError, "unknown"),
            (KeyNotFoundError, KeyError, "key_not_found"),
            (IncompatibleError, ValueError, "incompatible"),
        ],
    )
    def test_bases(self, error_class, builtin, code):
        error = error_class("boom")
        assert isinstance(error, ContractError)
        assert isinstance(error, builtin)
        assert error.error == code

    def test_key_not_found_str_not_quoted(self):
        assert str(KeyNotFoundError("Key `a` not found")) == "Key `a` not found"


class TestErrorPath:
    def test_at_prepends_and_keeps_class(self):
        error = ConstraintViolationError("bad", path=("leaf",), value=3)
        located = error.at("root", 0)
        assert type(located) is ConstraintViolationError
        assert located.path == ("root", 0, "leaf")
        assert located.field == "root.0.leaf"
        assert str(located) == "[root.0.leaf]: bad"
        assert error.path == ("leaf",)

    def test_at_keeps_declaration_errors(self):
        error = SchemaDeclarationError(["first", "second"]).at("x")
        assert error.errors == ["first", "second"]
        assert error.field == "x"


class TestToDict:
    def test_type_mismatch(self):
        with pytest.raises(TypeMismatchError) as exc_info:
            bind(parameters(OK=stringp()), {"OK": 123})
        assert exc_info.value.to_dict() == {
            "field": "OK",
            "error": "type",
            "message": "Argument value provided is not of type string",
            "value": 123,
            "expected": "string",
        }

    def test_constraint(self):
        with pytest.raises(ConstraintViolationError) as exc_info:
            bind(parameters(slug=stringp(r"^[a-z]+$")), {"slug": "ABC"})
        data = exc_info.value.to_dict()
        assert data["field"] == "slug"
        assert data["error"] == "constraint"
        assert data["constraint"] == "^[a-z]+$"
        assert "expected" not in data

    def test_repr(self):
        error = MissingRequiredError("Missing required argument `a`", path=("a",))
        assert repr(error) == (
            "MissingRequiredError(field='a', message='Missing required argument `a`')"
        )
