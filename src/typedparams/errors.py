"""
Error types for parameter validation.

Every failure raised by the library derives from ``ContractError`` and from
the closest builtin exception, so hosts can catch either:

- TypeMismatchError: runtime kind differs from the expected kind
- ConstraintViolationError: kind matches but a constraint (regex, bounds,
  class, nested shape) fails
- MissingRequiredError: a required key is absent
- ArityMismatchError / UnknownKeyError: an undeclared key or extra argument
- KeyNotFoundError: a requested name is absent from a collection
- IncompatibleError: two descriptors are not structurally equivalent
- ParameterError / ReturnError: call-scoped wrappers around the above
- InferenceError: a callable signature cannot be described
- SchemaDeclarationError: a declaration document is malformed

Validation errors are fail-fast: the first one raised aborts the operation.
"""

from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple


class ContractError(Exception):
    """
    Base class for all validation errors.

    Attributes:
        message: Human-readable error message (without the path prefix)
        path: Keys leading to the offending value, outermost first
        value: The value that failed validation (optional)
        expected: Expected type tag or kind (optional)
        constraint: The constraint that was violated (optional)
    """

    error = "contract"

    def __init__(
        self,
        message: str,
        path: Iterable[Any] = (),
        value: Optional[Any] = None,
        expected: Optional[str] = None,
        constraint: Optional[Any] = None,
    ):
        self.message = message
        self.path: Tuple[Any, ...] = tuple(path)
        self.value = value
        self.expected = expected
        self.constraint = constraint
        super().__init__(self._render())

    @property
    def field(self) -> str:
        """Dot-separated path to the offending value (e.g. "nest.nestOne")."""
        return ".".join(str(key) for key in self.path)

    def _render(self) -> str:
        if self.path:
            return f"[{self.field}]: {self.message}"
        return self.message

    def __str__(self) -> str:
        return self._render()

    def at(self, *keys: Any) -> "ContractError":
        """
        Return a copy of this error located under ``keys``.

        The copy keeps the error class, so the error kind survives every
        level of nesting.
        """
        located = self.__class__.__new__(self.__class__)
        located.__dict__.update(self.__dict__)
        located.path = tuple(keys) + self.path
        Exception.__init__(located, located._render())
        return located

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        result: Dict[str, Any] = {
            "field": self.field,
            "error": self.error,
            "message": self.message,
        }
        if self.value is not None:
            result["value"] = self.value
        if self.constraint is not None:
            result["constraint"] = self.constraint
        if self.expected is not None:
            result["expected"] = self.expected
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(field={self.field!r}, message={self.message!r})"


class TypeMismatchError(ContractError, TypeError):
    """Runtime kind of a value differs from the expected kind."""

    error = "type"


class ConstraintViolationError(ContractError, ValueError):
    """Value has the right kind but violates a constraint."""

    error = "constraint"


class MissingRequiredError(ContractError, TypeError):
    """A required key is absent from the input."""

    error = "required"


class ArityMismatchError(ContractError, TypeError):
    """More values were provided than the collection declares."""

    error = "arity"


class UnknownKeyError(ArityMismatchError):
    """An input key is not declared in the collection."""

    error = "unknown"


class KeyNotFoundError(ContractError, KeyError):
    """A requested name is absent from the source collection."""

    error = "key_not_found"


class IncompatibleError(ContractError, ValueError):
    """Two descriptors or collections are not structurally equivalent."""

    error = "incompatible"


class InferenceError(ContractError, TypeError):
    """A callable signature cannot be turned into descriptors."""

    error = "inference"


class MissingAnnotationError(InferenceError):
    """A parameter has no type annotation."""


class UnsupportedTypeError(InferenceError):
    """A parameter or return annotation has an unsupported shape."""


class SchemaDeclarationError(ContractError, ValueError):
    """
    A declaration document does not match the declaration schema.

    Attributes:
        errors: Every problem found in the document
    """

    error = "declaration"

    def __init__(self, errors: List[str], path: Iterable[Any] = ()):
        self.errors = list(errors)
        super().__init__(
            f"Invalid declaration: {len(self.errors)} error(s): " + "; ".join(self.errors),
            path=path,
        )


def callable_name(function: Callable) -> str:
    """Return a readable identity for a callable (module-qualified name)."""
    qualname = getattr(function, "__qualname__", None) or getattr(
        function, "__name__", None
    )
    if qualname is None:
        return repr(function)
    module = getattr(function, "__module__", None)
    if module and module != "builtins":
        return f"{module}.{qualname}"
    return qualname


class CallError(ContractError):
    """
    Base class for call-scoped errors raised by ``validated``.

    Attributes:
        function: The callable being validated
        cause: The underlying validation error
        parameter: Offending parameter name (arguments only)
    """

    def __init__(
        self,
        function: Callable,
        cause: ContractError,
        parameter: Optional[str] = None,
    ):
        self.function = function
        self.cause = cause
        self.parameter = parameter
        super().__init__(
            self._call_message(),
            value=cause.value,
            expected=cause.expected,
            constraint=cause.constraint,
        )

    @property
    def kind(self) -> str:
        """Class name of the underlying error."""
        return self.cause.__class__.__name__

    def _call_message(self) -> str:
        return f"`{callable_name(self.function)}` {self.kind} -> {self.cause}"

    def to_dict(self) -> Dict[str, Any]:
        result = self.cause.to_dict()
        result["error"] = self.error
        result["cause"] = self.cause.error
        result["function"] = callable_name(self.function)
        result["message"] = self.message
        return result


class ParameterError(CallError):
    """An argument failed validation before the call."""

    error = "parameter"


class ReturnError(CallError):
    """The returned value failed validation after the call."""

    error = "return"
