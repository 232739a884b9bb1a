"""
Validated calls.

``validated(function, *args, **kwargs)`` binds the arguments against the
function's inferred argument collection, calls it, then validates the
returned value against its inferred return descriptor:

- any argument failure is raised as ``ParameterError`` (with the parameter name)
- any return failure is raised as ``ReturnError``
- inference failures propagate untouched

Example:
    >>> from typing import Annotated
    >>> from typedparams import intp
    >>> def double(value: Annotated[int, intp(minimum=0)]) -> int:
    ...     return value * 2
    >>> validated(double, 21)
    42

Calling ``validated(double, -1)`` raises ``ParameterError`` with
``parameter == "value"`` and a ``ConstraintViolationError`` as its cause.
"""

import functools
import logging
from typing import Any, Callable, Dict, Optional, Sequence

from .arguments import Arguments
from .errors import ArityMismatchError, ContractError, ParameterError, ReturnError, callable_name
from .inference import DescriptorInference, SignatureInference
from .parameters import Parameters
from .settings import DEFAULT_SETTINGS, ValidationSettings
from .validators import bind, validate_value

logger = logging.getLogger(__name__)


class CallValidator:
    """
    Validate calls against inferred contracts.

    Args:
        inference: Collaborator providing argument and return descriptors
        settings: Binder and return-check settings
    """

    def __init__(
        self,
        inference: Optional[DescriptorInference] = None,
        settings: Optional[ValidationSettings] = None,
    ):
        self.inference = inference if inference is not None else SignatureInference()
        self.settings = settings if settings is not None else DEFAULT_SETTINGS

    def __call__(self, function: Callable, *args: Any, **kwargs: Any) -> Any:
        parameters = self.inference.infer_arguments(function)
        returns = self.inference.infer_return(function)
        arguments = self.bind_arguments(function, parameters, args, kwargs)
        result = function(**arguments)
        if not self.settings.validate_return:
            return result
        try:
            return validate_value(returns, result, self.settings)
        except ContractError as e:
            logger.debug(f"Return value of {callable_name(function)} failed validation: {e}")
            raise ReturnError(function, e) from e

    def bind_arguments(
        self,
        function: Callable,
        parameters: Parameters,
        args: Sequence[Any],
        kwargs: Dict[str, Any],
    ) -> Arguments:
        """
        Bind positional and keyword arguments against ``parameters``.

        Raises:
            ParameterError: Wrapping the binder failure
        """
        try:
            values = _named_values(parameters, args, kwargs)
            return bind(parameters, values, self.settings)
        except ContractError as e:
            parameter = str(e.path[0]) if e.path else None
            logger.debug(f"Arguments of {callable_name(function)} failed validation: {e}")
            raise ParameterError(function, e, parameter=parameter) from e


def _named_values(
    parameters: Parameters,
    args: Sequence[Any],
    kwargs: Dict[str, Any],
) -> Dict[str, Any]:
    names = list(parameters)
    if len(args) > len(names):
        raise ArityMismatchError(
            f"Expected at most {len(names)} positional argument(s), {len(args)} provided"
        )
    values = dict(zip(names, args))
    for name, value in kwargs.items():
        if name in values:
            raise ArityMismatchError(
                f"Argument `{name}` provided both positionally and by keyword",
                path=(name,),
            )
        values[name] = value
    return values


validated = CallValidator()


def validates(
    function: Optional[Callable] = None,
    *,
    inference: Optional[DescriptorInference] = None,
    settings: Optional[ValidationSettings] = None,
):
    """
    Decorator validating every call of ``function``.

    Usable bare (``@validates``) or with options
    (``@validates(settings=...)``).
    """
    validator = (
        validated
        if inference is None and settings is None
        else CallValidator(inference, settings)
    )

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            return validator(func, *args, **kwargs)

        return wrapper

    if function is None:
        return decorator
    return decorator(function)
