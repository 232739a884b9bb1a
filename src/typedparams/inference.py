"""
Descriptor inference from callable signatures.

``validated`` consumes a ``DescriptorInference`` collaborator that turns a
callable into an argument collection and a return descriptor. The default
``SignatureInference`` reads type hints:

- ``None`` -> null, ``bool`` / ``int`` / ``float`` / ``str`` -> scalars
- ``list[X]``, ``tuple[X, ...]``, ``Sequence[X]`` -> iterable of X
- ``dict[K, V]``, ``Mapping[K, V]`` -> iterable of V keyed by K
- any other class -> object
- ``Annotated[T, descriptor]`` -> the descriptor in the metadata

Parameter defaults become descriptor defaults. Missing annotations, unions,
bare containers, variadic and positional-only parameters are rejected.

Example:
    >>> from typing import Annotated
    >>> from typedparams import intp
    >>> def scale(base: Annotated[int, intp(minimum=1)], times: int = 1) -> int:
    ...     return base * times
    >>> sorted(SignatureInference().infer_arguments(scale).optional_keys())
    ['times']
"""

import collections.abc
import inspect
import logging
import threading
import types
import typing
import weakref
from typing import Any, Callable, Protocol, Tuple

from .descriptors import (
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
    ContractError,
    InferenceError,
    KeyNotFoundError,
    MissingAnnotationError,
    UnsupportedTypeError,
    callable_name,
)
from .parameters import Parameters

logger = logging.getLogger(__name__)


class DescriptorInference(Protocol):
    """Collaborator contract used by ``validated``."""

    def infer_arguments(self, function: Callable) -> Parameters:
        ...

    def infer_return(self, function: Callable) -> Parameter:
        ...


_SCALARS = {
    bool: BoolParameter,
    int: IntParameter,
    float: FloatParameter,
    str: StringParameter,
}

_SEQUENCES = (list, tuple, collections.abc.Sequence, collections.abc.MutableSequence)
_MAPPINGS = (dict, collections.abc.Mapping, collections.abc.MutableMapping)
_UNION_TYPES = tuple(
    t for t in (typing.Union, getattr(types, "UnionType", None)) if t is not None
)

_UNSUPPORTED_KINDS = {
    inspect.Parameter.VAR_POSITIONAL: "variadic",
    inspect.Parameter.VAR_KEYWORD: "variadic keyword",
    inspect.Parameter.POSITIONAL_ONLY: "positional-only",
}


class SignatureInference:
    """
    Default ``DescriptorInference`` based on ``inspect`` and ``typing``.

    Results are cached per callable (weakly, when the callable allows it).
    """

    def __init__(self):
        self._cache: "weakref.WeakKeyDictionary[Any, Tuple[Parameters, Parameter]]" = (
            weakref.WeakKeyDictionary()
        )
        self._lock = threading.Lock()

    def infer_arguments(self, function: Callable) -> Parameters:
        return self._contract(function)[0]

    def infer_return(self, function: Callable) -> Parameter:
        return self._contract(function)[1]

    def parameter(self, function: Callable, name: str) -> Parameter:
        """
        Return the descriptor of one parameter of ``function``.

        Raises:
            KeyNotFoundError: If ``function`` has no parameter ``name``
        """
        arguments = self.infer_arguments(function)
        if name not in arguments:
            raise KeyNotFoundError(f"Parameter `{name}` doesn't exist", path=(name,))
        return arguments[name]

    def _contract(self, function: Callable) -> Tuple[Parameters, Parameter]:
        try:
            with self._lock:
                cached = self._cache.get(function)
        except TypeError:
            # Not weak-referenceable: infer on every call
            return self._infer(function)
        if cached is None:
            cached = self._infer(function)
            with self._lock:
                self._cache[function] = cached
        return cached

    def _infer(self, function: Callable) -> Tuple[Parameters, Parameter]:
        name = callable_name(function)
        try:
            signature = inspect.signature(function)
        except (TypeError, ValueError) as e:
            raise UnsupportedTypeError(f"Cannot read the signature of `{name}`: {e}") from e
        hints = _type_hints(function, name)

        arguments = Parameters()
        for parameter_name, parameter in signature.parameters.items():
            if parameter.kind in _UNSUPPORTED_KINDS:
                raise UnsupportedTypeError(
                    f"Parameter `{parameter_name}` is {_UNSUPPORTED_KINDS[parameter.kind]}, which is not supported",
                    path=(parameter_name,),
                )
            if parameter_name not in hints:
                raise MissingAnnotationError(
                    f"Missing type declaration for parameter `{parameter_name}`",
                    path=(parameter_name,),
                )
            descriptor = self.descriptor_for(hints[parameter_name], parameter_name)
            if parameter.default is not inspect.Parameter.empty:
                try:
                    descriptor = descriptor.with_default(parameter.default)
                except ContractError as e:
                    raise InferenceError(
                        f"Default value of parameter `{parameter_name}` is invalid: {e}",
                        path=(parameter_name,),
                        value=parameter.default,
                    ) from e
            arguments = arguments.with_required(parameter_name, descriptor)

        if "return" not in hints:
            raise MissingAnnotationError(f"Missing return type declaration for `{name}`")
        returns = self.descriptor_for(hints["return"], "return")

        logger.debug(f"Inferred contract for {name}: arguments={list(arguments)}")
        return arguments, returns

    def descriptor_for(self, annotation: Any, name: str) -> Parameter:
        """
        Map a type hint to a descriptor.

        Raises:
            UnsupportedTypeError: For unions and shapes without a descriptor
        """
        origin = typing.get_origin(annotation)
        args = typing.get_args(annotation)

        if origin is typing.Annotated:
            for metadata in annotation.__metadata__:
                if isinstance(metadata, Parameter):
                    return metadata
            return self.descriptor_for(args[0], name)

        if annotation is None or annotation is type(None):
            return NullParameter()

        if origin in _UNION_TYPES:
            raise UnsupportedTypeError(
                f"Parameter `{name}` of type union is not supported",
                path=(name,),
            )

        if annotation in _SCALARS:
            return _SCALARS[annotation]()

        if origin in _SEQUENCES and args:
            if origin is tuple and not (len(args) == 2 and args[1] is Ellipsis):
                raise UnsupportedTypeError(
                    f"Parameter `{name}` of type fixed-length tuple is not supported",
                    path=(name,),
                )
            return IterableParameter(value=self.descriptor_for(args[0], name))

        if origin in _MAPPINGS and args:
            return IterableParameter(
                key=self.descriptor_for(args[0], name),
                value=self.descriptor_for(args[1], name),
            )

        if origin is not None or annotation in _SEQUENCES or annotation in _MAPPINGS:
            raise UnsupportedTypeError(
                f"Parameter `{name}` of type `{annotation}` is not supported, declare its members",
                path=(name,),
            )

        if isinstance(annotation, type):
            return ObjectParameter(class_name=annotation)

        raise UnsupportedTypeError(
            f"Parameter `{name}` of type `{annotation}` is not supported",
            path=(name,),
        )


def _type_hints(function: Callable, name: str) -> dict:
    target = function
    if not (inspect.isfunction(function) or inspect.ismethod(function)):
        target = getattr(type(function), "__call__", function)
    try:
        return typing.get_type_hints(target, include_extras=True)
    except Exception as e:
        raise UnsupportedTypeError(f"Cannot resolve type hints of `{name}`: {e}") from e
