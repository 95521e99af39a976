"""Callback validation and arity adaptation.

Collection callbacks are offered ``(value, key, collection)`` but many callers
pass one-argument lambdas. ``adapt`` wraps a callback so it only receives as
many leading positional arguments as it declares.
"""

import inspect
from collections.abc import Callable
from typing import Any

from kvcollections.core.exceptions import InvalidArgumentError


def require_callable(fn: Any, operation: str) -> Callable[..., Any]:
    """Return ``fn`` if it is callable, else raise InvalidArgumentError."""
    if not callable(fn):
        raise InvalidArgumentError(f"{operation}() requires a callable, got {fn!r}")
    return fn


def positional_arity(fn: Callable[..., Any]) -> int | None:
    """Count the positional parameters ``fn`` accepts.

    Returns:
        None when the callback takes ``*args``, otherwise the number of
        positional parameters. Callables without an introspectable signature
        (some builtins) are treated as taking one argument.
    """
    try:
        signature = inspect.signature(fn)
    except (TypeError, ValueError):
        return 1

    count = 0
    for param in signature.parameters.values():
        if param.kind is inspect.Parameter.VAR_POSITIONAL:
            return None
        if param.kind in (
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
        ):
            count += 1
    return count


def adapt(fn: Any, operation: str) -> Callable[..., Any]:
    """Validate ``fn`` and return a wrapper that trims surplus arguments."""
    fn = require_callable(fn, operation)
    arity = positional_arity(fn)
    if arity is None:
        return fn

    def call(*args: Any) -> Any:
        return fn(*args[:arity])

    return call
