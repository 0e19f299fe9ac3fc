from __future__ import annotations

import inspect
import logging
import reprlib
from functools import wraps
from typing import Any, Callable, Iterable, MutableMapping, Optional, Sequence, Set, TypeVar, cast

import numpy as np

from .model import Marker, PlacedMarker

F = TypeVar("F", bound=Callable[..., Any])

_repr = reprlib.Repr()
_repr.maxother = 120
_repr.maxlist = 8
_repr.maxtuple = 8
_repr.maxdict = 8


def _describe(value: Any, *, max_items: int = 4) -> str:
    if isinstance(value, Marker):
        return f"Marker({value.id!r}@{value.position:.1f} r={value.priority_rank})"
    if isinstance(value, PlacedMarker):
        return f"Placed({value.marker.id!r} x={value.x:.1f} y={value.y:.1f} d={value.stack_depth})"
    if isinstance(value, np.ndarray):
        if value.size == 0:
            return f"ndarray(shape={tuple(value.shape)})"
        return f"ndarray(shape={tuple(value.shape)}, min={float(value.min()):.4g}, max={float(value.max()):.4g})"
    if isinstance(value, (list, tuple)):
        shown = [_describe(item) for item in value[:max_items]]
        if len(value) > max_items:
            shown.append(f"... +{len(value) - max_items}")
        body = ", ".join(shown)
        return f"({body})" if isinstance(value, tuple) else f"[{body}]"
    return _repr.repr(value)


def _format_arguments(args: Sequence[Any], kwargs: MutableMapping[str, Any]) -> str:
    parts = [_describe(arg) for arg in args]
    parts.extend(f"{key}={_describe(value)}" for key, value in kwargs.items())
    return ", ".join(parts) if parts else "no-args"


def debug_log_call(
    logger: logging.Logger, *, name: Optional[str] = None, log_result: bool = True
) -> Callable[[F], F]:
    """Return a decorator that logs entry and exit of a call at DEBUG level."""

    def decorator(func: F) -> F:
        if getattr(func, "_debug_logging_wrapped", False):
            return func

        qualname = name or getattr(func, "__qualname__", func.__name__)

        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any):
            if not logger.isEnabledFor(logging.DEBUG):
                return func(*args, **kwargs)
            logger.debug("Entering %s (%s)", qualname, _format_arguments(args, kwargs))
            try:
                result = func(*args, **kwargs)
            except Exception:
                logger.exception("Exception in %s", qualname)
                raise
            if log_result:
                logger.debug("Exiting %s -> %s", qualname, _describe(result))
            else:
                logger.debug("Exiting %s", qualname)
            return result

        setattr(wrapper, "_debug_logging_wrapped", True)
        return cast(F, wrapper)

    return decorator


def apply_debug_logging(
    namespace: MutableMapping[str, Any],
    *,
    logger: Optional[logging.Logger] = None,
    skip: Optional[Iterable[str]] = None,
) -> None:
    """Wrap the public module-level functions of ``namespace`` with DEBUG logs."""

    module_name = namespace.get("__name__")
    logger = logger or logging.getLogger(module_name if isinstance(module_name, str) else __name__)
    skip_set: Set[str] = set(skip or [])

    for attr, value in list(namespace.items()):
        if attr in skip_set or attr.startswith("_"):
            continue
        if inspect.isfunction(value) and getattr(value, "__module__", None) == module_name:
            namespace[attr] = debug_log_call(logger, name=attr)(value)


__all__ = ["apply_debug_logging", "debug_log_call"]
