"""DEBUG-level call tracing for kernel entry points."""

from __future__ import annotations

import inspect
import logging
import reprlib
from functools import wraps
from typing import Any, Callable, Iterable, MutableMapping, Optional, Set, TypeVar, cast

import numpy as np

F = TypeVar("F", bound=Callable[..., Any])

_repr = reprlib.Repr()
_repr.maxother = 120
_repr.maxlist = 6
_repr.maxtuple = 6

_WRAPPED_FLAG = "_geokernel_debug_wrapped"


def _summarize_array(value: np.ndarray) -> str:
    head = f"ndarray(shape={tuple(value.shape)}, dtype={value.dtype}"
    if value.size == 0:
        return head + ")"
    if value.size <= 8:
        return head + f", values={_repr.repr(value.tolist())})"
    try:
        return head + f", min={float(value.min()):.6g}, max={float(value.max()):.6g})"
    except (TypeError, ValueError):
        return head + ")"


def summarize(value: Any, *, max_length: int = 240) -> str:
    """Return a bounded, single-line description of ``value`` for log records."""

    if isinstance(value, np.ndarray):
        return _summarize_array(value)
    if isinstance(value, (list, tuple)) and len(value) > 6:
        inner = ", ".join(summarize(item, max_length=60) for item in value[:6])
        return f"[{inner}, ... ({len(value)} items)]"
    rendered = repr(value) if hasattr(type(value), "__dataclass_fields__") else _repr.repr(value)
    if len(rendered) > max_length:
        return rendered[:max_length] + "..."
    return rendered


def _describe_call(args: Iterable[Any], kwargs: MutableMapping[str, Any]) -> str:
    parts = [summarize(arg) for arg in args]
    parts.extend(f"{key}={summarize(val)}" for key, val in kwargs.items())
    return ", ".join(parts) if parts else "no-args"


def debug_log_call(
    logger: logging.Logger, *, name: Optional[str] = None, log_result: bool = True
) -> Callable[[F], F]:
    """Return a decorator that logs entry, exit and failures of a callable at DEBUG."""

    def decorator(func: F) -> F:
        if getattr(func, _WRAPPED_FLAG, False):
            return func

        label = name or getattr(func, "__qualname__", getattr(func, "__name__", "<callable>"))

        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any):
            tracing = logger.isEnabledFor(logging.DEBUG)
            if tracing:
                logger.debug("-> %s(%s)", label, _describe_call(args, kwargs))
            try:
                result = func(*args, **kwargs)
            except Exception as exc:
                if tracing:
                    logger.debug("!! %s raised %s: %s", label, type(exc).__name__, exc)
                raise
            if tracing:
                if log_result:
                    logger.debug("<- %s = %s", label, summarize(result))
                else:
                    logger.debug("<- %s", label)
            return result

        setattr(wrapper, _WRAPPED_FLAG, True)
        return cast(F, wrapper)

    return decorator


def _wrap_class(cls: type, logger: logging.Logger, skip: Set[str]) -> None:
    for attr_name, attr_value in list(cls.__dict__.items()):
        if attr_name.startswith("_"):
            continue
        qualified = f"{cls.__name__}.{attr_name}"
        if attr_name in skip or qualified in skip:
            continue
        if isinstance(attr_value, (staticmethod, classmethod)):
            func = attr_value.__func__
            if getattr(func, "__module__", None) != cls.__module__:
                continue
            wrapped = debug_log_call(logger, name=qualified)(func)
            setattr(cls, attr_name, type(attr_value)(wrapped))
        elif inspect.isfunction(attr_value) and attr_value.__module__ == cls.__module__:
            setattr(cls, attr_name, debug_log_call(logger, name=qualified)(attr_value))


def apply_debug_logging(
    namespace: MutableMapping[str, Any],
    *,
    logger: Optional[logging.Logger] = None,
    skip: Optional[Iterable[str]] = None,
    wrap_methods: bool = True,
) -> None:
    """Wrap the public functions (and optionally methods) defined in ``namespace``."""

    module_name = namespace.get("__name__")
    logger = logger or logging.getLogger(module_name if isinstance(module_name, str) else __name__)
    skip_set: Set[str] = set(skip or [])

    for attr_name, value in list(namespace.items()):
        if attr_name.startswith("_") or attr_name in skip_set:
            continue
        if inspect.isfunction(value) and value.__module__ == module_name:
            namespace[attr_name] = debug_log_call(logger, name=attr_name)(value)
        elif wrap_methods and inspect.isclass(value) and value.__module__ == module_name:
            _wrap_class(value, logger, skip_set)


__all__ = ["debug_log_call", "apply_debug_logging", "summarize"]
