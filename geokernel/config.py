"""Tolerance configuration shared by every tolerant comparison in the kernel.

The active config lives in a :class:`contextvars.ContextVar`, so an override
made in one thread or task never leaks into queries running in another.
"""

from __future__ import annotations

import copy
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, replace
from typing import Iterator


@dataclass
class KernelConfig:
    """Absolute tolerances used by predicates and quotient-type equality."""

    abs_tol: float = 1e-9
    angle_tol: float = 1e-9

    def __post_init__(self) -> None:
        if self.abs_tol < 0.0 or self.angle_tol < 0.0:
            raise ValueError("tolerances must be non-negative")


_KERNEL_CONFIG: ContextVar[KernelConfig] = ContextVar("geokernel_config", default=KernelConfig())


def get_kernel_config() -> KernelConfig:
    return copy.deepcopy(_KERNEL_CONFIG.get())


def set_kernel_config(config: KernelConfig) -> None:
    """Install ``config`` for the current thread or task."""
    _KERNEL_CONFIG.set(copy.deepcopy(config))


def abs_tol() -> float:
    return _KERNEL_CONFIG.get().abs_tol


def angle_tol() -> float:
    return _KERNEL_CONFIG.get().angle_tol


@contextmanager
def kernel_tolerance(**overrides: float) -> Iterator[KernelConfig]:
    """Temporarily install a config with ``overrides`` applied in the current context."""

    token = _KERNEL_CONFIG.set(replace(_KERNEL_CONFIG.get(), **overrides))
    try:
        yield get_kernel_config()
    finally:
        _KERNEL_CONFIG.reset(token)


__all__ = [
    "KernelConfig",
    "get_kernel_config",
    "set_kernel_config",
    "kernel_tolerance",
    "abs_tol",
    "angle_tol",
]
