"""Uniform-stride subsampling that bounds the size of a result."""

from __future__ import annotations

from typing import Sequence, TypeVar

T = TypeVar("T")

DEFAULT_MAX_POINTS = 1000


def decimation_step(count: int, cap: int = DEFAULT_MAX_POINTS) -> int:
    if cap < 1:
        raise ValueError(f"Decimation cap must be positive, got {cap}")
    return max(1, count // cap)


def decimate(samples: Sequence[T], cap: int = DEFAULT_MAX_POINTS) -> list[T]:
    """
    Keep indices ``0, step, 2*step, ...`` with ``step = max(1, len // cap)``.

    Sequences no longer than ``cap`` are returned unchanged. The result can
    exceed ``cap`` (up to ``2 * cap - 1`` items) because the step is floored;
    a second pass is always a no-op.
    """

    items = list(samples)
    step = decimation_step(len(items), cap)
    if len(items) <= cap:
        return items
    return items[::step]
