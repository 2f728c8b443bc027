"""Rational-ratio resampling with Lanczos (windowed-sinc) interpolation."""

from __future__ import annotations

import math
from typing import Any

import numpy as np

from ..errors import InvalidArgumentError
from .views import (
    as_integer,
    as_real_vector,
    check_destination,
    ensure_contiguous,
    require_non_empty,
)


def sinc(x: np.ndarray) -> np.ndarray:
    """Unnormalized sinc ``sin(x) / x`` with ``sinc(0) = 1``."""
    x = np.asarray(x, dtype=np.float64)
    out = np.ones_like(x)
    nonzero = np.abs(x) >= 1.0e-15
    out[nonzero] = np.sin(x[nonzero]) / x[nonzero]
    return out


def _lanczos_sum(source: np.ndarray, position: float, scale: float, a: int) -> float:
    """Interpolate ``source`` at ``position`` with a kernel stretched by ``scale``."""
    left = max(math.floor(position - a * scale) + 1, 0)
    right = min(math.ceil(position + a * scale), source.shape[0])
    if right <= left:
        return 0.0
    offsets = np.arange(left, right, dtype=np.float64) - position
    u = math.pi / scale
    v = u / a
    return float(np.dot(source[left:right], sinc(u * offsets) * sinc(v * offsets)))


def _resample_core(source: np.ndarray, destination: np.ndarray, p: int, q: int, a: int) -> None:
    if p == q:
        size = min(source.shape[0], destination.shape[0])
        destination[:size] = source[:size]
        destination[size:] = 0.0
        return

    step = q / p
    if p > q:
        for index in range(destination.shape[0]):
            destination[index] = _lanczos_sum(source, index * step, 1.0, a)
    else:
        # Stretching the kernel by q/p low-passes below the new Nyquist rate.
        gain = p / q
        for index in range(destination.shape[0]):
            destination[index] = gain * _lanczos_sum(source, index * step, step, a)


def resampled_length(source_length: int, p: int, q: int) -> int:
    return -(-source_length * p // q)


def resample(
    source: Any,
    p: int,
    q: int,
    a: int = 10,
    destination: np.ndarray | None = None,
) -> np.ndarray:
    """Change the sampling rate of ``source`` by ``p / q``.

    Parameters
    ----------
    source:
        Real 1-D signal.
    p, q:
        Upsampling and downsampling factors, both at least one.
    a:
        Lanczos kernel half-width in input samples; larger is slower and
        more accurate.
    destination:
        Optional float64 array receiving the output. Defaults to a new array
        of ``ceil(len(source) * p / q)`` samples.
    """
    src = as_real_vector(source, name="source")
    require_non_empty(src, name="source")
    p = as_integer(p, name="p")
    q = as_integer(q, name="q")
    a = as_integer(a, name="a")
    if p < 1:
        raise InvalidArgumentError(
            f"The upsampling factor must be greater than or equal to one, got {p}."
        )
    if q < 1:
        raise InvalidArgumentError(
            f"The downsampling factor must be greater than or equal to one, got {q}."
        )
    if a < 1:
        raise InvalidArgumentError(
            f"The Lanczos quality factor must be greater than or equal to one, got {a}."
        )
    if destination is None:
        destination = np.zeros(resampled_length(src.shape[0], p, q), dtype=np.float64)
    else:
        check_destination(destination, np.float64, name="destination")
        require_non_empty(destination, name="destination")

    contiguous_source = np.ascontiguousarray(src)
    with ensure_contiguous(destination, copy=False) as out:
        _resample_core(contiguous_source, out, p, q, a)
    return destination
