"""Validation and memory-layout helpers for 1-D strided NumPy views.

Every public operation in :mod:`framedsp.signal` accepts plain 1-D arrays.
Arrays produced by slicing (``x[::3]``) are non-contiguous views over a
shared buffer; functions that write into a caller-supplied destination write
through such views, using :func:`ensure_contiguous` wherever the FFT backend
needs unit-stride memory.
"""

from __future__ import annotations

from contextlib import contextmanager
import operator
from typing import Any, Iterator

import numpy as np

from ..errors import InvalidArgumentError, InvalidLengthError


def is_power_of_two(value: int) -> bool:
    return value > 0 and (value & (value - 1)) == 0


def as_integer(value: Any, *, name: str) -> int:
    """Return ``value`` as a Python int, rejecting floats and other non-integers."""
    try:
        return operator.index(value)
    except TypeError:
        raise InvalidArgumentError(
            f"{name} must be an integer, got {value!r} ({type(value).__name__})"
        ) from None


def as_real_vector(value: Any, *, name: str) -> np.ndarray:
    """Return ``value`` as a 1-D float64 array, without copying when possible."""
    arr = np.asarray(value)
    if arr.ndim != 1:
        raise InvalidArgumentError(f"{name} must be 1-D, got ndim={arr.ndim}")
    if np.iscomplexobj(arr):
        raise InvalidArgumentError(f"{name} must be real-valued, got dtype={arr.dtype}")
    return arr.astype(np.float64, copy=False)


def as_complex_vector(value: Any, *, name: str) -> np.ndarray:
    """Return ``value`` as a 1-D complex128 array, without copying when possible."""
    arr = np.asarray(value)
    if arr.ndim != 1:
        raise InvalidArgumentError(f"{name} must be 1-D, got ndim={arr.ndim}")
    return arr.astype(np.complex128, copy=False)


def check_destination(value: Any, dtype: type, *, name: str) -> np.ndarray:
    """Validate a caller-owned output array.

    Destinations are written in place, so no dtype conversion is attempted.
    """
    if not isinstance(value, np.ndarray):
        raise InvalidArgumentError(
            f"{name} must be a numpy.ndarray, got {type(value).__name__}"
        )
    if value.ndim != 1:
        raise InvalidArgumentError(f"{name} must be 1-D, got ndim={value.ndim}")
    if value.dtype != np.dtype(dtype):
        raise InvalidArgumentError(
            f"{name} must have dtype {np.dtype(dtype)}, got {value.dtype}"
        )
    if not value.flags.writeable:
        raise InvalidArgumentError(f"{name} must be writeable")
    return value


def require_non_empty(arr: np.ndarray, *, name: str) -> None:
    if arr.shape[0] == 0:
        raise InvalidArgumentError(f"{name} must not be empty")


def require_same_length(
    first: np.ndarray,
    second: np.ndarray,
    *,
    names: tuple[str, str],
) -> None:
    if first.shape[0] != second.shape[0]:
        raise InvalidArgumentError(
            f"{names[0]} and {names[1]} must have the same length, "
            f"got {first.shape[0]} and {second.shape[0]}"
        )


def require_transform_length(length: int) -> None:
    """Reject lengths the radix-2 transform cannot handle."""
    if length < 1:
        raise InvalidLengthError(
            "The FFT length must be greater than or equal to one."
        )
    if not is_power_of_two(length):
        raise InvalidLengthError(
            f"The FFT length must be a power of two, but was {length}."
        )


@contextmanager
def ensure_contiguous(view: np.ndarray, *, copy: bool) -> Iterator[np.ndarray]:
    """Yield a unit-stride buffer aliasing ``view``.

    Contiguous views are yielded as-is. Otherwise a scratch buffer is yielded
    (pre-filled with the view's contents when ``copy`` is ``True``) and its
    contents are written back into ``view`` when the block exits normally.
    """
    if view.flags.c_contiguous:
        yield view
        return

    scratch = np.ascontiguousarray(view) if copy else np.empty_like(view, order="C")
    yield scratch
    view[...] = scratch
