"""Frame extraction and overlap-add over implicitly zero-padded signals.

A signal of length ``n`` is treated as zero outside ``[0, n)``, so frames may
start at negative offsets or run past the end of the signal.
"""

from __future__ import annotations

from typing import Any

import numpy as np

from ..errors import InvalidArgumentError
from .views import (
    as_complex_vector,
    as_real_vector,
    check_destination,
    require_same_length,
)


def _overlap(start: int, length: int, count: int) -> tuple[int, int, int]:
    """Intersect ``[start, start + length)`` with ``[0, count)``.

    Returns ``(outer_start, inner_start, size)`` where ``outer_start`` indexes
    the long sequence and ``inner_start`` indexes the frame.
    """
    outer = start
    inner = 0
    size = length
    if outer < 0:
        inner = -outer
        size -= inner
        outer = 0
    if outer + size > count:
        size = count - outer
    return outer, inner, max(size, 0)


def _copy_frame(
    source: np.ndarray,
    start: int,
    window: np.ndarray | None,
    destination: np.ndarray,
) -> None:
    length = destination.shape[0]
    src_start, dst_start, size = _overlap(start, length, source.shape[0])
    if size < length:
        destination[...] = 0
    if size > 0:
        chunk = source[src_start : src_start + size]
        if window is not None:
            chunk = chunk * window[dst_start : dst_start + size]
        destination[dst_start : dst_start + size] = chunk


def _accumulate(
    target: np.ndarray,
    start: int,
    window: np.ndarray | None,
    frame: np.ndarray,
) -> None:
    tgt_start, frm_start, size = _overlap(start, frame.shape[0], target.shape[0])
    if size == 0:
        return
    chunk = frame[frm_start : frm_start + size].real
    if window is not None:
        chunk = chunk * window[frm_start : frm_start + size]
    target[tgt_start : tgt_start + size] += chunk


def _resolve_destination(length_or_destination: Any, dtype: type) -> np.ndarray:
    if isinstance(length_or_destination, (int, np.integer)):
        length = int(length_or_destination)
        if length <= 0:
            raise InvalidArgumentError(f"frame length must be positive, got {length}")
        return np.zeros(length, dtype=dtype)
    destination = check_destination(length_or_destination, dtype, name="destination")
    if destination.shape[0] == 0:
        raise InvalidArgumentError("destination must not be empty")
    return destination


def get_frame(source: Any, start: int, length_or_destination: int | np.ndarray) -> np.ndarray:
    """Copy a frame of ``source`` beginning at ``start``.

    Parameters
    ----------
    source:
        Real 1-D signal.
    start:
        Index of the first frame sample in ``source``; may be negative.
    length_or_destination:
        Either the frame length (a new array is returned) or a float64 array
        that receives the frame.
    """
    src = as_real_vector(source, name="source")
    destination = _resolve_destination(length_or_destination, np.float64)
    _copy_frame(src, int(start), None, destination)
    return destination


def get_windowed_frame(
    source: Any,
    start: int,
    window: Any,
    destination: np.ndarray | None = None,
) -> np.ndarray:
    """Copy a frame of ``source`` multiplied sample-wise by ``window``."""
    src = as_real_vector(source, name="source")
    win = as_real_vector(window, name="window")
    dst = _resolve_destination(
        win.shape[0] if destination is None else destination, np.float64
    )
    require_same_length(win, dst, names=("window", "destination"))
    _copy_frame(src, int(start), win, dst)
    return dst


def get_frame_as_complex(
    source: Any, start: int, length_or_destination: int | np.ndarray
) -> np.ndarray:
    """Like :func:`get_frame`, storing samples in the real part of a complex frame."""
    src = as_real_vector(source, name="source")
    destination = _resolve_destination(length_or_destination, np.complex128)
    _copy_frame(src, int(start), None, destination)
    return destination


def get_windowed_frame_as_complex(
    source: Any,
    start: int,
    window: Any,
    destination: np.ndarray | None = None,
) -> np.ndarray:
    """Like :func:`get_windowed_frame`, producing a complex frame."""
    src = as_real_vector(source, name="source")
    win = as_real_vector(window, name="window")
    dst = _resolve_destination(
        win.shape[0] if destination is None else destination, np.complex128
    )
    require_same_length(win, dst, names=("window", "destination"))
    _copy_frame(src, int(start), win, dst)
    return dst


def _as_frame(frame: Any) -> np.ndarray:
    if np.iscomplexobj(frame):
        return as_complex_vector(frame, name="frame")
    return as_real_vector(frame, name="frame")


def overlap_add(target: np.ndarray, start: int, frame: Any) -> np.ndarray:
    """Add ``frame`` into ``target`` at ``start``, ignoring samples outside it.

    Only the real part of a complex ``frame`` is added.
    """
    tgt = check_destination(target, np.float64, name="target")
    frm = _as_frame(frame)
    _accumulate(tgt, int(start), None, frm)
    return tgt


def windowed_overlap_add(
    target: np.ndarray, start: int, window: Any, frame: Any
) -> np.ndarray:
    """Add ``window * frame`` into ``target`` at ``start``."""
    tgt = check_destination(target, np.float64, name="target")
    win = as_real_vector(window, name="window")
    frm = _as_frame(frame)
    require_same_length(win, frm, names=("window", "frame"))
    _accumulate(tgt, int(start), win, frm)
    return tgt
