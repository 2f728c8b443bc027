"""Complex FFT over 1-D views, backed by the per-thread transform cache."""

from __future__ import annotations

from typing import Any

import numpy as np

from .cache import get_fft
from .views import (
    as_complex_vector,
    check_destination,
    ensure_contiguous,
    require_same_length,
    require_transform_length,
)


def _transform(source: Any, destination: np.ndarray | None, *, inverse: bool) -> np.ndarray:
    src = as_complex_vector(source, name="source")
    require_transform_length(src.shape[0])

    if destination is None:
        dst = np.array(src, dtype=np.complex128, order="C")
        transform = get_fft(dst.shape[0])
        if inverse:
            transform.inverse(dst)
        else:
            transform.forward(dst)
        return dst

    dst = check_destination(destination, np.complex128, name="destination")
    require_transform_length(dst.shape[0])
    require_same_length(src, dst, names=("source", "destination"))
    with ensure_contiguous(dst, copy=False) as tmp:
        tmp[:] = src
        transform = get_fft(tmp.shape[0])
        if inverse:
            transform.inverse(tmp)
        else:
            transform.forward(tmp)
    return dst


def _transform_inplace(target: np.ndarray, *, inverse: bool) -> np.ndarray:
    tgt = check_destination(target, np.complex128, name="target")
    require_transform_length(tgt.shape[0])
    with ensure_contiguous(tgt, copy=True) as tmp:
        transform = get_fft(tmp.shape[0])
        if inverse:
            transform.inverse(tmp)
        else:
            transform.forward(tmp)
    return tgt


def fft(source: Any, destination: np.ndarray | None = None) -> np.ndarray:
    """Compute the forward Fourier transform of ``source``.

    Parameters
    ----------
    source:
        1-D real or complex samples. The length must be a power of two.
    destination:
        Optional complex128 array of the same length receiving the result.
        May be a strided view.

    Returns
    -------
    numpy.ndarray
        ``destination`` when given, otherwise a new complex array. No
        normalization is applied.
    """
    return _transform(source, destination, inverse=False)


def ifft(source: Any, destination: np.ndarray | None = None) -> np.ndarray:
    """Compute the inverse Fourier transform of ``source`` (``1/N`` scaled)."""
    return _transform(source, destination, inverse=True)


def fft_inplace(target: np.ndarray) -> np.ndarray:
    """Replace the complex128 array ``target`` by its forward transform."""
    return _transform_inplace(target, inverse=False)


def ifft_inplace(target: np.ndarray) -> np.ndarray:
    """Replace the complex128 array ``target`` by its inverse transform."""
    return _transform_inplace(target, inverse=True)
