"""Per-thread cache of FFT objects keyed by transform length.

Transform objects keep scratch state and are mutated by every call, so they
are never shared between threads. Each thread lazily builds its own instance
the first time a given length is requested.
"""

from __future__ import annotations

import logging
import threading

import numpy as np
from scipy import fft as sp_fft

LOGGER = logging.getLogger(__name__)

_LOCAL = threading.local()


class ComplexTransform:
    """In-place complex FFT of a fixed power-of-two length."""

    def __init__(self, length: int) -> None:
        self.length = length

    def _check(self, buffer: np.ndarray) -> None:
        if buffer.shape != (self.length,) or buffer.dtype != np.complex128:
            raise ValueError(
                f"expected complex128 buffer of length {self.length}, "
                f"got {buffer.dtype} with shape {buffer.shape}"
            )
        if not buffer.flags.c_contiguous:
            raise ValueError("transform buffer must be contiguous")

    def forward(self, buffer: np.ndarray) -> np.ndarray:
        """Unnormalized forward transform of ``buffer``."""
        self._check(buffer)
        buffer[:] = sp_fft.fft(buffer, overwrite_x=True)
        return buffer

    def inverse(self, buffer: np.ndarray) -> np.ndarray:
        """Inverse transform of ``buffer`` with ``1/N`` normalization."""
        self._check(buffer)
        buffer[:] = sp_fft.ifft(buffer, overwrite_x=True)
        return buffer


class RealTransform:
    """In-place real-input FFT producing a half-spectrum.

    The transform works on a contiguous float64 buffer of ``length + 2``
    elements. In the time domain the first ``length`` elements hold the
    samples. In the frequency domain the whole buffer holds
    ``length // 2 + 1`` bins as interleaved ``(real, imag)`` pairs, which is
    exactly the memory layout of a complex128 view of the buffer.
    """

    def __init__(self, length: int) -> None:
        self.length = length
        self.bin_count = length // 2 + 1

    def _check(self, buffer: np.ndarray) -> None:
        if buffer.shape != (self.length + 2,) or buffer.dtype != np.float64:
            raise ValueError(
                f"expected float64 buffer of length {self.length + 2}, "
                f"got {buffer.dtype} with shape {buffer.shape}"
            )
        if not buffer.flags.c_contiguous:
            raise ValueError("transform buffer must be contiguous")

    def forward(self, buffer: np.ndarray) -> np.ndarray:
        """Transform ``buffer[:length]`` and return the complex bin view."""
        self._check(buffer)
        spectrum = sp_fft.rfft(buffer[: self.length])
        bins = buffer.view(np.complex128)
        bins[:] = spectrum
        return bins

    def inverse(self, buffer: np.ndarray) -> np.ndarray:
        """Transform interleaved bins back and return ``buffer[:length]``.

        Negative frequencies are implied by conjugate symmetry. The two
        trailing slots are zeroed.
        """
        self._check(buffer)
        samples = sp_fft.irfft(buffer.view(np.complex128), n=self.length)
        buffer[: self.length] = samples
        buffer[self.length :] = 0.0
        return buffer[: self.length]


def _thread_cache(name: str) -> dict:
    cache = getattr(_LOCAL, name, None)
    if cache is None:
        cache = {}
        setattr(_LOCAL, name, cache)
    return cache


def get_fft(length: int) -> ComplexTransform:
    """Return this thread's complex transform for ``length``.

    ``length`` must already be validated as a power of two.
    """
    cache = _thread_cache("fft")
    transform = cache.get(length)
    if transform is None:
        LOGGER.debug(
            "Creating complex FFT of length %d on thread %s",
            length,
            threading.current_thread().name,
        )
        transform = ComplexTransform(length)
        cache[length] = transform
    return transform


def get_rft(length: int) -> RealTransform:
    """Return this thread's real transform for ``length``."""
    cache = _thread_cache("rft")
    transform = cache.get(length)
    if transform is None:
        LOGGER.debug(
            "Creating real FFT of length %d on thread %s",
            length,
            threading.current_thread().name,
        )
        transform = RealTransform(length)
        cache[length] = transform
    return transform


def clear_cache() -> None:
    """Drop every transform cached on the calling thread."""
    for name in ("fft", "rft"):
        if hasattr(_LOCAL, name):
            delattr(_LOCAL, name)
