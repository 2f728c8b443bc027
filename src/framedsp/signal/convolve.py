"""Linear convolution by FFT block overlap-add."""

from __future__ import annotations

import logging
from typing import Any

import numpy as np

from ..errors import InvalidArgumentError
from .cache import get_rft
from .frames import _accumulate, _copy_frame
from .views import as_real_vector, check_destination, ensure_contiguous, require_non_empty

LOGGER = logging.getLogger(__name__)

# Blocks are not grown past this FFT length only to cover a long signal.
BLOCK_FFT_LENGTH_LIMIT = 1024


def block_fft_length(signal_length: int, impulse_response_length: int) -> int:
    """Choose the FFT length used by :func:`convolve`.

    The smallest power of two holding twice the impulse response, doubled
    further while below ``min(2 * signal_length, BLOCK_FFT_LENGTH_LIMIT)``.
    """
    fft_length = 2
    while fft_length < 2 * impulse_response_length:
        fft_length *= 2
    while fft_length < min(2 * signal_length, BLOCK_FFT_LENGTH_LIMIT):
        fft_length *= 2
    return fft_length


def convolve(
    signal: Any,
    impulse_response: Any,
    destination: np.ndarray | None = None,
) -> np.ndarray:
    """Convolve ``signal`` with ``impulse_response``.

    Parameters
    ----------
    signal:
        Real 1-D input signal.
    impulse_response:
        Real 1-D filter taps.
    destination:
        Optional float64 array receiving the first ``len(destination)``
        samples of the full convolution. Defaults to a new array of length
        ``len(signal) + len(impulse_response) - 1``.

    Returns
    -------
    numpy.ndarray
        The convolution result (``destination`` when given).
    """
    sig = as_real_vector(signal, name="signal")
    imp = as_real_vector(impulse_response, name="impulse_response")
    require_non_empty(sig, name="signal")
    require_non_empty(imp, name="impulse_response")
    if destination is None:
        destination = np.zeros(sig.shape[0] + imp.shape[0] - 1, dtype=np.float64)
    else:
        check_destination(destination, np.float64, name="destination")
        if destination.shape[0] == 0:
            raise InvalidArgumentError("destination must not be empty")

    fft_length = block_fft_length(sig.shape[0], imp.shape[0])
    half = fft_length // 2
    LOGGER.debug(
        "Convolving %d samples with %d taps, fft_length=%d",
        sig.shape[0],
        imp.shape[0],
        fft_length,
    )
    rft = get_rft(fft_length)

    imp_buffer = np.zeros(fft_length + 2, dtype=np.float64)
    imp_buffer[: imp.shape[0]] = imp
    imp_spectrum = rft.forward(imp_buffer)

    block = np.empty(fft_length + 2, dtype=np.float64)
    with ensure_contiguous(destination, copy=False) as out:
        out[:] = 0.0
        for position in range(0, sig.shape[0], half):
            _copy_frame(sig, position, None, block[:half])
            block[half:] = 0.0
            bins = rft.forward(block)
            bins *= imp_spectrum
            _accumulate(out, position, None, rft.inverse(block))
    return destination
