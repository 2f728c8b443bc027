"""Periodic (DFT-even) window functions."""

from __future__ import annotations

from typing import Callable

import numpy as np

from ..errors import InvalidArgumentError


def _theta(length: int) -> np.ndarray:
    if length <= 0:
        raise InvalidArgumentError(f"The window length must be positive, got {length}.")
    return 2.0 * np.pi * np.arange(length) / length


def _freeze(window: np.ndarray) -> np.ndarray:
    window.flags.writeable = False
    return window


def hann(length: int) -> np.ndarray:
    """Hann window ``0.5 - 0.5 cos(2 pi n / N)``."""
    return _freeze(0.5 - 0.5 * np.cos(_theta(length)))


def square_root_hann(length: int) -> np.ndarray:
    """Square root of the Hann window.

    Used as both analysis and synthesis window, its square is a Hann window,
    which overlap-adds to a constant at a frame shift of ``N / 2``.
    """
    return _freeze(np.sqrt(0.5 - 0.5 * np.cos(_theta(length))))


def hamming(length: int) -> np.ndarray:
    """Hamming window ``0.54 - 0.46 cos(2 pi n / N)``."""
    return _freeze(0.54 - 0.46 * np.cos(_theta(length)))


WINDOW_FUNCTIONS: dict[str, Callable[[int], np.ndarray]] = {
    "hann": hann,
    "sqrt_hann": square_root_hann,
    "square_root_hann": square_root_hann,
    "hamming": hamming,
}


def get_window(name: str, length: int) -> np.ndarray:
    """Build a window by registry name (see :data:`WINDOW_FUNCTIONS`)."""
    try:
        factory = WINDOW_FUNCTIONS[name.lower()]
    except KeyError:
        available = ", ".join(sorted(WINDOW_FUNCTIONS))
        raise InvalidArgumentError(
            f"Unknown window '{name}'. Available windows: {available}"
        ) from None
    return factory(length)
