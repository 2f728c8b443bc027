"""Short-time Fourier transform analysis and overlap-add synthesis."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Any, Iterable

import numpy as np

from ..errors import (
    InvalidArgumentError,
    ReconstructionNotPossibleError,
    SignalTooShortError,
)
from .cache import get_rft
from .frames import _accumulate, _copy_frame
from .views import (
    as_complex_vector,
    as_integer,
    as_real_vector,
    is_power_of_two,
    require_non_empty,
)

LOGGER = logging.getLogger(__name__)

# np.finfo(np.float64).resolution * 10
COLA_TOLERANCE = 1.0e-14


class StftMode(str, enum.Enum):
    """Frame layout used by :func:`stft`.

    ``ANALYSIS`` keeps only frames lying completely inside the signal.
    ``SYNTHESIS`` lets the edge frames hang over both ends so that every
    sample is covered and :func:`istft` reconstructs the input.
    """

    ANALYSIS = "analysis"
    SYNTHESIS = "synthesis"


@dataclass(frozen=True)
class FramePosition:
    """Sample range ``[start, end)`` of one frame."""

    start: int
    end: int

    @property
    def center(self) -> int:
        return (self.start + self.end) // 2


@dataclass(frozen=True)
class FrameTime:
    """Time range of one frame in seconds."""

    start: float
    end: float

    @property
    def center(self) -> float:
        return 0.5 * (self.start + self.end)


def _validate_frame_settings(frame_length: int, frame_shift: int) -> None:
    if frame_length < 2:
        raise InvalidArgumentError(
            "The window length must be greater than or equal to two."
        )
    if not is_power_of_two(frame_length):
        raise InvalidArgumentError(
            f"The window length must be a power of two, got {frame_length}."
        )
    if frame_shift <= 0:
        raise InvalidArgumentError(
            f"The frame shift must be a positive value, got {frame_shift}."
        )
    if frame_length % frame_shift != 0:
        raise InvalidArgumentError(
            f"The window length ({frame_length}) must be divisible by "
            f"the frame shift ({frame_shift})."
        )


@dataclass(frozen=True, eq=False)
class StftInfo:
    """Frame layout of one :func:`stft` call, consumed by :func:`istft`.

    Parameters
    ----------
    window:
        Analysis/synthesis window. Its length is the frame length.
    first_frame_position:
        Signal index of the first sample of frame 0. Negative in synthesis
        mode.
    frame_shift:
        Distance in samples between consecutive frames.
    signal_length:
        Length of the analyzed signal, which is also the length of the
        reconstructed signal.
    """

    window: np.ndarray
    first_frame_position: int
    frame_shift: int
    signal_length: int

    def __post_init__(self) -> None:
        window = as_real_vector(self.window, name="window")
        frame_shift = as_integer(self.frame_shift, name="frame_shift")
        first_frame_position = as_integer(
            self.first_frame_position, name="first_frame_position"
        )
        signal_length = as_integer(self.signal_length, name="signal_length")
        _validate_frame_settings(window.shape[0], frame_shift)
        if signal_length <= 0:
            raise InvalidArgumentError(
                f"The signal length must be a positive value, got {signal_length}."
            )
        object.__setattr__(self, "window", window)
        object.__setattr__(self, "frame_shift", frame_shift)
        object.__setattr__(self, "first_frame_position", first_frame_position)
        object.__setattr__(self, "signal_length", signal_length)

    @property
    def frame_length(self) -> int:
        return int(self.window.shape[0])

    @property
    def bin_count(self) -> int:
        """Number of non-negative frequency bins per spectrum."""
        return self.frame_length // 2 + 1

    def frame_position(self, frame_index: int) -> FramePosition:
        start = self.first_frame_position + frame_index * self.frame_shift
        return FramePosition(start, start + self.frame_length)

    def frame_time(self, sample_rate: int, frame_index: int) -> FrameTime:
        position = self.frame_position(frame_index)
        return FrameTime(position.start / sample_rate, position.end / sample_rate)

    def frequency(self, sample_rate: int, bin_index: int) -> float:
        """Center frequency in Hz of ``bin_index``."""
        return sample_rate * bin_index / self.frame_length


def window_gain(window: Any, frame_shift: int) -> float:
    """Return the overlap-add gain ``sum(window**2) / frame_shift``."""
    win = as_real_vector(window, name="window")
    return float(np.sum(win * win)) / frame_shift


def can_reconstruct(window: Any, frame_shift: int) -> bool:
    """Check the squared window for constant overlap-add at ``frame_shift``.

    Samples are split into ``frame_shift`` phase groups
    ``i, i + frame_shift, ...``; the squared-sample sums of all groups must
    agree within :data:`COLA_TOLERANCE`.
    """
    win = as_real_vector(window, name="window")
    frame_shift = as_integer(frame_shift, name="frame_shift")
    _validate_frame_settings(win.shape[0], frame_shift)
    squared = win * win
    heights = [float(np.sum(squared[phase::frame_shift])) for phase in range(frame_shift)]
    return max(heights) - min(heights) <= COLA_TOLERANCE


def _truncating_div(numerator: int, denominator: int) -> int:
    quotient = abs(numerator) // denominator
    return quotient if numerator >= 0 else -quotient


def stft(
    signal: Any,
    window: Any,
    frame_shift: int,
    mode: StftMode | str = StftMode.ANALYSIS,
) -> tuple[list[np.ndarray], StftInfo]:
    """Compute the half-spectrum STFT of a real signal.

    Parameters
    ----------
    signal:
        Real 1-D signal, possibly strided.
    window:
        Real window whose length (a power of two, at least 2) is the frame
        length.
    frame_shift:
        Hop size in samples; must divide the window length.
    mode:
        :class:`StftMode` or its string value.

    Returns
    -------
    tuple[list[numpy.ndarray], StftInfo]
        One complex spectrum of ``len(window) // 2 + 1`` bins per frame, and
        the frame layout needed by :func:`istft`.

    Raises
    ------
    InvalidArgumentError
        For invalid window/frame-shift settings or an empty signal.
    ReconstructionNotPossibleError
        In synthesis mode, when the window does not satisfy constant
        overlap-add at ``frame_shift``.
    SignalTooShortError
        When no frame fits.
    """
    source = as_real_vector(signal, name="signal")
    require_non_empty(source, name="signal")
    win = as_real_vector(window, name="window")
    frame_shift = as_integer(frame_shift, name="frame_shift")
    frame_length = win.shape[0]
    _validate_frame_settings(frame_length, frame_shift)
    try:
        mode = StftMode(mode)
    except ValueError:
        raise InvalidArgumentError(f"Unknown STFT mode: {mode!r}") from None

    if mode is StftMode.ANALYSIS:
        first_frame_position = 0
        frame_count = _truncating_div(source.shape[0] - frame_length, frame_shift)
    else:
        if not can_reconstruct(win, frame_shift):
            raise ReconstructionNotPossibleError(
                "Signal reconstruction is not possible with the specified STFT settings."
            )
        first_frame_position = frame_shift - frame_length
        frame_count = -(-(source.shape[0] - first_frame_position) // frame_shift)

    if frame_count <= 0:
        raise SignalTooShortError(
            f"The signal (length {source.shape[0]}) is too short for "
            f"a frame length of {frame_length} in {mode.value} mode."
        )
    LOGGER.debug(
        "STFT: mode=%s frames=%d frame_length=%d frame_shift=%d",
        mode.value,
        frame_count,
        frame_length,
        frame_shift,
    )

    rft = get_rft(frame_length)
    buffer = np.empty(frame_length + 2, dtype=np.float64)
    frame = buffer[:frame_length]
    spectrogram: list[np.ndarray] = []
    for index in range(frame_count):
        position = first_frame_position + index * frame_shift
        _copy_frame(source, position, win, frame)
        spectrogram.append(rft.forward(buffer).copy())

    info = StftInfo(win, first_frame_position, frame_shift, source.shape[0])
    return spectrogram, info


def istft(spectrogram: Iterable[Any], info: StftInfo) -> np.ndarray:
    """Reconstruct a signal from half-spectra by weighted overlap-add.

    Each spectrum is inverse transformed, multiplied by ``info.window`` and
    added at its frame position; the sum is divided by
    :func:`window_gain`. Samples of frames outside ``[0, signal_length)`` are
    dropped.
    """
    if not isinstance(info, StftInfo):
        raise InvalidArgumentError(
            f"info must be an StftInfo, got {type(info).__name__}"
        )
    frame_length = info.frame_length
    rft = get_rft(frame_length)
    buffer = np.empty(frame_length + 2, dtype=np.float64)
    bins = buffer.view(np.complex128)
    destination = np.zeros(info.signal_length, dtype=np.float64)

    for index, spectrum in enumerate(spectrogram):
        values = as_complex_vector(spectrum, name="spectrum")
        if values.shape[0] != info.bin_count:
            raise InvalidArgumentError(
                f"Spectrum {index} has {values.shape[0]} bins, "
                f"expected {info.bin_count}."
            )
        bins[:] = values
        frame = rft.inverse(buffer)
        position = info.first_frame_position + index * info.frame_shift
        _accumulate(destination, position, info.window, frame)

    destination *= 1.0 / window_gain(info.window, info.frame_shift)
    return destination
