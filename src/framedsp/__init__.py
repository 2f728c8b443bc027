"""framedsp public API."""

from .configs import load_yaml, save_yaml
from .errors import (
    InvalidArgumentError,
    InvalidLengthError,
    ReconstructionNotPossibleError,
    SignalTooShortError,
    SpectralError,
)
from .features import FilterBank, FrequencyScale, TriangularFilter
from .signal import (
    FramePosition,
    FrameTime,
    StftInfo,
    StftMode,
    convolve,
    fft,
    fft_inplace,
    get_frame,
    get_frame_as_complex,
    get_window,
    get_windowed_frame,
    get_windowed_frame_as_complex,
    hamming,
    hann,
    ifft,
    ifft_inplace,
    istft,
    resample,
    square_root_hann,
    stft,
)

__all__ = [
    "fft",
    "ifft",
    "fft_inplace",
    "ifft_inplace",
    "get_frame",
    "get_windowed_frame",
    "get_frame_as_complex",
    "get_windowed_frame_as_complex",
    "stft",
    "istft",
    "StftMode",
    "StftInfo",
    "FramePosition",
    "FrameTime",
    "convolve",
    "resample",
    "hann",
    "square_root_hann",
    "hamming",
    "get_window",
    "FilterBank",
    "FrequencyScale",
    "TriangularFilter",
    "SpectralError",
    "InvalidLengthError",
    "InvalidArgumentError",
    "ReconstructionNotPossibleError",
    "SignalTooShortError",
    "load_yaml",
    "save_yaml",
]
