"""Signal processing primitives: FFT, frames, STFT, convolution, resampling."""

from .cache import ComplexTransform, RealTransform, clear_cache, get_fft, get_rft
from .convolve import block_fft_length, convolve
from .fourier import fft, fft_inplace, ifft, ifft_inplace
from .frames import (
    get_frame,
    get_frame_as_complex,
    get_windowed_frame,
    get_windowed_frame_as_complex,
    overlap_add,
    windowed_overlap_add,
)
from .resample import resample, resampled_length, sinc
from .stft import (
    COLA_TOLERANCE,
    FramePosition,
    FrameTime,
    StftInfo,
    StftMode,
    can_reconstruct,
    istft,
    stft,
    window_gain,
)
from .windows import WINDOW_FUNCTIONS, get_window, hamming, hann, square_root_hann

__all__ = [
    "ComplexTransform",
    "RealTransform",
    "get_fft",
    "get_rft",
    "clear_cache",
    "fft",
    "ifft",
    "fft_inplace",
    "ifft_inplace",
    "get_frame",
    "get_windowed_frame",
    "get_frame_as_complex",
    "get_windowed_frame_as_complex",
    "overlap_add",
    "windowed_overlap_add",
    "StftMode",
    "StftInfo",
    "FramePosition",
    "FrameTime",
    "COLA_TOLERANCE",
    "stft",
    "istft",
    "can_reconstruct",
    "window_gain",
    "convolve",
    "block_fft_length",
    "resample",
    "resampled_length",
    "sinc",
    "WINDOW_FUNCTIONS",
    "get_window",
    "hann",
    "square_root_hann",
    "hamming",
]
