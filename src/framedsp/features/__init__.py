"""Spectral features computed from STFT half-spectra."""

from .filter_bank import (
    FilterBank,
    FrequencyScale,
    TriangularFilter,
    hz_to_mel,
    mel_to_hz,
    power_spectrum,
)

__all__ = [
    "FilterBank",
    "FrequencyScale",
    "TriangularFilter",
    "hz_to_mel",
    "mel_to_hz",
    "power_spectrum",
]
