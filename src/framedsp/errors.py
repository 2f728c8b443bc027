"""Exception types raised by framedsp."""

from __future__ import annotations


class SpectralError(ValueError):
    """Base class for invalid inputs to framedsp operations."""


class InvalidLengthError(SpectralError):
    """Raised for empty or non-power-of-two transform lengths."""


class InvalidArgumentError(SpectralError):
    """Raised for mismatched sizes or out-of-range parameters."""


class ReconstructionNotPossibleError(SpectralError):
    """Raised when a window/frame-shift pair cannot reconstruct a signal."""


class SignalTooShortError(SpectralError):
    """Raised when a signal does not contain a single complete frame."""
