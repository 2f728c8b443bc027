"""Typed OmegaConf schemas for processing configurations."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
import importlib
from pathlib import Path
from typing import Any, Iterable, Mapping, TypeVar, cast

import numpy as np

from .configs import load_yaml, save_yaml
from .errors import InvalidArgumentError
from .features import FilterBank
from .signal import StftMode, get_window
from .signal.stft import _validate_frame_settings

try:
    OmegaConf = importlib.import_module("omegaconf").OmegaConf
except ModuleNotFoundError as exc:  # pragma: no cover
    raise RuntimeError(
        "framedsp.config_schema requires 'omegaconf'. Install it with `pip install omegaconf`."
    ) from exc


@dataclass
class StftConfig:
    """STFT frame layout."""

    window: str = "hann"
    frame_length: int = 512
    frame_shift: int = 128
    mode: str = "synthesis"

    def build_window(self) -> np.ndarray:
        return get_window(self.window, self.frame_length)

    def stft_mode(self) -> StftMode:
        try:
            return StftMode(self.mode)
        except ValueError:
            raise InvalidArgumentError(f"Unknown STFT mode: {self.mode!r}") from None

    def validate(self) -> None:
        """Check the window name, frame layout and mode without running an STFT."""
        window = self.build_window()
        _validate_frame_settings(window.shape[0], self.frame_shift)
        self.stft_mode()


@dataclass
class ResampleConfig:
    """Resampling ratio ``p / q`` and Lanczos half-width."""

    p: int = 1
    q: int = 1
    quality: int = 10

    def validate(self) -> None:
        for name in ("p", "q", "quality"):
            if getattr(self, name) < 1:
                raise InvalidArgumentError(
                    f"resample.{name} must be greater than or equal to one, "
                    f"got {getattr(self, name)}."
                )


@dataclass
class FilterBankConfig:
    """Filter bank applied to STFT power spectra."""

    sample_rate: int = 16000
    min_frequency: float = 0.0
    max_frequency: float = 8000.0
    filter_count: int = 40
    scale: str = "mel"

    def build(self, fft_length: int) -> FilterBank:
        return FilterBank(
            self.sample_rate,
            fft_length,
            self.min_frequency,
            self.max_frequency,
            self.filter_count,
            self.scale,
        )


@dataclass
class RuntimeConfig:
    """Runtime options."""

    log_level: str = "INFO"


@dataclass
class ProcessingConfig:
    """Top-level processing configuration schema."""

    stft: StftConfig = field(default_factory=StftConfig)
    resample: ResampleConfig = field(default_factory=ResampleConfig)
    filter_bank: FilterBankConfig = field(default_factory=FilterBankConfig)
    runtime: RuntimeConfig = field(default_factory=RuntimeConfig)


TSchema = TypeVar("TSchema")


def _decode_schema(
    data: Mapping[str, object],
    schema: type[TSchema],
) -> TSchema:
    base = OmegaConf.structured(schema)
    loaded = OmegaConf.create(dict(data))
    merged = OmegaConf.merge(base, loaded)
    decoded = OmegaConf.to_object(merged)
    if not isinstance(decoded, schema):
        raise TypeError(f"Failed to decode config as {schema.__name__}")
    return cast(TSchema, decoded)


def validate_processing_config(config: ProcessingConfig) -> ProcessingConfig:
    """Reject settings the processing functions would refuse later.

    Raises
    ------
    InvalidArgumentError
        For an unknown window, mode or frequency scale, a frame shift that
        does not divide the frame length, or out-of-range factors.
    """
    config.stft.validate()
    config.resample.validate()
    config.filter_bank.build(config.stft.frame_length)
    return config


def parse_processing_config(data: Mapping[str, object]) -> ProcessingConfig:
    """Decode and validate a mapping as :class:`ProcessingConfig`."""
    return validate_processing_config(_decode_schema(data, ProcessingConfig))


def parse_stft_config(data: Mapping[str, object]) -> StftConfig:
    """Decode and validate a mapping as :class:`StftConfig`."""
    cfg = _decode_schema(data, StftConfig)
    cfg.validate()
    return cfg


def parse_resample_config(data: Mapping[str, object]) -> ResampleConfig:
    """Decode and validate a mapping as :class:`ResampleConfig`."""
    cfg = _decode_schema(data, ResampleConfig)
    cfg.validate()
    return cfg


def load_processing_config(
    path: str | Path,
    *,
    overrides: Iterable[str] | None = None,
) -> ProcessingConfig:
    """Load and validate a YAML processing configuration."""
    return parse_processing_config(load_yaml(path, overrides=overrides))


def processing_config_to_dict(config: ProcessingConfig) -> dict[str, Any]:
    """Convert :class:`ProcessingConfig` to a plain dictionary."""
    return asdict(config)


def save_processing_config(path: str | Path, config: ProcessingConfig) -> Path:
    """Write ``config`` as YAML that :func:`load_processing_config` reads back."""
    return save_yaml(path, processing_config_to_dict(config))
