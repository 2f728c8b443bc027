from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest

from framedsp import InvalidArgumentError, StftMode, hann
from framedsp.config_schema import (
    load_processing_config,
    parse_processing_config,
    parse_resample_config,
    parse_stft_config,
    processing_config_to_dict,
    save_processing_config,
)
from framedsp.configs import load_yaml, save_yaml


def test_parse_processing_config_applies_defaults() -> None:
    cfg = parse_processing_config(
        {
            "stft": {"frame_length": 1024},
            "runtime": {"log_level": "DEBUG"},
        }
    )
    assert cfg.stft.window == "hann"
    assert cfg.stft.frame_length == 1024
    assert cfg.stft.frame_shift == 128
    assert cfg.resample.quality == 10
    assert cfg.filter_bank.filter_count == 40
    assert cfg.runtime.log_level == "DEBUG"


def test_parse_processing_config_rejects_unknown_key() -> None:
    with pytest.raises(Exception):
        parse_processing_config({"stft": {"unknown_field": 1}})


def test_stft_config_builds_window_and_mode() -> None:
    cfg = parse_stft_config({"frame_length": 64, "frame_shift": 16, "mode": "analysis"})
    np.testing.assert_array_equal(cfg.build_window(), hann(64))
    assert cfg.stft_mode() is StftMode.ANALYSIS


def test_parse_resample_config() -> None:
    cfg = parse_resample_config({"p": 3, "q": 2})
    assert (cfg.p, cfg.q, cfg.quality) == (3, 2, 10)


def test_filter_bank_config_builds_bank() -> None:
    cfg = parse_processing_config({"filter_bank": {"filter_count": 12, "scale": "linear"}})
    bank = cfg.filter_bank.build(cfg.stft.frame_length)
    assert bank.feature_length == 12
    assert bank.bin_count == 257


def test_load_processing_config_with_overrides(tmp_path: Path) -> None:
    path = tmp_path / "processing.yaml"
    save_yaml(path, {"stft": {"window": "sqrt_hann", "frame_shift": 256}})

    cfg = load_processing_config(path, overrides=["stft.frame_length=1024", ""])

    assert cfg.stft.window == "sqrt_hann"
    assert cfg.stft.frame_length == 1024
    assert cfg.stft.frame_shift == 256
    assert processing_config_to_dict(cfg)["stft"]["frame_length"] == 1024



@pytest.mark.parametrize(
    ("data", "message"),
    [
        ({"stft": {"window": "kaiser"}}, "Unknown window"),
        ({"stft": {"frame_length": 500}}, "power of two"),
        ({"stft": {"frame_shift": 96}}, "divisible"),
        ({"stft": {"mode": "overlap"}}, "Unknown STFT mode"),
        ({"resample": {"q": 0}}, "resample.q"),
        ({"filter_bank": {"scale": "bark"}}, "Unknown frequency scale"),
    ],
)
def test_parse_processing_config_rejects_invalid_settings(
    data: dict[str, dict[str, object]], message: str
) -> None:
    with pytest.raises(InvalidArgumentError, match=message):
        parse_processing_config(data)


def test_unknown_enum_strings_raise_invalid_argument() -> None:
    cfg = parse_processing_config({})
    cfg.stft.mode = "overlap"
    cfg.filter_bank.scale = "bark"
    with pytest.raises(InvalidArgumentError, match="STFT mode"):
        cfg.stft.stft_mode()
    with pytest.raises(InvalidArgumentError, match="frequency scale"):
        cfg.filter_bank.build(512)


def test_load_processing_config_rejects_invalid_override(tmp_path: Path) -> None:
    path = save_yaml(tmp_path / "processing.yaml", {"stft": {"frame_length": 256}})
    with pytest.raises(InvalidArgumentError, match="divisible"):
        load_processing_config(path, overrides=["stft.frame_shift=100"])


def test_save_processing_config_reads_back(tmp_path: Path) -> None:
    cfg = parse_processing_config({"stft": {"window": "hamming"}, "resample": {"p": 3}})

    path = save_processing_config(tmp_path / "nested" / "out.yaml", cfg)

    assert load_yaml(path)["stft"]["window"] == "hamming"
    assert load_processing_config(path) == cfg


def test_load_yaml_handles_empty_file_and_rejects_lists(tmp_path: Path) -> None:
    empty = tmp_path / "empty.yaml"
    empty.write_text("", encoding="utf-8")
    assert load_yaml(empty) == {}
    assert load_yaml(empty, overrides=["stft.frame_length=64"]) == {
        "stft": {"frame_length": 64}
    }

    listing = tmp_path / "list.yaml"
    listing.write_text("- 1\n- 2\n", encoding="utf-8")
    with pytest.raises(TypeError, match="mapping"):
        load_yaml(listing)
