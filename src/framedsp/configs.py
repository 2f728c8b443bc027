"""YAML files for processing configurations.

Files are plain YAML mappings, one section per processing stage::

    stft:
      window: sqrt_hann
      frame_length: 1024
      frame_shift: 512

Command-line overrides use OmegaConf dotlist syntax (``stft.frame_shift=256``)
and are merged on top of the file contents before schema validation.
"""

from __future__ import annotations

import importlib
from pathlib import Path
from typing import Any, Iterable, Mapping

import yaml

try:
    OmegaConf = importlib.import_module("omegaconf").OmegaConf
except ModuleNotFoundError as exc:
    raise RuntimeError(
        "framedsp.configs requires 'omegaconf'. Install it with `pip install omegaconf`."
    ) from exc


def load_yaml(
    path: str | Path,
    *,
    overrides: Iterable[str] | None = None,
) -> dict[str, Any]:
    """Read the section mapping stored in ``path``.

    An empty file reads as an empty mapping. Blank ``overrides`` entries are
    skipped so that unset CLI options can be passed through unchanged.
    """
    source = Path(path)
    with source.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle)
    if data is None:
        data = {}
    if not isinstance(data, Mapping):
        raise TypeError(
            f"{source}: expected a mapping of configuration sections, "
            f"got {type(data).__name__}"
        )

    dotlist = [item for item in (overrides or []) if item]
    if not dotlist:
        return dict(data)
    merged = OmegaConf.merge(OmegaConf.create(dict(data)), OmegaConf.from_dotlist(dotlist))
    return OmegaConf.to_container(merged, resolve=True)


def save_yaml(path: str | Path, data: Mapping[str, Any]) -> Path:
    """Write the section mapping ``data`` to ``path`` and return the path."""
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(yaml.safe_dump(dict(data), sort_keys=False), encoding="utf-8")
    return target
