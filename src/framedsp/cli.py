from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Sequence

import yaml

from .config_schema import load_processing_config, processing_config_to_dict
from .logging_utils import configure_logging
from .signal import WINDOW_FUNCTIONS, can_reconstruct, get_window


def _check_cola(name: str, length: str, shift: str) -> str:
    window = get_window(name, int(length))
    possible = can_reconstruct(window, int(shift))
    verdict = "reconstruction possible" if possible else "reconstruction NOT possible"
    return f"{name} length={length} shift={shift}: {verdict}"


def main(argv: Sequence[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="framedsp",
        description="Frame-based spectral signal processing toolkit",
    )
    parser.add_argument(
        "--list-windows",
        action="store_true",
        help="Print available window function names and exit",
    )
    parser.add_argument(
        "--check-cola",
        nargs=3,
        metavar=("WINDOW", "LENGTH", "SHIFT"),
        help="Report whether a window/frame shift pair allows perfect reconstruction",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Print the resolved processing configuration from a YAML file",
    )
    parser.add_argument(
        "--set",
        dest="overrides",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Dotlist override applied to --config (repeatable)",
    )
    parser.add_argument("--log-level", default="WARNING", help="Logging level")
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    if args.list_windows:
        for name in sorted(WINDOW_FUNCTIONS):
            print(name)
        return

    if args.check_cola:
        try:
            print(_check_cola(*args.check_cola))
        except ValueError as exc:
            parser.error(str(exc))
        return

    if args.config is not None:
        try:
            cfg = load_processing_config(args.config, overrides=args.overrides)
        except ValueError as exc:
            parser.error(str(exc))
        logging.getLogger(__name__).info("Loaded configuration from %s", args.config)
        print(yaml.safe_dump(processing_config_to_dict(cfg), sort_keys=False), end="")
        return

    parser.print_help()


if __name__ == "__main__":
    main()
