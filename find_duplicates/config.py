"""Configuration loading and validation for the find-duplicates-digest CLI."""

import argparse
import sys
from dataclasses import dataclass
from pathlib import Path

import yaml


OUTPUT_FORMATS = ("text", "json")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class CliConfig:
    paths: list[Path]
    thorough: bool = False
    workers: int = 1
    output_format: str = "text"
    log_level: str = "WARNING"


def _parse_cli_args(args: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="find-duplicates-digest",
        description="Print content digests of files for duplicate detection",
    )
    parser.add_argument(
        "paths",
        nargs="*",
        type=Path,
        help="Files to digest",
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to YAML configuration file",
    )
    parser.add_argument(
        "--thorough", "-t",
        action="store_true",
        default=None,
        help="Hash full file content with SHA-512 instead of sampling",
    )
    parser.add_argument(
        "--workers", "-w",
        type=int,
        default=None,
        help="Number of files digested in parallel",
    )
    parser.add_argument(
        "--json",
        action="store_const",
        const="json",
        dest="output_format",
        default=None,
        help="Print one JSON object per file",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    return parser.parse_args(args)


def _load_yaml(path: Path) -> dict:
    with open(path) as f:
        data = yaml.safe_load(f)
    # An empty file is an empty config
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a YAML mapping, got {type(data).__name__}")
    return data


def _validate_and_resolve(data: dict) -> CliConfig:
    raw_paths = data.get("paths", [])
    if not isinstance(raw_paths, list):
        raise ValueError("paths must be a list")
    paths = [Path(p).expanduser() for p in raw_paths]

    thorough = data.get("thorough", False)
    if not isinstance(thorough, bool):
        raise ValueError(f"thorough must be true or false, got '{thorough}'")

    workers = data.get("workers", 1)
    if isinstance(workers, bool) or not isinstance(workers, int) or workers < 1:
        raise ValueError(f"workers must be a positive integer, got '{workers}'")

    output_format = data.get("output_format", "text")
    if output_format not in OUTPUT_FORMATS:
        raise ValueError(f"output_format must be 'text' or 'json', got '{output_format}'")

    log_level = str(data.get("log_level", "WARNING")).upper()
    if log_level not in LOG_LEVELS:
        raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}, got '{log_level}'")

    return CliConfig(
        paths=paths,
        thorough=thorough,
        workers=workers,
        output_format=output_format,
        log_level=log_level,
    )


def build_config(cli_args: list[str] | None = None) -> CliConfig:
    """Parse CLI args, load the optional YAML config, and return CliConfig.

    Flags given on the command line override values from the config file.
    Paths on the command line replace the config file's paths.
    """
    ns = _parse_cli_args(cli_args)
    data: dict = {}
    if ns.config is not None:
        config_path = ns.config.expanduser().resolve()
        if not config_path.exists():
            print(f"Error: config file not found: {config_path}", file=sys.stderr)
            sys.exit(1)
        data = _load_yaml(config_path)

    if ns.paths:
        data["paths"] = [str(p) for p in ns.paths]
    for key in ("thorough", "workers", "output_format", "log_level"):
        value = getattr(ns, key)
        if value is not None:
            data[key] = value

    return _validate_and_resolve(data)
