"""Command-line front end: print the digest of each file given.

Usage:
    find-duplicates-digest <file> [<file> ...]
    find-duplicates-digest <file> ... --thorough
    find-duplicates-digest <file> ... --workers 8 --json
    find-duplicates-digest --config digest.yaml

Only the files named are digested; directories are reported as errors.
"""

import json
import logging
import sys
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path

from find_duplicates.config import CliConfig, build_config
from find_duplicates.digest import FileDigest, get_digest

logger = logging.getLogger(__name__)


@dataclass
class RunStats:
    digested: int = 0
    errors: int = 0
    error_details: list[str] = field(default_factory=list)


def _digest_one(path: Path, is_thorough: bool) -> tuple[FileDigest | None, str | None]:
    """Digest a single file, returning (digest, None) or (None, error message)."""
    try:
        return get_digest(path, is_thorough), None
    except Exception as exc:
        logger.debug("Digest of %s failed", path, exc_info=True)
        return None, str(exc)


def format_record(path: Path, digest: FileDigest, output_format: str) -> str:
    if output_format == "json":
        line = {"path": str(path), **digest.to_dict()}
        return json.dumps(line, ensure_ascii=False)
    return f"{digest.file_hash}\t{digest.file_size}\t{digest.file_extension}\t{path}"


def run(config: CliConfig) -> RunStats:
    """Digest every configured path and print results in input order."""
    stats = RunStats()

    if config.workers > 1:
        with ThreadPoolExecutor(max_workers=config.workers) as pool:
            results = list(pool.map(lambda p: _digest_one(p, config.thorough), config.paths))
    else:
        results = [_digest_one(p, config.thorough) for p in config.paths]

    for path, (digest, error) in zip(config.paths, results):
        if error is not None:
            stats.errors += 1
            stats.error_details.append(f"{path}: {error}")
            print(f"ERROR processing {path}: {error}", file=sys.stderr)
            continue
        stats.digested += 1
        print(format_record(path, digest, config.output_format))

    logger.info("Digested %d files, %d errors", stats.digested, stats.errors)
    return stats


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    try:
        config = build_config(argv)
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    logging.basicConfig(
        level=config.log_level,
        format="[%(asctime)s] [%(name)s] [%(levelname)s] %(message)s",
    )

    if not config.paths:
        print("Error: no files given", file=sys.stderr)
        return 1

    stats = run(config)
    return 1 if stats.errors else 0


if __name__ == "__main__":
    sys.exit(main())
