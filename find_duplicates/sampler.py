"""Reads the "crucial bytes" of large files: a head, middle and tail window."""

import logging
import os

from find_duplicates.errors import ReadError

logger = logging.getLogger(__name__)

KIBI = 1024
THRESHOLD_FILE_SIZE = 16 * KIBI

HEAD_SIZE = THRESHOLD_FILE_SIZE // 2
MIDDLE_SIZE = THRESHOLD_FILE_SIZE // 4
TAIL_SIZE = THRESHOLD_FILE_SIZE // 4


def sample_windows(file_size: int) -> list[tuple[str, int, int]]:
    """Return the (phase, offset, length) windows read for a file of this size."""
    return [
        ("head", 0, HEAD_SIZE),
        ("middle", file_size // 2, MIDDLE_SIZE),
        ("tail", file_size - TAIL_SIZE, TAIL_SIZE),
    ]


def _read_window(f, path, phase: str, offset: int, length: int) -> bytes:
    if offset < 0:
        raise ReadError(path, phase, f"negative offset {offset}")
    try:
        f.seek(offset)
        data = f.read(length)
    except OSError as exc:
        raise ReadError(path, phase, str(exc)) from exc
    if len(data) != length:
        raise ReadError(
            path, phase, f"expected {length} bytes at offset {offset}, got {len(data)}",
        )
    return data


def sample_crucial_bytes(path: os.PathLike | str, file_size: int) -> bytes:
    """Return head(T/2) + middle(T/4) + tail(T/4) of the file, T bytes in total.

    ``file_size`` is the size reported by stat. The middle window starts at
    ``file_size // 2`` and the tail window at ``file_size - T/4``. A window
    that cannot be read in full aborts the whole sample with a ReadError
    naming that window.
    """
    try:
        f = open(path, "rb")
    except OSError as exc:
        raise ReadError(path, "open", str(exc)) from exc

    with f:
        chunks = []
        for phase, offset, length in sample_windows(file_size):
            logger.debug("Reading %s window of %s: offset=%d length=%d", phase, path, offset, length)
            chunks.append(_read_window(f, path, phase, offset, length))
    return b"".join(chunks)
