"""Exceptions raised while computing file digests."""

import os
from pathlib import Path


class DigestError(Exception):
    """Base class for errors raised by the digest core."""


class UnsupportedFileTypeError(DigestError):
    def __init__(self, path: os.PathLike | str, file_type: str):
        self.path = Path(path)
        self.file_type = file_type
        super().__init__(f"can't compute hash of non-regular file ({file_type}): {path}")


class ReadError(DigestError):
    """A read of the file content failed.

    ``phase`` is one of ``open``, ``full``, ``head``, ``middle`` or ``tail``.
    """

    def __init__(self, path: os.PathLike | str, phase: str, reason: str):
        self.path = Path(path)
        self.phase = phase
        self.reason = reason
        super().__init__(f"couldn't read {phase} bytes of {path} (maybe file is corrupted?): {reason}")


class HashComputationError(DigestError):
    def __init__(self, path: os.PathLike | str, reason: str):
        self.path = Path(path)
        super().__init__(f"error while computing hash of {path}: {reason}")
