"""FileDigest records: extension, size and tagged hash of one file."""

import os
from dataclasses import dataclass
from pathlib import PurePath

from find_duplicates.hasher import DEFAULT_POLICY, Digest, HashPolicy, compute_file_hash


@dataclass(frozen=True)
class FileDigest:
    file_extension: str
    file_size: int
    file_hash: Digest

    def to_dict(self) -> dict:
        return {
            "extension": self.file_extension,
            "size": self.file_size,
            "strategy": self.file_hash.strategy.name.lower(),
            "hash": str(self.file_hash),
        }


def get_file_ext(path: os.PathLike | str) -> str:
    """Return the lowercased suffix of the last path component, e.g. '.jpg'."""
    return PurePath(path).suffix.lower()


def get_digest(
    path: os.PathLike | str,
    is_thorough: bool,
    policy: HashPolicy = DEFAULT_POLICY,
) -> FileDigest:
    """Stat the file once, hash it, and return its FileDigest.

    Errors from stat or hashing propagate; no partial record is built.
    """
    info = os.lstat(path)
    file_hash = compute_file_hash(path, is_thorough, file_stat=info, policy=policy)
    return FileDigest(
        file_extension=get_file_ext(path),
        file_size=info.st_size,
        file_hash=file_hash,
    )
