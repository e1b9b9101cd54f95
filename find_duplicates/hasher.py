"""Strategy selection and hashing of file content for deduplication."""

import hashlib
import logging
import os
import stat
import zlib
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Protocol

from find_duplicates.errors import HashComputationError, ReadError, UnsupportedFileTypeError
from find_duplicates.sampler import THRESHOLD_FILE_SIZE, sample_crucial_bytes

logger = logging.getLogger(__name__)

CHUNK_SIZE = 65536  # 64 KB


class Strategy(Enum):
    """How a digest was produced. The value is the prefix of its string form."""

    FULL_STRONG = ""
    FULL_FAST = "f"
    SAMPLED_FAST = "s"

    @property
    def prefix(self) -> str:
        return self.value


@dataclass(frozen=True)
class Digest:
    """A hash value tagged with the strategy that produced it.

    Digests from different strategies never compare equal, even when the
    hex values happen to match.
    """

    strategy: Strategy
    hex_value: str

    def __str__(self) -> str:
        return self.strategy.prefix + self.hex_value

    def is_comparable(self, other: "Digest") -> bool:
        return self.strategy is other.strategy


class HashObject(Protocol):
    def update(self, data: bytes) -> None: ...

    def digest(self) -> bytes: ...


class Crc32:
    """CRC-32 (IEEE) with the hashlib interface; digest() is 4 big-endian bytes."""

    name = "crc32"
    digest_size = 4

    def __init__(self, data: bytes = b""):
        self._crc = zlib.crc32(data)

    def update(self, data: bytes) -> None:
        self._crc = zlib.crc32(data, self._crc)

    def digest(self) -> bytes:
        return (self._crc & 0xFFFFFFFF).to_bytes(4, "big")

    def hexdigest(self) -> str:
        return self.digest().hex()


@dataclass(frozen=True)
class HashPolicy:
    """Hash factories used for thorough (strong) and quick (fast) digests."""

    strong: Callable[[], HashObject] = hashlib.sha512
    fast: Callable[[], HashObject] = Crc32


DEFAULT_POLICY = HashPolicy()


_FILE_TYPE_NAMES = [
    (stat.S_ISDIR, "directory"),
    (stat.S_ISLNK, "symbolic link"),
    (stat.S_ISCHR, "character device"),
    (stat.S_ISBLK, "block device"),
    (stat.S_ISFIFO, "named pipe"),
    (stat.S_ISSOCK, "socket"),
]


def _file_type_name(mode: int) -> str:
    for check, name in _FILE_TYPE_NAMES:
        if check(mode):
            return name
    return "special file"


def choose_strategy(file_size: int, is_thorough: bool) -> Strategy:
    if is_thorough:
        return Strategy.FULL_STRONG
    if file_size <= THRESHOLD_FILE_SIZE:
        return Strategy.FULL_FAST
    return Strategy.SAMPLED_FAST


def _update(h: HashObject, data: bytes, path) -> None:
    try:
        h.update(data)
    except Exception as exc:
        raise HashComputationError(path, str(exc)) from exc


def _hash_full_file(h: HashObject, path: os.PathLike | str, expected_size: int) -> None:
    """Feed the whole file into h, read in 64 KB chunks.

    The bytes read must add up to ``expected_size``, the size seen by stat;
    a file that shrank or grew since then is a ReadError.
    """
    try:
        f = open(path, "rb")
    except OSError as exc:
        raise ReadError(path, "open", str(exc)) from exc

    total = 0
    with f:
        while True:
            try:
                chunk = f.read(CHUNK_SIZE)
            except OSError as exc:
                raise ReadError(path, "full", str(exc)) from exc
            if not chunk:
                break
            total += len(chunk)
            _update(h, chunk, path)

    if total != expected_size:
        raise ReadError(path, "full", f"expected {expected_size} bytes, got {total}")


def compute_file_hash(
    path: os.PathLike | str,
    is_thorough: bool,
    file_stat: os.stat_result | None = None,
    policy: HashPolicy = DEFAULT_POLICY,
) -> Digest:
    """Return the tagged digest of a regular file.

    Thorough mode hashes the full content with the strong hash. Otherwise
    files up to THRESHOLD_FILE_SIZE are hashed in full, and larger files
    by their crucial bytes, with the fast hash.

    ``file_stat`` is the result of ``os.lstat(path)`` when the caller already
    has it. Raises OSError if stat fails, UnsupportedFileTypeError for
    anything but a regular file, ReadError and HashComputationError.
    """
    if file_stat is None:
        file_stat = os.lstat(path)
    if not stat.S_ISREG(file_stat.st_mode):
        raise UnsupportedFileTypeError(path, _file_type_name(file_stat.st_mode))

    file_size = file_stat.st_size
    strategy = choose_strategy(file_size, is_thorough)
    logger.debug("Hashing %s (%d bytes) with strategy %s", path, file_size, strategy.name)

    try:
        h = policy.strong() if strategy is Strategy.FULL_STRONG else policy.fast()
    except Exception as exc:
        raise HashComputationError(path, str(exc)) from exc

    if strategy is Strategy.SAMPLED_FAST:
        _update(h, sample_crucial_bytes(path, file_size), path)
    else:
        _hash_full_file(h, path, file_size)

    try:
        raw = h.digest()
    except Exception as exc:
        raise HashComputationError(path, str(exc)) from exc
    return Digest(strategy, raw.hex())
