"""
Chunked MD5 hashing.

Streams a binary file object in fixed-size windows and produces one hex digest per window,
as expected by the `md5s` array of an app manifest asset.
"""

from __future__ import annotations

import hashlib
import logging
from typing import BinaryIO, Iterator, List

from appmanifest.errors import InvalidChunkSize, ReadError

logger = logging.getLogger(__name__)

# Upper bound for a single read() call; chunks larger than this are filled in several reads.
READ_BLOCK_SIZE = 1024 * 1024


def check_chunk_size(chunk_size: int) -> None:
    if isinstance(chunk_size, bool) or not isinstance(chunk_size, int):
        raise InvalidChunkSize(f"Chunk size must be an integer, got {chunk_size!r}")
    if chunk_size <= 0:
        raise InvalidChunkSize(f"Chunk size must be positive, got {chunk_size}")


def _fill(hasher, stream: BinaryIO, size: int) -> int:
    """Feed up to `size` bytes from `stream` into `hasher`; return the byte count consumed."""
    consumed = 0
    while consumed < size:
        try:
            block = stream.read(min(size - consumed, READ_BLOCK_SIZE))
        except OSError as e:
            raise ReadError(f"Read failed after {consumed} bytes of chunk: {e}") from e
        if not block:
            break
        hasher.update(block)
        consumed += len(block)
    return consumed


def iter_chunk_md5s(stream: BinaryIO, chunk_size: int) -> Iterator[str]:
    """
    Yield the hex MD5 of each consecutive `chunk_size` window of `stream`.

    The final window may be shorter. An empty stream yields nothing, and a stream whose
    length is a multiple of `chunk_size` yields no trailing empty-chunk digest.
    The stream is consumed but not closed.

    Raises:
        InvalidChunkSize: chunk_size is not a positive integer
        ReadError: the stream raised OSError mid-read
    """
    check_chunk_size(chunk_size)

    hasher = hashlib.md5()
    while True:
        n = _fill(hasher, stream, chunk_size)
        if n > 0:
            yield hasher.hexdigest()
            hasher = hashlib.md5()
        if n < chunk_size:
            return


def calculate_md5s(stream: BinaryIO, chunk_size: int) -> List[str]:
    """Return the list of per-chunk hex MD5 digests for `stream`."""
    md5s = list(iter_chunk_md5s(stream, chunk_size))
    logger.debug(f"Hashed {len(md5s)} chunks of up to {chunk_size} bytes")
    return md5s


def md5_range(stream: BinaryIO, offset: int, length: int) -> str:
    """Hash `length` bytes starting at `offset` of a seekable stream."""
    try:
        stream.seek(offset)
    except OSError as e:
        raise ReadError(f"Seek to offset {offset} failed: {e}") from e
    hasher = hashlib.md5()
    _fill(hasher, stream, length)
    return hasher.hexdigest()
