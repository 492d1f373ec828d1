"""
App manifest builder.

Opens a package file, hashes it in `md5-size` chunks, and assembles the single-item,
single-asset manifest that `InstallEnterpriseApplication` clients download alongside the pkg.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import BinaryIO, List, Union

from appmanifest.errors import FileOpenError, StatError
from appmanifest.hashing import calculate_md5s, check_chunk_size
from appmanifest.models import SOFTWARE_PACKAGE_KIND, Asset, Manifest, ManifestItem
from appmanifest.plist_writer import write_manifest

logger = logging.getLogger(__name__)

DEFAULT_MD5_SIZE = 10 << 20  # 10MB


def clamp_chunk_size(requested: int, file_size: int) -> int:
    """Never hash in chunks larger than the file itself."""
    return min(requested, file_size)


def build_manifest(file_size: int, chunk_size: int, url: str, md5s: List[str]) -> Manifest:
    """Wrap pre-computed chunk hashes in a one-item, one-asset manifest (no metadata)."""
    asset = Asset(
        kind=SOFTWARE_PACKAGE_KIND,
        md5_size=clamp_chunk_size(chunk_size, file_size),
        md5s=md5s,
        url=url,
    )
    return Manifest(items=[ManifestItem(assets=[asset])])


def create_app_manifest(
    path: Union[str, Path],
    url: str = "",
    md5_size: int = DEFAULT_MD5_SIZE,
) -> Manifest:
    """
    Hash the file at `path` and build its app manifest.

    Args:
        path: Package file to describe
        url: URL of the package as it will be served
        md5_size: Requested chunk size in bytes; clamped to the file size

    Returns:
        Manifest with exactly one item holding exactly one asset

    Raises:
        InvalidChunkSize: md5_size is not a positive integer
        FileOpenError: the file cannot be opened
        StatError: the file size cannot be read
        ReadError: reading the file failed part way through
    """
    check_chunk_size(md5_size)

    path = Path(path)
    try:
        f = open(path, "rb")
    except OSError as e:
        raise FileOpenError(f"Cannot open {path}: {e}") from e

    with f:
        try:
            file_size = os.fstat(f.fileno()).st_size
        except OSError as e:
            raise StatError(f"Cannot stat {path}: {e}") from e

        chunk_size = clamp_chunk_size(md5_size, file_size)
        logger.info(f"Hashing {path} ({file_size} bytes) in chunks of {chunk_size} bytes")

        # An empty file has nothing to hash, and a zero chunk size is not a valid window.
        md5s = calculate_md5s(f, chunk_size) if file_size > 0 else []

    return build_manifest(file_size, chunk_size, url, md5s)


def write_app_manifest(
    path: Union[str, Path],
    url: str,
    sink: Union[str, Path, BinaryIO],
    md5_size: int = DEFAULT_MD5_SIZE,
    fmt: str = "xml",
) -> Manifest:
    """Build the manifest for `path` and serialize it to `sink`."""
    manifest = create_app_manifest(path, url=url, md5_size=md5_size)
    write_manifest(manifest, sink, fmt=fmt)
    return manifest
