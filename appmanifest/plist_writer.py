"""
Plist serialization for app manifests.

XML output is indented with two spaces per level; plistlib itself emits tabs.
"""

from __future__ import annotations

import logging
import plistlib
import re
from pathlib import Path
from typing import BinaryIO, Union
from xml.parsers.expat import ExpatError

from appmanifest.errors import EncodeError
from appmanifest.models import Manifest

logger = logging.getLogger(__name__)

FORMATS = {
    "xml": plistlib.FMT_XML,
    "binary": plistlib.FMT_BINARY,
}

INDENT = b"  "

# Only indentation before markup; plistlib escapes "<" inside string values.
_LEADING_TABS = re.compile(rb"^\t+(?=<)", re.MULTILINE)


def _reindent(xml: bytes) -> bytes:
    return _LEADING_TABS.sub(lambda m: INDENT * len(m.group(0)), xml)


def dumps_manifest(manifest: Manifest, fmt: str = "xml") -> bytes:
    """Encode a manifest to plist bytes ("xml" or "binary")."""
    if fmt not in FORMATS:
        raise EncodeError(f"Unknown plist format: {fmt!r} (expected one of {sorted(FORMATS)})")

    try:
        data = plistlib.dumps(manifest.to_plist(), fmt=FORMATS[fmt], sort_keys=False)
    except (TypeError, OverflowError, ValueError) as e:
        raise EncodeError(f"Could not encode manifest: {e}") from e

    if fmt == "xml":
        data = _reindent(data)
    return data


def write_manifest(manifest: Manifest, sink: Union[str, Path, BinaryIO], fmt: str = "xml") -> int:
    """
    Serialize `manifest` and write it to `sink` (a path or binary file object).

    The document is fully encoded before anything is written, so an encoding failure
    leaves the sink untouched.

    Returns:
        Number of bytes written
    """
    data = dumps_manifest(manifest, fmt=fmt)

    try:
        if isinstance(sink, (str, Path)):
            path = Path(sink)
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "wb") as f:
                f.write(data)
            logger.info(f"Wrote {len(data)} bytes to {path}")
        else:
            sink.write(data)
            sink.flush()
    except OSError as e:
        raise EncodeError(f"Could not write manifest: {e}") from e

    return len(data)


def load_manifest(data: bytes) -> Manifest:
    """Parse XML or binary plist bytes back into a Manifest."""
    try:
        return Manifest.from_plist(plistlib.loads(data))
    except (
        plistlib.InvalidFileException,
        ExpatError,
        AttributeError,
        KeyError,
        TypeError,
        ValueError,
    ) as e:
        raise EncodeError(f"Not a valid app manifest: {e}") from e
