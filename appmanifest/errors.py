"""
Error types raised by the manifest pipeline.

Every error wraps the underlying OSError / encoder error as its ``__cause__``.
"""


class AppManifestError(Exception):
    """Base class for all appmanifest failures."""


class FileOpenError(AppManifestError):
    """The input path is missing or cannot be opened."""


class StatError(AppManifestError):
    """The input file size could not be determined."""


class InvalidChunkSize(AppManifestError, ValueError):
    """Chunk size is not a positive integer."""


class ReadError(AppManifestError):
    """I/O failure while streaming the input file."""


class EncodeError(AppManifestError):
    """The manifest could not be serialized or written."""
