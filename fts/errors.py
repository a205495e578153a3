"""Exceptions raised by the full-text search package."""


class FtsError(Exception):
    """Base class for all fatal errors in this package."""


class CorpusError(FtsError):
    """The document corpus is missing, cannot be decompressed, or is malformed."""


class IndexFileError(FtsError):
    """The index file location could not be inspected (neither present nor absent)."""

    def __init__(self, path, cause: OSError) -> None:
        super().__init__(f"Could not inspect index file {path}: {cause}")
        self.path = path
        self.cause = cause


class IndexCorruptError(FtsError):
    """A persisted index exists but cannot be decoded."""
