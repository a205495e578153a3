"""
Binary persistence for the inverted index.

The whole term -> posting list mapping is pickled inside a small envelope
that records the format name and version, so a stale or foreign file is
reported as corrupt instead of being half-used. The file is trusted:
pickle is not safe against crafted input.
"""

import logging
import os
import pickle
import tempfile
from pathlib import Path
from typing import BinaryIO

from .errors import IndexCorruptError
from .posting import InvertedIndex

logger = logging.getLogger(__name__)

FORMAT_NAME = "fts-inverted-index"
FORMAT_VERSION = 1


def _envelope(index: InvertedIndex) -> dict:
    return {
        "format": FORMAT_NAME,
        "version": FORMAT_VERSION,
        "postings": index.to_dict(),
    }


def dumps_index(index: InvertedIndex) -> bytes:
    """Serialize index to a binary blob."""
    return pickle.dumps(_envelope(index), protocol=pickle.HIGHEST_PROTOCOL)


def loads_index(data: bytes) -> InvertedIndex:
    """Decode a blob produced by dumps_index."""
    try:
        obj = pickle.loads(data)
    except Exception as e:
        raise IndexCorruptError(f"Could not decode index: {e}") from e
    if not isinstance(obj, dict) or obj.get("format") != FORMAT_NAME:
        raise IndexCorruptError("Not an inverted index file")
    if obj.get("version") != FORMAT_VERSION:
        raise IndexCorruptError(f"Unsupported index version: {obj.get('version')!r}")
    postings = obj.get("postings")
    if not isinstance(postings, dict):
        raise IndexCorruptError("Index file has no postings mapping")
    return InvertedIndex.from_dict(postings)


def _current_umask() -> int:
    umask = os.umask(0)
    os.umask(umask)
    return umask


def save_index(index: InvertedIndex, destination: Path | str | BinaryIO) -> None:
    """
    Write index to destination (a path or a writable binary file).
    For paths the blob goes to a temporary sibling first and is then moved
    into place, so a failed write never leaves a truncated index behind.
    """
    data = dumps_index(index)
    if hasattr(destination, "write"):
        destination.write(data)
        return

    path = Path(destination)
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=path.name + ".", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        # mkstemp creates 0600; give the index the mode a plain open() would.
        os.chmod(tmp_name, 0o666 & ~_current_umask())
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise
    logger.info("Saved index with %d terms to %s (%d bytes)", len(index), path, len(data))


def load_index(source: Path | str | BinaryIO) -> InvertedIndex:
    """
    Read a whole index from source (a path or a readable binary file).
    Raises IndexCorruptError if the content cannot be decoded.
    """
    if hasattr(source, "read"):
        return loads_index(source.read())
    with open(source, "rb") as f:
        data = f.read()
    index = loads_index(data)
    logger.info("Loaded index with %d terms from %s", len(index), source)
    return index
