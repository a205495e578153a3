"""
Index builder: decides between loading the cached index file and rebuilding
it from the corpus.

The index file acts as a cache. If it exists it is trusted and loaded; if it
is missing the corpus is indexed and the result saved. Any other error while
checking for it is fatal.
"""

import enum
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from .codec import load_index, save_index
from .corpus import load_documents
from .errors import IndexCorruptError, IndexFileError
from .posting import Document, InvertedIndex

logger = logging.getLogger(__name__)

DEFAULT_INDEX_PATH = Path("enwiki.idx")
DEFAULT_CORPUS_PATH = Path("enwiki-latest-abstract1.xml.gz")

INDEX_PATH_ENV = "FTS_INDEX_PATH"
CORPUS_PATH_ENV = "FTS_CORPUS_PATH"


def get_index_path() -> Path:
    return Path(os.environ.get(INDEX_PATH_ENV) or DEFAULT_INDEX_PATH)


def get_corpus_path() -> Path:
    return Path(os.environ.get(CORPUS_PATH_ENV) or DEFAULT_CORPUS_PATH)


class IndexFileState(enum.Enum):
    EXISTS = "exists"
    MISSING = "missing"
    ERROR = "error"


@dataclass(frozen=True)
class IndexFileProbe:
    """Outcome of checking for the index file. error is set only for ERROR."""

    state: IndexFileState
    error: OSError | None = None


def probe_index_file(path: Path) -> IndexFileProbe:
    """Check for the index file, telling 'absent' apart from 'could not tell'."""
    try:
        os.stat(path)
    except FileNotFoundError:
        return IndexFileProbe(IndexFileState.MISSING)
    except OSError as e:
        return IndexFileProbe(IndexFileState.ERROR, e)
    return IndexFileProbe(IndexFileState.EXISTS)


class IndexOrigin(enum.Enum):
    LOADED = "loaded"
    BUILT = "built"


@dataclass
class IndexLoadResult:
    """
    Index ready for querying.
    - origin: whether it came from the cache file or a fresh build
    - save_error: set when a fresh build could not be written to disk
    - documents: the corpus read for a fresh build, None when loaded
    """

    index: InvertedIndex
    origin: IndexOrigin
    save_error: OSError | None = None
    documents: list[Document] | None = None


def build_index(documents: Iterable[Document]) -> InvertedIndex:
    """Build an in-memory inverted index from documents (ids ascending)."""
    index = InvertedIndex()
    index.add(documents)
    return index


def _build_and_save(index_path: Path, corpus_path: Path) -> IndexLoadResult:
    docs = load_documents(corpus_path)
    index = build_index(docs)
    logger.info("Indexed %d documents into %d terms", len(docs), len(index))
    try:
        save_index(index, index_path)
    except OSError as e:
        logger.error("Could not save index to %s: %s", index_path, e)
        return IndexLoadResult(index, IndexOrigin.BUILT, save_error=e, documents=docs)
    return IndexLoadResult(index, IndexOrigin.BUILT, documents=docs)


def load_or_build(
    index_path: Path,
    corpus_path: Path,
    *,
    rebuild: bool = False,
) -> IndexLoadResult:
    """
    Return an index, loading index_path when present and otherwise building
    from corpus_path and saving the result to index_path.
    - A corrupt or unreadable index file is rebuilt rather than treated as fatal.
    - Raises IndexFileError when the index path cannot be inspected.
    - Raises CorpusError when a build is needed and the corpus is unusable.
    """
    index_path = Path(index_path)
    corpus_path = Path(corpus_path)

    if rebuild:
        logger.info("Rebuild requested; ignoring %s", index_path)
        return _build_and_save(index_path, corpus_path)

    probe = probe_index_file(index_path)
    if probe.state is IndexFileState.EXISTS:
        logger.info("Full text search index exists; using %s", index_path)
        try:
            return IndexLoadResult(load_index(index_path), IndexOrigin.LOADED)
        except IndexCorruptError as e:
            logger.warning("Index file %s is corrupt (%s); rebuilding", index_path, e)
            return _build_and_save(index_path, corpus_path)
        except OSError as e:
            logger.warning("Index file %s is unreadable (%s); rebuilding", index_path, e)
            return _build_and_save(index_path, corpus_path)
    if probe.state is IndexFileState.MISSING:
        logger.info("Full text search index does not exist; rebuilding %s", index_path)
        return _build_and_save(index_path, corpus_path)
    raise IndexFileError(index_path, probe.error)
