"""
Corpus loader for the Wikipedia abstract dump.

The dump is a gzip-compressed XML file shaped like:
    <feed>
      <doc><title>..</title><url>..</url><abstract>..</abstract>...</doc>
      ...
    </feed>
Each <doc> becomes a Document with a sequential id starting at 0.
The XML is parsed strictly and streamed, so a truncated or malformed
dump is an error rather than a partial corpus.
"""

import gzip
import hashlib
import io
import logging
import zlib
from pathlib import Path
from typing import BinaryIO

from lxml import etree

from .errors import CorpusError
from .posting import Document

logger = logging.getLogger(__name__)


def _child_text(doc_elem, name: str) -> str:
    """Text of the direct child element name, or empty string if missing."""
    child = doc_elem.find(name)
    if child is None:
        return ""
    return "".join(child.itertext())


def url_sha1(url: str) -> bytes:
    """SHA-1 digest of a document URL."""
    return hashlib.sha1(url.encode("utf-8")).digest()


def parse_documents(source: bytes | str | BinaryIO) -> list[Document]:
    """
    Parse abstract-dump XML into documents.
    source is the XML itself or a readable binary file.
    Raises CorpusError if the markup is malformed or has no <feed> root.
    """
    if isinstance(source, str):
        source = source.encode("utf-8")
    if isinstance(source, bytes):
        source = io.BytesIO(source)

    docs: list[Document] = []
    root = None
    try:
        for event, elem in etree.iterparse(source, events=("start", "end")):
            if root is None:
                if elem.tag != "feed":
                    raise CorpusError(f"Malformed corpus: root element is <{elem.tag}>, expected <feed>")
                root = elem
                continue
            if event != "end" or elem.tag != "doc" or elem.getparent() is not root:
                continue
            url = _child_text(elem, "url")
            docs.append(
                Document(
                    id=len(docs),
                    text=_child_text(elem, "abstract"),
                    title=_child_text(elem, "title"),
                    url=url,
                    url_sha1=url_sha1(url),
                )
            )
            # Drop parsed docs so the tree does not grow with the dump.
            elem.clear()
            while elem.getprevious() is not None:
                del root[0]
    except etree.XMLSyntaxError as e:
        raise CorpusError(f"Malformed corpus: {e}") from e
    return docs


def load_documents(path: Path) -> list[Document]:
    """
    Load all documents from a gzip-compressed abstract dump.
    """
    path = Path(path)
    logger.info("Loading documents from %s", path)
    try:
        with gzip.open(path, "rb") as gz:
            docs = parse_documents(gz)
    except FileNotFoundError as e:
        raise CorpusError(f"Corpus file not found: {path}") from e
    except (OSError, EOFError, zlib.error) as e:
        raise CorpusError(f"Could not decompress corpus {path}: {e}") from e
    logger.info("Loaded %d documents", len(docs))
    return docs
