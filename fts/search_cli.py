"""
Command-line search over the Wikipedia abstract index.

- Loads the cached index file, or builds it from the corpus on first run.
- Queries use the same analyzer as indexing and have AND semantics.
- Results are document ids in ascending order (no ranking).

Usage:
    fts-search small wild cat
    fts-search --show-docs "small wild cat"
    fts-search              # interactive loop
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Iterable, List, Sequence

from .corpus import load_documents
from .errors import FtsError
from .index_builder import get_corpus_path, get_index_path, load_or_build
from .posting import Document, InvertedIndex

logger = logging.getLogger(__name__)


def print_results(ids: List[int], docs: Sequence[Document] | None = None) -> None:
    """Print the matching ids, and the matching documents when docs is given."""
    print(ids)
    if docs is None:
        return
    for doc_id in ids:
        if 0 <= doc_id < len(docs):
            doc = docs[doc_id]
            print(f"[{doc_id}]\t{doc.title}\n\t{doc.text}")
        else:
            print(f"[{doc_id}]\t<doc {doc_id} not in corpus>")


def run_search_loop(index: InvertedIndex, docs: Sequence[Document] | None = None) -> None:
    """
    Interactive command-line search loop.
    """
    print("Enter queries (AND semantics). Empty line or Ctrl+C to exit.")
    while True:
        try:
            raw_query = input("query> ").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            break
        if not raw_query:
            break
        print_results(index.search(raw_query), docs)


def main(argv: Iterable[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Full text search over a Wikipedia abstract dump.")
    parser.add_argument(
        "query",
        nargs="*",
        help="Query words. Omit to start an interactive loop.",
    )
    parser.add_argument(
        "--index",
        type=Path,
        default=None,
        help="Path to the index file (default: $FTS_INDEX_PATH or enwiki.idx).",
    )
    parser.add_argument(
        "--corpus",
        type=Path,
        default=None,
        help="Path to the gzip abstract dump (default: $FTS_CORPUS_PATH or enwiki-latest-abstract1.xml.gz).",
    )
    parser.add_argument(
        "--rebuild",
        action="store_true",
        help="Rebuild the index from the corpus even if the index file exists.",
    )
    parser.add_argument(
        "--show-docs",
        action="store_true",
        help="Print title and abstract of each hit (re-reads the corpus, slow).",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level.",
    )
    args = parser.parse_args(list(argv) if argv is not None else None)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    index_path = args.index or get_index_path()
    corpus_path = args.corpus or get_corpus_path()

    try:
        result = load_or_build(index_path, corpus_path, rebuild=args.rebuild)
        docs = None
        if args.show_docs:
            docs = result.documents if result.documents is not None else load_documents(corpus_path)
    except FtsError as e:
        logger.error("%s", e)
        return 1

    if args.query:
        print_results(result.index.search(" ".join(args.query)), docs)
    else:
        run_search_loop(result.index, docs)

    if result.save_error is not None:
        logger.error("Index was not saved; the next run will rebuild it")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
