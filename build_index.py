"""
Build the inverted index from the Wikipedia abstract dump and print analytics.
Always rebuilds, overwriting any existing index file.

Usage:
    python build_index.py

Download enwiki-latest-abstract1.xml.gz into the project folder, then run this script.

Output:
  - enwiki.idx    (binary inverted index, term -> sorted doc ids)
  - Analytics table printed to console
"""

import argparse
import logging
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).resolve().parent))

from fts.codec import save_index
from fts.corpus import load_documents
from fts.errors import CorpusError
from fts.index_builder import build_index, get_corpus_path, get_index_path


def main() -> None:
    parser = argparse.ArgumentParser(description="Build full text search index from the abstract dump")
    parser.add_argument(
        "--corpus",
        type=Path,
        default=None,
        help="Path to the gzip abstract dump (default: enwiki-latest-abstract1.xml.gz)",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Output path for the index (default: enwiki.idx)",
    )
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    corpus_path = args.corpus or get_corpus_path()
    output_path = args.output or get_index_path()

    try:
        docs = load_documents(corpus_path)
    except CorpusError as e:
        print(f"Could not load corpus: {e}")
        sys.exit(1)
    if not docs:
        print("No <doc> entries found in the corpus.")
        sys.exit(1)

    index = build_index(docs)
    try:
        save_index(index, output_path)
    except OSError as e:
        print(f"Could not write index to {output_path}: {e}")
        sys.exit(1)

    index_size_kb = output_path.stat().st_size / 1024

    print("\n" + "=" * 50)
    print("INDEX ANALYTICS")
    print("=" * 50)
    print()
    print("| Metric                      | Value |")
    print("|-----------------------------|-------|")
    print(f"| Number of indexed documents | {len(docs)} |")
    print(f"| Number of unique terms      | {len(index)} |")
    print(f"| Total size of index (KB)    | {index_size_kb:.2f} |")
    print()
    print("=" * 50)
    print(f"\nIndex saved to: {output_path}")
    print()


if __name__ == "__main__":
    main()
