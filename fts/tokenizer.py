"""
Text analyzer for the full-text search index.
Splits text into terms and runs them through a fixed filter chain:
tokenize -> lowercase -> stopword removal -> Snowball (English) stemming.

The same chain is applied when indexing documents and when parsing queries,
otherwise query terms would never match indexed terms.
"""

import re
from typing import Iterable, Iterator

from nltk import download as _nltk_download
from nltk.stem.snowball import SnowballStemmer

# Runs of Unicode letters and digits; underscore is a word char for re but a delimiter here.
_TOKEN_RE = re.compile(r"[^\W_]+")

STOPWORDS = frozenset(
    ["a", "and", "be", "have", "i", "in", "of", "that", "the", "to"]
)


def _load_stemmer() -> SnowballStemmer:
    """
    Snowball English stemmer that leaves Snowball's own stopwords unstemmed
    ("having" stays "having"). Needs the nltk stopwords corpus, fetched on first use.
    """
    try:
        return SnowballStemmer("english", ignore_stopwords=True)
    except LookupError:
        _nltk_download("stopwords", quiet=True)
        return SnowballStemmer("english", ignore_stopwords=True)


_STEMMER = _load_stemmer()


def tokenize(text: str) -> Iterator[str]:
    """
    Split text on every character that is neither a letter nor a digit.
    Punctuation, whitespace and symbols are all delimiters.
    """
    if not text:
        return
    for match in _TOKEN_RE.finditer(text):
        yield match.group(0)


def lowercase_filter(tokens: Iterable[str]) -> Iterator[str]:
    for token in tokens:
        yield token.casefold()


def stopword_filter(tokens: Iterable[str]) -> Iterator[str]:
    """Drop tokens found in STOPWORDS. Expects already lowercased input."""
    for token in tokens:
        if token not in STOPWORDS:
            yield token


def stem_token(word: str) -> str:
    """Return the Snowball (English) stem of word."""
    return _STEMMER.stem(word)


def stemmer_filter(tokens: Iterable[str]) -> Iterator[str]:
    for token in tokens:
        yield stem_token(token)


def analyze(text: str) -> Iterator[str]:
    """
    Turn raw text into a lazy sequence of normalized terms.
    Order follows the input; duplicates are kept.
    """
    tokens = tokenize(text)
    tokens = lowercase_filter(tokens)
    tokens = stopword_filter(tokens)
    return stemmer_filter(tokens)
