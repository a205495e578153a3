"""Full text search over a Wikipedia abstract dump."""

from .posting import Document, InvertedIndex, intersection
from .tokenizer import analyze, tokenize
from .codec import save_index, load_index
from .index_builder import build_index, load_or_build
