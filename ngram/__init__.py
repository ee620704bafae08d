"""
Smoothed N-gram Distribution Package

N-gram distributions of words or characters, smoothed with absolute
discounting recursively down to the unigram level, for scoring and
generating text.
"""

from .model import NgramDistribution, BaseDistribution
from .corpus import Document, load_documents, load_brown_corpus
from .tokenizer import BaseTokenizer, WordTokenizer, CharacterTokenizer, get_tokenizer
from .errors import (
    NgramError, DegenerateInput, OutOfRangeQuery,
    ZeroProbabilityEvent, UnderflowDocument
)

__version__ = "0.1.0"
__all__ = [
    "NgramDistribution", "BaseDistribution",
    "Document", "load_documents", "load_brown_corpus",
    "BaseTokenizer", "WordTokenizer", "CharacterTokenizer", "get_tokenizer",
    "NgramError", "DegenerateInput", "OutOfRangeQuery",
    "ZeroProbabilityEvent", "UnderflowDocument",
]
