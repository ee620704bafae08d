"""
Corpus Loading

This module holds the document handle the model trains on and the loaders
that build documents from plain-text files or from the Brown corpus.
"""

import logging
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Union

import nltk
from nltk.corpus import brown


logger = logging.getLogger(__name__)


@dataclass
class Document:
    """
    A single training or evaluation document.

    Attributes:
        name: Identifier of the document (usually its path)
        content: Raw text of the document
    """
    name: str
    content: str
    _counts: Counter = field(default_factory=Counter, repr=False, compare=False)

    @classmethod
    def from_path(cls, path: Union[str, Path], encoding: str = "utf-8") -> "Document":
        """Read a document from a text file."""
        path = Path(path)
        return cls(name=str(path), content=path.read_text(encoding=encoding))

    @classmethod
    def from_text(cls, text: str, name: str = "<text>") -> "Document":
        return cls(name=name, content=text)

    def increment(self, token: str, amount: int = 1) -> None:
        """Accumulate `amount` occurrences of `token`."""
        if amount < 1:
            raise ValueError("amount must be at least 1")
        self._counts[token] += amount

    def counts(self) -> Dict[str, int]:
        """Return a copy of the accumulated token counts."""
        return dict(self._counts)


def load_documents(path: Union[str, Path], pattern: str = "*.txt",
                   encoding: str = "utf-8") -> List[Document]:
    """
    Load training documents from a file or a directory.

    Args:
        path: A text file (one document) or a directory
        pattern: Glob used to select files inside a directory
        encoding: Text encoding of the files

    Returns:
        List of documents, in sorted path order for directories
    """
    path = Path(path)
    if path.is_dir():
        files = sorted(p for p in path.glob(pattern) if p.is_file())
        if not files:
            logger.warning("No files matching %s in %s", pattern, path)
        return [Document.from_path(p, encoding=encoding) for p in files]
    if path.is_file():
        return [Document.from_path(path, encoding=encoding)]
    raise FileNotFoundError(f"No such corpus file or directory: {path}")


def ensure_nltk_data():
    """Download required NLTK data if not present."""
    try:
        nltk.data.find('corpora/brown')
    except LookupError:
        logger.info("Downloading Brown corpus...")
        nltk.download('brown', quiet=True)


def load_brown_corpus(categories: Optional[List[str]] = None,
                      lowercase: bool = False,
                      min_sentence_length: int = 1) -> List[Document]:
    """
    Load Brown corpus sentences as documents.

    Args:
        categories: Optional list of Brown corpus categories to load
                   (e.g., ['news', 'fiction', 'science_fiction'])
                   If None, loads all categories.
        lowercase: Whether to lowercase the text
        min_sentence_length: Minimum number of words in a sentence

    Returns:
        One document per sentence, tokens joined by single spaces
    """
    ensure_nltk_data()

    if categories:
        sents = brown.sents(categories=categories)
    else:
        sents = brown.sents()

    documents = []
    for idx, sent in enumerate(sents):
        tokens = [w.lower() if lowercase else w for w in sent]
        if len(tokens) >= min_sentence_length:
            documents.append(Document(name=f"brown:{idx}", content=" ".join(tokens)))

    logger.debug("Loaded %d Brown sentences", len(documents))
    return documents


def get_brown_categories() -> List[str]:
    """Return list of available Brown corpus categories."""
    ensure_nltk_data()
    return brown.categories()
