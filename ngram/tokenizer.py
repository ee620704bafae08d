"""
N-gram Tokenizers

Turn a document into its ordered token stream and into the
(context, continuation) windows the distribution counts.
"""

from abc import ABC, abstractmethod
from typing import Iterator, List, Sequence, Tuple

from nltk.tokenize import WhitespaceTokenizer

from .corpus import Document


class BaseTokenizer(ABC):
    """
    Abstract base class for n-gram tokenizers.

    A tokenizer fixes how text is split into tokens and how the first k-1
    tokens of a k-gram are joined into a context key.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the name of the tokenizer."""
        pass

    @property
    @abstractmethod
    def separator(self) -> str:
        """String placed between tokens in context keys and generated text."""
        pass

    @abstractmethod
    def tokens(self, text: str) -> List[str]:
        """
        Split a string into its ordered tokens.

        Args:
            text: Input text

        Returns:
            List of tokens, in document order
        """
        pass

    def join(self, tokens: Sequence[str]) -> str:
        """Join tokens into a context key (or readable text)."""
        return self.separator.join(tokens)

    def split(self, context: str) -> List[str]:
        """Split a context key back into its tokens."""
        if not context:
            return []
        return context.split(self.separator)

    def windows(self, tokens: Sequence[str], k: int) -> Iterator[Tuple[str, str]]:
        """
        Slide a window of k tokens across a token stream.

        Args:
            tokens: Ordered tokens of one document
            k: Window size (order of the n-grams)

        Yields:
            (context, continuation) pairs; the context is "" when k is 1
        """
        for i in range(k - 1, len(tokens)):
            yield self.join(tokens[i - k + 1:i]), tokens[i]

    def tokenize(self, document: Document, k: int) -> Iterator[Tuple[str, str]]:
        """
        Emit every k-gram of a document, accumulating them into the document.

        Args:
            document: Document to tokenize
            k: Order of the n-grams

        Yields:
            (context, continuation) pairs
        """
        for context, token in self.windows(self.tokens(document.content), k):
            document.increment(self.join([context, token]) if context else token)
            yield context, token


class WordTokenizer(BaseTokenizer):
    """Whitespace-delimited word tokens; punctuation stays attached."""

    def __init__(self, lowercase: bool = False):
        self.lowercase = lowercase
        self._splitter = WhitespaceTokenizer()

    @property
    def name(self) -> str:
        return "word"

    @property
    def separator(self) -> str:
        return " "

    def tokens(self, text: str) -> List[str]:
        if self.lowercase:
            text = text.lower()
        return self._splitter.tokenize(text)


class CharacterTokenizer(BaseTokenizer):
    """One token per character, whitespace included."""

    @property
    def name(self) -> str:
        return "char"

    @property
    def separator(self) -> str:
        return ""

    def tokens(self, text: str) -> List[str]:
        return list(text)

    def split(self, context: str) -> List[str]:
        return list(context)


def get_tokenizer(name: str, **kwargs) -> BaseTokenizer:
    """Factory function to create a tokenizer by name."""
    if name == "word":
        return WordTokenizer(**kwargs)
    elif name == "char":
        return CharacterTokenizer()
    else:
        raise ValueError(f"Unknown tokenizer: {name}")
