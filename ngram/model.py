"""
Smoothed N-gram Distribution

This module contains the NgramDistribution class: a distribution over
n-grams of words or characters smoothed with absolute discounting against
the (n-1)-gram distribution, recursively down to the unigram level.
"""

import logging
import math
import random
from collections import Counter, defaultdict, deque
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from .corpus import Document, load_documents
from .errors import DegenerateInput, OutOfRangeQuery, UnderflowDocument, ZeroProbabilityEvent
from .smoothing import AbsoluteDiscounting, absolute_discount
from .tokenizer import BaseTokenizer, WordTokenizer


logger = logging.getLogger(__name__)

ProbTable = Mapping[str, Mapping[str, float]]
FreqTable = Mapping[str, Mapping[str, int]]
Corpus = Union[Document, Iterable[Document]]

_EMPTY_TABLE: Mapping = MappingProxyType({})


class BaseDistribution:
    """
    Order-0 base case of the distribution chain.

    Every token has probability zero and the table is empty, which makes the
    backoff term of the unigram level vanish.
    """

    n = 0
    discount = 0.0

    def prob(self, prev, word: Optional[str] = None) -> float:
        return 0.0

    def n_value(self) -> int:
        return 0

    def kth_distribution(self, k: int) -> ProbTable:
        if k != 0:
            raise OutOfRangeQuery(k, 0)
        return _EMPTY_TABLE

    def kth_frequencies(self, k: int) -> FreqTable:
        if k != 0:
            raise OutOfRangeQuery(k, 0)
        return _EMPTY_TABLE

    def kth_discount(self, k: int) -> float:
        if k != 0:
            raise OutOfRangeQuery(k, 0)
        return 0.0


class NgramDistribution:
    """
    Smoothed distribution of n-grams

    Built once from a training corpus and read-only afterwards, so a trained
    instance can be shared between threads.

    Attributes:
        n: The order of the distribution (2 for bigrams, 3 for trigrams, ...)
        tokenizer: Tokenizer used for training and for scoring documents
        lower: The (n-1)-order distribution, or the base case when n is 1
        discount: Absolute discounting constant D of this order
        training_stats: Summary of the training pass for this order
    """

    def __init__(self, n: int, corpus: Corpus,
                 tokenizer: Optional[BaseTokenizer] = None):
        """
        Train the distribution, lower orders first.

        Args:
            n: Order of the distribution, at least 1
            corpus: A document or an iterable of documents
            tokenizer: Tokenizer producing the n-gram windows (default: words)
        """
        if n < 1:
            raise DegenerateInput("n must be at least 1")

        self.n = n
        self.tokenizer = tokenizer or WordTokenizer()

        documents = [corpus] if isinstance(corpus, Document) else list(corpus)

        if n > 1:
            self.lower = NgramDistribution(n - 1, documents, self.tokenizer)
        else:
            self.lower = BaseDistribution()

        self._freqs = self._calc_freqs(documents)
        self.discount = absolute_discount(self._freqs)
        self._dist = self._calc_dist()

        self.training_stats: Dict = {
            'n': self.n,
            'tokenizer': self.tokenizer.name,
            'num_documents': len(documents),
            'unique_contexts': len(self._freqs),
            'unique_ngrams': sum(len(c) for c in self._freqs.values()),
            'total_ngrams': sum(sum(c.values()) for c in self._freqs.values()),
            'discount': self.discount
        }

        logger.debug("Built order-%d distribution: %d contexts, %d distinct n-grams, D=%.4f",
                     n, self.training_stats['unique_contexts'],
                     self.training_stats['unique_ngrams'], self.discount)

    @classmethod
    def from_path(cls, path: Union[str, Path], n: int,
                  tokenizer: Optional[BaseTokenizer] = None,
                  pattern: str = "*.txt") -> 'NgramDistribution':
        """Train on a text file, or on every matching file in a directory."""
        return cls(n, load_documents(path, pattern=pattern), tokenizer)

    def _calc_freqs(self, documents: List[Document]) -> Dict[str, Dict[str, int]]:
        """Count every n-gram of this order in the training documents."""
        freqs: Dict[str, Counter] = defaultdict(Counter)
        for document in documents:
            for context, token in self.tokenizer.tokenize(document, self.n):
                freqs[context][token] += 1

        if not freqs:
            logger.warning("No %d-grams in the training data; order %d falls back "
                           "to an unsmoothed, empty distribution", self.n, self.n)

        return {context: dict(counts) for context, counts in freqs.items()}

    def _calc_dist(self) -> Dict[str, Mapping[str, float]]:
        """
        Calculate the smoothed distribution of this order.

        P_AD(word|prev) = max(c(prev word) - D, 0) / c(prev)
                          + D / c(prev) * |S(prev)| * P_AD(word)

        The lower order must already be trained.
        """
        dist = {}
        for context, continuations in self._freqs.items():
            smoother = AbsoluteDiscounting(self.discount, continuations)
            dist[context] = MappingProxyType({
                word: smoother.smooth(count, self.lower.prob(word))
                for word, count in continuations.items()
            })
        return dist

    def _context_key(self, prev: Union[str, Sequence[str]]) -> str:
        if isinstance(prev, str):
            return prev
        return self.tokenizer.join(prev)

    def _level(self, k: int):
        """Return the distribution of order k, validating the range."""
        if not 0 <= k <= self.n:
            raise OutOfRangeQuery(k, self.n)
        model = self
        while model.n > k:
            model = model.lower
        return model

    def prob(self, prev: Union[str, Sequence[str]], word: Optional[str] = None) -> float:
        """
        Probability of a token, with or without context.

        prob(prev, word) looks `word` up after the (n-1)-token context `prev`
        in this order's table. An unseen context gives 0.0; there is no
        automatic backoff to lower orders.

        prob(word) is the unigram probability of `word`.

        Args:
            prev: Context as a joined string or a sequence of tokens, or the
                  token itself when `word` is omitted
            word: The continuation token

        Returns:
            Probability in [0, 1]
        """
        if word is None:
            if self.n > 1:
                return self.lower.prob(prev)
            return self._dist.get("", _EMPTY_TABLE).get(prev, 0.0)

        return self._dist.get(self._context_key(prev), _EMPTY_TABLE).get(word, 0.0)

    def n_value(self) -> int:
        """Return the value of N for this model."""
        return self.n

    def kth_distribution(self, k: int) -> ProbTable:
        """Read-only probability table of order k, 0 <= k <= N."""
        model = self._level(k)
        if k == 0:
            return model.kth_distribution(0)
        return MappingProxyType(model._dist)

    def kth_frequencies(self, k: int) -> FreqTable:
        """Read-only frequency table of order k, 0 <= k <= N."""
        model = self._level(k)
        if k == 0:
            return model.kth_frequencies(0)
        return MappingProxyType({
            context: MappingProxyType(counts) for context, counts in model._freqs.items()
        })

    def kth_discount(self, k: int) -> float:
        """Discount constant of order k, 0 <= k <= N."""
        return self._level(k).discount

    def next_token_distribution(self, context: Union[str, Sequence[str]],
                                top_k: int = 10) -> List[Tuple[str, float]]:
        """
        Most probable continuations of a context at this order.

        Args:
            context: The (n-1)-token context
            top_k: Number of continuations to return

        Returns:
            List of (token, probability) tuples, most probable first
        """
        dist = self._dist.get(self._context_key(context), _EMPTY_TABLE)
        ranked = sorted(dist.items(), key=lambda x: (-x[1], x[0]))
        return ranked[:top_k]

    def _tokens_of(self, document: Union[Document, str, Sequence[str]]) -> List[str]:
        if isinstance(document, Document):
            return self.tokenizer.tokens(document.content)
        if isinstance(document, str):
            return self.tokenizer.tokens(document)
        return list(document)

    def score(self, document: Union[Document, str, Sequence[str]]) -> Tuple[float, int]:
        """
        Log-likelihood of a document together with the number of n-grams scored.

        Raises:
            ZeroProbabilityEvent: if any n-gram of the document has probability 0
        """
        tokens = self._tokens_of(document)
        total = 0.0
        num_windows = 0
        for position, (context, token) in enumerate(self.tokenizer.windows(tokens, self.n)):
            p = self.prob(context, token)
            if p <= 0.0:
                raise ZeroProbabilityEvent(context, token, position)
            total += math.log(p)
            num_windows += 1
        return total, num_windows

    def log_likelihood(self, document: Union[Document, str, Sequence[str]]) -> float:
        """
        Natural-log likelihood of a document under this model.

        Raises:
            ZeroProbabilityEvent: if any n-gram of the document has probability 0
        """
        total, _ = self.score(document)
        return total

    def perplexity(self, document: Union[Document, str, Sequence[str]]) -> float:
        """
        Perplexity = exp(-log_likelihood / number of n-grams)

        Raises:
            UnderflowDocument: if the document has fewer than N tokens
            ZeroProbabilityEvent: if any n-gram of the document has probability 0
        """
        tokens = self._tokens_of(document)
        if len(tokens) < self.n:
            raise UnderflowDocument(len(tokens), self.n)
        total, num_windows = self.score(tokens)
        return math.exp(-total / num_windows)

    def _get_word(self, rand: float, dist: Mapping[str, float]) -> Optional[str]:
        """
        Select a token whose cumulative probability interval contains `rand`.

        Returns None when `rand` falls in the mass reserved for the lower
        order. The unigram level has no lower order, so it spreads `rand`
        over its observed mass instead.
        """
        words = sorted(dist)
        if self.n == 1:
            total = sum(dist[w] for w in words)
            if total <= 0.0:
                return words[int(rand * len(words))]
            rand *= total

        cumulative = 0.0
        for word in words:
            cumulative += dist[word]
            if rand < cumulative:
                return word

        return words[-1] if self.n == 1 else None

    def _get_prev(self, rand: float) -> List[str]:
        """
        Pick N-1 starting tokens from the contexts seen at this order.

        Contexts are walked in sorted order, each weighted by how often it
        was seen, and the one whose interval contains `rand` is split back
        into tokens.
        """
        contexts = sorted(self._freqs)
        weights = [sum(self._freqs[c].values()) for c in contexts]
        rand *= sum(weights)

        cumulative = 0
        for context, weight in zip(contexts, weights):
            cumulative += weight
            if rand < cumulative:
                return self.tokenizer.split(context)
        return self.tokenizer.split(contexts[-1])

    def _next_token(self, history: Sequence[str], rng: random.Random) -> str:
        context = list(history)
        model = self._level(len(context) + 1)
        while True:
            dist = model._dist.get(self.tokenizer.join(context))
            if dist:
                token = model._get_word(rng.random(), dist)
                if token is not None:
                    return token
            # unseen context or backoff mass: drop the oldest token
            context = context[1:]
            model = model.lower

    def random_sentence(self, seed: int, num_words: int) -> str:
        """
        Generate a random sentence from this model.

        The sentence opens on an (N-1)-token context seen in training, drawn
        in proportion to its count, then continues token by token. The same
        seed on the same trained model always produces the same sentence.

        Args:
            seed: Seed of the per-call random generator
            num_words: Number of tokens to generate

        Returns:
            The generated tokens joined by the tokenizer's separator
        """
        if num_words < 0:
            raise ValueError("num_words must be non-negative")
        if num_words == 0:
            return ""
        if not self.kth_distribution(1):
            raise DegenerateInput("cannot generate from a model with no observed tokens")

        rng = random.Random(seed)
        history = deque(maxlen=self.n - 1)
        words = []
        if self.n > 1 and self._freqs:
            history.extend(self._get_prev(rng.random()))
            words.extend(list(history)[:num_words])

        while len(words) < num_words:
            token = self._next_token(tuple(history), rng)
            words.append(token)
            history.append(token)

        return self.tokenizer.join(words)
