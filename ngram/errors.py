"""
Exceptions raised by the n-gram distribution.

Unseen contexts are not errors: lookups for them simply return 0.0.
"""

from typing import Optional


class NgramError(Exception):
    """Base class for all n-gram model errors."""


class DegenerateInput(NgramError, ValueError):
    """The model was asked to do work its training data cannot support."""


class OutOfRangeQuery(NgramError, IndexError):
    """A per-order table was requested for an order outside [0, N]."""

    def __init__(self, k: int, n: int):
        super().__init__(f"order {k} is outside [0, {n}]")
        self.k = k
        self.n = n


class ZeroProbabilityEvent(NgramError, ValueError):
    """An observed n-gram has probability zero under the model."""

    def __init__(self, context: str, token: str, position: Optional[int] = None):
        where = f" at position {position}" if position is not None else ""
        super().__init__(
            f"zero probability for {token!r} after context {context!r}{where}"
        )
        self.context = context
        self.token = token
        self.position = position


class UnderflowDocument(NgramError, ValueError):
    """A document is too short to contain a single order-N window."""

    def __init__(self, num_tokens: int, n: int):
        super().__init__(
            f"document has {num_tokens} token(s), at least {n} are needed"
        )
        self.num_tokens = num_tokens
        self.n = n
