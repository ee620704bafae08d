"""
Absolute Discounting for N-gram Distributions

This module implements the pieces of absolute discounting smoothing that
operate on a single order of the model: the discount constant and the
smoothed probability of one continuation.

    P_AD(w|c) = max(count(c,w) - D, 0) / C(c) + (D / C(c)) * |S(c)| * P_lower(w)

Where C(c) is the number of times context c was seen, |S(c)| is the number
of distinct continuations observed after c, and P_lower is the probability
of w under the next lower order.
"""

from typing import Mapping, Tuple


def count_of_counts(freqs: Mapping[str, Mapping[str, int]]) -> Tuple[int, int]:
    """
    Count how many n-grams were seen exactly once and exactly twice.

    Args:
        freqs: Frequency table of one order

    Returns:
        Tuple of (n1, n2)
    """
    n1 = n2 = 0
    for continuations in freqs.values():
        for count in continuations.values():
            if count == 1:
                n1 += 1
            elif count == 2:
                n2 += 1
    return n1, n2


def absolute_discount(freqs: Mapping[str, Mapping[str, int]]) -> float:
    """
    Calculate D = n1 / (n1 + 2 * n2).

    An empty table, or one where every n-gram was seen three or more times,
    has no singletons or doubletons and gets D = 0 (plain maximum likelihood).
    """
    n1, n2 = count_of_counts(freqs)
    denominator = n1 + 2 * n2
    if denominator == 0:
        return 0.0
    return n1 / denominator


class AbsoluteDiscounting:
    """
    Absolute discounting for one context of one order.

    Attributes:
        discount: The discount constant D of the order
        context_count: Total count C(c) of the context
        num_types: Number of distinct continuations |S(c)|
    """

    def __init__(self, discount: float, continuations: Mapping[str, int]):
        self.discount = discount
        self.context_count = sum(continuations.values())
        self.num_types = len(continuations)

    @property
    def backoff_weight(self) -> float:
        """Interpolation weight given to the lower order: D * |S(c)| / C(c)."""
        if self.context_count == 0:
            return 0.0
        return self.discount * self.num_types / self.context_count

    def smooth(self, count: int, lower_prob: float) -> float:
        """Return the smoothed probability of a continuation seen `count` times."""
        if self.context_count == 0:
            return 0.0
        first_term = max(count - self.discount, 0) / self.context_count
        prob = first_term + self.backoff_weight * lower_prob
        return min(max(prob, 0.0), 1.0)
