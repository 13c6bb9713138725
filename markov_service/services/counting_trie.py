"""
N-gram counting trie.

Every path from the root spells a token sequence observed in training; each
node counts how many times its sequence was learned. An order-N trie holds
counts for every context length from 1 up to N, which is what the predictor
backs off through.
"""
from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Dict, Iterable, Sequence

from markov_service.services.probability_trie import ProbabilityTrie
from markov_service.services.tokenizer import Token

logger = logging.getLogger(__name__)


@dataclass
class CountNode:
    """A node in the counting trie."""
    count: int = 0  # unused at the root
    children: Dict[Token, "CountNode"] = field(default_factory=dict)


@dataclass
class TrieStats:
    """Shape statistics for a counting trie."""
    node_count: int = 0
    depth: int = 0
    vocabulary_size: int = 0
    total_count: int = 0


class CountingTrie:
    """
    Counting trie trained from a token sequence.

    Not thread-safe: train from one thread, to completion, before deriving
    the probability trie.
    """

    def __init__(self):
        self.root = CountNode()

    def learn(self, sequence: Iterable[Token]):
        """
        Increment the count of every prefix of ``sequence``.

        Args:
            sequence: Tokens forming one path from the root
        """
        node = self.root
        for token in sequence:
            child = node.children.get(token)
            if child is None:
                child = CountNode()
                node.children[token] = child
            child.count += 1
            node = child

    def learn_many(self, sequences: Iterable[Sequence[Token]]):
        """Learn multiple sequences."""
        for seq in sequences:
            self.learn(seq)

    def learn_ngrams(self, sequence: Iterable[Token], order: int) -> "CountingTrie":
        """
        Train on a token sequence as an order-N chain.

        Each full window of ``order`` tokens is learned as it slides over the
        input. Afterwards the remaining suffixes of the final window are
        learned (lengths order-1 down to 1, or the whole short window down to
        1 when the input is shorter than ``order``), so every input position
        starts exactly one learned window.

        Args:
            sequence: Training tokens
            order: Window size (look-behind length), at least 1

        Returns:
            self
        """
        if order < 1:
            raise ValueError(f"order must be at least 1 (got {order})")

        window: deque = deque(maxlen=order)
        for token in sequence:
            window.append(token)
            if len(window) == order:
                self.learn(window)

        tail = list(window)
        start = 1 if len(tail) == order else 0
        for i in range(start, len(tail)):
            self.learn(tail[i:])

        logger.debug(f"[TRAIN] learned order-{order} n-grams, {len(self.root.children)} distinct tokens")
        return self

    def to_probability_trie(self) -> ProbabilityTrie:
        """Derive the normalized probability trie. The counts are left untouched."""
        return ProbabilityTrie.from_counting_trie(self)

    @property
    def is_empty(self) -> bool:
        return not self.root.children

    def get_stats(self) -> TrieStats:
        """Get trie statistics."""
        stats = TrieStats(
            vocabulary_size=len(self.root.children),
            total_count=sum(c.count for c in self.root.children.values()),
        )

        stack = [(self.root, 0)]
        while stack:
            node, depth = stack.pop()
            stats.node_count += 1
            stats.depth = max(stats.depth, depth)
            for child in node.children.values():
                stack.append((child, depth + 1))

        return stats
