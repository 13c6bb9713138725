"""
Variable-order Markov chain text generator (CPU-only).
Supports word, character and line tokens and back-off to shorter contexts.
Models live in memory only.
"""
from __future__ import annotations

import logging
import random
from pathlib import Path
from typing import List, Optional, Sequence, Union

from markov_service.config import ConfigurationError
from markov_service.services.counting_trie import CountingTrie, TrieStats
from markov_service.services.predictor import Predictor
from markov_service.services.probability_trie import ProbabilityTrie
from markov_service.services.tokenizer import Token, TokenKind, join_tokens, parse_kind, tokenize
from markov_service.services.visualizer import to_dot, write_dot

logger = logging.getLogger(__name__)


class MarkovChain:
    def __init__(
        self,
        order: int = 5,
        kind: str = "word",
        rng: Optional[random.Random] = None,
    ):
        if order < 1:
            raise ConfigurationError(f"order must be at least 1 (got {order})")
        self.order = order
        self.kind: TokenKind = parse_kind(kind)
        self.rng = rng if rng is not None else random.Random()
        self.counts: Optional[CountingTrie] = None
        self.trie: Optional[ProbabilityTrie] = None

    @property
    def is_trained(self) -> bool:
        return self.trie is not None

    def train(self, text: str) -> "MarkovChain":
        return self.train_tokens(tokenize(text, self.kind))

    def train_tokens(self, tokens: Sequence[Token]) -> "MarkovChain":
        counts = CountingTrie().learn_ngrams(tokens, self.order)
        self.counts = counts
        self.trie = counts.to_probability_trie()
        logger.info(f"[TRAIN] {len(tokens)} {self.kind.value} tokens, order={self.order}")
        return self

    def generate(self, seed: str, amount: int, rng: Optional[random.Random] = None) -> List[Token]:
        """
        Generate ``amount`` tokens continuing ``seed``.

        Args:
            seed: Seed text, tokenized with the chain's kind
            amount: Number of tokens to generate
            rng: Random source for this call only (defaults to the chain's)

        Raises:
            ConfigurationError: if the seed has no tokens
            RuntimeError: if the chain was never trained
        """
        history = tokenize(seed, self.kind)
        if not history:
            raise ConfigurationError("seed should be non-empty")
        self._require_trained()
        predictor = Predictor(self.trie, rng if rng is not None else self.rng)
        return predictor.generate(history, amount)

    def generate_text(self, seed: str, amount: int, rng: Optional[random.Random] = None) -> str:
        return self.render(seed, self.generate(seed, amount, rng))

    def render(self, seed: str, tokens: Sequence[Token]) -> str:
        """Seed text followed by the generated tokens, joined per token kind."""
        if not tokens:
            return seed
        return seed + self.kind.separator + join_tokens(tokens, self.kind)

    def stats(self) -> TrieStats:
        if self.counts is None:
            return TrieStats()
        return self.counts.get_stats()

    def to_dot(self, source: str = "probability") -> str:
        """DOT graph of the probability trie or (``source="counts"``) the counting trie."""
        return to_dot(self._graph_root(source))

    def write_dot(self, path: Union[str, Path], source: str = "probability") -> Path:
        """Write the DOT graph of one of the tries to ``path``."""
        return write_dot(self._graph_root(source), path)

    # --- helpers ---
    def _graph_root(self, source: str):
        self._require_trained()
        if source == "counts":
            return self.counts.root
        if source == "probability":
            return self.trie.root
        raise ValueError(f"unknown graph source {source!r}")

    def _require_trained(self):
        if self.trie is None:
            raise RuntimeError("chain is not trained")


def train_from_corpus(text: str, order: int = 5, kind: str = "word", rng: Optional[random.Random] = None) -> MarkovChain:
    chain = MarkovChain(order=order, kind=kind, rng=rng)
    chain.train(text)
    return chain
