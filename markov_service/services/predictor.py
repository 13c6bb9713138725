"""
Next-token prediction over a probability trie with back-off.

The longest suffix of the history that exists in the trie (and has observed
continuations) selects the distribution to sample from. When nothing matches,
the root distribution (unconditional token frequencies) is used.
"""
from __future__ import annotations

import random
from typing import List, Mapping, Optional, Sequence

from markov_service.services.probability_trie import ProbabilityTrie, ProbNode
from markov_service.services.tokenizer import Token

# Returned by predict() when the trie holds no data at all
NO_PREDICTION = None


class Predictor:
    """
    Samples tokens from a ProbabilityTrie.

    The trie is only read, so several predictors may share one trie. Each
    predictor owns its random source.
    """

    def __init__(self, trie: ProbabilityTrie, rng: Optional[random.Random] = None):
        """
        Args:
            trie: Trained probability trie
            rng: Random source; an unseeded ``random.Random`` when omitted
        """
        self.trie = trie
        self.rng = rng if rng is not None else random.Random()

    def predict(self, history: Sequence[Token]) -> Optional[Token]:
        """
        Predict the token following ``history``.

        The exact context is tried first; on a miss (unknown token on the
        walk, or a context with no observed continuation) the oldest token is
        dropped and the walk retried. At most ``len(history)`` reductions.

        Args:
            history: Recent tokens, oldest first

        Returns:
            Sampled token, or NO_PREDICTION if the trie is empty
        """
        context = tuple(history)
        while True:
            node = self.trie.find(context)
            if node is not None and node.children:
                return self._sample(node.children)
            if not context:
                return NO_PREDICTION
            context = context[1:]

    def generate(self, seed_history: Sequence[Token], count: int) -> List[Token]:
        """
        Generate ``count`` tokens over a rolling window.

        Each prediction drops the oldest token of the window and appends the
        predicted one, so the window keeps the seed's length.

        Args:
            seed_history: Initial window
            count: Number of tokens to generate

        Returns:
            Generated tokens (shorter than ``count`` only for an empty trie)
        """
        if count < 0:
            raise ValueError(f"count must be non-negative (got {count})")

        window = list(seed_history)
        output: List[Token] = []

        for _ in range(count):
            token = self.predict(window)
            if token is NO_PREDICTION:
                break
            output.append(token)
            window = window[1:] + [token] if window else [token]

        return output

    def _sample(self, children: Mapping[Token, ProbNode]) -> Token:
        # ascending probability; sort is stable so ties keep insertion order
        choices = sorted(children.items(), key=lambda item: item[1].probability)

        r = self.rng.random()
        cum = 0.0
        for token, child in choices:
            cum += child.probability
            if r < cum:
                return token
        return choices[-1][0]
