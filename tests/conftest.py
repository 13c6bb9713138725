"""
Shared pytest fixtures for Markov chain tests.
"""
from pathlib import Path
from typing import List

import pytest

from markov_service.services.counting_trie import CountingTrie, CountNode


# Order-2 scenario: a->b twice, a->c once, b->a twice
SCENARIO_TOKENS = ["a", "b", "a", "b", "a", "c"]

# Every token has exactly one successor, so generation is deterministic
CYCLE_TEXT = "x y z x y z"

SAMPLE_CORPUS = """
The universe is full of amazing wonders and the stars are beautiful tonight.
I love exploring new planets and stars with a friend.
Would you like to play a game together with the stars?
Friends always support each other and the universe is kind.
"""


class FixedRandom:
    """Random stand-in returning preset draws in order (last one repeats)."""

    def __init__(self, *values: float):
        self.values = list(values)

    def random(self) -> float:
        if len(self.values) > 1:
            return self.values.pop(0)
        return self.values[0]


@pytest.fixture
def scenario_tokens() -> List[str]:
    return list(SCENARIO_TOKENS)


@pytest.fixture
def scenario_trie(scenario_tokens) -> CountingTrie:
    """Order-2 counting trie trained on the scenario tokens."""
    return CountingTrie().learn_ngrams(scenario_tokens, 2)


@pytest.fixture
def sample_tokens() -> List[str]:
    return SAMPLE_CORPUS.split()


@pytest.fixture
def corpus_path(tmp_path) -> Path:
    """Temporary corpus file with a deterministic cycle."""
    file_path = tmp_path / "in.txt"
    file_path.write_text(CYCLE_TEXT, encoding="utf-8")
    return file_path


# Helper functions for tests


def level_sums(root: CountNode) -> List[int]:
    """Summed counts per depth (index 0 is depth 1)."""
    sums: List[int] = []
    level = list(root.children.values())
    while level:
        sums.append(sum(n.count for n in level))
        level = [c for n in level for c in n.children.values()]
    return sums


def iter_nodes(root):
    """Yield every node of a trie (CountNode or ProbNode)."""
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(node.children.values())
