"""
Probability trie derived from a counting trie.

Same shape as the counting trie, but every child carries count / total, where
total is the summed count of its siblings. Built once, then read-only.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Mapping, Optional, Sequence

from markov_service.services.tokenizer import Token

if TYPE_CHECKING:
    from markov_service.services.counting_trie import CountingTrie, CountNode


@dataclass(frozen=True)
class ProbNode:
    """A node in the probability trie."""
    probability: float = 1.0  # unused at the root
    children: Mapping[Token, "ProbNode"] = field(default_factory=lambda: MappingProxyType({}))


def from_counts(node: "CountNode", probability: float = 1.0) -> ProbNode:
    """
    Convert a counting subtree into a probability subtree.

    Args:
        node: Counting node to convert
        probability: Probability assigned to the converted node itself

    Returns:
        ProbNode whose children's probabilities sum to 1 (or no children)
    """
    total = sum(child.count for child in node.children.values())

    children = {
        token: from_counts(child, child.count / total)
        for token, child in node.children.items()
    }
    return ProbNode(probability=probability, children=MappingProxyType(children))


class ProbabilityTrie:
    """Immutable probability trie; safe to share between predictors."""

    def __init__(self, root: ProbNode):
        self.root = root

    @classmethod
    def from_counting_trie(cls, trie: "CountingTrie") -> "ProbabilityTrie":
        return cls(from_counts(trie.root))

    @property
    def is_empty(self) -> bool:
        return not self.root.children

    def find(self, context: Sequence[Token]) -> Optional[ProbNode]:
        """
        Walk from the root along ``context``.

        Returns:
            The node reached, or None if some token has no matching edge
        """
        node = self.root
        for token in context:
            node = node.children.get(token)
            if node is None:
                return None
        return node

    def __eq__(self, other) -> bool:
        if not isinstance(other, ProbabilityTrie):
            return NotImplemented
        return self.root == other.root

    __hash__ = None  # type: ignore
