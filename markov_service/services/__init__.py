"""
Markov chain services: tokenizer, counting trie, probability trie,
predictor and DOT visualizer.
"""
from .counting_trie import CountingTrie, CountNode, TrieStats
from .markov import MarkovChain, train_from_corpus
from .predictor import NO_PREDICTION, Predictor
from .probability_trie import ProbabilityTrie, ProbNode
from .tokenizer import TokenKind, join_tokens, parse_kind, tokenize
from .visualizer import iter_children, to_dot, write_dot

__all__ = [
    "CountingTrie",
    "CountNode",
    "TrieStats",
    "MarkovChain",
    "train_from_corpus",
    "NO_PREDICTION",
    "Predictor",
    "ProbabilityTrie",
    "ProbNode",
    "TokenKind",
    "join_tokens",
    "parse_kind",
    "tokenize",
    "iter_children",
    "to_dot",
    "write_dot",
]
