"""
Variable-order Markov chain text generation over an n-gram trie.
"""

__version__ = "1.0.0"
