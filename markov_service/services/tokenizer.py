"""
Corpus tokenization.

Splits raw text into the token sequence consumed by the counting trie:
- word: whitespace-delimited fields
- character: one token per Unicode code point
- line: one token per line (empty lines kept)
"""
from __future__ import annotations

from enum import Enum
from typing import List, Sequence, Union

from markov_service.config import ConfigurationError

Token = str


class TokenKind(str, Enum):
    WORD = "word"
    CHARACTER = "character"
    LINE = "line"

    @property
    def separator(self) -> str:
        """String placed between tokens when rendering them back to text."""
        return _SEPARATORS[self]


_SEPARATORS = {
    TokenKind.WORD: " ",
    TokenKind.CHARACTER: "",
    TokenKind.LINE: "\n",
}


def parse_kind(value: Union[str, TokenKind]) -> TokenKind:
    """
    Resolve a token kind name.

    Raises:
        ConfigurationError: if the value is not word, character or line
    """
    if isinstance(value, TokenKind):
        return value
    try:
        return TokenKind(str(value).strip().lower())
    except ValueError:
        raise ConfigurationError(
            f"kind should be 'word', 'character', or 'line' (got {value!r})"
        ) from None


def tokenize(text: str, kind: Union[str, TokenKind] = TokenKind.WORD) -> List[Token]:
    """
    Split text into tokens.

    Args:
        text: Raw text
        kind: Token kind name or TokenKind

    Returns:
        Ordered list of tokens
    """
    kind = parse_kind(kind)

    if kind is TokenKind.WORD:
        return text.split()
    if kind is TokenKind.CHARACTER:
        return list(text)
    return text.splitlines()


def join_tokens(tokens: Sequence[Token], kind: Union[str, TokenKind] = TokenKind.WORD) -> str:
    """Render tokens back to text using the kind's separator."""
    return parse_kind(kind).separator.join(tokens)
