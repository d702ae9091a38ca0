import unicodedata
from enum import Enum
from typing import Iterator, NamedTuple


class TokenType(Enum):
    NUMBER = "number"
    WORD = "word"
    SYMBOL = "symbol"


class Token(NamedTuple):
    term: str
    token_type: TokenType
    position: int


def is_numeric(char: str) -> bool:
    """True for any Unicode number (categories Nd, Nl, No)."""
    return unicodedata.category(char).startswith("N")


def is_word_char(char: str) -> bool:
    return char.isalpha() or is_numeric(char)


# Information separators U+001C-U+001F are not whitespace between tokens
def is_space(char: str) -> bool:
    return char.isspace() and char not in "\x1c\x1d\x1e\x1f"


def upper_per_char(run: str) -> str:
    """Upper-case one character at a time; characters without a single-character capital stay as they are."""
    result = []
    for char in run:
        upper = char.upper()
        result.append(upper if len(upper) == 1 else char)
    return "".join(result)


def _chop_while(text: str, start: int, predicate) -> int:
    end = start
    while end < len(text) and predicate(text[end]):
        end += 1
    return end


def lex(text: str) -> Iterator[Token]:
    """
    Split text into typed tokens, left to right.

    A numeric run is emitted as-is, a run of letters and digits starting
    with a letter is upper-cased, and any other character is emitted on
    its own. Whitespace only separates tokens.

    Args:
        text: Text to split

    Yields:
        Token tuples in input order
    """
    position = 0
    while True:
        position = _chop_while(text, position, is_space)
        if position >= len(text):
            return

        char = text[position]
        if is_numeric(char):
            end = _chop_while(text, position, is_numeric)
            yield Token(text[position:end], TokenType.NUMBER, position)
        elif char.isalpha():
            end = _chop_while(text, position, is_word_char)
            yield Token(upper_per_char(text[position:end]), TokenType.WORD, position)
        else:
            end = position + 1
            yield Token(char, TokenType.SYMBOL, position)
        position = end


def tokenize(text: str) -> Iterator[str]:
    """Yield the normalized terms of text. Call again to start over."""
    for token in lex(text):
        yield token.term
