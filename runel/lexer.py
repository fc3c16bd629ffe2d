"""Tokenizer for the Runel language.

Runel source is processed one line at a time; tokens never span lines.
Scanning is character driven:

* a space ends the pending word (if any) and is otherwise dropped;
* `+`, `*` and `=` are emitted immediately, without ending the pending
  word, so in practice they must be separated by spaces;
* a double quote starts a string literal that runs verbatim up to the
  next double quote (there are no escapes);
* every other character, punctuation and tabs included, accumulates
  into the pending word.

A finished word becomes a number if it is an optional minus sign
followed by ASCII digits that fit in a signed 64-bit integer, the `let`
keyword if it is exactly ``let``, and an identifier otherwise. Control
characters other than tab (NUL, ESC and the like) are a lexical error.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterator, List, Tuple
import json
import re
import unicodedata

from .errors import LexerError
from .types import fits_int64


class TokenKind(Enum):
    NUMBER = 'Number'
    STRING = 'String'
    IDENTIFIER = 'Identifier'
    PLUS = 'Plus'
    STAR = 'Star'
    LET = 'Let'
    EQUALS = 'Equals'


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    value: Any
    column: int  # 1-based

    def __repr__(self) -> str:
        if self.kind is TokenKind.NUMBER:
            return f"Number({self.value})"
        if self.kind in (TokenKind.STRING, TokenKind.IDENTIFIER):
            return f"{self.kind.value}({json.dumps(self.value, ensure_ascii=False)})"
        return self.kind.value


KEYWORD_LET = 'let'

SINGLE_CHAR_TOKENS = {
    '+': TokenKind.PLUS,
    '*': TokenKind.STAR,
    '=': TokenKind.EQUALS,
}

NUMBER_RE = re.compile(r'-?[0-9]+')


def is_control_char(c: str) -> bool:
    return c != '\t' and unicodedata.category(c) == 'Cc'


def tokenize(source: str) -> List[Token]:
    """Convert a single line of source code into a list of tokens.

    The function keeps no state between calls, so tokenizing the same
    line twice always yields equal token lists.
    """
    tokens: List[Token] = []
    buffer: List[str] = []
    buffer_col = 0
    i = 0
    length = len(source)

    def flush():
        if not buffer:
            return
        word = ''.join(buffer)
        buffer.clear()
        if NUMBER_RE.fullmatch(word) and fits_int64(int(word)):
            tokens.append(Token(TokenKind.NUMBER, int(word), buffer_col))
        elif word == KEYWORD_LET:
            tokens.append(Token(TokenKind.LET, word, buffer_col))
        else:
            tokens.append(Token(TokenKind.IDENTIFIER, word, buffer_col))

    while i < length:
        c = source[i]
        col = i + 1
        if c == ' ':
            flush()
        elif c in SINGLE_CHAR_TOKENS:
            tokens.append(Token(SINGLE_CHAR_TOKENS[c], c, col))
        elif c == '"':
            # An unterminated literal runs to the end of the line
            end = source.find('"', i + 1)
            if end == -1:
                end = length
            tokens.append(Token(TokenKind.STRING, source[i + 1:end], col))
            i = end + 1
            continue
        elif is_control_char(c):
            raise LexerError(f"unsupported character {c!r} at column {col}")
        else:
            if not buffer:
                buffer_col = col
            buffer.append(c)
        i += 1

    flush()
    return tokens


def source_lines(source: str) -> Iterator[Tuple[int, str]]:
    """Yield ``(line_number, text)`` for each non-blank line, trimmed."""
    for line_num, raw in enumerate(source.split('\n'), start=1):
        line = raw.strip()
        if line:
            yield line_num, line
