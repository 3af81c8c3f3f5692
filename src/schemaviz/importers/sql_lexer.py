"""Tokenizer for SQL DDL.

Every character of the input belongs to some token or to skipped
whitespace/comments, so tokenizing never fails; unterminated strings and
comments simply run to the end of the text.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List


class TokenKind(str, Enum):
    WORD = "word"  # bare identifier or keyword
    QUOTED = "quoted"  # "identifier" or `identifier`
    STRING = "string"  # 'literal'
    NUMBER = "number"
    PUNCT = "punct"  # ( ) , ; .
    OPERATOR = "operator"  # anything else


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    value: str  # unquoted value for STRING/QUOTED
    start: int
    end: int

    def is_keyword(self, *words: str) -> bool:
        return self.kind is TokenKind.WORD and self.value.upper() in words

    def is_punct(self, char: str) -> bool:
        return self.kind is TokenKind.PUNCT and self.value == char

    @property
    def is_name(self) -> bool:
        return self.kind in (TokenKind.WORD, TokenKind.QUOTED)


_TOKEN_RE = re.compile(
    r"""
    (?P<line_comment>--[^\n]*|\#[^\n]*)
  | (?P<block_comment>/\*.*?(?:\*/|\Z))
  | (?P<space>\s+)
  | (?P<string>'(?:[^']|'')*'?)
  | (?P<quoted>"(?:[^"]|"")*"?|`[^`]*`?)
  | (?P<number>\d+(?:\.\d+)?)
  | (?P<word>[A-Za-z_][A-Za-z0-9_$]*)
  | (?P<punct>[(),;.])
  | (?P<operator>::|<=|>=|<>|!=|\S)
    """,
    re.VERBOSE | re.DOTALL,
)


def _unquote(raw: str, quote: str) -> str:
    body = raw[1:]
    if body.endswith(quote):
        body = body[:-1]
    return body.replace(quote * 2, quote)


def tokenize(text: str) -> List[Token]:
    """
    Split SQL text into tokens, dropping whitespace and comments.

    Args:
        text: SQL source

    Returns:
        Tokens in source order
    """
    tokens: List[Token] = []
    for match in _TOKEN_RE.finditer(text):
        group = match.lastgroup
        raw = match.group()
        if group in ("line_comment", "block_comment", "space"):
            continue
        if group == "string":
            tokens.append(Token(TokenKind.STRING, _unquote(raw, "'"), match.start(), match.end()))
        elif group == "quoted":
            tokens.append(Token(TokenKind.QUOTED, _unquote(raw, raw[0]), match.start(), match.end()))
        else:
            tokens.append(Token(TokenKind(group), raw, match.start(), match.end()))
    return tokens


def split_top_level(tokens: Iterable[Token], separator: str) -> List[List[Token]]:
    """Split tokens on a punctuation separator outside parentheses, dropping empty parts."""
    parts: List[List[Token]] = []
    current: List[Token] = []
    depth = 0
    for token in tokens:
        if token.is_punct("("):
            depth += 1
        elif token.is_punct(")"):
            depth = max(0, depth - 1)
        elif depth == 0 and token.is_punct(separator):
            if current:
                parts.append(current)
            current = []
            continue
        current.append(token)
    if current:
        parts.append(current)
    return parts
