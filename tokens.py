"""Token definitions for the lexer.

This module defines the `TokenType` enum for all token kinds recognized by
the lexer and a small immutable `Token` dataclass recording the kind, the
lexeme and the source position of the token. Tokens are the atomic units
produced by the lexer and consumed by the parser.

Words are classified against four fixed sets: statement keywords, boolean
literals, type names, and everything else (identifiers).
"""

from __future__ import annotations
from enum import Enum, auto
from dataclasses import dataclass


class TokenType(Enum):
    # Literals and words
    IDENTIFIER = auto()
    KEYWORD = auto()
    NUMBER = auto()
    BOOLEAN = auto()
    TYPE = auto()

    # Arithmetic operators
    PLUS = auto()
    MINUS = auto()
    STAR = auto()
    SLASH = auto()

    # Punctuation
    LPAREN = auto()
    RPAREN = auto()
    ASSIGN = auto()
    SEMICOLON = auto()

    # Comparison operators
    EQ = auto()
    NEQ = auto()
    LT = auto()
    GT = auto()
    LTE = auto()
    GTE = auto()

    # Logical operators
    AND = auto()
    OR = auto()
    NOT = auto()

    # Special
    EOF = auto()

    def __str__(self) -> str:
        return self.name


KEYWORDS = frozenset(
    ["if", "let", "while", "be", "then", "endif", "endwhile", "do", "show"]
)
BOOLEANS = frozenset(["true", "false"])
TYPE_NAMES = frozenset(["num", "bool"])


def classify_word(word: str) -> TokenType:
    """Map a run of letters to its token kind."""
    if word in KEYWORDS:
        return TokenType.KEYWORD
    if word in BOOLEANS:
        return TokenType.BOOLEAN
    if word in TYPE_NAMES:
        return TokenType.TYPE
    return TokenType.IDENTIFIER


@dataclass(frozen=True)
class Token:
    type: TokenType
    lexeme: str = ""
    line: int = 0
    column: int = 0

    def __repr__(self) -> str:
        return f"Token({self.type}, {self.lexeme!r}, {self.line}:{self.column})"

    def describe(self) -> str:
        """Human readable form used in parser diagnostics."""
        if self.type == TokenType.EOF:
            return "end of input"
        return f"'{self.lexeme}'"

    def is_keyword(self, word: str) -> bool:
        return self.type == TokenType.KEYWORD and self.lexeme == word
