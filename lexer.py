"""
Lexer for the CAM teaching language.

Overview:
- This module implements a small hand-written lexical analyzer (scanner) that
    transforms an input source string into a list of `Token` objects defined
    in `tokens.py`.
- It recognizes statement keywords (`let`, `be`, `if`, `then`, `endif`,
    `while`, `do`, `endwhile`, `show`), boolean literals, the type names
    `num` and `bool`, identifiers, decimal numbers, single- and
    two-character operators (`==`, `!=`, `<=`, `>=`) and punctuation, and
    skips whitespace and single-line comments starting with `//`.

Examples:
    Input:  "let x be num; x = 2.5;"
    Tokens: [KEYWORD('let'), IDENTIFIER('x'), KEYWORD('be'), TYPE('num'),
             SEMICOLON, IDENTIFIER('x'), ASSIGN, NUMBER('2.5'), SEMICOLON, EOF]

Implementation notes:
- The lexer is a simple stateful scanner using `self.pos` and
    `self.current_char`, with one character of lookahead via `peek_char()`.
- Positions are 1-based. A tab advances the column by 4, a newline moves to
    column 1 of the next line.
- Numbers carry no sign: unary minus is a parser concern.
- The first unrecognized character raises `LexError`. Tokens scanned before
    the error are discarded; `self.tokens` is left holding only EOF.
"""

from __future__ import annotations
import string
from typing import Optional, List
from errors import LexError
from tokens import Token, TokenType, classify_word

TAB_WIDTH = 4

# Operators that have a two-character form when followed by '='.
_WITH_EQUALS = {
    "=": (TokenType.ASSIGN, TokenType.EQ),
    "!": (TokenType.NOT, TokenType.NEQ),
    "<": (TokenType.LT, TokenType.LTE),
    ">": (TokenType.GT, TokenType.GTE),
}

_SINGLE = {
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    ";": TokenType.SEMICOLON,
    "*": TokenType.STAR,
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "/": TokenType.SLASH,
    "&": TokenType.AND,
    "|": TokenType.OR,
}


class Lexer:
    def __init__(self, text: str):
        self.text = text
        self.pos = 0
        self.line = 1
        self.column = 1
        self.current_char = self.text[self.pos] if self.text else None
        self.tokens: List[Token] = []

    def error(self) -> LexError:
        return LexError(self.current_char, self.line, self.column)

    def advance(self) -> None:
        """Advance to next character."""
        if self.current_char == "\n":
            self.line += 1
            self.column = 1
        elif self.current_char == "\t":
            self.column += TAB_WIDTH
        elif self.current_char != "\r":
            self.column += 1

        self.pos += 1
        if self.pos < len(self.text):
            self.current_char = self.text[self.pos]
        else:
            self.current_char = None

    def peek_char(self) -> Optional[str]:
        """Look at next character without consuming it."""
        next_pos = self.pos + 1
        if next_pos < len(self.text):
            return self.text[next_pos]
        return None

    def skip_comment(self) -> None:
        """Skip a `//` comment through the end of the line."""
        while self.current_char is not None and self.current_char != "\n":
            self.advance()

    def number(self) -> str:
        """Scan digits with at most one decimal point."""
        result = []
        seen_point = False
        while self.current_char is not None:
            if self.current_char in string.digits:
                result.append(self.current_char)
            elif self.current_char == "." and not seen_point:
                seen_point = True
                result.append(self.current_char)
            else:
                break
            self.advance()
        return "".join(result)

    def word(self) -> str:
        """Scan a run of letters."""
        result = []
        while (
            self.current_char is not None
            and self.current_char in string.ascii_letters
        ):
            result.append(self.current_char)
            self.advance()
        return "".join(result)

    def get_next_token(self) -> Token:
        """Lexical analyzer that returns tokens one at a time."""
        while self.current_char is not None:
            if self.current_char in " \t\r\n":
                self.advance()
                continue

            if self.current_char == "/" and self.peek_char() == "/":
                self.skip_comment()
                continue

            line, column = self.line, self.column
            char = self.current_char

            if char in _WITH_EQUALS:
                single, double = _WITH_EQUALS[char]
                self.advance()
                if self.current_char == "=":
                    self.advance()
                    return Token(double, char + "=", line, column)
                return Token(single, char, line, column)

            if char in _SINGLE:
                self.advance()
                return Token(_SINGLE[char], char, line, column)

            if char in string.digits:
                return Token(TokenType.NUMBER, self.number(), line, column)

            if char in string.ascii_letters:
                text = self.word()
                return Token(classify_word(text), text, line, column)

            raise self.error()

        return Token(TokenType.EOF, "EOF", self.line, self.column)

    def tokenize(self) -> List[Token]:
        """Return all tokens from the input string, ending with EOF."""
        self.tokens = []
        try:
            while True:
                token = self.get_next_token()
                self.tokens.append(token)
                if token.type == TokenType.EOF:
                    break
        except LexError:
            self.tokens = [Token(TokenType.EOF, "EOF", self.line, self.column)]
            raise
        return self.tokens
