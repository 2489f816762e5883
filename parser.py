"""
Parser for the CAM teaching language.

Overview and approach:
- This parser is a small, hand-written LL(1) recursive-descent parser. It
    looks at exactly one token (`self.current`) to decide which production
    to follow.
- Expressions are parsed by precedence climbing over a fixed table of
    binary levels (`BINARY_LEVELS`, lowest to highest): logical (`&`, `|`),
    equality, relational, additive, multiplicative. The right operand of an
    operator is parsed one level up and results fold to the left, so every
    binary operator is left-associative. Below the binary levels sit the
    prefix operators (`!`, `-`) and the primaries (identifiers, literals,
    parenthesized expressions).
- Nesting that exhausts the Python stack is reported as a `ParseError`
    rather than escaping as `RecursionError`.

Statement forms:
    let <id> be <type>;
    <id> = <expr>;
    if <expr> then <stmt>+ endif
    while <expr> do <stmt>+ endwhile
    show <expr>;

Errors:
- Every required token has an explicit expectation. The first mismatch raises
    `ParseError` with the position of the offending token, and parsing stops:
    no tree is returned for a program containing a syntax error.
- `if`/`while` bodies are bounded by `max_block_statements`. A body that runs
    past the limit (or off the end of the input) without its closing keyword
    is reported instead of being truncated.
"""

from __future__ import annotations
from typing import List, Optional
from errors import ParseError
from tokens import Token, TokenType
from ast_nodes import *
from symbols import SymbolType

DEFAULT_MAX_BLOCK_STATEMENTS = 10_000

# Binary operator levels, lowest precedence first.
BINARY_LEVELS: List[frozenset] = [
    frozenset([TokenType.AND, TokenType.OR]),
    frozenset([TokenType.EQ, TokenType.NEQ]),
    frozenset([TokenType.LT, TokenType.LTE, TokenType.GT, TokenType.GTE]),
    frozenset([TokenType.PLUS, TokenType.MINUS]),
    frozenset([TokenType.STAR, TokenType.SLASH]),
]

PREFIX_OPERATORS = frozenset([TokenType.NOT, TokenType.MINUS])


def binary_level(token_type: TokenType) -> Optional[int]:
    """Index of `token_type` in BINARY_LEVELS, or None if it is not binary."""
    for level, operators in enumerate(BINARY_LEVELS):
        if token_type in operators:
            return level
    return None


class Parser:
    def __init__(
        self,
        tokens: List[Token],
        max_block_statements: int = DEFAULT_MAX_BLOCK_STATEMENTS,
    ):
        if max_block_statements < 1:
            raise ValueError("max_block_statements must be at least 1")
        self.tokens = tokens
        self.pos = 0
        self.current = tokens[0] if tokens else Token(TokenType.EOF, "EOF")
        self.max_block_statements = max_block_statements

    def advance(self) -> Token:
        """Consume the current token and return it."""
        token = self.current
        # EOF is sticky: never step past the end of the stream.
        if self.current.type != TokenType.EOF:
            self.pos += 1
            if self.pos < len(self.tokens):
                self.current = self.tokens[self.pos]
            else:
                self.current = Token(
                    TokenType.EOF, "EOF", token.line, token.column + len(token.lexeme)
                )
        return token

    def error(self, message: str, token: Optional[Token] = None) -> ParseError:
        token = token or self.current
        return ParseError(message, token.line, token.column)

    def expect(self, expected_type: TokenType, what: str) -> Token:
        """Expect and consume token of given type."""
        if self.current.type == expected_type:
            return self.advance()
        raise self.error(f"Expected {what} but found {self.current.describe()}")

    def expect_keyword(self, word: str) -> Token:
        if self.current.is_keyword(word):
            return self.advance()
        raise self.error(f"Expected '{word}' but found {self.current.describe()}")

    def match(self, token_type: TokenType) -> bool:
        """Check if current token matches type, consume if true."""
        if self.current.type == token_type:
            self.advance()
            return True
        return False

    # Expressions

    def parse_primary(self) -> ASTNode:
        """Parse primary expressions (literals, identifiers, parenthesized)."""
        token = self.current

        match token.type:
            case TokenType.NUMBER | TokenType.BOOLEAN:
                self.advance()
                return LiteralNode(
                    lexeme=token.lexeme, line=token.line, column=token.column
                )

            case TokenType.IDENTIFIER:
                self.advance()
                return VariableNode(
                    name=token.lexeme, line=token.line, column=token.column
                )

            case TokenType.LPAREN:
                self.advance()
                expr = self.parse_expression()
                self.expect(TokenType.RPAREN, "')'")
                return GroupingNode(
                    expression=expr, line=token.line, column=token.column
                )

            case _:
                raise self.error(
                    f"Expected an expression but found {token.describe()}"
                )

    def parse_unary(self) -> ASTNode:
        """Parse prefix operators: `!expr` and `-expr`."""
        prefixes: List[Token] = []
        while self.current.type in PREFIX_OPERATORS:
            prefixes.append(self.advance())

        expr = self.parse_primary()
        for token in reversed(prefixes):
            expr = UnaryOpNode(
                operator=token.lexeme, right=expr, line=token.line, column=token.column
            )
        return expr

    def parse_binary(self, level: int = 0) -> ASTNode:
        """Parse operators at `level` or tighter, folding each level to the left.

        Precedence climbing: the operand is parsed once, and recursion only
        happens for the right-hand side of an operator actually found.
        """
        left = self.parse_unary()
        while True:
            op_level = binary_level(self.current.type)
            if op_level is None or op_level < level:
                return left
            op = self.advance()
            right = self.parse_binary(op_level + 1)
            left = BinaryOpNode(
                left=left,
                operator=op.lexeme,
                right=right,
                line=op.line,
                column=op.column,
            )

    def parse_expression(self) -> ASTNode:
        """Parse an expression."""
        return self.parse_binary(0)

    # Statements

    def parse_type(self) -> SymbolType:
        """Parse a type name: num or bool."""
        token = self.expect(TokenType.TYPE, "a type name ('num' or 'bool')")
        return SymbolType.from_name(token.lexeme)

    def parse_variable_declaration(self) -> VariableDeclarationNode:
        """Parse variable declaration: let identifier be type ;"""
        start = self.expect_keyword("let")
        name = self.expect(TokenType.IDENTIFIER, "a variable name")
        self.expect_keyword("be")
        var_type = self.parse_type()
        self.expect(TokenType.SEMICOLON, "';'")
        return VariableDeclarationNode(
            var_name=name.lexeme, var_type=var_type, line=start.line, column=start.column
        )

    def parse_assignment(self) -> AssignmentNode:
        """Parse assignment: identifier = expression ;"""
        name = self.expect(TokenType.IDENTIFIER, "a variable name")
        self.expect(TokenType.ASSIGN, "'='")
        value = self.parse_expression()
        self.expect(TokenType.SEMICOLON, "';'")
        return AssignmentNode(
            var_name=name.lexeme, value=value, line=name.line, column=name.column
        )

    def parse_show_statement(self) -> ShowStatementNode:
        """Parse show statement: show expression ;"""
        start = self.expect_keyword("show")
        expr = self.parse_expression()
        self.expect(TokenType.SEMICOLON, "';'")
        return ShowStatementNode(expression=expr, line=start.line, column=start.column)

    def parse_body(self, opener: Token, terminator: str) -> List[ASTNode]:
        """Parse one or more statements up to and including `terminator`."""
        statements: List[ASTNode] = [self.parse_statement()]

        while not self.current.is_keyword(terminator):
            if self.current.type == TokenType.EOF:
                raise self.error(
                    f"Expected '{terminator}' to close '{opener.lexeme}' "
                    f"started at {opener.line}:{opener.column} but found end of input"
                )
            if len(statements) >= self.max_block_statements:
                raise self.error(
                    f"'{opener.lexeme}' block started at {opener.line}:{opener.column} "
                    f"has more than {self.max_block_statements} statements without "
                    f"'{terminator}'"
                )
            statements.append(self.parse_statement())

        self.advance()  # Consume the terminator
        return statements

    def parse_if_statement(self) -> IfStatementNode:
        """Parse if statement: if expr then stmt+ endif"""
        start = self.expect_keyword("if")
        condition = self.parse_expression()
        self.expect_keyword("then")
        body = self.parse_body(start, "endif")
        return IfStatementNode(
            condition=condition, body=body, line=start.line, column=start.column
        )

    def parse_while_statement(self) -> WhileStatementNode:
        """Parse while statement: while expr do stmt+ endwhile"""
        start = self.expect_keyword("while")
        condition = self.parse_expression()
        self.expect_keyword("do")
        body = self.parse_body(start, "endwhile")
        return WhileStatementNode(
            condition=condition, body=body, line=start.line, column=start.column
        )

    def parse_statement(self) -> ASTNode:
        """Parse a statement."""
        token = self.current

        match token.type, token.lexeme:
            case TokenType.KEYWORD, "let":
                return self.parse_variable_declaration()
            case TokenType.KEYWORD, "if":
                return self.parse_if_statement()
            case TokenType.KEYWORD, "while":
                return self.parse_while_statement()
            case TokenType.KEYWORD, "show":
                return self.parse_show_statement()
            case TokenType.IDENTIFIER, _:
                return self.parse_assignment()
            case _:
                raise self.error(f"Expected a statement but found {token.describe()}")

    def parse_program(self) -> ProgramNode:
        """Parse a complete program (sequence of statements)."""
        statements: List[ASTNode] = []

        while self.current.type != TokenType.EOF:
            statements.append(self.parse_statement())

        return ProgramNode(statements=statements, line=1, column=1)

    def parse(self) -> ProgramNode:
        try:
            return self.parse_program()
        except RecursionError:
            raise self.error("Expression nested too deeply") from None
