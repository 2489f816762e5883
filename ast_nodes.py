"""AST node definitions for the CAM language.

This module defines the concrete AST node dataclasses produced by the parser
and consumed by the interpreter, the pretty-printer and the exporters. Each
node is a dataclass carrying only the fields relevant to its kind. The
`NodeType` enum identifies node kinds.

Conventions:
- All AST node dataclasses inherit from `ASTNode` which records the node
    kind (`NodeType`) and the `line`/`column` of the token that starts it.
- The variant set is closed: consumers `match` on the concrete classes and
    treat anything else as an internal error.
- Statement lists (program, `if` and `while` bodies) are ordered; execution
    order is declaration order.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List
from symbols import SymbolType


class NodeType(Enum):
    LITERAL = auto()
    VARIABLE = auto()
    GROUPING = auto()
    BINARY_OP = auto()
    UNARY_OP = auto()
    VAR_DECL = auto()
    VAR_ASSIGN = auto()
    SHOW_STMT = auto()
    IF_STMT = auto()
    WHILE_STMT = auto()
    PROGRAM = auto()

    def __str__(self) -> str:
        return self.name


# Base AST Node
@dataclass
class ASTNode:
    type: NodeType
    line: int = 0
    column: int = 0


# Expression Nodes
@dataclass
class LiteralNode(ASTNode):
    type: NodeType = NodeType.LITERAL
    lexeme: str = "0"


@dataclass
class VariableNode(ASTNode):
    type: NodeType = NodeType.VARIABLE
    name: str = ""


@dataclass
class GroupingNode(ASTNode):
    type: NodeType = NodeType.GROUPING
    expression: ASTNode = field(default_factory=lambda: LiteralNode())


@dataclass
class BinaryOpNode(ASTNode):
    type: NodeType = NodeType.BINARY_OP
    left: ASTNode = field(default_factory=lambda: LiteralNode())
    operator: str = ""
    right: ASTNode = field(default_factory=lambda: LiteralNode())


@dataclass
class UnaryOpNode(ASTNode):
    type: NodeType = NodeType.UNARY_OP
    operator: str = ""
    right: ASTNode = field(default_factory=lambda: LiteralNode())


# Statement Nodes
@dataclass
class VariableDeclarationNode(ASTNode):
    type: NodeType = NodeType.VAR_DECL
    var_name: str = ""
    var_type: SymbolType = SymbolType.NUM


@dataclass
class AssignmentNode(ASTNode):
    type: NodeType = NodeType.VAR_ASSIGN
    var_name: str = ""
    value: ASTNode = field(default_factory=lambda: LiteralNode())


@dataclass
class ShowStatementNode(ASTNode):
    type: NodeType = NodeType.SHOW_STMT
    expression: ASTNode = field(default_factory=lambda: LiteralNode())


@dataclass
class IfStatementNode(ASTNode):
    type: NodeType = NodeType.IF_STMT
    condition: ASTNode = field(default_factory=lambda: LiteralNode(lexeme="true"))
    body: List[ASTNode] = field(default_factory=list)


@dataclass
class WhileStatementNode(ASTNode):
    type: NodeType = NodeType.WHILE_STMT
    condition: ASTNode = field(default_factory=lambda: LiteralNode(lexeme="false"))
    body: List[ASTNode] = field(default_factory=list)


# Program Node
@dataclass
class ProgramNode(ASTNode):
    type: NodeType = NodeType.PROGRAM
    statements: List[ASTNode] = field(default_factory=list)
