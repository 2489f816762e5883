"""Convert AST nodes into JSON-serializable structures.

This module provides `ast_to_json(node)` which returns a nested structure
of dicts/lists/primitives describing the AST node. It encodes the node kind,
its source position and its key fields.
"""

from typing import Any, Dict, Optional
from ast_nodes import *


def ast_to_json(node: Optional[ASTNode]) -> Any:
    if node is None:
        return None

    data: Dict[str, Any] = {"line": node.line, "column": node.column}

    match node:
        case LiteralNode(lexeme=text):
            data.update(node_type="Literal", lexeme=text)
        case VariableNode(name=n):
            data.update(node_type="Variable", name=n)
        case GroupingNode(expression=expr):
            data.update(node_type="Grouping", expression=ast_to_json(expr))
        case BinaryOpNode(left=l, operator=op, right=r):
            data.update(
                node_type="BinaryOp",
                operator=op,
                left=ast_to_json(l),
                right=ast_to_json(r),
            )
        case UnaryOpNode(operator=op, right=right):
            data.update(node_type="UnaryOp", operator=op, right=ast_to_json(right))
        case VariableDeclarationNode(var_name=vn, var_type=vt):
            data.update(node_type="VarDecl", var_name=vn, var_type=str(vt))
        case AssignmentNode(var_name=vn, value=value):
            data.update(node_type="VarAssign", var_name=vn, value=ast_to_json(value))
        case ShowStatementNode(expression=expr):
            data.update(node_type="Show", expression=ast_to_json(expr))
        case IfStatementNode(condition=cond, body=body):
            data.update(
                node_type="If",
                condition=ast_to_json(cond),
                body=[ast_to_json(s) for s in body],
            )
        case WhileStatementNode(condition=cond, body=body):
            data.update(
                node_type="While",
                condition=ast_to_json(cond),
                body=[ast_to_json(s) for s in body],
            )
        case ProgramNode(statements=stmts):
            data.update(
                node_type="Program", statements=[ast_to_json(s) for s in stmts]
            )
        case _:
            raise TypeError(f"Cannot serialize node type: {type(node)}")

    return data
