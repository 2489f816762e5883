"""Pretty-printer for the AST.

Provides `PrettyPrinter.print_ast(node, indent, prefix)` which renders an
AST into a readable multi-line string, and `PrettyPrinter.print_surface`
which renders a node back to compact CAM-like source on one line. The
printer is intended for debugging, tests and development rather than for
producing final source code.

Examples:
    PrettyPrinter.print_ast(program_node)
    PrettyPrinter.print_surface(expr_node)   # "(a + 1) * 2"
"""

from __future__ import annotations
from ast_nodes import *


class PrettyPrinter:
    @staticmethod
    def print_ast(node: ASTNode, indent: int = 0, prefix: str = "") -> str:
        """Pretty print AST and return as string."""
        lines = []
        indent_str = " " * indent

        if not isinstance(node, ASTNode):
            lines.append(f"{indent_str}{prefix}{node}")
            return "\n".join(lines)

        match node:
            case LiteralNode(lexeme=text):
                lines.append(f"{indent_str}{prefix}Literal({text})")

            case VariableNode(name=n):
                lines.append(f"{indent_str}{prefix}Variable({n})")

            case GroupingNode(expression=expr):
                lines.append(f"{indent_str}{prefix}Grouping")
                lines.append(PrettyPrinter.print_ast(expr, indent + 2))

            case BinaryOpNode(left=left, operator=op, right=right):
                lines.append(f"{indent_str}{prefix}BinaryOp({op})")
                lines.append(PrettyPrinter.print_ast(left, indent + 2, "left: "))
                lines.append(PrettyPrinter.print_ast(right, indent + 2, "right: "))

            case UnaryOpNode(operator=op, right=right):
                lines.append(f"{indent_str}{prefix}UnaryOp({op})")
                lines.append(PrettyPrinter.print_ast(right, indent + 2))

            case VariableDeclarationNode(var_name=vname, var_type=vtype):
                lines.append(f"{indent_str}{prefix}VarDecl({vname}: {vtype})")

            case AssignmentNode(var_name=vname, value=value):
                lines.append(f"{indent_str}{prefix}VarAssign({vname})")
                lines.append(PrettyPrinter.print_ast(value, indent + 2, "value: "))

            case ShowStatementNode(expression=expr):
                lines.append(f"{indent_str}{prefix}Show")
                lines.append(PrettyPrinter.print_ast(expr, indent + 2))

            case WhileStatementNode(condition=cond, body=body):
                lines.append(f"{indent_str}{prefix}WhileStatement")
                lines.append(PrettyPrinter.print_ast(cond, indent + 4, "condition: "))
                for i, stmt in enumerate(body):
                    lines.append(PrettyPrinter.print_ast(stmt, indent + 4, f"body[{i}]: "))

            case IfStatementNode(condition=cond, body=body):
                lines.append(f"{indent_str}{prefix}IfStatement")
                lines.append(PrettyPrinter.print_ast(cond, indent + 4, "condition: "))
                for i, stmt in enumerate(body):
                    lines.append(PrettyPrinter.print_ast(stmt, indent + 4, f"body[{i}]: "))

            case ProgramNode(statements=stmts):
                lines.append(f"{indent_str}{prefix}Program")
                for i, stmt in enumerate(stmts):
                    lines.append(PrettyPrinter.print_ast(stmt, indent + 4, f"stmt[{i}]: "))

            case _:
                lines.append(f"{indent_str}{prefix}Unknown node type: {type(node)}")

        return "\n".join(line for line in lines if line)

    @staticmethod
    def print_surface(node: ASTNode) -> str:
        """Return a compact, surface-syntax-like one-line representation of an AST node.

        Used for node labels in the Graphviz view. Block statements only show
        their header (`if x > 1 then ...`).
        """
        if node is None:
            return ""

        def _p(n: ASTNode) -> str:
            return PrettyPrinter.print_surface(n) if isinstance(n, ASTNode) else str(n)

        match node:
            case LiteralNode(lexeme=text):
                return text
            case VariableNode(name=n):
                return n
            case GroupingNode(expression=expr):
                return f"({_p(expr)})"
            case BinaryOpNode(left=l, operator=op, right=r):
                return f"{_p(l)} {op} {_p(r)}"
            case UnaryOpNode(operator=op, right=right):
                return f"{op}{_p(right)}"
            case VariableDeclarationNode(var_name=vn, var_type=vt):
                return f"let {vn} be {vt};"
            case AssignmentNode(var_name=vn, value=value):
                return f"{vn} = {_p(value)};"
            case ShowStatementNode(expression=expr):
                return f"show {_p(expr)};"
            case IfStatementNode(condition=cond):
                return f"if {_p(cond)} then ..."
            case WhileStatementNode(condition=cond):
                return f"while {_p(cond)} do ..."
            case ProgramNode():
                return "<program>"
            case _:
                s = PrettyPrinter.print_ast(node)
                return " ".join(line.strip() for line in s.splitlines())
