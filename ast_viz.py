"""Graphviz visualization helpers for ASTs.

Provides `render_ast_dot(program)` which returns a `graphviz.Digraph` object
(not rendered). `write_and_render` writes the file to disk and needs the
Graphviz binaries installed.

Layout: the program is the root node. Each top-level statement and the
nodes beneath it are grouped in their own cluster, labelled with the
statement's surface syntax. Edges are labelled with the child's role
(`left`, `right`, `condition`, `body[0]`, ...).
"""

from typing import Iterator, Tuple
from graphviz import Digraph
from ast_nodes import *
from pretty_printer import PrettyPrinter


def _children(node: ASTNode) -> Iterator[Tuple[str, ASTNode]]:
    """Yield (edge label, child) pairs in source order."""
    match node:
        case GroupingNode(expression=expr) | ShowStatementNode(expression=expr):
            yield "expr", expr
        case BinaryOpNode(left=l, right=r):
            yield "left", l
            yield "right", r
        case UnaryOpNode(right=right):
            yield "operand", right
        case AssignmentNode(value=value):
            yield "value", value
        case IfStatementNode(condition=cond, body=body) | WhileStatementNode(
            condition=cond, body=body
        ):
            yield "condition", cond
            for i, stmt in enumerate(body):
                yield f"body[{i}]", stmt
        case ProgramNode(statements=stmts):
            for i, stmt in enumerate(stmts):
                yield f"stmt[{i}]", stmt
        case _:
            return


def _label(node: ASTNode) -> str:
    match node:
        case LiteralNode(lexeme=text):
            return f"Literal\\n{text}"
        case VariableNode(name=n):
            return f"Variable\\n{n}"
        case BinaryOpNode(operator=op) | UnaryOpNode(operator=op):
            return f"{node.type}\\n{op}"
        case VariableDeclarationNode(var_name=vn, var_type=vt):
            return f"VarDecl\\n{vn}: {vt}"
        case AssignmentNode(var_name=vn):
            return f"VarAssign\\n{vn}"
        case _:
            return str(node.type)


def render_ast_dot(program: ProgramNode) -> Digraph:
    """Return a graphviz.Digraph for the given program.

    The caller may call `dot.source` to inspect the dot text, or call
    `dot.render(filename, format=...)` to write files (requires Graphviz installed).
    """
    dot = Digraph(format="svg")
    dot.attr("graph", rankdir="TB")
    dot.attr("node", shape="box", style="rounded", fontsize="10")

    counter = 0

    def _new_id() -> str:
        nonlocal counter
        node_id = f"n{counter}"
        counter += 1
        return node_id

    def _emit(graph: Digraph, node: ASTNode, parent_id: str, edge_label: str) -> None:
        node_id = _new_id()
        graph.node(node_id, label=_label(node))
        dot.edge(parent_id, node_id, label=edge_label)
        for lbl, child in _children(node):
            _emit(graph, child, node_id, lbl)

    root_id = _new_id()
    dot.node(root_id, label="Program", shape="ellipse")
    for i, stmt in enumerate(program.statements):
        with dot.subgraph(name=f"cluster_stmt_{i}") as c:
            c.attr(label=f"{stmt.line}: {PrettyPrinter.print_surface(stmt)}")
            c.attr(style="dashed")
            _emit(c, stmt, root_id, f"stmt[{i}]")

    return dot


def write_and_render(program: ProgramNode, out_path: str, fmt: str = "svg") -> str:
    """Write and render the AST to the given path (without extension).

    Example: write_and_render(ast, 'out/ast', fmt='png') will create out/ast.png
    (requires Graphviz). Returns the path of the rendered file."""
    dot = render_ast_dot(program)
    dot.format = fmt
    # Note: render will append extension automatically
    return dot.render(out_path, cleanup=True)
