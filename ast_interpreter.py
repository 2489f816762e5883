"""Tree-walking interpreter for CAM programs.

The interpreter executes a `ProgramNode` statement by statement against an
`Environment` (the scope stack from `symbols.py`), writing one line per
`show` to its output stream.

Errors are sticky: the first `InterpreterError` unwinds the statement that
raised it (block scopes are still popped on the way out), is printed as a
diagnostic and stored in `Interpreter.error`. From then on every statement
execution is a no-op.
"""

from __future__ import annotations
import math
import sys
from typing import List, Optional, TextIO
from ast_nodes import *
from errors import InterpreterError
from symbols import Environment, SymbolType, Value

NUMERIC_OPERATORS = {
    "+": lambda a, b: a + b,
    "-": lambda a, b: a - b,
    "*": lambda a, b: a * b,
}

COMPARISON_OPERATORS = {
    "<": lambda a, b: a < b,
    "<=": lambda a, b: a <= b,
    ">": lambda a, b: a > b,
    ">=": lambda a, b: a >= b,
}


def _divide(a: float, b: float) -> float:
    # IEEE semantics: x/0 is +-inf, 0/0 is nan.
    if b == 0.0:
        if a == 0.0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


def _type_error(node: ASTNode, message: str) -> InterpreterError:
    return InterpreterError(message, node.line, node.column)


class Interpreter:
    def __init__(self, output: Optional[TextIO] = None):
        self.output = output if output is not None else sys.stdout
        self.env = Environment()
        self.error: Optional[InterpreterError] = None

    def interpret(self, program: ProgramNode) -> bool:
        """Run every top-level statement; return True if no error occurred."""
        for stmt in program.statements:
            if self.error is not None:
                break
            self.execute(stmt)
        return self.error is None

    def execute(self, stmt: ASTNode) -> None:
        """Execute one top-level statement, recording the first error."""
        if self.error is not None:
            return
        try:
            try:
                self._exec_stmt(stmt)
            except RecursionError:
                raise _type_error(stmt, "Expression nested too deeply") from None
        except InterpreterError as e:
            self.error = e
            print(e.diagnostic(), file=self.output)

    # Statements

    def _exec_block(self, statements: List[ASTNode]) -> None:
        for s in statements:
            self._exec_stmt(s)

    def _condition(self, node: ASTNode, keyword: str) -> bool:
        cond = self.evaluate(node)
        if cond.type != SymbolType.BOOL:
            raise _type_error(
                node, f"'{keyword}' condition must be bool, got {cond.type}"
            )
        return bool(cond.value)

    def _exec_stmt(self, stmt: ASTNode) -> None:
        match stmt:
            case VariableDeclarationNode(var_name=name, var_type=vtype):
                try:
                    self.env.declare(name, vtype)
                except InterpreterError as e:
                    raise _type_error(stmt, e.message) from None

            case AssignmentNode(var_name=name, value=expr):
                rhs = self.evaluate(expr)
                try:
                    self.env.assign(name, rhs)
                except InterpreterError as e:
                    raise _type_error(stmt, e.message) from None

            case ShowStatementNode(expression=expr):
                print(str(self.evaluate(expr)), file=self.output)

            case IfStatementNode(condition=cond, body=body):
                self.env.push_scope()
                try:
                    if self._condition(cond, "if"):
                        self._exec_block(body)
                finally:
                    self.env.pop_scope()

            case WhileStatementNode(condition=cond, body=body):
                # One scope for the whole loop: body declarations survive
                # from one iteration to the next.
                self.env.push_scope()
                try:
                    while self._condition(cond, "while"):
                        self._exec_block(body)
                finally:
                    self.env.pop_scope()

            case ProgramNode(statements=stmts):
                self._exec_block(stmts)

            case _:
                raise _type_error(stmt, f"Unhandled statement node: {stmt.type}")

    # Expressions

    def evaluate(self, node: ASTNode) -> Value:
        match node:
            case LiteralNode(lexeme=text):
                if text == "true":
                    return Value.boolean(True)
                if text == "false":
                    return Value.boolean(False)
                return Value.number(float(text))

            case VariableNode(name=name):
                try:
                    return self.env.lookup(name).value
                except InterpreterError as e:
                    raise _type_error(node, e.message) from None

            case GroupingNode(expression=expr):
                return self.evaluate(expr)

            case UnaryOpNode(operator=op, right=right):
                val = self.evaluate(right)
                match op:
                    case "!":
                        if val.type != SymbolType.BOOL:
                            raise _type_error(
                                node, f"'!' does not support {val.type} values"
                            )
                        return Value.boolean(not val.value)
                    case "-":
                        if val.type != SymbolType.NUM:
                            raise _type_error(
                                node, f"unary '-' does not support {val.type} values"
                            )
                        return Value.number(-val.value)
                    case _:
                        raise _type_error(node, f"Unsupported unary operator: {op}")

            case BinaryOpNode(left=l, operator=op, right=r):
                lv = self.evaluate(l)
                rv = self.evaluate(r)
                return self._binary(node, op, lv, rv)

            case _:
                raise _type_error(node, f"Unhandled expression node: {node.type}")

    def _binary(self, node: ASTNode, op: str, lv: Value, rv: Value) -> Value:
        if op in ("&", "|"):
            if lv.type != SymbolType.BOOL or rv.type != SymbolType.BOOL:
                raise _type_error(
                    node,
                    f"'{op}' does not support {lv.type} and {rv.type} values",
                )
            if op == "&":
                return Value.boolean(lv.value and rv.value)
            return Value.boolean(lv.value or rv.value)

        if op in ("==", "!="):
            if lv.type != rv.type or lv.type == SymbolType.UNKNOWN:
                raise _type_error(
                    node, f"'{op}' cannot compare {lv.type} with {rv.type}"
                )
            equal = lv.value == rv.value
            return Value.boolean(equal if op == "==" else not equal)

        if lv.type != SymbolType.NUM or rv.type != SymbolType.NUM:
            raise _type_error(
                node, f"'{op}' does not support {lv.type} and {rv.type} values"
            )
        if op in COMPARISON_OPERATORS:
            return Value.boolean(COMPARISON_OPERATORS[op](lv.value, rv.value))
        if op in NUMERIC_OPERATORS:
            return Value.number(NUMERIC_OPERATORS[op](lv.value, rv.value))
        if op == "/":
            return Value.number(_divide(lv.value, rv.value))
        raise _type_error(node, f"Unsupported binary operator: {op}")


def interpret_program(
    prog: ProgramNode, output: Optional[TextIO] = None
) -> Interpreter:
    """Interpret a ProgramNode and return the interpreter holding the final state."""
    interpreter = Interpreter(output=output)
    interpreter.interpret(prog)
    return interpreter
