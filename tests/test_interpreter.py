"""Tests for the tree-walking interpreter."""

import io

import pytest

from tests.utils import parse_text, run_text
from ast_interpreter import Interpreter, interpret_program
from ast_nodes import LiteralNode, ShowStatementNode
from errors import InterpreterError
from symbols import SymbolType, Value


def test_show_number():
    out, interp = run_text("let x be num; x = 5; show x;")
    assert out == ["5.000000"]
    assert interp.error is None


def test_show_negated_boolean():
    out, _ = run_text("let b be bool; b = true; show !b;")
    assert out == ["false"]


def test_type_mismatch_suppresses_later_output():
    out, interp = run_text("let x be num; x = true; show 1;")
    assert len(out) == 1
    assert "Type mismatch" in out[0]
    assert out[0].startswith("Error (1:15): ")
    assert isinstance(interp.error, InterpreterError)
    assert isinstance(interp.error, RuntimeError)


@pytest.mark.parametrize(
    "src, expected",
    [
        ("show 1/0;", "inf"),
        ("show -1/0;", "-inf"),
        ("show 0/0;", "nan"),
        ("show 10 / 4;", "2.500000"),
        ("show 7 - 2 * 3;", "1.000000"),
        ("show (7 - 2) * 3;", "15.000000"),
        ("show 0.1 + 0.2;", "0.300000"),
        ("show 2 - 5;", "-3.000000"),
        ("show -(2 + 1);", "-3.000000"),
    ],
)
def test_arithmetic(src, expected):
    out, interp = run_text(src)
    assert out == [expected]
    assert interp.error is None


@pytest.mark.parametrize(
    "src, expected",
    [
        ("show 1 < 2;", "true"),
        ("show 2 <= 2;", "true"),
        ("show 1 > 2;", "false"),
        ("show 3 >= 4;", "false"),
        ("show 1 == 1;", "true"),
        ("show 1 != 1;", "false"),
        ("show true == false;", "false"),
        ("show true != false;", "true"),
        ("show true & false;", "false"),
        ("show true | false;", "true"),
        ("show !(1 > 2) & 3 == 3;", "true"),
    ],
)
def test_comparisons_and_logic(src, expected):
    out, _ = run_text(src)
    assert out == [expected]


@pytest.mark.parametrize(
    "src, operator",
    [
        ("show 1 & true;", "'&'"),
        ("show false | 0;", "'|'"),
        ("show 1 == true;", "'=='"),
        ("show false != 2;", "'!='"),
        ("show true < 1;", "'<'"),
        ("show 1 + true;", "'+'"),
        ("show true / false;", "'/'"),
        ("show !5;", "'!'"),
        ("show -true;", "'-'"),
    ],
)
def test_operator_type_errors_name_the_operator(src, operator):
    out, interp = run_text(src)
    assert len(out) == 1
    assert out[0].startswith("Error (")
    assert operator in out[0]
    assert interp.error is not None


def test_logical_operators_evaluate_both_sides():
    out, interp = run_text("show false & (1 == true);")
    assert interp.error is not None
    assert "'=='" in out[0]


def test_declared_variables_start_at_zero_values():
    out, _ = run_text("let x be num; show x; let b be bool; show b;")
    assert out == ["0.000000", "false"]


def test_undeclared_variable_reference():
    out, interp = run_text("show y;")
    assert out == ["Error (1:6): Variable 'y' not declared"]
    assert interp.error is not None


def test_undeclared_variable_assignment():
    out, _ = run_text("y = 1;")
    assert out == ["Error (1:1): Variable 'y' not declared"]


def test_if_body_declarations_are_invisible_after_block():
    src = "if true then let y be num; y = 2; show y; endif show y;"
    out, interp = run_text(src)
    assert out[0] == "2.000000"
    assert "Variable 'y' not declared" in out[1]
    assert interp.env.depth == 0


def test_if_false_skips_body():
    out, _ = run_text("if 1 > 2 then show 1; endif show 2;")
    assert out == ["2.000000"]


def test_if_condition_must_be_boolean():
    out, interp = run_text("if 1 then show 1; endif")
    assert "'if' condition must be bool" in out[0]
    assert interp.env.depth == 0


def test_while_condition_must_be_boolean():
    out, _ = run_text("while 0 do show 1; endwhile")
    assert "'while' condition must be bool" in out[0]


def test_assignment_inside_block_updates_outer_variable():
    out, _ = run_text("let x be num; if true then x = 3; endif show x;")
    assert out == ["3.000000"]


def test_inner_declaration_shadows_outer():
    src = """
    let x be num;
    x = 1;
    if true then
        let x be bool;
        x = false;
        show x;
    endif
    show x;
    """
    out, _ = run_text(src)
    assert out == ["false", "1.000000"]


def test_while_body_redeclaration_is_idempotent():
    src = """
    let i be num;
    while i < 3 do
        let seen be num;
        seen = seen + 1;
        show seen;
        i = i + 1;
    endwhile
    """
    out, interp = run_text(src)
    assert interp.error is None
    # The body scope lives for the whole loop, so `seen` keeps counting.
    assert out == ["1.000000", "2.000000", "3.000000"]


def test_redeclaration_with_different_type_in_same_scope():
    out, interp = run_text("let x be num; let x be bool; show 1;")
    assert out == ["Error (1:15): Redeclaration of existing variable 'x' with different type (was num, now bool)"]
    assert interp.error is not None


def test_same_name_in_sibling_blocks_with_different_types():
    src = """
    if true then let v be num; v = 1; endif
    if true then let v be bool; v = true; show v; endif
    """
    out, interp = run_text(src)
    assert out == ["true"]
    assert interp.error is None


def test_error_inside_nested_blocks_restores_depth():
    src = """
    let i be num;
    while i < 5 do
        if true then
            i = true;
        endif
    endwhile
    show i;
    """
    out, interp = run_text(src)
    assert len(out) == 1
    assert "Type mismatch" in out[0]
    assert interp.env.depth == 0


def test_error_is_sticky():
    out, interp = run_text("show 1; show 1 + true; show 2;")
    assert out[0] == "1.000000"
    assert len(out) == 2

    buffer = io.StringIO()
    interp.output = buffer
    interp.execute(ShowStatementNode(expression=LiteralNode(lexeme="3")))
    assert buffer.getvalue() == ""


def test_interpret_reports_success():
    prog = parse_text("show 1;")
    assert Interpreter(output=io.StringIO()).interpret(prog) is True

    prog = parse_text("show y;")
    assert Interpreter(output=io.StringIO()).interpret(prog) is False


def test_interpret_program_returns_final_state():
    out = io.StringIO()
    prog = parse_text("let a be num; let b be bool; a = 3 * 4; b = a > 10;")
    interp = interpret_program(prog, output=out)
    assert interp.env.visible() == {
        "a": Value(SymbolType.NUM, 12.0),
        "b": Value(SymbolType.BOOL, True),
    }
    assert out.getvalue() == ""


def test_evaluation_is_deterministic():
    src = "let i be num; while i < 4 do show i * 1.5; i = i + 1; endwhile"
    assert run_text(src)[0] == run_text(src)[0]


def test_deeply_nested_evaluation_reports_an_error():
    out, interp = run_text("show " + "!" * 5000 + "true;\nshow 1;")
    assert out == ["Error (1:1): Expression nested too deeply"]
    assert interp.error is not None
