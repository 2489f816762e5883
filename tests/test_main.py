import io
import json

from main import interactive_mode, lex, main, parse_tokens
from tokens import TokenType


def _write(tmp_path, text, name="prog.cam"):
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return str(path)


def test_helpers_lex_and_parse():
    tokens = lex("show 1;")
    assert tokens[-1].type == TokenType.EOF
    ast = parse_tokens(tokens)
    assert len(ast.statements) == 1


def test_cli_runs_file(tmp_path, capsys):
    path = _write(tmp_path, "let x be num; x = 5; show x;")
    assert main([path]) == 0
    assert capsys.readouterr().out == "5.000000\n"


def test_cli_returns_non_zero_on_runtime_error(tmp_path, capsys):
    path = _write(tmp_path, "let x be num; x = true; show x;")
    assert main([path]) == 1
    assert "Type mismatch" in capsys.readouterr().out


def test_cli_returns_non_zero_on_lex_error(tmp_path, capsys):
    path = _write(tmp_path, "show 1 # 2;")
    assert main([path]) == 1
    assert "Unidentified character '#'" in capsys.readouterr().out


def test_cli_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "missing.cam")]) == 1
    assert "Failed to read file" in capsys.readouterr().out


def test_cli_without_arguments_prints_help(capsys):
    assert main([]) == 1
    assert "usage: camlang" in capsys.readouterr().out


def test_cli_print_tokens_and_ast_without_running(tmp_path, capsys):
    path = _write(tmp_path, "show 1 + 2;")
    assert main([path, "--print-tokens", "--print-ast", "--no-run"]) == 0
    out = capsys.readouterr().out
    assert "Tokens (6):" in out
    assert "Program" in out
    assert "BinaryOp(+)" in out
    assert "3.000000" not in out


def test_cli_dump_ast(tmp_path, capsys):
    path = _write(tmp_path, "let b be bool; b = !false; show b;")
    dump = tmp_path / "ast.json"
    assert main([path, "--dump-ast", str(dump)]) == 0
    assert capsys.readouterr().out.endswith("true\n")
    data = json.loads(dump.read_text(encoding="utf-8"))
    assert data["node_type"] == "Program"
    assert [s["node_type"] for s in data["statements"]] == ["VarDecl", "VarAssign", "Show"]


def test_cli_viz_ast_writes_rendering_or_dot(tmp_path, capsys):
    path = _write(tmp_path, "show 1;")
    target = tmp_path / "ast"
    assert main([path, "--viz-ast", str(target), "--no-run"]) == 0
    assert (tmp_path / "ast.svg").exists() or (tmp_path / "ast.dot").exists()


def test_cli_block_statement_limit(tmp_path, capsys):
    path = _write(tmp_path, "if true then show 1; show 2; endif")
    assert main([path, "--max-block-statements", "1"]) == 1
    assert "more than 1 statements" in capsys.readouterr().out
    assert main([path, "--max-block-statements", "2"]) == 0


def test_interactive_mode(monkeypatch):
    lines = iter(["show 1;", "", "show y;", "quit"])
    monkeypatch.setattr("builtins.input", lambda prompt="": next(lines))
    out = io.StringIO()
    interactive_mode(output=out)
    text = out.getvalue()
    assert "1.000000" in text
    assert "Variable 'y' not declared" in text
    assert "Goodbye!" in text


def test_interactive_mode_stops_at_end_of_input(monkeypatch):
    def _eof(prompt=""):
        raise EOFError

    monkeypatch.setattr("builtins.input", _eof)
    out = io.StringIO()
    interactive_mode(output=out)
    assert "Exiting" in out.getvalue()


def test_cli_viz_ast_unwritable_target(tmp_path, capsys):
    path = _write(tmp_path, "show 1;")
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    assert main([path, "--viz-ast", str(blocker / "ast"), "--no-run"]) == 1
    assert "Failed to write AST visualization" in capsys.readouterr().out
