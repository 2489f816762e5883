from __future__ import annotations
import argparse
import json
import subprocess
import sys
from typing import List, Optional, TextIO
from lexer import Lexer
from tokens import Token
from ast_nodes import ProgramNode
from parser import Parser, DEFAULT_MAX_BLOCK_STATEMENTS
from ast_interpreter import Interpreter
from errors import CamError
from pretty_printer import PrettyPrinter
from ast_json import ast_to_json
from ast_viz import render_ast_dot, write_and_render
from graphviz import ExecutableNotFound


def lex(text: str) -> List[Token]:
    """Tokenize input string."""
    lexer = Lexer(text)
    return lexer.tokenize()


def parse_tokens(
    tokens: List[Token], max_block_statements: int = DEFAULT_MAX_BLOCK_STATEMENTS
) -> ProgramNode:
    """Parse tokens into AST."""
    parser = Parser(tokens, max_block_statements=max_block_statements)
    return parser.parse()


def process_program(
    text: str,
    *,
    output: Optional[TextIO] = None,
    print_tokens: bool = False,
    print_ast: bool = False,
    dump_ast_path: Optional[str] = None,
    viz_path: Optional[str] = None,
    viz_format: str = "svg",
    run: bool = True,
    max_block_statements: int = DEFAULT_MAX_BLOCK_STATEMENTS,
) -> int:
    """Process a single program: lex, parse and interpret, optionally printing stages.

    Returns the process exit status: 0 on success, 1 if any phase reported an
    error. Diagnostics are printed to `output` alongside program output.
    """
    out = output if output is not None else sys.stdout

    try:
        tokens = lex(text)
        if print_tokens:
            print(f"Tokens ({len(tokens)}):", file=out)
            for i, token in enumerate(tokens):
                print(f"  {i:3}: {token}", file=out)

        ast = parse_tokens(tokens, max_block_statements=max_block_statements)
    except CamError as e:
        print(e.diagnostic(), file=out)
        return 1

    if print_ast:
        print(PrettyPrinter.print_ast(ast), file=out)

    if dump_ast_path:
        try:
            with open(dump_ast_path, "w", encoding="utf-8") as fh:
                json.dump(ast_to_json(ast), fh, indent=2)
            print(f"Wrote AST JSON to {dump_ast_path}", file=out)
        except OSError as e:
            print(f"Failed to write AST JSON to {dump_ast_path}: {e}", file=out)
            return 1

    if viz_path:
        try:
            rendered = write_and_render(ast, viz_path, fmt=viz_format)
            print(f"Wrote AST visualization to {rendered}", file=out)
        except (ExecutableNotFound, subprocess.CalledProcessError) as e:
            # Rendering needs the Graphviz binaries; fall back to dot source.
            try:
                with open(f"{viz_path}.dot", "w", encoding="utf-8") as fh:
                    fh.write(render_ast_dot(ast).source)
            except OSError as err:
                print(f"Failed to write AST visualization to {viz_path}: {err}", file=out)
                return 1
            print(f"Wrote DOT to {viz_path}.dot ({viz_format} render failed: {e})", file=out)
        except OSError as e:
            print(f"Failed to write AST visualization to {viz_path}: {e}", file=out)
            return 1

    if not run:
        return 0

    interpreter = Interpreter(output=out)
    return 0 if interpreter.interpret(ast) else 1


def interactive_mode(output: Optional[TextIO] = None) -> None:
    """Run an interactive REPL; each entered line is run as a fresh program."""
    out = output if output is not None else sys.stdout
    print("\nCAM interactive mode (type 'quit' to exit)", file=out)
    print("=" * 80, file=out)

    while True:
        try:
            text = input("\ncam> ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\n\nExiting...", file=out)
            break

        if text.lower() in ("quit", "exit", "q"):
            print("Goodbye!", file=out)
            break

        if not text:
            continue

        process_program(text, output=out)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="camlang",
        description="Run a CAM program from a file or interactively from stdin",
    )
    group = parser.add_mutually_exclusive_group()
    group.add_argument("file", nargs="?", help="Path to source file to run")
    group.add_argument(
        "--interactive",
        "-i",
        dest="interactive",
        action="store_true",
        help="Start interactive REPL mode",
    )
    # printing/verbosity options
    parser.add_argument(
        "--print-tokens", dest="print_tokens", action="store_true", help="Print tokens"
    )
    parser.add_argument(
        "--print-ast", dest="print_ast", action="store_true", help="Print the AST"
    )
    parser.add_argument(
        "--dump-ast", dest="dump_ast", help="Path to write the AST as JSON"
    )
    parser.add_argument(
        "--viz-ast",
        dest="viz_ast",
        help="Path (without extension) to write Graphviz visualization of the AST",
    )
    parser.add_argument(
        "--viz-format",
        dest="viz_format",
        default="svg",
        help="Format for Graphviz output (svg, png, pdf, etc)",
    )
    parser.add_argument(
        "--no-run",
        dest="run",
        action="store_false",
        help="Stop after parsing (useful with --print-ast)",
    )
    parser.add_argument(
        "--max-block-statements",
        dest="max_block_statements",
        type=int,
        default=DEFAULT_MAX_BLOCK_STATEMENTS,
        help="Maximum statements in an if/while body before its closing keyword",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    if args.max_block_statements < 1:
        parser.error("--max-block-statements must be at least 1")

    if args.interactive:
        interactive_mode()
        return 0

    if not args.file:
        parser.print_help()
        return 1

    try:
        with open(args.file, "r", encoding="utf-8") as fh:
            text = fh.read()
    except (OSError, UnicodeDecodeError) as e:
        print(f"Failed to read file {args.file}: {e}")
        return 1

    return process_program(
        text,
        print_tokens=args.print_tokens,
        print_ast=args.print_ast,
        dump_ast_path=args.dump_ast,
        viz_path=args.viz_ast,
        viz_format=args.viz_format,
        run=args.run,
        max_block_statements=args.max_block_statements,
    )


if __name__ == "__main__":
    sys.exit(main())
