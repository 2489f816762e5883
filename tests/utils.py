import io

from lexer import Lexer
from parser import Parser
from ast_interpreter import Interpreter


def lex(text: str):
    """Return a list of tokens for the given source text."""
    return Lexer(text).tokenize()


def parse_text(text: str, **kwargs):
    """Convenience: lex+parse a source text into an AST."""
    return Parser(Lexer(text).tokenize(), **kwargs).parse()


def run_text(text: str):
    """Lex, parse and run `text`; return (output lines, interpreter)."""
    out = io.StringIO()
    interpreter = Interpreter(output=out)
    interpreter.interpret(parse_text(text))
    return out.getvalue().splitlines(), interpreter
