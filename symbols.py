"""Symbol table, runtime values and the scope environment.

This module defines the `SymbolType` enum of declared types, the tagged
runtime `Value`, a `Symbol` dataclass for declared variables and
`SymbolTable`, a single scope that links to its enclosing scope through an
optional parent. `Environment` owns the chain of tables and is what the
interpreter pushes and pops as it enters and leaves `if`/`while` bodies.

Lookup walks from the innermost table outward, so the innermost visible
declaration wins. Popping a scope drops its declarations.
"""

from __future__ import annotations
from enum import Enum, auto
from dataclasses import dataclass
from typing import Optional, Dict, Union
from errors import InterpreterError


class SymbolType(Enum):
    NUM = auto()
    BOOL = auto()
    UNKNOWN = auto()

    def __str__(self) -> str:
        return self.name.lower()

    @staticmethod
    def from_name(name: str) -> SymbolType:
        """Map a type-name lexeme (`num`, `bool`) to its declared type."""
        return {"num": SymbolType.NUM, "bool": SymbolType.BOOL}.get(
            name, SymbolType.UNKNOWN
        )


@dataclass(frozen=True)
class Value:
    type: SymbolType
    value: Union[float, bool, None] = None

    @staticmethod
    def number(v: float) -> Value:
        return Value(SymbolType.NUM, float(v))

    @staticmethod
    def boolean(v: bool) -> Value:
        return Value(SymbolType.BOOL, bool(v))

    @staticmethod
    def zero(type_: SymbolType) -> Value:
        """Initial value of a freshly declared variable."""
        if type_ == SymbolType.NUM:
            return Value.number(0.0)
        if type_ == SymbolType.BOOL:
            return Value.boolean(False)
        return UNKNOWN_VALUE

    def __str__(self) -> str:
        match self.type:
            case SymbolType.NUM:
                return f"{self.value:f}"
            case SymbolType.BOOL:
                return "true" if self.value else "false"
            case _:
                return "unknown"


UNKNOWN_VALUE = Value(SymbolType.UNKNOWN)


@dataclass
class Symbol:
    name: str
    type: SymbolType
    scope: int = 0
    value: Value = UNKNOWN_VALUE

    def __repr__(self) -> str:
        return f"Symbol({self.name}, {self.type}, scope={self.scope}, value={self.value})"


class SymbolTable:
    def __init__(self, parent: Optional[SymbolTable] = None):
        self.symbols: Dict[str, Symbol] = {}
        self.parent = parent
        self.depth: int = parent.depth + 1 if parent is not None else 0

    def declare(self, name: str, type_: SymbolType) -> Symbol:
        """Declare a variable in this scope.

        Declaring an existing name again with the same type returns the
        existing symbol unchanged; a different type is an error.
        """
        if type_ == SymbolType.UNKNOWN:
            raise InterpreterError(f"Variable '{name}' declared with unknown type")

        existing = self.symbols.get(name)
        if existing is not None:
            if existing.type != type_:
                raise InterpreterError(
                    f"Redeclaration of existing variable '{name}' with different type "
                    f"(was {existing.type}, now {type_})"
                )
            return existing

        symbol = Symbol(name, type_, self.depth, Value.zero(type_))
        self.symbols[name] = symbol
        return symbol

    def lookup(self, name: str) -> Symbol:
        """Look up a variable in the current and parent scopes."""
        if name in self.symbols:
            return self.symbols[name]
        elif self.parent:
            return self.parent.lookup(name)
        else:
            raise InterpreterError(f"Variable '{name}' not declared")


class Environment:
    """Scope stack for one interpreter run."""

    def __init__(self):
        self.table = SymbolTable()

    @property
    def depth(self) -> int:
        return self.table.depth

    def push_scope(self) -> None:
        self.table = SymbolTable(parent=self.table)

    def pop_scope(self) -> None:
        if self.table.parent is None:
            raise InterpreterError("Cannot leave the top-level scope")
        self.table = self.table.parent

    def declare(self, name: str, type_: SymbolType) -> Symbol:
        return self.table.declare(name, type_)

    def lookup(self, name: str) -> Symbol:
        return self.table.lookup(name)

    def assign(self, name: str, value: Value) -> Symbol:
        """Store `value` in the innermost visible variable called `name`."""
        symbol = self.table.lookup(name)
        if symbol.type != value.type:
            raise InterpreterError(
                f"Type mismatch: cannot assign {value.type} to '{name}' of type {symbol.type}"
            )
        symbol.value = value
        return symbol

    def visible(self) -> Dict[str, Value]:
        """Snapshot of every visible variable, innermost declaration winning."""
        chain = []
        table: Optional[SymbolTable] = self.table
        while table is not None:
            chain.append(table)
            table = table.parent
        result: Dict[str, Value] = {}
        for t in reversed(chain):
            for name, sym in t.symbols.items():
                result[name] = sym.value
        return result
