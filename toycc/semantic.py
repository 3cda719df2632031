"""Semantic checks over a printed parse tree: symbol table and warnings."""

from __future__ import annotations

import argparse
import re
import sys
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

MAX_SYMBOLS = 100
GLOBAL_SCOPE = "global"

_RULE = "-" * 25
_FILE_HEADER = " Name      Type     Scope"
_SCREEN_HEADER = "Name       Type     Scope"
_OPERAND = re.compile(r"[^ +\-*/<>()]+")
_DIGITS = "0123456789"


@dataclass(frozen=True)
class Symbol:
    """A declared name with its type and the scope it belongs to."""

    name: str
    type_name: str
    scope: str


class SymbolTable:
    """Ordered collection of symbols with scope-aware lookup."""

    def __init__(self, capacity: int = MAX_SYMBOLS) -> None:
        self.capacity = capacity
        self._symbols: list[Symbol] = []

    def __iter__(self) -> Iterator[Symbol]:
        return iter(self._symbols)

    def __len__(self) -> int:
        return len(self._symbols)

    def add(self, type_name: str, name: str, scope: str) -> Symbol:
        """Append a symbol; raise OverflowError when the table is full."""
        if len(self._symbols) >= self.capacity:
            raise OverflowError(f"symbol table is full ({self.capacity} entries)")
        symbol = Symbol(name, type_name, scope)
        self._symbols.append(symbol)
        return symbol

    def _lookup(self, name: str, scope: str) -> Symbol | None:
        return next(
            (
                symbol
                for symbol in self._symbols
                if symbol.name == name and symbol.scope in (scope, GLOBAL_SCOPE)
            ),
            None,
        )

    def is_declared(self, name: str, scope: str) -> bool:
        """True if ``name`` is visible in ``scope`` or declared globally."""
        return self._lookup(name, scope) is not None

    def type_of(self, name: str, scope: str) -> str | None:
        """Type of the first visible symbol called ``name``, or None."""
        symbol = self._lookup(name, scope)
        return symbol.type_name if symbol else None

    def format(self) -> str:
        """Render the table as written to the symbol-table file."""
        return _render(self, _FILE_HEADER)


def _render(table: Iterable[Symbol], header: str) -> str:
    rows = [f"{s.name:<10} {s.type_name:<8} {s.scope:<10}" for s in table]
    return "\n".join([_RULE, header, _RULE, *rows, _RULE]) + "\n"


@dataclass
class AnalysisResult:
    """Symbols collected from a parse tree and the diagnostics raised."""

    symbols: SymbolTable = field(default_factory=SymbolTable)
    messages: list[str] = field(default_factory=list)


def _first_word(text: str) -> str | None:
    words = text.split(None, 1)
    return words[0] if words else None


def _check_assignment(table: SymbolTable, expr: str, scope: str) -> Iterator[str]:
    if "=" not in expr:
        return
    parts = expr.split(None, 1)
    if not parts:
        return
    lhs = parts[0]
    rest = parts[1] if len(parts) > 1 else ""
    rhs = rest[1:].lstrip() if rest.startswith("=") else ""

    if not table.is_declared(lhs, scope):
        yield f"Warning: Undeclared identifier '{lhs}' in scope '{scope}'"

    for match in _OPERAND.finditer(rhs):
        name = match.group()
        if name[0] not in _DIGITS and not table.is_declared(name, scope):
            yield (
                f"Warning: Undeclared identifier '{name}' used in expression "
                f"in scope '{scope}'"
            )

    # The leading operand is taken up to the end of the first delimited operand.
    first = _OPERAND.search(rhs)
    first_id = _first_word(rhs[: first.end()] if first else rhs)
    lhs_type = table.type_of(lhs, scope)
    rhs_type = table.type_of(first_id, scope) if first_id else None
    if lhs_type and rhs_type and lhs_type != rhs_type:
        yield f"Type Error: Cannot assign {rhs_type} to {lhs_type}"


def analyze_parse_tree(lines: Iterable[str] | str) -> AnalysisResult:
    """Build a symbol table from parse-tree lines and check assignments."""
    if isinstance(lines, str):
        lines = lines.splitlines()
    result = AnalysisResult()
    table = result.symbols
    scope = GLOBAL_SCOPE
    last_type = ""

    for raw in lines:
        line = re.split(r"[\r\n]", raw, maxsplit=1)[0]
        text = line.lstrip(" +-|")

        if text.startswith("Function Name:"):
            word = _first_word(text[len("Function Name:"):])
            if word is not None:
                scope = word
            table.add("function", scope, GLOBAL_SCOPE)
        elif text.startswith("Type:"):
            word = _first_word(text[len("Type:"):])
            if word is not None:
                last_type = word
        elif text.startswith("Identifier:"):
            word = _first_word(text[len("Identifier:"):])
            if word is not None and not table.is_declared(word, scope):
                table.add(last_type, word, scope)
        elif text.startswith("Expression:"):
            expr = text[len("Expression: "):]
            result.messages.extend(_check_assignment(table, expr, scope))
    return result


def main(argv: list[str] | None = None) -> int:
    """Analyse a parse-tree file and write the symbol-table file."""
    parser = argparse.ArgumentParser(description="Check a parse tree and list symbols.")
    parser.add_argument("parse_tree", nargs="?", default="parse_tree.txt")
    parser.add_argument("-o", "--output", default="symbol_table.txt")
    args = parser.parse_args(argv)

    try:
        with open(args.parse_tree, encoding="latin-1") as handle:
            lines = handle.readlines()
    except OSError as exc:
        print(f"Could not open {args.parse_tree}: {exc.strerror}", file=sys.stderr)
        return 1

    result = analyze_parse_tree(lines)
    report = "".join(f"{message}\n" for message in result.messages)
    try:
        with open(args.output, "w", encoding="latin-1") as handle:
            handle.write(report + result.symbols.format())
    except OSError as exc:
        print(f"Could not open {args.output}: {exc.strerror}", file=sys.stderr)
        return 1

    for message in result.messages:
        print(message)
    print("Symbol Table:- ")
    print(_render(result.symbols, _SCREEN_HEADER), end="")
    return 0