"""Recursive-descent syntax analysis of a token stream into a printed parse tree."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

from .lexer import IDENTIFIER, KEYWORD, PREPROCESSOR, Token

DATATYPES = frozenset({"int", "float", "char", "void"})
BODY = "Body (Compound Statement)"

_DECLARATION_TYPES = frozenset({"int", "float", "char"})
_IO_CALLS = frozenset({"printf", "scanf"})
_BRANCH = "+-- "
_PIPE = "|   "
_BLANK = "    "


class ParseError(Exception):
    """A syntax error found while parsing a token stream."""


@dataclass
class ParseResult:
    """The printed parse-tree lines and the syntax errors that were reported."""

    lines: list[str] = field(default_factory=list)
    errors: list[ParseError] = field(default_factory=list)


def _is_include(text: str) -> bool:
    return "#include" in text or "<" in text


class Parser:
    """Parses a token stream and renders the parse tree as indented lines.

    Parsing does not stop at the first error: like a flag-driven parser, each
    rule checks for an earlier failure on entry, so a statement that is
    already underway may still consume tokens and report further errors.
    """

    def __init__(self, tokens: Iterable[Token]) -> None:
        self._tokens = list(tokens)
        self._reset()

    def _reset(self) -> None:
        self._pos = 0
        self._kind = ""
        self._text = ""
        self._siblings: dict[int, bool] = {}
        self._lines: list[str] = []
        self._errors: list[ParseError] = []

    def parse(self) -> ParseResult:
        """Parse the whole stream and return the tree lines and errors."""
        self._reset()
        self._translation_unit()
        return ParseResult(self._lines, self._errors)

    @property
    def _failed(self) -> bool:
        return bool(self._errors)

    def _error(self, message: str) -> None:
        self._errors.append(ParseError(message))

    def _read(self) -> bool:
        if self._pos >= len(self._tokens):
            return False
        token = self._tokens[self._pos]
        self._pos += 1
        self._kind, self._text = token.kind, token.text
        return True

    def _expect(self, text: str) -> bool:
        return self._read() and self._text == text

    def _collect(self, stop: str) -> str:
        words = []
        while self._read() and self._text != stop:
            words.append(f"{self._text} ")
        return "".join(words)

    def _node(self, level: int, sibling: bool, label: str, content: str | None = None) -> None:
        self._siblings[level] = sibling
        prefix = "".join(
            _PIPE if self._siblings.get(depth) else _BLANK for depth in range(level - 1)
        )
        if level > 0:
            prefix += _BRANCH
        self._lines.append(prefix + (label if content is None else f"{label}: {content}"))

    def _translation_unit(self) -> None:
        self._node(0, False, "TranslationUnit")

        count = sum(
            1 for token in self._tokens if token.kind == PREPROCESSOR and _is_include(token.text)
        )
        for remaining in reversed(range(count)):
            if not self._read():
                break
            if self._kind == PREPROCESSOR and _is_include(self._text):
                self._node(1, remaining > 0, "Include Directives")
                self._node(2, False, self._text)

        while not self._failed and self._read():
            if self._kind != KEYWORD or self._text not in DATATYPES:
                continue
            following = self._tokens[self._pos:self._pos + 2]
            if len(following) < 2 or following[0].kind != IDENTIFIER:
                continue
            if following[1].text == "(":
                self._function(1)
            else:
                self._declaration(1)

    def _function(self, level: int) -> None:
        if self._failed:
            return
        self._node(level, False, "Function Definition")
        self._node(level + 1, True, "Return Type", self._text)

        if not self._read() or self._kind != IDENTIFIER:
            return self._error("Expected function name")
        self._node(level + 1, True, "Function Name", self._text)

        if not self._expect("("):
            return self._error("Expected '('")
        self._node(level + 1, True, "Parameters")
        self._parameters(level + 2)

        if not self._expect(")"):
            return self._error("Expected ')'")
        if not self._expect("{"):
            return self._error("Expected '{'")
        self._node(level + 1, False, BODY)
        self._body(level + 2)

    def _parameters(self, level: int) -> None:
        if self._failed:
            return
        while True:
            mark = self._pos
            if not self._read():
                return self._error("Unexpected end in parameters")
            if self._text == ")":
                self._pos = mark
                return
            if self._text not in DATATYPES:
                return self._error("Expected type in parameters")
            self._node(level, False, "Parameter")
            self._node(level + 1, True, "Type", self._text)
            if not self._read() or self._kind != IDENTIFIER:
                return self._error("Expected identifier")
            self._node(level + 1, False, "Identifier", self._text)

            mark = self._pos
            if not self._read():
                return
            if self._text == ",":
                continue
            if self._text == ")":
                self._pos = mark
                return
            return self._error("Expected ',' or ')'")

    def _body(self, level: int) -> None:
        if self._failed:
            return
        statements: dict[str, Callable[[int], None]] = {
            "for": self._for_loop,
            "while": self._while_loop,
            "if": self._if_statement,
            "return": self._return_statement,
        }
        while True:
            if not self._read():
                return self._error("Unexpected EOF in body")
            if self._text == "}":
                return
            if self._kind == KEYWORD:
                if self._text in DATATYPES:
                    self._declaration(level)
                elif self._text in statements:
                    statements[self._text](level)
                else:
                    return self._error("Unexpected keyword")
            elif self._kind == IDENTIFIER and self._text in _IO_CALLS:
                self._io_call(level)

    def _declaration(self, level: int) -> None:
        if self._failed:
            return
        self._node(level, False, "Declaration")
        if self._text != "int":
            return self._error("Expected type 'int'")
        self._node(level + 1, True, "Type", "int")

        if not self._read():
            return self._error("Unexpected end of file after type")
        if self._kind != IDENTIFIER:
            return self._error("Expected identifier after type")
        self._node(level + 1, True, "Identifier", self._text)

        if not self._read():
            return self._error("Unexpected end of file after identifier")
        if self._text == ";":
            return
        if self._text != "=":
            return self._error("Expected ';' or '=' after identifier")

        words = []
        while True:
            if not self._read():
                return self._error("Expected ';' at end of initialization")
            if self._text == ";":
                break
            if self._text in _DECLARATION_TYPES or self._kind == KEYWORD:
                return self._error("Missing ';' before new declaration")
            words.append(f"{self._text} ")
        self._node(level + 1, True, "Initializer")
        self._node(level + 2, False, "Expression", "".join(words))

    def _for_loop(self, level: int) -> None:
        if self._failed:
            return
        self._node(level, False, "For Loop")
        if not self._expect("("):
            return self._error("Expected '(' after for")

        self._node(level + 1, True, "Initialization")
        mark = self._pos
        if not self._read():
            return
        declares = self._kind == KEYWORD and self._text in DATATYPES
        self._pos = mark
        if declares:
            self._declaration(level + 2)
        else:
            init = self._collect(";")
            if not init:
                return self._error("Expected initialization expression")
            self._node(level + 2, False, "Expression", init)

        self._node(level + 1, True, "Condition")
        self._node(level + 2, False, "Expression", self._collect(";"))

        self._node(level + 1, True, "Increment")
        self._node(level + 2, False, "Expression", self._collect(")"))

        if not self._expect("{"):
            return self._error("Expected '{' after for loop")
        self._node(level + 1, False, BODY)
        self._body(level + 2)

    def _while_loop(self, level: int) -> None:
        if self._failed:
            return
        self._node(level, False, "While Loop")
        if not self._expect("("):
            return self._error("Expected '(' after while")
        self._node(level + 1, True, "Condition", self._collect(")"))
        if not self._expect("{"):
            return self._error("Expected '{'")
        self._node(level + 1, False, BODY)
        self._body(level + 2)

    def _if_statement(self, level: int) -> None:
        if self._failed:
            return
        self._node(level, False, "If Statement")
        if not self._expect("("):
            return self._error("Expected '(' after if")
        self._node(level + 1, True, "Condition", self._collect(")"))
        if not self._expect("{"):
            return self._error("Expected '{' after if condition")
        self._node(level + 1, False, BODY)
        self._body(level + 2)

        mark = self._pos
        if not self._read():
            return
        if self._text != "else":
            self._pos = mark
            return
        if not self._read():
            return
        if self._text == "if":
            self._if_statement(level)
        elif self._text == "{":
            self._node(level, False, "Else Statement")
            self._node(level + 1, False, BODY)
            self._body(level + 2)
        else:
            return self._error("Expected '{' or 'if' after else")

    def _return_statement(self, level: int) -> None:
        if self._failed:
            return
        self._node(level, False, "Return Statement")
        self._node(level + 1, False, "Expression", self._collect(";"))

    def _io_call(self, level: int) -> None:
        label = "Printf Statement" if self._text == "printf" else "Scanf Statement"
        self._node(level, False, label)
        if not self._expect("("):
            return self._error("Expected '(' after printf/scanf")
        self._node(level + 1, False, "Arguments", self._collect(")"))
        if not self._expect(";"):
            return self._error("Expected ';' after printf/scanf")


def read_token_stream(text: str) -> list[Token]:
    """Read a token file as whitespace-separated ``KIND text`` word pairs.

    Token text containing spaces is split across pairs, exactly as a
    word-by-word reader sees it. A trailing unpaired word keeps the text of
    the pair before it.
    """
    words = text.split()
    tokens = [Token(kind, value) for kind, value in zip(words[0::2], words[1::2])]
    if len(words) % 2:
        previous = tokens[-1].text if tokens else ""
        tokens.append(Token(words[-1], previous))
    return tokens


def parse_tokens(text: str) -> ParseResult:
    """Parse the contents of a token file."""
    return Parser(read_token_stream(text)).parse()


def main(argv: list[str] | None = None) -> int:
    """Parse a token file, print the tree and write the parse-tree file."""
    parser = argparse.ArgumentParser(description="Build a parse tree from a token file.")
    parser.add_argument("tokens", nargs="?", default="tokens.txt")
    parser.add_argument("-o", "--output", default="parse_tree.txt")
    args = parser.parse_args(argv)

    try:
        with open(args.tokens, encoding="latin-1") as handle:
            text = handle.read()
    except OSError as exc:
        print(f"Could not open {args.tokens}: {exc.strerror}", file=sys.stderr)
        return 1

    result = parse_tokens(text)
    tree = "".join(f"{line}\n" for line in result.lines)
    try:
        with open(args.output, "w", encoding="latin-1") as handle:
            handle.write(tree)
    except OSError as exc:
        print(f"Could not open {args.output}: {exc.strerror}", file=sys.stderr)
        return 1

    sys.stdout.write(tree)
    for error in result.errors:
        print(f"Syntax Error: {error}", file=sys.stderr)
    if result.errors:
        print("Parsing terminated due to syntax errors.")
    else:
        print("Parsing completed successfully.")
    return 0