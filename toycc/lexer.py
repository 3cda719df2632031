"""Lexical analysis of C source text into classified tokens."""

from __future__ import annotations

import argparse
import string
from collections.abc import Iterable
from dataclasses import dataclass

PREPROCESSOR = "PREPROCESSOR"
STRING_LITERAL = "STRING_LITERAL"
CHAR_CONSTANT = "CHAR_CONSTANT"
NUMBER = "NUMBER"
KEYWORD = "KEYWORD"
IDENTIFIER = "IDENTIFIER"
OPERATOR = "OPERATOR"
SEPARATOR = "SEPARATOR"
UNKNOWN = "UNKNOWN"

KEYWORDS = frozenset(
    {
        "auto", "break", "case", "char", "const", "continue", "default", "do",
        "double", "else", "enum", "extern", "float", "for", "goto", "if", "int",
        "long", "register", "return", "short", "signed", "sizeof", "static",
        "struct", "switch", "typedef", "union", "unsigned", "void", "volatile",
        "while",
    }
)

OPERATOR_CHARS = "+-*/%=<>!&|^"
SEPARATOR_CHARS = "(){}[]:;\"'.,|"
MAX_SOURCE_CHARS = 10000

_WHITESPACE = " \t\n\v\f\r"
_DIGITS = string.digits
_NUMBER_CHARS = _DIGITS + "."
_IDENT_START = string.ascii_letters + "_"
_IDENT_CHARS = _IDENT_START + _DIGITS


@dataclass(frozen=True)
class Token:
    """A lexical token: its category and its text."""

    kind: str
    text: str

    def __str__(self) -> str:
        return f"<{self.kind}> {self.text}"


def is_keyword(word: str) -> bool:
    """Return True if ``word`` is a reserved C keyword."""
    return word in KEYWORDS


def is_operator(char: str) -> bool:
    """Return True if ``char`` is a single operator character."""
    return len(char) == 1 and char in OPERATOR_CHARS


def is_separator(char: str) -> bool:
    """Return True if ``char`` is a single separator character."""
    return len(char) == 1 and char in SEPARATOR_CHARS


def _scan_while(code: str, start: int, allowed: str) -> int:
    end = start
    while end < len(code) and code[end] in allowed:
        end += 1
    return end


def _line_end(code: str, start: int) -> int:
    end = code.find("\n", start)
    return len(code) if end < 0 else end


def tokenize(code: str) -> list[Token]:
    """Split C source text into tokens, skipping whitespace and comments.

    Scanning stops at the first NUL character, as with a C string.
    """
    code = code.split("\0", 1)[0]
    size = len(code)
    tokens: list[Token] = []
    pos = 0
    while pos < size:
        char = code[pos]

        if char in _WHITESPACE:
            pos += 1
            continue

        if code.startswith("//", pos):
            pos = _line_end(code, pos)
            continue

        if code.startswith("/*", pos):
            close = code.find("*/", pos + 2)
            pos = size if close < 0 else close + 2
            continue

        if char == "#":
            end = _line_end(code, pos)
            kind = PREPROCESSOR
        elif char in "\"'":
            close = code.find(char, pos + 1)
            end = size if close < 0 else close + 1
            kind = STRING_LITERAL if char == '"' else CHAR_CONSTANT
        elif char in _DIGITS:
            end = _scan_while(code, pos, _NUMBER_CHARS)
            kind = NUMBER
        elif char in _IDENT_START:
            end = _scan_while(code, pos, _IDENT_CHARS)
            kind = KEYWORD if is_keyword(code[pos:end]) else IDENTIFIER
        elif is_operator(char):
            end = pos + 2 if pos + 1 < size and is_operator(code[pos + 1]) else pos + 1
            kind = OPERATOR
        else:
            end = pos + 1
            kind = SEPARATOR if is_separator(char) else UNKNOWN

        tokens.append(Token(kind, code[pos:end]))
        pos = end
    return tokens


def format_tokens(tokens: Iterable[Token]) -> str:
    """Render tokens in the token-file format: one ``KIND text`` per line."""
    return "".join(f"{token.kind} {token.text}\n" for token in tokens)


def main(argv: list[str] | None = None) -> int:
    """Tokenize a C source file, print the tokens and write the token file."""
    parser = argparse.ArgumentParser(description="Split C source into tokens.")
    parser.add_argument("source", nargs="?", default="input.c")
    parser.add_argument("-o", "--output", default="tokens.txt")
    args = parser.parse_args(argv)

    with open(args.output, "w", encoding="latin-1"):
        pass

    try:
        with open(args.source, encoding="latin-1", newline="") as handle:
            code = handle.read(MAX_SOURCE_CHARS)
    except OSError:
        print("Cannot open input file.")
        return 1

    print("----- Tokens Identified -----")
    tokens = tokenize(code)
    for token in tokens:
        print(token)
    with open(args.output, "w", encoding="latin-1") as handle:
        handle.write(format_tokens(tokens))
    return 0