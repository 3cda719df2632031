# toycc

`toycc` is a small teaching front end for a subset of C. It has three stages.
Each stage passes its result to the next one as a plain text file:

1. **Lexical analysis** (`toycc-lex`). Reads a C source file, `input.c` by
   default, and prints every token as `<KIND> text`. It writes the tokens to
   `tokens.txt`, one `KIND text` per line. It reads at most the first 10000
   characters of the source. Whitespace and `//` and `/* */` comments are
   skipped.
2. **Syntax analysis** (`toycc-parse`). Reads `tokens.txt` and prints an
   indented parse tree. It writes the same tree to `parse_tree.txt`.
3. **Semantic analysis** (`toycc-check`). Reads `parse_tree.txt` and builds a
   symbol table from the function names and identifiers in the tree. It
   checks assignment expressions for undeclared identifiers and for type
   mismatches. The warnings and the table are printed, and they are also
   written to `symbol_table.txt`.

## Installation

```
pip install .
```

## Usage

Put the source you want to analyse in `input.c`, then run the three stages in
order in the same directory:

```
toycc-lex
toycc-parse
toycc-check
```

Each command takes an optional input path and an `-o/--output` path in place
of the default file names:

```
toycc-lex program.c -o program.tokens
toycc-parse program.tokens -o program.tree
toycc-check program.tree -o program.symbols
```

If a command cannot open its input file, it prints a message and exits with
status 1.

### Syntax errors

When `toycc-parse` finds a syntax error, it does not start any new top-level
declaration or function. A statement that is already being parsed may still
read more tokens and report further errors. After the tree, each error is
printed on standard error as `Syntax Error: <message>`. The command then
prints either `Parsing terminated due to syntax errors.` or
`Parsing completed successfully.`.

## Using it as a library

Each stage can also be used in code, without going through the files:

```python
from toycc.lexer import tokenize, format_tokens
from toycc.parser import parse_tokens
from toycc.semantic import analyze_parse_tree

tokens = tokenize("int main() { int a = 5; return 0; }")
token_text = format_tokens(tokens)

parsed = parse_tokens(token_text)
for error in parsed.errors:
    print("Syntax Error:", error)

result = analyze_parse_tree(parsed.lines)
print(result.symbols.format())
for message in result.messages:
    print(message)
```

What each module provides:

- `toycc.lexer`
  - `Token`, a frozen dataclass with `kind` and `text`.
  - `tokenize(code)`, which returns a list of tokens.
  - `format_tokens(tokens)`, which renders tokens in the token-file format.
  - The predicates `is_keyword`, `is_operator` and `is_separator`.
- `toycc.parser`
  - `read_token_stream(text)`, which reads a token file back into tokens.
  - `Parser(tokens).parse()` and the shortcut `parse_tokens(text)`. Both
    return a `ParseResult` holding `lines` (the tree) and `errors` (a list of
    `ParseError`).
- `toycc.semantic`
  - `analyze_parse_tree(lines)`, which accepts a list of lines or a single
    string. It returns an `AnalysisResult` with `symbols` (a `SymbolTable`)
    and `messages`.
  - `SymbolTable`, with `add`, `is_declared`, `type_of` and `format`. It can
    be iterated over to get its `Symbol` entries. It holds at most 100
    symbols, and `add` raises `OverflowError` when it is full.

## What it does not do

`toycc` only analyses source. It does not generate code and it does not run
programs. The grammar is deliberately small:

- Declarations must use `int`. A `float` or `char` declaration is reported as
  a syntax error.
- Inside a function body, the parser understands declarations, `for`,
  `while`, `if`/`else`, `return` and `printf`/`scanf` calls. Other statements
  are skipped without being added to the tree.
- Type checking compares only the left-hand side of an assignment with the
  first operand on the right-hand side.

## Running the tests

```
pip install .[test]
pytest
```