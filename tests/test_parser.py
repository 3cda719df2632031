import pytest

from toycc.lexer import IDENTIFIER, KEYWORD, SEPARATOR, Token, format_tokens, tokenize
from toycc.parser import ParseError, Parser, main, parse_tokens, read_token_stream

SAMPLE = """#include<stdio.h>

void foo(int a){
  if(a == 0){
    return b;
  }
}
int main() {
    int a = 10;
    int a = 5;
    int b = 10;
    int c;

    return 0;
}
"""


def parse_code(code):
    return parse_tokens(format_tokens(tokenize(code)))


def labels(result):
    return [line.lstrip(" |+-") for line in result.lines]


def messages(result):
    return [str(error) for error in result.errors]


def test_read_token_stream_pairs_words():
    tokens = read_token_stream("KEYWORD int\nIDENTIFIER main\n")
    assert tokens == [Token(KEYWORD, "int"), Token(IDENTIFIER, "main")]


def test_read_token_stream_splits_text_with_spaces():
    tokens = read_token_stream("PREPROCESSOR #include <stdio.h>\n")
    assert [t.kind for t in tokens] == ["PREPROCESSOR", "<stdio.h>"]
    assert tokens[0].text == "#include"


def test_simple_function_tree_exact():
    result = parse_code("int main() {\n    int a = 10;\n    return a;\n}\n")
    assert result.errors == []
    assert result.lines == [
        "TranslationUnit",
        "+-- Function Definition",
        "    +-- Return Type: int",
        "    +-- Function Name: main",
        "    +-- Parameters",
        "    +-- Body (Compound Statement)",
        "        +-- Declaration",
        "            +-- Type: int",
        "            +-- Identifier: a",
        "            +-- Initializer",
        "                +-- Expression: 10 ",
        "        +-- Return Statement",
        "            +-- Expression: a ",
    ]


def test_parser_accepts_token_objects_directly():
    tokens = [
        Token(KEYWORD, "int"),
        Token(IDENTIFIER, "x"),
        Token(SEPARATOR, ";"),
    ]
    result = Parser(tokens).parse()
    assert result.errors == []
    assert labels(result) == ["TranslationUnit", "Declaration", "Type: int", "Identifier: x"]


def test_parse_is_repeatable():
    parser = Parser(tokenize("int main() { return 0; }"))
    first = parser.parse()
    second = parser.parse()
    assert first.lines == second.lines
    assert first.errors == [] and second.errors == []


def test_sample_program_parses_cleanly():
    result = parse_code(SAMPLE)
    names = labels(result)
    assert result.errors == []
    assert names[:3] == ["TranslationUnit", "Include Directives", "#include<stdio.h>"]
    assert "Function Name: foo" in names
    assert "Function Name: main" in names
    assert "Condition: a == 0 " in names
    assert names.count("Declaration") == 4
    assert ["Parameter", "Type: int", "Identifier: a"] == names[
        names.index("Parameter"):names.index("Parameter") + 3
    ]


def test_tree_prefix_shape_invariant():
    result = parse_code(SAMPLE + "int f() { for (int i = 0; i < 3; i++) { } }\n")
    for line in result.lines[1:]:
        head, _, _ = line.partition("+-- ")
        assert len(head) % 4 == 0
        assert set(head) <= {" ", "|"}


def test_for_loop_with_expression_init():
    result = parse_code("int main() { for (i = 0; i < 3; i++) { } }")
    assert result.errors == []
    assert "Expression: i = 0 " in labels(result)


def test_while_and_else():
    result = parse_code("int main() { while (x) { } if (x) { } else { return 0; } }")
    names = labels(result)
    assert result.errors == []
    assert "While Loop" in names
    assert "Condition: x " in names
    assert "Else Statement" in names
    assert "Expression: 0 " in names


def test_else_if_chain():
    result = parse_code("int main() { if (a) { } else if (b) { } }")
    names = labels(result)
    assert result.errors == []
    assert names.count("If Statement") == 2
    assert "Condition: b " in names


def test_scanf_statement():
    result = parse_code("int main() { scanf(x); }")
    assert result.errors == []
    assert "Scanf Statement" in labels(result)
    assert "Arguments: x " in labels(result)


def test_error_stops_top_level_parsing():
    result = parse_code("int main() { float x; }\nint other() { return 0; }")
    assert messages(result) == ["Expected type 'int'"]
    assert "Function Name: other" not in labels(result)


def test_main_writes_tree(tmp_path, capsys):
    tokens = tmp_path / "tokens.txt"
    tokens.write_text(format_tokens(tokenize(SAMPLE)), encoding="latin-1")
    out = tmp_path / "parse_tree.txt"
    assert main([str(tokens), "-o", str(out)]) == 0
    expected = parse_code(SAMPLE).lines
    assert out.read_text(encoding="latin-1").splitlines() == expected
    assert "Parsing completed successfully." in capsys.readouterr().out


def test_main_reports_errors(tmp_path, capsys):
    tokens = tmp_path / "tokens.txt"
    tokens.write_text(format_tokens(tokenize("int main() { float x; }")), encoding="latin-1")
    out = tmp_path / "parse_tree.txt"
    assert main([str(tokens), "-o", str(out)]) == 0
    captured = capsys.readouterr()
    assert "Syntax Error: Expected type 'int'" in captured.err
    assert "Parsing terminated due to syntax errors." in captured.out


def test_main_missing_input(tmp_path):
    assert main([str(tmp_path / "absent.txt"), "-o", str(tmp_path / "tree.txt")]) == 1