import io

import pytest

from sslc.compiler import Compiler, check
from sslc.diagnostics import SemanticError, SyntaxDiagnostic
from sslc.main import EXAMPLE_SOURCE
from sslc.semantic import DataType


def compile_quietly(source, **options):
    return check(source, echo=False, **options)


VALID_PROGRAMS = [
    "entero x; x := 5;",
    "entero a, b, c; a := 1; b := a + 2 * (a - 3) % 4; c := b / 2;",
    "caracter c; c := 'q'; escribir(c);",
    "real r; leer(r); escribir(r * 2.5);",
    "entero i; i := 0; mientras (i < 10) { i := i + 1; }",
    "entero i; i := 3; si (i >= 1 y i <> 2 o i = 0) { escribir(i); } sino { i := 0; }",
    "entero i; i := 3; si (i > 1) { } ",
    "entero x; x := 1; repetir { escribir(x); x := x - 1; } hasta (x = 0);",
    "entero x; x := 1; si (x < 2 no x > 5) { escribir(x); }",
    "// only a comment",
    "",
    EXAMPLE_SOURCE,
]


@pytest.mark.parametrize("source", VALID_PROGRAMS)
def test_valid_programs_compile(source):
    compiler = compile_quietly(source)
    assert compiler.success is True
    assert compiler.diagnostics.errors == []


def test_table_holds_exactly_the_declared_identifiers():
    compiler = compile_quietly("entero a, b; real r; caracter c;")
    declared = {s.name: s.type for s in compiler.symbols()}
    assert declared == {
        "a": DataType.INTEGER, "b": DataType.INTEGER,
        "r": DataType.REAL, "c": DataType.CHARACTER,
    }


def test_example_program_has_no_diagnostics():
    compiler = compile_quietly(EXAMPLE_SOURCE)
    assert compiler.diagnostics.warnings == []
    assert compiler.diagnostics.notes == []


def test_assignment_initializes_target():
    compiler = compile_quietly("entero x; x := 5;")
    [symbol] = compiler.symbols()
    assert (symbol.name, symbol.type, symbol.initialized) == ("x", DataType.INTEGER, True)
    # values are never computed
    assert symbol.value == 0


def test_undeclared_assignment_target():
    compiler = compile_quietly("entero x; z := 3;")
    assert compiler.success is False
    [error] = compiler.diagnostics.errors
    assert isinstance(error, SemanticError)
    assert error.message == "variable 'z' not declared"
    [x] = compiler.symbols()
    assert x.name == "x" and x.initialized is False


def test_logical_keyword_cannot_be_assigned():
    # 'y' is the logical and, never a variable name
    compiler = compile_quietly("entero x; y := 3;")
    assert compiler.success is False
    [error] = compiler.diagnostics.errors
    assert isinstance(error, SyntaxDiagnostic)
    assert (error.message, error.lexeme, error.column) == ("invalid statement", "y", 11)
    assert compiler.diagnostics.semantic_errors == []
    [x] = compiler.symbols()
    assert x.name == "x" and x.initialized is False


@pytest.mark.parametrize("source", [
    "entero x; leer(total);",
    "entero x; x := total + 1;",
    "entero x; escribir(z);",
])
def test_undeclared_uses(source):
    compiler = compile_quietly(source)
    assert compiler.success is False
    assert compiler.diagnostics.semantic_errors


@pytest.mark.parametrize("source", [
    "entero x; entero x;",
    "entero x; real x;",
    "entero x, x;",
    "caracter x; entero w, x;",
])
def test_duplicate_declaration(source):
    compiler = compile_quietly(source)
    assert compiler.success is False
    [error] = compiler.diagnostics.errors
    assert isinstance(error, SyntaxDiagnostic)
    assert "already declared" in error.message
    first_type = DataType.CHARACTER if source.startswith("caracter") else DataType.INTEGER
    assert compiler.table.lookup("x").type is first_type


def test_overlong_name_has_its_own_message():
    compiler = compile_quietly("entero %s;" % ("v" * 40))
    assert compiler.success is False
    [error] = compiler.diagnostics.errors
    assert "too long" in error.message
    assert len(compiler.table) == 0


def test_character_into_integer_warns():
    compiler = compile_quietly("entero i; i := 'A';")
    assert compiler.success is True
    assert len(compiler.diagnostics.warnings) == 1


def test_character_into_real_warns():
    compiler = compile_quietly("real r; r := 'A';")
    assert compiler.success is True
    assert "caracter to real" in compiler.diagnostics.warnings[0]


def test_real_into_character_fails():
    compiler = compile_quietly("caracter c; c := 2.5;")
    assert compiler.success is False
    [error] = compiler.diagnostics.semantic_errors
    assert "cannot assign real" in error.message
    assert compiler.table.lookup("c").initialized is True


def test_integer_into_real_is_info():
    compiler = compile_quietly("real r; r := 4;")
    assert compiler.success is True
    assert compiler.diagnostics.notes == ["Info at line 1: automatic conversion from entero to real in 'r'"]


def test_expression_type_comes_from_its_first_token():
    # 'r' decides the type, the literal after the operator is never looked at
    compiler = compile_quietly("real r; caracter c; r := 1.5; c := 'a'; c := c + r;")
    assert compiler.success is True
    compiler = compile_quietly("real r; caracter c; r := 1.5; c := 'a'; c := r + c;")
    assert compiler.success is False


def test_read_marks_initialized():
    compiler = compile_quietly("caracter c; leer(c);")
    assert compiler.success is True
    assert compiler.table.lookup("c").initialized is True


def test_repeat_condition_needs_a_relational_operator():
    compiler = compile_quietly("entero x; x := 1; repetir { escribir(x); } hasta (x);")
    assert compiler.success is False
    [error] = compiler.diagnostics.errors
    assert "relational operator" in error.message


def test_missing_relational_operator_still_checks_logical_operators():
    compiler = compile_quietly("entero x; x := 1; si (x y x = 1) { }")
    assert compiler.success is False
    assert len(compiler.diagnostics.errors) == 1


def test_long_chain_of_logical_operators():
    chain = " o ".join(["x = 1 y x <> 2"] * 1500)
    compiler = compile_quietly("entero x; x := 1; mientras (%s no x > 9) { x := x + 1; }" % chain)
    assert compiler.success is True
    assert compiler.diagnostics.errors == []


@pytest.mark.parametrize("source", [
    "entero x; x := %s1%s;" % ("(" * 5000, ")" * 5000),
    "entero x; x := 1; %s%s" % ("si (x = 1) { " * 3000, "}" * 3000),
], ids=["parentheses", "blocks"])
def test_deep_nesting_is_a_syntax_error(source):
    compiler = compile_quietly(source)
    assert compiler.success is False
    assert compiler.diagnostics.errors[-1].message == "nesting too deep"
    assert isinstance(compiler.diagnostics.errors[-1], SyntaxDiagnostic)


def test_missing_semicolon_is_syntax_error():
    compiler = compile_quietly("entero x;\nx := 5\nescribir(x);")
    assert compiler.success is False
    [error] = compiler.diagnostics.errors
    assert (error.line, error.column, error.lexeme) == (3, 1, "escribir")
    assert error.format_message() == "Syntax error at line 3, column 1: expected ';' (found 'escribir')"


def test_unrecognized_statement():
    compiler = compile_quietly("entero x; ; x := 1;")
    assert compiler.success is False
    assert compiler.diagnostics.errors[0].message == "invalid statement"
    # the loop stops once the flag is set
    assert compiler.table.lookup("x").initialized is False


def test_declaration_inside_block_is_rejected():
    compiler = compile_quietly("entero x; x := 1; si (x = 1) { entero w; }")
    assert compiler.success is False
    assert "w" not in compiler.table


def test_string_literals_are_rejected():
    compiler = compile_quietly('entero x; escribir("hola");')
    assert compiler.success is False
    assert isinstance(compiler.diagnostics.errors[0], SyntaxDiagnostic)


@pytest.mark.parametrize("source, message", [
    ("caracter c; c := 'A", "unclosed character literal"),
    ('entero x; escribir("abc', "unclosed string literal"),
    ("entero x; x := 1 # 2;", "unknown character"),
])
def test_lexical_errors_become_syntax_errors(source, message):
    compiler = compile_quietly(source)
    assert compiler.success is False
    error = compiler.diagnostics.errors[0]
    assert isinstance(error, SyntaxDiagnostic)
    assert message in error.message


def test_errors_in_one_statement_can_cascade():
    compiler = compile_quietly("entero x; x 5;")
    assert compiler.success is False
    assert len(compiler.diagnostics.errors) >= 2


def test_parsing_stops_at_first_failed_statement():
    compiler = compile_quietly("entero x; w := 1; z := 2;")
    assert len(compiler.diagnostics.errors) == 1


def test_unclosed_block_reports_end_of_input():
    compiler = compile_quietly("entero x; x := 1; mientras (x < 2) { x := x + 1;")
    assert compiler.success is False
    [error] = compiler.diagnostics.errors
    assert error.lexeme == "EOF"


def test_strict_mode_checks_comparisons():
    source = "caracter c; c := 'a'; si (c < 2.5) { }"
    assert compile_quietly(source).success is True
    compiler = compile_quietly(source, strict=True)
    assert compiler.success is False
    assert "invalid comparison" in compiler.diagnostics.errors[0].message


def test_uninitialized_use_warns_but_succeeds():
    compiler = compile_quietly("entero x; escribir(x);")
    assert compiler.success is True
    assert compiler.diagnostics.warnings == ["Warning at line 1: variable 'x' used before initialization"]


def test_compiler_can_be_reused_without_leaking_state():
    compiler = Compiler(echo=False)
    assert compiler.compile("entero x; w := 1;") is False
    assert compiler.compile("real z; z := 1.0;") is True
    assert [s.name for s in compiler.symbols()] == ["z"]
    assert compiler.diagnostics.errors == []


def test_reset_clears_everything():
    compiler = Compiler(echo=False)
    compiler.compile("entero x; w := 1;")
    compiler.reset()
    assert compiler.success is None
    assert len(compiler.table) == 0
    assert compiler.diagnostics.failed is False


def test_diagnostics_are_printed_as_they_happen():
    out = io.StringIO()
    Compiler(stream=out).compile("entero i;\ni := 2.5;\nj := 1;")
    assert out.getvalue().splitlines() == [
        "Warning at line 2: assigning real to entero 'i' may lose precision",
        "Semantic error at line 3: variable 'j' not declared",
    ]


def test_statistics_after_compile():
    compiler = compile_quietly("entero a, b; real r; caracter c; a := 1; leer(c);")
    stats = compiler.statistics()
    assert (stats.total, stats.integers, stats.reals, stats.characters) == (4, 2, 1, 1)
    assert (stats.initialized, stats.uninitialized) == (2, 2)
