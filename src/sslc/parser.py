from .lexer import TokenType
from .semantic import DataType, DeclarationError, token_data_type

DATA_TYPE_KEYWORDS = (TokenType.ENTERO, TokenType.CARACTER, TokenType.REAL)

RELATIONAL_OPERATORS = (
    TokenType.EQUAL, TokenType.NOT_EQUAL,
    TokenType.LESS, TokenType.LESS_EQUAL,
    TokenType.GREATER, TokenType.GREATER_EQUAL,
)

ADDITIVE_OPERATORS = (TokenType.PLUS, TokenType.MINUS)
MULTIPLICATIVE_OPERATORS = (TokenType.MULTIPLY, TokenType.DIVIDE, TokenType.MOD)
LITERALS = (TokenType.INTEGER, TokenType.REAL_LITERAL, TokenType.CHAR_LITERAL)


def describe(kind):
    if kind is TokenType.EOF:
        return "end of input"
    if kind in (TokenType.IDENTIFIER, TokenType.INTEGER, TokenType.REAL_LITERAL,
                TokenType.CHAR_LITERAL, TokenType.STRING_LITERAL, TokenType.ERROR):
        return kind.name.lower().replace('_', ' ')
    return f"'{kind.value}'"


class Parser:
    """Recursive-descent checker with one token of lookahead.

    Semantic checks run as each rule is recognised; no tree is built.
    Errors never unwind: the current rule finishes its consumption and the
    program and block loops stop once the diagnostics have failed.
    """

    def __init__(self, lexer, analyzer, diagnostics, strict=False):
        self.lexer = lexer
        self.analyzer = analyzer
        self.diagnostics = diagnostics
        self.strict = strict
        self.current = lexer.next_token()

    def advance(self):
        tok = self.current
        self.current = self.lexer.next_token()
        return tok

    def at_end(self):
        return self.current.type is TokenType.EOF

    def halted(self):
        return self.at_end() or self.diagnostics.failed

    def match(self, expected):
        tok = self.current
        if tok.type is expected:
            return self.advance()
        self.syntax_error(f"expected {describe(expected)}")
        # consume it anyway so no rule can spin on the same token
        self.advance()
        return None

    def syntax_error(self, message, token=None):
        token = token or self.current
        if token.type is TokenType.ERROR:
            message = f"{message}: {token.value}"
        self.diagnostics.syntax_error(message, token)

    def parse(self):
        try:
            self.program()
        except RecursionError:
            # parentheses and blocks nest through the Python stack
            self.syntax_error("nesting too deep")
        return not self.diagnostics.failed

    def program(self):
        while not self.halted():
            if self.current.type in DATA_TYPE_KEYWORDS:
                self.declaration()
            else:
                self.statement()

    # --- Declarations ---
    def declaration(self):
        var_type = token_data_type(self.current.type)
        if var_type is DataType.ERROR:
            self.syntax_error("expected data type (entero, caracter, real)")
        else:
            self.advance()
            self.declare_identifier(var_type)
            while self.current.type is TokenType.COMMA:
                self.advance()
                self.declare_identifier(var_type)
        self.match(TokenType.SEMICOLON)

    def declare_identifier(self, var_type):
        tok = self.current
        if tok.type is not TokenType.IDENTIFIER:
            self.syntax_error("expected identifier")
            return
        try:
            self.analyzer.declare(tok, var_type)
        except DeclarationError as e:
            self.syntax_error(e.message, tok)
        self.advance()

    # --- Statements ---
    def statement(self):
        kind = self.current.type

        if kind is TokenType.IDENTIFIER:
            self.assignment()
        elif kind is TokenType.SI:
            self.if_statement()
        elif kind is TokenType.MIENTRAS:
            self.while_statement()
        elif kind is TokenType.REPETIR:
            self.repeat_statement()
        elif kind is TokenType.LEER:
            self.read_statement()
        elif kind is TokenType.ESCRIBIR:
            self.write_statement()
        else:
            self.syntax_error("invalid statement")
            self.advance()

    def assignment(self):
        symbol = None
        if self.current.type is TokenType.IDENTIFIER:
            symbol = self.analyzer.resolve(self.current)
        self.match(TokenType.IDENTIFIER)
        self.match(TokenType.ASSIGN)
        line = self.current.line
        expr_type = self.analyzer.expression_type(self.current)
        self.expression()
        self.analyzer.check_assignment(symbol, expr_type, line)
        self.match(TokenType.SEMICOLON)

    def block(self):
        self.match(TokenType.LBRACE)
        while self.current.type is not TokenType.RBRACE and not self.halted():
            self.statement()
        self.match(TokenType.RBRACE)

    def parenthesized_condition(self):
        self.match(TokenType.LPAREN)
        self.condition()
        self.match(TokenType.RPAREN)

    def if_statement(self):
        self.match(TokenType.SI)
        self.parenthesized_condition()
        self.block()
        if self.current.type is TokenType.SINO:
            self.advance()
            self.block()

    def while_statement(self):
        self.match(TokenType.MIENTRAS)
        self.parenthesized_condition()
        self.block()

    def repeat_statement(self):
        self.match(TokenType.REPETIR)
        self.block()
        self.match(TokenType.HASTA)
        self.parenthesized_condition()
        self.match(TokenType.SEMICOLON)

    def read_statement(self):
        self.match(TokenType.LEER)
        self.match(TokenType.LPAREN)
        if self.current.type is TokenType.IDENTIFIER:
            # nothing is read: the target just counts as having a value
            self.analyzer.mark_initialized(self.analyzer.resolve(self.current))
            self.advance()
        else:
            self.syntax_error("expected identifier in leer")
        self.match(TokenType.RPAREN)
        self.match(TokenType.SEMICOLON)

    def write_statement(self):
        self.match(TokenType.ESCRIBIR)
        self.match(TokenType.LPAREN)
        self.expression()
        self.match(TokenType.RPAREN)
        self.match(TokenType.SEMICOLON)

    # --- Expressions ---
    def expression(self):
        self.term()
        while self.current.type in ADDITIVE_OPERATORS:
            self.advance()
            self.term()

    def term(self):
        self.factor()
        while self.current.type in MULTIPLICATIVE_OPERATORS:
            self.advance()
            self.factor()

    def factor(self):
        kind = self.current.type
        if kind is TokenType.IDENTIFIER:
            self.analyzer.use_variable(self.current)
            self.advance()
        elif kind in LITERALS:
            self.advance()
        elif kind is TokenType.LPAREN:
            self.advance()
            self.expression()
            self.match(TokenType.RPAREN)
        else:
            self.syntax_error("expected identifier, number or parenthesized expression")

    def condition(self):
        self.comparison()
        while self.current.type in (TokenType.Y, TokenType.O, TokenType.NO):
            self.advance()
            self.comparison()

    def comparison(self):
        line = self.current.line
        left = self.analyzer.expression_type(self.current)
        self.expression()

        if self.current.type in RELATIONAL_OPERATORS:
            self.advance()
            right = self.analyzer.expression_type(self.current)
            self.expression()
            if self.strict and DataType.ERROR not in (left, right):
                self.analyzer.check_relational(left, right, line)
        else:
            self.syntax_error("expected relational operator in condition")
