import re
from dataclasses import dataclass
from enum import Enum


class TokenType(Enum):
    IDENTIFIER = 'IDENTIFIER'
    INTEGER = 'INTEGER'
    REAL_LITERAL = 'REAL_LITERAL'
    CHAR_LITERAL = 'CHAR_LITERAL'
    STRING_LITERAL = 'STRING_LITERAL'

    # data types
    ENTERO = 'entero'
    CARACTER = 'caracter'
    REAL = 'real'

    # control flow
    SI = 'si'
    SINO = 'sino'
    MIENTRAS = 'mientras'
    REPETIR = 'repetir'
    HASTA = 'hasta'

    # input/output
    LEER = 'leer'
    ESCRIBIR = 'escribir'

    # logical
    Y = 'y'
    O = 'o'
    NO = 'no'

    PLUS = '+'
    MINUS = '-'
    MULTIPLY = '*'
    DIVIDE = '/'
    MOD = '%'
    ASSIGN = ':='

    EQUAL = '='
    NOT_EQUAL = '<>'
    LESS = '<'
    LESS_EQUAL = '<='
    GREATER = '>'
    GREATER_EQUAL = '>='

    LPAREN = '('
    RPAREN = ')'
    LBRACE = '{'
    RBRACE = '}'
    SEMICOLON = ';'
    COMMA = ','

    EOF = 'EOF'
    ERROR = 'ERROR'


# Language definitions
keywords = {
    'entero', 'caracter', 'real',
    'si', 'sino', 'mientras', 'repetir', 'hasta',
    'leer', 'escribir',
    'y', 'o', 'no',
}

# Longer operators first so ':=' never splits into ':' '='
operators = [
    ':=', '<>', '<=', '>=',
    '+', '-', '*', '/', '%', '=', '<', '>',
]

separators = r'[\(\)\{\}\;,]'
whitespace = r'[ \t\r]+'

token_specification = [
    ('COMMENT',    r'//[^\n]*'),
    ('REAL',       r'[0-9]+\.[0-9]*'),
    ('INTEGER',    r'[0-9]+'),
    ('CHAR',       r"'[^\n]'"),
    ('BAD_CHAR',   r"'[^\n]?"),
    ('STRING',     r'"[^"\n]*"'),
    ('BAD_STRING', r'"[^"\n]*'),
    ('ID',         r'[A-Za-z_][A-Za-z0-9_]*'),
    ('OP',         '|'.join(re.escape(op) for op in operators)),
    ('SEP',        separators),
    ('NEWLINE',    r'\n'),
    ('WS',         whitespace),
    ('MISMATCH',   r'.'),
]

tok_regex = '|'.join(f'(?P<{name}>{pattern})' for name, pattern in token_specification)
get_token = re.compile(tok_regex, re.DOTALL).match

UNCLOSED_CHAR = 'unclosed character literal'
UNCLOSED_STRING = 'unclosed string literal'


@dataclass(frozen=True)
class Token:
    type: TokenType
    lexeme: str
    line: int
    column: int
    value: object = None

    def __repr__(self):
        return f"Token({self.type.name}, {self.lexeme!r}, line={self.line}, col={self.column})"


def is_keyword(word):
    """Return the keyword token type for ``word`` or IDENTIFIER."""
    if word in keywords:
        return TokenType(word)
    return TokenType.IDENTIFIER


class Lexer:
    """Pull-based scanner: each next_token() call returns one token.

    Whitespace and ``//`` comments are skipped before every token. Lexical
    errors never stop the scan; they come back as ERROR tokens whose value
    holds the message.
    """

    def __init__(self, source):
        if not isinstance(source, str):
            raise TypeError(f"source must be str, not {type(source).__name__}")
        self.source = source
        self.pos = 0
        self.line = 1
        self.col = 1

    def _advance(self, text):
        self.pos += len(text)
        if text == '\n':
            self.line += 1
            self.col = 1
        else:
            self.col += len(text)

    def next_token(self):
        mo = get_token(self.source, self.pos)
        while mo is not None and mo.lastgroup in ('WS', 'NEWLINE', 'COMMENT'):
            self._advance(mo.group())
            mo = get_token(self.source, self.pos)

        if mo is None:
            return Token(TokenType.EOF, '', self.line, self.col)

        kind = mo.lastgroup
        value = mo.group()
        line, col = self.line, self.col
        self._advance(value)

        if kind == 'ID':
            return Token(is_keyword(value), value, line, col)
        elif kind == 'INTEGER':
            return Token(TokenType.INTEGER, value, line, col, int(value))
        elif kind == 'REAL':
            return Token(TokenType.REAL_LITERAL, value, line, col, float(value))
        elif kind == 'CHAR':
            return Token(TokenType.CHAR_LITERAL, value, line, col, value[1])
        elif kind == 'BAD_CHAR':
            return Token(TokenType.ERROR, value, line, col, UNCLOSED_CHAR)
        elif kind == 'STRING':
            return Token(TokenType.STRING_LITERAL, value, line, col, value[1:-1])
        elif kind == 'BAD_STRING':
            return Token(TokenType.ERROR, value, line, col, UNCLOSED_STRING)
        elif kind in ('OP', 'SEP'):
            return Token(TokenType(value), value, line, col)
        return Token(TokenType.ERROR, value, line, col, f"unknown character {value!r}")


def tokenize(source):
    """Yield every token of ``source``, EOF included."""
    lexer = Lexer(source)
    while True:
        token = lexer.next_token()
        yield token
        if token.type is TokenType.EOF:
            break
