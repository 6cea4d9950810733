import logging
from collections import namedtuple
from enum import Enum

from .lexer import TokenType

# Longest identifier the symbol table accepts
MAX_IDENTIFIER_LENGTH = 29


class DataType(Enum):
    INTEGER = 'entero'
    CHARACTER = 'caracter'
    REAL = 'real'
    ERROR = 'error'

    def __str__(self):
        return self.value


NUMERIC_TYPES = (DataType.INTEGER, DataType.REAL)

ZERO_VALUES = {
    DataType.INTEGER: 0,
    DataType.CHARACTER: '\0',
    DataType.REAL: 0.0,
}

# Token kinds that carry a data type, both keywords and literals
TOKEN_DATA_TYPES = {
    TokenType.ENTERO: DataType.INTEGER,
    TokenType.INTEGER: DataType.INTEGER,
    TokenType.CARACTER: DataType.CHARACTER,
    TokenType.CHAR_LITERAL: DataType.CHARACTER,
    TokenType.REAL: DataType.REAL,
    TokenType.REAL_LITERAL: DataType.REAL,
}


def token_data_type(kind):
    return TOKEN_DATA_TYPES.get(kind, DataType.ERROR)


class DeclarationError(Exception):
    """A name the symbol table refused to insert"""
    def __init__(self, name, message):
        self.name = name
        self.message = message
        super().__init__(message)


class DuplicateSymbolError(DeclarationError):
    def __init__(self, name):
        super().__init__(name, f"variable '{name}' already declared")


class EmptyNameError(DeclarationError):
    def __init__(self, name=''):
        super().__init__(name, "variable name is empty")


class NameTooLongError(DeclarationError):
    def __init__(self, name):
        super().__init__(
            name,
            f"variable name '{name}' is too long ({len(name)} characters, maximum {MAX_IDENTIFIER_LENGTH})",
        )


class Symbol:
    """A declared variable"""
    def __init__(self, name, var_type, initialized=False):
        self.name = name
        self.type = var_type
        self.initialized = initialized
        # never written by the checker: expressions are not evaluated
        self.value = ZERO_VALUES.get(var_type)

    def __repr__(self):
        return f"Symbol({self.name!r}, {self.type}, initialized={self.initialized})"


Statistics = namedtuple(
    'Statistics',
    ['total', 'integers', 'reals', 'characters', 'initialized', 'uninitialized'],
)


class SymbolTable:
    """Single global scope of declared variables.

    Iteration yields the newest declaration first.
    """
    def __init__(self):
        self.symbols = {}  # name -> Symbol, in declaration order

    def __len__(self):
        return len(self.symbols)

    def __contains__(self, name):
        return name in self.symbols

    def __iter__(self):
        return iter(reversed(list(self.symbols.values())))

    def lookup(self, name):
        logging.info(f"Lookup: {name}")
        return self.symbols.get(name)

    def insert(self, name, var_type):
        if self.lookup(name) is not None:
            raise DuplicateSymbolError(name)
        if not name:
            raise EmptyNameError(name)
        if len(name) > MAX_IDENTIFIER_LENGTH:
            raise NameTooLongError(name)
        symbol = Symbol(name, var_type)
        self.symbols[name] = symbol
        logging.info(f"Insert: {name} ({var_type})")
        return symbol

    def clear(self):
        self.symbols.clear()

    def statistics(self):
        values = list(self.symbols.values())
        initialized = sum(1 for s in values if s.initialized)
        return Statistics(
            total=len(values),
            integers=sum(1 for s in values if s.type is DataType.INTEGER),
            reals=sum(1 for s in values if s.type is DataType.REAL),
            characters=sum(1 for s in values if s.type is DataType.CHARACTER),
            initialized=initialized,
            uninitialized=len(values) - initialized,
        )


class SemanticAnalyzer:
    """Type rules applied inline by the parser.

    Holds no state of its own beyond the table and the diagnostics it
    reports to.
    """

    def __init__(self, table, diagnostics, warn_uninitialized=True):
        self.table = table
        self.diagnostics = diagnostics
        self.warn_uninitialized = warn_uninitialized

    # --- Declarations and uses ---
    def declare(self, token, var_type):
        """Insert the identifier in ``token``; DeclarationError on refusal."""
        return self.table.insert(token.lexeme, var_type)

    def resolve(self, token):
        """Look up an assignment or read target, reporting it if undeclared."""
        symbol = self.table.lookup(token.lexeme)
        if symbol is None:
            self.diagnostics.semantic_error(f"variable '{token.lexeme}' not declared", token.line)
        return symbol

    def use_variable(self, token):
        symbol = self.resolve(token)
        if symbol is not None and not symbol.initialized and self.warn_uninitialized:
            self.diagnostics.warning(f"variable '{symbol.name}' used before initialization", token.line)
        return symbol

    def mark_initialized(self, symbol):
        if symbol is not None:
            symbol.initialized = True

    # --- Type Utilities ---
    def expression_type(self, token):
        """Type of an expression judged from a single token.

        Literals give their own type and identifiers their declared type
        (ERROR when undeclared). Anything else, such as an opening
        parenthesis, counts as an integer expression.
        """
        if token.type in (TokenType.INTEGER, TokenType.REAL_LITERAL, TokenType.CHAR_LITERAL):
            return token_data_type(token.type)
        if token.type is TokenType.IDENTIFIER:
            symbol = self.table.lookup(token.lexeme)
            if symbol is not None:
                return symbol.type
            return DataType.ERROR
        if token.type is TokenType.ERROR:
            return DataType.ERROR
        return DataType.INTEGER

    def check_assignment(self, symbol, source_type, line=None):
        if symbol is None:
            return
        target = symbol.type
        name = symbol.name

        if target not in ZERO_VALUES:
            self.diagnostics.semantic_error(f"unknown type for variable '{name}'", line)
        elif source_type is DataType.ERROR:
            # the cause was reported where the type was lost
            pass
        elif target is DataType.INTEGER:
            if source_type is DataType.REAL:
                self.diagnostics.warning(f"assigning real to entero '{name}' may lose precision", line)
            elif source_type is DataType.CHARACTER:
                self.diagnostics.warning(f"assigning caracter to entero '{name}' (automatic conversion)", line)
        elif target is DataType.REAL:
            if source_type is DataType.INTEGER:
                self.diagnostics.info(f"automatic conversion from entero to real in '{name}'", line)
            elif source_type is DataType.CHARACTER:
                self.diagnostics.warning(f"assigning caracter to real '{name}' (automatic conversion)", line)
        elif target is DataType.CHARACTER:
            if source_type is DataType.INTEGER:
                self.diagnostics.warning(f"assigning entero to caracter '{name}' (automatic conversion)", line)
            elif source_type is DataType.REAL:
                self.diagnostics.semantic_error(
                    f"type mismatch: cannot assign real to caracter variable '{name}'", line)

        self.mark_initialized(symbol)

    def arithmetic_type(self, left, right, operator, line=None):
        """Result type of ``left operator right``; ERROR when not allowed."""
        if left is DataType.INTEGER and right is DataType.INTEGER:
            if operator is TokenType.DIVIDE:
                self.diagnostics.warning("integer division may lose precision", line)
            return DataType.INTEGER
        if left in NUMERIC_TYPES and right in NUMERIC_TYPES:
            return DataType.REAL
        if left is DataType.CHARACTER and right is DataType.CHARACTER:
            if operator in (TokenType.PLUS, TokenType.MINUS):
                return DataType.INTEGER
        elif {left, right} == {DataType.CHARACTER, DataType.INTEGER}:
            return DataType.INTEGER

        self.diagnostics.semantic_error(f"invalid arithmetic operation between {left} and {right}", line)
        return DataType.ERROR

    def check_relational(self, left, right, line=None):
        if left is right:
            return True
        if left in NUMERIC_TYPES and right in NUMERIC_TYPES:
            return True
        if {left, right} == {DataType.CHARACTER, DataType.INTEGER}:
            return True
        self.diagnostics.semantic_error(f"invalid comparison between {left} and {right}", line)
        return False
