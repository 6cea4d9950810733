"""Lexical, syntax and type checker for the SSL teaching language."""

from .compiler import Compiler, check
from .diagnostics import Diagnostics, SemanticError, SyntaxDiagnostic
from .lexer import Lexer, Token, TokenType, tokenize
from .semantic import DataType, SemanticAnalyzer, Symbol, SymbolTable

__version__ = "0.1.0"

__all__ = [
    "Compiler", "check",
    "Diagnostics", "SemanticError", "SyntaxDiagnostic",
    "Lexer", "Token", "TokenType", "tokenize",
    "DataType", "SemanticAnalyzer", "Symbol", "SymbolTable",
]
