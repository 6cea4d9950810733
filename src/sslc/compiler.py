import logging

from .diagnostics import Diagnostics
from .lexer import Lexer
from .parser import Parser
from .semantic import SemanticAnalyzer, SymbolTable


class Compiler:
    """Owns the state of one compilation: scanner, lookahead, symbols, errors.

    compile() starts from a clean state every time, so one instance can check
    several programs in turn; it must not be shared between threads.
    """

    def __init__(self, stream=None, echo=True, strict=False, warn_uninitialized=True):
        self.strict = strict
        self.warn_uninitialized = warn_uninitialized
        self.diagnostics = Diagnostics(stream=stream, echo=echo)
        self.table = SymbolTable()
        self.source = None
        self.success = None

    def reset(self):
        self.diagnostics.reset()
        self.table.clear()
        self.source = None
        self.success = None

    def compile(self, source):
        """Check ``source`` and return True when it is valid."""
        self.reset()
        lexer = Lexer(source)
        self.source = source
        logging.info("Compiling %d characters", len(source))

        analyzer = SemanticAnalyzer(self.table, self.diagnostics, self.warn_uninitialized)
        parser = Parser(lexer, analyzer, self.diagnostics, strict=self.strict)
        self.success = parser.parse()

        logging.info(
            "Compilation %s: %d error(s), %d warning(s)",
            "succeeded" if self.success else "failed",
            len(self.diagnostics.errors), len(self.diagnostics.warnings),
        )
        return self.success

    def symbols(self):
        return list(self.table)

    def statistics(self):
        return self.table.statistics()


def check(source, **options):
    """Compile ``source`` with a fresh Compiler and return it."""
    compiler = Compiler(**options)
    compiler.compile(source)
    return compiler
