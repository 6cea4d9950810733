import sys


class CompileError(Exception):
    """Base class for reported compile errors"""
    kind = "Compile"

    def __init__(self, message, line=None):
        self.message = message
        self.line = line
        super().__init__(self.format_message())

    def format_message(self):
        if self.line:
            return f"{self.kind} error at line {self.line}: {self.message}"
        return f"{self.kind} error: {self.message}"


class SyntaxDiagnostic(CompileError):
    """Syntax error, located by line, column and offending lexeme"""
    kind = "Syntax"

    def __init__(self, message, line=None, column=None, lexeme=None):
        self.column = column
        self.lexeme = lexeme
        super().__init__(message, line)

    def format_message(self):
        where = f" at line {self.line}, column {self.column}" if self.line else ""
        found = f" (found {self.lexeme!r})" if self.lexeme is not None else ""
        return f"Syntax error{where}: {self.message}{found}"


class SemanticError(CompileError):
    """Semantic error, located by line only"""
    kind = "Semantic"


class Diagnostics:
    """Collects errors, warnings and notes for one compilation.

    Both error channels set the same sticky ``failed`` flag; only reset()
    clears it. Every entry is printed as soon as it is reported unless
    ``echo`` is off.
    """

    def __init__(self, stream=None, echo=True):
        self.stream = stream
        self.echo = echo
        self.reset()

    def reset(self):
        self.errors = []
        self.warnings = []
        self.notes = []
        self.failed = False

    def _emit(self, text):
        if self.echo:
            print(text, file=self.stream or sys.stdout)

    def syntax_error(self, message, token):
        lexeme = token.lexeme if token.lexeme else "EOF"
        err = SyntaxDiagnostic(message, token.line, token.column, lexeme)
        self._record(err)
        return err

    def semantic_error(self, message, line=None):
        err = SemanticError(message, line)
        self._record(err)
        return err

    def _record(self, err):
        self.failed = True
        self.errors.append(err)
        self._emit(err.format_message())

    def warning(self, message, line=None):
        text = f"Warning at line {line}: {message}" if line else f"Warning: {message}"
        self.warnings.append(text)
        self._emit(text)

    def info(self, message, line=None):
        text = f"Info at line {line}: {message}" if line else f"Info: {message}"
        self.notes.append(text)
        self._emit(text)

    @property
    def semantic_errors(self):
        return [e for e in self.errors if isinstance(e, SemanticError)]
