from .lexer import TokenType
from .semantic import DataType

RULE = "-" * 48


def format_value(symbol):
    if symbol is None or not symbol.initialized:
        return "N/A"
    if symbol.type is DataType.INTEGER:
        return f"{symbol.value:d}"
    if symbol.type is DataType.CHARACTER:
        if symbol.value == '\0':
            return "'\\0'"
        return f"'{symbol.value}'"
    if symbol.type is DataType.REAL:
        return f"{symbol.value:.2f}"
    return "N/A"


def format_location(line, column):
    return f"line {line}, column {column}"


def format_token(token):
    text = f"{token.type.name:<15} {token.lexeme!r:<12} {format_location(token.line, token.column)}"
    if token.type is TokenType.ERROR:
        text += f"  [{token.value}]"
    elif token.value is not None:
        text += f"  = {token.value!r}"
    return text


def format_symbol_table(table):
    """Symbol table as printable lines, newest declaration first."""
    lines = [
        "=== SYMBOL TABLE ===",
        f"{'Name':<15} {'Type':<10} {'Initialized':<12} {'Value':<10}",
        RULE,
    ]
    for symbol in table:
        lines.append(
            f"{symbol.name:<15} {str(symbol.type):<10} "
            f"{'yes' if symbol.initialized else 'no':<12} {format_value(symbol):<10}".rstrip()
        )
    stats = table.statistics()
    lines.append("=" * len(RULE))
    lines.append(
        f"Total: {stats.total} | Initialized: {stats.initialized} | Uninitialized: {stats.uninitialized}"
    )
    return lines


def format_statistics(stats):
    return [
        "=== STATISTICS ===",
        f"Variables: {stats.total} (entero: {stats.integers}, real: {stats.reals}, caracter: {stats.characters})",
        f"Initialized: {stats.initialized} | Uninitialized: {stats.uninitialized}",
    ]
