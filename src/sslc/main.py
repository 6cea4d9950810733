import argparse
import logging
import sys

from .compiler import Compiler
from .lexer import tokenize
from .report import format_statistics, format_symbol_table, format_token

EXAMPLE_SOURCE = """\
// Example program: declarations, si/sino, mientras, repetir/hasta
entero contador, limite;
real promedio, suma;
caracter letra, vocal;

contador := 1;
limite := 10;
suma := 0.0;
letra := 'A';

// si statement
si (contador <= limite) {
    escribir(contador);
    suma := suma + contador;
} sino {
    // nothing to do
}

// mientras loop
mientras (contador < limite) {
    contador := contador + 1;
    suma := suma + contador;
}

// repetir/hasta loop
repetir {
    escribir(letra);
    contador := contador - 1;
} hasta (contador = 0);

promedio := suma / limite;
escribir(promedio);
"""

BANNER = """\
=== SSL COMPILER ===
Types: entero, caracter, real
Statements: si-sino, mientras, repetir-hasta, leer, escribir
===================="""


def setup_logging(verbose):
    logging.disable(logging.NOTSET)
    logging.basicConfig(format="{message}", style="{")
    if verbose:
        root_logger = logging.getLogger()
        root_logger.setLevel(logging.INFO)


def read_source(path):
    """Read a program file as bytes and decode it, UTF-8 first."""
    with open(path, "rb") as f:
        raw = f.read()
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        return raw.decode("latin-1")


def build_arg_parser():
    parser = argparse.ArgumentParser(
        prog="sslc",
        description="Check an SSL program for lexical, syntax and type errors",
    )
    parser.add_argument("file", nargs="?", help="source file (default: built-in example)")
    parser.add_argument("-v", "--verbose", action="store_true", help="trace symbol table activity")
    parser.add_argument("-t", "--tokens", action="store_true", help="print the token stream before checking")
    parser.add_argument("-s", "--strict", action="store_true", help="type-check comparisons in conditions")
    parser.add_argument("-q", "--quiet", action="store_true", help="print only diagnostics and the outcome")
    parser.add_argument("--no-uninitialized-warnings", dest="warn_uninitialized", action="store_false",
                        help="do not warn about variables used before they get a value")
    return parser


def main(argv=None):
    args = build_arg_parser().parse_args(argv)
    setup_logging(args.verbose)

    if args.file:
        try:
            source = read_source(args.file)
        except OSError as e:
            print(f"Error: could not read '{args.file}': {e.strerror or e}")
            return 1
    else:
        source = EXAMPLE_SOURCE

    if not args.quiet:
        print(BANNER)
        print()
        if not args.file:
            print("Using the built-in example program:\n")
        print(f"SOURCE:\n{source}\n{'=' * 20}\n")

    if args.tokens:
        for token in tokenize(source):
            print(format_token(token))
        print()

    compiler = Compiler(strict=args.strict, warn_uninitialized=args.warn_uninitialized)
    success = compiler.compile(source)

    print("\nCOMPILATION SUCCEEDED" if success else "\nCOMPILATION FAILED")
    if not args.quiet:
        print()
        print("\n".join(format_symbol_table(compiler.table)))
        print()
        print("\n".join(format_statistics(compiler.statistics())))
        if success:
            print("\nThe program is syntactically and semantically correct.")
        else:
            print("\nErrors were found during analysis.")

    return 0 if success else 1


if __name__ == "__main__":
    sys.exit(main())
