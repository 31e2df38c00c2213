import argparse
import logging
import os
import sys
from collections.abc import Callable

from dotenv import load_dotenv

from gatsyntax.check import Severity, check_theory
from gatsyntax.display import show_latex, show_sexpr, show_unicode
from gatsyntax.load import load_expr_from_file
from gatsyntax.reference import generate_reference
from gatsyntax.result import Err, Ok
from gatsyntax.serialization import dumps
from gatsyntax.syntax import Syntax
from gatsyntax.theories import ALL_THEORIES, LATEX, UNICODE
from gatsyntax.theory import Theory

FORMATS: dict[str, Callable[..., str]] = {
    "sexpr": show_sexpr,
    "unicode": lambda e: show_unicode(e, infix=UNICODE),
    "latex": lambda e: show_latex(e, infix=LATEX),
    "json": dumps,
}


def _theory(name: str) -> Theory | None:
    factory = ALL_THEORIES.get(name)
    if factory is None:
        print(
            f"Unknown theory: {name} (available: {', '.join(ALL_THEORIES)})",
            file=sys.stderr,
        )
        return None
    return factory()


def handle_theories() -> int:
    for key, factory in ALL_THEORIES.items():
        th = factory()
        print(f"{key:<20} {th.name:<28} {len(th.types)} types, {len(th.terms)} terms")
    return 0


def handle_reference(name: str) -> int:
    th = _theory(name)
    if th is None:
        return 1
    print(generate_reference(th))
    return 0


def handle_check(name: str, *, verbose: bool) -> int:
    th = _theory(name)
    if th is None:
        return 1
    result = check_theory(th)
    if result.is_well_formed:
        print(f"{th.name}: ✓ Well-formed ({len(result.warnings)} warnings)")
    else:
        print(f"{th.name}: × Ill-formed ({len(result.errors)} errors)")
    for d in result.diagnostics:
        if d.severity == Severity.ERROR or verbose:
            where = f" {d.constructor}:" if d.constructor else ""
            print(f"    - [{d.check}]{where} {d.message} ({d.severity.value.upper()})")
    return 0 if result.is_well_formed else 1


def handle_show(path: str, theory_name: str, fmt: str) -> int:
    th = _theory(theory_name)
    if th is None:
        return 1
    syntax = Syntax(th)
    match load_expr_from_file(path, syntax):
        case Ok(expr):
            print(FORMATS[fmt](expr))
            return 0
        case Err(e):
            print(f"Error loading {path}: {e}", file=sys.stderr)
            return 1


def main() -> int:
    load_dotenv()

    parser = argparse.ArgumentParser(
        prog="gatsyntax",
        description="CLI for syntax systems of generalized algebraic theories",
    )
    parser.add_argument(
        "--log-level",
        default=os.environ.get("GATSYNTAX_LOG_LEVEL", "WARNING"),
        help="Logging level (default: $GATSYNTAX_LOG_LEVEL or WARNING).",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Command: theories
    subparsers.add_parser("theories", help="List the bundled theories.")

    # Command: reference
    reference_parser = subparsers.add_parser(
        "reference",
        help="Print a Markdown reference for a theory.",
    )
    reference_parser.add_argument("theory", help="Theory key, see `theories`.")

    # Command: check
    check_parser = subparsers.add_parser(
        "check",
        help="Check a theory for well-formedness.",
    )
    check_parser.add_argument("theory", help="Theory key, see `theories`.")
    check_parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        default=False,
        help="Print warnings as well as errors.",
    )

    # Command: show
    show_parser = subparsers.add_parser(
        "show",
        help="Load a JSON S-expression file and print the expression.",
    )
    show_parser.add_argument("file", metavar="FILE", help="JSON S-expression file.")
    show_parser.add_argument(
        "--theory",
        required=True,
        help="Theory key the expression belongs to.",
    )
    show_parser.add_argument(
        "--format",
        choices=sorted(FORMATS),
        default="unicode",
        help="Output notation (default: unicode).",
    )

    args = parser.parse_args()
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    match args.command:
        case "theories":
            return handle_theories()
        case "reference":
            return handle_reference(args.theory)
        case "check":
            return handle_check(args.theory, verbose=args.verbose)
        case "show":
            return handle_show(args.file, args.theory, args.format)
        case None:
            parser.print_help()
            return 1
        case _:
            print(f"Unknown command: {args.command}", file=sys.stderr)
            parser.print_help()
            return 1


if __name__ == "__main__":
    sys.exit(main())
