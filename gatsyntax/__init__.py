"""gatsyntax: Syntax systems for generalized algebraic theories."""

from .terms import App, Equation, TermExpr, Var
from .theory import (
    TermConstructor,
    Theory,
    TypeConstructor,
    constructor_for_generator,
)
from .expr import GENERATOR, Expr, ExprKind
from .errors import (
    DisabledReferenceError,
    GATError,
    SyntaxDomainError,
    TheoryError,
    UnknownConstructorError,
)
from .check import CheckResult, Diagnostic, Severity, check_theory
from .algebra import Algebra, Instance, invoke_term
from .syntax import Constructor, Syntax
from .functor import functor
from .serialization import Name, dumps, loads, parse_json_sexpr, to_json_sexpr
from .display import show_latex, show_sexpr, show_unicode
from .helpers import app, eq, extend, term, theory, ty, var
from .result import Ok, Err, Result

__all__ = [
    # Theory description
    "App", "Equation", "TermExpr", "Var",
    "TermConstructor", "Theory", "TypeConstructor", "constructor_for_generator",
    # Expressions
    "GENERATOR", "Expr", "ExprKind",
    # Errors
    "DisabledReferenceError", "GATError", "SyntaxDomainError", "TheoryError",
    "UnknownConstructorError",
    # Checking
    "CheckResult", "Diagnostic", "Severity", "check_theory",
    # Algebras
    "Algebra", "Instance", "invoke_term", "Constructor", "Syntax", "functor",
    # Serialization
    "Name", "dumps", "loads", "parse_json_sexpr", "to_json_sexpr",
    # Display
    "show_latex", "show_sexpr", "show_unicode",
    # Helpers
    "app", "eq", "extend", "term", "theory", "ty", "var",
    # Result
    "Ok", "Err", "Result",
]
