"""Expressions inside a theory declaration.

A theory talks about its own terms symbolically: the type of a parameter,
the result type of a term constructor and the two sides of an equation are
all built from:

  - Variables (a parameter name, explicit or implicit)
  - Applications (a type constructor, term constructor or accessor applied
    to sub-expressions)

These are *descriptions*. The runtime terms produced by a syntax system are
`gatsyntax.expr.Expr` values.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

# ---------------------------------------------------------------------------
# Term expression AST
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Var:
    """A reference to a parameter of the enclosing constructor.

    Example: A     → Var("A")
    """

    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class App:
    """Application of a constructor or accessor to arguments.

    Example: Hom(A, B)          → App("Hom", (Var("A"), Var("B")))
    Example: dom(f)             → App("dom", (Var("f"),))
    Example: munit()            → App("munit", ())   [nullary]
    Example: Ob                 → App("Ob", ())      [type with no params]
    """

    head: str
    args: tuple[TermExpr, ...] = ()

    def __str__(self) -> str:
        return f"{self.head}({','.join(str(a) for a in self.args)})"


# Union of all term expression forms
TermExpr = Var | App


@dataclass(frozen=True)
class Equation:
    """An equation that must hold for a term to be well-formed.

    Example: codom(f) == dom(g)
    """

    lhs: TermExpr
    rhs: TermExpr

    def __str__(self) -> str:
        return f"{self.lhs} == {self.rhs}"


# ---------------------------------------------------------------------------
# Traversal helpers
# ---------------------------------------------------------------------------


def free_vars(expr: TermExpr) -> Iterator[str]:
    """Yield variable names in left-to-right order (with repeats)."""
    if isinstance(expr, Var):
        yield expr.name
    else:
        for arg in expr.args:
            yield from free_vars(arg)


def heads(expr: TermExpr) -> Iterator[str]:
    """Yield every application head in the expression, outermost first."""
    if isinstance(expr, App):
        yield expr.head
        for arg in expr.args:
            yield from heads(arg)


def substitute(expr: TermExpr, bindings: dict[str, TermExpr]) -> TermExpr:
    """Replace variables by expressions. Unbound variables are kept."""
    if isinstance(expr, Var):
        return bindings.get(expr.name, expr)
    return App(expr.head, tuple(substitute(a, bindings) for a in expr.args))
