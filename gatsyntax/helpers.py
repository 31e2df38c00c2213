"""Builder helpers for declaring theories.

These are the primary public API for writing theories. Type expressions
may be given either as AST nodes or as short strings:

    ty("Hom", [("A", "Ob"), ("B", "Ob")])
    term("compose", [("f", "Hom(A,B)"), ("g", "Hom(B,C)")], "Hom(A,C)",
         implicit=[("A", "Ob"), ("B", "Ob"), ("C", "Ob")])

In a string, ``name(...)`` is an application and a bare ``name`` is a
variable, except at the top of a *type* where a bare name is a type
constructor with no arguments (``"Ob"``).
"""

from __future__ import annotations

import re
from collections.abc import Callable, Sequence
from types import MappingProxyType
from typing import Any

from gatsyntax.terms import App, Equation, TermExpr, Var
from gatsyntax.theory import TermConstructor, Theory, TypeConstructor

TypeLike = str | TermExpr
EquationLike = str | Equation


def var(name: str) -> Var:
    return Var(name=name)


def app(head: str, *args: TermExpr) -> App:
    return App(head=head, args=tuple(args))


def eq(lhs: TermExpr, rhs: TermExpr) -> Equation:
    return Equation(lhs=lhs, rhs=rhs)


# ---------------------------------------------------------------------------
# String notation
# ---------------------------------------------------------------------------

_TOKEN = re.compile(r"\s*(?:([A-Za-z_][A-Za-z0-9_]*)|(.))")


def _tokenize(text: str) -> list[str]:
    tokens: list[str] = []
    for m in _TOKEN.finditer(text):
        ident, punct = m.groups()
        if ident:
            tokens.append(ident)
        elif punct and not punct.isspace():
            tokens.append(punct)
    return tokens


def parse_term(text: str) -> TermExpr:
    """Parse ``"Hom(dom(f),B)"`` into a term expression."""
    tokens = _tokenize(text)
    expr, pos = _parse(tokens, 0, text)
    if pos != len(tokens):
        raise ValueError(f"Unexpected {tokens[pos]!r} in {text!r}")
    return expr


def parse_type(text: str) -> App:
    """Parse a type expression; a bare name is a parameterless type."""
    expr = parse_term(text)
    if isinstance(expr, Var):
        return App(expr.name)
    return expr


def parse_equation(text: str) -> Equation:
    lhs, sep, rhs = text.partition("==")
    if not sep:
        raise ValueError(f"Equation {text!r} has no '=='")
    return Equation(parse_term(lhs), parse_term(rhs))


def _parse(tokens: list[str], pos: int, text: str) -> tuple[TermExpr, int]:
    if pos >= len(tokens) or not re.match(r"[A-Za-z_]", tokens[pos]):
        raise ValueError(f"Expected a name in {text!r}")
    name = tokens[pos]
    pos += 1
    if pos >= len(tokens) or tokens[pos] != "(":
        return Var(name), pos
    pos += 1
    args: list[TermExpr] = []
    if pos < len(tokens) and tokens[pos] == ")":
        return App(name, ()), pos + 1
    while True:
        arg, pos = _parse(tokens, pos, text)
        args.append(arg)
        if pos >= len(tokens):
            raise ValueError(f"Unclosed '(' in {text!r}")
        if tokens[pos] == ")":
            return App(name, tuple(args)), pos + 1
        if tokens[pos] != ",":
            raise ValueError(f"Expected ',' or ')' in {text!r}")
        pos += 1


def _as_type(t: TypeLike) -> TermExpr:
    return parse_type(t) if isinstance(t, str) else t


def _as_equation(e: EquationLike) -> Equation:
    return parse_equation(e) if isinstance(e, str) else e


# ---------------------------------------------------------------------------
# Constructors
# ---------------------------------------------------------------------------


def _context(
    implicit: Sequence[tuple[str, TypeLike]], params: Sequence[tuple[str, TypeLike]]
) -> MappingProxyType[str, TermExpr]:
    ctx: dict[str, TermExpr] = {}
    for name, typ in [*implicit, *params]:
        ctx[name] = _as_type(typ)
    return MappingProxyType(ctx)


def ty(
    name: str,
    params: Sequence[tuple[str, TypeLike]] = (),
    *,
    implicit: Sequence[tuple[str, TypeLike]] = (),
    doc: str | None = None,
) -> TypeConstructor:
    return TypeConstructor(
        name=name,
        params=tuple(p for p, _ in params),
        context=_context(implicit, params),
        doc=doc,
    )


def term(
    name: str,
    params: Sequence[tuple[str, TypeLike]],
    result: TypeLike,
    *,
    implicit: Sequence[tuple[str, TypeLike]] = (),
    equations: Sequence[EquationLike] = (),
    impl: Callable[..., Any] | None = None,
    doc: str | None = None,
) -> TermConstructor:
    typ = _as_type(result)
    if not isinstance(typ, App):
        raise ValueError(f"Result type of {name!r} must be a type constructor")
    return TermConstructor(
        name=name,
        params=tuple(p for p, _ in params),
        typ=typ,
        context=_context(implicit, params),
        equations=tuple(_as_equation(e) for e in equations),
        impl=impl,
        doc=doc,
    )


def theory(
    name: str,
    types: Sequence[TypeConstructor],
    terms: Sequence[TermConstructor],
    *,
    doc: str | None = None,
) -> Theory:
    return Theory(name=name, types=tuple(types), terms=tuple(terms), doc=doc)


def extend(
    base: Theory,
    name: str,
    types: Sequence[TypeConstructor] = (),
    terms: Sequence[TermConstructor] = (),
    *,
    doc: str | None = None,
) -> Theory:
    """A new theory with everything in `base` plus the given constructors."""
    return Theory(
        name=name,
        types=base.types + tuple(types),
        terms=base.terms + tuple(terms),
        doc=doc if doc is not None else base.doc,
    )
