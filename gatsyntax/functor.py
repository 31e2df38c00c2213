"""Functors from syntax systems into other algebras.

Strictly speaking these are homomorphisms of models of a GAT, but in a
category theory library "functor" is the name everyone reaches for.

A functor is completely determined by its action on generators. There are
several ways to specify that action:

  1. Give a target algebra whose generator constructors accept the wrapped
     values, e.g. an `Instance` with ``types={"Ob": ..., "Hom": ...}``.
  2. Map individual generator terms to target values with `generators`.
  3. Map constructor names to functions of the (unevaluated) expression
     with `terms`. For generators the constructor name is the type name.

`terms` also applies to compound expressions, which is how forgetful
functors collapse a composite term into a single target value.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any

from .algebra import Algebra, invoke_term
from .expr import Expr

logger = logging.getLogger(__name__)


def _in_table(table: Mapping[Expr, Any], expr: Expr) -> bool:
    try:
        return expr in table
    except TypeError:  # unhashable wrapped value
        return False


def functor(
    target: Algebra,
    expr: Expr,
    *,
    generators: Mapping[Expr, Any] | None = None,
    terms: Mapping[str, Callable[[Expr], Any]] | None = None,
) -> Any:
    """Evaluate `expr` in `target`."""
    generators = generators or {}
    terms = terms or {}

    # Special case: a specific generator.
    if generators and expr.is_generator and _in_table(generators, expr):
        return generators[expr]

    # Special case: by constructor name (usually a generator's type).
    name = expr.constructor_name
    if name in terms:
        return terms[name](expr)

    # Otherwise evaluate arguments in order and rebuild in the target.
    term_args = []
    for arg in expr.args:
        if isinstance(arg, Expr):
            arg = functor(target, arg, generators=generators, terms=terms)
        term_args.append(arg)
    logger.debug("Invoking %s in %s", name, target.name)
    return invoke_term(target, name, *term_args)


def compose_generators(
    first: Mapping[Expr, Any],
    second: Mapping[Expr, Any],
    target: Algebra,
    *,
    terms: Mapping[str, Callable[[Expr], Any]] | None = None,
) -> dict[Expr, Any]:
    """Generator table of `second` after `first`.

    If `first` sends generators into a syntax system and `second` is a
    functor from there into `target`, then

        functor(target, functor(S, e, generators=first), generators=second)
        == functor(target, e, generators=compose_generators(first, second, target))

    Expression values of `first` are evaluated in `target`; other values
    pass through unchanged.
    """
    composed: dict[Expr, Any] = {}
    for gen, value in first.items():
        if isinstance(value, Expr):
            value = functor(target, value, generators=second, terms=terms)
        composed[gen] = value
    return composed
