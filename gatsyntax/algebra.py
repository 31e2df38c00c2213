"""Algebras of a theory and reflective invocation.

An *algebra* is anything that can apply the constructors of a theory by
name: a syntax system (which builds `Expr` trees) or an `Instance` (a
concrete model built from ordinary Python values). Generic algorithms such
as functors and deserialization never name a constructor themselves; they
pass names through `invoke_term` at runtime.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from functools import partial
from types import MappingProxyType
from typing import Any, Protocol

from .check import check_theory
from .errors import TheoryError, UnknownConstructorError
from .terms import TermExpr, Var
from .theory import Theory

logger = logging.getLogger(__name__)


class Algebra(Protocol):
    """Anything `invoke_term` can dispatch into."""

    @property
    def name(self) -> str: ...

    @property
    def theory(self) -> Theory: ...

    def lookup(self, name: str, args: Sequence[Any]) -> Callable[..., Any]:
        """Return the callable implementing `name` for these arguments.

        Raises UnknownConstructorError if the algebra has no such name.
        """
        ...


def invoke_term(algebra: Algebra, constructor_name: str, *args: Any, **kwargs: Any) -> Any:
    """Invoke a constructor of `algebra` by name.

    In everyday use the constructor should be called directly; this is the
    entry point for code that only learns the name at runtime.
    """
    fn = algebra.lookup(constructor_name, args)
    return fn(*args, **kwargs)


def evaluate(expr: TermExpr, env: Mapping[str, Any], algebra: Algebra) -> Any:
    """Evaluate a theory-level term expression in `algebra`.

    Variables are looked up in `env`; applications go through `invoke_term`,
    which covers term constructors and type parameter accessors alike.
    """
    if isinstance(expr, Var):
        return env[expr.name]
    values = [evaluate(arg, env, algebra) for arg in expr.args]
    return invoke_term(algebra, expr.head, *values)


def ensure_well_formed(theory: Theory) -> None:
    result = check_theory(theory)
    for d in result.warnings:
        logger.warning("Theory %r: [%s] %s", theory.name, d.check, d.message)
    if not result.is_well_formed:
        raise TheoryError(theory.name, result.errors)


# ---------------------------------------------------------------------------
# Instances
# ---------------------------------------------------------------------------


class Instance:
    """A model of a theory over ordinary Python values.

    `types` maps each type constructor to the callable that creates a value
    of that type from a generator, called as ``types["Hom"](value, A, B)``.
    `operations` maps term constructors and type parameter accessors to
    callables. Term constructors missing from `operations` fall back to the
    theory's default implementation, called as ``impl(instance, *args)``.

    Example (finite sets and functions):
        Instance(category, types={"Ob": ..., "Hom": ...},
                 operations={"dom": ..., "codom": ..., "id": ..., "compose": ...})
    """

    def __init__(
        self,
        theory: Theory,
        types: Mapping[str, Callable[..., Any]],
        operations: Mapping[str, Callable[..., Any]] | None = None,
        *,
        name: str | None = None,
    ) -> None:
        ensure_well_formed(theory)
        self._theory = theory
        self._name = name or f"Instance({theory.name})"
        self._types = MappingProxyType(dict(types))
        self._operations = MappingProxyType(dict(operations or {}))

        for type_name in theory.type_names:
            if type_name not in self._types:
                logger.debug("%s has no generator for type %r", self._name, type_name)

    @property
    def name(self) -> str:
        return self._name

    @property
    def theory(self) -> Theory:
        return self._theory

    @property
    def types(self) -> Mapping[str, Callable[..., Any]]:
        return self._types

    @property
    def operations(self) -> Mapping[str, Callable[..., Any]]:
        return self._operations

    def lookup(self, name: str, args: Sequence[Any]) -> Callable[..., Any]:
        if name in self._types:
            return self._types[name]
        if name in self._operations:
            return self._operations[name]
        for cons in self._theory.get_terms(name):
            if cons.impl is not None and cons.arity == len(args):
                logger.debug("%s: %r uses the theory's implementation", self._name, name)
                return partial(cons.impl, self)
        raise UnknownConstructorError(self._name, name)

    def __getattr__(self, name: str) -> Callable[..., Any]:
        if name.startswith("_") or not (
            name in self._types
            or name in self._operations
            or self._theory.get_terms(name)
        ):
            raise AttributeError(name)
        return partial(invoke_term, self, name)

    def __repr__(self) -> str:
        return f"<{self._name}>"
