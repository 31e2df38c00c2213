"""Generalized algebraic theories.

A theory T = (Ty, Tm) consists of:
  Ty: type constructors, e.g.  Ob,  Hom(A::Ob, B::Ob)
  Tm: term constructors, each with a profile  f : ctx → typ
      e.g.  compose(f::Hom(A,B), g::Hom(B,C)) :: Hom(A,C)

Unlike a many-sorted signature, the type of a term may depend on terms:
the result type of `compose` mentions the objects `A` and `C`, which are
not arguments of `compose` but *implicit* parameters recovered from the
types of `f` and `g`.

A theory is immutable once built. Syntax systems and instances read it;
nothing writes to it.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from .terms import App, Equation, TermExpr, Var, substitute

# Declared type of values that are not terms (a generator's wrapped value).
ANY_TYPE = "Any"
ANY = App(ANY_TYPE)

# Name of the synthetic value parameter of generator constructors.
VALUE_PARAM = "__value__"

_EMPTY_CONTEXT: Mapping[str, TermExpr] = MappingProxyType({})


# ---------------------------------------------------------------------------
# Constructors
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TypeConstructor:
    """A type constructor with typed parameters.

    Examples:
        Ob                                  (no parameters)
        Hom(A, B)  with  A::Ob, B::Ob       (morphisms between objects)
    """

    name: str
    params: tuple[str, ...]
    context: Mapping[str, TermExpr] = _EMPTY_CONTEXT
    doc: str | None = None

    @property
    def arity(self) -> int:
        return len(self.params)


@dataclass(frozen=True)
class TermConstructor:
    """A term constructor with a dependent result type.

    `context` declares every parameter, explicit or implicit. Only the names
    in `params` are passed when the constructor is applied; the others are
    determined by the types of the explicit ones.

    `impl`, when present, is the theory's own default implementation. It is
    called as ``impl(algebra, *args)`` and takes precedence over the trivial
    "apply head to args" constructor of a syntax system.
    """

    name: str
    params: tuple[str, ...]
    typ: App
    context: Mapping[str, TermExpr] = _EMPTY_CONTEXT
    equations: tuple[Equation, ...] = ()
    impl: Callable[..., Any] | None = field(default=None, compare=False)
    doc: str | None = None

    @property
    def arity(self) -> int:
        return len(self.params)

    @property
    def is_nullary(self) -> bool:
        return self.arity == 0

    @property
    def result_type_name(self) -> str:
        return self.typ.head

    @property
    def param_type_names(self) -> tuple[str, ...]:
        """Type constructor names of the explicit parameters, used for overloads."""
        names: list[str] = []
        for p in self.params:
            typ = self.context.get(p)
            names.append(typ.head if isinstance(typ, App) else ANY_TYPE)
        return tuple(names)

    @property
    def implicit_params(self) -> tuple[str, ...]:
        return tuple(p for p in self.context if p not in self.params)


def constructor_for_generator(cons: TypeConstructor) -> TermConstructor:
    """Term constructor that lifts a raw value into a term of type `cons`.

    Hom(A, B) yields   Hom(__value__, A, B) :: Hom(A, B)
    """
    context: dict[str, TermExpr] = {VALUE_PARAM: ANY}
    context.update(cons.context)
    return TermConstructor(
        name=cons.name,
        params=(VALUE_PARAM, *cons.params),
        typ=App(cons.name, tuple(Var(p) for p in cons.params)),
        context=MappingProxyType(context),
        doc=cons.doc,
    )


# ---------------------------------------------------------------------------
# Theory
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Theory:
    """A generalized algebraic theory.

    Type constructors and term constructors are kept in declaration order.
    Term constructor names may repeat (overloads); type constructor names
    may not.
    """

    name: str
    types: tuple[TypeConstructor, ...]
    terms: tuple[TermConstructor, ...]
    doc: str | None = None

    def get_type(self, name: str) -> TypeConstructor | None:
        for t in self.types:
            if t.name == name:
                return t
        return None

    def get_terms(self, name: str) -> tuple[TermConstructor, ...]:
        return tuple(t for t in self.terms if t.name == name)

    @property
    def type_names(self) -> tuple[str, ...]:
        return tuple(t.name for t in self.types)

    @property
    def term_names(self) -> tuple[str, ...]:
        """Distinct term constructor names, in declaration order."""
        return tuple(dict.fromkeys(t.name for t in self.terms))

    @property
    def accessors(self) -> Mapping[str, tuple[tuple[str, int], ...]]:
        """Accessor name → ((type constructor, parameter index), ...)."""
        table: dict[str, list[tuple[str, int]]] = {}
        for t in self.types:
            for i, p in enumerate(t.params):
                table.setdefault(p, []).append((t.name, i))
        return MappingProxyType({k: tuple(v) for k, v in table.items()})

    @property
    def type_arities(self) -> Mapping[str, int]:
        return MappingProxyType({t.name: t.arity for t in self.types})

    def generators(self) -> tuple[TermConstructor, ...]:
        return tuple(constructor_for_generator(t) for t in self.types)

    def interface(self) -> tuple[TermConstructor, ...]:
        """Every term constructor of a syntax system: declared ones plus generators."""
        return self.terms + self.generators()


# ---------------------------------------------------------------------------
# Implicit parameters
# ---------------------------------------------------------------------------


def implicit_bindings(
    cons: TermConstructor, theory: Theory
) -> dict[str, list[TermExpr]]:
    """Find every way to reach each context variable from the explicit params.

    For compose(f::Hom(A,B), g::Hom(B,C)) this yields

        f → [f]    g → [g]
        A → [dom(f)]
        B → [codom(f), dom(g)]
        C → [codom(g)]

    Only variables sitting directly in a type argument position are resolved;
    anything requiring unification is out of reach.
    """
    bindings: dict[str, list[TermExpr]] = {p: [Var(p)] for p in cons.params}

    def visit(base: TermExpr, typ: TermExpr | None) -> None:
        if not isinstance(typ, App):
            return
        tc = theory.get_type(typ.head)
        if tc is None or tc.arity != len(typ.args):
            return
        for param, arg in zip(tc.params, typ.args, strict=True):
            if not isinstance(arg, Var):
                continue
            accessor = App(param, (base,))
            found = bindings.setdefault(arg.name, [])
            found.append(accessor)
            if len(found) == 1 and arg.name not in cons.params:
                visit(accessor, cons.context.get(arg.name))

    for p in cons.params:
        visit(Var(p), cons.context.get(p))
    return bindings


def expand_term_type(cons: TermConstructor, theory: Theory) -> App:
    """Result type with implicit variables replaced by accessor chains.

    compose(f, g) :: Hom(A, C)   becomes   Hom(dom(f), codom(g))
    """
    expanded = substitute(cons.typ, _first_bindings(cons, theory))
    assert isinstance(expanded, App)
    return expanded


def expand_equation(eq: Equation, cons: TermConstructor, theory: Theory) -> Equation:
    bindings = _first_bindings(cons, theory)
    return Equation(substitute(eq.lhs, bindings), substitute(eq.rhs, bindings))


def _first_bindings(cons: TermConstructor, theory: Theory) -> dict[str, TermExpr]:
    return {
        name: found[0]
        for name, found in implicit_bindings(cons, theory).items()
        if found
    }
