"""Syntax systems for generalized algebraic theories.

A syntax system is the free algebra of a theory: its values are `Expr`
trees recording exactly which constructors were applied. It provides

1. *Generators*: one per type constructor, lifting a raw value into a term,
   e.g. ``Ob("A")`` or ``Hom("f", A, B)``
2. *Accessors*: one per type constructor parameter, e.g. ``dom(f)``
3. *Term constructors*: one per term constructor of the theory, e.g.
   ``compose(f, g)``, which compute the type of the new term and, when
   called with ``strict=True``, check the constructor's equations first

All of these are entries in a single lookup table interpreted by one
generic routine; nothing is generated per theory. Any entry can be
replaced with custom simplification logic:

    def compose(syntax, f, g, *, strict=False):
        if f.head == "id":
            return g
        return syntax.new("compose", f, g, strict=strict)

    FreeCategory = Syntax(category_theory(), overrides={"compose": compose})
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from functools import partial
from types import MappingProxyType
from typing import Any

from .algebra import ensure_well_formed, evaluate, invoke_term
from .domain import equations, validate
from .errors import UnknownConstructorError
from .expr import GENERATOR, Expr, ExprKind
from .terms import App, Equation
from .theory import ANY_TYPE, TermConstructor, Theory, expand_term_type

logger = logging.getLogger(__name__)

# override(syntax, *args, strict=False) -> Expr
Override = Callable[..., Any]


@dataclass(frozen=True)
class Constructor:
    """A term constructor as seen by a syntax system.

    Holds the declaration together with its result type and equations
    expanded over the explicit parameters.
    """

    cons: TermConstructor
    kind: ExprKind
    result_type: App
    equations: tuple[Equation, ...]

    @property
    def name(self) -> str:
        return self.cons.name

    @property
    def arity(self) -> int:
        return self.cons.arity

    @property
    def gat_type(self) -> str:
        return self.cons.result_type_name

    def accepts(self, args: Sequence[Any]) -> bool:
        """Whether `args` have the arity and types this constructor declares."""
        if len(args) != self.arity:
            return False
        for type_name, arg in zip(self.cons.param_type_names, args, strict=True):
            if type_name == ANY_TYPE:
                continue
            if not isinstance(arg, Expr) or arg.gat_type != type_name:
                return False
        return True


def _describe(args: Sequence[Any]) -> str:
    return ", ".join(a.gat_type if isinstance(a, Expr) else type(a).__name__ for a in args)


class Syntax:
    """The syntax system of a theory."""

    def __init__(
        self,
        theory: Theory,
        *,
        name: str | None = None,
        overrides: Mapping[str, Override] | None = None,
    ) -> None:
        ensure_well_formed(theory)
        self._theory = theory
        self._name = name or f"Syntax({theory.name})"

        table: dict[str, list[Constructor]] = {}
        for kind, group in (
            (ExprKind.COMPOUND, theory.terms),
            (ExprKind.GENERATOR, theory.generators()),
        ):
            for cons in group:
                table.setdefault(cons.name, []).append(
                    Constructor(
                        cons=cons,
                        kind=kind,
                        result_type=expand_term_type(cons, theory),
                        equations=equations(cons, theory),
                    )
                )
        self._constructors = MappingProxyType({k: tuple(v) for k, v in table.items()})
        self._accessors = theory.accessors

        overrides = dict(overrides or {})
        for key in overrides:
            if key not in self._constructors:
                raise UnknownConstructorError(self._name, key)
        self._overrides = MappingProxyType(overrides)

        logger.debug(
            "Built %s: %d constructors, %d accessors, %d overrides",
            self._name,
            sum(len(v) for v in self._constructors.values()),
            len(self._accessors),
            len(self._overrides),
        )

    @property
    def name(self) -> str:
        return self._name

    @property
    def theory(self) -> Theory:
        return self._theory

    @property
    def constructors(self) -> Mapping[str, tuple[Constructor, ...]]:
        return self._constructors

    @property
    def overrides(self) -> Mapping[str, Override]:
        return self._overrides

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def resolve(self, name: str, args: Sequence[Any]) -> Constructor:
        """Pick the overload of `name` matching the argument types."""
        overloads = self._constructors.get(name)
        if not overloads:
            raise UnknownConstructorError(self._name, name)
        for ctor in overloads:
            if ctor.accepts(args):
                return ctor
        raise TypeError(f"No method {name}({_describe(args)}) in {self._name}")

    def lookup(self, name: str, args: Sequence[Any]) -> Callable[..., Any]:
        if name in self._accessors:
            return partial(self.accessor, name)
        ctor = self.resolve(name, args)
        return partial(self._apply, ctor)

    def _apply(self, ctor: Constructor, *args: Any, strict: bool = False) -> Any:
        override = self._overrides.get(ctor.name)
        if override is not None:
            return override(self, *args, strict=strict)
        if ctor.cons.impl is not None:
            if strict:
                validate(ctor.cons, ctor.equations, args, self)
            return ctor.cons.impl(self, *args)
        return self.new(ctor, *args, strict=strict)

    def construct(self, name: str, *args: Any, strict: bool = False) -> Any:
        """Apply a constructor, honouring overrides and default implementations."""
        return self._apply(self.resolve(name, args), *args, strict=strict)

    # ------------------------------------------------------------------
    # Default constructor
    # ------------------------------------------------------------------

    def new(self, ctor: Constructor | str, *args: Any, strict: bool = False) -> Expr:
        """Build the expression ``ctor(*args)`` with no simplification.

        Overrides call this to produce the raw term.
        """
        if isinstance(ctor, str):
            ctor = self.resolve(ctor, args)
        elif not ctor.accepts(args):
            raise TypeError(f"No method {ctor.name}({_describe(args)}) in {self._name}")

        if strict:
            validate(ctor.cons, ctor.equations, args, self)

        env = dict(zip(ctor.cons.params, args, strict=True))
        type_args = tuple(evaluate(a, env, self) for a in ctor.result_type.args)
        head = GENERATOR if ctor.kind is ExprKind.GENERATOR else ctor.name
        return Expr(head, tuple(args), type_args, gat_type=ctor.gat_type)

    # ------------------------------------------------------------------
    # Generators and accessors
    # ------------------------------------------------------------------

    def generator(self, type_name: str, value: Any, *params: Any) -> Any:
        """Create a generator of the given type, e.g. ``generator("Hom", "f", A, B)``."""
        if self._theory.get_type(type_name) is None:
            raise UnknownConstructorError(self._name, type_name)
        return self.construct(type_name, value, *params)

    def generator_like(self, expr: Expr, value: Any) -> Any:
        """Create a generator of the same type as `expr`."""
        return invoke_term(self, expr.gat_type, value, *expr.type_args)

    def accessor(self, name: str, expr: Expr) -> Expr:
        """Type parameter `name` of `expr`, e.g. ``accessor("dom", f)``."""
        owners = self._accessors.get(name)
        if not owners:
            raise UnknownConstructorError(self._name, name)
        if isinstance(expr, Expr):
            for type_name, index in owners:
                if expr.gat_type == type_name:
                    return expr.type_args[index]
        raise TypeError(f"No method {name}({_describe([expr])}) in {self._name}")

    def __getattr__(self, name: str) -> Callable[..., Any]:
        if name.startswith("_"):
            raise AttributeError(name)
        if name in self._accessors:
            return partial(self.accessor, name)
        if name in self._constructors:
            return partial(self.construct, name)
        raise AttributeError(f"{self._name} has no constructor or accessor '{name}'")

    def __repr__(self) -> str:
        return f"<{self._name}>"
