from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum

from .expr import GENERATOR
from .terms import App, TermExpr, Var, free_vars
from .theory import (
    ANY_TYPE,
    TermConstructor,
    Theory,
    TypeConstructor,
    expand_term_type,
    implicit_bindings,
)

logger = logging.getLogger(__name__)


class Severity(Enum):
    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class Diagnostic:
    check: str
    severity: Severity
    constructor: str | None
    message: str


@dataclass(frozen=True)
class CheckResult:
    theory_name: str
    diagnostics: tuple[Diagnostic, ...]

    @property
    def errors(self) -> tuple[Diagnostic, ...]:
        return tuple(d for d in self.diagnostics if d.severity == Severity.ERROR)

    @property
    def warnings(self) -> tuple[Diagnostic, ...]:
        return tuple(d for d in self.diagnostics if d.severity == Severity.WARNING)

    @property
    def is_well_formed(self) -> bool:
        return len(self.errors) == 0


@dataclass
class CheckContext:
    theory: Theory
    constructor: str | None = None
    diagnostics: list[Diagnostic] = field(default_factory=list)

    def error(self, check: str, message: str) -> None:
        self.diagnostics.append(
            Diagnostic(check, Severity.ERROR, self.constructor, message)
        )

    def warning(self, check: str, message: str) -> None:
        self.diagnostics.append(
            Diagnostic(check, Severity.WARNING, self.constructor, message)
        )


# ---------------------------------------------------------------------------
# Names
# ---------------------------------------------------------------------------


def check_names(ctx: CheckContext) -> None:
    theory = ctx.theory
    ctx.constructor = None

    for name, count in Counter(theory.type_names).items():
        if count > 1:
            ctx.error("type_name_unique", f"Type constructor '{name}' declared {count} times")

    type_names = set(theory.type_names)
    accessors = theory.accessors
    for name in theory.term_names:
        if name == GENERATOR:
            ctx.error(
                "name_collision",
                f"Term constructor '{name}' would be mistaken for a generator",
            )
        if name in type_names:
            ctx.error(
                "name_collision",
                f"Term constructor '{name}' has the same name as a type constructor",
            )
        if name in accessors:
            ctx.error(
                "name_collision",
                f"Term constructor '{name}' has the same name as a type parameter accessor",
            )
    for name, owners in accessors.items():
        if name in type_names:
            ctx.error(
                "name_collision",
                f"Type parameter '{name}' has the same name as a type constructor",
            )
        if len(owners) > 1:
            shared = ", ".join(t for t, _ in owners)
            ctx.warning(
                "accessor_shared",
                f"Accessor '{name}' is shared by {shared}; resolved by argument type",
            )

    seen: dict[tuple[str, tuple[str, ...]], int] = {}
    for cons in theory.terms:
        key = (cons.name, cons.param_type_names)
        seen[key] = seen.get(key, 0) + 1
    for (name, param_types), count in seen.items():
        if count > 1:
            ctx.constructor = name
            ctx.warning(
                "overload_ambiguous",
                f"{count} overloads of '{name}' take ({', '.join(param_types)})",
            )
    ctx.constructor = None


# ---------------------------------------------------------------------------
# Type expressions
# ---------------------------------------------------------------------------


def check_type_expr(typ: TermExpr, ctx: CheckContext, where: str) -> None:
    """A type is a type constructor applied to terms of the right arity."""
    if isinstance(typ, Var):
        ctx.error("type_resolved", f"{where}: '{typ.name}' is a variable, not a type")
        return
    if typ.head == ANY_TYPE and not typ.args:
        return
    tc = ctx.theory.get_type(typ.head)
    if tc is None:
        ctx.error("type_resolved", f"{where}: type '{typ.head}' is not declared")
        return
    if tc.arity != len(typ.args):
        ctx.error(
            "type_arity",
            f"{where}: type '{typ.head}' expects {tc.arity} parameters, got {len(typ.args)}",
        )
    for arg in typ.args:
        check_term_expr(arg, ctx, where)


def check_term_expr(expr: TermExpr, ctx: CheckContext, where: str) -> None:
    """A term inside a type: variables, term constructors and accessors."""
    if isinstance(expr, Var):
        return
    theory = ctx.theory
    if expr.head in theory.accessors:
        if len(expr.args) != 1:
            ctx.error(
                "type_arity",
                f"{where}: accessor '{expr.head}' takes 1 argument, got {len(expr.args)}",
            )
    else:
        overloads = theory.get_terms(expr.head)
        if not overloads:
            ctx.error("type_resolved", f"{where}: '{expr.head}' is not a term constructor")
        elif all(o.arity != len(expr.args) for o in overloads):
            ctx.error(
                "type_arity",
                f"{where}: no overload of '{expr.head}' takes {len(expr.args)} arguments",
            )
    for arg in expr.args:
        check_term_expr(arg, ctx, where)


def check_type_constructor(tc: TypeConstructor, ctx: CheckContext) -> None:
    ctx.constructor = tc.name
    for p in tc.params:
        if p not in tc.context:
            ctx.error("param_in_context", f"Parameter '{p}' has no declared type")
    for name, typ in tc.context.items():
        check_type_expr(typ, ctx, f"parameter '{name}'")
        for v in free_vars(typ):
            if v not in tc.context:
                ctx.error(
                    "implicit_resolved",
                    f"Type of parameter '{name}' mentions undeclared variable '{v}'",
                )


def check_term_constructor(cons: TermConstructor, ctx: CheckContext) -> None:
    ctx.constructor = cons.name
    for p in cons.params:
        if p not in cons.context:
            ctx.error("param_in_context", f"Parameter '{p}' has no declared type")
    for name, typ in cons.context.items():
        check_type_expr(typ, ctx, f"parameter '{name}'")
    check_type_expr(cons.typ, ctx, "result type")

    bindings = implicit_bindings(cons, ctx.theory)
    mentioned = list(free_vars(cons.typ))
    for equation in cons.equations:
        check_term_expr(equation.lhs, ctx, "equation")
        check_term_expr(equation.rhs, ctx, "equation")
        mentioned.extend(free_vars(equation.lhs))
        mentioned.extend(free_vars(equation.rhs))
    for v in dict.fromkeys(mentioned):
        if not bindings.get(v):
            ctx.error(
                "implicit_resolved",
                f"Variable '{v}' cannot be recovered from the explicit parameters",
            )


# ---------------------------------------------------------------------------
# Nullary regress
# ---------------------------------------------------------------------------


def _nullary_calls(expr: TermExpr, theory: Theory) -> set[str]:
    found: set[str] = set()
    if isinstance(expr, App):
        if not expr.args and any(o.is_nullary for o in theory.get_terms(expr.head)):
            found.add(expr.head)
        for arg in expr.args:
            found |= _nullary_calls(arg, theory)
    return found


def check_nullary_regress(ctx: CheckContext) -> None:
    """Building a nullary term must not require building itself."""
    theory = ctx.theory
    edges: dict[str, set[str]] = {}
    for cons in theory.terms:
        if cons.is_nullary:
            expanded = expand_term_type(cons, theory)
            edges.setdefault(cons.name, set()).update(_nullary_calls(expanded, theory))

    def reaches(start: str, target: str, visited: set[str]) -> bool:
        for nxt in edges.get(start, ()):
            if nxt == target:
                return True
            if nxt not in visited:
                visited.add(nxt)
                if reaches(nxt, target, visited):
                    return True
        return False

    for name in edges:
        if reaches(name, name, set()):
            ctx.constructor = name
            ctx.error(
                "nullary_regress",
                f"Result type of nullary constructor '{name}' expands into itself",
            )
    ctx.constructor = None


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def check_theory(theory: Theory) -> CheckResult:
    ctx = CheckContext(theory=theory)

    check_names(ctx)
    for tc in theory.types:
        check_type_constructor(tc, ctx)
    for cons in theory.terms:
        check_term_constructor(cons, ctx)
    ctx.constructor = None
    check_nullary_regress(ctx)

    def sort_key(d: Diagnostic) -> tuple[int, str, str]:
        severity_order = 0 if d.severity == Severity.ERROR else 1
        return (severity_order, d.check, d.constructor or "")

    sorted_diagnostics = tuple(sorted(ctx.diagnostics, key=sort_key))
    logger.debug(
        "Checked theory %r: %d errors, %d warnings",
        theory.name,
        sum(d.severity == Severity.ERROR for d in sorted_diagnostics),
        sum(d.severity == Severity.WARNING for d in sorted_diagnostics),
    )
    return CheckResult(theory.name, sorted_diagnostics)
