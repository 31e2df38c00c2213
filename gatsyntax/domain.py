"""Domain validation for term constructors.

The domain of compose(f::Hom(A,B), g::Hom(B,C)) is the set of pairs with
codom(f) == dom(g). Such equations are either *derived* from the context
(an implicit variable reachable from two explicit parameters) or declared
on the constructor. Checking them is opt-in per call via ``strict=True``.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from .algebra import Algebra, evaluate
from .errors import SyntaxDomainError
from .terms import Equation
from .theory import TermConstructor, Theory, expand_equation, implicit_bindings

logger = logging.getLogger(__name__)


def derived_equations(cons: TermConstructor, theory: Theory) -> tuple[Equation, ...]:
    """Equations implied by the context.

    Every variable reachable in more than one way yields one equation per
    extra path, equating it with the first.
    """
    result: list[Equation] = []
    for found in implicit_bindings(cons, theory).values():
        for other in found[1:]:
            result.append(Equation(found[0], other))
    return tuple(result)


def equations(cons: TermConstructor, theory: Theory) -> tuple[Equation, ...]:
    """Derived equations followed by declared ones, over explicit params only."""
    declared = tuple(expand_equation(e, cons, theory) for e in cons.equations)
    return derived_equations(cons, theory) + declared


def satisfies(
    eqs: Sequence[Equation],
    env: Mapping[str, Any],
    algebra: Algebra,
) -> Equation | None:
    """Return the first equation that fails, or None if all hold."""
    for equation in eqs:
        lhs = evaluate(equation.lhs, env, algebra)
        rhs = evaluate(equation.rhs, env, algebra)
        if lhs != rhs:
            logger.debug("Equation %s failed: %s != %s", equation, lhs, rhs)
            return equation
    return None


def validate(
    cons: TermConstructor,
    eqs: Sequence[Equation],
    args: Sequence[Any],
    algebra: Algebra,
) -> None:
    """Raise SyntaxDomainError unless every equation holds for `args`."""
    if not eqs:
        return
    env = dict(zip(cons.params, args, strict=True))
    if satisfies(eqs, env, algebra) is not None:
        raise SyntaxDomainError(cons.name, args)

