"""S-expression serialization for syntax expressions.

An expression is encoded as a list whose first element is its constructor
name and whose remaining elements are its encoded arguments:

    compose(f, g)   →   ["compose", ["Hom", "f", ["Ob", "A"], ["Ob", "B"]],
                                    ["Hom", "g", ["Ob", "B"], ["Ob", "C"]]]

Booleans, numbers, strings and None encode as themselves, so the result
is JSON-able. Round-trip: parse_json_sexpr(S, to_json_sexpr(e)) == e for
every expression without by-reference generators.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from typing import Any

from .algebra import invoke_term
from .errors import DisabledReferenceError
from .expr import Expr
from .syntax import Syntax

logger = logging.getLogger(__name__)

SExpr = list[Any] | str | int | float | bool | None


class Name(str):
    """Text decoded as a symbolic name rather than as data.

    Compares and hashes like the underlying string.
    """

    __slots__ = ()


# ---------------------------------------------------------------------------
# Encoding
# ---------------------------------------------------------------------------


def to_json_sexpr(
    expr: Any,
    *,
    by_reference: Callable[[Any], bool] | None = None,
) -> SExpr:
    """Serialize an expression (or leaf value) as a JSON-able S-expression.

    A generator whose value satisfies `by_reference` is encoded as its value
    alone, to be resolved again by name when parsing.
    """
    if not isinstance(expr, Expr):
        if expr is None or isinstance(expr, (bool, int, float, str)):
            return expr
        return str(expr)
    if expr.is_generator and by_reference is not None and by_reference(expr.value):
        return to_json_sexpr(expr.value)
    return [
        expr.constructor_name,
        *(to_json_sexpr(arg, by_reference=by_reference) for arg in expr.args),
    ]


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------


def _no_references(name: Any) -> Any:
    raise DisabledReferenceError(str(name))


def parse_json_sexpr(
    syntax: Syntax,
    sexpr: SExpr,
    *,
    parse_head: Callable[[str], str] | None = None,
    parse_reference: Callable[[Any], Any] = _no_references,
    parse_value: Callable[[Any], Any] | None = None,
    symbols: bool = True,
) -> Any:
    """Deserialize an expression from a JSON-able S-expression.

    If `symbols` is true (the default), strings are decoded as `Name`.

    An element is treated as a raw value, not a nested expression, when it
    is the first argument and the number of remaining arguments equals the
    arity of the type constructor named by the head (a generator's wrapped
    value), or when it is a boolean, number or None. This is a heuristic: a
    term constructor whose name and arity happen to match a type
    constructor's would be misread.
    """
    type_arities = syntax.theory.type_arities

    def as_text(x: str) -> str:
        return Name(x) if symbols else x

    def value(x: Any) -> Any:
        if isinstance(x, str):
            x = as_text(x)
        return parse_value(x) if parse_value is not None else x

    def expr(x: Any) -> Any:
        if isinstance(x, str):
            return parse_reference(as_text(x))
        if not isinstance(x, list) or not x:
            raise ValueError(f"Expected a non-empty S-expression list, got {x!r}")
        head = as_text(str(x[0]))
        name = str(parse_head(head) if parse_head is not None else head)
        nargs = len(x) - 1
        args = []
        for i, arg in enumerate(x[1:]):
            is_value = (
                i == 0 and type_arities.get(name) == nargs - 1
            ) or arg is None or isinstance(arg, (bool, int, float))
            args.append(value(arg) if is_value else expr(arg))
        return invoke_term(syntax, name, *args)

    return expr(sexpr)


# ---------------------------------------------------------------------------
# Convenience: dump / load expressions as JSON strings
# ---------------------------------------------------------------------------


def dumps(expr: Expr, *, by_reference: Callable[[Any], bool] | None = None) -> str:
    return json.dumps(to_json_sexpr(expr, by_reference=by_reference))


def loads(syntax: Syntax, s: str, **kwargs: Any) -> Any:
    sexpr = json.loads(s)
    logger.debug("Parsing S-expression into %s", syntax.name)
    return parse_json_sexpr(syntax, sexpr, **kwargs)
