"""Text renderings of syntax expressions.

Everything here is built from the read-only accessors of `Expr` (head,
args, value), so any notation can be added without touching the core.

    show_sexpr(e)                      (compose f g)
    show_unicode(e)                    compose{f,g}
    show_unicode(e, infix=UNICODE)     f⋅g
    show_latex(e, infix=LATEX)         f \\cdot g
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .expr import Expr


def show_sexpr(expr: Any) -> str:
    """Lisp-style S-expression; generators show as the repr of their value."""
    if not isinstance(expr, Expr):
        return repr(expr)
    if expr.is_generator:
        return repr(expr.value)
    return "(" + " ".join([expr.head, *(show_sexpr(a) for a in expr.args)]) + ")"


# ---------------------------------------------------------------------------
# Unicode
# ---------------------------------------------------------------------------


def show_unicode(
    expr: Any,
    *,
    infix: Mapping[str, str] | None = None,
    paren: bool = False,
) -> str:
    """Infix notation for heads in `infix`, prefix ``head{a,b}`` otherwise."""
    if not isinstance(expr, Expr):
        return str(expr)
    if expr.is_generator:
        return str(expr.value)
    infix = infix or {}
    op = infix.get(expr.head)
    if op is None or len(expr.args) < 2:
        inner = ",".join(show_unicode(a, infix=infix) for a in expr.args)
        return f"{expr.head}{{{inner}}}"
    body = op.join(show_unicode(a, infix=infix, paren=True) for a in expr.args)
    return f"({body})" if paren else body


# ---------------------------------------------------------------------------
# LaTeX
# ---------------------------------------------------------------------------


def _latex_leaf(value: Any) -> str:
    content = str(value)
    if len(content) > 1 and content.isalpha():
        return f"\\mathrm{{{content}}}"
    return content


def show_latex(
    expr: Any,
    *,
    infix: Mapping[str, str] | None = None,
    paren: bool = False,
) -> str:
    """LaTeX math, without ``$`` or equation delimiters."""
    if not isinstance(expr, Expr):
        return str(expr)
    if expr.is_generator:
        return _latex_leaf(expr.value)
    infix = infix or {}
    op = infix.get(expr.head)
    if op is None or len(expr.args) < 2:
        inner = ",".join(show_latex(a, infix=infix) for a in expr.args)
        return f"\\mathop{{\\mathrm{{{expr.head}}}}}\\left[{inner}\\right]"
    sep = op if op == " " else f" {op} "
    body = sep.join(show_latex(a, infix=infix, paren=True) for a in expr.args)
    return f"\\left({body}\\right)" if paren else body
