"""Markdown reference for a theory, rendered with Jinja2 templates."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any

import jinja2

from .check import check_theory
from .domain import equations
from .terms import App, TermExpr
from .theory import TermConstructor, Theory, TypeConstructor

# Setup jinja2 environment pointing to gatsyntax/templates
_TEMPLATE_DIR = os.path.join(os.path.dirname(__file__), "templates")
_ENV = jinja2.Environment(
    loader=jinja2.FileSystemLoader(_TEMPLATE_DIR),
    autoescape=False,
    trim_blocks=True,
    lstrip_blocks=True,
)


def render(template_name: str, **kwargs: Any) -> str:
    """Render a Jinja2 template with the given keyword arguments."""
    template = _ENV.get_template(template_name)
    return template.render(**kwargs)


def _show_type(typ: TermExpr) -> str:
    if isinstance(typ, App) and not typ.args:
        return typ.head
    return str(typ)


def _params(params: tuple[str, ...], context: Any) -> str:
    return ", ".join(f"{p}::{_show_type(context[p])}" for p in params if p in context)


@dataclass(frozen=True)
class TypeRow:
    name: str
    params: tuple[str, ...]
    signature: str
    generator: str
    doc: str | None


@dataclass(frozen=True)
class TermRow:
    name: str
    signature: str
    equations: tuple[str, ...]
    has_impl: bool
    doc: str | None


def _type_row(tc: TypeConstructor) -> TypeRow:
    type_expr = f"{tc.name}({', '.join(tc.params)})" if tc.params else tc.name
    return TypeRow(
        name=tc.name,
        params=tc.params,
        signature=f"{tc.name}({_params(tc.params, tc.context)})" if tc.params else tc.name,
        generator=f"{tc.name}({', '.join(['value', *tc.params])}) :: {type_expr}",
        doc=tc.doc,
    )


def _term_row(cons: TermConstructor, theory: Theory) -> TermRow:
    return TermRow(
        name=cons.name,
        signature=f"{cons.name}({_params(cons.params, cons.context)}) :: {_show_type(cons.typ)}",
        equations=tuple(str(e) for e in equations(cons, theory)),
        has_impl=cons.impl is not None,
        doc=cons.doc,
    )


def generate_reference(theory: Theory) -> str:
    """Markdown description of a theory's constructors and their domains."""
    return render(
        "theory.md.j2",
        theory=theory,
        types=[_type_row(t) for t in theory.types],
        terms=[_term_row(t, theory) for t in theory.terms],
        diagnostics=check_theory(theory).diagnostics,
    )
