"""Library of standard theories and their free syntax systems.

Each theory is built by a function returning a fresh `Theory`:

- Category: objects, morphisms, identities, composition
- MonoidalCategory: adds a tensor product on objects and morphisms
- SymmetricMonoidalCategory: adds braidings
- CartesianCategory: adds copying, deleting, pairing and projections

Usage:
    from gatsyntax.theories import category_theory, free_category

    C = free_category()
    A, B = C.Ob("A"), C.Ob("B")
    f = C.Hom("f", A, B)
    C.compose(C.id(A), f)   # → f
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from gatsyntax.expr import Expr
from gatsyntax.helpers import extend, term, theory, ty
from gatsyntax.syntax import Syntax
from gatsyntax.theory import Theory

OBJECTS = [("A", "Ob"), ("B", "Ob"), ("C", "Ob"), ("D", "Ob")]

UNICODE = {"compose": "⋅", "otimes": "⊗"}
LATEX = {"compose": "\\cdot", "otimes": "\\otimes"}


# =====================================================================
# Category
# =====================================================================


def category_theory() -> Theory:
    """The theory of categories.

    types:  Ob
            Hom(dom::Ob, codom::Ob)
    terms:  id(A::Ob) :: Hom(A,A)
            compose(f::Hom(A,B), g::Hom(B,C)) :: Hom(A,C)
    """
    return theory(
        "Category",
        types=[
            ty("Ob", doc="Object in a category"),
            ty("Hom", [("dom", "Ob"), ("codom", "Ob")], doc="Morphism in a category"),
        ],
        terms=[
            term("id", [("A", "Ob")], "Hom(A,A)"),
            term(
                "compose",
                [("f", "Hom(A,B)"), ("g", "Hom(B,C)")],
                "Hom(A,C)",
                implicit=OBJECTS[:3],
                doc="Composition in diagrammatic order",
            ),
        ],
        doc="Categories: objects, morphisms, identities and composition.",
    )


# =====================================================================
# Monoidal categories
# =====================================================================


def monoidal_category_theory() -> Theory:
    """The theory of (strict) monoidal categories.

    terms:  otimes(A::Ob, B::Ob) :: Ob
            otimes(f::Hom(A,B), g::Hom(C,D)) :: Hom(otimes(A,C), otimes(B,D))
            munit() :: Ob
    """
    return extend(
        category_theory(),
        "MonoidalCategory",
        terms=[
            term("otimes", [("A", "Ob"), ("B", "Ob")], "Ob", doc="Tensor product of objects"),
            term(
                "otimes",
                [("f", "Hom(A,B)"), ("g", "Hom(C,D)")],
                "Hom(otimes(A,C),otimes(B,D))",
                implicit=OBJECTS,
                doc="Tensor product of morphisms",
            ),
            term("munit", [], "Ob", doc="Monoidal unit"),
        ],
        doc="Monoidal categories: a category with a tensor product and unit.",
    )


def symmetric_monoidal_category_theory() -> Theory:
    """Monoidal categories with braidings ``braid(A,B) : A⊗B → B⊗A``."""
    return extend(
        monoidal_category_theory(),
        "SymmetricMonoidalCategory",
        terms=[
            term(
                "braid",
                [("A", "Ob"), ("B", "Ob")],
                "Hom(otimes(A,B),otimes(B,A))",
            ),
        ],
        doc="Symmetric monoidal categories.",
    )


def _pair(algebra: Any, f: Any, g: Any) -> Any:
    return algebra.compose(algebra.mcopy(algebra.dom(f)), algebra.otimes(f, g))


def cartesian_category_theory() -> Theory:
    """Symmetric monoidal categories with diagonals and projections.

    terms:  mcopy(A::Ob) :: Hom(A, otimes(A,A))
            delete(A::Ob) :: Hom(A, munit())
            pair(f::Hom(A,B), g::Hom(A,C)) :: Hom(A, otimes(B,C))
              = compose(mcopy(A), otimes(f,g))
            proj1(A::Ob, B::Ob) :: Hom(otimes(A,B), A)
            proj2(A::Ob, B::Ob) :: Hom(otimes(A,B), B)
    """
    return extend(
        symmetric_monoidal_category_theory(),
        "CartesianCategory",
        terms=[
            term("mcopy", [("A", "Ob")], "Hom(A,otimes(A,A))", doc="Copy (diagonal)"),
            term("delete", [("A", "Ob")], "Hom(A,munit())", doc="Delete (counit)"),
            term(
                "pair",
                [("f", "Hom(A,B)"), ("g", "Hom(A,C)")],
                "Hom(A,otimes(B,C))",
                implicit=OBJECTS[:3],
                impl=_pair,
            ),
            term("proj1", [("A", "Ob"), ("B", "Ob")], "Hom(otimes(A,B),A)"),
            term("proj2", [("A", "Ob"), ("B", "Ob")], "Hom(otimes(A,B),B)"),
        ],
        doc="Cartesian categories.",
    )


ALL_THEORIES: dict[str, Callable[[], Theory]] = {
    "category": category_theory,
    "monoidal": monoidal_category_theory,
    "symmetric_monoidal": symmetric_monoidal_category_theory,
    "cartesian": cartesian_category_theory,
}


# =====================================================================
# Free syntax systems
# =====================================================================


def compose_units(syntax: Syntax, f: Expr, g: Expr, *, strict: bool = False) -> Expr:
    """compose with the unit laws  id(A)⋅f = f = f⋅id(B)  applied."""
    composite = syntax.new("compose", f, g, strict=strict)
    if f.head == "id":
        return g
    if g.head == "id":
        return f
    return composite


def otimes_units(syntax: Syntax, a: Expr, b: Expr, *, strict: bool = False) -> Expr:
    """otimes on objects with  munit()⊗A = A = A⊗munit()."""
    product = syntax.new("otimes", a, b, strict=strict)
    if a.gat_type == "Ob":
        if a.head == "munit":
            return b
        if b.head == "munit":
            return a
    return product


def free_category() -> Syntax:
    return Syntax(
        category_theory(),
        name="FreeCategory",
        overrides={"compose": compose_units},
    )


def free_monoidal_category() -> Syntax:
    return Syntax(
        monoidal_category_theory(),
        name="FreeMonoidalCategory",
        overrides={"compose": compose_units, "otimes": otimes_units},
    )


def free_cartesian_category() -> Syntax:
    return Syntax(
        cartesian_category_theory(),
        name="FreeCartesianCategory",
        overrides={"compose": compose_units, "otimes": otimes_units},
    )
