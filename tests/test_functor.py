"""Tests for gatsyntax.functor: evaluating syntax in other algebras."""

from __future__ import annotations

import operator
from dataclasses import dataclass

import pytest

from gatsyntax import Instance, Syntax, UnknownConstructorError, functor
from gatsyntax.functor import compose_generators
from gatsyntax.theories import category_theory, free_category


@dataclass(frozen=True)
class FinFunction:
    """A function {0..n-1} → {0..codom-1}, stored as its table of values."""

    mapping: tuple[int, ...]
    codom: int

    @property
    def dom(self) -> int:
        return len(self.mapping)


def fin_sets() -> Instance:
    return Instance(
        category_theory(),
        types={
            "Ob": int,
            "Hom": lambda values, A, B: FinFunction(tuple(values), B),
        },
        operations={
            "dom": lambda f: f.dom,
            "codom": lambda f: f.codom,
            "id": lambda n: FinFunction(tuple(range(n)), n),
            "compose": lambda f, g: FinFunction(tuple(g.mapping[i] for i in f.mapping), g.codom),
        },
        name="FinSet",
    )


@pytest.fixture
def cat() -> Syntax:
    return Syntax(category_theory())


class TestIntoSyntax:
    def test_identity_functor(self, cat: Syntax) -> None:
        A, B, C = cat.Ob("A"), cat.Ob("B"), cat.Ob("C")
        f, g = cat.Hom("f", A, B), cat.Hom("g", B, C)
        for e in [A, f, cat.id(A), cat.compose(f, g), cat.compose(cat.id(A), f)]:
            assert functor(cat, e) == e

    def test_into_free_category_simplifies(self, cat: Syntax) -> None:
        A, B = cat.Ob("A"), cat.Ob("B")
        f = cat.Hom("f", A, B)
        assert functor(free_category(), cat.compose(cat.id(A), f)) == f

    def test_generator_map(self, cat: Syntax) -> None:
        A, B = cat.Ob("A"), cat.Ob("B")
        f, g = cat.Hom("f", A, B), cat.Hom("g", B, A)
        swapped = functor(cat, cat.compose(f, g), generators={f: g, g: f})
        assert swapped == cat.compose(g, f)

    def test_generator_map_rebuilds_type_args(self, cat: Syntax) -> None:
        A, B = cat.Ob("A"), cat.Ob("B")
        f = cat.Hom("f", A, A)
        image = functor(cat, f, generators={A: B})
        assert image == cat.Hom("f", B, B)


class TestIntoInstance:
    def test_compose(self, cat: Syntax) -> None:
        A, B = cat.Ob("A"), cat.Ob("B")
        f, g = cat.Hom("f", A, B), cat.Hom("g", B, A)
        F = {
            A: 2,
            B: 3,
            f: FinFunction((0, 2), 3),
            g: FinFunction((1, 0, 1), 2),
        }
        assert functor(fin_sets(), cat.compose(f, g), generators=F) == FinFunction((1, 1), 2)
        assert functor(fin_sets(), cat.id(B), generators=F) == FinFunction((0, 1, 2), 3)

    def test_generators_through_types(self, cat: Syntax) -> None:
        A = cat.Ob(2)
        f = cat.Hom((1, 0), A, A)
        assert functor(fin_sets(), f) == FinFunction((1, 0), 2)
        assert functor(fin_sets(), cat.compose(f, f)) == FinFunction((0, 1), 2)

    def test_terms_by_type_name(self, cat: Syntax) -> None:
        A = cat.Ob("AB")
        assert functor(fin_sets(), cat.id(A), terms={"Ob": lambda e: len(e.value)}) == FinFunction(
            (0, 1), 2
        )

    def test_terms_on_compound(self, cat: Syntax) -> None:
        A = cat.Ob("A")
        f = cat.Hom("f", A, A)
        forget = functor(fin_sets(), cat.compose(f, f), terms={"compose": lambda e: "composite"})
        assert forget == "composite"

    def test_missing_operation(self, cat: Syntax) -> None:
        partial_sets = Instance(category_theory(), types={"Ob": int})
        with pytest.raises(UnknownConstructorError):
            functor(partial_sets, cat.id(cat.Ob(1)))


def test_arguments_evaluated_left_to_right(cat: Syntax) -> None:
    A = cat.Ob("A")
    f, g, h = (cat.Hom(x, A, A) for x in "fgh")
    seen: list[str] = []

    def hom(e):
        seen.append(e.value)
        return e.value

    words = Instance(category_theory(), types={"Ob": str}, operations={"compose": operator.add})
    e = cat.compose(cat.compose(f, g), h)
    assert functor(words, e, terms={"Hom": hom}) == "fgh"
    assert seen == ["f", "g", "h"]


def test_compose_generators(cat: Syntax) -> None:
    A, B = cat.Ob("A"), cat.Ob("B")
    f, g = cat.Hom("f", A, B), cat.Hom("g", B, A)
    k, l = cat.Hom("k", A, B), cat.Hom("l", B, A)

    first = {f: k, g: l}
    second = {k: FinFunction((0, 2), 3), l: FinFunction((1, 0, 1), 2)}
    composed = compose_generators(first, second, fin_sets())
    assert composed == {f: second[k], g: second[l]}

    e = cat.compose(f, g)
    two_step = functor(fin_sets(), functor(cat, e, generators=first), generators=second)
    one_step = functor(fin_sets(), e, generators=composed)
    assert one_step == two_step == FinFunction((1, 1), 2)


def test_compose_generators_evaluates_unmapped_values(cat: Syntax) -> None:
    A, B = cat.Ob(2), cat.Ob("B")
    f = cat.Hom("f", A, A)
    swap = cat.Hom((1, 0), A, A)

    first = {f: swap}
    composed = compose_generators(first, {}, fin_sets())
    assert composed == {f: FinFunction((1, 0), 2)}

    two_step = functor(fin_sets(), functor(cat, f, generators=first))
    assert functor(fin_sets(), f, generators=composed) == two_step

    first = {f: cat.compose(swap, swap), B: A}
    composed = compose_generators(first, {}, fin_sets())
    assert composed == {f: FinFunction((0, 1), 2), B: 2}


def test_compose_generators_passes_other_values_through(cat: Syntax) -> None:
    A = cat.Ob("A")
    assert compose_generators({A: 5}, {cat.Ob("B"): 7}, fin_sets()) == {A: 5}


def test_unhashable_generator_values(cat: Syntax) -> None:
    A = cat.Ob(2)
    f = cat.Hom([1, 0], A, A)
    assert functor(fin_sets(), f) == FinFunction((1, 0), 2)
    assert functor(fin_sets(), cat.compose(f, f), generators={A: 2}) == FinFunction((0, 1), 2)
