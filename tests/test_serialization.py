"""Tests for S-expression serialization and file loading."""

import json

import pytest

from gatsyntax import (
    DisabledReferenceError,
    Err,
    Name,
    Ok,
    Syntax,
    UnknownConstructorError,
    dumps,
    loads,
    parse_json_sexpr,
    to_json_sexpr,
)
from gatsyntax.load import load_expr_from_file
from gatsyntax.result import unwrap
from gatsyntax.theories import cartesian_category_theory, category_theory


@pytest.fixture
def cat() -> Syntax:
    return Syntax(category_theory())


def test_encoding(cat: Syntax) -> None:
    A, B, C = cat.Ob("A"), cat.Ob("B"), cat.Ob("C")
    f, g = cat.Hom("f", A, B), cat.Hom("g", B, C)
    assert to_json_sexpr(A) == ["Ob", "A"]
    assert to_json_sexpr(cat.id(A)) == ["id", ["Ob", "A"]]
    assert to_json_sexpr(cat.compose(f, g)) == [
        "compose",
        ["Hom", "f", ["Ob", "A"], ["Ob", "B"]],
        ["Hom", "g", ["Ob", "B"], ["Ob", "C"]],
    ]


def test_encoding_leaf_values(cat: Syntax) -> None:
    assert to_json_sexpr(cat.Ob(None)) == ["Ob", None]
    assert to_json_sexpr(cat.Ob(3)) == ["Ob", 3]
    assert to_json_sexpr(cat.Ob(True)) == ["Ob", True]
    assert to_json_sexpr(cat.Ob(2.5)) == ["Ob", 2.5]


def test_round_trip_category(cat: Syntax) -> None:
    A, B, C = cat.Ob("A"), cat.Ob("B"), cat.Ob("C")
    f, g = cat.Hom("f", A, B), cat.Hom("g", B, C)
    for e in [A, f, cat.id(A), cat.compose(f, g), cat.compose(cat.id(A), cat.compose(f, g))]:
        restored = parse_json_sexpr(cat, to_json_sexpr(e))
        assert restored == e
        assert restored.type_args == e.type_args
        assert restored.gat_type == e.gat_type


def test_round_trip_cartesian() -> None:
    X = Syntax(cartesian_category_theory())
    A, B = X.Ob("A"), X.Ob("B")
    f = X.Hom("f", A, B)
    exprs = [
        X.munit(),
        X.otimes(A, B),
        X.otimes(f, X.id(A)),
        X.braid(A, B),
        X.delete(A),
        X.pair(f, f),
        X.compose(X.proj1(A, B), f),
    ]
    for e in exprs:
        assert parse_json_sexpr(X, to_json_sexpr(e)) == e


def test_round_trip_none_and_numbers(cat: Syntax) -> None:
    for e in [cat.Ob(None), cat.Ob(1), cat.Hom(2, cat.Ob(0), cat.Ob(1))]:
        assert parse_json_sexpr(cat, to_json_sexpr(e)) == e
    assert parse_json_sexpr(cat, ["Ob", None]).value is None


def test_symbols(cat: Syntax) -> None:
    A = parse_json_sexpr(cat, ["Ob", "A"])
    assert isinstance(A.value, Name)
    assert A.value == "A"

    A = parse_json_sexpr(cat, ["Ob", "A"], symbols=False)
    assert type(A.value) is str


def test_parse_value(cat: Syntax) -> None:
    upper = parse_json_sexpr(cat, ["id", ["Ob", "a"]], parse_value=str.upper)
    assert upper == cat.id(cat.Ob("A"))


def test_parse_head(cat: Syntax) -> None:
    heads = {"∘": "compose", "Obj": "Ob"}
    sexpr = ["∘", ["id", ["Obj", "A"]], ["id", ["Obj", "A"]]]
    A = cat.Ob("A")
    restored = parse_json_sexpr(cat, sexpr, parse_head=lambda h: heads.get(h, h))
    assert restored == cat.compose(cat.id(A), cat.id(A))


def test_by_reference(cat: Syntax) -> None:
    A, B, C = cat.Ob("A"), cat.Ob("B"), cat.Ob("C")
    f, g = cat.Hom("f", A, B), cat.Hom("g", B, C)
    named = {"f": f, "g": g}

    sexpr = to_json_sexpr(cat.compose(f, g), by_reference=lambda v: v in named)
    assert sexpr == ["compose", "f", "g"]

    restored = parse_json_sexpr(cat, sexpr, parse_reference=named.__getitem__)
    assert restored == cat.compose(f, g)
    assert restored.type_args == (A, C)


def test_references_disabled_by_default(cat: Syntax) -> None:
    with pytest.raises(DisabledReferenceError) as exc_info:
        parse_json_sexpr(cat, ["compose", "f", "g"])
    assert str(exc_info.value) == "Loading terms by name is disabled (got reference 'f')"


def test_unknown_head(cat: Syntax) -> None:
    with pytest.raises(UnknownConstructorError):
        parse_json_sexpr(cat, ["otimes", ["Ob", "A"], ["Ob", "B"]])


def test_malformed(cat: Syntax) -> None:
    with pytest.raises(ValueError):
        parse_json_sexpr(cat, ["id", []])
    with pytest.raises(TypeError):
        parse_json_sexpr(cat, ["compose", ["Ob", "A"], ["Ob", "B"]])


def test_dumps_loads(cat: Syntax) -> None:
    A = cat.Ob("A")
    f = cat.Hom("f", A, A)
    e = cat.compose(f, cat.id(A))
    s = dumps(e)
    assert json.loads(s) == to_json_sexpr(e)
    assert loads(cat, s) == e


# ---------------------------------------------------------------------------
# Files
# ---------------------------------------------------------------------------


def test_load_expr_from_file(cat: Syntax, tmp_path) -> None:
    A = cat.Ob("A")
    e = cat.id(A)
    path = tmp_path / "expr.json"
    path.write_text(dumps(e))

    result = load_expr_from_file(path, cat)
    assert isinstance(result, Ok)
    assert result.value == e
    assert unwrap(result) == e


def test_load_expr_errors(cat: Syntax, tmp_path) -> None:
    missing = load_expr_from_file(tmp_path / "missing.json", cat)
    assert isinstance(missing, Err)
    assert isinstance(missing.error, OSError)

    cases = {
        "bad.json": ("{not json", ValueError),
        "unknown.json": ('["tensor", ["Ob", "A"]]', UnknownConstructorError),
        "ill_typed.json": ('["id", ["Hom", "f", ["Ob", "A"], ["Ob", "A"]]]', TypeError),
        "reference.json": ('["id", "A"]', DisabledReferenceError),
    }
    for filename, (text, error_type) in cases.items():
        path = tmp_path / filename
        path.write_text(text)
        result = load_expr_from_file(path, cat)
        assert isinstance(result, Err), filename
        assert isinstance(result.error, error_type), filename
        with pytest.raises(error_type):
            unwrap(result)
