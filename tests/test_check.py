from gatsyntax.check import Severity, check_theory
from gatsyntax.helpers import extend, term, theory, ty
from gatsyntax.theories import ALL_THEORIES, category_theory, monoidal_category_theory
from gatsyntax.theory import TermConstructor, Theory, TypeConstructor
from gatsyntax.terms import App, Var


def checks(th: Theory, severity: Severity = Severity.ERROR) -> set[str]:
    return {d.check for d in check_theory(th).diagnostics if d.severity == severity}


def test_bundled_theories_are_well_formed() -> None:
    for key, factory in ALL_THEORIES.items():
        result = check_theory(factory())
        assert result.is_well_formed, f"{key}: {result.errors}"
        assert result.warnings == (), key


def test_duplicate_type_name() -> None:
    th = theory("Dup", types=[ty("Ob"), ty("Ob")], terms=[])
    assert checks(th) == {"type_name_unique"}


def test_term_named_like_type() -> None:
    th = extend(category_theory(), "Bad", terms=[term("Ob", [("A", "Ob")], "Ob")])
    assert "name_collision" in checks(th)


def test_term_named_like_accessor() -> None:
    th = extend(category_theory(), "Bad", terms=[term("dom", [("A", "Ob")], "Ob")])
    assert "name_collision" in checks(th)


def test_term_named_generator() -> None:
    th = extend(category_theory(), "Bad", terms=[term("generator", [("A", "Ob")], "Ob")])
    result = check_theory(th)
    (d,) = result.errors
    assert d.check == "name_collision"
    assert d.constructor is None
    assert "generator" in d.message


def test_undeclared_type() -> None:
    th = extend(category_theory(), "Bad", terms=[term("twist", [("f", "Arr(A,B)")], "Ob")])
    result = check_theory(th)
    assert not result.is_well_formed
    (d,) = [d for d in result.errors if d.check == "type_resolved"]
    assert d.constructor == "twist"
    assert "Arr" in d.message


def test_unknown_term_in_result_type() -> None:
    th = extend(
        category_theory(),
        "Bad",
        terms=[term("loop", [("A", "Ob")], "Hom(A,tensor(A,A))")],
    )
    assert checks(th) == {"type_resolved"}


def test_param_without_type() -> None:
    cons = TermConstructor(name="id", params=("A",), typ=App("Hom", (Var("A"), Var("A"))))
    th = Theory(name="Bad", types=category_theory().types, terms=(cons,))
    assert "param_in_context" in checks(th)


def test_type_arity() -> None:
    th = extend(category_theory(), "Bad", terms=[term("weird", [("A", "Ob")], "Hom(A)")])
    assert checks(th) == {"type_arity"}


def test_unresolvable_implicit() -> None:
    th = extend(
        category_theory(),
        "Bad",
        terms=[term("pick", [("A", "Ob")], "Hom(A,B)", implicit=[("B", "Ob")])],
    )
    result = check_theory(th)
    (d,) = result.errors
    assert d.check == "implicit_resolved"
    assert "'B'" in d.message


def test_type_context_mentions_undeclared_variable() -> None:
    bad = TypeConstructor(
        name="Hom",
        params=("dom", "codom"),
        context={"dom": App("Ob"), "codom": App("Ob"), "cell": App("Hom", (Var("X"), Var("Y")))},
    )
    th = Theory(name="Bad", types=(TypeConstructor("Ob", ()), bad), terms=())
    assert checks(th) == {"implicit_resolved"}


def test_nullary_regress() -> None:
    th = theory(
        "Regress",
        types=[ty("Ob"), ty("Pt", [("X", "Ob")])],
        terms=[
            term("star", [], "Pt(base())"),
            term("base", [], "Ob"),
            term("base_pt", [], "Pt(base())"),
        ],
    )
    assert checks(th) == set()

    looping = theory(
        "Regress",
        types=[ty("Ob"), ty("Pt", [("X", "Ob")])],
        terms=[term("pt", [], "Pt(pt())")],
    )
    assert "nullary_regress" in checks(looping)


def test_overload_warnings() -> None:
    th = extend(
        monoidal_category_theory(),
        "Twice",
        terms=[term("otimes", [("A", "Ob"), ("B", "Ob")], "Ob")],
    )
    result = check_theory(th)
    assert result.is_well_formed
    assert [d.check for d in result.warnings] == ["overload_ambiguous"]
    assert result.warnings[0].constructor == "otimes"


def test_shared_accessor_warning() -> None:
    th = extend(category_theory(), "Twocells", types=[ty("Cell", [("dom", "Ob")])])
    assert checks(th, Severity.WARNING) == {"accessor_shared"}
    assert checks(th) == set()


def test_errors_sorted_before_warnings() -> None:
    th = extend(
        category_theory(),
        "Mixed",
        types=[ty("Cell", [("dom", "Ob")])],
        terms=[term("weird", [("A", "Ob")], "Hom(A)")],
    )
    severities = [d.severity for d in check_theory(th).diagnostics]
    assert severities == [Severity.ERROR, Severity.WARNING]
