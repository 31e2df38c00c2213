"""Runtime terms of a syntax system.

An `Expr` is a node in a typed expression tree:

  - `head`       the term constructor that built it, or "generator"
  - `args`       the arguments, in declaration order
  - `type_args`  the parameters of its type, e.g. (A, B) for f : A → B
  - `gat_type`   the type constructor of its type, e.g. "Hom"

Generators are the leaves. Their first argument is the wrapped raw value
(a name, a number, anything, or None) and the rest are the parameters of
their type, so Hom("f", A, B) has args ("f", A, B) and type_args (A, B).

Two expressions are equal when head, args and type_args are equal.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

GENERATOR = "generator"


class ExprKind(Enum):
    GENERATOR = "generator"
    COMPOUND = "compound"


@dataclass(frozen=True)
class Expr:
    head: str
    args: tuple[Any, ...]
    type_args: tuple[Expr, ...] = ()
    gat_type: str = field(default="", compare=False)

    @property
    def kind(self) -> ExprKind:
        return ExprKind.GENERATOR if self.head == GENERATOR else ExprKind.COMPOUND

    @property
    def is_generator(self) -> bool:
        return self.head == GENERATOR

    @property
    def first(self) -> Any:
        return self.args[0]

    @property
    def last(self) -> Any:
        return self.args[-1]

    @property
    def value(self) -> Any:
        """The raw value wrapped by a generator."""
        if not self.is_generator:
            raise TypeError(f"{self.head}(...) is not a generator")
        return self.args[0]

    @property
    def name(self) -> str | None:
        """Name of a generator as text; None if it wraps no value."""
        value = self.value
        return None if value is None else str(value)

    @property
    def constructor_name(self) -> str:
        """Name under which the expression can be rebuilt by `invoke_term`."""
        return self.gat_type if self.is_generator else self.head

    def __str__(self) -> str:
        if self.is_generator:
            return repr(None) if self.value is None else str(self.value)
        return f"{self.head}({','.join(str(a) for a in self.args)})"
