"""Error types raised by syntax systems, instances and the serializer."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .check import Diagnostic


class GATError(Exception):
    """Base class for gatsyntax errors."""


class SyntaxDomainError(GATError):
    """A term constructor's equations failed under strict validation."""

    def __init__(self, constructor: str, args: Sequence[Any]) -> None:
        self.constructor = constructor
        self.arguments = tuple(args)
        super().__init__(constructor, self.arguments)

    def __str__(self) -> str:
        shown = ",".join(str(a) for a in self.arguments)
        return f"Domain error in term constructor {self.constructor}({shown})"


class UnknownConstructorError(GATError, LookupError):
    """No constructor of that name exists in the algebra."""

    def __init__(self, algebra: str, name: str) -> None:
        self.algebra = algebra
        self.name = name
        super().__init__(algebra, name)

    def __str__(self) -> str:
        return f"Unknown constructor '{self.name}' in {self.algebra}"


class DisabledReferenceError(GATError):
    """A by-reference leaf was decoded without a reference resolver."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(name)

    def __str__(self) -> str:
        return f"Loading terms by name is disabled (got reference {self.name!r})"


class TheoryError(GATError, ValueError):
    """The theory failed its well-formedness check."""

    def __init__(self, theory: str, diagnostics: Sequence[Diagnostic]) -> None:
        self.theory = theory
        self.diagnostics = tuple(diagnostics)
        super().__init__(theory, self.diagnostics)

    def __str__(self) -> str:
        lines = [f"Theory '{self.theory}' is ill-formed:"]
        for d in self.diagnostics:
            where = f" {d.constructor}:" if d.constructor else ""
            lines.append(f"  - [{d.check}]{where} {d.message}")
        return "\n".join(lines)
