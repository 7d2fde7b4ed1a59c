"""Tri-state per-rank estimate used by every belief cell.

A cell is one of:

  Unknown(x)   -- expected count, fractional mass accumulated from draws
  Known(n)     -- exact count, fully observed
  MoreThan(n)  -- proven lower bound on the count

Combination is *not* ordinary arithmetic once variants differ. The rules
below are asymmetric on purpose: once either operand carries exact or
bounded information, addition never falls back to an estimate, and
subtracting a bound from an estimate snaps to that bound.

Addition (self + other):

            Unknown(y)      Known(y)        MoreThan(y)
  Unknown   Unknown(x+y)    MoreThan(y)     MoreThan(y)
  Known     MoreThan(x)     Known(x+y)      MoreThan(x+y)
  MoreThan  MoreThan(x)     MoreThan(x+y)   MoreThan(x+y)

Subtraction (self - other), integer legs saturate at 0:

            Unknown(y)      Known(y)        MoreThan(y)
  Unknown   Unknown(x-y)    Unknown(x-y)    MoreThan(y)
  Known     Known(x)        Known(x-y)      MoreThan(x-y)
  MoreThan  MoreThan(x)     MoreThan(x-y)   MoreThan(x-y)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Unknown:
    x: float = 0.0

    def value(self) -> float:
        return float(self.x)

    def __add__(self, other: "Probability") -> "Probability":
        return combine_add(self, other)

    def __sub__(self, other: "Probability") -> "Probability":
        return combine_sub(self, other)


@dataclass(frozen=True)
class Known:
    n: int = 0

    def value(self) -> float:
        return float(self.n)

    def __add__(self, other: "Probability") -> "Probability":
        return combine_add(self, other)

    def __sub__(self, other: "Probability") -> "Probability":
        return combine_sub(self, other)


@dataclass(frozen=True)
class MoreThan:
    n: int = 0

    def value(self) -> float:
        return float(self.n)

    def __add__(self, other: "Probability") -> "Probability":
        return combine_add(self, other)

    def __sub__(self, other: "Probability") -> "Probability":
        return combine_sub(self, other)


Probability = Union[Unknown, Known, MoreThan]


def _saturating_sub(a: int, b: int) -> int:
    return a - b if a > b else 0


def _unsupported(op: str, a: object, b: object) -> TypeError:
    return TypeError(
        f"Cannot {op} {type(a).__name__} and {type(b).__name__}"
    )


def combine_add(a: Probability, b: Probability) -> Probability:
    """Combine two cells under the addition table."""
    if isinstance(a, Unknown):
        if isinstance(b, Unknown):
            return Unknown(a.x + b.x)
        if isinstance(b, Known):
            return MoreThan(b.n)
        if isinstance(b, MoreThan):
            return MoreThan(b.n)
    elif isinstance(a, Known):
        if isinstance(b, Unknown):
            return MoreThan(a.n)
        if isinstance(b, Known):
            return Known(a.n + b.n)
        if isinstance(b, MoreThan):
            return MoreThan(a.n + b.n)
    elif isinstance(a, MoreThan):
        if isinstance(b, Unknown):
            return MoreThan(a.n)
        if isinstance(b, (Known, MoreThan)):
            return MoreThan(a.n + b.n)
    raise _unsupported("add", a, b)


def combine_sub(a: Probability, b: Probability) -> Probability:
    """Combine two cells under the subtraction table. Never negative."""
    if isinstance(a, Unknown):
        if isinstance(b, Unknown):
            return Unknown(max(a.x - b.x, 0.0))
        if isinstance(b, Known):
            return Unknown(max(a.x - b.n, 0.0))
        if isinstance(b, MoreThan):
            return MoreThan(b.n)
    elif isinstance(a, Known):
        if isinstance(b, Unknown):
            return Known(a.n)
        if isinstance(b, Known):
            return Known(_saturating_sub(a.n, b.n))
        if isinstance(b, MoreThan):
            return MoreThan(_saturating_sub(a.n, b.n))
    elif isinstance(a, MoreThan):
        if isinstance(b, Unknown):
            return MoreThan(a.n)
        if isinstance(b, (Known, MoreThan)):
            return MoreThan(_saturating_sub(a.n, b.n))
    raise _unsupported("subtract", a, b)


def state_tag(p: Probability) -> float:
    """Feature tag for a cell: -1 Unknown, 0 Known, 1 MoreThan."""
    if isinstance(p, Unknown):
        return -1.0
    if isinstance(p, Known):
        return 0.0
    if isinstance(p, MoreThan):
        return 1.0
    raise TypeError(f"Not a probability cell: {p!r}")


def to_dict(p: Probability) -> dict:
    """JSON-friendly form: {"type": ..., "value": ...}."""
    return {"type": type(p).__name__, "value": p.value()}
