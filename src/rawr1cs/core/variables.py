from __future__ import annotations
from dataclasses import dataclass
from typing import Iterator, Tuple, Union

INPUT = "input"
AUX = "aux"

@dataclass(frozen=True)
class Variable:
    kind: str   # INPUT or AUX
    index: int

    def __repr__(self) -> str:
        return f"{'Input' if self.kind == INPUT else 'Aux'}({self.index})"

Term = Tuple[int, Variable]

# the constant wire, allocated by the driver before any circuit logic
ONE = Variable(INPUT, 0)

@dataclass(frozen=True)
class LinearCombination:
    """
    Ordered sum of (coeff, Variable) terms.
    Terms are appended as given: repeated variables stay as separate terms
    and must be read additively.
    """
    terms: Tuple[Term, ...] = ()

    @classmethod
    def zero(cls) -> "LinearCombination":
        return cls()

    def _extend(self, other, sign: int) -> "LinearCombination":
        if isinstance(other, Variable):
            new = ((sign, other),)
        elif isinstance(other, LinearCombination):
            new = tuple((sign * c, v) for c, v in other.terms)
        elif isinstance(other, tuple) and len(other) == 2 and isinstance(other[1], Variable):
            new = ((sign * other[0], other[1]),)
        else:
            return NotImplemented
        return LinearCombination(self.terms + new)

    def __add__(self, other: Union[Variable, Term, "LinearCombination"]) -> "LinearCombination":
        return self._extend(other, 1)

    def __sub__(self, other: Union[Variable, Term, "LinearCombination"]) -> "LinearCombination":
        return self._extend(other, -1)

    def __iter__(self) -> Iterator[Term]:
        return iter(self.terms)

    def __len__(self) -> int:
        return len(self.terms)

    def __repr__(self) -> str:
        return "[" + ", ".join(f"({c}, {v!r})" for c, v in self.terms) + "]"
