from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from ..core.constraint_system import Circuit, ConstraintSystem, SynthesisError

@dataclass
class EmptyCircuit(Circuit):
    """Allocates nothing; the export is just the constant's padding row."""

    def synthesize(self, cs: ConstraintSystem) -> None:
        pass

@dataclass
class MultiplyCircuit(Circuit):
    """x * y = pub, with x, y private and pub public."""
    x: Optional[int] = None
    y: Optional[int] = None

    def synthesize(self, cs: ConstraintSystem) -> None:
        x = cs.allocate_auxiliary(lambda: "x", lambda: self._need(self.x))
        y = cs.allocate_auxiliary(lambda: "y", lambda: self._need(self.y))
        pub = cs.allocate_input(lambda: "pub", lambda: self._need(self.x) * self._need(self.y))
        cs.enforce(lambda: "x * y = pub", lambda lc: lc + x, lambda lc: lc + y, lambda lc: lc + pub)

    @staticmethod
    def _need(v):
        if v is None:
            raise SynthesisError("assignment missing")
        return v

@dataclass
class CubicCircuit(Circuit):
    """
    x^3 + x + 5 = out, flattened to
      x * x = sq
      sq * x = cube
      (cube + x + 5) * 1 = out
    """
    x: Optional[int] = None

    def synthesize(self, cs: ConstraintSystem) -> None:
        one = cs.one()
        x = cs.allocate_auxiliary(lambda: "x", lambda: self.x)
        sq = cs.allocate_auxiliary(lambda: "sq", lambda: self.x * self.x)
        cube = cs.allocate_auxiliary(lambda: "cube", lambda: self.x ** 3)
        out = cs.allocate_input(lambda: "out", lambda: self.x ** 3 + self.x + 5)

        cs.enforce(lambda: "square", lambda lc: lc + x, lambda lc: lc + x, lambda lc: lc + sq)
        cs.enforce(lambda: "cube", lambda lc: lc + sq, lambda lc: lc + x, lambda lc: lc + cube)
        cs.enforce(lambda: "sum",
                   lambda lc: lc + cube + x + (5, one),
                   lambda lc: lc + one,
                   lambda lc: lc + out)

@dataclass
class BitsCircuit(Circuit):
    """Decompose a public value into n_bits boolean aux wires."""
    n_bits: int = 8
    value: Optional[int] = None

    def synthesize(self, cs: ConstraintSystem) -> None:
        one = cs.one()
        packed = cs.allocate_input(lambda: "packed", lambda: self.value)
        bits = []
        for i in range(self.n_bits):
            with cs.namespace(lambda i=i: f"bit {i}") as ns:
                b = ns.allocate_auxiliary(lambda: "b", lambda i=i: (self.value >> i) & 1)
                # b * (1 - b) = 0
                ns.enforce(lambda: "boolean",
                           lambda lc, b=b: lc + b,
                           lambda lc, b=b: lc + one - b,
                           lambda lc: lc)
                bits.append(b)

        def weighted(lc):
            for i, b in enumerate(bits):
                lc = lc + (1 << i, b)
            return lc
        cs.enforce(lambda: "pack", weighted, lambda lc: lc + one, lambda lc: lc + packed)

@dataclass
class FailingCircuit(Circuit):
    """Allocates a wire and then gives up."""
    message: str = "cannot synthesize circuit"

    def synthesize(self, cs: ConstraintSystem) -> None:
        cs.allocate_auxiliary(lambda: "dangling")
        raise SynthesisError(self.message)

CIRCUITS: Dict[str, Callable[[], Circuit]] = {
    "empty": EmptyCircuit,
    "multiply": MultiplyCircuit,
    "cubic": CubicCircuit,
    "bits": BitsCircuit,
    "failing": FailingCircuit,
}
