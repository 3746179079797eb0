from __future__ import annotations
import logging
from typing import Dict, List, Tuple

from .constraint_system import ConstraintSystem, LCBuilder, Thunk
from .variables import INPUT, AUX, LinearCombination, Variable

logger = logging.getLogger(__name__)

MATRICES = ("A", "B", "C")

# per-variable nonzero entries of one matrix: (coeff, constraint index)
Column = List[Tuple[int, int]]

class RawCircuit(ConstraintSystem):
    """
    Structure-only constraint system.

    Records every constraint twice: as rows (the A/B/C combinations, in
    enforce order) and as per-variable columns for each matrix. No values
    are ever computed; value, annotation and namespace thunks are dropped
    without being called.
    """

    def __init__(self):
        self.num_inputs = 0
        self.num_aux = 0
        self.num_constraints = 0
        self.constraints: List[Tuple[LinearCombination, LinearCombination, LinearCombination]] = []
        self.input_columns: Dict[str, List[Column]] = {m: [] for m in MATRICES}
        self.aux_columns: Dict[str, List[Column]] = {m: [] for m in MATRICES}
        logger.debug("created empty recorder")

    def allocate_auxiliary(self, annotation: Thunk = None, value: Thunk = None) -> Variable:
        var = Variable(AUX, self.num_aux)
        self.num_aux += 1
        for m in MATRICES:
            self.aux_columns[m].append([])
        return var

    def allocate_input(self, annotation: Thunk = None, value: Thunk = None) -> Variable:
        var = Variable(INPUT, self.num_inputs)
        self.num_inputs += 1
        for m in MATRICES:
            self.input_columns[m].append([])
        return var

    def enforce(self, annotation: Thunk, a: LCBuilder, b: LCBuilder, c: LCBuilder) -> None:
        row = self.num_constraints
        lcs = (a(LinearCombination.zero()), b(LinearCombination.zero()), c(LinearCombination.zero()))
        self.constraints.append(lcs)
        for m, lc in zip(MATRICES, lcs):
            for coeff, var in lc:
                self.column(var, m).append((coeff, row))
        self.num_constraints += 1

    def push_namespace(self, name: Thunk) -> None:
        pass

    def pop_namespace(self) -> None:
        pass

    def root(self) -> "RawCircuit":
        return self

    def column(self, var: Variable, matrix: str) -> Column:
        ledger = self.input_columns if var.kind == INPUT else self.aux_columns
        return ledger[matrix][var.index]

    @property
    def lc_a(self) -> List[LinearCombination]:
        return [abc[0] for abc in self.constraints]

    @property
    def lc_b(self) -> List[LinearCombination]:
        return [abc[1] for abc in self.constraints]

    @property
    def lc_c(self) -> List[LinearCombination]:
        return [abc[2] for abc in self.constraints]
