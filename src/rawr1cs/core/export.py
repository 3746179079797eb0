from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Union

import click
import numpy as np
from scipy.sparse import csr_matrix

from .constraint_system import Circuit, ConstraintSystem
from .raw_circuit import RawCircuit, Column
from .variables import INPUT, LinearCombination, Variable

logger = logging.getLogger(__name__)

BN254_PRIME = 21888242871839275222246405745257275088548364400416034343698204186575808495617

CircuitLike = Union[Circuit, Callable[[ConstraintSystem], Any]]

@dataclass
class R1CSExport:
    a: List[LinearCombination]
    b: List[LinearCombination]
    c: List[LinearCombination]
    num_inputs: int
    num_aux: int
    # column ledgers, kept for consumers that want the transposed view
    input_columns: Dict[str, List[Column]]
    aux_columns: Dict[str, List[Column]]

    @property
    def num_constraints(self) -> int:
        return len(self.a)

    @property
    def num_vars(self) -> int:
        return self.num_inputs + self.num_aux

    def wire(self, var: Variable) -> int:
        """Flat wire index: inputs first (constant at 0), then aux."""
        return var.index if var.kind == INPUT else self.num_inputs + var.index

def record_circuit(circuit: CircuitLike) -> RawCircuit:
    """
    Drive `circuit` against a fresh RawCircuit and add input padding.
    Whatever the circuit raises propagates untouched.
    """
    if isinstance(circuit, type):
        raise TypeError(f"expected a circuit instance or callable, got class {circuit.__name__}")
    cs = RawCircuit()

    # constant "one", always Input(0)
    cs.allocate_input(lambda: "one")

    if isinstance(circuit, Circuit):
        circuit.synthesize(cs)
    else:
        circuit(cs)
    logger.debug("synthesized %d constraints over %d inputs / %d aux",
                 cs.num_constraints, cs.num_inputs, cs.num_aux)

    # input * 0 = 0 for every input, so each one has an A entry
    for i in range(cs.num_inputs):
        var = Variable(INPUT, i)
        cs.enforce(None, lambda lc, v=var: lc + v, lambda lc: lc, lambda lc: lc)
    logger.debug("appended %d padding constraints", cs.num_inputs)
    return cs

def export_circuit(circuit: CircuitLike) -> R1CSExport:
    cs = record_circuit(circuit)
    return R1CSExport(
        a=cs.lc_a, b=cs.lc_b, c=cs.lc_c,
        num_inputs=cs.num_inputs, num_aux=cs.num_aux,
        input_columns=cs.input_columns, aux_columns=cs.aux_columns,
    )

def dump_matrices(ex: R1CSExport, echo: Callable[[str], Any] = click.echo) -> None:
    """Debug dump: a header per matrix, then one line of terms per constraint."""
    for name, rows in (("A", ex.a), ("B", ex.b), ("C", ex.c)):
        echo(f"{name} matrix")
        for lc in rows:
            echo(repr(lc))

def to_r1cs_json(ex: R1CSExport, prime: int = BN254_PRIME) -> Dict[str, Any]:
    """
    snarkjs-style R1CS JSON with terms as {"coeff","var"} lists, so repeated
    variables survive as separate terms.
    """
    if prime < 2:
        raise ValueError(f"prime must be at least 2, got {prime}")

    def terms(lc: LinearCombination):
        return [{"coeff": str(c % prime), "var": ex.wire(v)} for c, v in lc]

    constraints = [[terms(a), terms(b), terms(c)] for a, b, c in zip(ex.a, ex.b, ex.c)]
    n_pub = max(ex.num_inputs - 1, 0)
    return {
        "prime": str(prime),
        "nConstraints": ex.num_constraints,
        "nVars": ex.num_vars,
        "nInputs": n_pub,
        "nPubInputs": n_pub,
        "nOutputs": 0,
        "nAux": ex.num_aux,
        "constraints": constraints,
        "map": list(range(ex.num_vars)),
    }

def pattern_matrices(ex: R1CSExport):
    """0/1 support patterns of A, B, C as CSR (rows=constraints, cols=wires)."""
    shape = (ex.num_constraints, ex.num_vars)
    def build_from(rows: List[LinearCombination]) -> csr_matrix:
        r_idx, c_idx = [], []
        for i, lc in enumerate(rows):
            for _, v in lc:
                r_idx.append(i); c_idx.append(ex.wire(v))
        M = csr_matrix((np.ones(len(r_idx), dtype=np.int8),
                        (np.array(r_idx, dtype=np.int64), np.array(c_idx, dtype=np.int64))),
                       shape=shape)
        # duplicates were summed on construction
        M.data[:] = 1
        return M
    return build_from(ex.a), build_from(ex.b), build_from(ex.c)

def summarize_export(ex: R1CSExport) -> Dict[str, Any]:
    A, B, C = pattern_matrices(ex)
    m = ex.num_constraints
    a_nz = np.diff(A.indptr)
    b_nz = np.diff(B.indptr)
    mult_rows = int(((a_nz > 0) & (b_nz > 0)).sum())
    fanins = np.array([len({v for lc in abc for _, v in lc}) for abc in zip(ex.a, ex.b, ex.c)],
                      dtype=float)
    return {
        "n_constraints": int(m),
        "n_inputs": int(ex.num_inputs),
        "n_aux": int(ex.num_aux),
        "n_vars": int(ex.num_vars),
        "padding_rows": int(ex.num_inputs),
        "multiplicative_rows": mult_rows,
        "linear_rows": int(m - mult_rows),
        "nnz_a": int(A.nnz),
        "nnz_b": int(B.nnz),
        "nnz_c": int(C.nnz),
        "avg_fanin": float(np.mean(fanins)) if fanins.size else 0.0,
    }
