import pytest

from rawr1cs.core.raw_circuit import RawCircuit
from rawr1cs.core.constraint_system import ConstraintSystem
from rawr1cs.core.variables import Variable, LinearCombination, INPUT, AUX, ONE

def _boom():
    raise AssertionError("thunk must not be called")

def test_allocation_indices_per_kind():
    cs = RawCircuit()
    a0 = cs.allocate_auxiliary()
    i0 = cs.allocate_input()
    a1 = cs.allocate_auxiliary()
    i1 = cs.allocate_input()
    assert (a0, a1) == (Variable(AUX, 0), Variable(AUX, 1))
    assert (i0, i1) == (Variable(INPUT, 0), Variable(INPUT, 1))
    assert cs.num_aux == 2 and cs.num_inputs == 2
    for m in "ABC":
        assert cs.aux_columns[m] == [[], []]
        assert cs.input_columns[m] == [[], []]

def test_thunks_never_invoked():
    cs = RawCircuit()
    x = cs.allocate_auxiliary(_boom, _boom)
    cs.allocate_input(_boom, _boom)
    cs.push_namespace(_boom)
    cs.enforce(_boom, lambda lc: lc + x, lambda lc: lc, lambda lc: lc)
    cs.pop_namespace()
    with cs.namespace(_boom) as ns:
        assert ns is cs
        ns.allocate_auxiliary(_boom, _boom)
    assert cs.num_aux == 2
    assert cs.num_constraints == 1

def test_root_is_self():
    cs = RawCircuit()
    assert cs.root() is cs
    assert isinstance(cs, ConstraintSystem)
    assert cs.one() == ONE == Variable(INPUT, 0)

def test_counts_before_padding():
    cs = RawCircuit()
    ins = [cs.allocate_input() for _ in range(3)]
    aux = [cs.allocate_auxiliary() for _ in range(5)]
    for k in range(4):
        cs.enforce(None, lambda lc, k=k: lc + aux[k], lambda lc: lc + ins[0], lambda lc: lc + aux[k + 1])
    assert len(cs.constraints) == 4 == cs.num_constraints
    assert len(cs.input_columns["A"]) == 3
    assert len(cs.aux_columns["A"]) == 5

def test_row_and_column_consistency_with_duplicates():
    cs = RawCircuit()
    one = cs.allocate_input()
    x = cs.allocate_auxiliary()
    y = cs.allocate_auxiliary()
    cs.enforce(None, lambda lc: lc + x + x, lambda lc: lc + (3, y), lambda lc: lc + one)
    cs.enforce(None, lambda lc: lc + (7, y), lambda lc: lc - x, lambda lc: lc)

    assert cs.lc_a[0] == LinearCombination(((1, x), (1, x)))
    assert cs.column(x, "A") == [(1, 0), (1, 0)]
    assert cs.column(y, "B") == [(3, 0)]
    assert cs.column(y, "A") == [(7, 1)]
    assert cs.column(x, "B") == [(-1, 1)]
    assert cs.column(one, "C") == [(1, 0)]
    assert cs.column(one, "A") == []

    # every row term has a ledger entry with the same multiplicity
    for row, abc in enumerate(cs.constraints):
        for m, lc in zip("ABC", abc):
            for coeff, var in lc:
                expected = sum(1 for t in lc if t == (coeff, var))
                assert cs.column(var, m).count((coeff, row)) == expected

def test_linear_combination_building():
    x, y = Variable(AUX, 0), Variable(AUX, 1)
    lc = LinearCombination.zero() + x - y + (4, x) - (2, y)
    assert list(lc) == [(1, x), (-1, y), (4, x), (-2, y)]
    assert len(lc) == 4
    both = lc + (LinearCombination.zero() + ONE)
    assert list(both)[-1] == (1, ONE)
    assert repr(LinearCombination.zero() + (5, ONE) + y) == "[(5, Input(0)), (1, Aux(1))]"
    with pytest.raises(TypeError):
        LinearCombination.zero() + "x"
