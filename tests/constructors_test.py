"""Test the module `esop.constructors`."""
import logging
import random

import pytest

from esop import constructors as cst
from esop.cube import Cube
from esop.esop import verify_esop
from esop.truth_table import TruthTable


log = logging.getLogger(__name__)
logger = logging.getLogger('esop')
logger.setLevel(logging.ERROR)


BITS = '01111111111101010111111101010011'


def all_functions(num_vars):
    """Yield every truth table over `num_vars` variables."""
    for bits in range(2**2**num_vars):
        yield TruthTable(num_vars, bits)


def random_functions(num_vars, n, seed=0):
    rng = random.Random(seed)
    for _ in range(n):
        bits = rng.getrandbits(2**num_vars)
        yield TruthTable(num_vars, bits)


def cube_set(*strings):
    return {Cube.from_string(s) for s in strings}


def test_constants():
    for num_vars in range(4):
        f = TruthTable.const0(num_vars)
        assert cst.esop_from_pprm(f) == list()
        assert cst.esop_from_optimum_pkrm(f) == list()
        f = TruthTable.const1(num_vars)
        assert cst.esop_from_pprm(f) == [Cube()]
        assert cst.esop_from_optimum_pkrm(f) == [Cube()]


def test_add_to_cubes_cancels():
    c = Cube.from_string('1-0')
    for merging in (True, False):
        cubes = dict()
        cst.add_to_cubes(cubes, c, merging)
        assert list(cubes) == [c], cubes
        cst.add_to_cubes(cubes, c, merging)
        assert not cubes, cubes


def test_add_to_cubes_merges():
    cubes = dict()
    cst.add_to_cubes(cubes, Cube.from_string('1-'))
    cst.add_to_cubes(cubes, Cube.from_string('0-'))
    assert list(cubes) == [Cube()], cubes
    # the merged cube cancels
    cst.add_to_cubes(cubes, Cube())
    assert not cubes, cubes
    # without merging
    cubes = dict()
    cst.add_to_cubes(cubes, Cube.from_string('1-'), False)
    cst.add_to_cubes(cubes, Cube.from_string('0-'), False)
    assert set(cubes) == cube_set('1-', '0-'), cubes


def test_add_to_cubes_merges_first_found():
    # both members are at distance 1 from `00`,
    # the one inserted first is merged
    cubes = dict()
    cst.add_to_cubes(cubes, Cube.from_string('10'))
    cst.add_to_cubes(cubes, Cube.from_string('01'))
    cst.add_to_cubes(cubes, Cube.from_string('00'))
    r = list(cubes)
    r_ = [Cube.from_string('01'), Cube.from_string('-0')]
    assert r == r_, r
    # reverse insertion order
    cubes = dict()
    cst.add_to_cubes(cubes, Cube.from_string('01'))
    cst.add_to_cubes(cubes, Cube.from_string('10'))
    cst.add_to_cubes(cubes, Cube.from_string('00'))
    r = list(cubes)
    r_ = [Cube.from_string('10'), Cube.from_string('0-')]
    assert r == r_, r


def test_find_pkrm_expansions():
    # ties between positive Davio and the others
    # prefer positive Davio
    f = TruthTable.from_binary_string('1010')  # ~ x0
    cache = dict()
    cost = cst.find_pkrm_expansions(f, cache, 0)
    assert cost == 1, cost
    r = cache[f]
    assert r == cst.Expansion(1, cst.Decomposition.POSITIVE_DAVIO), r
    # ties between negative Davio and Shannon
    # prefer negative Davio
    f = TruthTable.from_binary_string('0101')  # x0
    cache = dict()
    cost = cst.find_pkrm_expansions(f, cache, 0)
    assert cost == 1, cost
    r = cache[f]
    assert r == cst.Expansion(1, cst.Decomposition.NEGATIVE_DAVIO), r
    # multiplexer `x0 ? x2 : x1`
    f = TruthTable.from_binary_string('00100111')
    cache = dict()
    cost = cst.find_pkrm_expansions(f, cache, 0)
    assert cost == 2, cost
    r = cache[f]
    assert r.kind is cst.Decomposition.SHANNON, r
    # constants are not cached
    cache = dict()
    cost = cst.find_pkrm_expansions(TruthTable.const1(3), cache, 0)
    assert cost == 1, cost
    assert not cache, cache


def test_expansion_cache_keyed_by_content():
    # both cofactors of `x1` w.r.t. `x0` equal `x1`
    f = TruthTable.from_binary_string('0011')
    cache = dict()
    cost = cst.find_pkrm_expansions(f, cache, 0)
    assert cost == 1, cost
    assert len(cache) == 1, cache
    # the entry computed for the variable `x1` is kept
    r = cache[f]
    assert r.kind is cst.Decomposition.NEGATIVE_DAVIO, r
    esop = cst.esop_from_optimum_pkrm(f)
    assert esop == [Cube.from_string('-1')], esop


def test_optimum_pkrm_needs_cache():
    f = TruthTable.from_binary_string('0110')
    with pytest.raises(AssertionError):
        cst.optimum_pkrm_rec(dict(), f, dict(), 0, Cube())


def test_optimum_pkrm_small():
    f = TruthTable.from_binary_string('1010')
    esop = cst.esop_from_optimum_pkrm(f)
    assert esop == [Cube.from_string('0')], esop
    f = TruthTable.from_binary_string('0101')
    esop = cst.esop_from_optimum_pkrm(f)
    assert esop == [Cube.from_string('1')], esop
    f = TruthTable.from_binary_string('00100111')
    esop = cst.esop_from_optimum_pkrm(f)
    esop_ = [Cube.from_string('01-'), Cube.from_string('1-1')]
    assert esop == esop_, esop


def test_pprm_small():
    f = TruthTable.from_binary_string('0110')  # x0 ^ x1
    esop = cst.esop_from_pprm(f)
    assert set(esop) == cube_set('1-', '-1'), esop
    f = TruthTable.from_binary_string('0111')  # x0 \/ x1
    esop = cst.esop_from_pprm(f)
    assert set(esop) == cube_set('1-', '-1', '11'), esop
    f = TruthTable.from_binary_string('1010')  # ~ x0
    esop = cst.esop_from_pprm(f)
    assert set(esop) == cube_set('--', '1-'), esop
    # PPRMs have only positive literals
    for f in random_functions(4, 20):
        for cube in cst.esop_from_pprm(f):
            assert cube.bits == cube.mask, cube


def test_all_functions_of_three_variables():
    num_vars = 3
    for f in all_functions(num_vars):
        pprm = cst.esop_from_pprm(f)
        pkrm = cst.esop_from_optimum_pkrm(f)
        assert TruthTable.from_esop(pprm, num_vars) == f, (f, pprm)
        assert TruthTable.from_esop(pkrm, num_vars) == f, (f, pkrm)
        assert (not pprm) == f.is_const0(), (f, pprm)
        # no repeated cubes
        assert len(set(pprm)) == len(pprm), pprm
        assert len(set(pkrm)) == len(pkrm), pkrm


def test_random_functions():
    num_vars = 5
    care = '1' * 2**num_vars
    for f in random_functions(num_vars, 30):
        bits = f.to_binary_string()
        pprm = cst.esop_from_pprm(f)
        pkrm = cst.esop_from_optimum_pkrm(f)
        assert verify_esop(pprm, bits, care), (f, pprm)
        assert verify_esop(pkrm, bits, care), (f, pkrm)


def test_pkrm_of_example_function():
    f = TruthTable.from_binary_string(BITS)
    care = '1' * len(BITS)
    pkrm = cst.esop_from_optimum_pkrm(f)
    pprm = cst.esop_from_pprm(f)
    assert verify_esop(pkrm, BITS, care), pkrm
    assert verify_esop(pprm, BITS, care), pprm
    # the minimum ESOP of this function has 5 cubes
    assert 5 <= len(pkrm) <= len(pprm), (pkrm, pprm)
    # deterministic
    assert cst.esop_from_optimum_pkrm(f) == pkrm


def test_pkrm_larger_than_pprm():
    # `x0 ^ (x1 /\ x2)`: the cost recorded for a Davio expansion
    # counts the cofactor that is not emitted, so the
    # reconstruction emits more cubes than the cost
    f = TruthTable.from_binary_string('01010110')
    cache = dict()
    cost = cst.find_pkrm_expansions(f, cache, 0)
    assert cost == 2, cost
    pkrm = cst.esop_from_optimum_pkrm(f)
    assert set(pkrm) == cube_set('-0-', '-10', '0--'), pkrm
    assert len(pkrm) == 3, pkrm
    pprm = cst.esop_from_pprm(f)
    assert set(pprm) == cube_set('1--', '-11'), pprm
    assert TruthTable.from_esop(pkrm, 3) == f, pkrm
