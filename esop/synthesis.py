"""Exact synthesis of ESOP forms using a SAT solver.

The function is given as a bit string and a care string
(see `esop.esop`), so it can be incompletely specified.
For a number `k` of cubes, the question "is there an ESOP
with `k` cubes that equals the function on the care set ?"
is encoded in CNF and answered by a solver from `pysat`.

Encoding, for cube `j` and variable `i`:

- `pos[j, i]`: the cube contains `x_i`
- `neg[j, i]`: the cube contains `~ x_i`

and at most one of the two holds. For each care
assignment `m`, the variable `z[j, m]` holds iff cube `j`
contains `m`, and the XOR of `z[0, m], ..., z[k - 1, m]`
equals `bits[m]`. The cubes are strictly ordered
lexicographically, so each ESOP has exactly one model
(over the `pos`, `neg` variables), and no cube repeats.

```python
from esop import synthesis

s = synthesis.Spec('0110', '1111')
synth = synthesis.MinimumSynthesizer(s)
params = synthesis.MinimumSynthesizerParams(
    begin=1,
    next=lambda k, sat: None if sat else k + 1)
esop = synth.synthesize(params)
```
"""
# Copyright 2026 by the esop developers
# All rights reserved. Licensed under 3-clause BSD.
#
import logging

from pysat.formula import CNF
from pysat.formula import IDPool
from pysat.solvers import Solver

from esop.cube import Cube
from esop import esop as _esop


log = logging.getLogger(__name__)
DEFAULT_CONFIG = dict(
    maximum_cubes=10,
    one_esop=True,
    solver='g3')


class Spec(object):
    """Function to synthesize, as bit and care strings.

    Raises `ValueError` if the strings are malformed.
    """

    def __init__(self, bits, care):
        self.num_vars = _esop.check_binary_strings(bits, care)
        self.bits = bits
        self.care = care

    def care_minterms(self):
        """Return `list` of assignments in the care set."""
        return [i for i, c in enumerate(self.care) if c == '1']

    def is_const0(self):
        """Return `True` if `bits` is 0 on the care set."""
        return all(
            self.bits[i] == '0' for i in self.care_minterms())

    def __repr__(self):
        return f"Spec('{self.bits}', '{self.care}')"


class SimpleSynthesizerParams(object):
    """Parameters of `SimpleSynthesizer.synthesize`."""

    def __init__(self, number_of_terms=0):
        self.number_of_terms = number_of_terms


class SimpleSynthesizer(object):
    """Find an ESOP with a given number of cubes.

    ```python
    synth = SimpleSynthesizer(Spec(bits, care))
    params = SimpleSynthesizerParams(number_of_terms=5)
    esop = synth.synthesize(params)
    ```
    """

    def __init__(self, spec, solver=DEFAULT_CONFIG['solver']):
        self.spec = spec
        self.solver = solver

    def synthesize(self, params):
        """Return ESOP with `params.number_of_terms` cubes.

        Return an empty `list` if there is no such ESOP.
        For `number_of_terms == 0` the empty `list` is also the
        ESOP of a function that is 0 on the care set, so check
        `Spec.is_const0` to tell the two apart.
        """
        k = params.number_of_terms
        if k < 0:
            raise ValueError(f'negative number of terms: {k}')
        if k == 0:
            return list()
        esops = _solve(self.spec, k, self.solver, one_esop=True)
        if not esops:
            return list()
        esop, = esops
        return esop


class MinimumSynthesizerParams(object):
    """Parameters of `MinimumSynthesizer.synthesize`.

    @param begin: first number of cubes to try
    @param next: callable `(bound, sat)` that returns
        the next number of cubes to try, or `None` to stop.
        `sat` is `True` if an ESOP was found with `bound` cubes.
    """

    def __init__(self, begin=1, next=None):
        if next is None:
            next = _search_upward
        self.begin = begin
        self.next = next


class MinimumSynthesizer(object):
    """Search for an ESOP with the fewest cubes.

    The search direction is decided by the `next` function
    of the parameters. Each step calls `SimpleSynthesizer`.
    """

    def __init__(self, spec, solver=DEFAULT_CONFIG['solver']):
        self.spec = spec
        self._simple = SimpleSynthesizer(spec, solver)

    def synthesize(self, params):
        """Return the last ESOP found, or an empty `list`.

        Returns the empty ESOP at once if the function
        is 0 on the care set.
        """
        if self.spec.is_const0():
            log.info('constant 0 on care set')
            return list()
        log.info('---- minimum synthesis ----')
        best = list()
        bound = params.begin
        while bound is not None:
            esop = self._simple.synthesize(
                SimpleSynthesizerParams(number_of_terms=bound))
            sat = bool(esop)
            log.info(
                f'{bound} terms: '
                f'{"SAT" if sat else "UNSAT"}')
            if sat:
                best = esop
            bound = params.next(bound, sat)
        log.info('==== minimum synthesis ====')
        return best


def _search_upward(bound, sat):
    """Return `bound + 1` until satisfiable."""
    if sat:
        return None
    return bound + 1


def exact_synthesis_from_binary_string(bits, care, config=None):
    """Return ESOPs with fewest cubes, as `list`.

    Tries `1, 2, ...` cubes, up to `config['maximum_cubes']`.
    At the first number of cubes that suffices, returns
    one ESOP if `config['one_esop']`, else all ESOPs
    with that many cubes.

    Returns `[[]]` if the function is 0 on the care set,
    and `[]` if more than `maximum_cubes` cubes are needed.

    @param config: `dict` with keys among those of
        `DEFAULT_CONFIG`
    @rtype: `list` of `list` of `Cube`
    """
    config = _make_config(config)
    spec = Spec(bits, care)
    if spec.is_const0():
        log.info('constant 0 on care set')
        return [list()]
    log.info('---- exact synthesis ----')
    esops = list()
    for k in range(1, config['maximum_cubes'] + 1):
        esops = _solve(
            spec, k, config['solver'], config['one_esop'])
        if esops:
            log.info(f'{len(esops)} ESOPs with {k} cubes')
            break
    log.info('==== exact synthesis ====')
    return esops


def _make_config(config):
    """Return `DEFAULT_CONFIG` updated with `config`."""
    d = dict(DEFAULT_CONFIG)
    if config is None:
        return d
    unknown = set(config).difference(d)
    if unknown:
        raise ValueError(
            f'unknown configuration keys: {unknown}')
    d.update(config)
    if d['maximum_cubes'] < 0:
        raise ValueError(d['maximum_cubes'])
    return d


def _solve(spec, k, solver_name, one_esop):
    """Return `list` of ESOPs with `k` cubes for `spec`."""
    pool = IDPool()
    cnf = _encode(spec, k, pool)
    log.debug(
        f'{k} cubes: {pool.top} variables, '
        f'{len(cnf.clauses)} clauses')
    esops = list()
    with Solver(name=solver_name, bootstrap_with=cnf.clauses) as solver:
        while solver.solve():
            model = set(solver.get_model())
            esop = _decode(model, k, spec.num_vars, pool)
            assert _esop.verify_esop(esop, spec.bits, spec.care), esop
            esops.append(esop)
            if one_esop:
                break
            clause = _blocking_clause(model, k, spec.num_vars, pool)
            # no variables, so no other ESOP
            if not clause:
                break
            solver.add_clause(clause)
    return esops


def _encode(spec, k, pool):
    """Return `CNF` of ESOPs with `k` cubes."""
    n = spec.num_vars
    cnf = CNF()
    for j in range(k):
        for i in range(n):
            cnf.append([-_pos(pool, j, i), -_neg(pool, j, i)])
    for m in spec.care_minterms():
        for j in range(k):
            _encode_contains(cnf, pool, j, m, n)
        parity = _encode_parity(cnf, pool, k, m)
        if spec.bits[m] == '1':
            cnf.append([parity])
        else:
            cnf.append([-parity])
    for j in range(k - 1):
        _encode_less(cnf, pool, j, n)
    return cnf


def _encode_contains(cnf, pool, j, m, n):
    """Add `z[j, m] <=> (cube j contains assignment m)`."""
    z = pool.id(('z', j, m))
    # literals of cube `j` that are false at `m`
    conflicts = list()
    for i in range(n):
        if (m >> i) & 1:
            conflicts.append(_neg(pool, j, i))
        else:
            conflicts.append(_pos(pool, j, i))
    for u in conflicts:
        cnf.append([-z, -u])
    cnf.append([z] + conflicts)


def _encode_parity(cnf, pool, k, m):
    """Return variable of `z[0, m] ^ ... ^ z[k - 1, m]`."""
    acc = pool.id(('z', 0, m))
    for j in range(1, k):
        z = pool.id(('z', j, m))
        y = pool.id(('xor', j, m))
        cnf.extend([
            [-y, acc, z],
            [-y, -acc, -z],
            [y, -acc, z],
            [y, acc, -z]])
        acc = y
    return acc


def _encode_less(cnf, pool, j, n):
    """Add constraint that cube `j` precedes cube `j + 1`.

    The cubes are compared as bit vectors
    `pos[j, 0], neg[j, 0], pos[j, 1], ...`.
    The variable `eq[j, t]` is implied when the
    first `t` bits are equal.
    """
    a = list()
    b = list()
    for i in range(n):
        a.extend([_pos(pool, j, i), _neg(pool, j, i)])
        b.extend([_pos(pool, j + 1, i), _neg(pool, j + 1, i)])
    eq = [pool.id(('eq', j, t)) for t in range(len(a) + 1)]
    cnf.append([eq[0]])
    for t, (x, y) in enumerate(zip(a, b)):
        # equal prefix implies `x <= y`
        cnf.append([-eq[t], -x, y])
        # equal prefix and equal bits imply longer equal prefix
        cnf.append([-eq[t], -x, -y, eq[t + 1]])
        cnf.append([-eq[t], x, y, eq[t + 1]])
    cnf.append([-eq[-1]])


def _decode(model, k, n, pool):
    """Return ESOP from satisfying assignment `model`.

    @param model: `set` of literals
    """
    esop = list()
    for j in range(k):
        cube = Cube()
        for i in range(n):
            if _pos(pool, j, i) in model:
                cube = cube.with_literal(i, True)
            elif _neg(pool, j, i) in model:
                cube = cube.with_literal(i, False)
        esop.append(cube)
    return esop


def _blocking_clause(model, k, n, pool):
    """Return clause that excludes the ESOP of `model`."""
    clause = list()
    for j in range(k):
        for i in range(n):
            for u in (_pos(pool, j, i), _neg(pool, j, i)):
                clause.append(-u if u in model else u)
    return clause


def _pos(pool, j, i):
    return pool.id(('pos', j, i))


def _neg(pool, j, i):
    return pool.id(('neg', j, i))
