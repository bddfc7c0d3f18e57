"""Operations on ESOP forms.

An ESOP is a `list` of `Cube`s, read as the XOR of its cubes.
The empty list is `FALSE`, and `[Cube()]` is `TRUE`.

Bit strings describe (possibly incompletely specified)
functions: character `i` is the value at the assignment
whose binary encoding is `i`. A care string marks with `1`
the assignments where the value matters.
"""
# Copyright 2026 by the esop developers
# All rights reserved. Licensed under 3-clause BSD.
#
import logging

try:
    import dd.cudd as _bdd
except ImportError:
    import dd.autoref as _bdd
import natsort

from esop.cube import VAR_PREFIX
from esop.truth_table import num_vars_of_length


log = logging.getLogger(__name__)


def verify_esop(esop, bits, care):
    """Return `True` if `esop` equals `bits` where `care`.

    Both the ESOP and the function given by `bits`
    are represented as BDDs, and compared within
    the care set.

    @param esop: `list` of `Cube`
    @param bits, care: `str` of `0` and `1`,
        of equal length, a power of 2
    """
    num_vars = check_binary_strings(bits, care)
    names = variable_names(num_vars)
    for cube in esop:
        if cube.mask >> num_vars:
            log.warning(
                f'cube {cube} depends on variables '
                f'beyond the {num_vars} specified ones')
            return False
    bdd = _bdd.BDD()
    bdd.declare(*names)
    f = minterms_to_bdd(bits, bdd, names)
    care_set = minterms_to_bdd(care, bdd, names)
    u = esop_to_bdd(esop, bdd, names)
    r = (u & care_set) == (f & care_set)
    if not r and log.getEffectiveLevel() <= logging.DEBUG:
        diff = bdd.apply('xor', u, f) & care_set
        log.debug(
            'ESOP differs from the function at: '
            f'{list(bdd.pick_iter(diff, names))}')
    return r


def check_binary_strings(bits, care):
    """Return number of variables, or raise `ValueError`.

    Checks that `bits` and `care` have equal length,
    a power of 2, and contain only `0` and `1`.
    """
    if len(bits) != len(care):
        raise ValueError(
            'bit string and care string differ in length: '
            f'{len(bits)} and {len(care)}')
    for s in (bits, care):
        if not set(s).issubset('01'):
            raise ValueError(
                f'expected only `0` and `1`, got: "{s}"')
    return num_vars_of_length(len(bits))


def variable_names(num_vars):
    """Return `list` of names `x0, x1, ...`."""
    return [f'{VAR_PREFIX}{i}' for i in range(num_vars)]


def cube_to_bdd(cube, bdd, names):
    """Return BDD of the conjunction `cube`."""
    d = {names[var]: polarity for var, polarity in cube.literals()}
    return bdd.cube(d)


def esop_to_bdd(esop, bdd, names):
    """Return BDD of the XOR of the cubes in `esop`.

    @param names: `list` of variable names
        declared in `bdd`, indexed by variable
    """
    u = bdd.false
    for cube in esop:
        u = bdd.apply('xor', u, cube_to_bdd(cube, bdd, names))
    return u


def minterms_to_bdd(bits, bdd, names):
    """Return BDD of assignments `i` where `bits[i] == '1'`."""
    u = bdd.false
    for i, char in enumerate(bits):
        if char != '1':
            continue
        d = {name: bool((i >> var) & 1)
             for var, name in enumerate(names)}
        u |= bdd.cube(d)
    return u


def esop_to_expr(esop, names=None):
    r"""Return `str` of the XOR of the cubes in `esop`.

    Each cube becomes a conjunction in parentheses,
    for example `(x0 /\ ~ x1) ^ (x2)`.
    The cubes are listed in natural sort order.
    The result can be parsed by `dd` (`BDD.add_expr`).
    """
    if not esop:
        return 'FALSE'
    terms = natsort.natsorted(
        cube.to_expr(names) for cube in esop)
    return ' ^ '.join(f'({s})' for s in terms)


def esop_to_cubes(esop, num_vars):
    """Return `list` of cubes as `str` over `'1', '0', '-'`."""
    return [cube.to_string(num_vars) for cube in esop]


def number_of_literals(esop):
    """Return total number of literals in the cubes."""
    return sum(cube.num_literals() for cube in esop)
