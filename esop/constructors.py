"""Construction of ESOP forms from truth tables.

An ESOP is returned as a `list` of `Cube`s,
and represents the XOR of those cubes.


References
==========

Rolf Drechsler
    "Pseudo-Kronecker expressions for symmetric functions"
    IEEE Transactions on Computers
    Vol.48, No.9, pp.987--990, 1999
"""
# Copyright 2026 by the esop developers
# All rights reserved. Licensed under 3-clause BSD.
#
import collections
import enum
import logging

from esop.cube import Cube


log = logging.getLogger(__name__)


class Decomposition(enum.Enum):
    """Expansion of a function with respect to one variable."""

    POSITIVE_DAVIO = 'positive_davio'
    NEGATIVE_DAVIO = 'negative_davio'
    SHANNON = 'shannon'


Expansion = collections.namedtuple('Expansion', ['cost', 'kind'])


def esop_from_optimum_pkrm(tt):
    """Return ESOP from optimum PKRM of truth table `tt`.

    Computes the pseudo-Kronecker Reed-Muller expression
    with the fewest cubes (Drechsler 1999), then merges
    distance-1 cubes while adding them.

    @type tt: `TruthTable`
    @rtype: `list` of `Cube`
    """
    log.info('---- optimum PKRM ----')
    cubes = dict()
    cache = dict()
    cost = find_pkrm_expansions(tt, cache, 0)
    log.debug(
        f'PKRM cost: {cost}, '
        f'{len(cache)} cached expansions')
    optimum_pkrm_rec(cubes, tt, cache, 0, Cube())
    esop = list(cubes)
    log.debug(f'{len(esop)} cubes after merging')
    log.info('==== optimum PKRM ====')
    return esop


def esop_from_pprm(tt):
    """Return positive-polarity Reed-Muller form of `tt`.

    Applies the positive Davio expansion at every variable.
    Cubes are only cancelled, not merged, so the result
    is canonical.

    @type tt: `TruthTable`
    @rtype: `list` of `Cube`
    """
    log.info('---- PPRM ----')
    cubes = dict()
    esop_from_pprm_rec(cubes, tt, 0, Cube())
    esop = list(cubes)
    log.debug(f'{len(esop)} cubes in PPRM')
    log.info('==== PPRM ====')
    return esop


def find_pkrm_expansions(tt, cache, var_index=0):
    """Return number of cubes of optimum PKRM of `tt`.

    Adds to `cache` the expansion chosen for `tt` and
    for each subfunction that is not constant.

    The cache is keyed by truth table alone, so
    `var_index` must increase by one at each level,
    starting from the same index for all entries.

    @param cache: `dict` that maps `TruthTable`
        to `Expansion`
    @param var_index: variable to expand
    """
    if tt.is_const0():
        return 0
    if tt.is_const1():
        return 1
    if tt in cache:
        return cache[tt].cost
    tt0 = tt.cofactor0(var_index)
    tt1 = tt.cofactor1(var_index)
    ex0 = find_pkrm_expansions(tt0, cache, var_index + 1)
    ex1 = find_pkrm_expansions(tt1, cache, var_index + 1)
    ex2 = find_pkrm_expansions(tt0 ^ tt1, cache, var_index + 1)
    # each expansion uses two of the three subfunctions,
    # so omit the most expensive one
    ex_max = max(ex0, ex1, ex2)
    if ex_max == ex0:
        r = Expansion(ex1 + ex2, Decomposition.POSITIVE_DAVIO)
    elif ex_max == ex1:
        r = Expansion(ex0 + ex2, Decomposition.NEGATIVE_DAVIO)
    else:
        r = Expansion(ex0 + ex1, Decomposition.SHANNON)
    # an entry added below, when `tt` does not depend
    # on `var_index`, is kept
    cache.setdefault(tt, r)
    return r.cost


def optimum_pkrm_rec(cubes, tt, cache, var_index, cube):
    """Add to `cubes` the expansion of `tt` recorded in `cache`.

    Call `find_pkrm_expansions` first, with the same
    `var_index`.

    @param cubes: `dict` with `Cube` keys, used as
        an ordered set
    @param cube: conjunction of the literals above `tt`
    """
    if tt.is_const0():
        return
    if tt.is_const1():
        add_to_cubes(cubes, cube)
        return
    p = cache.get(tt)
    if p is None:
        raise AssertionError(
            f'no expansion cached for {tt!r} '
            f'at variable {var_index}')
    tt0 = tt.cofactor0(var_index)
    tt1 = tt.cofactor1(var_index)
    if p.kind is Decomposition.POSITIVE_DAVIO:
        optimum_pkrm_rec(
            cubes, tt0, cache, var_index + 1, cube)
        optimum_pkrm_rec(
            cubes, tt0 ^ tt1, cache, var_index + 1,
            cube.with_literal(var_index, True))
    elif p.kind is Decomposition.NEGATIVE_DAVIO:
        optimum_pkrm_rec(
            cubes, tt1, cache, var_index + 1, cube)
        optimum_pkrm_rec(
            cubes, tt0 ^ tt1, cache, var_index + 1,
            cube.with_literal(var_index, False))
    elif p.kind is Decomposition.SHANNON:
        optimum_pkrm_rec(
            cubes, tt0, cache, var_index + 1,
            cube.with_literal(var_index, False))
        optimum_pkrm_rec(
            cubes, tt1, cache, var_index + 1,
            cube.with_literal(var_index, True))
    else:
        raise AssertionError(p.kind)


def esop_from_pprm_rec(cubes, tt, var_index, cube):
    """Add to `cubes` the positive Davio expansion of `tt`."""
    if tt.is_const0():
        return
    if tt.is_const1():
        # cancel, but do not merge
        add_to_cubes(cubes, cube, distance_one_merging=False)
        return
    tt0 = tt.cofactor0(var_index)
    tt1 = tt.cofactor1(var_index)
    esop_from_pprm_rec(cubes, tt0, var_index + 1, cube)
    esop_from_pprm_rec(
        cubes, tt0 ^ tt1, var_index + 1,
        cube.with_literal(var_index, True))


def add_to_cubes(cubes, cube, distance_one_merging=True):
    """XOR `cube` into the set `cubes`.

    If `cube` is in `cubes`, then the two cancel.
    Otherwise, if `distance_one_merging`, then the first
    member at distance 1 (in insertion order) is removed,
    and merged with `cube`. The merged cube is added
    in the same way. Otherwise `cube` is added.

    The result depends on the order of insertion.

    @param cubes: `dict` with `Cube` keys, used as
        an ordered set
    """
    if cube in cubes:
        del cubes[cube]
        return
    if distance_one_merging:
        other = next(
            (c for c in cubes if cube.distance(c) == 1),
            None)
        if other is not None:
            new_cube = cube.merge(other)
            del cubes[other]
            add_to_cubes(cubes, new_cube)
            return
    cubes[cube] = None
