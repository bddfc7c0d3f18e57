"""Constructing ESOP forms of a Boolean function."""
import esop.constructors as cst
import esop.esop as _esop
import esop.synthesis as syn
from esop.truth_table import TruthTable


BITS = '01111111111101010111111101010011'
CARE = '11111111111111111111111111111111'


def example_pprm_and_pkrm():
    f = TruthTable.from_binary_string(BITS)
    pprm = cst.esop_from_pprm(f)
    pkrm = cst.esop_from_optimum_pkrm(f)
    print(f'PPRM with {len(pprm)} cubes:')
    print(_esop.esop_to_expr(pprm))
    print(f'ESOP from PKRM with {len(pkrm)} cubes:')
    for s in _esop.esop_to_cubes(pkrm, f.num_vars):
        print(s)
    assert _esop.verify_esop(pkrm, BITS, CARE)


def example_exact_synthesis():
    config = dict(maximum_cubes=10, one_esop=False)
    esops = syn.exact_synthesis_from_binary_string(
        BITS, CARE, config)
    print(f'{len(esops)} minimum ESOPs:')
    for esop in esops:
        print(_esop.esop_to_expr(esop))


if __name__ == '__main__':
    example_pprm_and_pkrm()
    example_exact_synthesis()
