"""Truth tables of completely specified Boolean functions.

A truth table over `n` variables is stored as an `int`
with `2**n` bits. Bit `i` is the value of the function
at the assignment whose binary encoding is `i`,
so variable `v` takes the value of bit `v` of `i`.

```python
from esop.truth_table import TruthTable

f = TruthTable.from_binary_string('0110')  # x0 ^ x1
g = f.cofactor0(0)  # x1, as a function of 2 variables
```
"""
# Copyright 2026 by the esop developers
# All rights reserved. Licensed under 3-clause BSD.
#
import functools


class TruthTable(object):
    """Immutable truth table with value semantics.

    Two truth tables are equal if they have the same
    number of variables and the same bits.
    Equal truth tables have equal hashes, so they can
    be used as keys of `dict`s.
    """

    __slots__ = ('_num_vars', '_bits')

    def __init__(self, num_vars, bits=0):
        if num_vars < 0:
            raise ValueError(
                f'negative number of variables: {num_vars}')
        if bits < 0 or bits > _full_mask(num_vars):
            raise ValueError(
                f'bits {bits} out of range for '
                f'{num_vars} variables')
        self._num_vars = num_vars
        self._bits = bits

    @property
    def num_vars(self):
        return self._num_vars

    @property
    def bits(self):
        return self._bits

    @classmethod
    def from_binary_string(cls, s):
        """Return truth table from `str` of `0` and `1`.

        Character `i` of `s` is the value at assignment `i`.
        The length of `s` must be a power of 2.
        """
        num_vars = num_vars_of_length(len(s))
        if not set(s).issubset('01'):
            raise ValueError(
                f'expected only `0` and `1`, got: "{s}"')
        # `int` reads the most significant digit first
        bits = int(s[::-1], 2)
        return cls(num_vars, bits)

    @classmethod
    def from_esop(cls, esop, num_vars):
        """Return the XOR of the cubes in `esop`."""
        bits = 0
        for i in range(2**num_vars):
            value = False
            for cube in esop:
                value ^= cube.evaluate(i)
            if value:
                bits |= 1 << i
        return cls(num_vars, bits)

    @classmethod
    def nth_var(cls, num_vars, var):
        """Return the projection function of `var`."""
        _assert_var(var, num_vars)
        return cls(num_vars, _var_mask(num_vars, var))

    @classmethod
    def const0(cls, num_vars):
        return cls(num_vars, 0)

    @classmethod
    def const1(cls, num_vars):
        return cls(num_vars, _full_mask(num_vars))

    def to_binary_string(self):
        """Inverse of `from_binary_string`."""
        n = 2**self._num_vars
        s = format(self._bits, f'0{n}b')
        return s[::-1]

    def cofactor0(self, var):
        """Return the function with `var` fixed to 0.

        The result has as many variables as `self`,
        and does not depend on `var`.
        """
        _assert_var(var, self._num_vars)
        low = self._bits & ~ _var_mask(self._num_vars, var)
        shift = 1 << var
        return TruthTable(self._num_vars, low | (low << shift))

    def cofactor1(self, var):
        """Return the function with `var` fixed to 1."""
        _assert_var(var, self._num_vars)
        high = self._bits & _var_mask(self._num_vars, var)
        shift = 1 << var
        return TruthTable(self._num_vars, high | (high >> shift))

    def is_const0(self):
        return self._bits == 0

    def is_const1(self):
        return self._bits == _full_mask(self._num_vars)

    def count_ones(self):
        return bin(self._bits).count('1')

    def get_bit(self, i):
        if i < 0 or i >= 2**self._num_vars:
            raise IndexError(i)
        return (self._bits >> i) & 1 == 1

    def depends_on(self, var):
        """Return `True` if the cofactors of `var` differ."""
        return self.cofactor0(var) != self.cofactor1(var)

    def __eq__(self, other):
        if not isinstance(other, TruthTable):
            return NotImplemented
        return (
            self._num_vars == other._num_vars and
            self._bits == other._bits)

    def __hash__(self):
        return hash((self._num_vars, self._bits))

    def __xor__(self, other):
        self._assert_same_width(other)
        return TruthTable(self._num_vars, self._bits ^ other._bits)

    def __and__(self, other):
        self._assert_same_width(other)
        return TruthTable(self._num_vars, self._bits & other._bits)

    def __or__(self, other):
        self._assert_same_width(other)
        return TruthTable(self._num_vars, self._bits | other._bits)

    def __invert__(self):
        bits = _full_mask(self._num_vars) & ~ self._bits
        return TruthTable(self._num_vars, bits)

    def __len__(self):
        return 2**self._num_vars

    def __repr__(self):
        return (
            f'TruthTable({self._num_vars}, '
            f"'{self.to_binary_string()}')")

    def _assert_same_width(self, other):
        if self._num_vars != other._num_vars:
            raise ValueError(
                'truth tables of different widths: '
                f'{self._num_vars} and {other._num_vars}')


def num_vars_of_length(length):
    """Return `n` such that `length == 2**n`.

    Raise `ValueError` if `length` is not a power of 2.
    """
    if length < 1 or length & (length - 1):
        raise ValueError(
            f'length {length} is not a power of 2')
    return length.bit_length() - 1


def _assert_var(var, num_vars):
    if var < 0 or var >= num_vars:
        raise ValueError(
            f'variable index {var} out of range '
            f'for {num_vars} variables')


@functools.lru_cache(maxsize=None)
def _full_mask(num_vars):
    return (1 << 2**num_vars) - 1


@functools.lru_cache(maxsize=None)
def _var_mask(num_vars, var):
    """Return bits of the assignments where `var` is 1."""
    width = 1 << var
    # one period: `width` zeros, then `width` ones
    period = ((1 << width) - 1) << width
    mask = 0
    for k in range(0, 2**num_vars, 2 * width):
        mask |= period << k
    return mask
