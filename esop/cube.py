"""Cubes, i.e., conjunctions of literals.

A cube is represented by two `int`s:

- `mask`: bit `v` is set if variable `v` occurs in the cube
- `bits`: bit `v` is the polarity of that occurrence
  (1 for `x_v`, 0 for `~ x_v`)

Bits of `bits` outside of `mask` are zero.
The cube with `mask == 0` is the tautology.
"""
# Copyright 2026 by the esop developers
# All rights reserved. Licensed under 3-clause BSD.
#


VAR_PREFIX = 'x'


class Cube(object):
    """Product term over variables `0, 1, 2, ...`."""

    __slots__ = ('_bits', '_mask')

    def __init__(self, bits=0, mask=0):
        if bits & ~ mask:
            raise ValueError(
                f'polarity bits {bits:b} outside of '
                f'care mask {mask:b}')
        self._bits = bits
        self._mask = mask

    @property
    def bits(self):
        return self._bits

    @property
    def mask(self):
        return self._mask

    @classmethod
    def from_literals(cls, literals):
        """Return cube from pairs `(var, polarity)`."""
        c = cls()
        for var, polarity in literals:
            c = c.with_literal(var, polarity)
        return c

    @classmethod
    def from_string(cls, s):
        """Return cube from `str` over `'1', '0', '-'`.

        Character `v` corresponds to variable `v`.
        """
        c = cls()
        for var, char in enumerate(s):
            if char == '1':
                c = c.with_literal(var, True)
            elif char == '0':
                c = c.with_literal(var, False)
            elif char != '-':
                raise ValueError(
                    f'unexpected character "{char}" in cube "{s}"')
        return c

    def with_literal(self, var, polarity):
        """Return a copy of `self` that contains the literal.

        If `var` already occurs, then its polarity is overwritten.
        """
        if var < 0:
            raise ValueError(f'negative variable index: {var}')
        b = 1 << var
        bits = self._bits | b if polarity else self._bits & ~ b
        return Cube(bits, self._mask | b)

    def num_literals(self):
        return bin(self._mask).count('1')

    def literals(self):
        """Return `list` of `(var, polarity)`, sorted by `var`."""
        r = list()
        mask = self._mask
        var = 0
        while mask:
            if mask & 1:
                r.append((var, bool((self._bits >> var) & 1)))
            mask >>= 1
            var += 1
        return r

    def evaluate(self, assignment):
        """Return `True` if `assignment` satisfies the cube.

        @param assignment: `int`, bit `v` is the value of `x_v`
        """
        return (assignment ^ self._bits) & self._mask == 0

    def distance(self, other):
        """Return number of positions where the cubes differ.

        A position differs when both cubes contain the variable
        with opposite polarities, or only one contains it.
        """
        d = (self._bits ^ other._bits) | (self._mask ^ other._mask)
        return bin(d).count('1')

    def merge(self, other):
        r"""Return XOR of two cubes at distance 1, as a cube.

        - `x /\ c` and `~ x /\ c` merge to `c`
        - `x /\ c` and `c` merge to `~ x /\ c`
        """
        d = (self._bits ^ other._bits) | (self._mask ^ other._mask)
        if bin(d).count('1') != 1:
            raise ValueError(
                f'cubes {self!r} and {other!r} are not '
                'at distance 1')
        bits = self._bits ^ (~ other._bits & d)
        mask = self._mask ^ (other._mask & d)
        return Cube(bits, mask)

    def to_string(self, num_vars):
        """Return `str` over `'1', '0', '-'` of length `num_vars`."""
        if self._mask >> num_vars:
            raise ValueError(
                f'cube {self!r} has variables beyond {num_vars}')
        chars = list()
        for var in range(num_vars):
            if not (self._mask >> var) & 1:
                chars.append('-')
            elif (self._bits >> var) & 1:
                chars.append('1')
            else:
                chars.append('0')
        return ''.join(chars)

    def to_expr(self, names=None):
        r"""Return conjunction of literals as `str`.

        The syntax is that of `dd`, for example `x0 /\ ~ x2`.
        The tautology is `TRUE`.

        @param names: `list` of variable names,
            indexed by variable. If `None`, then use
            `VAR_PREFIX` followed by the index.
        """
        terms = list()
        for var, polarity in self.literals():
            if names is None:
                name = f'{VAR_PREFIX}{var}'
            else:
                name = names[var]
            terms.append(name if polarity else f'~ {name}')
        if not terms:
            return 'TRUE'
        return r' /\ '.join(terms)

    def __eq__(self, other):
        if not isinstance(other, Cube):
            return NotImplemented
        return self._bits == other._bits and self._mask == other._mask

    def __hash__(self):
        return hash((self._bits, self._mask))

    def __repr__(self):
        return f'Cube(bits={self._bits:#b}, mask={self._mask:#b})'

    def __str__(self):
        return self.to_expr()
