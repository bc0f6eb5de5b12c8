'''
Operators and named functions.

Floating operations go through numpy so they behave like IEEE doubles:
division by zero, domain errors and overflow give inf or NaN rather than
raising. Bitwise ones work on the 64-bit integer view, see util.bitwise.
'''

import math

import numpy

from .environment import UNITS
from .formatter import Format
from .util import WIDTH, MASK, bitwise


def _unary(f):
    '''
    Wrap a one-argument numpy ufunc to take and return plain floats.
    '''
    def wrapped(x):
        with numpy.errstate(all='ignore'):
            return float(f(x))
    wrapped.__doc__ = f.__doc__
    wrapped.__name__ = f.__name__
    return wrapped


def _binary(f):
    '''
    Wrap a two-argument numpy ufunc to take and return plain floats.
    '''
    def wrapped(left, right):
        with numpy.errstate(all='ignore'):
            return float(f(left, right))
    wrapped.__doc__ = f.__doc__
    wrapped.__name__ = f.__name__
    return wrapped


def c_round(x):
    '''
    Round half away from zero.
    '''
    if not math.isfinite(x):
        return x
    whole = float(math.trunc(x))
    if abs(x - whole) >= 0.5:
        whole += math.copysign(1.0, x)
    return whole


@bitwise
def shl(n, count):
    # Counts come in as 64-bit views too, so negative ones land here as well.
    return (n << count) & MASK if count < WIDTH else 0


@bitwise
def shr(n, count):
    return n >> count if count < WIDTH else 0


@bitwise
def band(left, right):
    return left & right


@bitwise
def bor(left, right):
    return left | right


@bitwise
def bxor(left, right):
    return left ^ right


def _complement(width):
    mask = (1 << width) - 1

    @bitwise
    def complement(n):
        return ~n & mask
    complement.__name__ = 'not{0}'.format(width)
    return complement


bnot = _complement(WIDTH)


@bitwise
def popcount(n):
    return bin(n).count('1')


@bitwise
def clz(n):
    return WIDTH - n.bit_length()


@bitwise
def ctz(n):
    return (n & -n).bit_length() - 1 if n else WIDTH


def _to_unit(size):
    def convert(x):
        return x / size
    return convert


def _selector(fmt):
    '''
    Make a function that returns its argument and sets machine's format.

    These are bound to the calling machine before being applied.
    '''
    def select(machine, x):
        machine.storeofmt(fmt)
        return x
    select.__name__ = fmt.value
    return select


# Binary operators of the expression grammar. Unary minus and plus are
# plain float negation; ~ is bnot.
OPERATORS = {
    '+': _binary(numpy.add),
    '-': _binary(numpy.subtract),
    '*': _binary(numpy.multiply),
    '/': _binary(numpy.divide),
    # Sign follows the dividend.
    '%': _binary(numpy.fmod),
    '^': _binary(numpy.power),
    '<<': shl,
    '>>': shr,
    '&': band,
    '|': bor,
}

SELECTORS = {
    fmt.value: _selector(fmt)
    for fmt
    in Format
}

UNARY = {
    # Trigonometric
    'sin': _unary(numpy.sin),
    'cos': _unary(numpy.cos),
    'tan': _unary(numpy.tan),
    'asin': _unary(numpy.arcsin),
    'acos': _unary(numpy.arccos),
    'atan': _unary(numpy.arctan),
    'sinh': _unary(numpy.sinh),
    'cosh': _unary(numpy.cosh),
    'tanh': _unary(numpy.tanh),

    # Exponential and logarithmic
    'exp': _unary(numpy.exp),
    'log': _unary(numpy.log),
    'ln': _unary(numpy.log),
    'log10': _unary(numpy.log10),
    'log2': _unary(numpy.log2),

    # Roots and rounding
    'sqrt': _unary(numpy.sqrt),
    'cbrt': _unary(numpy.cbrt),
    'abs': _unary(numpy.fabs),
    'floor': _unary(numpy.floor),
    'ceil': _unary(numpy.ceil),
    'round': c_round,

    # Bitwise
    'bnot': bnot,
    'not8': _complement(8),
    'not16': _complement(16),
    'not32': _complement(32),
    'popcount': popcount,
    'clz': clz,
    'ctz': ctz,
}
UNARY.update(SELECTORS)
# toKiB, toMiB, ..., and their all lowercase aliases.
for _name, _size in UNITS.items():
    UNARY['to' + _name] = UNARY['to' + _name.lower()] = _to_unit(_size)

BINARY = {
    'pow': _binary(numpy.power),
    'mod': _binary(numpy.fmod),
    'atan2': _binary(numpy.arctan2),
    # NaN only when both are NaN, like C fmax/fmin.
    'max': _binary(numpy.fmax),
    'min': _binary(numpy.fmin),
    'bxor': bxor,
    'band': band,
    'bor': bor,
    'shl': shl,
    'shr': shr,
}

# By number of arguments.
TABLES = {
    1: UNARY,
    2: BINARY,
}
