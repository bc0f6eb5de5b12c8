from enum import Enum
import math

from .util import u64


class Format(Enum):
    '''
    Base a result is printed in.
    '''
    DEC = 'dec'
    HEX = 'hex'
    BIN = 'bin'
    OCT = 'oct'


# Below this magnitude an integral double prints without a fraction.
INTEGRAL_LIMIT = 1e15
PRECISION = 12


def decimal(value):
    if abs(value) < INTEGRAL_LIMIT and value == math.floor(value):
        return '%.0f' % value
    return '%.{0}g'.format(PRECISION) % value


def render(value, fmt=Format.DEC):
    '''
    Return value as text in fmt, or None for NaN, which is never printed.

    Hex, octal and binary show the 64-bit integer view of value. Infinities
    have no such view and always render in decimal.
    '''
    if math.isnan(value):
        return None
    if fmt is Format.DEC or not math.isfinite(value):
        return decimal(value)
    n = u64(value)
    if fmt is Format.HEX:
        return '0x%X' % n
    elif fmt is Format.OCT:
        return '0o%o' % n
    return '0b' + format(n, 'b')
