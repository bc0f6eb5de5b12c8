from functools import wraps
import math
import sys


NAN = math.nan

# Width of the integer view used by every bitwise operation.
WIDTH = 64
MASK = (1 << WIDTH) - 1


class CalcError(Exception):
    '''
    Base of everything the calculator reports as a diagnostic.

    Never escapes an evaluation; see diagnosed.
    '''
    FMT = '{0}'

    def __init__(self, *args):
        super().__init__(type(self).FMT.format(*args), *args)

    def __str__(self):
        return self.args[0]


class UndefinedIdentifier(CalcError, KeyError):
    FMT = 'undefined: {0}'


class UnknownFunction(CalcError, KeyError):
    FMT = 'unknown function: {0}'


class CalcSyntaxError(CalcError):
    FMT = 'syntax error'


def warn(*args):
    '''
    Write a diagnostic line.
    '''
    print(*args, file=sys.stderr)


def report(error):
    '''
    Print error as a diagnostic and return the not-a-number sentinel.
    '''
    warn(error)
    return NAN


def diagnosed(f):
    '''
    Decorator that converts calculator errors to diagnostics.

    The wrapped call yields NaN instead of raising, so evaluation carries on
    and the NaN propagates through the surrounding arithmetic.
    '''
    @wraps(f)
    def wrapper(*args, **kwargs):
        try:
            return f(*args, **kwargs)
        except CalcError as e:
            return report(e)
    return wrapper


def u64(value):
    '''
    Truncate a finite float toward zero, keeping the low 64 bits.

    Values of 2**64 and up saturate at the all ones pattern: no double lies
    between 2**64 - 2048 and 2**64, so float(MASK) is already 2**64.
    '''
    if value > MASK:
        return MASK
    return int(value) & MASK


def bitwise(f):
    '''
    Decorator for operations on the 64-bit integer view of floats.

    Arguments are truncated with u64, the integer result converted back to a
    float. Any non-finite argument makes the result NaN.
    '''
    @wraps(f)
    def wrapper(*args):
        if not all(map(math.isfinite, args)):
            return NAN
        return float(f(*map(u64, args)))
    return wrapper
