'''
Function registry tests
'''

import math

from termcalc.functions import BINARY, UNARY, SELECTORS, c_round
from termcalc.util import MASK

from pytest import approx, mark


@mark.parametrize('line, value', [
    ('band(0xFF, 0x0F)', 15),
    ('bxor(0xF0, 0xFF)', 15),
    ('bor(0xF0, 0x0F)', 255),
    ('shl(1, 4)', 16),
    ('shr(256, 4)', 16),
    ('not8(0xF0)', 15),
    ('not8(0x1F0)', 15),
    ('not16(0)', 0xFFFF),
    ('not32(0xFFFF0000)', 0xFFFF),
    ('bnot(0)', float(MASK)),
    ('popcount(0xFF)', 8),
    ('popcount(0)', 0),
    ('clz(0)', 64),
    ('ctz(0)', 64),
    ('clz(1)', 63),
    ('ctz(8)', 3),
    ('clz(0.5)', 64),
    ('clz(1 << 63)', 0),
])
def test_bitwise(evaluate, line, value):
    assert evaluate(line) == value


@mark.parametrize('line, value', [
    ('pow(2, 10)', 1024),
    ('mod(7, 3)', 1),
    ('mod(-7, 3)', -1),
    ('max(1, 2)', 2),
    ('min(1, 2)', 1),
    ('max(0/0, 2)', 2),
    ('sqrt(16)', 4),
    ('cbrt(-27)', -3),
    ('abs(-2.5)', 2.5),
    ('floor(-1.5)', -2),
    ('ceil(1.2)', 2),
    ('round(2.5)', 3),
    ('round(-2.5)', -3),
    ('round(1.4)', 1),
    ('log10(1000)', 3),
    ('log2(1024)', 10),
    ('ln(1)', 0),
    ('exp(0)', 1),
    ('sin(0)', 0),
    ('cos(0)', 1),
    ('tanh(0)', 0),
])
def test_math(evaluate, line, value):
    assert evaluate(line) == approx(value)


def test_trigonometry(evaluate):
    assert evaluate('atan2(1, 1)') == approx(math.pi / 4)
    assert evaluate('asin(1)') == approx(math.pi / 2)
    assert evaluate('acos(-1)') == approx(math.pi)
    assert evaluate('atan(1) * 4') == approx(math.pi)
    assert evaluate('tan(pi/4)') == approx(1)
    assert evaluate('sinh(1) - cosh(1)') == approx(-math.exp(-1))
    assert evaluate('log(e)') == approx(1)


def test_domain_errors_are_nan(evaluate, capsys):
    assert math.isnan(evaluate('sqrt(-1)'))
    assert math.isnan(evaluate('asin(2)'))
    assert math.isnan(evaluate('log(-1)'))
    assert math.isnan(evaluate('pow(-8, 1/3)'))
    # No diagnostics; NaN is the whole story.
    assert capsys.readouterr().err == ''


def test_poles_and_overflow_are_infinite(evaluate):
    assert evaluate('log(0)') == -math.inf
    assert evaluate('exp(1000)') == math.inf
    assert evaluate('10^400') == math.inf
    assert evaluate('pow(0, -1)') == math.inf


def test_c_round():
    assert c_round(0.5) == 1
    assert c_round(-0.5) == -1
    assert c_round(0.49999999999999994) == 0
    assert c_round(math.inf) == math.inf
    assert math.isnan(c_round(math.nan))


def test_unit_aliases():
    for name in 'KiB', 'MiB', 'GiB', 'TiB', 'KB', 'MB', 'GB', 'TB':
        assert UNARY['to' + name] is UNARY['to' + name.lower()]


def test_selectors_are_unary_only():
    assert set(SELECTORS) == {'hex', 'bin', 'oct', 'dec'}
    assert set(SELECTORS) <= set(UNARY)
    assert not set(SELECTORS) & set(BINARY)


def test_selectors_return_argument(evaluate):
    assert evaluate('hex(255)') == 255
    assert evaluate('bin(2.5)') == 2.5
    assert evaluate('oct(-1)') == -1
    assert evaluate('dec(7)') == 7


@mark.parametrize('line, value', [
    ('popcount(~0)', 64),
    ('~0 & 0xFF', 0xFF),
    ('clz(~0)', 0),
    ('not8(~0)', 0),
    ('band(1e30, 0xF)', 0xF),
    ('~-1', 0),
])
def test_beyond_64_bits_saturates(evaluate, line, value):
    assert evaluate(line) == value


def test_hex_of_all_ones(machine):
    value = machine.evaluate('hex(~0)')
    assert machine.format(value) == '0x' + 'F' * 16
