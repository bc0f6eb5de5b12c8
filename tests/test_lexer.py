'''
Lexer tests
'''

from termcalc.lexer import Cursor, Kind, Lexer, Token
from termcalc.util import MASK

from pytest import mark


def values(line):
    return [token.value for token in Lexer().lex(line)]


def kinds(line):
    return [token.kind for token in Lexer().lex(line)]


@mark.parametrize('line, value', [
    ('42', 42.0),
    ('3.14', 3.14),
    ('1.', 1.0),
    ('.5', 0.5),
    ('1e3', 1000.0),
    ('1e-9', 1e-9),
    ('2E+2', 200.0),
    ('0xFF', 255.0),
    ('0X1a2B', 0x1A2B),
    ('0b1010', 10.0),
    ('0B11110000', 240.0),
    ('0o17', 15.0),
    ('0O755', 0o755),
])
def test_number_literals(line, value):
    assert values(line) == [value]


def test_empty_binary_is_zero():
    assert values('0b') == [0.0]


def test_binary_stops_at_non_binary_digit():
    assert values('0b12') == [1.0, 2.0]


def test_prefix_without_digits_falls_back_to_decimal():
    assert [Token(Kind.NUMBER, 0.0), Token(Kind.IDENTIFIER, 'x')] == \
        list(Lexer().lex('0x'))
    assert values('0og') == [0.0, 'og']


def test_octal_stops_at_eight():
    assert values('0o78') == [7.0, 8.0]


def test_hex_saturates():
    assert values('0x1FFFFFFFFFFFFFFFF') == [float(MASK)]


def test_binary_wraps():
    assert values('0b1' + '0' * 64) == [0.0]


def test_huge_decimal_is_infinite():
    assert values('1e999') == [float('inf')]


def test_exponent_needs_digits():
    assert values('1e') == [1.0, 'e']


def test_operators():
    assert values('+ - * / % = & | ~ , ^') == list('+-*/%=&|~,^')


def test_two_character_operators():
    assert values('<< >> **') == ['<<', '>>', '^']
    assert values('2**3') == [2.0, '^', 3.0]


def test_lone_angle_bracket_is_error():
    assert list(Lexer().lex('1 < 2')) == [Token(Kind.NUMBER, 1.0),
                                          Token(Kind.ERROR, '<'),
                                          Token(Kind.NUMBER, 2.0)]


def test_unknown_character_is_error():
    assert kinds('$') == [Kind.ERROR]
    assert kinds('1 @ x') == [Kind.NUMBER, Kind.ERROR, Kind.IDENTIFIER]


def test_identifiers():
    assert values('x _y toKiB log10 a_1') == ['x', '_y', 'toKiB', 'log10',
                                              'a_1']


def test_long_identifier_splits():
    name = 'a' * 31 + 'b' * 9
    assert values(name) == ['a' * 31, 'b' * 9]


def test_parentheses():
    assert kinds('f(1, 2)') == [Kind.IDENTIFIER, Kind.LPAREN, Kind.NUMBER,
                                Kind.OPERATOR, Kind.NUMBER, Kind.RPAREN]


def test_whitespace_is_skipped():
    assert values(' \t1 +\t 2  ') == [1.0, '+', 2.0]


def test_next_advances_cursor():
    lexer = Lexer()
    cursor = Cursor('ab = 0x10')
    assert lexer.next(cursor) == Token(Kind.IDENTIFIER, 'ab')
    assert cursor.pos == 2
    assert lexer.next(cursor) == Token(Kind.OPERATOR, '=')
    assert lexer.next(cursor) == Token(Kind.NUMBER, 16.0)
    assert cursor.pos == len(cursor.source)
    assert lexer.next(cursor).kind is Kind.END
    assert lexer.next(cursor).kind is Kind.END
