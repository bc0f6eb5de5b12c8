from collections import namedtuple
from enum import Enum
from functools import reduce
import operator

import regex

from .util import MASK


class Kind(Enum):
    NUMBER = 'number'
    IDENTIFIER = 'identifier'
    OPERATOR = 'operator'
    LPAREN = 'lparen'
    RPAREN = 'rparen'
    END = 'end'
    ERROR = 'error'


Token = namedtuple('Token', 'kind value')


class Cursor:
    '''
    A line of source and the offset of the next unread character.

    Belongs to a single parse; the parser saves and restores pos to look one
    token ahead.
    '''

    def __init__(self, source, pos=0):
        self.source = source
        self.pos = pos

    def __repr__(self):
        return 'Cursor({0!r}, {1})'.format(self.source, self.pos)


class Lexer:
    '''
    Lexer for calculator expressions.

    Holds no state of its own; all progress lives in the Cursor.
    '''
    # Radix-prefixed integers. An empty 0b is zero; 0x and 0o need at least
    # one digit, otherwise the 0 lexes as a decimal number.
    HEX = r'0[xX](?<hex>[0-9a-fA-F]+)'
    BIN = r'0[bB](?<bin>[01]*)'
    OCT = r'0[oO](?<oct>[0-7]+)'
    # 1, 1., 1.5, .5, each with an optional exponent.
    DEC = r'''
           (?:
               [0-9]+
               (?:
                   \.
                   [0-9]*
               )?
               |
               \.
               [0-9]+
           )
           (?:
               [eE]
               [+-]?
               [0-9]+
           )?
           '''
    NUMBER = r'(?:' + HEX + r')|' \
             r'(?:' + BIN + r')|' \
             r'(?:' + OCT + r')|' \
             r'(?<dec>' + DEC + r')'

    # Longer names stop here; the rest lexes as a new identifier.
    MAX_NAME = 31
    IDENTIFIER = r'[A-Za-z_][A-Za-z0-9_]{0,' + str(MAX_NAME - 1) + r'}'

    # ** is a spelling of ^, collapsed by ALIASES below.
    OPERATORS = '<<', '>>', '**', '+', '-', '*', '/', '%', '^', \
                '=', '&', '|', '~', ','
    OPERATOR = r'(?:' + r'|'.join(map(regex.escape, OPERATORS)) + r')'
    ALIASES = {
        '**': '^',
    }

    # All possible lexemes.
    LEXEME = r'(?<number>' + NUMBER + r')|' \
             r'(?<identifier>' + IDENTIFIER + r')|' \
             r'(?<operator>' + OPERATOR + r')|' \
             r'(?<lparen>\()|' \
             r'(?<rparen>\))'
    SPACE = r'\s*'
    # Default regex flags for matching lexemes
    FLAGS = reduce(operator.__or__,
                   {regex.POSIX,
                    regex.VERSION1,
                    regex.VERBOSE},
                   0)

    _lexeme = regex.compile(LEXEME, flags=FLAGS)
    _space = regex.compile(SPACE, flags=regex.VERSION1)

    def next(self, cursor):
        '''
        Skip whitespace and return the next token, advancing cursor past it.

        Never raises: a character that starts no lexeme becomes an ERROR
        token of its own.
        '''
        cursor.pos = type(self)._space.match(cursor.source, cursor.pos).end()
        if cursor.pos >= len(cursor.source):
            return Token(Kind.END, None)
        match = type(self)._lexeme.match(cursor.source, cursor.pos)
        if match is None:
            bad = cursor.source[cursor.pos]
            cursor.pos += 1
            return Token(Kind.ERROR, bad)
        cursor.pos = match.end()
        return self.parse(match)

    def parse(self, match):
        '''
        Turn a lexeme match into a token.
        '''
        groups = self.matchedgroups(match)
        if 'number' in groups:
            return Token(Kind.NUMBER, self._number(groups))
        elif 'identifier' in groups:
            return Token(Kind.IDENTIFIER, groups['identifier'])
        elif 'operator' in groups:
            code = groups['operator']
            return Token(Kind.OPERATOR, type(self).ALIASES.get(code, code))
        elif 'lparen' in groups:
            return Token(Kind.LPAREN, '(')
        return Token(Kind.RPAREN, ')')

    def _number(self, groups):
        if 'hex' in groups:
            # Saturates, like strtoull.
            return float(min(int(groups['hex'], 16), MASK))
        elif 'oct' in groups:
            return float(min(int(groups['oct'], 8), MASK))
        elif 'dec' in groups:
            return float(groups['dec'])
        # Shifted in one bit at a time, so overflow wraps.
        return float(int(groups.get('bin') or '0', 2) & MASK)

    def lex(self, line):
        '''
        Yield every token of line, up to and excluding END.
        '''
        cursor = Cursor(line)
        while True:
            token = self.next(cursor)
            if token.kind is Kind.END:
                return
            yield token

    def matchedgroups(self, match):
        '''
        Return the groups that took part in a lexeme match.
        '''
        return {key: value
                for key, value
                in match.groupdict().items()
                if value is not None}
