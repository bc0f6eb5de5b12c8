from .functions import OPERATORS, bnot
from .lexer import Cursor, Kind, Lexer
from .util import CalcSyntaxError, report


class Parser:
    '''
    Recursive descent parser that evaluates while it parses.

    One instance per line. Grammar, loosest first:

        statement := IDENTIFIER '=' expr | expr
        expr      := bitand ( '|' bitand )*
        bitand    := shift ( '&' shift )*
        shift     := additive ( ( '<<' | '>>' ) additive )*
        additive  := term ( ( '+' | '-' ) term )*
        term      := power ( ( '*' | '/' | '%' ) power )*
        power     := primary ( '^' power )?
        primary   := ( '-' | '+' | '~' ) primary
                   | '(' expr [ ')' ]
                   | NUMBER
                   | IDENTIFIER [ '(' expr [ ',' expr ] [ ')' ] ]

    Only ^ is right associative. A missing ')' is tolerated, and whatever
    follows a complete statement is ignored.
    '''

    def __init__(self, machine, line, lexer=None):
        self.machine = machine
        self.lexer = lexer or Lexer()
        self.cursor = Cursor(line)
        self.token = None

    def advance(self):
        self.token = self.lexer.next(self.cursor)
        return self.token

    def isoperator(self, *codes):
        return self.token.kind is Kind.OPERATOR and self.token.value in codes

    def statement(self):
        '''
        Evaluate the whole line, binding the result if it's an assignment.
        '''
        self.advance()
        if self.token.kind is Kind.IDENTIFIER:
            name = self.token.value
            saved = self.cursor.pos, self.token
            self.advance()
            if self.isoperator('='):
                self.advance()
                value = self.expression()
                self.machine.store(value, name)
                return value
            # Not an assignment; back up to the identifier.
            self.cursor.pos, self.token = saved
        return self.expression()

    def expression(self):
        return self.bitor()

    def _leftassoc(self, operand, *codes):
        left = operand()
        while self.isoperator(*codes):
            code = self.token.value
            self.advance()
            left = OPERATORS[code](left, operand())
        return left

    def bitor(self):
        return self._leftassoc(self.bitand, '|')

    def bitand(self):
        return self._leftassoc(self.shift, '&')

    def shift(self):
        return self._leftassoc(self.additive, '<<', '>>')

    def additive(self):
        return self._leftassoc(self.term, '+', '-')

    def term(self):
        return self._leftassoc(self.power, '*', '/', '%')

    def power(self):
        left = self.primary()
        if self.isoperator('^'):
            self.advance()
            return OPERATORS['^'](left, self.power())
        return left

    def primary(self):
        token = self.token
        if self.isoperator('-', '+'):
            self.advance()
            value = self.primary()
            return -value if token.value == '-' else value
        elif self.isoperator('~'):
            self.advance()
            return bnot(self.primary())
        elif token.kind is Kind.LPAREN:
            self.advance()
            value = self.expression()
            self._close()
            return value
        elif token.kind is Kind.NUMBER:
            self.advance()
            return token.value
        elif token.kind is Kind.IDENTIFIER:
            self.advance()
            if self.token.kind is not Kind.LPAREN:
                return self.machine.load(token.value)
            self.advance()
            args = [self.expression()]
            if self.isoperator(','):
                self.advance()
                args.append(self.expression())
            self._close()
            return self.machine.call(token.value, *args)
        # Nothing here can start a primary, END and ERROR included. Not
        # advancing leaves the token to end the enclosing loops.
        return report(CalcSyntaxError())

    def _close(self):
        if self.token.kind is Kind.RPAREN:
            self.advance()
