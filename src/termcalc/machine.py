from functools import partial
import math

from .environment import Environment
from .formatter import Format, render
from .functions import SELECTORS, TABLES
from .lexer import Lexer
from .parser import Parser
from .util import CalcSyntaxError, UnknownFunction, diagnosed, report


class Machine:
    '''
    Expression calculator session.

    Takes lines and evaluates them to floats. Keeps the variable bindings
    between lines, and the output format of the line being evaluated.
    '''

    DEFAULT_OFMT = Format.DEC

    def __init__(self, environment=None):
        '''
        Create a session.

        :param environment: Bindings to start from; empty if not given.
        '''
        self.environment = Environment() if environment is None \
            else environment
        self.ofmt = type(self).DEFAULT_OFMT
        self.lexer = Lexer()

    def evaluate(self, line):
        '''
        Evaluate one line, returning its value, NaN on error.

        Resets the output format first; format selectors called by the line
        set it for the print that follows. Nesting too deep to descend into
        ends the parse with a syntax error.
        '''
        self.ofmt = type(self).DEFAULT_OFMT
        try:
            return Parser(self, line, self.lexer).statement()
        except RecursionError:
            return report(CalcSyntaxError())

    def feed(self, line):
        '''
        Evaluate and print line, and remember the result as ans.
        '''
        value = self.evaluate(line)
        self.print(value)
        self.store(value, Environment.ANS)
        return value

    def format(self, value):
        '''
        Return value as text in the current output format, None for NaN.
        '''
        return render(value, self.ofmt)

    def print(self, value, **kwargs):
        '''
        Print value in the current output format. NaN prints nothing.
        '''
        text = self.format(value)
        if text is not None:
            print(text, **kwargs)

    @diagnosed
    def load(self, name):
        '''
        Return the value of a variable or constant.
        '''
        return self.environment.load(name)

    def store(self, value, name):
        '''
        Store value into variable.
        '''
        self.environment.store(name, value)

    def storeofmt(self, ofmt):
        '''
        Set the output format of the line being evaluated.
        '''
        self.ofmt = ofmt

    @diagnosed
    def call(self, name, *args):
        '''
        Apply the function called name to args.

        Functions are looked up by name among those taking len(args)
        arguments only.
        '''
        try:
            f = TABLES[len(args)][name]
        except KeyError:
            raise UnknownFunction(name) from None
        # Format selectors act on the machine.
        if f in SELECTORS.values():
            f = partial(f, self)
        return f(*args)

    @staticmethod
    def failed(value):
        return math.isnan(value)
