import math

from .lexer import Lexer
from .util import UndefinedIdentifier


KiB = 1024.0
MiB = 1024.0 * KiB
GiB = 1024.0 * MiB
TiB = 1024.0 * GiB

KB = 1000.0
MB = 1000.0 * KB
GB = 1000.0 * MB
TB = 1000.0 * GB

UNITS = {
    'KiB': KiB,
    'MiB': MiB,
    'GiB': GiB,
    'TiB': TiB,
    'KB': KB,
    'MB': MB,
    'GB': GB,
    'TB': TB,
}


class Environment:
    '''
    Variable bindings of a calculator session.

    Insertion ordered and unique by name. Holds at most MAX_VARS names; new
    names past that are silently dropped, while existing ones can always be
    rebound. The first binding doubles as the last answer: see ANS.

    Lookups that miss the bindings fall back to CONSTANTS, which user
    bindings therefore shadow.
    '''
    MAX_VARS = 64
    # Longest name the lexer produces.
    MAX_NAME = Lexer.MAX_NAME
    ANS = 'ans'

    CONSTANTS = {
        'pi': math.pi,
        'PI': math.pi,
        'e': math.e,
        'E': math.e,
    }
    CONSTANTS.update(UNITS)
    CONSTANTS.update((name.lower(), value)
                     for name, value
                     in UNITS.items())

    def __init__(self):
        self.registers = dict()

    def __contains__(self, name):
        return name in self.registers

    def __len__(self):
        return len(self.registers)

    def __iter__(self):
        return iter(self.registers.items())

    def store(self, name, value):
        '''
        Bind name to value, unless the table is full and name is new.

        Return whether the binding was made.
        '''
        name = name[:type(self).MAX_NAME]
        if name not in self.registers and \
           len(self.registers) >= type(self).MAX_VARS:
            return False
        self.registers[name] = value
        return True

    def load(self, name):
        '''
        Return the value bound to name, else the built-in constant.

        ans, when not bound itself, is the first stored value, or 0 before
        anything was stored.

        :raises UndefinedIdentifier: when nothing matches.
        '''
        try:
            return self.registers[name]
        except KeyError:
            pass
        try:
            return type(self).CONSTANTS[name]
        except KeyError:
            pass
        if name == type(self).ANS:
            return next(iter(self.registers.values()), 0.0)
        raise UndefinedIdentifier(name)
