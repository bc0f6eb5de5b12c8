'''
Terminal calculator.

Evaluates one line of infix arithmetic at a time: floating point arithmetic,
64-bit bitwise operations, math functions, byte units, and variables. Numbers
are read in decimal, hex (0x), binary (0b) or octal (0o), and a result can be
printed in any of those by wrapping the expression in dec(), hex(), bin() or
oct().

    > x = 0xF0
    240
    > hex(x | 0x0F)
    0xFF
    > toMiB(4*GiB)
    4096
'''

from .cli import CLI
from .environment import Environment
from .lexer import Lexer
from .machine import Machine


__all__ = 'Machine', 'Environment', 'Lexer', 'CLI'
