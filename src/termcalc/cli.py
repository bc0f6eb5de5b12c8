from argparse import ArgumentParser, REMAINDER, OPTIONAL
from os import path
import sys

from prompt_toolkit import PromptSession
from prompt_toolkit.history import FileHistory, InMemoryHistory

from .formatter import render
from .functions import UNARY, BINARY
from .lexer import Lexer
from .machine import Machine


HELP = '''\
termcalc - terminal calculator

OPERATORS
  arithmetic:  + - * / % ^ **
  bitwise:     & | ~ << >>

NUMBERS
  decimal:     42, 3.14, 1e-9
  hex:         0xFF, 0x1A2B
  binary:      0b1010, 0b11110000
  octal:       0o755, 0o644

FUNCTIONS
  math:        sin cos tan asin acos atan sinh cosh tanh
               exp log log10 log2 ln sqrt cbrt abs floor ceil round
               pow(x,y) atan2(y,x) max(a,b) min(a,b) mod(a,b)
  bitwise:     popcount clz ctz bnot not8 not16 not32
               bxor(a,b) band(a,b) bor(a,b) shl(x,n) shr(x,n)
  format:      hex() bin() oct() dec()
  bytes:       toKiB toMiB toGiB toTiB toKB toMB toGB toTB

CONSTANTS
  pi e ans
  KiB MiB GiB TiB  (1024-based)
  KB MB GB TB      (1000-based)

VARIABLES
  x = 5            then x*2 -> 10
  vars             list variables

EXAMPLES
  0xFF & 0b1111        -> 15
  1 << 10              -> 1024
  hex(255)             -> 0xFF
  bxor(0xF0, 0xFF)     -> 15
  not8(0xF0)           -> 15
  4*GiB                -> 4294967296
  toMiB(4*GiB)         -> 4096

exit: q, quit, exit, or Ctrl+D'''


class InteractiveInput:
    '''
    Lines typed at a prompt, with persistent history.

    Up and down search the history for lines starting with what is already
    typed.
    '''

    def __init__(self, prompt, history=None):
        self.prompt = prompt
        self.history = history

    def _history(self):
        if self.history is None:
            return InMemoryHistory()
        return FileHistory(path.expanduser(self.history))

    def __iter__(self):
        try:
            session = PromptSession(message=self.prompt,
                                    history=self._history(),
                                    enable_history_search=True,
                                    enable_suspend=True,
                                    # Certainly not! But be explicit.
                                    erase_when_done=False)
            while True:
                yield session.prompt()
        except EOFError:
            return


class CLI:
    '''
    Command line interface to the calculator.
    '''

    DEFAULT_PROMPT = '> '
    HISTORY_FILE = '~/.termcalc_history'
    QUIT = frozenset({'q', 'quit', 'exit'})
    HELP = frozenset({'help', '?'})
    VARS = frozenset({'vars'})

    def dumper(self):
        '''
        Dump the tokens of the expression, one per line.
        '''
        lexer = Lexer()
        print('<kind>\t<repr(value)>')
        for line in self._lines():
            for token in lexer.lex(line):
                print(token.kind.value, repr(token.value), sep='\t')
        return 0

    def raw_grammar(self):
        '''
        Print the lexeme pattern.
        '''
        print(Lexer.LEXEME)
        return 0

    def functions(self):
        '''
        Print the names of all functions, by number of arguments.
        '''
        print('unary:', *sorted(UNARY))
        print('binary:', *sorted(BINARY))
        return 0

    def executor(self):
        '''
        Evaluate and print the expression given as arguments.

        Exit status is 1 when the result is not a number.
        '''
        machine = Machine()
        value = machine.evaluate(' '.join(self.args.expression))
        machine.print(value)
        return 1 if machine.failed(value) else 0

    def repl(self):
        '''
        Read, evaluate, print, until told to quit or out of input.
        '''
        machine = Machine()
        for line in self._prompting_input():
            line = line.strip()
            if not line:
                continue
            elif line in type(self).QUIT:
                break
            elif line in type(self).HELP:
                print(HELP)
                continue
            elif line in type(self).VARS:
                self.listing(machine)
                continue
            machine.feed(line)
        return 0

    def listing(self, machine):
        '''
        Print the session's variables in the order they were first bound.
        '''
        for name, value in machine.environment:
            print(name, '=', render(value) or 'nan')

    def _lines(self):
        if self.args.expression:
            return [' '.join(self.args.expression)]
        return sys.stdin

    def _prompting_input(self):
        '''
        Return prompting input if either:
        - prompt explicitly specified.
        - both stdin/out are a tty

        Otherwise, plain stdin.
        '''
        if self.args.prompt or \
           sys.stdin.isatty() and sys.stdout.isatty():
            return InteractiveInput(prompt=self.args.prompt or
                                    self.DEFAULT_PROMPT,
                                    history=self.args.history)
        else:
            return sys.stdin

    def _default_action(self):
        if self.args.expression:
            return self.executor()
        return self.repl()

    def __init__(self):
        '''
        Create ready to run CLI.

        Does not run or parse command line arguments.
        '''
        self.argument_parser = ArgumentParser(description='Terminal calculator')
        self.argument_parser.add_argument('-p', '--prompt',
                                          nargs=OPTIONAL,
                                          const=self.DEFAULT_PROMPT)
        self.argument_parser.add_argument('--history',
                                          default=self.HISTORY_FILE,
                                          help='interactive history file')
        self.argument_parser.add_argument('--no-history',
                                          action='store_const',
                                          const=None,
                                          dest='history')
        main_groups = self.argument_parser.add_mutually_exclusive_group()
        for short_, long_, action in [('-G', '--raw-grammar',
                                       self.raw_grammar),
                                      ('-D', '--dump', self.dumper),
                                      ('-F', '--functions', self.functions)]:
            main_groups.add_argument(short_, long_,
                                     action='store_const',
                                     const=action,
                                     dest='action')
        self.argument_parser.add_argument('expression',
                                          nargs=REMAINDER,
                                          help='expression to evaluate; '
                                               'none for interactive mode')
        self.argument_parser.set_defaults(action=self._default_action)

    def run(self, *, args=None):
        '''
        Run CLI, given these args, or previously passed CLI args.

        Return the process exit status.
        '''
        self.args = self.argument_parser.parse_args(args)
        try:
            return self.args.action()
        except KeyboardInterrupt:
            return 1
