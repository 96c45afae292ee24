from os import isatty
from argparse import ArgumentParser, ArgumentTypeError, REMAINDER, OPTIONAL

import logging
import sys

import regex
from prompt_toolkit import PromptSession
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.history import InMemoryHistory

from .util import CalcError, VariableError
from .symbols import CONSTANTS, FUNCTIONS
from .lexer import Lexer
from .converter import Converter
from .calculator import DEFAULT_PRECISION, evaluate
from .registers import Registers, History


log = logging.getLogger(__name__)


class InteractiveInput:
    def __init__(self, prompt, words=None):
        self.prompt = prompt
        self.words = words

    def __iter__(self):
        try:
            session = PromptSession(message=self.prompt,
                                    enable_suspend=True,
                                    # This session only; nothing persisted
                                    history=InMemoryHistory(),
                                    completer=WordCompleter(self.words or []),
                                    complete_while_typing=False,
                                    prompt_continuation=' ' * len(self.prompt),
                                    mouse_support=False,
                                    erase_when_done=False)
            while True:
                yield session.prompt()
        except EOFError:
            return


def precision(text):
    '''
    argparse type for a non-negative number of decimal places.
    '''
    try:
        places = int(text)
    except ValueError:
        places = -1
    if places < 0:
        raise ArgumentTypeError('{!r} is not a non-negative integer'
                                .format(text))
    return places


class CLI:
    '''
    Command line interface to the calculator.
    '''

    DEFAULT_PROMPT = '> '
    # :name args
    COMMAND = regex.compile(r':(?<name>\w+)(?:\s+(?<args>.*))?',
                            flags=regex.DOTALL)
    HELP = '''\
expressions: numbers, + - * / ^, ( ), {functions}, {constants}
:let NAME VALUE   define a variable (also :let NAME=VALUE)
:unlet NAME       remove a variable
:vars             list variables
:history          list past results, newest first
:delete N         delete history entry N
:recall N         evaluate history entry N again
:clear            clear history
:help             this text'''

    def dumper(self):
        '''
        Dump tokens and their postfix order, per expression.
        '''
        lexer = Lexer()
        converter = Converter()
        for line in self.args.expressions:
            try:
                tokens = list(lexer.lex(line.strip()))
                print('tokens', *tokens, sep='\t')
                print('rpn', *converter.convert(tokens), sep='\t')
            except CalcError as e:
                print(e, file=sys.stderr)

    def executor(self):
        '''
        Evaluate every line, or run it if it is a command.
        '''
        for line in self.args.expressions:
            line = line.strip()
            if line.startswith(':'):
                self.command(line)
            else:
                self.calculate(line)

    def raw_grammar(self):
        '''
        Print current internally defined grammar.
        '''
        print(Lexer.LEXEME)

    def calculate(self, expression):
        '''
        Evaluate an expression, print and remember the result.
        '''
        result = evaluate(expression, self.registers,
                          precision=self.args.precision)
        if result.ok:
            print('Result:', result.formatted)
            self.history.add(result.expression, result.formatted)
        else:
            print(result.error, file=sys.stderr)
        return result

    def command(self, line):
        '''
        Run a : command.
        '''
        match = type(self).COMMAND.fullmatch(line)
        action = None
        if match is not None:
            action = self.COMMANDS.get(match.group('name'))
        if action is None:
            print('Unknown command {}; try :help'.format(line.split()[0]),
                  file=sys.stderr)
            return
        try:
            action(self, (match.group('args') or '').strip())
        except VariableError as e:
            print(e, file=sys.stderr)

    def let(self, args):
        name, _, value = args.partition('=' if '=' in args else ' ')
        name = self.registers.store(name, value)
        print('Variable "{}" saved.'.format(name))

    def unlet(self, args):
        self.registers.remove(args)
        print('Variable "{}" removed.'.format(args.lower()))

    def listvariables(self, args):
        if not self.registers:
            print('No variables added yet.')
        for name, value in self.registers.items():
            print('{} = {:g}'.format(name, value))

    def listhistory(self, args):
        if not self.history:
            print('No history yet.')
        for number, entry in enumerate(self.history, start=1):
            print('{}. {} = {}'.format(number, entry.expression,
                                       entry.result))

    def _entry(self, args):
        '''
        Return 0-based history index for a 1-based entry number, or None.
        '''
        try:
            index = int(args) - 1
        except ValueError:
            index = -1
        if not 0 <= index < len(self.history):
            print('No such history entry {}.'.format(args), file=sys.stderr)
            return None
        return index

    def delete(self, args):
        index = self._entry(args)
        if index is not None:
            self.history.delete(index)

    def recall(self, args):
        index = self._entry(args)
        if index is not None:
            self.calculate(self.history[index].expression)

    def clear(self, args):
        self.history.clear()

    def help(self, args):
        print(self.HELP.format(functions=' '.join(FUNCTIONS),
                               constants=' '.join(CONSTANTS)))

    COMMANDS = {
        'let': let,
        'unlet': unlet,
        'vars': listvariables,
        'history': listhistory,
        'delete': delete,
        'recall': recall,
        'clear': clear,
        'help': help,
    }

    def _words(self):
        return [*FUNCTIONS, *CONSTANTS, *self.registers]

    def _prompting_input(self):
        '''
        Return prompting stdin replacement...

        If either:
        - prompt explicitly specified.
        - both stdin/out are a tty
        '''
        if self.args.prompt or \
           isatty(sys.stdin.fileno()) and isatty(sys.stdout.fileno()):
            return InteractiveInput(prompt=self.args.prompt or
                                    self.DEFAULT_PROMPT,
                                    words=self._words)
        else:
            return sys.stdin

    def __init__(self):
        '''
        Create ready to run CLI.

        Does not run or parse command line arguments.
        '''
        self.registers = Registers()
        self.history = History()
        self.argument_parser = ArgumentParser(
            description='Infix expression calculator')
        self.argument_parser.add_argument('-v', '--verbose',
                                          action='store_true')
        self.argument_parser.add_argument('-k', '--precision',
                                          type=precision,
                                          default=DEFAULT_PRECISION,
                                          help='decimal places shown')
        self.argument_parser.add_argument('-s', '--set',
                                          action='append',
                                          dest='variables',
                                          metavar='NAME=VALUE')
        int_nonint_groups = self.argument_parser.add_mutually_exclusive_group()
        int_nonint_groups.add_argument('-e', '--expression',
                                       nargs=REMAINDER,
                                       dest='expressions')
        int_nonint_groups.add_argument('-p', '--prompt',
                                       nargs=OPTIONAL,
                                       const=self.DEFAULT_PROMPT)
        main_groups = self.argument_parser.add_mutually_exclusive_group()
        for short_, long_, action in [('-G', '--raw-grammar',
                                       self.raw_grammar),
                                      ('-D', '--dump', self.dumper)]:
            main_groups.add_argument(short_, long_,
                                     action='store_const',
                                     const=action,
                                     dest='action')
        self.argument_parser.set_defaults(action=self.executor,
                                          expressions=sys.stdin)

    def run(self, *, args=None):
        '''
        Run CLI, given these args, or previously passed CLI args.
        '''
        self.args = self.argument_parser.parse_args(args)
        logging.basicConfig(level=logging.DEBUG if self.args.verbose
                            else logging.WARNING,
                            format='%(name)s: %(message)s')
        for assignment in self.args.variables or []:
            name, _, value = assignment.partition('=')
            try:
                self.registers.store(name, value)
            except VariableError as e:
                self.argument_parser.error('{}: {}'.format(assignment, e))
        if self.args.expressions is sys.stdin:
            self.args.expressions = self._prompting_input()
        log.debug('running %s', self.args.action.__name__)
        try:
            self.args.action()
        except KeyboardInterrupt:
            sys.exit(1)
