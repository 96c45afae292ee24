from enum import Enum
from functools import reduce
from typing import NamedTuple

import math
import operator

import regex

from .util import ExpressionSyntaxError
from .symbols import OPERATORS, FUNCTIONS


class Kind(Enum):
    NUMBER = 'number'
    IDENTIFIER = 'identifier'
    FUNCTION = 'function'
    OPERATOR = 'operator'
    PAREN = 'paren'


class Token(NamedTuple):
    kind: Kind
    value: object
    # Only ever set on the '-' of a leading minus.
    unary: bool = False

    def __str__(self):
        if self.kind is Kind.NUMBER:
            return format(self.value, 'g')
        return str(self.value)


class Lexer:
    '''
    Lexer for infix arithmetic expressions.

    For consistency with the rest of the pipeline, needs to be instantiated,
    despite holding no internal state.
    '''
    # Digits and dots, greedily. Too many dots is the lexer's problem, not
    # the regex's; see _number.
    NUMBER = r'[0-9.]+'
    # ASCII only; x_1, Pi, SQRT
    IDENTIFIER = r'[A-Za-z][A-Za-z0-9_]*'

    assert not [operator
                for operator
                in OPERATORS
                if len(operator) != 1]
    OPERATOR = r'(?:' + r'|'.join(map(regex.escape, OPERATORS)) + r')'
    PAREN = r'[()]'
    SPACE = r'\s+'

    # All possible lexemes.
    LEXEME = r'(?<number>' + NUMBER + r')|' \
             r'(?<identifier>' + IDENTIFIER + r')|' \
             r'(?<operator>' + OPERATOR + r')|' \
             r'(?<paren>' + PAREN + r')|' \
             r'(?<space>' + SPACE + r')'
    # Default regex flags for matching lexemes
    FLAGS = reduce(operator.__or__,
                   {regex.VERSION1,
                    regex.VERBOSE},
                   0)

    def lex(self, line):
        '''
        Take a line and yield its tokens, left to right.

        Stops on the first bad lexeme, raising ExpressionSyntaxError.
        '''
        previous = None
        while line:
            match = regex.match(type(self).LEXEME, line,
                                flags=type(self).FLAGS)
            if match is None:
                raise ExpressionSyntaxError(
                    'Unsupported character "{}".'.format(line[0]))
            line = line[len(match.group(0)):]
            for token in self._tokens(match, previous):
                yield token
                previous = token

    def _tokens(self, match, previous):
        '''
        Turn one lexeme match into zero or more tokens.
        '''
        kind, text = match.lastgroup, match.group(0)
        if kind == 'space':
            return []
        elif kind == 'number':
            return [Token(Kind.NUMBER, self._number(text))]
        elif kind == 'identifier':
            name = text.lower()
            if name in FUNCTIONS:
                return [Token(Kind.FUNCTION, name)]
            return [Token(Kind.IDENTIFIER, name)]
        elif kind == 'operator':
            if self.isunary(text, previous):
                # -x is read as 0 - x
                return [Token(Kind.NUMBER, 0.0),
                        Token(Kind.OPERATOR, text, unary=True)]
            return [Token(Kind.OPERATOR, text)]
        return [Token(Kind.PAREN, text)]

    def _number(self, text):
        '''
        Convert a run of digits and dots into a float.
        '''
        if text.count('.') > 1 or text == '.':
            raise ExpressionSyntaxError('Invalid number format.')
        value = float(text)
        if not math.isfinite(value):
            raise ExpressionSyntaxError('Invalid number format.')
        return value

    def isunary(self, text, previous):
        '''
        Return True if the operator text is a leading (unary) minus.
        '''
        if text != '-':
            return False
        if previous is None:
            return True
        return (previous.kind in {Kind.OPERATOR, Kind.FUNCTION} or
                previous.kind is Kind.PAREN and previous.value == '(')
