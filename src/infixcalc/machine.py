from collections import deque

import math

from .util import (ExpressionSyntaxError, SemanticError, NumericError,
                   wrap_user_errors)
from .symbols import OPERATORS, FUNCTIONS
from .lexer import Kind


class Machine:
    '''
    Arithmetic stack machine.

    Runs postfix tokens against a scope of names. One machine per evaluation;
    the stack is never shared between runs.
    '''

    def __init__(self, scope):
        '''
        Create empty stack machine.

        :param scope: Mapping of lower-case name to value.
        '''
        self.scope = scope
        self.stack = deque()

    def run(self, tokens):
        '''
        Feed every postfix token, then return the single value left.
        '''
        self.stack.clear()
        for token in tokens:
            self.feed(token)
        if len(self.stack) != 1:
            raise ExpressionSyntaxError('Incomplete expression.')
        return self.stack[0]

    def feed(self, token):
        '''
        Stack or run one token on the machine.
        '''
        if token.kind is Kind.NUMBER:
            self._pshstack(token.value)
        elif token.kind is Kind.IDENTIFIER:
            self._pshstack(self.load(token.value))
        elif token.kind is Kind.FUNCTION:
            if not self.stack:
                raise ExpressionSyntaxError(
                    'Incomplete expression: missing argument.')
            value, = self._popstack()
            self._pshstack(self._call(token.value, value))
        elif token.kind is Kind.OPERATOR:
            if len(self.stack) < 2:
                raise ExpressionSyntaxError(
                    'Incomplete expression: missing values.')
            # Topmost first: 9 2 - is 9 - 2, not 2 - 9.
            right, left = self._popstack(2)
            self._pshstack(self._operate(token.value, left, right))
        else:
            raise ExpressionSyntaxError('Mismatched parentheses.')

    def load(self, name):
        '''
        Look a name up in the scope.
        '''
        try:
            return self.scope[name]
        except KeyError:
            raise SemanticError(
                'Unknown variable or constant "{}".'.format(name)) from None

    @wrap_user_errors('Invalid function result.')
    def _call(self, name, value):
        result = FUNCTIONS[name].rule(value)
        if not math.isfinite(result):
            raise NumericError('Invalid function result.')
        return result

    @wrap_user_errors('Invalid mathematical result.')
    def _operate(self, symbol, left, right):
        result = OPERATORS[symbol].rule(left, right)
        if not math.isfinite(result):
            raise NumericError('Invalid mathematical result.')
        return result

    def _pshstack(self, *new):
        '''
        Push all elements onto stack, leftmost at the bottom.
        '''
        self.stack.extend(new)

    def _popstack(self, n=1):
        '''
        Pop specified number of values from stack, topmost first.
        '''
        return [self.stack.pop() for _ in range(n)]
