'''
Evaluation facade: expression text in, Result out.
'''

from typing import NamedTuple, Optional

import logging

from .util import CalcError, EmptyExpressionError
from .symbols import build_scope
from .lexer import Lexer
from .converter import Converter
from .machine import Machine


log = logging.getLogger(__name__)

DEFAULT_PRECISION = 4


class Result(NamedTuple):
    '''
    Outcome of one evaluation: either a value or the first error met.
    '''
    expression: str
    value: Optional[float] = None
    error: Optional[CalcError] = None
    precision: int = DEFAULT_PRECISION

    @property
    def ok(self):
        return self.error is None

    @property
    def formatted(self):
        '''
        Value as fixed-point text, or None on error.
        '''
        if not self.ok:
            return None
        # + 0.0 turns -0.0 into 0.0
        return '{:.{}f}'.format(self.value + 0.0, self.precision)

    def unwrap(self):
        '''
        Return the value, or raise the error.
        '''
        if not self.ok:
            raise self.error
        return self.value

    def __str__(self):
        return self.formatted if self.ok else str(self.error)


def evaluate(expression, scope=None, precision=DEFAULT_PRECISION):
    '''
    Evaluate an infix expression.

    :param expression: Raw expression text.
    :param scope: Mapping of variable name to value, laid over the
                  built-in constants.
    :param precision: Decimal places of Result.formatted.
    '''
    expression = (expression or '').strip()
    if not expression:
        return Result(expression,
                      error=EmptyExpressionError(
                          'Please enter an expression first.'),
                      precision=precision)
    try:
        tokens = list(Lexer().lex(expression))
        log.debug('tokens: %s', ' '.join(map(str, tokens)))
        rpn = Converter().convert(tokens)
        log.debug('rpn: %s', ' '.join(map(str, rpn)))
        value = Machine(build_scope(scope)).run(rpn)
    except CalcError as e:
        log.debug('%r failed: %s', expression, e)
        return Result(expression, error=e, precision=precision)
    return Result(expression, value=value, precision=precision)
