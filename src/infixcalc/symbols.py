'''
Symbol tables: constants, binary operators and unary functions.

Everything in here is read-only and shared by every evaluation.
'''

from enum import Enum
from types import MappingProxyType
from typing import Callable, NamedTuple

import math
import operator

from .util import DomainError


class Associativity(Enum):
    LEFT = 'L'
    RIGHT = 'R'


class OperatorSpec(NamedTuple):
    precedence: int
    associativity: Associativity
    rule: Callable[[float, float], float]


class FunctionSpec(NamedTuple):
    rule: Callable[[float], float]


def _divide(left, right):
    if right == 0:
        raise DomainError('Division by zero is not allowed.')
    return left / right


def _sqrt(value):
    if value < 0:
        raise DomainError('Square root requires a non-negative number.')
    return math.sqrt(value)


def _tan(value):
    result = math.tan(value)
    if not math.isfinite(result):
        raise DomainError('Tangent is undefined for this angle.')
    return result


CONSTANTS = MappingProxyType({
    'pi': 3.1415,
    'e': 2.7182,
})

OPERATORS = MappingProxyType({
    '+': OperatorSpec(1, Associativity.LEFT, operator.__add__),
    '-': OperatorSpec(1, Associativity.LEFT, operator.__sub__),
    '*': OperatorSpec(2, Associativity.LEFT, operator.__mul__),
    '/': OperatorSpec(2, Associativity.LEFT, _divide),
    # math.pow raises where ** would go complex
    '^': OperatorSpec(3, Associativity.RIGHT, math.pow),
})

# The "0 -" pair the lexer emits for a leading minus. Tighter than * and /,
# but an exponent to its right still wins: -2^2 is -(2^2).
UNARY_MINUS = OperatorSpec(3, Associativity.RIGHT, operator.__sub__)

FUNCTIONS = MappingProxyType({
    'sqrt': FunctionSpec(_sqrt),
    'sin': FunctionSpec(math.sin),
    'cos': FunctionSpec(math.cos),
    'tan': FunctionSpec(_tan),
})


def operator_spec(token):
    '''
    Return the OperatorSpec governing an operator token.
    '''
    if token.unary:
        return UNARY_MINUS
    return OPERATORS[token.value]


def build_scope(variables=None):
    '''
    Overlay the built-in constants with user variables.

    Keys are lower-cased, as the lexer lower-cases every identifier.
    '''
    scope = dict(CONSTANTS)
    if variables:
        scope.update((str(name).lower(), float(value))
                     for name, value
                     in variables.items())
    return scope
