'''
Infix calculator.

Reads the arithmetic you would type into a pocket calculator: numbers,
+ - * / ^, parentheses, a few functions (sqrt, sin, cos, tan), the constants
pi and e, and your own variables. Expressions go through three stages, each
usable on its own:

- Lexer: text to tokens, unary minus spelled out as 0 - x.
- Converter: tokens to postfix (RPN), by shunting-yard.
- Machine: postfix to a number, on a value stack.

evaluate() strings the three together and hands back a Result instead of
raising.
'''

from .util import (CalcError, ExpressionSyntaxError, SemanticError,
                   DomainError, NumericError, EmptyExpressionError,
                   VariableError)
from .lexer import Lexer, Token, Kind
from .converter import Converter
from .machine import Machine
from .calculator import Result, evaluate
from .registers import Registers, History
from .cli import CLI


__all__ = ('evaluate', 'Result', 'Lexer', 'Token', 'Kind', 'Converter',
           'Machine', 'Registers', 'History', 'CLI',
           'CalcError', 'ExpressionSyntaxError', 'SemanticError',
           'DomainError', 'NumericError', 'EmptyExpressionError',
           'VariableError')
