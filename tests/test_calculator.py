'''
End to end evaluation tests
'''

import regex

from infixcalc import (evaluate, ExpressionSyntaxError, SemanticError,
                       DomainError, NumericError, EmptyExpressionError)

from pytest import raises, mark


@mark.parametrize('expression, expected', [
    ('2+3*4', '14.0000'),
    ('(2+3)*4', '20.0000'),
    ('2^3^2', '512.0000'),
    ('-5+3', '-2.0000'),
    ('3*-2', '-6.0000'),
    ('-2^2', '-4.0000'),
    ('2^-1', '0.5000'),
    ('--5', '5.0000'),
    ('2--5', '7.0000'),
    ('pi*2', '6.2830'),
    ('e', '2.7182'),
    ('sqrt(16)+cos(0)', '5.0000'),
    ('SQRT(PI*0+16)', '4.0000'),
    ('  1 / 3  ', '0.3333'),
    ('0*-1', '0.0000'),
])
def test_formatted(expression, expected):
    result = evaluate(expression)
    assert result.ok
    assert result.formatted == expected


def test_division_by_zero():
    result = evaluate('5/0')
    assert isinstance(result.error, DomainError)
    assert 'Division' in str(result.error)
    assert result.value is None
    assert result.formatted is None


def test_undefined_identifier():
    result = evaluate('x+1', {})
    assert isinstance(result.error, SemanticError)
    assert '"x"' in str(result)


def test_scope():
    assert evaluate('x*2', {'x': 3}).value == 6
    assert evaluate('x*2', {'X': 3}).value == 6


@mark.parametrize('expression', ['(1+2', '1+2)'])
def test_mismatched_parentheses(expression):
    result = evaluate(expression)
    assert isinstance(result.error, ExpressionSyntaxError)
    assert str(result) == 'Mismatched parentheses.'


@mark.parametrize('expression, message', [
    ('2+', 'Incomplete expression: missing values.'),
    ('sqrt()', 'Incomplete expression: missing argument.'),
    ('2 3', 'Incomplete expression.'),
    ('()', 'Incomplete expression.'),
    ('1..2', 'Invalid number format.'),
    ('.', 'Invalid number format.'),
    ('2 % 3', 'Unsupported character "%".'),
    ('sqrt(-4)', 'Square root requires a non-negative number.'),
    ('2^2000', 'Invalid mathematical result.'),
])
def test_messages(expression, message):
    assert str(evaluate(expression)) == message


def test_numeric_error():
    assert isinstance(evaluate('10^308*10').error, NumericError)


@mark.parametrize('expression', ['', '   ', None])
def test_empty(expression):
    result = evaluate(expression)
    assert isinstance(result.error, EmptyExpressionError)
    assert str(result) == 'Please enter an expression first.'


def test_precision():
    assert evaluate('1/3', precision=2).formatted == '0.33'
    assert evaluate('2', precision=0).formatted == '2'


def test_unwrap():
    assert evaluate('1+1').unwrap() == 2
    with raises(DomainError, match=regex.escape('Division by zero')):
        evaluate('1/0').unwrap()


def test_idempotent():
    scope = {'y': 1.5}
    first = evaluate('y^2 + sin(pi)', scope)
    second = evaluate('y^2 + sin(pi)', scope)
    assert first == second
    assert scope == {'y': 1.5}


def test_failure_leaves_no_trace():
    assert not evaluate('(((').ok
    assert evaluate('1+1').formatted == '2.0000'
