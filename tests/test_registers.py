'''
Variable store and history tests
'''

import regex

from infixcalc.util import VariableError
from infixcalc.registers import Registers, History, Entry
from infixcalc import evaluate

from pytest import raises, mark


def test_store_normalises(registers):
    assert registers.store(' Rate ', ' 0.25 ') == 'rate'
    assert registers['rate'] == 0.25
    assert set(registers) == {'x', 'rate'}


def test_store_overwrites(registers):
    registers.store('x', '4')
    assert registers['x'] == 4
    assert len(registers) == 1


def test_scope_overlays_constants(registers):
    scope = registers.scope()
    assert scope['x'] == 3
    assert scope['pi'] == 3.1415
    assert evaluate('x*pi', registers).formatted == '9.4245'


def test_constants_protected(registers):
    for name in 'pi', 'E':
        with raises(VariableError,
                    match=regex.escape('Cannot override built-in constants '
                                       '(pi, e).')):
            registers.store(name, 1)


@mark.parametrize('name', ['1x', '_x', 'x-y', 'x y', 'é'])
def test_bad_names(registers, name):
    with raises(VariableError, match='must start with a letter'):
        registers.store(name, 1)


@mark.parametrize('name, value', [('', '1'), ('y', ''), (' ', ' ')])
def test_missing_name_or_value(registers, name, value):
    with raises(VariableError, match='Enter both'):
        registers.store(name, value)


@mark.parametrize('value', ['abc', '1..2', 'nan', 'inf'])
def test_bad_values(registers, value):
    with raises(VariableError, match='valid number'):
        registers.store('y', value)


def test_remove(registers):
    registers.remove('X')
    assert 'x' not in registers
    assert not evaluate('x', registers).ok


def test_remove_missing(registers):
    with raises(VariableError, match=regex.escape('No such variable "y"')):
        registers.remove('y')


def test_read_only_mapping(registers):
    with raises(TypeError):
        registers['y'] = 1


def test_history_newest_first():
    h = History()
    h.add('1+1', '2.0000')
    h.add('2+2', '4.0000')
    assert list(h) == [Entry('2+2', '4.0000'), Entry('1+1', '2.0000')]
    assert h[0].expression == '2+2'


def test_history_delete():
    h = History()
    for n in range(3):
        h.add(str(n), str(n))
    h.delete(1)
    assert [e.expression for e in h] == ['2', '0']
    with raises(IndexError):
        h.delete(5)
    h.clear()
    assert len(h) == 0
