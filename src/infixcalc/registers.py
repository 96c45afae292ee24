'''
Per-session state kept by front ends: user variables and past results.

The engine never touches either; it is handed a scope built from the
registers on every evaluation.
'''

from collections import deque
from collections.abc import Mapping
from typing import NamedTuple

import logging
import math

import regex

from .util import VariableError
from .symbols import CONSTANTS, build_scope


log = logging.getLogger(__name__)


class Registers(Mapping):
    '''
    User variables, by lower-case name.

    Read-only as a mapping; go through store and remove to change it.
    '''

    NAME = regex.compile(r'[a-z][a-z0-9_]*', flags=regex.IGNORECASE)

    def __init__(self):
        self._values = dict()

    def __getitem__(self, name):
        return self._values[name]

    def __iter__(self):
        return iter(self._values)

    def __len__(self):
        return len(self._values)

    def store(self, name, value):
        '''
        Validate and store a variable, returning its normalised name.

        :param name: Variable name, any case.
        :param value: Number, or text parsing as one.
        '''
        name = str(name).strip().lower()
        text = str(value).strip()
        if not name or not text:
            raise VariableError('Enter both variable name and value.')
        if type(self).NAME.fullmatch(name) is None:
            raise VariableError('Variable names must start with a letter and '
                                'contain only letters, numbers, or '
                                'underscores.')
        if name in CONSTANTS:
            raise VariableError('Cannot override built-in constants '
                                '({}).'.format(', '.join(CONSTANTS)))
        try:
            number = float(text)
        except ValueError:
            number = math.nan
        if not math.isfinite(number):
            raise VariableError('Variable value must be a valid number.')
        self._values[name] = number
        log.debug('stored %s = %r', name, number)
        return name

    def remove(self, name):
        '''
        Forget a variable.
        '''
        name = str(name).strip().lower()
        try:
            del self._values[name]
        except KeyError:
            raise VariableError(
                'No such variable "{}".'.format(name)) from None
        log.debug('removed %s', name)

    def scope(self):
        '''
        Return the constants overlaid with these variables.
        '''
        return build_scope(self)


class Entry(NamedTuple):
    expression: str
    result: str


class History:
    '''
    Successful evaluations, newest first.
    '''

    def __init__(self):
        self._entries = deque()

    def add(self, expression, result):
        self._entries.appendleft(Entry(expression, result))

    def delete(self, index):
        '''
        Drop the entry at index, 0 being the newest.
        '''
        del self._entries[index]

    def clear(self):
        self._entries.clear()

    def __getitem__(self, index):
        return self._entries[index]

    def __iter__(self):
        return iter(self._entries)

    def __len__(self):
        return len(self._entries)
