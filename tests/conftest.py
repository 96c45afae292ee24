from pytest import Item, fixture

from infixcalc import Lexer, Converter, Registers, CLI


@fixture
def lexer():
    return Lexer()


@fixture
def rpn(lexer):
    '''
    Postfix order of an expression, as a list of token strings.
    '''
    def convert(expression):
        return [str(token)
                for token
                in Converter().convert(lexer.lex(expression))]
    return convert


@fixture
def registers():
    registers = Registers()
    registers.store('x', 3)
    return registers


@fixture
def cli():
    return CLI()


def pytest_assertion_pass(item: Item,
                          lineno: int,
                          orig: str,
                          expl: str) -> None:
    '''
    Log every passing assertion, to audit which expressions a run checked.

    Use with pytest -rP.
    '''
    print('given', item.name + ':' + str(lineno), str(orig))
    print('actual', item.name + ':' + str(lineno),
          '\n'.join(str(expl).splitlines()[:-2]))
