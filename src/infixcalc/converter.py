from .util import ExpressionSyntaxError
from .symbols import Associativity, operator_spec
from .lexer import Kind


class Converter:
    '''
    Shunting-yard conversion of infix tokens into postfix (RPN) order.

    Parentheses are consumed; they never reach the output.
    '''

    def convert(self, tokens):
        '''
        Return the tokens, rearranged into a postfix list.
        '''
        output = []
        stack = []
        for token in tokens:
            if token.kind in {Kind.NUMBER, Kind.IDENTIFIER}:
                output.append(token)
            elif token.kind is Kind.FUNCTION:
                stack.append(token)
            elif token.kind is Kind.OPERATOR:
                while stack and self._outranks(stack[-1], token):
                    output.append(stack.pop())
                stack.append(token)
            elif token.value == '(':
                stack.append(token)
            else:
                self._close(stack, output)
        while stack:
            top = stack.pop()
            if top.kind is Kind.PAREN:
                raise ExpressionSyntaxError('Mismatched parentheses.')
            output.append(top)
        return output

    def _outranks(self, top, token):
        '''
        Return True if the stacked operator must be output before token.
        '''
        if top.kind is not Kind.OPERATOR:
            return False
        stacked, incoming = operator_spec(top), operator_spec(token)
        return (stacked.precedence > incoming.precedence or
                stacked.precedence == incoming.precedence and
                incoming.associativity is Associativity.LEFT)

    def _close(self, stack, output):
        '''
        Unwind the stack down to the matching '(' and drop it.

        A function right below the group takes the group as its argument.
        '''
        while stack:
            top = stack.pop()
            if top.kind is Kind.PAREN:
                break
            output.append(top)
        else:
            raise ExpressionSyntaxError('Mismatched parentheses.')
        if stack and stack[-1].kind is Kind.FUNCTION:
            output.append(stack.pop())
