from functools import wraps


class CalcError(Exception):
    '''
    Base of everything the calculator reports back to the user.

    The first argument is always the human readable message.
    '''

    def __str__(self):
        return str(self.args[0]) if self.args else ''


class ExpressionSyntaxError(CalcError):
    pass


class SemanticError(CalcError):
    pass


class DomainError(CalcError):
    pass


class NumericError(CalcError):
    pass


class EmptyExpressionError(CalcError):
    pass


class VariableError(CalcError):
    pass


def wrap_user_errors(fmt, error=NumericError,
                     catch=(ArithmeticError, ValueError)):
    '''
    Decorator that converts library exceptions to calculator errors.

    Passes through CalcErrors.
    '''
    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except CalcError:
                raise
            except catch as e:
                raise error(fmt.format(*args, **kwargs)) from e
        return wrapper
    return decorator
