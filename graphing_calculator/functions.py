"""Built-in unary functions available to expressions."""

import math

import sympy as sp

X = sp.Symbol("x")

# Names must be purely alphabetic to be reachable from text; log2 is kept
# for callers building trees by hand and is spelt `lb` in expressions.
BUILTIN_FUNCTIONS = {
    "sin": sp.sin(X),
    "cos": sp.cos(X),
    "tan": sp.tan(X),
    "asin": sp.asin(X),
    "acos": sp.acos(X),
    "atan": sp.atan(X),
    "sinh": sp.sinh(X),
    "cosh": sp.cosh(X),
    "tanh": sp.tanh(X),
    "sqrt": sp.sqrt(X),
    "exp": sp.exp(X),
    "ln": sp.log(X),
    "log": sp.log(X, 10),
    "log2": sp.log(X, 2),
    "lb": sp.log(X, 2),
    "abs": sp.Abs(X),
    "floor": sp.floor(X),
    "ceil": sp.ceiling(X),
    "add": X + 1,
}


def real_function(func, name=None, at_zero=None):
    """
    Wrap a math-module callable so domain errors give nan/inf like IEEE floats.

    at_zero is returned for a zero argument the math module rejects, e.g. the
    -inf a logarithm has there. Overflow takes its sign from func itself at
    a unit argument of the same sign, so even functions stay positive.
    """
    def wrapper(value):
        try:
            return float(func(value))
        except ValueError:
            if value == 0 and at_zero is not None:
                return at_zero
            return math.nan
        except OverflowError:
            return math.copysign(math.inf, func(math.copysign(1.0, value)))

    wrapper.__name__ = name or getattr(func, "__name__", "function")
    return wrapper


def build_function_table(definitions=None):
    """Lambdify each sympy definition into a float -> float callable"""
    if definitions is None:
        definitions = BUILTIN_FUNCTIONS

    table = {}
    for name, definition in definitions.items():
        func = sp.lambdify(X, definition, "math")
        at_zero = -math.inf if definition.has(sp.log) else None
        table[name] = real_function(func, name, at_zero)
        # Symbolic form of the callable, for display
        table[name].definition = definition
    return table
