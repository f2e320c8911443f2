"""Text in, number out: the calculator pipeline in one place."""

from .functions import build_function_table
from .lexer import tokenize
from .parser import parse

_default_functions = None


def default_functions():
    """Built-in function table, lambdified once and shared"""
    global _default_functions
    if _default_functions is None:
        _default_functions = build_function_table()
    return _default_functions


def compile_expression(text, functions=None):
    """Tokenize and parse text into a tree ready for repeated evaluation"""
    if functions is None:
        functions = default_functions()
    return parse(tokenize(text), functions)


def calculate(text, functions=None, variables=None):
    """Evaluate text once. Raises ExpressionError on malformed input."""
    tree = compile_expression(text, functions)
    return tree.evaluate(variables if variables is not None else {})
