"""Terminal calculator: a small expression engine and braille function plots."""

__version__ = "0.1.0"

from .engine import calculate, compile_expression, default_functions
from .errors import (
    AmbiguousOperation,
    ExpressionError,
    InvalidToken,
    NoMatchingToken,
    UnknownFunction,
    UnknownVariable,
)
from .graph import render_graph
from .lexer import tokenize
from .parser import parse
