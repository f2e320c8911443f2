"""Shared fixtures for the calculator tests."""

import pytest

from graphing_calculator.engine import default_functions
from graphing_calculator.lexer import tokenize
from graphing_calculator.parser import parse


@pytest.fixture
def functions():
    """Built-in function table."""
    return default_functions()


@pytest.fixture
def compile_text(functions):
    """Tokenize and parse text with the built-in functions."""

    def _compile(text):
        return parse(tokenize(text), functions)

    return _compile
