"""Errors raised while lexing, parsing or evaluating an expression."""


class ExpressionError(Exception):
    """Base class for every malformed or unresolvable expression"""


class UnknownFunction(ExpressionError):
    def __init__(self, name):
        self.name = name
        super().__init__(f"Couldn't find function `{name}`")


class UnknownVariable(ExpressionError):
    def __init__(self, name):
        self.name = name
        super().__init__(f"Couldn't find variable `{name}`")


class InvalidToken(ExpressionError):
    def __init__(self, expected, found=None):
        self.expected = expected
        self.found = found
        super().__init__(f"Malformed expression, expected {expected}, found token {found!r}")


class NoMatchingToken(ExpressionError):
    def __init__(self, start, end=None):
        self.start = start
        self.end = end
        super().__init__(f"Couldn't find matching token to {start!r}, found {end!r}")


class AmbiguousOperation(ExpressionError):
    def __init__(self, tokens):
        self.tokens = list(tokens)
        super().__init__(f"Couldn't find a valid operation in tokens {self.tokens!r}")
