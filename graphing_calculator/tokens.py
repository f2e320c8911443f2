"""Token types produced by the lexer and consumed by the parser."""

import operator
from dataclasses import dataclass
from enum import Enum

from .lerp import divide


class OpKind(Enum):
    """Binary operators; a higher precedence binds tighter."""

    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"

    @property
    def precedence(self):
        return _PRECEDENCE[self]

    def apply(self, lhs, rhs):
        return _APPLY[self](lhs, rhs)


_PRECEDENCE = {
    OpKind.ADD: 1,
    OpKind.SUB: 1,
    OpKind.MUL: 2,
    OpKind.DIV: 2,
}

_APPLY = {
    OpKind.ADD: operator.add,
    OpKind.SUB: operator.sub,
    OpKind.MUL: operator.mul,
    OpKind.DIV: divide,
}


class Token:
    """Base class for every token"""


@dataclass(frozen=True)
class Number(Token):
    value: float

    def __str__(self):
        if float(self.value).is_integer():
            return str(int(self.value))
        return repr(self.value)


@dataclass(frozen=True)
class Op(Token):
    kind: OpKind

    def __str__(self):
        return self.kind.value


@dataclass(frozen=True)
class Identifier(Token):
    name: str

    def __str__(self):
        return self.name


@dataclass(frozen=True)
class LeftParen(Token):
    def __str__(self):
        return "("


@dataclass(frozen=True)
class RightParen(Token):
    def __str__(self):
        return ")"


def detokenize(tokens):
    """Render tokens back into expression text, one space between each."""
    return " ".join(str(token) for token in tokens)
