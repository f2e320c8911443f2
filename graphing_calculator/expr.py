"""
Expression tree and its evaluator.

Trees are immutable once built. Evaluation walks the tree against a mapping
of variable values and never modifies either; division by zero and math
domain errors come back as inf/nan rather than exceptions.
"""

from dataclasses import dataclass, field
from typing import Callable, Mapping

import sympy as sp

from .errors import UnknownVariable
from .functions import X
from .tokens import OpKind


class Expr:
    """Base class for tree nodes"""

    def evaluate(self, variables: Mapping[str, float]) -> float:
        raise NotImplementedError

    def to_sympy(self):
        raise NotImplementedError


@dataclass(frozen=True)
class Value(Expr):
    value: float

    def evaluate(self, variables):
        return self.value

    def to_sympy(self):
        if float(self.value).is_integer():
            return sp.Integer(int(self.value))
        return sp.Float(self.value)


@dataclass(frozen=True)
class Variable(Expr):
    name: str

    def evaluate(self, variables):
        try:
            return variables[self.name]
        except KeyError:
            raise UnknownVariable(self.name) from None

    def to_sympy(self):
        return sp.Symbol(self.name)


@dataclass(frozen=True)
class Operation(Expr):
    op: OpKind
    lhs: Expr
    rhs: Expr

    def evaluate(self, variables):
        # Left side first so its errors win
        lhs = self.lhs.evaluate(variables)
        rhs = self.rhs.evaluate(variables)
        return self.op.apply(lhs, rhs)

    def to_sympy(self):
        lhs = self.lhs.to_sympy()
        rhs = self.rhs.to_sympy()
        if self.op is OpKind.ADD:
            return sp.Add(lhs, rhs, evaluate=False)
        if self.op is OpKind.SUB:
            return sp.Add(lhs, sp.Mul(-1, rhs, evaluate=False), evaluate=False)
        if self.op is OpKind.MUL:
            return sp.Mul(lhs, rhs, evaluate=False)
        return sp.Mul(lhs, sp.Pow(rhs, -1, evaluate=False), evaluate=False)


@dataclass(frozen=True)
class Call(Expr):
    arg: Expr
    function: Callable[[float], float] = field(repr=False)
    name: str = ""

    def evaluate(self, variables):
        return self.function(self.arg.evaluate(variables))

    def to_sympy(self):
        arg = self.arg.to_sympy()
        # Only callables built from a sympy definition know their symbolic form
        definition = getattr(self.function, "definition", None)
        if definition is not None:
            return definition.subs(X, arg)
        return sp.Function(self.name or "f")(arg)


def derivative(expr, variable="x"):
    """Symbolic derivative of expr, for display"""
    return sp.simplify(sp.diff(expr.to_sympy(), sp.Symbol(variable)))
