"""
Builds an expression tree from a token list.

There is no precedence table walk: each range of tokens is split at its
weakest top-level operator, taking the rightmost one on ties so that equal
precedence operators associate to the left. Parenthesised runs are skipped
while looking for that operator, and a range wrapped entirely in
parentheses is parsed without them.
"""

import logging
import math

from .errors import AmbiguousOperation, InvalidToken, NoMatchingToken, UnknownFunction
from .expr import Call, Operation, Value, Variable
from .tokens import Identifier, LeftParen, Number, Op, RightParen

logger = logging.getLogger(__name__)


class Parser:
    """Recursive parser over (start, end) ranges of one immutable token tuple"""

    def __init__(self, tokens, functions):
        self.tokens = tuple(tokens)
        self.functions = functions

    def parse(self):
        tree = self.parse_range(0, len(self.tokens))
        logger.debug("Parsed %d tokens into %r", len(self.tokens), tree)
        return tree

    def matching_paren(self, start, end):
        """
        Index of the RightParen closing a LeftParen that sits just before start.

        Raises NoMatchingToken if the range runs out first.
        """
        depth = 0
        last = None
        for index in range(start, end):
            token = self.tokens[index]
            if isinstance(token, LeftParen):
                depth += 1
            elif isinstance(token, RightParen):
                depth -= 1
            last = token
            if depth < 0:
                return index
        raise NoMatchingToken(LeftParen(), last)

    def split_point(self, start, end):
        """Index of the weakest, rightmost operator outside parentheses, or None"""
        split = None
        precedence = math.inf
        index = start
        while index < end:
            token = self.tokens[index]
            if isinstance(token, Op):
                if token.kind.precedence <= precedence:
                    split = index
                    precedence = token.kind.precedence
            elif isinstance(token, LeftParen):
                # Parentheses bind tighter than anything, skip their contents
                index = self.matching_paren(index + 1, end)
            index += 1
        return split

    def parse_range(self, start, end):
        tokens = self.tokens

        if end - start == 1:
            token = tokens[start]
            if isinstance(token, Number):
                return Value(token.value)
            if isinstance(token, Identifier):
                return Variable(token.name)
            raise InvalidToken("Number | Identifier", token)

        # If the range is wrapped in parentheses, remove them
        if start < end and isinstance(tokens[start], LeftParen):
            if self.matching_paren(start + 1, end) == end - 1:
                return self.parse_range(start + 1, end - 1)

        split = self.split_point(start, end)

        if split is None:
            return self.parse_call(start, end)

        return Operation(
            tokens[split].kind,
            self.parse_range(start, split),
            self.parse_range(split + 1, end),
        )

    def parse_call(self, start, end):
        """Parse `name ( ... )`, the only shape left once no operator is found"""
        tokens = self.tokens
        if (
            end - start >= 3
            and isinstance(tokens[start], Identifier)
            and isinstance(tokens[start + 1], LeftParen)
            and isinstance(tokens[end - 1], RightParen)
        ):
            name = tokens[start].name
            if name not in self.functions:
                raise UnknownFunction(name)
            arg = self.parse_range(start + 2, end - 1)
            return Call(arg, self.functions[name], name)

        raise AmbiguousOperation(tokens[start:end])


def parse(tokens, functions):
    """Parse a token list into an expression tree, resolving function names in functions."""
    return Parser(tokens, functions).parse()
