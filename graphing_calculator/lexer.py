"""Turns expression text into a flat list of tokens."""

import logging

from .tokens import Identifier, LeftParen, Number, Op, OpKind, RightParen

logger = logging.getLogger(__name__)

RADIX_PREFIXES = {
    "x": 16,
    "o": 8,
    "b": 2,
}

SINGLE_CHAR_TOKENS = {
    "+": Op(OpKind.ADD),
    "-": Op(OpKind.SUB),
    "*": Op(OpKind.MUL),
    "/": Op(OpKind.DIV),
    "(": LeftParen(),
    ")": RightParen(),
}


def _digit_value(char, radix):
    """Value of char as a digit in radix, or None if it isn't one"""
    if not char.isascii():
        return None
    try:
        value = int(char, 16)
    except ValueError:
        return None
    return value if value < radix else None


def tokenize(text):
    """
    Scan text left to right into tokens.

    Numbers are unsigned integers with an optional 0x / 0o / 0b prefix,
    identifiers are runs of ascii letters. Anything that isn't a digit,
    letter, operator or parenthesis (whitespace included) is skipped.
    """
    tokens = []
    pos = 0
    length = len(text)

    while pos < length:
        char = text[pos]
        pos += 1

        if char.isascii() and char.isdigit():
            radix = 10

            if char == "0":
                # Use prefix to indicate base
                if pos < length:
                    radix = RADIX_PREFIXES.get(text[pos].lower(), 10)
                if radix != 10:
                    pos += 1
                total = 0.0
            else:
                total = float(_digit_value(char, radix))

            while pos < length:
                digit = _digit_value(text[pos], radix)
                if digit is None:
                    break
                total = total * radix + digit
                pos += 1

            tokens.append(Number(total))

        elif char in SINGLE_CHAR_TOKENS:
            tokens.append(SINGLE_CHAR_TOKENS[char])

        elif char.isascii() and char.isalpha():
            start = pos - 1
            while pos < length and text[pos].isascii() and text[pos].isalpha():
                pos += 1
            tokens.append(Identifier(text[start:pos]))

    logger.debug("Tokenized %r into %d tokens", text, len(tokens))
    return tokens
