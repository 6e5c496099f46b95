"""
Tokenizer for command input.

Splits a raw line on unquoted whitespace. A single or double quote opens a
span that only the same quote character closes; whitespace inside the span
is kept. An unterminated quote consumes the rest of the line. Quote
characters are never part of a token and cannot be escaped.
"""

from __future__ import annotations

QUOTE_CHARS = ('"', "'")


def tokenize(line: str) -> list[str]:
    """
    Split a line into tokens, respecting quoted spans.

    Examples:
        'move north' -> ['move', 'north']
        'talk "temple guard"' -> ['talk', 'temple guard']
        "say 'unterminated span" -> ['say', 'unterminated span']
    """
    tokens: list[str] = []
    current = ""
    quote_char: str | None = None

    for char in line:
        if quote_char is None and char in QUOTE_CHARS:
            quote_char = char
        elif char == quote_char:
            quote_char = None
        elif quote_char is None and char.isspace():
            if current:
                tokens.append(current)
                current = ""
        else:
            current += char

    if current:
        tokens.append(current)

    return tokens
