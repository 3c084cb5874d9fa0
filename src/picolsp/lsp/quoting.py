"""Quote removal for raw command-line words."""

from __future__ import annotations


def dequote(token: str) -> str:
    """
    Return the literal value of a raw shell word.

    Applies single quotes, double quotes and backslash escapes only;
    expansions such as ``$(...)`` are copied through untouched.

    Quote handling:
        - Unquoted: backslash takes the next character literally
        - Single quotes: everything is literal up to the closing quote
        - Double quotes: backslash escapes the next character

    A lone trailing backslash is an escape still being typed and
    contributes nothing. An unterminated quote runs to the end of the word.
    """
    chars: list[str] = []
    quote: str | None = None
    i = 0
    n = len(token)

    while i < n:
        char = token[i]

        if quote == "'":
            if char == "'":
                quote = None
            else:
                chars.append(char)
            i += 1
        elif char == "\\":
            if i + 1 < n:
                chars.append(token[i + 1])
            i += 2
        elif quote == '"':
            if char == '"':
                quote = None
            else:
                chars.append(char)
            i += 1
        elif char in "'\"":
            quote = char
            i += 1
        else:
            chars.append(char)
            i += 1

    return "".join(chars)
