"""Command-line argument quoting.

The engine hands the child a single argument string. ``quote`` builds that
string from logical tokens and ``split_args`` parses it back using the
Windows C runtime rule (the rule ``CommandLineToArgvW`` and .NET use).
"""

from __future__ import annotations

from collections.abc import Iterable

_QUOTE = '"'


def _has_whitespace(token: str) -> bool:
    return any(ch.isspace() for ch in token)


def _quote_token(token: str) -> str:
    if _has_whitespace(token):
        return _QUOTE + token.replace(_QUOTE, _QUOTE * 2) + _QUOTE
    return token.replace(_QUOTE, _QUOTE * 3)


def quote(tokens: Iterable[str]) -> str:
    r'''Convert logical command-line tokens into one argument string.

    Tokens without whitespace have every quote tripled; tokens with
    whitespace have every quote doubled and are wrapped in quotes.

    Examples:
        >>> quote(["foo bar", "zar"])
        '"foo bar" zar'
        >>> quote(['foo"bar', "zar"])
        'foo"""bar zar'
    '''
    return " ".join(_quote_token(token) for token in tokens)


def args(*tokens: str) -> str:
    """Variadic form of :func:`quote`."""
    return quote(tokens)


def split_args(line: str) -> list[str]:
    """Split an argument string into tokens.

    Rules:
    - spaces and tabs separate arguments outside quotes
    - ``"`` toggles the quoted region
    - ``""`` inside a quoted region is a literal quote
    - backslashes are literal unless they precede ``"``; then each pair
      becomes one backslash and an odd one escapes the quote
    """
    result: list[str] = []
    i = 0
    n = len(line)
    while i < n:
        while i < n and line[i] in " \t":
            i += 1
        if i == n:
            break

        current: list[str] = []
        in_quotes = False
        while i < n:
            backslashes = 0
            while i < n and line[i] == "\\":
                i += 1
                backslashes += 1
            if backslashes:
                if i < n and line[i] == _QUOTE:
                    current.append("\\" * (backslashes // 2))
                    if backslashes % 2:
                        current.append(_QUOTE)
                        i += 1
                else:
                    current.append("\\" * backslashes)
                continue

            ch = line[i]
            if ch == _QUOTE:
                if in_quotes and i + 1 < n and line[i + 1] == _QUOTE:
                    current.append(_QUOTE)
                    i += 1
                else:
                    in_quotes = not in_quotes
                i += 1
                continue

            if ch in " \t" and not in_quotes:
                break

            current.append(ch)
            i += 1

        result.append("".join(current))
    return result


__all__ = ["args", "quote", "split_args"]
