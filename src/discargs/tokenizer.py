"""tokenizer.py – Split a raw argument string into tokens.

Whitespace separates tokens except inside double quotes.  A quoted span,
optionally prefixed by ``name=`` (as in ``--image-path="C:\\My Dumps"``),
is kept as a single token with its quotes.  An unterminated quote runs to
the end of the string.
"""

from __future__ import annotations

import re

from discargs.codec import unquote

_TOKEN_RE = re.compile(r'(?:[A-Za-z0-9\-]*=)?"[^"]*(?:"|$)|[^\s"]+(?:"[^"]*(?:"|$))?')


def tokenize(raw: str | None) -> list[str]:
    """Return the tokens of *raw*; never raises."""
    if not raw:
        return []
    return _TOKEN_RE.findall(raw.strip())


def is_quoted(token: str) -> bool:
    """True if the token (or its value after ``name=``) starts with a quote."""
    if token.startswith('"'):
        return True
    name, sep, rest = token.partition("=")
    return bool(sep) and rest.startswith('"') and '"' not in name


__all__ = ["is_quoted", "tokenize", "unquote"]
