"""Registry of supported backend dialects."""

from __future__ import annotations

from discargs.dialect import Dialect
from discargs.dialects import chef, creator, dd, redumper

DIALECTS: dict[str, Dialect] = {
    d.name: d for d in (creator.DIALECT, chef.DIALECT, redumper.DIALECT, dd.DIALECT)
}

# Alternate names users reach for.
_ALIASES = {
    "dic": "creator",
    "discimagecreator": "creator",
    "dichef": "chef",
    "discimagechef": "chef",
    "aaru": "chef",
}


def dialect_names() -> list[str]:
    return sorted(DIALECTS)


def get_dialect(name: str) -> Dialect:
    """Return the dialect registered as *name* (case-insensitive).

    Raises ``KeyError`` listing the known names when there is no match.
    """
    key = name.strip().lower()
    key = _ALIASES.get(key, key)
    try:
        return DIALECTS[key]
    except KeyError:
        raise KeyError(
            f"unknown dialect {name!r} (known: {', '.join(dialect_names())})"
        ) from None
