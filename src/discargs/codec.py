"""codec.py – Typed value codec for flag values.

Decodes a single raw token into a typed Python value and encodes it back to
its canonical textual form.  The codec knows nothing about dialects beyond
the boolean spelling and the optional bounds it is handed.

Decode never raises on malformed input: it returns ``None`` for failure and
:data:`MISSING` when a string value was omitted (``""`` or whitespace).

Integer tokens accept, in this order:

* a plain decimal numeral (``-12``, ``48``)
* a ``0x``/``0X`` hexadecimal numeral (``0x1F``)
* either of the above followed by one unit suffix letter:
  ``c`` ×1, ``w`` ×2, ``d`` ×4, ``q`` ×8, ``k`` ×1024, ``M`` ×1024²,
  ``G`` ×1024³ (``10k`` == ``10240``)

The multiplied value must fit the type width and the bounds.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Union

# ---------------------------------------------------------------------------
# Value types
# ---------------------------------------------------------------------------


class ValueType(Enum):
    """The closed set of value types a flag can carry."""

    PRESENCE = "presence"
    BOOLEAN = "boolean"
    INT8 = "int8"
    INT16 = "int16"
    INT32 = "int32"
    INT64 = "int64"
    UINT8 = "uint8"
    UINT16 = "uint16"
    UINT32 = "uint32"
    UINT64 = "uint64"
    STRING = "string"

    @property
    def is_integer(self) -> bool:
        return self in _WIDTHS

    @property
    def width_range(self) -> tuple[int, int]:
        """Inclusive (min, max) representable by this integer type."""
        return _WIDTHS[self]


_WIDTHS: dict[ValueType, tuple[int, int]] = {
    ValueType.INT8: (-(2**7), 2**7 - 1),
    ValueType.INT16: (-(2**15), 2**15 - 1),
    ValueType.INT32: (-(2**31), 2**31 - 1),
    ValueType.INT64: (-(2**63), 2**63 - 1),
    ValueType.UINT8: (0, 2**8 - 1),
    ValueType.UINT16: (0, 2**16 - 1),
    ValueType.UINT32: (0, 2**32 - 1),
    ValueType.UINT64: (0, 2**64 - 1),
}

Value = Union[bool, int, str, tuple]


@dataclass(frozen=True)
class Bounds:
    """Optional inclusive range applied on top of the type width."""

    lower: int | None = None
    upper: int | None = None

    def contains(self, value: int) -> bool:
        if self.lower is not None and value < self.lower:
            return False
        return not (self.upper is not None and value > self.upper)


@dataclass(frozen=True)
class BoolSyntax:
    """Canonical spellings of a dialect's boolean literals."""

    true_text: str = "true"
    false_text: str = "false"
    case_sensitive: bool = False


DEFAULT_BOOL_SYNTAX = BoolSyntax()


# ---------------------------------------------------------------------------
# Flag state
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Absent:
    """The flag was never mentioned."""

    present = False
    has_value = False


@dataclass(frozen=True)
class PresentNoValue:
    """The flag was written without a value."""

    present = True
    has_value = False


@dataclass(frozen=True)
class PresentWithValue:
    """The flag was written with a typed value attached."""

    value: Value
    present = True
    has_value = True


FlagState = Union[Absent, PresentNoValue, PresentWithValue]

ABSENT = Absent()
PRESENT = PresentNoValue()


class _Missing:
    """Marker for an omitted value, distinct from a decode failure."""

    _instance: _Missing | None = None

    def __new__(cls) -> _Missing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING = _Missing()


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------

_DECIMAL_RE = re.compile(r"[+-]?[0-9]+")
_HEX_RE = re.compile(r"0[xX][0-9A-Fa-f]+")

UNIT_SUFFIXES: dict[str, int] = {
    "c": 1,
    "w": 2,
    "d": 4,
    "q": 8,
    "k": 1024,
    "M": 1024**2,
    "G": 1024**3,
}


def unquote(raw: str) -> str:
    """Strip one layer of surrounding double quotes."""
    if len(raw) >= 2 and raw[0] == '"' and raw[-1] == '"':
        return raw[1:-1]
    if raw.startswith('"'):
        # Unterminated quote from the tokenizer
        return raw[1:]
    return raw


def _parse_numeral(text: str) -> int | None:
    if _DECIMAL_RE.fullmatch(text):
        try:
            return int(text, 10)
        except ValueError:
            # Over the interpreter's digit limit, far outside every width
            return None
    if _HEX_RE.fullmatch(text):
        return int(text[2:], 16)
    return None


def decode_integer(
    value_type: ValueType, raw: str, bounds: Bounds | None = None
) -> int | None:
    """Decode an integer token, or return ``None`` if it is not valid."""
    text = unquote(raw.strip()).strip()
    if not text:
        return None

    value = _parse_numeral(text)
    if value is None and len(text) > 1 and text[-1] in UNIT_SUFFIXES:
        base = _parse_numeral(text[:-1])
        if base is not None:
            value = base * UNIT_SUFFIXES[text[-1]]
    if value is None:
        return None

    lo, hi = value_type.width_range
    if not lo <= value <= hi:
        return None
    if bounds is not None and not bounds.contains(value):
        return None
    return value


def decode_boolean(raw: str, syntax: BoolSyntax = DEFAULT_BOOL_SYNTAX) -> bool | None:
    text = unquote(raw.strip())
    if syntax.case_sensitive:
        if text == syntax.true_text:
            return True
        if text == syntax.false_text:
            return False
        return None
    folded = text.casefold()
    if folded == syntax.true_text.casefold():
        return True
    if folded == syntax.false_text.casefold():
        return False
    return None


def decode_string(
    raw: str,
    *,
    choices: tuple[str, ...] | None = None,
    allow_missing: bool = False,
) -> str | _Missing | None:
    text = unquote(raw)
    if not text.strip():
        return MISSING if allow_missing else None
    if choices is not None:
        for choice in choices:
            if choice.casefold() == text.casefold():
                return choice
        return None
    return text


def decode(
    value_type: ValueType,
    raw: str,
    *,
    bounds: Bounds | None = None,
    bool_syntax: BoolSyntax = DEFAULT_BOOL_SYNTAX,
    choices: tuple[str, ...] | None = None,
    allow_missing: bool = False,
) -> Value | _Missing | None:
    """Decode *raw* as *value_type*.

    Returns the typed value, :data:`MISSING` for an omitted string when
    *allow_missing* is set, or ``None`` when the token is not a valid
    literal of the type.  ``PRESENCE`` flags carry no value, so decoding
    one always fails.
    """
    if value_type is ValueType.PRESENCE:
        return None
    if value_type is ValueType.BOOLEAN:
        return decode_boolean(raw, bool_syntax)
    if value_type is ValueType.STRING:
        return decode_string(raw, choices=choices, allow_missing=allow_missing)
    return decode_integer(value_type, raw, bounds)


# ---------------------------------------------------------------------------
# Encoding
# ---------------------------------------------------------------------------


def needs_quotes(text: str) -> bool:
    return any(ch.isspace() for ch in text)


def encode(
    value_type: ValueType,
    value: Value,
    *,
    bool_syntax: BoolSyntax = DEFAULT_BOOL_SYNTAX,
    quote: bool = False,
) -> str:
    """Render *value* in canonical form.

    Integers are always decimal and booleans use the dialect spelling, so a
    suffix or hex marker typed by a user is not reproduced.  Strings are
    wrapped in double quotes when *quote* is set or they contain whitespace.
    """
    if value_type is ValueType.BOOLEAN:
        return bool_syntax.true_text if value else bool_syntax.false_text
    if value_type is ValueType.STRING:
        text = str(value)
        if quote or needs_quotes(text):
            return f'"{text}"'
        return text
    if value_type is ValueType.PRESENCE:
        raise ValueError("presence flags have no value to encode")
    return str(int(value))


def check_value(
    value_type: ValueType,
    value: object,
    bounds: Bounds | None = None,
    choices: tuple[str, ...] | None = None,
) -> bool:
    """Return True if *value* is a legal decoded value of *value_type*.

    Every value stored in a present-with-value flag passes this check, and
    a value that passes survives an encode/decode round trip.
    """
    if value_type is ValueType.PRESENCE:
        return False
    if value_type is ValueType.BOOLEAN:
        return isinstance(value, bool)
    if value_type is ValueType.STRING:
        if not isinstance(value, str) or not value.strip() or '"' in value:
            return False
        return choices is None or value in choices
    if isinstance(value, bool) or not isinstance(value, int):
        return False
    lo, hi = value_type.width_range
    if not lo <= value <= hi:
        return False
    return bounds is None or bounds.contains(value)
