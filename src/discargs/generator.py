"""generator.py – Render a ParameterSet as an argument string.

The algorithm is shared by every dialect:

1. pre-command global flags that are present
2. the command spelling (``None`` if no command is selected, empty for
   an unnamed default command)
3. flags in declaration order, skipping any the support table does not
   allow for the current command
4. the command's positional arguments (before the flags for dialects with
   ``positionals_first``)

Any structural problem yields ``None`` instead of a partial line.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from discargs.codec import PresentNoValue, PresentWithValue, ValueType, encode, unquote
from discargs.dialect import CommandSpec, Dialect, FlagSpec

if TYPE_CHECKING:
    from discargs.params import ParameterSet


def _flag_tokens(
    dialect: Dialect, spec: FlagSpec, params: ParameterSet
) -> list[str] | None:
    state = params[spec.key]
    lo, hi = spec.arity_for(params.command)

    if isinstance(state, PresentNoValue):
        if lo > 0:
            return None
        return [spec.name]

    if not isinstance(state, PresentWithValue):
        return []

    values = state.value if isinstance(state.value, tuple) else (state.value,)
    if not lo <= len(values) <= hi:
        return None

    rendered: list[str] = []
    for value in values:
        if isinstance(value, str) and '"' in value:
            return None
        rendered.append(
            encode(spec.value_type, value, bool_syntax=dialect.bool_syntax, quote=spec.quoted)
        )

    if dialect.use_equals and len(rendered) == 1:
        return [f"{spec.name}={rendered[0]}"]
    return [spec.name, *rendered]


def _positional_tokens(spec: CommandSpec, params: ParameterSet) -> list[str] | None:
    tokens: list[str] = []
    for pos in spec.positionals:
        value = params.positional(pos.name)
        if value is None or (isinstance(value, str) and not unquote(value).strip()):
            if pos.required:
                return None
            break

        if pos.value_type is ValueType.STRING:
            text = unquote(str(value))
            if '"' in text:
                return None
            if pos.pattern is not None and not re.fullmatch(pos.pattern, text):
                return None
            if pos.quoted:
                tokens.append(f'"{text}"')
            elif any(ch.isspace() for ch in text):
                return None
            else:
                tokens.append(text)
        else:
            if isinstance(value, bool) or not isinstance(value, int):
                return None
            if pos.bounds is not None and not pos.bounds.contains(value):
                return None
            tokens.append(str(value))
    return tokens


def generate(params: ParameterSet) -> str | None:
    """Return the argument string for *params*, or ``None`` if it is invalid."""
    dialect = params.dialect
    command = params.command
    spec = dialect.command_spec(command)
    if command == dialect.none or spec is None:
        return None
    if dialect.missing_required(params):
        return None

    parts: list[str] = []

    for flag in dialect.pre_command_flags:
        tokens = _flag_tokens(dialect, flag, params)
        if tokens is None:
            return None
        parts.extend(tokens)

    parts.extend(spec.spelling)

    positionals = _positional_tokens(spec, params)
    if positionals is None:
        return None
    if dialect.positionals_first:
        parts.extend(positionals)

    for flag in dialect.aux_flags:
        if not dialect.is_supported(flag.key, command):
            continue
        if not params.is_present(flag.key):
            continue
        if any(params.is_present(other) for other in flag.suppressed_by):
            continue
        tokens = _flag_tokens(dialect, flag, params)
        if tokens is None:
            return None
        parts.extend(tokens)

    if not dialect.positionals_first:
        parts.extend(positionals)

    return " ".join(parts)
