"""parser.py – Parse an argument string back into a ParameterSet.

State machine over the token list:

* **pre-command** – consume global flags valid before any command
* **command** – resolve one (or two) tokens to a command
* **flags** – consume flags until a full pass matches nothing, checking
  every flag against the support table for the resolved command
* **positionals** – consume exactly the command's positional layout

Dialects with ``positionals_first`` swap the last two phases.  Every
unknown, unsupported or malformed token fails the whole parse: the result is
either a complete ParameterSet or ``None``.
"""

from __future__ import annotations

import re

from discargs.codec import MISSING, PRESENT, PresentWithValue, ValueType, decode
from discargs.dialect import CommandSpec, Dialect, FlagSpec
from discargs.params import ParameterSet
from discargs.tokenizer import is_quoted, tokenize


def _decode_value(dialect: Dialect, spec: FlagSpec, raw: str) -> object | None:
    value = decode(
        spec.value_type,
        raw,
        bounds=spec.bounds,
        bool_syntax=dialect.bool_syntax,
        choices=spec.choices,
        allow_missing=True,
    )
    if value is MISSING:
        return None
    return value


def _store(params: ParameterSet, spec: FlagSpec, values: list[object]) -> None:
    if not values:
        params.set_state(spec.key, PRESENT)
    elif spec.multi:
        params.set_state(spec.key, PresentWithValue(tuple(values)))
    else:
        params.set_state(spec.key, PresentWithValue(values[0]))


def _consume_flag(
    params: ParameterSet, tokens: list[str], index: int, *, pre_command: bool = False
) -> int | None:
    """Try to read one flag at ``tokens[index]``.

    Returns the number of tokens consumed (0 if the token is not a flag) or
    ``None`` if the token is a flag that cannot be accepted here.
    """
    dialect = params.dialect
    token = tokens[index]

    name, inline = dialect.split_flag_token(token)

    spec, supported = dialect.match_flag(name, params.command, pre_command=pre_command)
    if spec is None:
        return 0
    if not supported:
        return None

    lo, hi = spec.arity_for(params.command)

    if inline is not None:
        if hi == 0:
            return None
        value = _decode_value(dialect, spec, inline)
        if value is None:
            if lo > 0:
                return None
            _store(params, spec, [])
        else:
            _store(params, spec, [value])
        return 1

    values: list[object] = []
    cursor = index + 1
    while len(values) < hi and cursor < len(tokens):
        candidate = tokens[cursor]
        if dialect.is_flag_token(candidate):
            break
        value = _decode_value(dialect, spec, candidate)
        if value is None:
            break
        values.append(value)
        cursor += 1

    if len(values) < lo:
        return None
    _store(params, spec, values)
    return cursor - index


def _consume_flags(
    params: ParameterSet, tokens: list[str], index: int, *, pre_command: bool = False
) -> int | None:
    while index < len(tokens):
        consumed = _consume_flag(params, tokens, index, pre_command=pre_command)
        if consumed is None:
            return None
        if consumed == 0:
            break
        index += consumed
    return index


def _consume_positionals(
    params: ParameterSet, spec: CommandSpec, tokens: list[str], index: int
) -> int | None:
    dialect = params.dialect
    for pos in spec.positionals:
        if index >= len(tokens):
            if pos.required:
                return None
            break

        token = tokens[index]
        if not is_quoted(token) and token.startswith(dialect.flag_prefix):
            if pos.value_type is ValueType.STRING or dialect.is_flag_token(token):
                return None

        value = decode(pos.value_type, token, bounds=pos.bounds, allow_missing=True)
        if value is None or value is MISSING:
            return None
        if pos.pattern is not None and not re.fullmatch(pos.pattern, str(value)):
            return None

        params.set_positional(pos.name, value)  # type: ignore[arg-type]
        index += 1
    return index


def parse(dialect: Dialect, raw: str | None) -> ParameterSet | None:
    """Parse *raw* under *dialect*; ``None`` on any grammar error."""
    tokens = tokenize(raw)
    if not tokens:
        return None

    params = ParameterSet(dialect)

    index = _consume_flags(params, tokens, 0, pre_command=True)
    if index is None:
        return None

    command, used = dialect.resolve_command(tokens, index)
    if command == dialect.none:
        return None
    params.command = command
    index += used

    spec = dialect.command_spec(command)
    if spec is None:
        return None

    if dialect.positionals_first:
        index = _consume_positionals(params, spec, tokens, index)
        if index is None:
            return None
        index = _consume_flags(params, tokens, index)
    else:
        index = _consume_flags(params, tokens, index)
        if index is None:
            return None
        index = _consume_positionals(params, spec, tokens, index)

    if index is None or index != len(tokens) or dialect.missing_required(params):
        return None
    return params
