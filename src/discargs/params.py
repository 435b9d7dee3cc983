"""params.py – The Parameter Set: one job's command, flags and positionals.

A :class:`ParameterSet` is bound to a :class:`~discargs.dialect.Dialect`
and holds:

* the selected command (the dialect's ``NONE`` sentinel until set)
* a :class:`~discargs.codec.FlagState` for every flag that was touched
* the command-specific positional fields (drive, filename, speed, ...)

It is filled either by :func:`discargs.parser.parse` or by
:func:`discargs.defaults.derive_defaults`, and rendered with
:meth:`ParameterSet.generate_parameters`.
"""

from __future__ import annotations

import os
from enum import Enum
from typing import Any

from discargs.codec import (
    ABSENT,
    PRESENT,
    FlagState,
    PresentWithValue,
    Value,
    ValueType,
    check_value,
)
from discargs.dialect import Dialect, FlagSpec

_UNSET: Any = object()


class ParameterSet:
    """Structured, mutable description of one invocation of a backend tool."""

    def __init__(self, dialect: Dialect) -> None:
        self.dialect = dialect
        self.command: Enum = dialect.none
        self._flags: dict[Enum, FlagState] = {}
        self._positionals: dict[str, int | str] = {}

    # -----------------------------------------------------------------------
    # Flags
    # -----------------------------------------------------------------------

    def __getitem__(self, flag: Enum) -> FlagState:
        return self._flags.get(flag, ABSENT)

    def _spec(self, flag: Enum) -> FlagSpec:
        spec = self.dialect.flag_spec(flag)
        if spec is None:
            raise KeyError(f"{flag!r} is not a {self.dialect.name} flag")
        return spec

    def set_flag(self, flag: Enum, value: Value = _UNSET) -> None:
        """Mark *flag* present, optionally with a typed value.

        Raises ``TypeError`` when the value does not match the flag's type,
        width or bounds; parse input never reaches this path unchecked.
        """
        spec = self._spec(flag)
        if value is _UNSET or value is None:
            if spec.value_type is not ValueType.PRESENCE and not spec.optional_value:
                raise TypeError(f"{spec.name} requires a value")
            self._flags[flag] = PRESENT
            return
        if not _valid_value(spec, value):
            raise TypeError(f"invalid value {value!r} for {spec.name} ({spec.value_type.value})")
        if spec.multi and not isinstance(value, tuple):
            value = (value,)
        self._flags[flag] = PresentWithValue(value)

    def enable(self, flag: Enum) -> None:
        """Mark *flag* present without a value."""
        self.set_flag(flag)

    def set_state(self, flag: Enum, state: FlagState) -> None:
        self._spec(flag)
        if state.present:
            self._flags[flag] = state
        else:
            self._flags.pop(flag, None)

    def clear_flag(self, flag: Enum) -> None:
        self._flags.pop(flag, None)

    def is_present(self, flag: Enum) -> bool:
        return self[flag].present

    def value(self, flag: Enum, default: Any = None) -> Any:
        state = self[flag]
        if isinstance(state, PresentWithValue):
            return state.value
        return default

    def present_flags(self) -> list[Enum]:
        """Present flags in dialect declaration order."""
        return [f.key for f in self.dialect.flags if self.is_present(f.key)]

    # -----------------------------------------------------------------------
    # Positionals
    # -----------------------------------------------------------------------

    def set_positional(self, name: str, value: int | str | None) -> None:
        if name not in self.dialect.positional_names:
            raise KeyError(f"{name!r} is not a {self.dialect.name} positional argument")
        if value is None:
            self._positionals.pop(name, None)
        else:
            self._positionals[name] = value

    def positional(self, name: str, default: Any = None) -> Any:
        return self._positionals.get(name, default)

    @property
    def positionals(self) -> dict[str, int | str]:
        return dict(self._positionals)

    # -----------------------------------------------------------------------
    # Generic accessors
    # -----------------------------------------------------------------------

    def _field(self, ref: str | Enum) -> Any:
        if isinstance(ref, str):
            return self.positional(ref)
        return self.value(ref)

    @property
    def input_path(self) -> str | None:
        """Drive or input path of the current command, if any."""
        for ref in self.dialect.input_fields:
            value = self._field(ref)
            if value:
                return str(value)
        return None

    @property
    def output_path(self) -> str | None:
        parts = [str(v) for v in (self._field(ref) for ref in self.dialect.output_fields) if v]
        if not parts:
            return None
        return os.path.join(*parts)

    @property
    def speed(self) -> int | None:
        ref = self.dialect.speed_field
        if ref is None:
            return None
        value = self._field(ref)
        return value if isinstance(value, int) else None

    @speed.setter
    def speed(self, value: int | None) -> None:
        ref = self.dialect.speed_field
        if ref is None:
            return
        if isinstance(ref, str):
            self.set_positional(ref, value)
        elif value is None:
            self.clear_flag(ref)
        else:
            self.set_flag(ref, value)

    @property
    def media_type(self) -> Any:
        """Media type the current command dumps, or ``None``."""
        spec = self.dialect.command_spec(self.command)
        return spec.media_type if spec is not None else None

    # -----------------------------------------------------------------------
    # Collaborator interface
    # -----------------------------------------------------------------------

    def generate_parameters(self) -> str | None:
        from discargs.generator import generate

        return generate(self)

    def is_dumping_command(self) -> bool:
        spec = self.dialect.command_spec(self.command)
        return spec is not None and spec.dumping

    def is_valid(self) -> bool:
        return self.generate_parameters() is not None

    # -----------------------------------------------------------------------
    # Misc
    # -----------------------------------------------------------------------

    def copy(self) -> ParameterSet:
        clone = ParameterSet(self.dialect)
        clone.command = self.command
        clone._flags = dict(self._flags)
        clone._positionals = dict(self._positionals)
        return clone

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a plain dict for JSON output."""
        flags: dict[str, Any] = {}
        for key in self.present_flags():
            spec = self._spec(key)
            value = self.value(key, default=True)
            flags[spec.name] = list(value) if isinstance(value, tuple) else value
        return {
            "dialect": self.dialect.name,
            "command": self.dialect.command_spelling(self.command),
            "flags": flags,
            "positionals": dict(self._positionals),
            "dumping": self.is_dumping_command(),
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ParameterSet):
            return NotImplemented
        return (
            self.dialect.name == other.dialect.name
            and self.command == other.command
            and self._flags == other._flags
            and self._positionals == other._positionals
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"ParameterSet({self.dialect.name}, command={self.command.name}, "
            f"flags={len(self._flags)}, positionals={self._positionals!r})"
        )


def _valid_value(spec: FlagSpec, value: Any) -> bool:
    if spec.value_type is ValueType.PRESENCE:
        return False
    if spec.multi:
        values = value if isinstance(value, tuple) else (value,)
        if not 1 <= len(values) <= spec.max_values:
            return False
        return all(check_value(spec.value_type, v, spec.bounds, spec.choices) for v in values)
    return check_value(spec.value_type, value, spec.bounds, spec.choices)
