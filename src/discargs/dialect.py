"""dialect.py – Table-driven command/flag grammar of one external tool.

A :class:`Dialect` bundles everything that differs between backends:

* the Command and Flag enumerations and their spellings
* the command → positional-argument layout
* the flag → supported-commands table
* token ordering (positionals before or after flags) and boolean syntax

The generator and parser are written once against this interface; each
backend module under :mod:`discargs.dialects` only declares data.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from functools import cached_property
from typing import TYPE_CHECKING, Any

from discargs.codec import DEFAULT_BOOL_SYNTAX, BoolSyntax, Bounds, ValueType

if TYPE_CHECKING:
    from discargs.params import ParameterSet


@dataclass(frozen=True)
class FlagSpec:
    """One flag of a dialect.

    ``min_values``/``max_values`` give how many value tokens follow the
    flag.  ``optional_value`` flags may be written bare.  A flag with
    ``max_values > 1`` stores its value as a tuple.  A ``required`` flag
    must be present under every command that supports it.
    """

    key: Enum
    long: str
    value_type: ValueType = ValueType.PRESENCE
    short: str | None = None
    bounds: Bounds | None = None
    optional_value: bool = False
    max_values: int = 1
    arity_by_command: Mapping[Enum, tuple[int, int]] = field(default_factory=dict)
    choices: tuple[str, ...] | None = None
    quoted: bool = False
    pre_command: bool = False
    suppressed_by: tuple[Enum, ...] = ()
    required: bool = False
    description: str = ""

    @property
    def spellings(self) -> tuple[str, ...]:
        if self.short:
            return (self.short, self.long)
        return (self.long,)

    @property
    def name(self) -> str:
        """Preferred spelling on output."""
        return self.long or self.short or ""

    @property
    def multi(self) -> bool:
        return self.max_values > 1

    def arity_for(self, command: Enum) -> tuple[int, int]:
        """Return the (min, max) number of values accepted under *command*."""
        if command in self.arity_by_command:
            return self.arity_by_command[command]
        if self.value_type is ValueType.PRESENCE:
            return (0, 0)
        return (0 if self.optional_value else 1, self.max_values)


@dataclass(frozen=True)
class PositionalSpec:
    """A command-specific argument not introduced by a flag."""

    name: str
    value_type: ValueType = ValueType.STRING
    quoted: bool = False
    bounds: Bounds | None = None
    pattern: str | None = None
    required: bool = True


@dataclass(frozen=True)
class CommandSpec:
    """A command: its spelling (one or two tokens) and positional layout."""

    key: Enum
    spelling: tuple[str, ...]
    aliases: tuple[tuple[str, ...], ...] = ()
    positionals: tuple[PositionalSpec, ...] = ()
    dumping: bool = False
    media_type: Any = None
    description: str = ""

    @property
    def text(self) -> str:
        return " ".join(self.spelling)


# Signature of a dialect's default-parameter hook.  Called with an empty
# ParameterSet for a combination that already passed validation.
Deriver = Callable[..., None]


@dataclass(frozen=True)
class Dialect:
    """Immutable grammar of one external dumping/analysis tool."""

    name: str
    tool: str
    none: Enum
    commands: tuple[CommandSpec, ...]
    flags: tuple[FlagSpec, ...]
    support: Mapping[Enum, frozenset[Enum]]
    flag_prefix: str = "-"
    bool_syntax: BoolSyntax = DEFAULT_BOOL_SYNTAX
    positionals_first: bool = False
    use_equals: bool = False
    accepts_equals: bool = False
    default_reread_count: int = 20
    executable: str = ""
    input_fields: tuple[str | Enum, ...] = ()
    output_fields: tuple[str | Enum, ...] = ()
    speed_field: str | Enum | None = None
    default_command: Enum | None = None
    deriver: Deriver | None = field(default=None, compare=False)

    # -----------------------------------------------------------------------
    # Indices
    # -----------------------------------------------------------------------

    @cached_property
    def _commands_by_key(self) -> dict[Enum, CommandSpec]:
        return {c.key: c for c in self.commands}

    @cached_property
    def _commands_by_spelling(self) -> dict[tuple[str, ...], Enum]:
        index: dict[tuple[str, ...], Enum] = {}
        for cmd in self.commands:
            for spelling in (cmd.spelling, *cmd.aliases):
                index[spelling] = cmd.key
        return index

    @cached_property
    def _flags_by_key(self) -> dict[Enum, FlagSpec]:
        return {f.key: f for f in self.flags}

    @cached_property
    def _flags_by_spelling(self) -> dict[str, list[FlagSpec]]:
        index: dict[str, list[FlagSpec]] = {}
        for spec in self.flags:
            for spelling in spec.spellings:
                index.setdefault(spelling, []).append(spec)
        return index

    @cached_property
    def positional_names(self) -> frozenset[str]:
        return frozenset(p.name for c in self.commands for p in c.positionals)

    @property
    def pre_command_flags(self) -> tuple[FlagSpec, ...]:
        return tuple(f for f in self.flags if f.pre_command)

    @property
    def aux_flags(self) -> tuple[FlagSpec, ...]:
        return tuple(f for f in self.flags if not f.pre_command)

    # -----------------------------------------------------------------------
    # Vocabulary lookups
    # -----------------------------------------------------------------------

    def command_spec(self, command: Enum) -> CommandSpec | None:
        return self._commands_by_key.get(command)

    def flag_spec(self, flag: Enum) -> FlagSpec | None:
        return self._flags_by_key.get(flag)

    def command_spelling(self, command: Enum) -> str:
        spec = self._commands_by_key.get(command)
        return spec.text if spec is not None else ""

    def flag_spelling(self, flag: Enum) -> tuple[str | None, str]:
        spec = self._flags_by_key.get(flag)
        if spec is None:
            return (None, "")
        return (spec.short, spec.long)

    def command_by_name(self, name: str) -> Enum | None:
        """Look a command up by spelling (``"media dump"``) or enum name."""
        key = self._commands_by_spelling.get(tuple(name.split()))
        if key is not None:
            return key
        for cmd in self.commands:
            if cmd.key.name.casefold() == name.casefold():
                return cmd.key
        return None

    def flag_by_name(self, name: str) -> Enum | None:
        """Look a flag up by any spelling or by enum name."""
        specs = self._flags_by_spelling.get(name)
        if specs:
            return specs[0].key
        for spec in self.flags:
            if spec.key.name.casefold() == name.casefold():
                return spec.key
        return None

    def resolve_command(self, tokens: list[str], start: int) -> tuple[Enum, int]:
        """Resolve the command at ``tokens[start]``.

        Returns ``(command, consumed)``; ``consumed`` is 0 when no command
        matches.  Two-token spellings are preferred over one-token ones.
        Without a match the result is ``default_command`` (for tools whose
        main operation is unnamed) or ``none``.
        """
        if start + 1 < len(tokens):
            key = self._commands_by_spelling.get((tokens[start], tokens[start + 1]))
            if key is not None:
                return key, 2
        if start < len(tokens):
            key = self._commands_by_spelling.get((tokens[start],))
            if key is not None:
                return key, 1
        if self.default_command is not None:
            return self.default_command, 0
        return self.none, 0

    def missing_required(self, params: ParameterSet) -> list[FlagSpec]:
        """Required flags the current command supports but *params* lacks."""
        return [
            f for f in self.flags
            if f.required
            and self.is_supported(f.key, params.command)
            and not params.is_present(f.key)
        ]

    # -----------------------------------------------------------------------
    # Support table
    # -----------------------------------------------------------------------

    def supported_commands(self, flag: Enum) -> frozenset[Enum]:
        return self.support.get(flag, frozenset())

    def is_supported(self, flag: Enum, command: Enum) -> bool:
        """Single source of truth for flag legality, used by both directions."""
        return command in self.supported_commands(flag)

    def flags_for(self, command: Enum) -> tuple[FlagSpec, ...]:
        return tuple(f for f in self.flags if self.is_supported(f.key, command))

    def is_flag_token(self, token: str) -> bool:
        if token in self._flags_by_spelling:
            return True
        if self.accepts_equals and "=" in token:
            return token.partition("=")[0] in self._flags_by_spelling
        return False

    def split_flag_token(self, token: str) -> tuple[str, str | None]:
        """Split ``--name=value`` into its parts when the dialect allows it."""
        if self.accepts_equals and "=" in token and token not in self._flags_by_spelling:
            name, _, value = token.partition("=")
            return name, value
        return token, None

    def match_flag(
        self, token: str, command: Enum, *, pre_command: bool = False
    ) -> tuple[FlagSpec | None, bool]:
        """Find the flag spelled by *token* under *command*.

        Several flags may share a spelling (``-f`` is both ``--force`` and
        ``--filesystems``); the one supported by *command* wins.  Returns
        ``(None, True)`` when the token is not a flag at all and
        ``(spec, False)`` when it names only unsupported flags.
        """
        candidates = self._flags_by_spelling.get(token, [])
        if pre_command:
            candidates = [c for c in candidates if c.pre_command]
        if not candidates:
            return None, True
        for spec in candidates:
            if self.is_supported(spec.key, command):
                return spec, True
        return candidates[0], False

    # -----------------------------------------------------------------------
    # Defaults
    # -----------------------------------------------------------------------

    def derive(self, params: ParameterSet, **kwargs: Any) -> None:
        if self.deriver is not None:
            self.deriver(params, **kwargs)


def support_table(entries: Mapping[Enum, tuple[Enum, ...]]) -> dict[Enum, frozenset[Enum]]:
    """Freeze a flag → commands mapping."""
    return {flag: frozenset(cmds) for flag, cmds in entries.items()}
