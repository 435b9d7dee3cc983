"""Centralised configuration loader for discargs.

Reads ``discargs.toml`` from the working directory (or any parent) and
exposes the engine defaults plus per-dialect settings, so the CLI does not
need every preference spelled out on each invocation.

Example ``discargs.toml``::

    [engine]
    dialect = "creator"
    speed = 24
    retry_count = 0
    paranoid = false

    [dialects.creator]
    executable = "Programs/Creator/DiscImageCreator.exe"
    quiet = true

    [dialects.redumper]
    reread_count = 20
    verbose = true

Usage::

    from discargs.config import load_config

    cfg = load_config()
    cfg.options("redumper")       # {"reread_count": 20, "verbose": True}
    cfg.executable("creator")     # "Programs/Creator/DiscImageCreator.exe"

Without a config file every setting takes its default.
"""

from __future__ import annotations

import sys
import warnings
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from discargs.dialects import DIALECTS, get_dialect

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

CONFIG_NAME = "discargs.toml"

# Dialect options whose value must be an integer or a boolean.
_INT_OPTIONS = {"reread_count", "leadin_retry_count", "block_size"}
_BOOL_OPTIONS = {"quiet", "verbose", "debug"}


@dataclass
class ToolConfig:
    """Parsed configuration."""

    # Directory holding discargs.toml (cwd when no file was found)
    root: Path

    # Path of the file actually read, if any
    path: Path | None = None

    # --- [engine] ---
    dialect: str = "creator"
    speed: int | None = None
    retry_count: int = 0
    paranoid: bool = False

    # --- [dialects.<name>] ---
    dialect_options: dict[str, dict[str, Any]] = field(default_factory=dict)

    def options(self, dialect: str) -> dict[str, Any]:
        """Options for *dialect* without the ``executable`` key."""
        opts = dict(self.dialect_options.get(get_dialect(dialect).name, {}))
        opts.pop("executable", None)
        return opts

    def executable(self, dialect: str) -> str:
        """Configured executable for *dialect*, or the tool's usual name."""
        d = get_dialect(dialect)
        return str(self.dialect_options.get(d.name, {}).get("executable", d.executable))


def find_root(start: Path | None = None) -> Path | None:
    """Walk up from *start* (or cwd) to find discargs.toml."""
    candidate = (start or Path.cwd()).resolve()
    while True:
        if (candidate / CONFIG_NAME).exists():
            return candidate
        if candidate == candidate.parent:
            return None
        candidate = candidate.parent


def _check_options(name: str, opts: dict[str, Any]) -> dict[str, Any]:
    checked: dict[str, Any] = {}
    for key, value in opts.items():
        if key in _INT_OPTIONS and (isinstance(value, bool) or not isinstance(value, int)):
            warnings.warn(
                f"[dialects.{name}] {key} should be an integer, got {value!r}; ignored",
                stacklevel=3,
            )
            continue
        if key in _BOOL_OPTIONS and not isinstance(value, bool):
            warnings.warn(
                f"[dialects.{name}] {key} should be true or false, got {value!r}; ignored",
                stacklevel=3,
            )
            continue
        checked[key] = value
    return checked


def load_config(root: Path | None = None) -> ToolConfig:
    """Load discargs.toml.

    Args:
        root: Directory to start searching from.  Defaults to the current
              working directory.

    Returns defaults when no file is found.  Raises ``KeyError`` for a
    ``[dialects.X]`` table naming an unknown dialect and lets
    ``tomllib.TOMLDecodeError`` through for malformed files.
    """
    found = find_root(root)
    if found is None:
        return ToolConfig(root=(root or Path.cwd()).resolve())

    toml_path = found / CONFIG_NAME
    with open(toml_path, "rb") as f:
        raw = tomllib.load(f)

    engine = raw.get("engine", {})
    dialect_name = engine.get("dialect", "creator")
    get_dialect(dialect_name)

    dialect_options: dict[str, dict[str, Any]] = {}
    for name, opts in raw.get("dialects", {}).items():
        d = get_dialect(name)
        dialect_options[d.name] = _check_options(d.name, dict(opts))

    speed = engine.get("speed")
    if speed is not None and (isinstance(speed, bool) or not isinstance(speed, int)):
        warnings.warn(f"[engine] speed should be an integer, got {speed!r}; ignored", stacklevel=2)
        speed = None

    return ToolConfig(
        root=found,
        path=toml_path,
        dialect=get_dialect(dialect_name).name,
        speed=speed,
        retry_count=int(engine.get("retry_count", 0)),
        paranoid=bool(engine.get("paranoid", False)),
        dialect_options=dialect_options,
    )


def default_toml() -> str:
    """Text of a fresh discargs.toml with every dialect listed."""
    lines = [
        "[engine]",
        'dialect = "creator"',
        "retry_count = 0",
        "paranoid = false",
        "",
    ]
    for name, d in DIALECTS.items():
        lines += [f"[dialects.{name}]", f'executable = "{d.executable}"', ""]
    return "\n".join(lines)
