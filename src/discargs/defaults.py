"""defaults.py – Build a starting Parameter Set for a dump job.

Given what the disc is (system and media type), where it is (drive) and
where it goes (filename), plus a few user preferences, produce the
parameters a backend should be run with.  The backend-specific choices live
in each dialect's ``derive`` hook; this module handles the policy shared by
all of them.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from discargs.dialect import Dialect
from discargs.params import ParameterSet
from discargs.systems import KnownSystem, MediaType, is_valid_combination


def resolve_retry_count(retry_count: int, fallback: int) -> int | None:
    """Apply the retry convention.

    * negative → ``None`` (leave retry flags without a count)
    * zero → *fallback*
    * positive → used as-is
    """
    if retry_count < 0:
        return None
    if retry_count == 0:
        return fallback
    return retry_count


def derive_defaults(
    dialect: Dialect,
    system: KnownSystem | None,
    media_type: MediaType | None,
    drive: str,
    filename: str,
    speed: int | None = None,
    paranoid: bool = False,
    retry_count: int = 0,
    *,
    options: Mapping[str, Any] | None = None,
) -> ParameterSet:
    """Return default parameters for dumping *media_type* of *system*.

    An invalid (system, media type) pair yields a Parameter Set whose
    command is the dialect's ``NONE``; it generates to ``None``.  So does a
    speed or retry count the backend's flag types cannot hold.
    """
    params = ParameterSet(dialect)
    if not is_valid_combination(system, media_type):
        return params

    opts = dict(options or {})
    fallback = int(opts.get("reread_count", dialect.default_reread_count))

    try:
        dialect.derive(
            params,
            system=system,
            media_type=media_type,
            drive=drive or "",
            filename=filename or "",
            speed=speed,
            paranoid=paranoid,
            reread=resolve_retry_count(retry_count, fallback),
            options=opts,
        )
    except TypeError:
        return ParameterSet(dialect)
    return params
