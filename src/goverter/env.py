"""Environment settings read by the goverter entry point.

Both are read after main() has loaded .env, so either can live there.

GOVERTER_ENGINE   name of the entry point in goverter.engines to run
GOVERTER_VERBOSE  dump the generate config to stderr before running the engine
"""

from __future__ import annotations

import os

DEFAULT_ENGINE = "default"

_ON = frozenset({"1", "true", "yes", "on"})
_OFF = frozenset({"0", "false", "no", "off"})


def engine_name() -> str:
    return os.environ.get("GOVERTER_ENGINE", DEFAULT_ENGINE)


def verbose_enabled() -> bool:
    """Whether GOVERTER_VERBOSE is switched on; unset or blank means off."""
    raw = os.environ.get("GOVERTER_VERBOSE", "").strip()
    if not raw:
        return False
    if raw.lower() in _ON:
        return True
    if raw.lower() in _OFF:
        return False
    choices = "/".join(sorted(_ON | _OFF))
    raise ValueError(f"GOVERTER_VERBOSE={raw!r} is not a switch, use one of {choices}")
