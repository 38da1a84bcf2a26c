"""Hand a parsed GenerateConfig to the installed generation engine.

Engines register a callable under the ``goverter.engines`` entry-point group;
the one named by GOVERTER_ENGINE is called with the config.
"""

from __future__ import annotations

import sys
from collections.abc import Callable
from dataclasses import asdict
from importlib.metadata import entry_points
from pprint import pprint
from typing import Any

from .config import GenerateConfig
from .env import engine_name

ENGINE_GROUP = "goverter.engines"

Engine = Callable[[GenerateConfig], Any]


def generate_files(config: GenerateConfig, *, name: str | None = None) -> Any:
    """Run the selected engine over config and return whatever it returns."""

    engine = _require_engine(name or engine_name())
    return engine(config)


def _require_engine(name: str) -> Engine:
    matches = entry_points(group=ENGINE_GROUP, name=name)
    for entry_point in matches:
        return entry_point.load()
    available = sorted(ep.name for ep in entry_points(group=ENGINE_GROUP))
    hint = f" (installed: {', '.join(available)})" if available else ""
    raise RuntimeError(
        f"no generation engine named '{name}' is registered under "
        f"'{ENGINE_GROUP}'{hint}. Install an engine package or set GOVERTER_ENGINE."
    )


def emit_config(config: GenerateConfig) -> None:
    print("Config:", file=sys.stderr)
    pprint(asdict(config), stream=sys.stderr)


__all__ = ["ENGINE_GROUP", "emit_config", "generate_files"]
