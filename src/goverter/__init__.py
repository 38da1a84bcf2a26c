"""goverter package entrypoint.

main() parses the command line with goverter.cli and acts on the resulting
command: printing usage or version information, or handing the generate
configuration to the installed engine via goverter.engine.
"""

from __future__ import annotations

import sys
from collections.abc import Sequence
from pathlib import Path

from dotenv import load_dotenv

from .cli import UsageError, parse
from .commands import Generate, Help, Version

_DOTENV_FILE = Path(".env")


def main(argv: Sequence[str] | None = None) -> None:
    """CLI entrypoint: parse argv and run the selected command."""

    load_dotenv(_DOTENV_FILE)  # silently ignore if there is none, assume defaults.

    if argv is None:
        argv = sys.argv

    try:
        command = parse(argv)
    except UsageError as exc:
        print(str(exc), file=sys.stderr)
        raise SystemExit(1) from exc

    if isinstance(command, Help):
        print(command.usage)
        return

    if isinstance(command, Version):
        from .version import version_string

        print(version_string())
        return

    if isinstance(command, Generate):
        try:
            from . import engine as engine_module
            from .env import verbose_enabled

            if verbose_enabled():
                engine_module.emit_config(command.config)
            engine_module.generate_files(command.config)
        except Exception as exc:
            print(f"error: {exc}", file=sys.stderr)
            raise SystemExit(1) from exc
