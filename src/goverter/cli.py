"""Command-line parser for goverter.

This module turns a process argument vector into a Command describing what the
host should do next. It never prints, exits or reads the environment.

Usage:
- parse(argv) -> Command, where argv[0] is the invoked name
- parse_gen(cmd, args) -> Command, for the arguments following "gen"
- usage(cmd) -> str

Rules enforced:
- The only top-level flag is help (-h or -help, with one or two dashes).
- Flags need their exact name; each value flag takes the next token as its
  value even when it starts with a dash (-g -x sets "-x").
- The first token after the top-level flags selects the sub-command:
  gen, help or version.
- Flag parsing stops at the first non-flag token; the rest of gen's arguments,
  including anything that looks like a flag, are package patterns.
- -g and -global append to the same list, keeping the order of appearance.
- gen requires at least one PATTERN.
- A help flag at either level yields Help, never an error.
"""

from __future__ import annotations

import argparse
from collections.abc import Iterator, Sequence
from typing import Any, NoReturn

from .commands import Command, Generate, Help, Version
from .config import (
    COMMAND_LINE_LOCATION,
    DEFAULT_BUILD_TAGS,
    DEFAULT_OUTPUT_CONSTRAINT,
    DEFAULT_WORKING_DIR,
    GenerateConfig,
    RawLines,
)

_HELP_NAMES = frozenset({"h", "help"})
_TERMINATOR = "--"


class UsageError(ValueError):
    """Invalid command line, carrying the usage text for the invoked name."""

    def __init__(self, message: str, cmd: str) -> None:
        self.message = message
        self.usage = usage(cmd)
        super().__init__(f"Error: {message}\n{self.usage}")


class HelpRequested(Exception):
    """Raised for -h or -help so callers can tell it apart from bad input."""


class _FlagError(Exception):
    pass


class Strings:
    """Ordered, append-only list of values collected from a repeatable flag."""

    def __init__(self) -> None:
        self._values: list[str] = []

    def append(self, value: str) -> None:
        self._values.append(value)

    def as_list(self) -> list[str]:
        return list(self._values)

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __str__(self) -> str:
        return str(self._values)


class _AppendTo(argparse.Action):
    def __init__(
        self,
        option_strings: Sequence[str],
        dest: str,
        *,
        target: Strings,
        **kwargs: Any,
    ) -> None:
        super().__init__(option_strings, dest, **kwargs)
        self.target = target

    def __call__(self, parser, namespace, values, option_string=None) -> None:
        self.target.append(values)


class _FlagSet(argparse.ArgumentParser):
    """ArgumentParser that reports failures instead of printing and exiting.

    Flags are matched by exact name only, with one or two leading dashes. Each
    flag takes the next token as its value, whatever it looks like; argparse
    only ever sees the -name=value form. Scanning stops at the first non-flag
    token or at "--", and everything from there on lands in ``rest`` verbatim.
    """

    def __init__(self, cmd: str) -> None:
        super().__init__(prog=cmd, add_help=False, allow_abbrev=False)
        self.add_argument("rest", nargs=argparse.REMAINDER)
        self._names: set[str] = set()

    def add_flag(self, name: str, **kwargs: Any) -> argparse.Action:
        self._names.add(name)
        return self.add_argument(f"-{name}", f"--{name}", **kwargs)

    def parse_flags(self, args: Sequence[str]) -> argparse.Namespace:
        return self.parse_args(self._normalize(args))

    def _normalize(self, args: Sequence[str]) -> list[str]:
        normalized: list[str] = []
        index = 0
        while index < len(args):
            token = args[index]
            if token == _TERMINATOR:
                index += 1
                break
            if len(token) < 2 or token[0] != "-":
                break

            body = token[2:] if token.startswith("--") else token[1:]
            if not body or body[0] in "-=":
                raise _FlagError(f"bad flag syntax: {token}")
            name, sep, _ = body.partition("=")
            if name in _HELP_NAMES:
                raise HelpRequested(token)
            if name not in self._names:
                raise _FlagError(f"flag provided but not defined: -{name}")

            if sep:
                normalized.append(f"-{body}")
                index += 1
                continue
            if index + 1 >= len(args):
                raise _FlagError(f"flag needs an argument: -{name}")
            normalized.append(f"-{name}={args[index + 1]}")
            index += 2

        rest = args[index:]
        if rest:
            normalized.extend([_TERMINATOR, *rest])
        return normalized

    def error(self, message: str) -> NoReturn:
        raise _FlagError(message)


def _remaining(ns: argparse.Namespace) -> list[str]:
    rest = list(ns.rest)
    if rest and rest[0] == _TERMINATOR:
        rest = rest[1:]
    return rest


def _parse_flags(
    flags: _FlagSet, args: Sequence[str], cmd: str
) -> argparse.Namespace | None:
    """Run the flag set over args; None means help was requested."""
    try:
        return flags.parse_flags(args)
    except HelpRequested:
        return None
    except _FlagError as exc:
        raise UsageError(str(exc), cmd) from exc


def parse(args: Sequence[str]) -> Command:
    """Parse a full argument vector (invoked name first) into a Command."""

    if not args:
        raise UsageError("invalid args", "unknown")
    cmd = args[0]

    ns = _parse_flags(_FlagSet(cmd), args[1:], cmd)
    if ns is None:
        return Help(usage=usage(cmd))

    sub_args = _remaining(ns)
    if not sub_args:
        raise UsageError("missing command", cmd)

    name, rest = sub_args[0], sub_args[1:]
    if name == "gen":
        return parse_gen(cmd, rest)
    if name == "version":
        return Version()
    if name == "help":
        return Help(usage=usage(cmd))
    raise UsageError(f"unknown command {name}", cmd)


def parse_gen(cmd: str, args: Sequence[str]) -> Command:
    """Parse the arguments following the gen sub-command."""

    global_lines = Strings()

    flags = _FlagSet(cmd)
    # Two registrations, one target: order is kept across both spellings.
    for name in ("global", "g"):
        flags.add_flag(
            name,
            action=_AppendTo,
            target=global_lines,
            dest=argparse.SUPPRESS,
            metavar="value",
        )
    flags.add_flag(
        "build-tags", dest="build_tags", default=DEFAULT_BUILD_TAGS, metavar="tags"
    )
    flags.add_flag(
        "output-constraint",
        dest="output_constraint",
        default=DEFAULT_OUTPUT_CONSTRAINT,
        metavar="constraint",
    )
    flags.add_flag("cwd", dest="cwd", default=DEFAULT_WORKING_DIR, metavar="value")

    ns = _parse_flags(flags, args, cmd)
    if ns is None:
        return Help(usage=usage(cmd))

    patterns = _remaining(ns)
    if not patterns:
        raise UsageError("missing PATTERN", cmd)

    config = GenerateConfig(
        package_patterns=patterns,
        build_tags=ns.build_tags,
        output_build_constraint=ns.output_constraint,
        working_dir=ns.cwd,
        global_settings=RawLines(
            lines=global_lines.as_list(),
            location=COMMAND_LINE_LOCATION,
        ),
        enum_transformers={},
    )
    return Generate(config=config)


_USAGE_TEMPLATE = """\
Usage:
  {cmd} gen [OPTIONS] PATTERN...
  {cmd} help
  {cmd} version

PATTERN(s):
  Select the packages goverter searches for converter definitions.
  Several patterns may be given, and the ... wildcard selects every package
  below a directory. See $ go help packages

OPTIONS:
  -build-tags [tags]: (default: {build_tags})
      a comma-separated list of additional build tags to consider satisfied
      while loading the converter definitions. See 'go help buildconstraint'.
      Pass an empty string to disable.

  -cwd [value]:
      set the working directory

  -g [value], -global [value]:
      apply a setting to every converter. May be repeated; settings apply in
      the order given. For the list of settings see:
      https://goverter.jmattheis.de/reference/settings

  -output-constraint [constraint]: (default: {output_constraint})
      a build constraint added to every generated file.
      Pass an empty string to disable.

Examples:
  {cmd} gen ./example/simple ./example/complex
  {cmd} gen ./example/...
  {cmd} gen github.com/jmattheis/goverter/example/simple
  {cmd} gen -g 'ignoreMissing no' -g 'skipCopySameType' ./simple

Documentation:
  Full documentation is available here: https://goverter.jmattheis.de"""


def usage(cmd: str) -> str:
    """Render the usage document for the invoked name."""
    return _USAGE_TEMPLATE.format(
        cmd=cmd,
        build_tags=DEFAULT_BUILD_TAGS,
        output_constraint=DEFAULT_OUTPUT_CONSTRAINT,
    )


__all__ = [
    "HelpRequested",
    "Strings",
    "UsageError",
    "parse",
    "parse_gen",
    "usage",
]
