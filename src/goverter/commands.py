"""Results produced by parsing the command line.

A parse yields exactly one of these; the host checks the variant with
isinstance() and acts on it.
"""

from __future__ import annotations

from dataclasses import dataclass

from .config import GenerateConfig


@dataclass(frozen=True)
class Generate:
    config: GenerateConfig


@dataclass(frozen=True)
class Help:
    usage: str


@dataclass(frozen=True)
class Version:
    pass


Command = Generate | Help | Version

__all__ = ["Command", "Generate", "Help", "Version"]
