"""Configuration records handed to the generation engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

DEFAULT_BUILD_TAGS = "goverter"
DEFAULT_OUTPUT_CONSTRAINT = "!goverter"
DEFAULT_WORKING_DIR = ""

COMMAND_LINE_LOCATION = "command line (-g, -global)"

# Transformers are supplied by the engine; this layer only carries the mapping.
EnumTransformer = Any


@dataclass
class RawLines:
    """Setting lines in the order they were given, plus where they came from.

    Attributes:
        lines: Raw setting directives, uninterpreted.
        location: Human-readable origin used when the engine reports problems
            with one of the lines.
    """

    lines: list[str] = field(default_factory=list)
    location: str = ""


@dataclass
class GenerateConfig:
    """Everything the generation engine needs to run.

    Attributes:
        package_patterns: Source-location selectors, never empty.
        build_tags: Build tags considered satisfied while loading; "" disables.
        output_build_constraint: Constraint written to generated files; "" disables.
        working_dir: Directory used to resolve the selectors.
        global_settings: Settings applied to every converter.
        enum_transformers: Named enum transformers, filled in by the engine.
    """

    package_patterns: list[str]
    build_tags: str = DEFAULT_BUILD_TAGS
    output_build_constraint: str = DEFAULT_OUTPUT_CONSTRAINT
    working_dir: str = DEFAULT_WORKING_DIR
    global_settings: RawLines = field(default_factory=RawLines)
    enum_transformers: dict[str, EnumTransformer] = field(default_factory=dict)
