"""Project-wide constants, enums, and small helpers."""

from __future__ import annotations

from enum import StrEnum


class SortKey(StrEnum):
    """Primary sort criteria; ``name`` is also the fallback for ties."""

    NAME = "name"
    SIZE = "size"
    TIME = "time"
    EXTENSION = "extension"


class TypeTag(StrEnum):
    """Type markers emitted by the tree traversal."""

    DIRECTORY = "D"
    FILE = "F"
    LINK = "L"


class ColorMode(StrEnum):
    """Valid colour modes for terminal output."""

    AUTO = "auto"
    ALWAYS = "always"
    NEVER = "never"


# Hard ceiling on traversal depth regardless of the configured max_depth.
MAX_DEPTH_CEILING = 31

# Characters of indentation per tree level.
INDENT_WIDTH = 2

WILDCARD_CHARS = frozenset("*?")

# Extensions rendered as executables regardless of mode bits.
EXECUTABLE_EXTENSIONS: frozenset[str] = frozenset({".exe", ".dll", ".bin", ".com", ".bat", ".cmd"})

EXIT_OK = 0
EXIT_PARTIAL = 1
EXIT_USAGE = 2
EXIT_CONFIG = 3
EXIT_INTERRUPT = 130

# Config keys
CONFIG_SHOW_HIDDEN = "show_hidden"
CONFIG_LONG_FORMAT = "long_format"
CONFIG_RECURSIVE = "recursive"
CONFIG_SORT = "sort"
CONFIG_NATURAL = "natural"
CONFIG_REVERSE = "reverse"
CONFIG_GROUP_DIRS = "group_directories_first"
CONFIG_HUMAN_SIZES = "human_sizes"
CONFIG_TYPE_INDICATOR = "type_indicator"
CONFIG_LIST_SELF = "list_self"
CONFIG_TREE = "tree"
CONFIG_SUMMARY = "summary"
CONFIG_FULL_PATH = "full_path"
CONFIG_SHOW_OWNER = "show_owner"
CONFIG_SHOW_CREATED = "show_created"
CONFIG_MAX_DEPTH = "max_depth"
CONFIG_FILTER = "filter"
CONFIG_COLOR = "color"
