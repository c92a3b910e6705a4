"""Levels shipped with the package.

Each entry is a ``(name, xsb_text)`` pair; the collection is 1-indexed in the
order listed here.
"""

from __future__ import annotations

from typing import List, Tuple

from boxman.levels.level import Level
from boxman.levels.parse import parse_xsb

BUILTIN_LEVELS: List[Tuple[str, str]] = [
    (
        "First push",
        """
#######
#@ $ .#
#######
""",
    ),
    (
        "Around the corner",
        """
######
#.   #
#  $ #
#  @ #
######
""",
    ),
    (
        "Two boxes",
        """
#######
#.   .#
# $ $ #
#  @  #
#######
""",
    ),
    (
        "Tight quarters",
        """
####
# .#
#  ###
#*@  #
#  $ #
#  ###
####
""",
    ),
]


def builtin_levels() -> List[Level]:
    """Return the built-in levels, parsed and validated."""
    return [parse_xsb(text, name=name) for name, text in BUILTIN_LEVELS]
