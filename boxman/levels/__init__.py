from .collection import LevelCollection, normalize_index
from .level import Level, LevelError
from .parse import level_from_dict, parse_level, parse_pairs, parse_xsb

__all__ = [
    "Level",
    "LevelCollection",
    "LevelError",
    "level_from_dict",
    "normalize_index",
    "parse_level",
    "parse_pairs",
    "parse_xsb",
]
