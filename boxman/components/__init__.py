from .appearance import Appearance
from .position import Position

__all__ = [
    "Appearance",
    "Position",
]
