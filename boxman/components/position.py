from dataclasses import dataclass


@dataclass(frozen=True)
class Position:
    """
    Grid position component.

    Attributes:
        x: X-coordinate on the grid (column, growing rightwards).
        y: Y-coordinate on the grid (row, growing downwards).
    """

    x: int
    y: int

    def offset(self, dx: int, dy: int) -> "Position":
        """Return the position displaced by ``(dx, dy)``."""
        return Position(self.x + dx, self.y + dy)
