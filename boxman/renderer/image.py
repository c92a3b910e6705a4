"""Tile-based image renderer.

Projects a ``GameState`` onto an RGBA image. Rendering never feeds back into
the state: it reads the level's static cells plus the position and
``Appearance`` of each movable entity.

Rendering Model
---------------
1. Every cell is painted with its background: ``wall`` or ``floor``.
2. Target cells get a ``target`` marker on top of the floor.
3. The main entity of a cell (box or player) is drawn last. Boxes resting on a
   target use the ``box_on_target`` color; entities that are mid-animation are
   shaded darker.
4. The player carries a small triangle pointing in its facing direction.

Customization Hooks
-------------------
* Provide a custom ``color_map`` for alternative palettes.
* ``render_array`` returns the same frame as a ``numpy`` array for consumers
  that work on pixels.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple

import numpy as np
from numpy.typing import NDArray
from PIL import Image, ImageDraw

from boxman.config import BoxmanSettings
from boxman.components import Appearance, Position
from boxman.directions import Direction
from boxman.state import GameState
from boxman.types import EntityKind

DEFAULT_RESOLUTION = 480
DEFAULT_INSET_PERCENT = 0.15
MOTION_SHADE = 0.75

RGBA = Tuple[int, int, int, int]
ColorMap = Dict[str, RGBA]

DEFAULT_COLOR_MAP: ColorMap = {
    "floor": (222, 214, 190, 255),
    "wall": (92, 64, 51, 255),
    "target": (214, 69, 65, 255),
    "box": (196, 140, 60, 255),
    "box_on_target": (96, 168, 80, 255),
    "player": (52, 101, 164, 255),
    "facing": (255, 255, 255, 255),
}


def shade(color: RGBA, factor: float) -> RGBA:
    r, g, b, a = color
    return (int(r * factor), int(g * factor), int(b * factor), a)


def cell_layers(state: GameState, pos: Position) -> List[str]:
    """Color names painted at ``pos``, bottom to top (without movable entities)."""
    kinds = state.entity_kinds_at(pos)
    if EntityKind.WALL in kinds:
        return ["wall"]
    layers = ["floor"]
    if EntityKind.TARGET in kinds:
        layers.append("target")
    return layers


def entity_color(
    appearance: Appearance, on_target: bool, color_map: ColorMap
) -> RGBA:
    if appearance.kind is EntityKind.PLAYER:
        color = color_map["player"]
    else:
        color = color_map["box_on_target" if on_target else "box"]
    if appearance.in_motion:
        color = shade(color, MOTION_SHADE)
    return color


def facing_triangle(
    x0: int, y0: int, size: int, facing: Direction
) -> List[Tuple[float, float]]:
    """Triangle pointing towards ``facing`` inside the cell at ``(x0, y0)``."""
    cx, cy = x0 + size / 2, y0 + size / 2
    dx, dy = facing.delta
    tip = (cx + dx * size * 0.35, cy + dy * size * 0.35)
    # base is perpendicular to the facing direction
    px, py = -dy, dx
    base_center = (cx + dx * size * 0.1, cy + dy * size * 0.1)
    half = size * 0.15
    return [
        tip,
        (base_center[0] + px * half, base_center[1] + py * half),
        (base_center[0] - px * half, base_center[1] - py * half),
    ]


def render(
    state: GameState,
    resolution: int = DEFAULT_RESOLUTION,
    color_map: Optional[ColorMap] = None,
    inset_percent: float = DEFAULT_INSET_PERCENT,
) -> Image.Image:
    """Render a ``GameState`` into a PIL Image.

    Args:
        state (GameState): Game state to visualize.
        resolution (int): Output image width in pixels (height follows the
            level's aspect ratio, rounded down to whole cells).
        color_map (ColorMap | None): Color per layer name.
        inset_percent (float): Margin around targets and entities, relative to
            the cell size.

    Returns:
        Image.Image: Composited RGBA image of the entire grid.
    """
    level = state.level
    colors = dict(DEFAULT_COLOR_MAP)
    if color_map is not None:
        colors.update(color_map)

    cell_size = max(1, resolution // level.width)
    inset = int(cell_size * inset_percent)
    img = Image.new(
        "RGBA", (cell_size * level.width, cell_size * level.height), colors["floor"]
    )
    draw = ImageDraw.Draw(img)

    for y in range(level.height):
        for x in range(level.width):
            x0, y0 = x * cell_size, y * cell_size
            x1, y1 = x0 + cell_size - 1, y0 + cell_size - 1
            for layer in cell_layers(state, Position(x, y)):
                if layer == "target":
                    draw.ellipse(
                        (x0 + 2 * inset, y0 + 2 * inset, x1 - 2 * inset, y1 - 2 * inset),
                        fill=colors["target"],
                    )
                else:
                    draw.rectangle((x0, y0, x1, y1), fill=colors[layer])

    for eid, pos in state.position.items():
        appearance = state.appearance[eid]
        x0, y0 = pos.x * cell_size, pos.y * cell_size
        box = (x0 + inset, y0 + inset, x0 + cell_size - 1 - inset, y0 + cell_size - 1 - inset)
        color = entity_color(appearance, pos in level.targets, colors)
        if appearance.kind is EntityKind.PLAYER:
            draw.ellipse(box, fill=color)
            if appearance.facing is not None:
                draw.polygon(
                    facing_triangle(x0, y0, cell_size, appearance.facing),
                    fill=colors["facing"],
                )
        else:
            draw.rectangle(box, fill=color)

    return img


def render_array(state: GameState, **kwargs: object) -> NDArray[np.uint8]:
    """``render`` as an ``(H, W, 4)`` uint8 array."""
    return np.asarray(render(state, **kwargs), dtype=np.uint8)  # type: ignore[arg-type]


class ImageRenderer:
    resolution: int
    color_map: ColorMap
    inset_percent: float

    def __init__(
        self,
        resolution: int = DEFAULT_RESOLUTION,
        color_map: Optional[ColorMap] = None,
        inset_percent: float = DEFAULT_INSET_PERCENT,
    ):
        self.resolution = resolution
        self.color_map = color_map or DEFAULT_COLOR_MAP
        self.inset_percent = inset_percent

    @classmethod
    def from_settings(cls, settings: BoxmanSettings) -> ImageRenderer:
        return cls(resolution=settings.render_resolution)

    def render(self, state: GameState) -> Image.Image:
        """Render convenience wrapper using stored configuration."""
        return render(
            state,
            resolution=self.resolution,
            color_map=self.color_map,
            inset_percent=self.inset_percent,
        )
