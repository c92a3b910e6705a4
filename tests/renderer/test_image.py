import numpy as np
from PIL import Image

from boxman.config import BoxmanSettings
from boxman.directions import Direction
from boxman.moves import apply_outcome, resolve
from boxman.renderer import DEFAULT_COLOR_MAP, ImageRenderer, render, render_array
from boxman.renderer.image import MOTION_SHADE, facing_triangle, shade
from test_utils import make_state


def pixel(arr: np.ndarray, x: int, y: int) -> tuple:
    return tuple(int(v) for v in arr[y, x])


def corridor():
    return make_state(
        player=(0, 0), boxes=[(1, 0)], targets=[(2, 0)], walls=[(0, 1)], width=3, height=2
    )


def test_render_image_size_and_mode() -> None:
    img = render(corridor(), resolution=30)
    assert isinstance(img, Image.Image)
    assert img.mode == "RGBA"
    assert img.size == (30, 20)


def test_resolution_rounds_down_to_whole_cells() -> None:
    assert render(corridor(), resolution=32).size == (30, 20)


def test_render_array_colors() -> None:
    arr = render_array(corridor(), resolution=30)
    assert arr.shape == (20, 30, 4)
    assert arr.dtype == np.uint8
    assert pixel(arr, 5, 15) == DEFAULT_COLOR_MAP["wall"]
    assert pixel(arr, 15, 15) == DEFAULT_COLOR_MAP["floor"]
    assert pixel(arr, 25, 5) == DEFAULT_COLOR_MAP["target"]
    assert pixel(arr, 15, 5) == DEFAULT_COLOR_MAP["box"]
    assert pixel(arr, 10, 0) == DEFAULT_COLOR_MAP["floor"]


def test_box_on_target_color() -> None:
    state = corridor()
    apply_outcome(state, resolve(state, Direction.RIGHT))
    arr = render_array(state, resolution=30)
    assert pixel(arr, 25, 5) == DEFAULT_COLOR_MAP["box_on_target"]
    assert pixel(arr, 5, 5) == DEFAULT_COLOR_MAP["floor"]


def test_moving_entities_are_shaded() -> None:
    state = corridor()
    state.set_in_motion([1], True)
    arr = render_array(state, resolution=30)
    assert pixel(arr, 15, 5) == shade(DEFAULT_COLOR_MAP["box"], MOTION_SHADE)


def test_render_does_not_touch_state() -> None:
    state = corridor()
    position, appearance = state.position, state.appearance
    render(state, resolution=30)
    assert state.position is position
    assert state.appearance is appearance


def test_custom_palette() -> None:
    red = (255, 0, 0, 255)
    renderer = ImageRenderer(resolution=30, color_map={**DEFAULT_COLOR_MAP, "box": red})
    arr = np.asarray(renderer.render(corridor()))
    assert pixel(arr, 15, 5) == red


def test_facing_triangle_points_the_right_way() -> None:
    tip, *_ = facing_triangle(0, 0, 100, Direction.RIGHT)
    assert tip == (85.0, 50.0)
    tip, *_ = facing_triangle(0, 0, 100, Direction.UP)
    assert tip == (50.0, 15.0)


def test_renderer_from_settings_uses_resolution() -> None:
    renderer = ImageRenderer.from_settings(BoxmanSettings(render_resolution=60))
    assert renderer.resolution == 60
    assert renderer.render(corridor()).size == (60, 40)
