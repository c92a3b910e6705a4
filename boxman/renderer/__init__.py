from .image import DEFAULT_COLOR_MAP, ImageRenderer, render, render_array
from .text import render_text

__all__ = [
    "DEFAULT_COLOR_MAP",
    "ImageRenderer",
    "render",
    "render_array",
    "render_text",
]
