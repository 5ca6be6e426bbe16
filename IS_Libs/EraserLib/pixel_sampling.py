"""
Pixel color sampling for picking eraser layer colors.

Functions:
    get_pixel_color: Read the RGB color at integer coordinates
    view_to_image_coords: Map a click on a scaled view to image coordinates
"""

import math
from typing import Any, Tuple

from IS_Libs.EraserLib.eraser_models import InvalidInputError, PixelBuffer, RgbColor


def get_pixel_color(surface: Any, x: int, y: int) -> RgbColor:
    """
    Sample the RGB color of one pixel.

    Args:
        surface: PIL Image or PixelBuffer
        x: Column (0 <= x < width)
        y: Row (0 <= y < height)

    Returns:
        (r, g, b) tuple; alpha is dropped

    Raises:
        InvalidInputError: If (x, y) lies outside the surface
        TypeError: If surface is neither a PIL Image nor a PixelBuffer
    """
    if isinstance(surface, PixelBuffer):
        width, height = surface.width, surface.height
    elif hasattr(surface, "getpixel") and hasattr(surface, "size"):
        width, height = surface.size
    else:
        raise TypeError(f"Expected PIL Image or PixelBuffer, got {type(surface)}")

    x = int(x)
    y = int(y)
    if not (0 <= x < width and 0 <= y < height):
        raise InvalidInputError(f"Pixel ({x}, {y}) is outside {width}x{height} surface")

    if isinstance(surface, PixelBuffer):
        r, g, b, _ = surface.get_pixel(x, y)
        return r, g, b

    image = surface if surface.mode == "RGBA" else surface.convert("RGBA")
    r, g, b, _ = image.getpixel((x, y))
    return r, g, b


def view_to_image_coords(
    view_x: float,
    view_y: float,
    view_size: Tuple[float, float],
    image_size: Tuple[int, int],
) -> Tuple[int, int]:
    """
    Convert a position on a scaled view of an image to pixel coordinates.

    Args:
        view_x, view_y: Position relative to the view's top-left corner
        view_size: Displayed (width, height)
        image_size: Image (width, height) in pixels

    Returns:
        Integer (x, y) pixel coordinates (may be out of bounds for clicks
        outside the view)

    Raises:
        ValueError: If the view has no area
    """
    view_width, view_height = view_size
    image_width, image_height = image_size
    if view_width <= 0 or view_height <= 0:
        raise ValueError(f"view_size must be positive, got {view_size}")

    scale_x = image_width / view_width
    scale_y = image_height / view_height
    return math.floor(view_x * scale_x), math.floor(view_y * scale_y)
