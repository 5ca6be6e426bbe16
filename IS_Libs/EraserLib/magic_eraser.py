"""
Magic Eraser pipeline.

Runs the layer compositor and then the choke filter over one RGBA buffer:

    raw pixels -> layer compositor -> choke (horizontal, vertical) -> pixels

Only the alpha channel is ever modified. With no effective layer and a zero
choke the buffer is returned untouched.

Example:
    >>> from PIL import Image
    >>> img = Image.open("icon.png")
    >>> params = ProcessingParams(
    ...     layers=(EraserLayer(id="1", color=(255, 255, 255), tolerance=15),),
    ...     choke=1,
    ... )
    >>> cutout = apply_magic_eraser(img, params)
"""

import logging
from typing import Any, Optional

from IS_Libs.EraserLib.backends import resolve_backend
from IS_Libs.EraserLib.choke_filter import apply_choke
from IS_Libs.EraserLib.eraser_models import PixelBuffer, ProcessingParams
from IS_Libs.EraserLib.layer_compositor import apply_layers

logger = logging.getLogger(__name__)


def process_magic_eraser(
    buffer: PixelBuffer,
    params: ProcessingParams,
    backend: Optional[str] = None,
) -> PixelBuffer:
    """
    Remove background colors from a pixel buffer in place.

    Args:
        buffer: RGBA pixel buffer (mutated)
        params: Eraser layers and global choke radius
        backend: 'numpy', 'python', or None for the default

    Returns:
        The same buffer, with only alpha possibly lowered

    Raises:
        TypeError: If buffer or params have the wrong type
        ValueError: If the backend is unknown
    """
    if not isinstance(buffer, PixelBuffer):
        raise TypeError(f"Expected PixelBuffer, got {type(buffer)}")
    if not isinstance(params, ProcessingParams):
        raise TypeError(f"Expected ProcessingParams, got {type(params)}")

    use_backend = resolve_backend(backend)
    active_layers = params.active_layers
    if not active_layers and params.choke == 0:
        return buffer

    if active_layers:
        apply_layers(buffer, active_layers, backend=use_backend)

    if params.choke > 0:
        apply_choke(buffer, params.choke, backend=use_backend)

    return buffer


def apply_magic_eraser(
    image: Any,
    params: ProcessingParams,
    backend: Optional[str] = None,
) -> Any:
    """
    Apply the magic eraser to a PIL Image.

    The source image is left untouched.

    Args:
        image: PIL Image (converted to RGBA)
        params: Eraser layers and global choke radius
        backend: 'numpy', 'python', or None for the default

    Returns:
        New RGBA PIL Image

    Raises:
        TypeError: If image is not a PIL Image
    """
    buffer = PixelBuffer.from_image(image)
    process_magic_eraser(buffer, params, backend=backend)
    return buffer.to_image()


def apply_alpha_choke(
    image: Any,
    radius: float,
    backend: Optional[str] = None,
) -> Any:
    """
    Erode the alpha channel of a PIL Image, e.g. an AI cutout with a halo.

    Args:
        image: PIL Image (converted to RGBA)
        radius: Erosion radius in pixels; <= 0 returns an unchanged copy
        backend: 'numpy', 'python', or None for the default

    Returns:
        New RGBA PIL Image
    """
    buffer = PixelBuffer.from_image(image)
    apply_choke(buffer, radius, backend=backend)
    return buffer.to_image()
