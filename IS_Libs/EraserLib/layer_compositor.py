"""
Multi-layer chroma-key alpha compositor.

Every effective layer proposes an alpha for a pixel from the pixel's distance
to the layer color; the pixel keeps the smallest proposal. Layers can only
lower alpha, so the result does not depend on layer order.

Per layer, with tol = tolerance / 100 and band = feather / 100:
    distance <= tol          -> target_alpha
    distance <= tol + band   -> floor(target_alpha + (255 - target_alpha) * t),
                                t = (distance - tol) / band
    otherwise                -> no change

The feather ramp always runs from target_alpha up to 255, whatever alpha an
earlier layer already produced.

Example:
    >>> buffer = PixelBuffer.from_image(Image.new("RGBA", (4, 4), (0, 255, 0, 255)))
    >>> layer = EraserLayer(id="bg", color=(0, 255, 0), tolerance=10, feather=0)
    >>> _ = apply_layers(buffer, [layer])
    >>> buffer.alpha_values()[0]
    0
"""

import logging
import math
from typing import Optional, Sequence

import numpy as np

from IS_Libs.constants import ALPHA_OPAQUE, BACKEND_NUMPY, BACKEND_PYTHON
from IS_Libs.EraserLib.color_distance import color_distance, color_distance_array
from IS_Libs.EraserLib.eraser_models import CHANNELS, EraserLayer, PixelBuffer
from IS_Libs.EraserLib.backends import resolve_backend

logger = logging.getLogger(__name__)


def composite_pixel_alpha(
    r: int,
    g: int,
    b: int,
    a: int,
    layers: Sequence[EraserLayer],
) -> int:
    """
    Compute the new alpha of one pixel.

    Args:
        r, g, b: Pixel color
        a: Current pixel alpha (0-255)
        layers: Layers to evaluate; layers without color or switched off are skipped

    Returns:
        New alpha, never above a
    """
    if a == 0:
        return a

    for layer in layers:
        if not layer.is_effective:
            continue

        tolerance = layer.tolerance / 100
        dist = color_distance((r, g, b), layer.color)
        target_alpha = layer.target_alpha

        if dist <= tolerance:
            a = min(a, target_alpha)
        elif layer.feather > 0 and dist <= tolerance + (layer.feather / 100):
            feather_dist = (dist - tolerance) / (layer.feather / 100)
            layer_alpha = target_alpha + (ALPHA_OPAQUE - target_alpha) * feather_dist
            a = min(a, math.floor(layer_alpha))

        if a == 0:
            break

    return a


def apply_layers(
    buffer: PixelBuffer,
    layers: Sequence[EraserLayer],
    backend: Optional[str] = None,
) -> PixelBuffer:
    """
    Apply eraser layers to every pixel of a buffer, in place.

    Args:
        buffer: RGBA pixel buffer; only its alpha channel is written
        layers: Eraser layers (non-effective layers are ignored)
        backend: 'numpy', 'python', or None for the default

    Returns:
        The same buffer
    """
    use_backend = resolve_backend(backend)
    active = [layer for layer in layers if layer.is_effective]
    if not active:
        return buffer

    logger.debug(
        f"Compositing {len(active)} eraser layer(s) over "
        f"{buffer.width}x{buffer.height} ({use_backend})"
    )

    if use_backend == BACKEND_PYTHON:
        _apply_layers_python(buffer, active)
    elif use_backend == BACKEND_NUMPY:
        _apply_layers_numpy(buffer, active)

    return buffer


def _apply_layers_python(buffer: PixelBuffer, layers: Sequence[EraserLayer]) -> None:
    data = buffer.data
    for i in range(0, len(data), CHANNELS):
        a = data[i + 3]
        if a == 0:
            continue
        data[i + 3] = composite_pixel_alpha(data[i], data[i + 1], data[i + 2], a, layers)


def _apply_layers_numpy(buffer: PixelBuffer, layers: Sequence[EraserLayer]) -> None:
    pixels = buffer.as_array()
    alpha = pixels[..., 3].astype(np.int32)

    for layer in layers:
        tolerance = layer.tolerance / 100
        dist = color_distance_array(pixels, layer.color)
        target_alpha = layer.target_alpha

        proposal = np.full(alpha.shape, ALPHA_OPAQUE, dtype=np.int32)
        inside = dist <= tolerance
        proposal[inside] = target_alpha

        if layer.feather > 0:
            band = ~inside & (dist <= tolerance + (layer.feather / 100))
            feather_dist = (dist[band] - tolerance) / (layer.feather / 100)
            ramp = target_alpha + (ALPHA_OPAQUE - target_alpha) * feather_dist
            proposal[band] = np.floor(ramp).astype(np.int32)

        np.minimum(alpha, proposal, out=alpha)

    # Alpha 0 pixels stay at 0 since every proposal is >= 0
    pixels[..., 3] = np.clip(alpha, 0, ALPHA_OPAQUE).astype(np.uint8)
