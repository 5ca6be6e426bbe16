"""
One-click background removal from the image border color.

The background color is estimated by averaging the non-transparent pixels on
the image perimeter, then every pixel close to it is cleared. Distances here
are absolute RGB distances (0 to about 441.67), not percentages.

Per pixel with distance d to the background color:
    alpha == 0               -> skipped
    d <= tolerance           -> alpha 0
    d <= 2 * tolerance       -> alpha = min(255, round((d - tolerance) / tolerance * 255))
    otherwise                -> unchanged
"""

import logging
from typing import Optional

import numpy as np

from IS_Libs.constants import (
    ALPHA_OPAQUE,
    PERIMETER_MIN_ALPHA,
    PERIMETER_SAMPLE_STEP,
    PERIMETER_TOLERANCE,
)
from IS_Libs.EraserLib.eraser_models import PixelBuffer, RgbColor, round_half_up

logger = logging.getLogger(__name__)


def detect_perimeter_color(
    buffer: PixelBuffer,
    step: int = PERIMETER_SAMPLE_STEP,
    min_alpha: int = PERIMETER_MIN_ALPHA,
) -> Optional[RgbColor]:
    """
    Estimate the background color from the image border.

    Samples the top and bottom rows and the left and right columns every
    `step` pixels and averages the samples whose alpha exceeds `min_alpha`.

    Args:
        buffer: RGBA pixel buffer
        step: Sampling stride in pixels (>= 1)
        min_alpha: Samples at or below this alpha are ignored

    Returns:
        Rounded mean (r, g, b), or None if every sample was transparent

    Raises:
        ValueError: If step < 1
    """
    if step < 1:
        raise ValueError(f"step must be >= 1, got {step}")

    width, height = buffer.width, buffer.height
    coords = []
    for x in range(0, width, step):
        coords.append((x, 0))
        coords.append((x, height - 1))
    for y in range(0, height, step):
        coords.append((0, y))
        coords.append((width - 1, y))

    total_r = total_g = total_b = 0
    valid = 0
    for x, y in coords:
        r, g, b, a = buffer.get_pixel(x, y)
        if a > min_alpha:
            total_r += r
            total_g += g
            total_b += b
            valid += 1

    if valid == 0:
        return None

    return (
        round_half_up(total_r / valid),
        round_half_up(total_g / valid),
        round_half_up(total_b / valid),
    )


def remove_perimeter_background(
    buffer: PixelBuffer,
    tolerance: float = PERIMETER_TOLERANCE,
    color: Optional[RgbColor] = None,
) -> int:
    """
    Clear pixels matching the perimeter background color, in place.

    Args:
        buffer: RGBA pixel buffer (alpha mutated)
        tolerance: Absolute RGB distance for full removal; the soft band
                   extends to twice this distance
        color: Background color; detected from the perimeter when None

    Returns:
        Number of pixels whose alpha was rewritten (0 when no background
        color could be found)

    Raises:
        ValueError: If tolerance is negative
    """
    if tolerance < 0:
        raise ValueError(f"tolerance must be >= 0, got {tolerance}")

    if color is None:
        color = detect_perimeter_color(buffer)
        if color is None:
            logger.warning("All perimeter pixels are transparent; no background color found")
            return 0

    pixels = buffer.as_array()
    rgb = pixels[..., :3].astype(np.float64)
    diff = np.sqrt(
        (rgb[..., 0] - color[0]) ** 2
        + (rgb[..., 1] - color[1]) ** 2
        + (rgb[..., 2] - color[2]) ** 2
    )
    visible = pixels[..., 3] != 0

    cleared = visible & (diff <= tolerance)
    band = visible & ~cleared & (diff <= tolerance * 2)

    ramp = (diff[band] - tolerance) / tolerance * ALPHA_OPAQUE
    ramp_alpha = np.minimum(ALPHA_OPAQUE, np.floor(ramp + 0.5)).astype(np.uint8)

    alpha = pixels[..., 3]
    alpha[cleared] = 0
    alpha[band] = ramp_alpha

    changed = int(cleared.sum() + band.sum())
    if changed:
        logger.debug(f"Removed background {color} from {changed} pixels")
    else:
        logger.warning(f"No pixels matched background {color} (tolerance {tolerance:g})")
    return changed
