"""
Normalized RGB color distance.

Plain Euclidean distance in RGB space divided by the distance between black
and white, so every pair of 8-bit colors maps into [0, 1]. No perceptual
weighting is applied.

The divisor is the exact sqrt(3 * 255**2) = 441.6729..., not the rounded
441.67 found in some chroma-key tools. With the rounded value black to white
comes out slightly above 1, and a pixel sitting on a feather boundary can land
one alpha step away (e.g. (30, 30, 30) keyed against black at tolerance 0 and
feather 20 gives 149 here and 150 with 441.67).
"""

import math
from typing import Any

import numpy as np

from IS_Libs.constants import MAX_RGB_DISTANCE
from IS_Libs.EraserLib.eraser_models import RgbColor


def color_distance(c1: RgbColor, c2: RgbColor) -> float:
    """
    Normalized Euclidean distance between two RGB colors.

    Args:
        c1: First (r, g, b) color
        c2: Second (r, g, b) color

    Returns:
        Distance in [0, 1]; 0 for identical colors
    """
    r1, g1, b1 = c1[:3]
    r2, g2, b2 = c2[:3]
    dr = r1 - r2
    dg = g1 - g2
    db = b1 - b2
    return math.sqrt(dr * dr + dg * dg + db * db) / MAX_RGB_DISTANCE


def color_distance_array(pixels: Any, color: RgbColor) -> np.ndarray:
    """
    Vectorized color_distance for an array of pixels.

    Args:
        pixels: Array shaped (..., 3) or (..., 4); only the RGB channels are used
        color: Target (r, g, b) color

    Returns:
        float64 array shaped like pixels without the channel axis
    """
    rgb = np.asarray(pixels)[..., :3].astype(np.float64)
    dr = rgb[..., 0] - color[0]
    dg = rgb[..., 1] - color[1]
    db = rgb[..., 2] - color[2]
    return np.sqrt(dr * dr + dg * dg + db * db) / MAX_RGB_DISTANCE
