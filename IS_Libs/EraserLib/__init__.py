"""
EraserLib - Chroma-key background eraser

This module provides the eraser models, the multi-layer alpha compositor,
the alpha choke filter, and the helpers around them for the Icon Shaper
project.
"""

from IS_Libs.EraserLib.eraser_models import (
    EraserLayer,
    InvalidInputError,
    PixelBuffer,
    ProcessingParams,
    RgbColor,
)
from IS_Libs.EraserLib.backends import get_available_backends
from IS_Libs.EraserLib.color_distance import color_distance, color_distance_array
from IS_Libs.EraserLib.layer_compositor import apply_layers, composite_pixel_alpha
from IS_Libs.EraserLib.choke_filter import apply_choke
from IS_Libs.EraserLib.magic_eraser import (
    apply_alpha_choke,
    apply_magic_eraser,
    process_magic_eraser,
)
from IS_Libs.EraserLib.pixel_sampling import get_pixel_color, view_to_image_coords
from IS_Libs.EraserLib.layer_stack import LayerStack
from IS_Libs.EraserLib.perimeter_removal import (
    detect_perimeter_color,
    remove_perimeter_background,
)

__all__ = [
    "EraserLayer",
    "InvalidInputError",
    "PixelBuffer",
    "ProcessingParams",
    "RgbColor",
    "get_available_backends",
    "color_distance",
    "color_distance_array",
    "apply_layers",
    "composite_pixel_alpha",
    "apply_choke",
    "apply_alpha_choke",
    "apply_magic_eraser",
    "process_magic_eraser",
    "get_pixel_color",
    "view_to_image_coords",
    "LayerStack",
    "detect_perimeter_color",
    "remove_perimeter_background",
]
