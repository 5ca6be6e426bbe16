"""
Perimeter Background Removal Node.

Auto mode: detects the background color from the image border and clears it
without any picked layers.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from IS_Libs.constants import NODE_TYPE_PERIMETER_REMOVAL, PERIMETER_TOLERANCE
from IS_Libs.EraserLib.eraser_models import PixelBuffer, RgbColor, normalize_color
from IS_Libs.EraserLib.perimeter_removal import remove_perimeter_background


@dataclass
class PerimeterRemovalNodeConfig:
    """Configuration for perimeter background removal node.

    Attributes:
        tolerance: Absolute RGB distance cleared completely (soft band to 2x)
        color: Background color override; detected from the border when None
    """
    tolerance: float = PERIMETER_TOLERANCE
    color: Optional[RgbColor] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "tolerance": self.tolerance,
            "color": list(self.color) if self.color is not None else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PerimeterRemovalNodeConfig":
        """Create from dictionary."""
        filtered = {k: v for k, v in data.items()
                    if k in cls.__dataclass_fields__}
        if "color" in filtered:
            filtered["color"] = normalize_color(filtered["color"])
        return cls(**filtered)


def execute_perimeter_removal_node(node: Dict[str, Any], inputs: List[Any]) -> Any:
    """
    Execute perimeter background removal node.

    Inputs:
        - [0]: Image to clean (PIL Image)

    Returns:
        New RGBA PIL Image (an unchanged copy when no background was found)

    Raises:
        ValueError: If no input or invalid parameters
        TypeError: If input not PIL Image
    """
    if not inputs or len(inputs) < 1:
        raise ValueError("PerimeterRemovalNode requires image input")

    image = inputs[0]
    if not hasattr(image, "tobytes"):
        raise TypeError(f"Expected PIL Image, got {type(image)}")

    try:
        config = PerimeterRemovalNodeConfig.from_dict(node)
        buffer = PixelBuffer.from_image(image)
        remove_perimeter_background(buffer, tolerance=float(config.tolerance), color=config.color)
        return buffer.to_image()
    except (ValueError, TypeError) as e:
        raise type(e)(f"Perimeter removal node error: {str(e)}")


def create_perimeter_removal_node(
    node_id: str,
    tolerance: float = PERIMETER_TOLERANCE,
    color: Optional[RgbColor] = None,
) -> Dict[str, Any]:
    """
    Create perimeter background removal node for graph.

    Args:
        node_id: Unique node identifier
        tolerance: Absolute RGB distance for full removal
        color: Optional background color override

    Returns:
        Node dict for graph
    """
    return {
        "id": node_id,
        "type": NODE_TYPE_PERIMETER_REMOVAL,
        "tolerance": tolerance,
        "color": list(color) if color is not None else None,
    }
