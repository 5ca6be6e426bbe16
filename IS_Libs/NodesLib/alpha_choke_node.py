"""
Alpha Choke Node.

Erodes the alpha channel of an image to trim fringes, typically after an AI
background removal model has produced a cutout with a soft halo.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from IS_Libs.constants import CHOKE_MIN, DEFAULT_CHOKE, NODE_TYPE_ALPHA_CHOKE
from IS_Libs.EraserLib.magic_eraser import apply_alpha_choke
from IS_Libs.NodesLib.magic_eraser_node import clamp_value


@dataclass
class AlphaChokeNodeConfig:
    """Configuration for alpha choke node.

    Attributes:
        radius: Erosion radius in pixels (negative values clamp to 0)
        backend: Processing backend ('numpy', 'python', or None for default)
    """
    radius: float = DEFAULT_CHOKE
    backend: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "radius": self.radius,
            "backend": self.backend,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AlphaChokeNodeConfig":
        """Create from dictionary."""
        filtered = {k: v for k, v in data.items()
                    if k in cls.__dataclass_fields__}
        return cls(**filtered)


def execute_alpha_choke_node(node: Dict[str, Any], inputs: List[Any]) -> Any:
    """
    Execute alpha choke node.

    Inputs:
        - [0]: Image to choke (PIL Image)

    Returns:
        New RGBA PIL Image

    Raises:
        ValueError: If no input or invalid parameters
        TypeError: If input not PIL Image
    """
    if not inputs or len(inputs) < 1:
        raise ValueError("AlphaChokeNode requires image input")

    image = inputs[0]
    if not hasattr(image, "tobytes"):
        raise TypeError(f"Expected PIL Image, got {type(image)}")

    config = AlphaChokeNodeConfig.from_dict(node)

    try:
        radius = clamp_value(config.radius, CHOKE_MIN)
        return apply_alpha_choke(image, radius, backend=config.backend)
    except (ValueError, TypeError) as e:
        raise type(e)(f"Alpha choke node error: {str(e)}")


def create_alpha_choke_node(
    node_id: str,
    radius: float = 1.0,
    backend: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Create alpha choke node for graph.

    Args:
        node_id: Unique node identifier
        radius: Erosion radius in pixels
        backend: Processing backend

    Returns:
        Node dict for graph
    """
    return {
        "id": node_id,
        "type": NODE_TYPE_ALPHA_CHOKE,
        "radius": radius,
        "backend": backend,
    }
