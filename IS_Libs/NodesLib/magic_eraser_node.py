"""
Magic Eraser Node for Icon Shaper.

This node removes background colors from an image using a stack of
chroma-key layers followed by an optional alpha choke.

Classes:
    MagicEraserNodeConfig: Configuration for magic eraser node

Functions:
    execute_magic_eraser_node: Pipeline executor for magic eraser nodes
    create_magic_eraser_node: Helper to build a node dictionary
"""

import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from IS_Libs.constants import (
    CHOKE_MIN,
    DEFAULT_CHOKE,
    FEATHER_MAX,
    FEATHER_MIN,
    FIELD_FEATHER,
    FIELD_TOLERANCE,
    FIELD_TRANSPARENCY,
    NODE_TYPE_MAGIC_ERASER,
    TOLERANCE_MAX,
    TOLERANCE_MIN,
    TRANSPARENCY_MAX,
    TRANSPARENCY_MIN,
)
from IS_Libs.EraserLib.eraser_models import EraserLayer, ProcessingParams
from IS_Libs.EraserLib.magic_eraser import apply_magic_eraser


def clamp_value(value: Any, low: float, high: Optional[float] = None) -> float:
    """Clamp to [low, high]; NaN maps to low."""
    value = float(value)
    if math.isnan(value):
        return low
    value = max(low, value)
    if high is not None:
        value = min(high, value)
    return value


_LAYER_RANGES = {
    FIELD_TOLERANCE: (TOLERANCE_MIN, TOLERANCE_MAX),
    FIELD_FEATHER: (FEATHER_MIN, FEATHER_MAX),
    FIELD_TRANSPARENCY: (TRANSPARENCY_MIN, TRANSPARENCY_MAX),
}


def clamp_layer_dict(data: Dict[str, Any]) -> Dict[str, Any]:
    """Return a copy of a layer dict with numeric values pulled into range."""
    clamped = dict(data)
    for key, (low, high) in _LAYER_RANGES.items():
        if key in clamped:
            clamped[key] = clamp_value(clamped[key], low, high)
    return clamped


@dataclass
class MagicEraserNodeConfig:
    """Configuration for magic eraser node execution.

    Attributes:
        layers: Layer dictionaries (see EraserLayer.to_dict)
        choke: Global erosion radius in pixels applied after all layers
        backend: Processing backend ('numpy', 'python', or None for default)
    """
    layers: List[Dict[str, Any]] = field(default_factory=list)
    choke: float = DEFAULT_CHOKE
    backend: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "layers": [dict(layer) for layer in self.layers],
            "choke": self.choke,
            "backend": self.backend,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MagicEraserNodeConfig":
        """Create from dictionary."""
        filtered = {k: v for k, v in data.items()
                    if k in cls.__dataclass_fields__}
        layers = filtered.get("layers")
        if layers is not None:
            filtered["layers"] = [
                layer.to_dict() if isinstance(layer, EraserLayer) else dict(layer)
                for layer in layers
            ]
        return cls(**filtered)

    def get_params(self) -> ProcessingParams:
        """Build ProcessingParams, clamping out-of-range values to their bounds."""
        layers = tuple(
            EraserLayer.from_dict(clamp_layer_dict(layer)) for layer in self.layers
        )
        return ProcessingParams(layers=layers, choke=clamp_value(self.choke, CHOKE_MIN))


def execute_magic_eraser_node(node: Dict[str, Any], inputs: List[Any]) -> Any:
    """
    Pipeline executor for magic eraser nodes.

    Args:
        node: Node dictionary containing MagicEraserNodeConfig fields
        inputs: Should contain exactly one element: the input PIL Image

    Returns:
        New RGBA PIL Image with the background made transparent

    Raises:
        ValueError: If inputs list is empty or the layer config is invalid
        TypeError: If input is not a PIL Image
    """
    if not inputs or len(inputs) == 0:
        raise ValueError("Magic eraser node requires 1 input image")

    image = inputs[0]
    if not hasattr(image, "size") or not hasattr(image, "tobytes"):
        raise TypeError(f"Expected PIL Image, got {type(image)}")

    config = MagicEraserNodeConfig.from_dict(node)

    try:
        params = config.get_params()
        return apply_magic_eraser(image, params, backend=config.backend)
    except (ValueError, TypeError) as e:
        raise type(e)(f"Magic eraser node error: {str(e)}")


def create_magic_eraser_node(
    node_id: str,
    layers: Sequence[EraserLayer] = (),
    choke: float = DEFAULT_CHOKE,
    backend: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Helper to create a magic eraser node dictionary for graph building.

    Args:
        node_id: Unique node identifier
        layers: Eraser layers, in evaluation order
        choke: Global choke radius in pixels
        backend: Processing backend

    Returns:
        Node dictionary ready for graph serialization

    Example:
        >>> node = create_magic_eraser_node(
        ...     "eraser-1",
        ...     layers=[EraserLayer(id="bg", color=(255, 255, 255), tolerance=12)],
        ...     choke=1,
        ... )
        >>> result = registry.execute("Magic Eraser", node, [image])
    """
    return {
        "id": node_id,
        "type": NODE_TYPE_MAGIC_ERASER,
        "layers": [layer.to_dict() for layer in layers],
        "choke": choke,
        "backend": backend,
    }
