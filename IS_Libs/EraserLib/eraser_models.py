"""
Eraser data models for Icon Shaper.

This module defines the value types consumed by the chroma-key eraser.

Classes:
    InvalidInputError: Raised for malformed pixel buffers and sampling coordinates
    PixelBuffer: Dense row-major RGBA8 buffer with explicit width and height
    EraserLayer: One chroma-key layer (target color, tolerance, feather, transparency)
    ProcessingParams: Ordered eraser layers plus the global choke radius

Type Aliases:
    RgbColor: A tuple of 3 integers representing RGB color values (0-255)
"""

import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

import numpy as np
from PIL import Image

from IS_Libs.constants import (
    ALPHA_OPAQUE,
    CHOKE_MIN,
    DEFAULT_CHOKE,
    DEFAULT_FEATHER,
    DEFAULT_LAYER_ID,
    DEFAULT_TOLERANCE,
    DEFAULT_TRANSPARENCY,
    FEATHER_MAX,
    FEATHER_MIN,
    FIELD_CHOKE,
    FIELD_COLOR,
    FIELD_FEATHER,
    FIELD_IS_ACTIVE,
    FIELD_LAYER_ID,
    FIELD_LAYERS,
    FIELD_TOLERANCE,
    FIELD_TRANSPARENCY,
    TOLERANCE_MAX,
    TOLERANCE_MIN,
    TRANSPARENCY_MAX,
    TRANSPARENCY_MIN,
)

RgbColor = Tuple[int, int, int]

CHANNELS = 4


class InvalidInputError(ValueError):
    """Raised when a pixel buffer or sampling request is malformed."""


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves rounded towards +infinity."""
    return int(math.floor(value + 0.5))


def normalize_color(color: Any) -> Optional[RgbColor]:
    """
    Coerce a color value into an RGB tuple.

    Accepts None, an (r, g, b[, a]) sequence or a {"r", "g", "b"} mapping.
    Any alpha component is dropped.

    Raises:
        ValueError: If the value is not a color or a channel is out of range
    """
    if color is None:
        return None

    if isinstance(color, dict):
        try:
            channels = [color["r"], color["g"], color["b"]]
        except KeyError as e:
            raise ValueError(f"color mapping is missing channel {e}") from e
    elif isinstance(color, Sequence) and not isinstance(color, (str, bytes)):
        if len(color) not in (3, 4):
            raise ValueError(f"color must have 3 or 4 channels, got {len(color)}")
        channels = list(color[:3])
    else:
        raise ValueError(f"Unsupported color value: {color!r}")

    normalized = []
    for value in channels:
        if isinstance(value, bool) or int(value) != value:
            raise ValueError(f"color channels must be integers, got {value!r}")
        value = int(value)
        if not (0 <= value <= 255):
            raise ValueError(f"color channels must be 0-255, got {value}")
        normalized.append(value)

    return normalized[0], normalized[1], normalized[2]


def _check_range(name: str, value: float, low: float, high: Optional[float]) -> float:
    value = float(value)
    if math.isnan(value):
        raise ValueError(f"{name} must not be NaN")
    if value < low or (high is not None and value > high):
        upper = f"{high:g}" if high is not None else "inf"
        raise ValueError(f"{name} must be {low:g}-{upper}, got {value:g}")
    return value


@dataclass
class PixelBuffer:
    """Row-major RGBA8 pixel data.

    Attributes:
        width: Image width in pixels (> 0)
        height: Image height in pixels (> 0)
        data: width * height * 4 bytes, mutated in place by the eraser
    """
    width: int
    height: int
    data: bytearray

    def __post_init__(self):
        """Validate dimensions against the data length."""
        if not isinstance(self.data, bytearray):
            self.data = bytearray(self.data)

        if int(self.width) <= 0 or int(self.height) <= 0:
            raise InvalidInputError(
                f"PixelBuffer dimensions must be positive, got {self.width}x{self.height}"
            )
        self.width = int(self.width)
        self.height = int(self.height)

        expected = self.width * self.height * CHANNELS
        if len(self.data) != expected:
            raise InvalidInputError(
                f"PixelBuffer data length {len(self.data)} does not match "
                f"{self.width}x{self.height} RGBA ({expected} bytes)"
            )

    @property
    def pixel_count(self) -> int:
        return self.width * self.height

    @classmethod
    def from_image(cls, image: Any) -> "PixelBuffer":
        """Create a buffer holding a copy of a PIL Image's RGBA pixels."""
        if not hasattr(image, "tobytes") or not hasattr(image, "convert"):
            raise TypeError(f"Expected PIL Image, got {type(image)}")

        rgba = image if image.mode == "RGBA" else image.convert("RGBA")
        width, height = rgba.size
        return cls(width, height, bytearray(rgba.tobytes()))

    @classmethod
    def from_pixels(cls, width: int, height: int, pixels: Sequence[Sequence[int]]) -> "PixelBuffer":
        """Create a buffer from a flat row-major sequence of RGBA tuples."""
        data = bytearray()
        for pixel in pixels:
            data.extend(pixel)
        return cls(width, height, data)

    def to_image(self) -> Any:
        """Return a new RGBA PIL Image with this buffer's pixels."""
        return Image.frombytes("RGBA", (self.width, self.height), bytes(self.data))

    def copy(self) -> "PixelBuffer":
        return PixelBuffer(self.width, self.height, bytearray(self.data))

    def as_array(self) -> np.ndarray:
        """Writable (height, width, 4) uint8 view sharing this buffer's memory."""
        return np.frombuffer(self.data, dtype=np.uint8).reshape(self.height, self.width, CHANNELS)

    def alpha_values(self) -> List[int]:
        """Alpha channel in row-major order."""
        return list(self.data[3::CHANNELS])

    def get_pixel(self, x: int, y: int) -> Tuple[int, int, int, int]:
        offset = (y * self.width + x) * CHANNELS
        r, g, b, a = self.data[offset:offset + CHANNELS]
        return r, g, b, a


@dataclass(frozen=True)
class EraserLayer:
    """A single chroma-key layer.

    Attributes:
        id: Identifier used by callers to manage layers (ignored by the eraser)
        color: Target RGB color, or None for a layer without a picked color
        tolerance: Matching radius as percent of the maximum RGB distance (0-100)
        feather: Soft edge band width beyond tolerance, same units (0-20)
        transparency: Opacity reduction at a match, 100 = fully transparent (0-100)
        is_active: Inactive layers are skipped entirely
    """
    id: str = DEFAULT_LAYER_ID
    color: Optional[RgbColor] = None
    tolerance: float = DEFAULT_TOLERANCE
    feather: float = DEFAULT_FEATHER
    transparency: float = DEFAULT_TRANSPARENCY
    is_active: bool = True

    def __post_init__(self):
        """Validate layer parameters."""
        object.__setattr__(self, "id", str(self.id))
        object.__setattr__(self, "color", normalize_color(self.color))
        object.__setattr__(
            self, "tolerance",
            _check_range("tolerance", self.tolerance, TOLERANCE_MIN, TOLERANCE_MAX),
        )
        object.__setattr__(
            self, "feather",
            _check_range("feather", self.feather, FEATHER_MIN, FEATHER_MAX),
        )
        object.__setattr__(
            self, "transparency",
            _check_range("transparency", self.transparency, TRANSPARENCY_MIN, TRANSPARENCY_MAX),
        )
        object.__setattr__(self, "is_active", bool(self.is_active))

    @property
    def is_effective(self) -> bool:
        """True when the layer takes part in compositing."""
        return self.is_active and self.color is not None

    @property
    def target_alpha(self) -> int:
        """Alpha written at an exact color match."""
        return round_half_up(ALPHA_OPAQUE * (1 - (self.transparency / 100)))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            FIELD_LAYER_ID: self.id,
            FIELD_COLOR: list(self.color) if self.color is not None else None,
            FIELD_TOLERANCE: self.tolerance,
            FIELD_FEATHER: self.feather,
            FIELD_TRANSPARENCY: self.transparency,
            FIELD_IS_ACTIVE: self.is_active,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EraserLayer":
        """Create from dictionary."""
        filtered = {k: v for k, v in data.items()
                    if k in cls.__dataclass_fields__}
        return cls(**filtered)


@dataclass(frozen=True)
class ProcessingParams:
    """Everything one eraser pass needs.

    Attributes:
        layers: Ordered eraser layers
        choke: Erosion radius in pixels applied once after all layers (>= 0)
    """
    layers: Tuple[EraserLayer, ...] = field(default_factory=tuple)
    choke: float = DEFAULT_CHOKE

    def __post_init__(self):
        layers = tuple(self.layers)
        for layer in layers:
            if not isinstance(layer, EraserLayer):
                raise TypeError(f"Expected EraserLayer, got {type(layer)}")

        ids = [layer.id for layer in layers]
        duplicates = sorted({layer_id for layer_id in ids if ids.count(layer_id) > 1})
        if duplicates:
            raise ValueError(f"Duplicate layer ids: {', '.join(duplicates)}")

        object.__setattr__(self, "layers", layers)
        object.__setattr__(self, "choke", _check_range("choke", self.choke, CHOKE_MIN, None))

    @property
    def active_layers(self) -> List[EraserLayer]:
        """Layers with a color that are switched on, in order."""
        return [layer for layer in self.layers if layer.is_effective]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            FIELD_LAYERS: [layer.to_dict() for layer in self.layers],
            FIELD_CHOKE: self.choke,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProcessingParams":
        """Create from dictionary."""
        layers = tuple(EraserLayer.from_dict(item) for item in data.get(FIELD_LAYERS, []))
        return cls(layers=layers, choke=data.get(FIELD_CHOKE, DEFAULT_CHOKE))
