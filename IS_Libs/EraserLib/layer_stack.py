"""
Editable set of eraser layers.

Keeps the layer list and the currently selected layer the way the eraser
editor works with them: there is always at least one layer, new layers are
selected on creation, and picking a color writes it into the selected layer.
"""

import logging
import uuid
from dataclasses import replace
from typing import Any, List, Optional

from IS_Libs.constants import DEFAULT_CHOKE, DEFAULT_LAYER_ID
from IS_Libs.EraserLib.eraser_models import EraserLayer, ProcessingParams
from IS_Libs.EraserLib.pixel_sampling import get_pixel_color

logger = logging.getLogger(__name__)


class LayerStack:
    """
    Ordered eraser layers with one selected layer.

    Example:
        >>> stack = LayerStack()
        >>> stack.pick_color(image, 0, 0)       # key out the corner color
        >>> stack.add_layer()
        >>> stack.pick_color(image, 10, 4)
        >>> params = stack.to_params(choke=1)
    """

    def __init__(self, layers: Optional[List[EraserLayer]] = None):
        self._layers: List[EraserLayer] = []
        self.active_layer_id: str = DEFAULT_LAYER_ID
        if layers:
            self._layers = list(layers)
            self.active_layer_id = self._layers[0].id
        else:
            self.reset()

    @property
    def layers(self) -> List[EraserLayer]:
        return list(self._layers)

    @property
    def active_layer(self) -> EraserLayer:
        """Selected layer, or the first one if the selection is stale."""
        for layer in self._layers:
            if layer.id == self.active_layer_id:
                return layer
        return self._layers[0]

    def __len__(self) -> int:
        return len(self._layers)

    def reset(self) -> None:
        """Drop all layers and start over with a single default layer."""
        self._layers = [EraserLayer(id=DEFAULT_LAYER_ID)]
        self.active_layer_id = DEFAULT_LAYER_ID

    def add_layer(self) -> EraserLayer:
        """Append a default layer and select it."""
        layer = EraserLayer(id=uuid.uuid4().hex)
        self._layers.append(layer)
        self.active_layer_id = layer.id
        logger.debug(f"Added eraser layer {layer.id}")
        return layer

    def remove_layer(self, layer_id: str) -> None:
        """
        Remove a layer.

        Removing the only layer resets the stack instead. When the selected
        layer is removed, the last remaining layer becomes selected.

        Raises:
            KeyError: If no layer has this id
        """
        self._index_of(layer_id)

        if len(self._layers) == 1:
            self.reset()
            return

        self._layers = [layer for layer in self._layers if layer.id != layer_id]
        if self.active_layer_id == layer_id:
            self.active_layer_id = self._layers[-1].id
        logger.debug(f"Removed eraser layer {layer_id}")

    def select_layer(self, layer_id: str) -> None:
        self._index_of(layer_id)
        self.active_layer_id = layer_id

    def update_layer(self, layer_id: str, **changes: Any) -> EraserLayer:
        """
        Replace fields of a layer.

        Raises:
            KeyError: If no layer has this id
            ValueError: If a changed value is out of range
        """
        index = self._index_of(layer_id)
        if "id" in changes:
            raise ValueError("Layer id cannot be changed")

        updated = replace(self._layers[index], **changes)
        self._layers[index] = updated
        return updated

    def update_active_layer(self, **changes: Any) -> EraserLayer:
        return self.update_layer(self.active_layer.id, **changes)

    def pick_color(self, surface: Any, x: int, y: int) -> EraserLayer:
        """Sample a pixel and set its color on the selected layer."""
        color = get_pixel_color(surface, x, y)
        return self.update_active_layer(color=color)

    def to_params(self, choke: float = DEFAULT_CHOKE) -> ProcessingParams:
        return ProcessingParams(layers=tuple(self._layers), choke=choke)

    def _index_of(self, layer_id: str) -> int:
        for index, layer in enumerate(self._layers):
            if layer.id == layer_id:
                return index
        raise KeyError(f"No eraser layer with id '{layer_id}'")
