"""
Icon Shaper Nodes Library.

This module contains the node implementations wrapping the eraser
operations for the node pipeline.

Modules:
    magic_eraser_node: Multi-layer chroma-key eraser with global choke
    alpha_choke_node: Alpha erosion for cutouts with halos
    perimeter_removal_node: Border-color background removal (auto mode)
"""

from IS_Libs.NodesLib.magic_eraser_node import (
    MagicEraserNodeConfig,
    execute_magic_eraser_node,
    create_magic_eraser_node,
)
from IS_Libs.NodesLib.alpha_choke_node import (
    AlphaChokeNodeConfig,
    execute_alpha_choke_node,
    create_alpha_choke_node,
)
from IS_Libs.NodesLib.perimeter_removal_node import (
    PerimeterRemovalNodeConfig,
    execute_perimeter_removal_node,
    create_perimeter_removal_node,
)

__all__ = [
    "MagicEraserNodeConfig",
    "execute_magic_eraser_node",
    "create_magic_eraser_node",
    "AlphaChokeNodeConfig",
    "execute_alpha_choke_node",
    "create_alpha_choke_node",
    "PerimeterRemovalNodeConfig",
    "execute_perimeter_removal_node",
    "create_perimeter_removal_node",
]
