"""
ProjStoreLib - Node registry and preset storage

This module handles the node executor registry and persistence of
eraser presets.
"""

from IS_Libs.ProjStoreLib.node_executors import (
    NodeSpec,
    NodeExecutorRegistry,
    get_default_registry,
    register_default_executors,
)
from IS_Libs.ProjStoreLib.preset_store import (
    get_presets_dir,
    list_preset_files,
    save_eraser_preset,
    load_preset_name,
    load_eraser_preset,
)

__all__ = [
    "NodeSpec",
    "NodeExecutorRegistry",
    "get_default_registry",
    "register_default_executors",
    "get_presets_dir",
    "list_preset_files",
    "save_eraser_preset",
    "load_preset_name",
    "load_eraser_preset",
]
