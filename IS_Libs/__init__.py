"""
IS_Libs - Icon Shaper Library Modules

This package contains core functionality for the Icon Shaper project,
organized into specialized sub-packages:

- EraserLib: Chroma-key background eraser (layer compositor, choke filter)
- NodesLib: Pipeline nodes wrapping the eraser operations
- ProjStoreLib: Node executor registry and eraser preset persistence
"""

__version__ = "0.1.0"
