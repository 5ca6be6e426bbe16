"""
Constants and configuration values for Icon Shaper.

This module centralizes all constant values, magic numbers, and
configuration settings used by the eraser library.
"""

import math

# Color distance normalizer: the exact Euclidean distance between black and
# white (441.6729...), not the rounded 441.67
MAX_RGB_DISTANCE = math.sqrt(3 * 255 * 255)

# Alpha channel bounds
ALPHA_TRANSPARENT = 0
ALPHA_OPAQUE = 255

# Eraser layer value ranges (percent units)
TOLERANCE_MIN = 0.0
TOLERANCE_MAX = 100.0
FEATHER_MIN = 0.0
FEATHER_MAX = 20.0
TRANSPARENCY_MIN = 0.0
TRANSPARENCY_MAX = 100.0
CHOKE_MIN = 0.0

# Defaults for a freshly added eraser layer
DEFAULT_LAYER_ID = "1"
DEFAULT_TOLERANCE = 20.0
DEFAULT_FEATHER = 2.0
DEFAULT_TRANSPARENCY = 100.0
DEFAULT_CHOKE = 0.0

# Processing backends
BACKEND_NUMPY = "numpy"
BACKEND_PYTHON = "python"
SUPPORTED_BACKENDS = (BACKEND_NUMPY, BACKEND_PYTHON)
DEFAULT_BACKEND = BACKEND_NUMPY

# Perimeter (auto mode) background removal
PERIMETER_SAMPLE_STEP = 10
PERIMETER_MIN_ALPHA = 10
PERIMETER_TOLERANCE = 35.0

# Preset file constants
PRESETS_DIR_NAME = "Presets"
PRESET_EXTENSION = ".ispreset"
PRESET_SCHEMA_VERSION = 1

# Safe filename characters
SAFE_FILENAME_CHARS = "-_"
FILENAME_REPLACEMENT_CHAR = "_"

# Preset field names
FIELD_SCHEMA_VERSION = "schema_version"
FIELD_NAME = "name"
FIELD_CREATED_AT = "created_at"
FIELD_PARAMS = "params"

# Layer / params field names
FIELD_LAYER_ID = "id"
FIELD_COLOR = "color"
FIELD_TOLERANCE = "tolerance"
FIELD_FEATHER = "feather"
FIELD_TRANSPARENCY = "transparency"
FIELD_IS_ACTIVE = "is_active"
FIELD_LAYERS = "layers"
FIELD_CHOKE = "choke"

# Node types
NODE_TYPE_MAGIC_ERASER = "Magic Eraser"
NODE_TYPE_ALPHA_CHOKE = "Alpha Choke"
NODE_TYPE_PERIMETER_REMOVAL = "Perimeter Background Removal"
