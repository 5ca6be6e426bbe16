"""
Eraser preset storage for Icon Shaper.

Presets keep a named set of eraser layers and the global choke radius in
JSON files with the .ispreset extension:

    {
        "schema_version": 1,
        "name": "White studio background",
        "created_at": "2026-01-31T12:00:00",
        "params": {"layers": [...], "choke": 1.0}
    }

Functions:
    get_presets_dir: Return (and create) the Presets directory
    list_preset_files: List all preset files in the Presets directory
    save_eraser_preset: Write a new preset file
    load_preset_name: Load just the preset name from a file
    load_eraser_preset: Load and validate the ProcessingParams of a preset
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List

from IS_Libs.constants import (
    FIELD_CREATED_AT,
    FIELD_NAME,
    FIELD_PARAMS,
    FIELD_SCHEMA_VERSION,
    FILENAME_REPLACEMENT_CHAR,
    PRESET_EXTENSION,
    PRESET_SCHEMA_VERSION,
    PRESETS_DIR_NAME,
    SAFE_FILENAME_CHARS,
)
from IS_Libs.EraserLib.eraser_models import ProcessingParams

logger = logging.getLogger(__name__)


def _safe_filename(name: str) -> str:
    safe_name = "".join(
        c if c.isalnum() or c in SAFE_FILENAME_CHARS else FILENAME_REPLACEMENT_CHAR
        for c in name
    ).strip(FILENAME_REPLACEMENT_CHAR)
    return safe_name or "new_preset"


def get_presets_dir(base_dir: Path) -> Path:
    presets_dir = base_dir / PRESETS_DIR_NAME
    presets_dir.mkdir(parents=True, exist_ok=True)
    return presets_dir


def list_preset_files(base_dir: Path) -> List[Path]:
    presets_dir = get_presets_dir(base_dir)
    return sorted(presets_dir.glob(f"*{PRESET_EXTENSION}"))


def save_eraser_preset(base_dir: Path, preset_name: str, params: ProcessingParams) -> Path:
    """
    Save eraser settings as a new preset file.

    An existing preset with the same file name is never overwritten; a
    numeric suffix is added instead.

    Args:
        base_dir: Base directory containing the Presets folder
        preset_name: Human-readable name for the preset
        params: Eraser layers and choke radius to store

    Returns:
        Path to the created preset file
    """
    presets_dir = get_presets_dir(base_dir)
    safe_name = _safe_filename(preset_name)

    preset_path = presets_dir / f"{safe_name}{PRESET_EXTENSION}"
    counter = 1
    while preset_path.exists():
        preset_path = presets_dir / f"{safe_name}_{counter}{PRESET_EXTENSION}"
        counter += 1

    payload: Dict[str, Any] = {
        FIELD_SCHEMA_VERSION: PRESET_SCHEMA_VERSION,
        FIELD_NAME: preset_name,
        FIELD_CREATED_AT: datetime.now().isoformat(timespec="seconds"),
        FIELD_PARAMS: params.to_dict(),
    }

    preset_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    logger.debug(f"Saved eraser preset '{preset_name}' to {preset_path}")
    return preset_path


def load_preset_name(preset_path: Path) -> str:
    """
    Load the preset name from a preset file.

    Returns:
        The preset name, or the filename stem if loading fails
    """
    try:
        payload = json.loads(preset_path.read_text(encoding="utf-8"))
    except (FileNotFoundError, json.JSONDecodeError, OSError):
        return preset_path.stem

    if not isinstance(payload, dict):
        return preset_path.stem
    return str(payload.get(FIELD_NAME) or preset_path.stem)


def load_eraser_preset(preset_path: Path) -> ProcessingParams:
    """
    Load the eraser settings stored in a preset file.

    Args:
        preset_path: Path to the preset file

    Returns:
        ProcessingParams rebuilt (and validated) from the file

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file is not valid JSON, has an unsupported schema
                    version, or holds invalid layer values
    """
    try:
        payload = json.loads(preset_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"Preset file is not valid JSON: {preset_path}") from e

    if not isinstance(payload, dict):
        raise ValueError(f"Preset file must contain a JSON object: {preset_path}")

    version = payload.get(FIELD_SCHEMA_VERSION)
    if version != PRESET_SCHEMA_VERSION:
        raise ValueError(
            f"Unsupported preset schema version {version!r} "
            f"(expected {PRESET_SCHEMA_VERSION}): {preset_path}"
        )

    params = payload.get(FIELD_PARAMS)
    if not isinstance(params, dict):
        raise ValueError(f"Preset file has no '{FIELD_PARAMS}' object: {preset_path}")

    try:
        return ProcessingParams.from_dict(params)
    except (AttributeError, TypeError, ValueError) as e:
        raise ValueError(f"Invalid eraser preset {preset_path}: {e}") from e
