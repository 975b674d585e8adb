# shiftcal/core/storage.py
"""
Loading of the JSON configuration files (settings and default shift types).
"""

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from shiftcal.core.config import DATA_DIR
from shiftcal.core.models import Settings, ShiftType

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """General error type for problems loading data files."""

    pass


def _load_json(file_path: Path) -> list[Any] | dict[str, Any]:
    """
    Read and parse JSON with robust error handling.
    Args:
        file_path: Path to the JSON file
    Returns:
        Parsed JSON data as list or dict
    Raises:
        StorageError: If file cannot be read or JSON is invalid
    """
    try:
        raw = file_path.read_text(encoding="utf-8")
    except OSError as e:
        logger.exception("Failed to read JSON file %s", file_path)
        raise StorageError(f"Could not read JSON file {file_path}: {e}") from e

    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        logger.exception("Invalid JSON in file %s", file_path)
        raise StorageError(f"Invalid JSON in file {file_path}: {e}") from e


def load_settings(data_dir: Path | None = None) -> Settings:
    """
    Load application settings (cycle reference date, hours, timezone).
    Returns:
        Application settings
    Raises:
        StorageError: If file cannot be loaded or parsed
    """
    file_path = (data_dir or DATA_DIR) / "settings.json"
    data = _load_json(file_path)
    try:
        if not isinstance(data, dict):
            raise TypeError("Expected settings dict")
        settings = Settings(**data)
    except (TypeError, ValidationError) as e:
        logger.exception("Failed to parse settings from %s", file_path)
        raise StorageError(f"Could not parse settings from {file_path}: {e}") from e
    return settings


def load_default_shift_types(data_dir: Path | None = None) -> list[ShiftType]:
    """
    Load the fallback shift type definitions.

    These mirror the rows the backing store is seeded with and are used
    whenever the store has no definition for a code.
    Raises:
        StorageError: If file cannot be loaded or parsed
    """
    file_path = (data_dir or DATA_DIR) / "shift_types.json"
    data = _load_json(file_path)
    try:
        if not isinstance(data, list):
            raise TypeError("Expected list of shift types")
        shift_types = [ShiftType(**item) for item in data]
    except (TypeError, ValidationError) as e:
        logger.exception("Failed to parse shift types from %s", file_path)
        raise StorageError(f"Could not parse shift types from {file_path}: {e}") from e
    return shift_types


def required_data_files(data_dir: Path | None = None) -> list[Path]:
    base = data_dir or DATA_DIR
    return [base / "settings.json", base / "shift_types.json"]
