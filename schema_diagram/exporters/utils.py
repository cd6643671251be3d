"""
Utility functions for exporters
"""

import os
import logging
from pathlib import Path

from ..core.exceptions import PathValidationError

logger = logging.getLogger(__name__)

# Constants
MAX_FILENAME_LENGTH = 255
DEFAULT_SVG_FILENAME = "database_diagram.svg"
DEFAULT_JSON_FILENAME = "database_diagram.json"


def validate_file_path(file_path: str, must_exist: bool = False) -> Path:
    """
    Validate and sanitize file path for export operations

    Args:
        file_path: Path to validate
        must_exist: Whether parent directory must exist

    Returns:
        Validated Path object

    Raises:
        PathValidationError: If path is invalid or unsafe

    Examples:
        >>> validate_file_path("diagram.svg")  # doctest: +SKIP
        PosixPath('/current/dir/diagram.svg')
    """
    if not file_path or not isinstance(file_path, (str, Path)):
        raise PathValidationError(f"File path must be a non-empty string, got: {type(file_path)}")

    filename = os.path.basename(str(file_path))
    if not filename:
        raise PathValidationError(f"File path has no file name: {file_path}")
    if len(filename) > MAX_FILENAME_LENGTH:
        raise PathValidationError(
            f"Filename too long ({len(filename)} chars). Maximum is {MAX_FILENAME_LENGTH}"
        )

    try:
        path = Path(file_path).resolve()
    except (ValueError, OSError) as e:
        raise PathValidationError(f"Invalid file path: {e}")

    try:
        if must_exist:
            parent = path.parent
            if not parent.exists():
                raise PathValidationError(f"Parent directory does not exist: {parent}")
            if not parent.is_dir():
                raise PathValidationError(f"Parent path is not a directory: {parent}")
    except (PermissionError, OSError) as e:
        raise PathValidationError(f"Cannot access path: {e}")

    # Check for reserved names on Windows
    reserved_names = {'CON', 'PRN', 'AUX', 'NUL', 'COM1', 'COM2', 'COM3', 'COM4',
                      'COM5', 'COM6', 'COM7', 'COM8', 'COM9', 'LPT1', 'LPT2',
                      'LPT3', 'LPT4', 'LPT5', 'LPT6', 'LPT7', 'LPT8', 'LPT9'}
    if path.stem.upper() in reserved_names:
        raise PathValidationError(f"Reserved filename: {filename}")

    return path
