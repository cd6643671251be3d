"""
Export diagram draw instructions to JSON format
"""

import json
import logging
from typing import Optional

from ..core.exceptions import FileExportError, PathValidationError
from ..render.instructions import Diagram
from .utils import validate_file_path

logger = logging.getLogger(__name__)


def export_to_json(
    diagram: Diagram,
    file_path: Optional[str] = None,
    indent: int = 2,
    ensure_ascii: bool = False
) -> str:
    """
    Export draw instructions to JSON format

    Points are written as [x, y] pairs and rectangles as objects with
    x, y, width and height. Unicode is preserved by default.

    Args:
        diagram: Output of the diagram assembler
        file_path: Optional path to save JSON file. If None, only returns JSON string
        indent: Number of spaces for indentation (default: 2)
        ensure_ascii: If True, escape non-ASCII characters (default: False)

    Returns:
        JSON string representation of the diagram

    Raises:
        PathValidationError: If file_path is invalid or unsafe
        FileExportError: If serialization or the file write fails
    """
    try:
        json_str = json.dumps(
            diagram.to_dict(),
            indent=indent,
            default=str,
            ensure_ascii=ensure_ascii
        )
    except (TypeError, ValueError) as e:
        logger.error(f"JSON serialization failed: {e}")
        raise FileExportError(f"Failed to serialize diagram to JSON: {e}") from e

    if file_path:
        try:
            validated_path = validate_file_path(file_path)
            validated_path.write_text(json_str, encoding='utf-8')
            logger.info(f"JSON diagram exported to: {validated_path}")
        except PathValidationError:
            raise
        except (OSError, IOError) as e:
            logger.error(f"Failed to write JSON file: {e}")
            raise FileExportError(f"Failed to write file '{file_path}': {e}") from e

    return json_str
