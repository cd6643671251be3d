"""
Export functionality for diagrams

This module provides output formats for assembled diagrams:
- SVG: Rendered diagram with styles, legend and optional debug overlays
- JSON: Machine-readable draw instructions for other renderers

All exporters include:
- Path sanitization
- Error handling
- Proper logging
"""

from .svg_export import export_to_svg, render_svg, COLOR_SCHEMES
from .json_export import export_to_json

# Export exceptions for error handling
from ..core.exceptions import (
    ExporterError,
    FileExportError,
    PathValidationError
)

__all__ = [
    # Export functions
    "export_to_svg",
    "render_svg",
    "export_to_json",
    "COLOR_SCHEMES",
    # Exceptions
    "ExporterError",
    "FileExportError",
    "PathValidationError",
]
