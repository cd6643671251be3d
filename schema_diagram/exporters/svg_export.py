"""
Export diagrams to SVG
"""

import logging
from pathlib import Path
from typing import Dict, Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape

from ..core.config import DiagramOptions
from ..render.instructions import Diagram
from ..render.path_renderer import format_number
from ..core.exceptions import FileExportError
from .utils import validate_file_path, DEFAULT_SVG_FILENAME

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent / "templates"
DEFAULT_TEMPLATE = "diagram.svg.j2"

COLOR_SCHEMES: Dict[str, Dict[str, str]] = {
    'modern': {
        'table_header': '#2c3e50',
        'table_body': '#ffffff',
        'table_border': '#34495e',
        'primary_key': '#e74c3c',
        'foreign_key': '#3498db',
        'regular_column': '#2c3e50',
        'relationship': '#7f8c8d',
        'background': '#f8f9fa',
    },
    'classic': {
        'table_header': '#4a90e2',
        'table_body': '#ffffff',
        'table_border': '#2c3e50',
        'primary_key': '#d32f2f',
        'foreign_key': '#1976d2',
        'regular_column': '#424242',
        'relationship': '#666666',
        'background': '#ffffff',
    },
    'minimal': {
        'table_header': '#333333',
        'table_body': '#ffffff',
        'table_border': '#cccccc',
        'primary_key': '#000000',
        'foreign_key': '#666666',
        'regular_column': '#333333',
        'relationship': '#999999',
        'background': '#ffffff',
    },
}

# Title sits this far above the top canvas margin
TITLE_OFFSET = 20

LEGEND_INSET_X = 220
LEGEND_INSET_Y = 100


def _environment() -> Environment:
    if not TEMPLATE_DIR.exists():
        logger.error(f"Template directory not found: {TEMPLATE_DIR}")
        raise FileExportError(f"Template directory not found: {TEMPLATE_DIR}")

    try:
        env = Environment(
            loader=FileSystemLoader(str(TEMPLATE_DIR)),
            autoescape=select_autoescape(['html', 'xml', 'svg', 'j2']),
            trim_blocks=True,
            lstrip_blocks=True
        )
    except Exception as e:
        logger.error(f"Failed to initialize Jinja2 environment: {e}")
        raise FileExportError(f"Failed to initialize template engine: {e}") from e

    env.filters['num'] = format_number
    return env


def render_svg(
    diagram: Diagram,
    options: Optional[DiagramOptions] = None,
    template_name: Optional[str] = None
) -> str:
    """
    Render draw instructions to an SVG document string.

    Relationships are emitted before tables so table boxes cover line ends.
    All text is XML-escaped by the template engine.

    Args:
        diagram: Output of the diagram assembler
        options: Options used for styling (font sizes, color scheme)
        template_name: Optional custom template name

    Returns:
        SVG document

    Raises:
        FileExportError: If the template cannot be loaded or rendered
    """
    opts = options or DiagramOptions()
    env = _environment()

    template_file = template_name or DEFAULT_TEMPLATE
    try:
        template = env.get_template(template_file)
    except Exception as e:
        logger.error(f"Failed to load template '{template_file}': {e}")
        raise FileExportError(f"Failed to load template '{template_file}': {e}") from e

    context = {
        'diagram': diagram,
        'options': opts,
        'colors': COLOR_SCHEMES.get(opts.color_scheme, COLOR_SCHEMES['modern']),
        'title_y': opts.canvas_margin - TITLE_OFFSET,
        'legend_x': diagram.width - LEGEND_INSET_X,
        'legend_y': diagram.height - LEGEND_INSET_Y,
    }

    try:
        return template.render(**context)
    except Exception as e:
        logger.error(f"Template rendering failed: {e}")
        raise FileExportError(f"Failed to render template: {e}") from e


def export_to_svg(
    diagram: Diagram,
    file_path: str = DEFAULT_SVG_FILENAME,
    options: Optional[DiagramOptions] = None
) -> str:
    """
    Write a diagram to an SVG file

    Args:
        diagram: Output of the diagram assembler
        file_path: Path to save SVG file (default: "database_diagram.svg")
        options: Options used for styling

    Returns:
        Absolute path to saved SVG file

    Raises:
        PathValidationError: If file_path is invalid or unsafe
        FileExportError: If rendering or the file write fails
    """
    try:
        validated_path = validate_file_path(file_path)
    except Exception as e:
        logger.error(f"Path validation failed: {e}")
        raise

    svg_content = render_svg(diagram, options)

    try:
        validated_path.write_text(svg_content, encoding='utf-8')
        logger.info(f"SVG diagram exported to: {validated_path}")
    except (OSError, IOError) as e:
        logger.error(f"Failed to write SVG file: {e}")
        raise FileExportError(f"Failed to write file '{file_path}': {e}") from e

    return str(validated_path)
