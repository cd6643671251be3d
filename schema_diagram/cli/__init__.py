"""
CLI utilities for schema_diagram
"""

from .argument_parser import setup_argument_parser, determine_output_format
from .init_command import run_init_command
from .render_command import run_render_command

__all__ = [
    'setup_argument_parser',
    'determine_output_format',
    'run_init_command',
    'run_render_command',
]
