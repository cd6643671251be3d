"""
Diagram assembly and path rendering
"""

from .assembler import DiagramAssembler, generate_diagram
from .instructions import Diagram
from .path_renderer import render_path

__all__ = ['DiagramAssembler', 'generate_diagram', 'Diagram', 'render_path']
