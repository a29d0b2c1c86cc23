"""
Diagram tools for DrawJavaCalls.

**Files**: save_diagram, load_diagram, convert_diagram, default_diagram_path,
    format_for_path
**Rendering**: DiagramRenderer, PlantUmlCliRenderer
"""

from .diagram_files import (
    convert_diagram,
    default_diagram_path,
    format_for_path,
    load_diagram,
    save_diagram,
)
from .rendering import DiagramRenderer, PlantUmlCliRenderer

__all__ = [
    # Files
    "save_diagram",
    "load_diagram",
    "convert_diagram",
    "default_diagram_path",
    "format_for_path",
    # Rendering
    "DiagramRenderer",
    "PlantUmlCliRenderer",
]
