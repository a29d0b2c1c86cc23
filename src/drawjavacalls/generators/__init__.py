"""Diagram text generators, one per format."""

from ..constants import DiagramFormat
from .base import DiagramGenerator
from .drawio import DrawIoGenerator
from .mermaid import MermaidGenerator
from .plantuml import PlantUmlGenerator

__all__ = [
    "DiagramGenerator",
    "PlantUmlGenerator",
    "MermaidGenerator",
    "DrawIoGenerator",
    "get_generator",
]


_GENERATORS: dict[DiagramFormat, type[DiagramGenerator]] = {
    DiagramFormat.PLANT_UML: PlantUmlGenerator,
    DiagramFormat.MERMAID: MermaidGenerator,
    DiagramFormat.DRAW_IO: DrawIoGenerator,
}


def get_generator(diagram_format: DiagramFormat) -> DiagramGenerator:
    """Get a generator for the given format."""
    return _GENERATORS[DiagramFormat(diagram_format)]()
