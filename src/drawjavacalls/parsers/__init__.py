"""Parsers reading generated diagrams back, one per format."""

from typing import Optional

from ..constants import DiagramFormat
from .base import DiagramParser, ParseResult
from .drawio_parser import DrawIoParser
from .mermaid_parser import MermaidParser
from .plantuml_parser import PlantUmlParser

__all__ = [
    "DiagramParser",
    "ParseResult",
    "PlantUmlParser",
    "MermaidParser",
    "DrawIoParser",
    "get_parser",
    "detect_format",
]


_PARSERS: dict[DiagramFormat, type[DiagramParser]] = {
    DiagramFormat.PLANT_UML: PlantUmlParser,
    DiagramFormat.MERMAID: MermaidParser,
    DiagramFormat.DRAW_IO: DrawIoParser,
}


def get_parser(diagram_format: DiagramFormat) -> DiagramParser:
    """Get a parser for the given format."""
    return _PARSERS[DiagramFormat(diagram_format)]()


def detect_format(content: str) -> Optional[DiagramFormat]:
    """Determine which generator wrote ``content``.

    The PlantUML and Mermaid markers must open the text; the draw.io marker
    may appear anywhere since an editor can put an XML declaration first.

    Returns:
        The format, or None for text this package did not generate
    """
    stripped = content.strip()
    for diagram_format in (DiagramFormat.PLANT_UML, DiagramFormat.MERMAID):
        if stripped.startswith(_PARSERS[diagram_format]().marker):
            return diagram_format
    if DrawIoParser().can_parse(content):
        return DiagramFormat.DRAW_IO
    return None
