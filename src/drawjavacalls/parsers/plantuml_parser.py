"""Parser for PlantUML state diagrams written by PlantUmlGenerator.

Recognized lines:
    state <identifier> as "<title>":[[<path><reference> <title>]];
    <origin> --> <target>

Companion ``state <file> as "<file name>"`` lines and anything else are
ignored.
"""

import re
from typing import Optional

from ..constants import PLANT_UML_MARKER, DiagramFormat
from ..models.diagram import DiagramElement, DiagramRelation
from ..paths import recover_group
from .base import DiagramParser, ParseResult

ELEMENT_PATTERN = re.compile(r'state\s+(\S+)\s+as\s+"([^"]+)":\[\[([^\]]+)\]\];')
RELATION_PATTERN = re.compile(r"(\S+)\s+-->\s+(\S+)")


def _strip_link_title(link_content: str, title: str) -> str:
    """Drop the display text that follows the link inside ``[[...]]``."""
    if link_content.endswith(" " + title):
        return link_content[: -len(title) - 1]
    if " " in link_content:
        return link_content.rsplit(" ", 1)[0]
    return link_content


class PlantUmlParser(DiagramParser):
    """Reads PlantUML state diagrams (.puml)."""

    @property
    def diagram_format(self) -> DiagramFormat:
        return DiagramFormat.PLANT_UML

    @property
    def marker(self) -> str:
        return PLANT_UML_MARKER

    def parse(self, content: str, project_root: Optional[str] = None) -> ParseResult:
        result = ParseResult()
        lines = [line.strip() for line in content.splitlines()]

        for line in lines:
            match = ELEMENT_PATTERN.search(line)
            if match is None:
                continue

            identifier, title, link_content = match.groups()
            link = _strip_link_title(link_content, title)
            file_path, link_reference = self._split_link(link, project_root)

            if result.has_identifier(identifier):
                continue
            result.elements.append(DiagramElement(
                file_path=file_path,
                title=title,
                group=recover_group(identifier, file_path, title),
                link_reference=link_reference,
            ))

        for line in lines:
            match = RELATION_PATTERN.search(line)
            if match is not None:
                result.relations.append(DiagramRelation(match.group(1), match.group(2)))

        return result
