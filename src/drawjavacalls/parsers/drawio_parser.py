"""Parser for draw.io documents written by DrawIoGenerator.

Extracted with regular expressions rather than an XML parser so that a
damaged document still yields its intact nodes:

- swimlane containers: ``<mxCell id=.. value=.. style="swimlane;.." vertex="1" parent=..>``
- nodes: ``<UserObject id=.. label=.. link=..>`` and the parent of the cell inside
- edges: ``<mxCell .. edge="1" .. source=.. target=..>``

The group of a node is read from the containers around its file container.
Edges are resolved through the cell id -> identifier map built from the
nodes; unresolved and repeated edges are dropped.
"""

import re
from typing import Optional
from xml.sax.saxutils import unescape

from ..constants import DRAW_IO_MARKER, DiagramFormat
from ..models.diagram import DiagramElement, DiagramRelation
from .base import DiagramParser, ParseResult

CONTAINER_PATTERN = re.compile(
    r'<mxCell\s+id="([^"]+)"\s+value="([^"]*)"\s+style="swimlane;[^"]*"\s+vertex="1"\s+parent="([^"]+)"'
)
NODE_PATTERN = re.compile(
    r'<UserObject\s+id="([^"]+)"\s+label="([^"]+)"\s+link="([^"]+)">'
    r'(?:\s*<mxCell\s+[^>]*?parent="([^"]+)")?'
)
EDGE_PATTERN = re.compile(
    r'<mxCell\s+[^>]*edge="1"[^>]*source="([^"]+)"\s+target="([^"]+)"[^>]*>'
)


def xml_unescape(text: str) -> str:
    """Inverse of the generator's attribute escaping."""
    return unescape(text, {"&quot;": '"'})


def _link_to_path(link: str) -> str:
    """Strip the ``file://`` scheme and the one slash the generator adds."""
    path = link[len("file://"):] if link.startswith("file://") else link
    if path.startswith("/"):
        path = path[1:]
    return path


class DrawIoParser(DiagramParser):
    """Reads draw.io documents (.drawio)."""

    @property
    def diagram_format(self) -> DiagramFormat:
        return DiagramFormat.DRAW_IO

    @property
    def marker(self) -> str:
        return DRAW_IO_MARKER

    def parse(self, content: str, project_root: Optional[str] = None) -> ParseResult:
        containers: dict[str, tuple[str, str]] = {}
        for cell_id, value, parent_id in CONTAINER_PATTERN.findall(content):
            containers[cell_id] = (xml_unescape(value), parent_id)

        result = ParseResult()
        cell_identifiers: dict[str, str] = {}

        for match in NODE_PATTERN.finditer(content):
            cell_id, label, link, parent_id = match.groups()
            file_path, link_reference = self._split_link(
                _link_to_path(xml_unescape(link)), project_root
            )

            element = DiagramElement(
                file_path=file_path,
                title=xml_unescape(label),
                group=self._group_of(parent_id, containers),
                link_reference=link_reference,
            )
            result.add_element(element)
            cell_identifiers[cell_id] = element.get_identifier()

        for source_id, target_id in EDGE_PATTERN.findall(content):
            origin = cell_identifiers.get(source_id)
            target = cell_identifiers.get(target_id)
            if origin is None or target is None:
                continue
            relation = DiagramRelation(origin, target)
            if relation not in result.relations:
                result.relations.append(relation)

        return result

    def _group_of(
        self, file_container_id: Optional[str], containers: dict[str, tuple[str, str]]
    ) -> Optional[str]:
        """Join the names of the group containers enclosing a file container."""
        if file_container_id not in containers:
            return None

        segments: list[str] = []
        visited: set[str] = set()
        current = containers[file_container_id][1]
        while current in containers and current not in visited:
            visited.add(current)
            name, current = containers[current]
            segments.append(name)

        return ".".join(reversed(segments)) or None
