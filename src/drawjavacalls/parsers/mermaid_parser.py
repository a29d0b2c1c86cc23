"""Parser for Mermaid flowcharts written by MermaidGenerator.

Two passes over the lines:
1. Every ``<id>["<label>"]`` declaration gives an id and its title.
2. Every ``click <id> "<link>"`` line gives the file path and link
   reference of an id seen in pass 1.

Elements come out in click line order, which is the order they were added
in. Declarations that never get a click line are dropped, which also
discards the subgraph headers. Relations come from
``<id>["<label>"] --> <id>["<label>"]`` lines.
"""

import re
from typing import Optional

from ..constants import MERMAID_MARKER, DiagramFormat
from ..models.diagram import DiagramElement, DiagramRelation
from ..paths import recover_group
from .base import DiagramParser, ParseResult

NODE_PATTERN = re.compile(r'([^\s\[]+)\["([^"]+)"\]')
CLICK_PATTERN = re.compile(r'^click\s+(\S+)\s+"([^"]+)"')
RELATION_PATTERN = re.compile(r'([^\s\[]+)\["[^"]+"\]\s+-->\s+([^\s\[]+)\["[^"]+"\]')


class MermaidParser(DiagramParser):
    """Reads Mermaid flowcharts (.mmd)."""

    @property
    def diagram_format(self) -> DiagramFormat:
        return DiagramFormat.MERMAID

    @property
    def marker(self) -> str:
        return MERMAID_MARKER

    def parse(self, content: str, project_root: Optional[str] = None) -> ParseResult:
        lines = [line.strip() for line in content.splitlines()]

        titles: dict[str, str] = {}
        for line in lines:
            for node_id, title in NODE_PATTERN.findall(line):
                titles.setdefault(node_id, title)

        links: dict[str, tuple[str, str]] = {}
        for line in lines:
            match = CLICK_PATTERN.search(line)
            if match is None:
                continue
            node_id, link = match.groups()
            if node_id in titles:
                links.setdefault(node_id, self._split_link(link, project_root))

        result = ParseResult()
        for node_id, (file_path, link_reference) in links.items():
            if not file_path:
                continue
            title = titles[node_id]
            result.add_element(DiagramElement(
                file_path=file_path,
                title=title,
                group=recover_group(node_id, file_path, title),
                link_reference=link_reference,
            ))

        for line in lines:
            match = RELATION_PATTERN.search(line)
            if match is not None:
                result.relations.append(DiagramRelation(match.group(1), match.group(2)))

        return result
