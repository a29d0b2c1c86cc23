"""draw.io (mxGraph XML) generator.

Groups and files become swimlane containers nested through their ``parent``
attribute; every element becomes a ``UserObject`` carrying its label and a
``file:///`` link, placed inside its file container. Layout is coarse tree
packing:

- top level containers are packed left to right
- children of a group are stacked top to bottom inside it
- a file container is ``len(elements) * NODE_SPACING + 20`` high
- a group is ``HEADER (40) + sum(subgroup + 20) + sum(file + 20)`` high,
  or 100 when it holds nothing

All containers are written before the nodes, and the nodes follow the
element order, so a parser reading the cells top to bottom gets the
elements back in that order.

Cell ids are generated per call. The identifier -> cell id map built while
writing the nodes resolves the edges afterwards; an edge whose endpoint was
never written is dropped.
"""

import uuid
from dataclasses import dataclass, field
from typing import Optional
from xml.sax.saxutils import escape

from ..config import PathRewriteConfig
from ..constants import (
    DRAW_IO_CHILD_SPACING,
    DRAW_IO_CONTAINER_PADDING,
    DRAW_IO_EDGE_STYLE,
    DRAW_IO_EMPTY_GROUP_HEIGHT,
    DRAW_IO_FILE_STYLE,
    DRAW_IO_GROUP_STYLE,
    DRAW_IO_HEADER_HEIGHT,
    DRAW_IO_MARKER,
    DRAW_IO_NODE_HEIGHT,
    DRAW_IO_NODE_SPACING,
    DRAW_IO_NODE_STYLE,
    DRAW_IO_NODE_TOP,
    DRAW_IO_NODE_WIDTH,
    DRAW_IO_ROOT_MARGIN,
    DRAW_IO_SELECTED_NODE_STYLE,
    FILE_URL_PREFIX,
    DiagramFormat,
)
from ..models.diagram import DiagramElement, DiagramRelation
from .base import DiagramGenerator
from .grouping import FileNode, GroupNode, build_group_tree

ROOT_CELL_ID = "1"


def xml_escape(text: str) -> str:
    """Escape ``&``, ``<``, ``>`` and ``"`` for use in an attribute value."""
    return escape(text, {'"': "&quot;"})


def file_height(file_node: FileNode) -> int:
    """Height of a file container; file containers in a group are stacked without a gap."""
    return len(file_node.elements) * DRAW_IO_NODE_SPACING + DRAW_IO_CHILD_SPACING


def group_height(group: GroupNode) -> int:
    """Height of a group container, including everything nested in it."""
    if group.is_empty():
        return DRAW_IO_EMPTY_GROUP_HEIGHT
    height = DRAW_IO_HEADER_HEIGHT
    for sub_group in group.sub_groups.values():
        height += group_height(sub_group) + DRAW_IO_CHILD_SPACING
    for file_node in group.file_nodes.values():
        height += file_height(file_node)
    return height


def file_width(file_node: FileNode) -> int:
    return DRAW_IO_NODE_WIDTH + 2 * DRAW_IO_CONTAINER_PADDING


def group_width(group: GroupNode) -> int:
    widths = [group_width(sub_group) for sub_group in group.sub_groups.values()]
    widths += [file_width(file_node) for file_node in group.file_nodes.values()]
    return max(widths, default=DRAW_IO_NODE_WIDTH) + 2 * DRAW_IO_CONTAINER_PADDING


@dataclass
class _Document:
    """Cells written so far, node placements and the identifier -> cell id map."""

    paths: PathRewriteConfig
    project_root: Optional[str]
    selected: Optional[DiagramElement]
    cells: list[str] = field(default_factory=list)
    node_ids: dict[str, str] = field(default_factory=dict)
    placements: dict[str, tuple[str, int]] = field(default_factory=dict)


class DrawIoGenerator(DiagramGenerator):
    """Writes diagrams as draw.io documents (.drawio)."""

    @property
    def diagram_format(self) -> DiagramFormat:
        return DiagramFormat.DRAW_IO

    def generate(
        self,
        elements: list[DiagramElement],
        relations: list[DiagramRelation],
        paths: PathRewriteConfig,
        project_root: Optional[str] = None,
        selected: Optional[DiagramElement] = None,
    ) -> str:
        if not elements:
            return ""

        root = build_group_tree(elements)
        document = _Document(
            paths=paths,
            project_root=project_root,
            selected=selected,
        )

        x = DRAW_IO_ROOT_MARGIN
        page_height = 0
        for sub_group in root.sub_groups.values():
            self._write_group(document, sub_group, ROOT_CELL_ID, x, DRAW_IO_ROOT_MARGIN)
            x += group_width(sub_group) + DRAW_IO_ROOT_MARGIN
            page_height = max(page_height, group_height(sub_group))
        for file_node in root.file_nodes.values():
            self._write_file(document, file_node, ROOT_CELL_ID, x, DRAW_IO_ROOT_MARGIN)
            x += file_width(file_node) + DRAW_IO_ROOT_MARGIN
            page_height = max(page_height, file_height(file_node))

        for element in elements:
            self._write_node(document, element)

        for relation in relations:
            source_id = document.node_ids.get(relation.origin)
            target_id = document.node_ids.get(relation.target)
            if source_id is None or target_id is None:
                continue
            document.cells.append(
                f'<mxCell id="edge_{uuid.uuid4().hex}" style="{DRAW_IO_EDGE_STYLE}" edge="1" '
                f'parent="{ROOT_CELL_ID}" source="{source_id}" target="{target_id}">'
                f'<mxGeometry relative="1" as="geometry"/></mxCell>'
            )

        page_width = x
        page_height += 2 * DRAW_IO_ROOT_MARGIN
        body = "\n".join(f"        {cell}" for cell in document.cells)

        return (
            f"{DRAW_IO_MARKER}\n"
            '<mxfile host="DrawJavaCalls" type="device">\n'
            f'  <diagram name="Call Diagram" id="diagram_{uuid.uuid4().hex}">\n'
            '    <mxGraphModel grid="1" gridSize="10" guides="1" tooltips="1" connect="1" '
            'arrows="1" fold="1" page="1" pageScale="1" '
            f'pageWidth="{page_width}" pageHeight="{page_height}" math="0" shadow="0">\n'
            "      <root>\n"
            '        <mxCell id="0"/>\n'
            f'        <mxCell id="{ROOT_CELL_ID}" parent="0"/>\n'
            f"{body}\n"
            "      </root>\n"
            "    </mxGraphModel>\n"
            "  </diagram>\n"
            "</mxfile>\n"
        )

    def _write_container(
        self,
        document: _Document,
        cell_id: str,
        label: str,
        style: str,
        parent_id: str,
        x: int,
        y: int,
        width: int,
        height: int,
    ) -> None:
        document.cells.append(
            f'<mxCell id="{cell_id}" value="{xml_escape(label)}" style="{style}" vertex="1" '
            f'parent="{parent_id}"><mxGeometry x="{x}" y="{y}" width="{width}" '
            f'height="{height}" as="geometry"/></mxCell>'
        )

    def _write_group(
        self, document: _Document, group: GroupNode, parent_id: str, x: int, y: int
    ) -> None:
        self._write_container(
            document, group.id, group.name, DRAW_IO_GROUP_STYLE, parent_id,
            x, y, group_width(group), group_height(group),
        )

        child_y = DRAW_IO_HEADER_HEIGHT
        for sub_group in group.sub_groups.values():
            self._write_group(document, sub_group, group.id, DRAW_IO_CONTAINER_PADDING, child_y)
            child_y += group_height(sub_group) + DRAW_IO_CHILD_SPACING
        for file_node in group.file_nodes.values():
            self._write_file(document, file_node, group.id, DRAW_IO_CONTAINER_PADDING, child_y)
            child_y += file_height(file_node)

    def _write_file(
        self, document: _Document, file_node: FileNode, parent_id: str, x: int, y: int
    ) -> None:
        self._write_container(
            document, file_node.id, file_node.file_name, DRAW_IO_FILE_STYLE, parent_id,
            x, y, file_width(file_node), file_height(file_node),
        )

        for index, element in enumerate(file_node.elements):
            document.placements[element.id] = (file_node.id, index)

    def _write_node(self, document: _Document, element: DiagramElement) -> None:
        """Write a node inside the file container placed for it."""
        parent_id, index = document.placements[element.id]
        node_id = f"node_{uuid.uuid4().hex}"
        document.node_ids.setdefault(element.get_identifier(), node_id)

        link = FILE_URL_PREFIX + self._link_path(element, document.paths, document.project_root)
        style = DRAW_IO_SELECTED_NODE_STYLE if element is document.selected else DRAW_IO_NODE_STYLE
        node_y = DRAW_IO_NODE_TOP + index * DRAW_IO_NODE_SPACING

        document.cells.append(
            f'<UserObject id="{node_id}" label="{xml_escape(element.title)}" '
            f'link="{xml_escape(link)}">'
            f'<mxCell style="{style}" vertex="1" parent="{parent_id}">'
            f'<mxGeometry x="{DRAW_IO_CONTAINER_PADDING}" y="{node_y}" '
            f'width="{DRAW_IO_NODE_WIDTH}" height="{DRAW_IO_NODE_HEIGHT}" as="geometry"/>'
            f"</mxCell></UserObject>"
        )
