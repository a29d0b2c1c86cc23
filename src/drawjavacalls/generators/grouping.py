"""Group/file tree used to nest diagram elements.

Every element sits at the path ``group segments + [file name]``:

    root
    ├── GroupNode "a"
    │   └── GroupNode "b"
    │       └── FileNode "Foo.java"  -> [a.b.Foo_java.run]
    └── FileNode "Foo.java"          -> [Foo_java.main]

Each node gets a fresh opaque id. Two files with the same name in different
groups therefore never share an id, even though they share a label.
"""

import uuid
from dataclasses import dataclass, field

from ..models.diagram import DiagramElement


def _unique_id(prefix: str) -> str:
    return f"{prefix}_{uuid.uuid4().hex}"


@dataclass
class FileNode:
    """Elements of one file inside one group."""

    file_name: str
    elements: list[DiagramElement] = field(default_factory=list)
    id: str = field(default_factory=lambda: _unique_id("file"))


@dataclass
class GroupNode:
    """One segment of a group path, with its nested groups and files."""

    name: str
    sub_groups: dict[str, "GroupNode"] = field(default_factory=dict)
    file_nodes: dict[str, FileNode] = field(default_factory=dict)
    id: str = field(default_factory=lambda: _unique_id("group"))

    def is_empty(self) -> bool:
        return not self.sub_groups and not self.file_nodes


def group_segments(group: str | None) -> list[str]:
    """Non-blank segments of a dot-delimited group path."""
    if not group:
        return []
    return [segment for segment in group.split(".") if segment.strip()]


def build_group_tree(elements: list[DiagramElement]) -> GroupNode:
    """Insert every element into a fresh tree, keeping insertion order."""
    root = GroupNode("")
    for element in elements:
        current = root
        for segment in group_segments(element.group):
            current = current.sub_groups.setdefault(segment, GroupNode(segment))
        name = element.get_file_name()
        file_node = current.file_nodes.setdefault(name, FileNode(name))
        file_node.elements.append(element)
    return root
