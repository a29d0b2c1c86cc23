"""
Diagram Model - Nodes and Relations of a Call Diagram.

This module defines the two records the whole package works with:

1. **DiagramElement**: A code location (usually a method) drawn as a node
   - Identified by a dotted identifier derived from group, file and title
   - The identifier is recomputed on every call, never stored

2. **DiagramRelation**: A call from one element to another
   - Holds identifier strings, not element references
   - Survives a rename only if the owner rewrites it

Identifier Scheme:
    [group "."] + file name with "." replaced by "_" + "." + title

    make_identifier(None, "C:\\dev\\ClassA.java", "run")  -> "ClassA_java.run"
    make_identifier("a.b", "/src/Foo.java", "call")       -> "a.b.Foo_java.call"

Author: DrawJavaCalls Team
"""

import uuid
from dataclasses import dataclass, field
from typing import Optional


def file_name(file_path: str) -> str:
    """Last path segment, accepting either separator."""
    return file_path.rsplit("\\", 1)[-1].rsplit("/", 1)[-1]


def state_name(file_path: str) -> str:
    """File name with every dot replaced, usable as an identifier segment."""
    return file_name(file_path).replace(".", "_")


def normalize_group(group: Optional[str]) -> Optional[str]:
    """Drop blank segments from a group path; None when nothing is left.

    Containers are built from the non-blank segments only, so "x..y" and
    "x.y" are the same group and must share one identifier.
    """
    if group is None:
        return None
    segments = [segment for segment in group.split(".") if segment.strip()]
    return ".".join(segments) or None


def make_identifier(group: Optional[str], file_path: str, title: str) -> str:
    """
    Build the dotted identifier of an element.

    Args:
        group: Dot-delimited group path, None or blank for no group
        file_path: Path of the file holding the element
        title: Display name of the element

    Returns:
        Identifier string, deterministic for the same inputs
    """
    base = f"{state_name(file_path)}.{title}"
    if group is None or not group.strip():
        return base
    return f"{group}.{base}"


@dataclass
class DiagramElement:
    """
    A node of the call diagram.

    Attributes:
        file_path: Path of the source file, with the separators the caller used
        title: Display name, typically a method name or "File.java:42"
        group: Optional dot-delimited group path ("billing.invoices"), blank
            segments dropped
        link_reference: "#<name>", ":<line>" or "" appended to the link path
        id: Opaque unique token, not part of the identifier

    Example:
        element = DiagramElement(
            file_path="C:\\dev\\OrderService.java",
            title="placeOrder",
            group="checkout",
            link_reference="#placeOrder",
        )
        element.get_identifier()  # "checkout.OrderService_java.placeOrder"
    """

    file_path: str
    title: str
    group: Optional[str] = None
    link_reference: str = ""
    id: str = field(default_factory=lambda: str(uuid.uuid4()))

    def __post_init__(self):
        self.group = normalize_group(self.group)

    def get_identifier(self) -> str:
        """Dotted identifier computed from the current field values."""
        return make_identifier(self.group, self.file_path, self.title)

    def get_file_name(self) -> str:
        return file_name(self.file_path)

    def get_state_name(self) -> str:
        return state_name(self.file_path)


@dataclass(frozen=True)
class DiagramRelation:
    """A call from ``origin`` to ``target``, both element identifiers."""

    origin: str
    target: str

    def touches(self, identifier: str) -> bool:
        """True if either endpoint is ``identifier``."""
        return self.origin == identifier or self.target == identifier
