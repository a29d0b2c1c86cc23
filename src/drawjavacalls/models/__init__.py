"""
Data models for DrawJavaCalls.

- **DiagramElement**: A node of the call diagram (file path, title, group,
  link reference) with a derived dotted identifier.
- **DiagramRelation**: A call between two elements, keyed by identifier.
- **make_identifier**: The identifier scheme shared by every generator and
  parser.
"""

from .diagram import (
    DiagramElement,
    DiagramRelation,
    file_name,
    make_identifier,
    normalize_group,
    state_name,
)

__all__ = [
    "DiagramElement",
    "DiagramRelation",
    "make_identifier",
    "normalize_group",
    "file_name",
    "state_name",
]
