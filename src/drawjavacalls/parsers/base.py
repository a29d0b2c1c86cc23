"""Base parser interface for reading generated diagrams back."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional

from ..constants import DiagramFormat
from ..models.diagram import DiagramElement, DiagramRelation
from ..paths import restore_project_path, split_link_reference


@dataclass
class ParseResult:
    """
    Elements and relations recovered from diagram text.

    Attributes:
        elements: Elements in declaration order, one per identifier
        relations: Relations in declaration order
    """

    elements: list[DiagramElement] = field(default_factory=list)
    relations: list[DiagramRelation] = field(default_factory=list)

    def has_identifier(self, identifier: str) -> bool:
        return any(element.get_identifier() == identifier for element in self.elements)

    def add_element(self, element: DiagramElement) -> bool:
        """Add ``element`` unless its identifier is already present.

        Returns:
            True if the element was added
        """
        if self.has_identifier(element.get_identifier()):
            return False
        self.elements.append(element)
        return True


class DiagramParser(ABC):
    """Abstract base class for the per-format parsers.

    Each parser inverts its sibling generator. Lines or cells that do not
    match are skipped, so a partly damaged file still yields every valid
    element and relation.
    """

    @property
    @abstractmethod
    def diagram_format(self) -> DiagramFormat:
        """The format this parser reads."""
        pass

    @property
    @abstractmethod
    def marker(self) -> str:
        """Marker identifying text written by the sibling generator."""
        pass

    @abstractmethod
    def parse(self, content: str, project_root: Optional[str] = None) -> ParseResult:
        """Parse diagram text.

        Args:
            content: Diagram text
            project_root: Root replacing the ``$projectsPath/<folder>`` placeholder

        Returns:
            ParseResult with the recovered elements and relations
        """
        pass

    def can_parse(self, content: str) -> bool:
        """Check if ``content`` carries this format's marker."""
        return self.marker in content

    def _split_link(self, link: str, project_root: Optional[str]) -> tuple[str, str]:
        """File path (placeholder restored) and link reference of a link."""
        path, link_reference = split_link_reference(link)
        return restore_project_path(path, project_root), link_reference
