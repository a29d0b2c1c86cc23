"""Base generator interface for diagram text formats."""

from abc import ABC, abstractmethod
from typing import Optional

from ..config import PathRewriteConfig
from ..constants import DiagramFormat
from ..models.diagram import DiagramElement, DiagramRelation
from ..paths import rewrite_link_path


class DiagramGenerator(ABC):
    """Abstract base class for the per-format diagram generators.

    A generator turns the elements and relations of a diagram into text.
    Generators hold no state between calls; every call builds whatever
    grouping or id bookkeeping it needs from scratch.
    """

    @property
    @abstractmethod
    def diagram_format(self) -> DiagramFormat:
        """The format this generator writes."""
        pass

    @property
    def extension(self) -> str:
        """File extension for saved diagrams."""
        return self.diagram_format.extension

    @abstractmethod
    def generate(
        self,
        elements: list[DiagramElement],
        relations: list[DiagramRelation],
        paths: PathRewriteConfig,
        project_root: Optional[str] = None,
        selected: Optional[DiagramElement] = None,
    ) -> str:
        """Render a diagram.

        Args:
            elements: Diagram nodes in insertion order
            relations: Diagram edges in insertion order
            paths: Link path rewrite configuration
            project_root: Project root overriding ``paths.project_root``
            selected: Currently selected element, highlighted where the
                format supports it

        Returns:
            Diagram text, or an empty string when there are no elements
        """
        pass

    def _link_path(
        self,
        element: DiagramElement,
        paths: PathRewriteConfig,
        project_root: Optional[str],
    ) -> str:
        """Rewritten file path of ``element`` followed by its link reference."""
        return rewrite_link_path(element.file_path, paths, project_root) + element.link_reference
