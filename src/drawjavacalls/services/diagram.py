"""Diagram service holding the call diagram being edited.

Provides:
- Building the diagram one call at a time (add child / add sibling)
- Editing elements with relation rewrite on rename
- Selection, relation editing and change notification
- Generating text in the configured format and loading it back

The service is synchronous and single-threaded. Listeners run inline after
every change has been committed and must not call mutating methods.
"""

from typing import Callable, Optional

from ..config import Config, get_config
from ..constants import DiagramFormat
from ..generators import DiagramGenerator, get_generator
from ..logging import get_logger, log_operation_end, log_operation_start
from ..models.diagram import DiagramElement, DiagramRelation, normalize_group
from ..parsers import get_parser

logger = get_logger(__name__)

ChangeListener = Callable[[], None]


class DiagramService:
    """In-memory call diagram with its selection and listeners.

    Elements and relations are kept in insertion order. Relations refer to
    elements by identifier, so renaming an element goes through
    :meth:`update_element`, which rewrites the relations that used the old
    identifier.

    Example:
        service = DiagramService()
        service.add_child("src/A.java", "main")
        service.add_child("src/B.java", "load")
        service.add_sibling("src/C.java", "save")
        text = service.generate()
    """

    def __init__(self, config: Optional[Config] = None):
        self.config = config or get_config()
        self._elements: list[DiagramElement] = []
        self._relations: list[DiagramRelation] = []
        self._listeners: list[ChangeListener] = []
        self.selected: Optional[DiagramElement] = None
        self.current_file_path: Optional[str] = None

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def elements(self) -> list[DiagramElement]:
        """Snapshot of the elements, in insertion order."""
        return list(self._elements)

    @property
    def relations(self) -> list[DiagramRelation]:
        """Snapshot of the relations, in insertion order."""
        return list(self._relations)

    @property
    def diagram_format(self) -> DiagramFormat:
        return self.config.diagram_format

    @diagram_format.setter
    def diagram_format(self, value: DiagramFormat) -> None:
        self.config.diagram_format = DiagramFormat(value)

    def find_by_identifier(self, identifier: str) -> Optional[DiagramElement]:
        """First element whose identifier is ``identifier``."""
        for element in self._elements:
            if element.get_identifier() == identifier:
                return element
        return None

    # ------------------------------------------------------------------
    # Change notification
    # ------------------------------------------------------------------

    def add_change_listener(self, listener: ChangeListener) -> None:
        self._listeners.append(listener)

    def remove_change_listener(self, listener: ChangeListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify_changed(self) -> None:
        for listener in list(self._listeners):
            listener()

    def refresh(self) -> None:
        """Notify listeners without changing anything."""
        self._notify_changed()

    # ------------------------------------------------------------------
    # Building the diagram
    # ------------------------------------------------------------------

    def _new_element(
        self,
        file_path: str,
        title: str,
        group: Optional[str],
        link_reference: Optional[str],
    ) -> DiagramElement:
        return DiagramElement(
            file_path=file_path,
            title=title,
            group=group,
            link_reference=link_reference or "",
        )

    def add_child(
        self,
        file_path: str,
        title: str,
        group: Optional[str] = None,
        link_reference: Optional[str] = None,
    ) -> DiagramElement:
        """Add an element called by the selected element.

        The caller is the selected element, or the last element when nothing
        is selected. The new element becomes the selection.

        Returns:
            The new element
        """
        element = self._new_element(file_path, title, group, link_reference)
        parent = self.selected or (self._elements[-1] if self._elements else None)
        self._elements.append(element)

        if parent is not None:
            self._relations.append(DiagramRelation(parent.get_identifier(), element.get_identifier()))

        self.selected = element
        logger.debug("Child added", extra={"identifier": element.get_identifier()})
        self._notify_changed()
        return element

    def add_sibling(
        self,
        file_path: str,
        title: str,
        group: Optional[str] = None,
        link_reference: Optional[str] = None,
    ) -> DiagramElement:
        """Add an element called by the caller of the selected element.

        The caller is the origin of the last relation targeting the selected
        element (or the last element when nothing is selected). When that
        element has no incoming relation, the new element branches from it
        directly. The new element becomes the selection.

        Returns:
            The new element
        """
        element = self._new_element(file_path, title, group, link_reference)
        anchor = self.selected or (self._elements[-1] if self._elements else None)

        incoming: Optional[DiagramRelation] = None
        if anchor is not None:
            anchor_identifier = anchor.get_identifier()
            for relation in reversed(self._relations):
                if relation.target == anchor_identifier:
                    incoming = relation
                    break

        self._elements.append(element)

        if incoming is not None:
            self._relations.append(DiagramRelation(incoming.origin, element.get_identifier()))
        elif anchor is not None:
            self._relations.append(DiagramRelation(anchor.get_identifier(), element.get_identifier()))

        self.selected = element
        logger.debug("Sibling added", extra={"identifier": element.get_identifier()})
        self._notify_changed()
        return element

    def delete_selected(self) -> None:
        """Remove the selected element and every relation touching it.

        The selection moves to the last remaining element. Does nothing when
        nothing is selected.
        """
        element = self.selected
        if element is None:
            return

        identifier = element.get_identifier()
        self._elements = [candidate for candidate in self._elements if candidate is not element]
        self._relations = [relation for relation in self._relations if not relation.touches(identifier)]
        self.selected = self._elements[-1] if self._elements else None

        logger.debug("Element deleted", extra={"identifier": identifier})
        self._notify_changed()

    def update_element(
        self,
        element: DiagramElement,
        file_path: str,
        title: str,
        group: Optional[str],
        link_reference: str,
    ) -> None:
        """Change an element and keep its relations attached.

        Relations are keyed by identifier; when the change alters the
        identifier, every endpoint equal to the old identifier is rewritten.
        """
        old_identifier = element.get_identifier()
        element.file_path = file_path
        element.title = title
        element.group = normalize_group(group)
        element.link_reference = link_reference
        new_identifier = element.get_identifier()

        if old_identifier != new_identifier:
            self._relations = [
                DiagramRelation(
                    new_identifier if relation.origin == old_identifier else relation.origin,
                    new_identifier if relation.target == old_identifier else relation.target,
                )
                for relation in self._relations
            ]
            logger.debug(
                "Element renamed",
                extra={"old_identifier": old_identifier, "new_identifier": new_identifier},
            )

        self._notify_changed()

    # ------------------------------------------------------------------
    # Relations
    # ------------------------------------------------------------------

    def add_relation(self, origin: str, target: str) -> None:
        """Add a relation; endpoints are not checked against the elements."""
        self._relations.append(DiagramRelation(origin, target))
        self._notify_changed()

    def remove_relation(self, relation: DiagramRelation) -> None:
        """Remove the first relation equal to ``relation``."""
        if relation in self._relations:
            self._relations.remove(relation)
        self._notify_changed()

    def update_relation(self, index: int, origin: str, target: str) -> None:
        """Replace the relation at ``index``. Does nothing when out of range."""
        if 0 <= index < len(self._relations):
            self._relations[index] = DiagramRelation(origin, target)
            self._notify_changed()

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    def select_by_index(self, index: int) -> None:
        if 0 <= index < len(self._elements):
            self.selected = self._elements[index]
            self._notify_changed()

    def select_by_identifier(self, identifier: str) -> None:
        element = self.find_by_identifier(identifier)
        if element is not None:
            self.selected = element
            self._notify_changed()

    # ------------------------------------------------------------------
    # Whole diagram
    # ------------------------------------------------------------------

    def clear(self) -> None:
        """Start a new, empty diagram."""
        self._elements = []
        self._relations = []
        self.selected = None
        self.current_file_path = None
        self._notify_changed()

    def set_graph(self, elements: list[DiagramElement], relations: list[DiagramRelation]) -> None:
        """Replace both collections at once and clear the selection."""
        self._elements = list(elements)
        self._relations = list(relations)
        self.selected = None
        self._notify_changed()

    def get_generator(self) -> DiagramGenerator:
        """Generator for the configured format."""
        return get_generator(self.diagram_format)

    def generate(self, project_root: Optional[str] = None) -> str:
        """Diagram text in the configured format.

        Args:
            project_root: Project root for this call only; ignored unless the
                configuration uses the project root placeholder

        Returns:
            Diagram text, empty when the diagram has no elements
        """
        paths = self.config.paths
        override = project_root if paths.use_project_root else None
        return self.get_generator().generate(
            self._elements,
            self._relations,
            paths,
            project_root=override,
            selected=self.selected,
        )

    def load_from_text(
        self,
        content: str,
        diagram_format: DiagramFormat,
        project_root: Optional[str] = None,
    ) -> None:
        """Replace the diagram with the one described by ``content``.

        Args:
            content: Text written by one of the generators
            diagram_format: Format of ``content``
            project_root: Root replacing the placeholder, defaults to the
                configured project root
        """
        diagram_format = DiagramFormat(diagram_format)
        start_time = log_operation_start(logger, "Diagram load", diagram_format=diagram_format.value)

        self._elements = []
        self._relations = []
        self.selected = None

        root = self.config.paths.resolve_project_root(project_root)
        result = get_parser(diagram_format).parse(content, project_root=root or None)
        self._elements = result.elements
        self._relations = result.relations

        log_operation_end(
            logger,
            "Diagram load",
            start_time,
            elements=len(self._elements),
            relations=len(self._relations),
        )
        self._notify_changed()
