"""PlantUML state diagram generator.

Each element becomes a state whose identifier encodes group, file and
title; a companion state named after the file is written next to it. There
is no nesting, the hierarchy lives only in the dotted identifiers.

Example output:
    'DrawJavaCalls Generated
    @startuml

    state ClassA_java.run as "run":[[$projectsPath/shop/src/ClassA.java#run run]];
    state ClassA_java as "ClassA.java"

    ClassA_java.run --> ClassB_java.save
    @enduml
"""

from typing import Optional

from ..config import PathRewriteConfig
from ..constants import PLANT_UML_MARKER, DiagramFormat
from ..models.diagram import DiagramElement, DiagramRelation
from .base import DiagramGenerator


class PlantUmlGenerator(DiagramGenerator):
    """Writes diagrams as PlantUML state diagrams (.puml)."""

    @property
    def diagram_format(self) -> DiagramFormat:
        return DiagramFormat.PLANT_UML

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

        elements_uml = "\n\n".join(
            self._generate_element(element, paths, project_root) for element in elements
        )
        relations_uml = "\n".join(self._generate_relation(relation) for relation in relations)

        return "\n".join([
            PLANT_UML_MARKER,
            "@startuml",
            "",
            elements_uml,
            "",
            relations_uml,
            "@enduml",
        ])

    def _generate_element(
        self,
        element: DiagramElement,
        paths: PathRewriteConfig,
        project_root: Optional[str],
    ) -> str:
        link = self._link_path(element, paths, project_root)
        return (
            f'state {element.get_identifier()} as "{element.title}":[[{link} {element.title}]];\n'
            f'state {element.get_state_name()} as "{element.get_file_name()}"'
        )

    def _generate_relation(self, relation: DiagramRelation) -> str:
        return f"{relation.origin} --> {relation.target}"
