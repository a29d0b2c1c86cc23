"""Mermaid flowchart generator.

Groups and files become nested subgraphs, each with a generated id so two
files of the same name in different groups never collide. Relations are
written with their labels, and every element gets a ``click`` line holding
its link.

Example output:
    %%DrawJavaCalls Generated
    graph TD
        subgraph group_3f2a...["billing"]
            subgraph file_81c0...["Invoice.java"]
                billing.Invoice_java.total["total"]
            end
        end
        subgraph file_0d9e...["Main.java"]
            Main_java.main["main"]
        end
        Main_java.main["main"] --> billing.Invoice_java.total["total"]

        %% Styling and links for nodes
        click Main_java.main "$projectsPath/shop/src/Main.java#main"
        click billing.Invoice_java.total "$projectsPath/shop/src/Invoice.java#total"
"""

from typing import Optional

from ..config import PathRewriteConfig
from ..constants import (
    MERMAID_INDENT,
    MERMAID_MARKER,
    MERMAID_SELECTED_STYLE,
    DiagramFormat,
)
from ..models.diagram import DiagramElement, DiagramRelation
from .base import DiagramGenerator
from .grouping import GroupNode, build_group_tree


class MermaidGenerator(DiagramGenerator):
    """Writes diagrams as Mermaid flowcharts (.mmd)."""

    @property
    def diagram_format(self) -> DiagramFormat:
        return DiagramFormat.MERMAID

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

        lines = [MERMAID_MARKER, "graph TD"]

        root = build_group_tree(elements)
        self._generate_subgraphs(root, lines, MERMAID_INDENT)

        titles: dict[str, str] = {}
        for element in elements:
            titles.setdefault(element.get_identifier(), element.title)

        for relation in relations:
            origin_label = titles.get(relation.origin, relation.origin)
            target_label = titles.get(relation.target, relation.target)
            lines.append(
                f'{MERMAID_INDENT}{relation.origin}["{origin_label}"] --> '
                f'{relation.target}["{target_label}"]'
            )

        # Without relations the nodes would only exist inside their subgraphs
        if not relations:
            for element in elements:
                lines.append(f'{MERMAID_INDENT}{element.get_identifier()}["{element.title}"]')

        lines.append("")
        lines.append(f"{MERMAID_INDENT}%% Styling and links for nodes")
        for element in elements:
            link = self._link_path(element, paths, project_root)
            lines.append(f'{MERMAID_INDENT}click {element.get_identifier()} "{link}"')

        if selected is not None and any(element is selected for element in elements):
            lines.append(f"{MERMAID_INDENT}style {selected.get_identifier()} {MERMAID_SELECTED_STYLE}")

        return "\n".join(lines) + "\n"

    def _generate_subgraphs(self, node: GroupNode, lines: list[str], indent: str) -> None:
        for sub_group in node.sub_groups.values():
            lines.append(f'{indent}subgraph {sub_group.id}["{sub_group.name}"]')
            self._generate_subgraphs(sub_group, lines, indent + MERMAID_INDENT)
            lines.append(f"{indent}end")

        for file_node in node.file_nodes.values():
            lines.append(f'{indent}subgraph {file_node.id}["{file_node.file_name}"]')
            for element in file_node.elements:
                lines.append(f'{indent}{MERMAID_INDENT}{element.get_identifier()}["{element.title}"]')
            lines.append(f"{indent}end")
