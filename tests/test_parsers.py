"""
Tests for the diagram parsers.

Tests cover:
- Round trips through every generator
- Placeholder restoration and link reference splitting
- Malformed lines, duplicates and dangling edges
- Format detection from markers

Author: DrawJavaCalls Team
"""

import pytest

from drawjavacalls.config import PathRewriteConfig
from drawjavacalls.constants import DiagramFormat
from drawjavacalls.generators import get_generator
from drawjavacalls.models.diagram import DiagramElement, DiagramRelation
from drawjavacalls.parsers import (
    DrawIoParser,
    MermaidParser,
    PlantUmlParser,
    detect_format,
    get_parser,
)

PROJECT_ROOT = "/home/dev/shop"


def fields(elements):
    return [(e.file_path, e.title, e.group, e.link_reference) for e in elements]


@pytest.fixture
def diagram():
    """Elements covering groups, shared file names and every link kind."""
    elements = [
        DiagramElement(file_path=f"{PROJECT_ROOT}/src/Main.java", title="main", link_reference="#main"),
        DiagramElement(file_path=f"{PROJECT_ROOT}/src/a/Foo.java", title="run", group="a.b", link_reference=":12"),
        DiagramElement(file_path=f"{PROJECT_ROOT}/src/Foo.java", title="run"),
        DiagramElement(file_path="C:/libs/Util.java", title="Util.java:7", group="libs", link_reference=":7"),
    ]
    relations = [
        DiagramRelation("Main_java.main", "a.b.Foo_java.run"),
        DiagramRelation("a.b.Foo_java.run", "Foo_java.run"),
        DiagramRelation("Main_java.main", "libs.Util_java.Util.java:7"),
    ]
    return elements, relations


class TestRoundTrip:
    """Tests for generate -> parse round trips."""

    @pytest.mark.parametrize("diagram_format", list(DiagramFormat))
    def test_round_trip(self, diagram, diagram_format):
        """Test elements and relations survive a round trip."""
        elements, relations = diagram
        paths = PathRewriteConfig(project_root=PROJECT_ROOT)

        text = get_generator(diagram_format).generate(elements, relations, paths)
        result = get_parser(diagram_format).parse(text, project_root=PROJECT_ROOT)

        assert fields(result.elements) == fields(elements)
        assert result.relations == relations

    @pytest.mark.parametrize("diagram_format", list(DiagramFormat))
    def test_placeholder_kept_without_root(self, diagram, diagram_format):
        """Test placeholder stays in paths when no root is given."""
        elements, relations = diagram
        paths = PathRewriteConfig(project_root=PROJECT_ROOT)

        text = get_generator(diagram_format).generate(elements, relations, paths)
        result = get_parser(diagram_format).parse(text)

        assert result.elements[0].file_path == "$projectsPath/shop/src/Main.java"

    @pytest.mark.parametrize("diagram_format", list(DiagramFormat))
    def test_restored_onto_other_root(self, diagram, diagram_format):
        """Test a diagram moves to another machine's project root."""
        elements, relations = diagram
        paths = PathRewriteConfig(project_root=PROJECT_ROOT)

        text = get_generator(diagram_format).generate(elements, relations, paths)
        result = get_parser(diagram_format).parse(text, project_root="D:\\work\\shop")

        assert result.elements[0].file_path == "D:\\work\\shop/src/Main.java"

    @pytest.mark.parametrize("diagram_format", list(DiagramFormat))
    def test_blank_group_segments(self, diagram_format):
        """Test a group with empty segments keeps its identifier in every format."""
        elements = [
            DiagramElement(file_path="/p/A.java", title="a", group="x..y"),
            DiagramElement(file_path="/p/B.java", title="b"),
        ]
        relations = [DiagramRelation(elements[0].get_identifier(), elements[1].get_identifier())]

        text = get_generator(diagram_format).generate(elements, relations, PathRewriteConfig())
        result = get_parser(diagram_format).parse(text)

        assert fields(result.elements) == [("/p/A.java", "a", "x.y", ""), ("/p/B.java", "b", None, "")]
        assert result.relations == relations

    @pytest.mark.parametrize("diagram_format", list(DiagramFormat))
    def test_empty_text(self, diagram_format):
        """Test empty text parses to an empty diagram."""
        result = get_parser(diagram_format).parse("")

        assert result.elements == []
        assert result.relations == []


class TestPlantUmlParser:
    """Tests for PlantUmlParser."""

    def test_malformed_lines_skipped(self):
        """Test unrelated and broken lines are ignored."""
        text = "\n".join([
            "'DrawJavaCalls Generated",
            "@startuml",
            'state Broken as "x"',
            'state A_java.a as "a":[[/src/A.java a]];',
            'state A_java.b as "b":[[/src/A.java b]',
            "note left: hello",
            "@enduml",
        ])

        result = PlantUmlParser().parse(text)

        assert fields(result.elements) == [("/src/A.java", "a", None, "")]

    def test_duplicates_first_wins(self):
        """Test repeated identifiers keep the first declaration."""
        text = "\n".join([
            'state A_java.a as "a":[[/src/A.java#first a]];',
            'state A_java.a as "a":[[/src/A.java#second a]];',
        ])

        result = PlantUmlParser().parse(text)

        assert len(result.elements) == 1
        assert result.elements[0].link_reference == "#first"

    def test_path_with_spaces(self):
        """Test link paths containing spaces."""
        text = 'state A_java.a as "a":[[/my src/A.java:3 a]];'

        result = PlantUmlParser().parse(text)

        assert fields(result.elements) == [("/my src/A.java", "a", None, ":3")]

    def test_drive_letter(self):
        """Test drive letter colon is not a line reference."""
        text = 'state A_java.a as "a":[[C:/dev/A.java a]];'

        result = PlantUmlParser().parse(text)

        assert result.elements[0].file_path == "C:/dev/A.java"
        assert result.elements[0].link_reference == ""

    def test_dangling_relations_kept(self):
        """Test relations are read without checking endpoints."""
        result = PlantUmlParser().parse("X_java.x --> Y_java.y")

        assert result.relations == [DiagramRelation("X_java.x", "Y_java.y")]


class TestMermaidParser:
    """Tests for MermaidParser."""

    def test_node_without_click_dropped(self):
        """Test declarations without click line are not elements."""
        text = "\n".join([
            "%%DrawJavaCalls Generated",
            "graph TD",
            '    subgraph file_1["A.java"]',
            '        A_java.a["a"]',
            '        A_java.b["b"]',
            "    end",
            '    click A_java.a "/src/A.java#a"',
        ])

        result = MermaidParser().parse(text)

        assert fields(result.elements) == [("/src/A.java", "a", None, "#a")]

    def test_click_for_unknown_node_ignored(self):
        """Test click lines need a declaration."""
        text = 'click Ghost_java.g "/src/Ghost.java"'

        assert MermaidParser().parse(text).elements == []

    def test_grouped_node(self):
        """Test group is recovered from the node id."""
        text = "\n".join([
            '        core.util.A_java.a["a"]',
            '    click core.util.A_java.a "/src/A.java"',
        ])

        result = MermaidParser().parse(text)

        assert result.elements[0].group == "core.util"

    def test_relations(self):
        """Test relation lines with labels."""
        text = '    A_java.a["a"] --> B_java.b["b"]'

        result = MermaidParser().parse(text)

        assert result.relations == [DiagramRelation("A_java.a", "B_java.b")]


class TestDrawIoParser:
    """Tests for DrawIoParser."""

    def test_unescapes_label_and_link(self):
        """Test XML entities are decoded."""
        element = DiagramElement(file_path="/src/R&D.java", title='a<b> & "c"')
        text = get_generator(DiagramFormat.DRAW_IO).generate([element], [], PathRewriteConfig())

        result = DrawIoParser().parse(text)

        assert fields(result.elements) == [("/src/R&D.java", 'a<b> & "c"', None, "")]

    def test_unresolved_and_repeated_edges_dropped(self):
        """Test edges need both endpoints and are kept once."""
        text = "\n".join([
            '<UserObject id="n1" label="a" link="file:///src/A.java"><mxCell style="" vertex="1" parent="1"></mxCell></UserObject>',
            '<UserObject id="n2" label="b" link="file:///src/B.java"><mxCell style="" vertex="1" parent="1"></mxCell></UserObject>',
            '<mxCell id="e1" style="" edge="1" parent="1" source="n1" target="n2"></mxCell>',
            '<mxCell id="e2" style="" edge="1" parent="1" source="n1" target="n2"></mxCell>',
            '<mxCell id="e3" style="" edge="1" parent="1" source="n1" target="missing"></mxCell>',
        ])

        result = DrawIoParser().parse(text)

        assert result.relations == [DiagramRelation("A_java.a", "B_java.b")]

    def test_windows_link(self):
        """Test drive letter path keeps its colon."""
        text = '<UserObject id="n1" label="a" link="file:///C:/dev/A.java:9">'

        result = DrawIoParser().parse(text)

        assert fields(result.elements) == [("C:/dev/A.java", "a", None, ":9")]


class TestDetectFormat:
    """Tests for detect_format and can_parse."""

    def test_plantuml(self):
        """Test PlantUML marker at the start."""
        assert detect_format("\n  'DrawJavaCalls Generated\n@startuml") == DiagramFormat.PLANT_UML

    def test_mermaid(self):
        """Test Mermaid marker at the start."""
        assert detect_format("%%DrawJavaCalls Generated\ngraph TD") == DiagramFormat.MERMAID

    def test_drawio_anywhere(self):
        """Test draw.io marker may follow an XML declaration."""
        text = '<?xml version="1.0"?>\n<!-- DrawJavaCalls Generated -->\n<mxfile/>'

        assert detect_format(text) == DiagramFormat.DRAW_IO

    def test_marker_not_at_start(self):
        """Test text markers must open the document."""
        assert detect_format("@startuml\n'DrawJavaCalls Generated") is None

    def test_foreign(self):
        """Test text without marker."""
        assert detect_format("graph TD\nA --> B") is None

    def test_can_parse(self):
        """Test can_parse looks for the marker."""
        assert MermaidParser().can_parse("%%DrawJavaCalls Generated")
        assert not PlantUmlParser().can_parse("%%DrawJavaCalls Generated")
