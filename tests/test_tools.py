"""
Tests for the diagram file and rendering tools.

Tests cover:
- save_diagram and default locations
- load_diagram for generated, foreign, current and non-diagram files
- convert_diagram between formats
- PlantUmlCliRenderer with a mocked subprocess

Author: DrawJavaCalls Team
"""

import subprocess
from unittest.mock import MagicMock, patch

import pytest

from drawjavacalls.constants import DiagramFormat
from drawjavacalls.parsers import detect_format
from drawjavacalls.services.diagram import DiagramService
from drawjavacalls.tools.diagram_files import (
    convert_diagram,
    default_diagram_path,
    format_for_path,
    load_diagram,
    save_diagram,
)
from drawjavacalls.tools.rendering import PlantUmlCliRenderer


@pytest.fixture
def service(config):
    """Service holding Main.main -> Repo.load."""
    service = DiagramService(config)
    service.add_child("/home/dev/shop/src/Main.java", "main", link_reference="#main")
    service.add_child("/home/dev/shop/src/Repo.java", "load", group="data", link_reference=":42")
    return service


class TestSaveDiagram:
    """Tests for save_diagram."""

    def test_writes_generated_text(self, service, tmp_path):
        """Test file holds the generated text."""
        target = tmp_path / "calls.puml"

        written = save_diagram(service, target)

        assert written == target
        assert target.read_text(encoding="utf-8") == service.generate()
        assert service.current_file_path == str(target)

    def test_default_location(self, service, config):
        """Test default path under the diagrams directory."""
        service.diagram_format = DiagramFormat.MERMAID

        written = save_diagram(service)

        assert written == config.diagrams_dir / "diagram.mmd"
        assert written.exists()

    def test_default_diagram_path(self, config):
        """Test helper delegates to the config."""
        assert default_diagram_path(config, DiagramFormat.DRAW_IO) == config.diagrams_dir / "diagram.drawio"


class TestLoadDiagram:
    """Tests for load_diagram."""

    @pytest.mark.parametrize("extension", ["puml", "mmd", "drawio"])
    def test_loads_generated_file(self, service, config, tmp_path, extension):
        """Test generated files load back into a fresh service."""
        diagram_format = DiagramFormat.from_extension(extension)
        service.diagram_format = diagram_format
        target = save_diagram(service, tmp_path / f"calls.{extension}")

        fresh = DiagramService(config)
        fresh.diagram_format = DiagramFormat.PLANT_UML
        result = load_diagram(fresh, target)

        assert result == {"status": "loaded", "diagram_format": diagram_format.value}
        assert fresh.diagram_format == diagram_format
        assert [e.get_identifier() for e in fresh.elements] == ["Main_java.main", "data.Repo_java.load"]
        assert fresh.elements[0].file_path == "/home/dev/shop/src/Main.java"
        assert fresh.current_file_path == str(target)

    def test_current_file_not_reloaded(self, service, tmp_path):
        """Test the current file is skipped."""
        target = save_diagram(service, tmp_path / "calls.puml")
        service.add_child("/tmp/X.java", "x")

        result = load_diagram(service, target)

        assert result["status"] == "unchanged"
        assert len(service.elements) == 3

    def test_other_extension_ignored(self, service, tmp_path):
        """Test non-diagram files are ignored."""
        target = tmp_path / "notes.txt"
        target.write_text("hello", encoding="utf-8")

        assert load_diagram(service, target) == {"status": "ignored"}
        assert len(service.elements) == 2

    def test_foreign_file_expanded(self, config, tmp_path):
        """Test foreign text is returned with placeholders expanded."""
        target = tmp_path / "other.mmd"
        target.write_text('graph TD\n  click A "$projectsPath/shop/src/A.java"\n', encoding="utf-8")
        service = DiagramService(config)

        result = load_diagram(service, target)

        assert result["status"] == "foreign"
        assert result["content"] == 'graph TD\n  click A "/home/dev/shop/src/A.java"\n'
        assert service.elements == []
        assert service.diagram_format == DiagramFormat.MERMAID

    def test_foreign_file_custom_mode(self, config, tmp_path):
        """Test placeholders stay when the project root is not used."""
        config.paths.use_project_root = False
        target = tmp_path / "other.puml"
        target.write_text("@startuml\n[[$projectsPath/shop/A.java]]\n@enduml", encoding="utf-8")

        result = load_diagram(DiagramService(config), target)

        assert "$projectsPath/shop/A.java" in result["content"]

    def test_on_open_respects_setting(self, service, config, tmp_path):
        """Test automatic loading can be switched off."""
        target = save_diagram(service, tmp_path / "calls.puml")
        config.load_from_editor = False
        fresh = DiagramService(config)

        result = load_diagram(fresh, target, on_open=True)

        assert result["status"] == "ignored"
        assert fresh.elements == []
        assert load_diagram(fresh, target)["status"] == "loaded"

    def test_empty_file_loads_as_empty_diagram(self, service, config, tmp_path):
        """Test a saved empty diagram loads back and replaces the current one."""
        empty = DiagramService(config)
        target = save_diagram(empty, tmp_path / "empty.drawio")
        assert target.read_text(encoding="utf-8") == ""

        result = load_diagram(service, target)

        assert result == {"status": "loaded", "diagram_format": "drawio"}
        assert service.elements == []
        assert service.relations == []
        assert service.current_file_path == str(target)

    def test_format_for_path(self):
        """Test extension lookup for file names."""
        assert format_for_path("a/b/calls.drawio") == DiagramFormat.DRAW_IO
        assert format_for_path("README.md") is None


class TestConvertDiagram:
    """Tests for convert_diagram."""

    def test_plantuml_to_mermaid(self, service, config, tmp_path):
        """Test conversion keeps elements and relations."""
        source = save_diagram(service, tmp_path / "calls.puml")

        converted = convert_diagram(source, DiagramFormat.MERMAID, config=config)

        assert detect_format(converted) == DiagramFormat.MERMAID
        assert 'click Main_java.main "$projectsPath/shop/src/Main.java#main"' in converted
        assert 'Main_java.main["main"] --> data.Repo_java.load["load"]' in converted

    def test_config_format_untouched(self, service, config, tmp_path):
        """Test conversion does not change the configured format."""
        source = save_diagram(service, tmp_path / "calls.puml")

        convert_diagram(source, DiagramFormat.DRAW_IO, config=config)

        assert config.diagram_format == DiagramFormat.PLANT_UML

    def test_foreign_source_rejected(self, config, tmp_path):
        """Test text without marker cannot be converted."""
        source = tmp_path / "hand.puml"
        source.write_text("@startuml\nA --> B\n@enduml", encoding="utf-8")

        with pytest.raises(ValueError):
            convert_diagram(source, DiagramFormat.MERMAID, config=config)

    def test_non_diagram_rejected(self, config, tmp_path):
        """Test non-diagram extension is rejected."""
        source = tmp_path / "calls.txt"
        source.write_text("x", encoding="utf-8")

        with pytest.raises(ValueError):
            convert_diagram(source, DiagramFormat.MERMAID, config=config)


class TestPlantUmlCliRenderer:
    """Tests for PlantUmlCliRenderer."""

    @patch("drawjavacalls.tools.rendering.subprocess.run")
    def test_render_success(self, mock_run):
        """Test SVG output is returned."""
        mock_run.return_value = MagicMock(returncode=0, stdout="<svg/>", stderr="")

        svg = PlantUmlCliRenderer().render("@startuml\n@enduml")

        assert svg == "<svg/>"
        args, kwargs = mock_run.call_args
        assert args[0] == ["plantuml", "-tsvg", "-pipe"]
        assert kwargs["input"] == "@startuml\n@enduml"

    @patch("drawjavacalls.tools.rendering.subprocess.run")
    def test_render_failure_status(self, mock_run):
        """Test non-zero exit gives None."""
        mock_run.return_value = MagicMock(returncode=1, stdout="", stderr="syntax error")

        assert PlantUmlCliRenderer().render("bad") is None

    @patch("drawjavacalls.tools.rendering.subprocess.run", side_effect=FileNotFoundError("plantuml"))
    def test_missing_executable(self, mock_run):
        """Test missing tool gives None."""
        assert PlantUmlCliRenderer().render("@startuml\n@enduml") is None

    @patch(
        "drawjavacalls.tools.rendering.subprocess.run",
        side_effect=subprocess.TimeoutExpired(cmd="plantuml", timeout=1),
    )
    def test_timeout(self, mock_run):
        """Test timeout gives None."""
        assert PlantUmlCliRenderer(timeout=1).render("@startuml\n@enduml") is None

    def test_custom_command(self):
        """Test command can be configured."""
        renderer = PlantUmlCliRenderer(command="/opt/plantuml/bin/plantuml")

        assert renderer.command == "/opt/plantuml/bin/plantuml"
