"""Rendering PlantUML text into SVG with an external tool.

The renderer is a collaborator: callers depend on the DiagramRenderer
protocol and the command line implementation can be swapped for a server
based one.
"""

import subprocess
from typing import Optional, Protocol

from ..constants import PLANTUML_COMMAND, RENDER_TIMEOUT_SECONDS
from ..logging import get_logger

logger = get_logger(__name__)


class DiagramRenderer(Protocol):
    """Turns diagram text into an image."""

    def render(self, content: str) -> Optional[str]:
        """Return SVG text, or None when rendering failed."""
        ...


class PlantUmlCliRenderer:
    """Pipes PlantUML text through the ``plantuml`` executable.

    Example:
        renderer = PlantUmlCliRenderer()
        svg = renderer.render(service.generate())
    """

    def __init__(self, command: str = PLANTUML_COMMAND, timeout: int = RENDER_TIMEOUT_SECONDS):
        self.command = command
        self.timeout = timeout

    def render(self, content: str) -> Optional[str]:
        try:
            result = subprocess.run(
                [self.command, "-tsvg", "-pipe"],
                input=content,
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except (OSError, subprocess.SubprocessError) as e:
            logger.warning(f"Failed to run {self.command}: {e}")
            return None

        if result.returncode != 0 or not result.stdout.strip():
            logger.warning(
                f"{self.command} exited with status {result.returncode}",
                extra={"stderr": result.stderr.strip()[:500]},
            )
            return None

        return result.stdout
