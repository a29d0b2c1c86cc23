"""
Constants and Configuration Values for DrawJavaCalls.

This module centralizes the literal strings and numbers shared by the
generators, the parsers and the file tools. The markers and the project
path placeholder are part of the on-disk formats: a generator writes them
verbatim and the matching parser looks for them verbatim, so changing one
breaks every diagram saved before the change.

Usage:
    from drawjavacalls.constants import (
        DiagramFormat,
        PROJECTS_PATH_TOKEN,
        PLANT_UML_MARKER,
    )

Naming Conventions:
    - ALL_CAPS for constants
    - Grouped by category with clear section headers

Author: DrawJavaCalls Team
"""

from enum import Enum
from pathlib import Path


# ============================================================================
# Application Metadata
# ============================================================================

APPLICATION_NAME = "DrawJavaCalls"
APPLICATION_VERSION = "1.0.0"
APPLICATION_DESCRIPTION = "Call diagrams built by hand, rendered as PlantUML, Mermaid or draw.io"


# ============================================================================
# File System Paths
# ============================================================================

DEFAULT_DATA_DIRECTORY = Path.home() / ".drawjavacalls"
DEFAULT_DIAGRAMS_DIRECTORY = DEFAULT_DATA_DIRECTORY / "diagrams"
DEFAULT_LOG_DIRECTORY = DEFAULT_DATA_DIRECTORY / "logs"
DEFAULT_DIAGRAM_FILE_STEM = "diagram"


# ============================================================================
# Diagram Formats
# ============================================================================

class DiagramFormat(str, Enum):
    """
    Text formats a diagram can be generated in and parsed back from.

    Values:
        PLANT_UML: State-diagram flavoured PlantUML (.puml)
        MERMAID: Mermaid flowchart (.mmd)
        DRAW_IO: draw.io / diagrams.net mxGraph XML (.drawio)
    """

    PLANT_UML = "plantuml"
    MERMAID = "mermaid"
    DRAW_IO = "drawio"

    @property
    def display_name(self) -> str:
        """Human readable name used in the CLI and log messages."""
        return FORMAT_DISPLAY_NAMES[self]

    @property
    def extension(self) -> str:
        """File extension (without the dot) for this format."""
        return FORMAT_EXTENSIONS[self]

    @classmethod
    def from_extension(cls, extension: str) -> "DiagramFormat":
        """
        Resolve a format from a file extension.

        Args:
            extension: Extension with or without the leading dot

        Returns:
            The matching DiagramFormat

        Raises:
            ValueError: If the extension is not a diagram extension
        """
        normalized = extension.lower().lstrip(".")
        for diagram_format, format_extension in FORMAT_EXTENSIONS.items():
            if format_extension == normalized:
                return diagram_format
        raise ValueError(f"Unsupported diagram extension: {extension!r}")


FORMAT_DISPLAY_NAMES = {
    DiagramFormat.PLANT_UML: "PlantUml",
    DiagramFormat.MERMAID: "Mermaid",
    DiagramFormat.DRAW_IO: "Draw.io",
}

FORMAT_EXTENSIONS = {
    DiagramFormat.PLANT_UML: "puml",
    DiagramFormat.MERMAID: "mmd",
    DiagramFormat.DRAW_IO: "drawio",
}


# ============================================================================
# Generated Text Markers
# ============================================================================

# Text carrying one of these markers was written by this package and can be
# loaded back into a diagram. Anything else is shown read-only.
MARKER_TEXT = "DrawJavaCalls Generated"
PLANT_UML_MARKER = f"'{MARKER_TEXT}"
MERMAID_MARKER = f"%%{MARKER_TEXT}"
DRAW_IO_MARKER = f"<!-- {MARKER_TEXT} -->"


# ============================================================================
# Link Paths
# ============================================================================

# Stands in for the absolute project root in generated links:
# "$projectsPath/<project folder name>/src/Main.java"
PROJECTS_PATH_TOKEN = "$projectsPath"

# draw.io links are file URLs
FILE_URL_PREFIX = "file:///"


# ============================================================================
# Mermaid Styling
# ============================================================================

MERMAID_INDENT = "    "
MERMAID_SELECTED_STYLE = "fill:#ffe599,stroke:#bf9000,stroke-width:2px"


# ============================================================================
# draw.io Layout
# ============================================================================

DRAW_IO_HEADER_HEIGHT = 40       # Swimlane title bar of a group container
DRAW_IO_CHILD_SPACING = 20       # Gap after every nested group; bottom padding of a file container
DRAW_IO_EMPTY_GROUP_HEIGHT = 100
DRAW_IO_NODE_SPACING = 70        # Vertical stride between nodes in a file container
DRAW_IO_NODE_TOP = 25            # First node offset below the file container title
DRAW_IO_NODE_WIDTH = 160
DRAW_IO_NODE_HEIGHT = 40
DRAW_IO_CONTAINER_PADDING = 20   # Horizontal inset of children inside a container
DRAW_IO_ROOT_MARGIN = 40         # Gap between top level containers

DRAW_IO_GROUP_STYLE = (
    "swimlane;whiteSpace=wrap;html=1;startSize=30;rounded=1;"
    "fillColor=#f5f5f5;strokeColor=#666666;fontStyle=1;"
)
DRAW_IO_FILE_STYLE = (
    "swimlane;whiteSpace=wrap;html=1;startSize=25;"
    "fillColor=#dae8fc;strokeColor=#6c8ebf;"
)
DRAW_IO_NODE_STYLE = "rounded=1;whiteSpace=wrap;html=1;fillColor=#ffffff;strokeColor=#6c8ebf;"
DRAW_IO_SELECTED_NODE_STYLE = "rounded=1;whiteSpace=wrap;html=1;fillColor=#ffe599;strokeColor=#bf9000;"
DRAW_IO_EDGE_STYLE = "edgeStyle=orthogonalEdgeStyle;rounded=1;html=1;endArrow=block;"


# ============================================================================
# External Renderer
# ============================================================================

PLANTUML_COMMAND = "plantuml"
RENDER_TIMEOUT_SECONDS = 60
