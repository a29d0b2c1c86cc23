"""
DrawJavaCalls - Call diagrams built while reading code.

This package keeps an in-memory diagram of method calls that is built one
step at a time ("this method calls that one") and writes it as PlantUML,
Mermaid or draw.io. Every generated file can be parsed back into the same
diagram, so a diagram can be saved, reopened and extended later.

Key Features:
    - **Incremental Building**: Add a call as a child or a sibling of the selection
    - **Stable Relations**: Renaming an element keeps its relations attached
    - **Three Formats**: PlantUML state diagrams, Mermaid flowcharts, draw.io XML
    - **Round Trips**: Generated files load back into the model
    - **Portable Links**: Project paths written as $projectsPath/<folder>/...

Quick Start:
    1. Install: pip install drawjavacalls
    2. Build: drawjavacalls add calls.puml src/Main.java main --link "#main"
    3. Convert: drawjavacalls convert calls.puml --to mermaid -o calls.mmd

Architecture:
    - models/: Diagram elements, relations and the identifier scheme
    - services/: DiagramService, the diagram being edited
    - generators/: One text generator per format
    - parsers/: One parser per format, reading generated text back
    - tools/: Saving, loading, converting and rendering diagram files
    - paths.py: Link path rewriting and the $projectsPath placeholder
    - config.py: Configuration (active format, link path settings)

Author: DrawJavaCalls Team
"""

__version__ = "1.0.0"
__author__ = "DrawJavaCalls Team"
__description__ = "Call diagrams built by hand, rendered as PlantUML, Mermaid or draw.io"

# Public API
from drawjavacalls.constants import (
    APPLICATION_NAME,
    APPLICATION_VERSION,
    PROJECTS_PATH_TOKEN,
    DiagramFormat,
)

from drawjavacalls.logging import (
    get_logger,
    setup_logging,
)

from drawjavacalls.models import DiagramElement, DiagramRelation, make_identifier
from drawjavacalls.services import DiagramService

__all__ = [
    # Metadata
    "__version__",
    "__author__",
    "__description__",

    # Constants
    "APPLICATION_NAME",
    "APPLICATION_VERSION",
    "PROJECTS_PATH_TOKEN",
    "DiagramFormat",

    # Logging
    "get_logger",
    "setup_logging",

    # Diagram
    "DiagramElement",
    "DiagramRelation",
    "make_identifier",
    "DiagramService",
]
