"""Diagram file tools: save, load and convert diagrams on disk.

A diagram file is the generated text itself; the format is taken from the
file extension (.puml, .mmd, .drawio). Files carrying the generated marker
are loaded back into a DiagramService; any other diagram text is returned
for display only.
"""

from pathlib import Path
from typing import Optional, Union

from ..config import Config, get_config
from ..constants import DiagramFormat
from ..logging import get_logger, log_operation_end, log_operation_start
from ..parsers import detect_format, get_parser
from ..paths import expand_placeholder
from ..services.diagram import DiagramService

logger = get_logger(__name__)

PathLike = Union[str, Path]


def default_diagram_path(
    config: Optional[Config] = None,
    diagram_format: Optional[DiagramFormat] = None,
) -> Path:
    """Default save location, ``<diagrams_dir>/diagram.<extension>``."""
    return (config or get_config()).default_diagram_path(diagram_format)


def format_for_path(path: PathLike) -> Optional[DiagramFormat]:
    """Diagram format for a file name, or None for other extensions."""
    try:
        return DiagramFormat.from_extension(Path(path).suffix)
    except ValueError:
        return None


def save_diagram(service: DiagramService, path: Optional[PathLike] = None) -> Path:
    """Write the diagram in its configured format.

    Args:
        service: Diagram to save
        path: Target file, defaults to the configured diagrams directory

    Returns:
        The path written, also recorded as the service's current file
    """
    target = Path(path) if path is not None else service.config.default_diagram_path(service.diagram_format)
    target.parent.mkdir(parents=True, exist_ok=True)

    content = service.generate()
    target.write_text(content, encoding="utf-8")
    service.current_file_path = str(target)

    logger.info(
        "Diagram saved",
        extra={"path": str(target), "diagram_format": service.diagram_format.value},
    )
    return target


def load_diagram(
    service: DiagramService,
    path: PathLike,
    project_root: Optional[str] = None,
    on_open: bool = False,
) -> dict:
    """Open a diagram file.

    Generated files replace the service's diagram and become its current
    file. The service's format follows the file extension.

    Args:
        service: Diagram to load into
        path: File to open
        project_root: Root replacing the placeholder, defaults to the
            configured project root
        on_open: The file was just opened in an editor rather than loaded
            on request; nothing happens when load_from_editor is off

    Returns:
        Dictionary containing:
        - status: "loaded", "unchanged" (already the current file),
          "ignored" (not a diagram extension, or automatic loading is off)
          or "foreign" (diagram text this package did not write)
        - diagram_format: Format value, absent for non-diagram files
        - content: Display text with placeholders expanded, only for "foreign"
    """
    source = Path(path)
    diagram_format = format_for_path(source)
    if diagram_format is None:
        logger.debug("Not a diagram file", extra={"path": str(source)})
        return {"status": "ignored"}

    if on_open and not service.config.load_from_editor:
        return {"status": "ignored", "diagram_format": diagram_format.value}

    if service.current_file_path == str(source):
        return {"status": "unchanged", "diagram_format": diagram_format.value}

    service.diagram_format = diagram_format
    content = source.read_text(encoding="utf-8")

    # An empty diagram is saved as an empty file
    if not content.strip() or detect_format(content) == diagram_format:
        service.load_from_text(content, diagram_format, project_root=project_root)
        service.current_file_path = str(source)
        logger.info(
            "Diagram loaded",
            extra={
                "path": str(source),
                "elements": len(service.elements),
                "relations": len(service.relations),
            },
        )
        return {"status": "loaded", "diagram_format": diagram_format.value}

    paths = service.config.paths
    display = content
    if paths.use_project_root:
        display = expand_placeholder(content, paths.resolve_project_root(project_root))

    logger.info("Foreign diagram opened read-only", extra={"path": str(source)})
    return {"status": "foreign", "diagram_format": diagram_format.value, "content": display}


def convert_diagram(
    source: PathLike,
    target_format: DiagramFormat,
    project_root: Optional[str] = None,
    config: Optional[Config] = None,
) -> str:
    """Regenerate a generated diagram file in another format.

    Args:
        source: Generated diagram file
        target_format: Format to produce
        project_root: Project root used for both reading and writing links
        config: Path settings, defaults to the global configuration

    Returns:
        The diagram text in ``target_format``

    Raises:
        ValueError: If the source is not a diagram file this package wrote
    """
    source = Path(source)
    base_config = config or get_config()
    source_format = format_for_path(source)
    if source_format is None:
        raise ValueError(f"Not a diagram file: {source}")

    content = source.read_text(encoding="utf-8")
    if detect_format(content) != source_format:
        raise ValueError(f"{source} was not generated by DrawJavaCalls")

    start_time = log_operation_start(
        logger,
        "Diagram conversion",
        source_format=source_format.value,
        target_format=DiagramFormat(target_format).value,
    )

    root = base_config.paths.resolve_project_root(project_root)
    result = get_parser(source_format).parse(content, project_root=root or None)

    service = DiagramService(base_config.model_copy(update={"diagram_format": DiagramFormat(target_format)}))
    service.set_graph(result.elements, result.relations)
    converted = service.generate(project_root=project_root)

    log_operation_end(logger, "Diagram conversion", start_time, elements=len(result.elements))
    return converted
