"""
Configuration Module for DrawJavaCalls.

The configuration follows a hierarchical structure:
    - PathRewriteConfig: How file paths are written into generated links
    - Config: Main configuration (active format, paths, diagrams directory)

Example Usage:
    >>> from drawjavacalls.config import get_config, set_config, Config
    >>> config = Config(diagram_format=DiagramFormat.MERMAID)
    >>> set_config(config)
    >>> current_config = get_config()

Author: DrawJavaCalls Team
"""

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field

from .constants import (
    DEFAULT_DIAGRAM_FILE_STEM,
    DEFAULT_DIAGRAMS_DIRECTORY,
    DiagramFormat,
)


class PathRewriteConfig(BaseModel):
    """
    Configuration for the file paths written into diagram links.

    With ``use_project_root`` on, a path under the project root is written as
    ``$projectsPath/<project folder>/...`` so a diagram stays valid on another
    machine. With it off, a path under ``custom_root_path`` keeps that prefix
    verbatim.

    Attributes:
        use_project_root: Replace the project root with the placeholder token
        custom_root_path: Root kept verbatim when use_project_root is off
        project_root: Absolute location of the active project

    Example:
        >>> config = PathRewriteConfig(project_root="/home/dev/shop")
        >>> config.project_folder_name
        'shop'
    """

    use_project_root: bool = Field(
        default=True,
        description="Write paths under the project root as $projectsPath/<folder>/...",
    )
    custom_root_path: str = Field(
        default="",
        description="Root prefix kept verbatim when use_project_root is off",
    )
    project_root: Optional[str] = Field(
        default=None,
        description="Absolute location of the active project",
    )

    def resolve_project_root(self, override: Optional[str] = None) -> str:
        """
        Project root to use for one generate or parse call.

        Args:
            override: Root passed for this call only

        Returns:
            The override, else the configured root, else an empty string
        """
        return override or self.project_root or ""

    @property
    def project_folder_name(self) -> str:
        """Last path segment of the configured project root."""
        return folder_name(self.project_root or "")


def folder_name(root: str) -> str:
    """Last segment of a root path, accepting either separator."""
    trimmed = root.rstrip("/\\")
    return trimmed.replace("\\", "/").rsplit("/", 1)[-1]


class Config(BaseModel):
    """
    Main configuration for DrawJavaCalls.

    Attributes:
        diagram_format: Format used to generate diagrams
        paths: Link path rewriting
        diagrams_dir: Default directory for saving and loading diagrams
        load_from_editor: Load generated diagrams automatically when opened

    Example:
        >>> config = Config(
        ...     diagram_format=DiagramFormat.DRAW_IO,
        ...     paths=PathRewriteConfig(use_project_root=False, custom_root_path="C:/work"),
        ... )
    """

    diagram_format: DiagramFormat = Field(
        default=DiagramFormat.PLANT_UML,
        description="Format used to generate diagrams",
    )
    paths: PathRewriteConfig = Field(default_factory=PathRewriteConfig)

    diagrams_dir: Path = Field(
        default=DEFAULT_DIAGRAMS_DIRECTORY,
        description="Default directory for saved diagrams",
    )
    load_from_editor: bool = Field(
        default=True,
        description="Load generated diagrams into the model when they are opened",
    )

    def default_diagram_path(self, diagram_format: Optional[DiagramFormat] = None) -> Path:
        """
        Default save location for a diagram.

        Args:
            diagram_format: Format of the file, defaults to the active format

        Returns:
            ``<diagrams_dir>/diagram.<extension>``
        """
        extension = (diagram_format or self.diagram_format).extension
        return self.diagrams_dir / f"{DEFAULT_DIAGRAM_FILE_STEM}.{extension}"

    @classmethod
    def load_default(cls) -> "Config":
        """
        Load default configuration.

        Returns:
            Config instance with default values
        """
        return cls()


# Global config instance
_config: Optional[Config] = None


def get_config() -> Config:
    """
    Get the global configuration instance.

    Creates a default configuration if none has been set.
    """
    global _config
    if _config is None:
        _config = Config.load_default()
    return _config


def set_config(config: Config) -> None:
    """
    Set the global configuration instance.

    Args:
        config: Config instance to use globally
    """
    global _config
    _config = config


def reset_config() -> None:
    """
    Reset the global configuration to None.

    Useful for testing or reinitializing configuration.
    """
    global _config
    _config = None
