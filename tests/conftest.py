"""Shared fixtures for the DrawJavaCalls tests."""

import pytest

from drawjavacalls.config import Config, PathRewriteConfig, reset_config


@pytest.fixture(autouse=True)
def reset_config_fixture():
    """Reset config before and after each test."""
    reset_config()
    yield
    reset_config()


@pytest.fixture
def project_root():
    """Absolute project root used for placeholder rewriting."""
    return "/home/dev/shop"


@pytest.fixture
def config(project_root, tmp_path):
    """Configuration with a project root and a temporary diagrams directory."""
    return Config(
        paths=PathRewriteConfig(project_root=project_root),
        diagrams_dir=tmp_path / "diagrams",
    )
