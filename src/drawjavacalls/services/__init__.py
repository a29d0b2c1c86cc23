"""
Services Layer for DrawJavaCalls.

**DiagramService**:
    Holds the call diagram being edited: elements, relations, selection
    and change listeners. Generates text in the configured format and
    loads generated text back.

Usage:
    from drawjavacalls.services import DiagramService

    service = DiagramService()
    service.add_child("src/Main.java", "main", link_reference="#main")
    service.add_child("src/Repo.java", "load", link_reference="#load")
    print(service.generate())

Author: DrawJavaCalls Team
"""

from .diagram import ChangeListener, DiagramService

__all__ = [
    "DiagramService",
    "ChangeListener",
]
