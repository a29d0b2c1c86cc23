"""Link path handling shared by the generators and the parsers.

Provides:
- Rewriting a file path into the form written into a diagram link
- Restoring the project root from the ``$projectsPath/<folder>`` placeholder
- Splitting a link into file path and link reference ("#name" / ":line")
- Recovering an element's group from its identifier
"""

from typing import Optional

from .config import PathRewriteConfig, folder_name
from .constants import PROJECTS_PATH_TOKEN
from .models.diagram import state_name


def _forward_slashes(path: str) -> str:
    return path.replace("\\", "/")


def placeholder_for(root: str) -> str:
    """The ``$projectsPath/<folder>`` token standing in for ``root``."""
    return f"{PROJECTS_PATH_TOKEN}/{folder_name(root)}"


def is_under_root(file_path: str, root: str) -> bool:
    """True if ``file_path`` is ``root`` itself or lies inside it.

    >>> is_under_root("/home/dev/shop/A.java", "/home/dev/shop")
    True
    >>> is_under_root("/home/dev/shop2/A.java", "/home/dev/shop")
    False
    """
    if not root or not file_path.startswith(root):
        return False
    rest = file_path[len(root):]
    return not rest or root[-1] in "/\\" or rest[0] in "/\\"


def rewrite_link_path(
    file_path: str,
    paths: PathRewriteConfig,
    project_root: Optional[str] = None,
) -> str:
    """Path of an element as written into a generated link.

    Args:
        file_path: Element file path, either separator
        paths: Path rewrite configuration
        project_root: Root overriding ``paths.project_root`` for this call

    Returns:
        ``$projectsPath/<folder>/rest`` for a path under the project root
        (project root mode), the custom root followed by the forward-slashed
        rest (custom root mode), or the whole path forward-slashed.
    """
    if paths.use_project_root:
        root = paths.resolve_project_root(project_root).rstrip("/\\")
        if is_under_root(file_path, root):
            return placeholder_for(root) + _forward_slashes(file_path[len(root):])
        return _forward_slashes(file_path)

    custom_root = paths.custom_root_path
    if is_under_root(file_path, custom_root):
        return custom_root + _forward_slashes(file_path[len(custom_root):])
    return _forward_slashes(file_path)


def restore_project_path(path: str, project_root: Optional[str]) -> str:
    """Undo the placeholder written by :func:`rewrite_link_path`.

    Paths that do not start with the placeholder, or a missing project root,
    leave ``path`` untouched.
    """
    if not project_root or not path.startswith(PROJECTS_PATH_TOKEN + "/"):
        return path
    root = project_root.rstrip("/\\")
    return path.replace(placeholder_for(root), root, 1)


def expand_placeholder(content: str, root: str) -> str:
    """Replace every placeholder for ``root`` in a whole document.

    Used to display diagrams that cannot be loaded back into the model, so
    their links point at this machine's copy of the project.
    """
    if not root:
        return content
    trimmed = root.rstrip("/\\")
    return content.replace(placeholder_for(trimmed), _forward_slashes(trimmed))


def split_link_reference(link: str) -> tuple[str, str]:
    """Split a link into (file path, link reference).

    Everything from the first ``#`` is a symbolic reference. Otherwise the
    last ``:`` starts a line reference, unless it sits at index 0 or 1 where
    it is a drive letter colon ("C:/dev/A.java").

    Examples:
        >>> split_link_reference("src/A.java#run")
        ('src/A.java', '#run')
        >>> split_link_reference("C:/dev/app.py:42")
        ('C:/dev/app.py', ':42')
        >>> split_link_reference("C:/dev/app.py")
        ('C:/dev/app.py', '')
    """
    if "#" in link:
        path, _, reference = link.partition("#")
        return path, "#" + reference

    last_colon = link.rfind(":")
    if last_colon > 1:
        return link[:last_colon], link[last_colon:]
    return link, ""


def recover_group(identifier: str, file_path: str, title: str) -> Optional[str]:
    """Recover the group encoded in an identifier.

    The identifier is ``[group.]<stateName>.<title>``; whatever precedes the
    known ``<stateName>.<title>`` suffix is the group. When the file part does
    not match (an identifier edited by hand), the segment before the title is
    taken as the file part.

    Returns:
        The group, or None for an ungrouped element
    """
    suffix = f"{state_name(file_path)}.{title}"
    if identifier == suffix:
        return None
    if identifier.endswith("." + suffix):
        return identifier[: -len(suffix) - 1] or None
    if identifier.endswith("." + title):
        without_title = identifier[: -len(title) - 1]
        return without_title.rpartition(".")[0] or None
    return None
