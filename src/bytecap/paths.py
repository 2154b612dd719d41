"""Resolution of the workspace directory to scan."""

import os
import sys
from pathlib import Path
from typing import Callable, Optional

# Where Caido keeps project data, keyed by sys.platform prefix
DEFAULT_PROJECT_ROOTS: dict[str, str] = {
    "darwin": "~/Library/Application Support/io.caido.Caido/projects/{project}",
    "linux": "~/.local/share/caido/projects/{project}",
    "win32": "~/AppData/Roaming/caido/Caido/data/projects/{project}",
    "other": "~/.caido/projects/{project}",
}

ProjectAccessor = Callable[[], Optional[str]]


def expand_path(path: str) -> Path:
    """Expand ~ and shell-escaped spaces ("\\ ") in a user-entered path."""
    return Path(os.path.expanduser(path.replace("\\ ", " ")))


def default_project_root(project: str, platform: str | None = None) -> Path:
    """
    Compose the platform's default storage directory for a project.

    Args:
        project: Current project identifier
        platform: sys.platform value (defaults to the running platform)

    Returns:
        Path of the project directory, whether or not it exists
    """
    platform = platform or sys.platform
    key = next((k for k in DEFAULT_PROJECT_ROOTS if platform.startswith(k)), "other")
    return expand_path(DEFAULT_PROJECT_ROOTS[key].format(project=project))


def resolve_scan_root(
    explicit_path: str | None,
    project_accessor: ProjectAccessor,
    fallback_path: str,
    platform: str | None = None,
) -> Path | None:
    """
    Determine the directory to scan.

    An explicit path wins and is returned without an existence check.
    Otherwise the current project's default directory is used when it
    exists, else the fallback path.

    Args:
        explicit_path: User-entered path (may contain ~ and escaped spaces)
        project_accessor: Returns the current project identifier, or None
        fallback_path: Working directory to use when the project dir is missing
        platform: sys.platform value (defaults to the running platform)

    Returns:
        Path to scan, or None when no path was given and no project is open
    """
    if explicit_path and explicit_path.strip():
        return expand_path(explicit_path.strip())

    project = project_accessor()
    if not project:
        return None

    project_dir = default_project_root(project, platform)
    if project_dir.exists():
        return project_dir
    return Path(fallback_path)
