"""Utilities for finding and resolving project paths."""

import os
from pathlib import Path
from typing import Optional, Tuple, Union

from ..core.constants import CONFIG_FILE_NAMES, CONTAINERFILE_CANDIDATES

PathLike = Union[str, Path]


class PathFinder:
    """Utility class for finding and resolving host paths."""

    @staticmethod
    def resolve_host_path(project_dir: PathLike, path: PathLike) -> Path:
        """Resolve a configured host path against the project root.

        Absolute paths are kept, ``~`` is expanded, and the result is
        normalized without following symlinks.
        """
        expanded = Path(os.path.expanduser(str(path)))
        if not expanded.is_absolute():
            expanded = Path(project_dir) / expanded
        return Path(os.path.normpath(expanded))

    @staticmethod
    def find_config_file(directory: Optional[PathLike] = None) -> Optional[Path]:
        """Find the project configuration file in a directory."""
        base = Path(directory) if directory is not None else Path.cwd()
        for name in CONFIG_FILE_NAMES:
            candidate = base / name
            if candidate.is_file():
                return candidate
        return None


class ProjectInspector:
    """Answers questions about the files present under a project root."""

    def __init__(self, project_dir: PathLike):
        """Initialize inspector."""
        self.project_dir = Path(project_dir)

    def has_file(self, relative_path: str) -> bool:
        """Check if a file exists relative to the project root."""
        return (self.project_dir / relative_path).is_file()

    def find_containerfile(self) -> Optional[Tuple[str, str]]:
        """Find a default Containerfile.

        Returns:
            Tuple of (context, containerfile) relative to the project root,
            or None when no candidate exists
        """
        for context, containerfile in CONTAINERFILE_CANDIDATES:
            if self.has_file(containerfile):
                return context, containerfile
        return None
