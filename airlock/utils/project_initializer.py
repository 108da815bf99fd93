"""Project bootstrap for ``airlock init``."""

import logging
from pathlib import Path
from typing import List, Optional, Union

from ..core.constants import (
    CONFIG_FILE_NAMES,
    CONTAINERFILE_NAME,
    DATA_DIR_NAME,
    LOCAL_CONFIG_FILE_NAME,
    STATE_DIR_MODE,
)
from ..core.templates import (
    CONFIG_TEMPLATE,
    CONTAINERFILE_TEMPLATE,
    GITIGNORE_ENTRY,
    LOCAL_CONFIG_TEMPLATE,
)
from ..models.config import default_image_tag

logger = logging.getLogger(__name__)


class ProjectInitializer:
    """Writes starter files for a new sandbox project.

    Existing files are never overwritten, so running init twice is safe.
    """

    def __init__(self, project_dir: Union[str, Path], name: Optional[str] = None):
        """Initialize project initializer.

        Args:
            project_dir: Directory to initialize
            name: Project name; defaults to the directory basename
        """
        self.project_dir = Path(project_dir).resolve()
        self.name = name or self.project_dir.name
        self.data_dir = self.project_dir / DATA_DIR_NAME

    def initialize(self) -> List[Path]:
        """Create missing project files.

        Returns:
            Paths that were created or modified
        """
        created = []
        if not any((self.project_dir / name).exists() for name in CONFIG_FILE_NAMES):
            config_file = self.project_dir / CONFIG_FILE_NAMES[0]
            config_file.write_text(
                CONFIG_TEMPLATE.format(name=self.name, tag=default_image_tag(self.name))
            )
            created.append(config_file)

        containerfile = self.project_dir / CONTAINERFILE_NAME
        if self._write_if_missing(containerfile, CONTAINERFILE_TEMPLATE):
            created.append(containerfile)

        for directory in (self.data_dir / "home", self.data_dir / "cache"):
            if not directory.exists():
                directory.mkdir(mode=STATE_DIR_MODE, parents=True)
                created.append(directory)

        local_config = self.data_dir / LOCAL_CONFIG_FILE_NAME
        if self._write_if_missing(local_config, LOCAL_CONFIG_TEMPLATE):
            created.append(local_config)

        gitignore = self.project_dir / ".gitignore"
        if self.ensure_line(gitignore, GITIGNORE_ENTRY):
            created.append(gitignore)

        logger.debug(f"Initialized {self.project_dir}: {len(created)} paths written")
        return created

    @staticmethod
    def _write_if_missing(path: Path, content: str) -> bool:
        if path.exists():
            return False
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
        return True

    @staticmethod
    def ensure_line(path: Path, line: str) -> bool:
        """Append a line to a file unless already present.

        Returns:
            True if the file was created or changed
        """
        if not path.exists():
            path.write_text(line + "\n")
            return True
        text = path.read_text()
        if line in text.splitlines():
            return False
        if text and not text.endswith("\n"):
            text += "\n"
        path.write_text(text + line + "\n")
        return True
