"""Mount planning for sandbox containers."""

import posixpath
from typing import List

from ..models.config import ProjectConfig
from ..models.container import MountArg, UserConfig
from ..utils.path_finder import PathFinder
from .constants import DATA_DIR_NAME, RELABEL_OPTION


class MountPlanner:
    """Computes the ordered bind mounts for a project's sandbox.

    The order is fixed: project workdir, home, cache, explicit mounts, and
    finally an anonymous volume masking the local state directory. The mask
    goes last so no earlier mount can shadow it.
    """

    def __init__(self, config: ProjectConfig):
        """Initialize mount planner."""
        self.config = config

    def plan(self, user: UserConfig, work_dir: str) -> List[MountArg]:
        """Plan all mounts for the sandbox.

        Args:
            user: Resolved sandbox user
            work_dir: Resolved in-container working directory

        Returns:
            Mounts in the order they must be passed to the engine
        """
        work_dir = posixpath.normpath(work_dir)
        explicit = self._explicit_mounts()

        mounts = []
        if not any(posixpath.normpath(mount.target) == work_dir for mount in explicit):
            mounts.append(MountArg(
                source=str(self.config.project_dir),
                target=work_dir,
                options=[RELABEL_OPTION],
            ))
        mounts.append(MountArg(
            source=str(self.config.home_dir),
            target=user.home,
            options=[RELABEL_OPTION],
        ))
        mounts.append(MountArg(
            source=str(self.config.cache_dir),
            target=posixpath.join(user.home, ".cache"),
            options=[RELABEL_OPTION],
        ))
        mounts.extend(explicit)
        mounts.append(self.mask_mount(work_dir))
        return mounts

    def _explicit_mounts(self) -> List[MountArg]:
        return [
            MountArg(
                source=str(PathFinder.resolve_host_path(self.config.project_dir, mount.source)),
                target=mount.target,
                options=[mount.mode, RELABEL_OPTION],
            )
            for mount in self.config.mounts
        ]

    @staticmethod
    def mask_mount(work_dir: str) -> MountArg:
        """Anonymous volume hiding the state directory inside the workdir mount."""
        return MountArg(target=posixpath.join(work_dir, DATA_DIR_NAME))
