"""Sandbox container lifecycle."""

import logging
import posixpath
import sys
from collections import OrderedDict
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from ..models.config import ProjectConfig
from ..models.container import ContainerState, MountArg, UserConfig
from ..services.engine_service import EngineService
from ..services.exceptions import EngineInvocationError
from .constants import (
    CONTAINER_PREFIX,
    DEFAULT_WORKDIR,
    HOSTNAME,
    LOGIN_SHELL,
    STATE_DIR_MODE,
)
from .environment import EnvironmentComposer
from .image_inspector import ImageInspector
from .mount_planner import MountPlanner

logger = logging.getLogger(__name__)


def container_target(name: str) -> str:
    """Container name for a project name; already prefixed names are kept."""
    if name.startswith(CONTAINER_PREFIX):
        return name
    return f"{CONTAINER_PREFIX}{name}"


class ContainerRunner:
    """Drives a project's sandbox through its lifecycle.

    Every operation observes the container through the engine first and
    only acts on the difference, so repeated calls converge on the same
    state instead of failing.
    """

    def __init__(self, config: ProjectConfig, engine_service: EngineService,
                 image_inspector: Optional[ImageInspector] = None,
                 environment: Optional[EnvironmentComposer] = None):
        """Initialize container runner."""
        self.config = config
        self.engine_service = engine_service
        self.image_inspector = image_inspector or ImageInspector(engine_service)
        self.environment = environment or EnvironmentComposer()
        self.mount_planner = MountPlanner(config)

    @property
    def container_name(self) -> str:
        return self.config.container_name

    def state(self, name: Optional[str] = None) -> ContainerState:
        """Observe the state of the sandbox container."""
        name = name or self.container_name
        if not self.engine_service.succeeds(["container", "inspect", name]):
            return ContainerState.ABSENT
        output = self.engine_service.output(["inspect", "-f", "{{.State.Running}}", name])
        if output.strip() == "true":
            return ContainerState.RUNNING
        return ContainerState.STOPPED

    def up(self) -> ContainerState:
        """Converge the sandbox to running.

        Returns:
            The state observed before any action was taken

        Raises:
            EngineInvocationError: If a build, create or start command fails
            MetadataParseError: If image metadata cannot be read
            OSError: If the host state directories cannot be created
        """
        if self.config.build is not None:
            self.build_image()
        self.ensure_state_dirs()

        state = self.state()
        if state == ContainerState.ABSENT:
            self.create_container()
        elif state == ContainerState.STOPPED:
            logger.info(f"Starting existing container {self.container_name}; "
                        "run 'airlock down' first to apply configuration changes")
            self.engine_service.run(["start", self.container_name])
        else:
            logger.info(f"Container {self.container_name} is already running")
        return state

    def build_image(self):
        """Build the project image, streaming engine output."""
        build = self.config.build
        self.engine_service.run([
            "build",
            "-t", build.tag,
            "-f", str(build.containerfile),
            str(build.context),
        ])

    def ensure_state_dirs(self):
        """Create the host home and cache directories if missing."""
        for directory in (self.config.home_dir, self.config.cache_dir):
            Path(directory).mkdir(mode=STATE_DIR_MODE, parents=True, exist_ok=True)

    def resolve_user(self) -> UserConfig:
        """Resolve the sandbox user from the image and explicit overrides."""
        return self.image_inspector.resolve(self.config.image_ref, self.config.user)

    def resolve_work_dir(self, user: UserConfig) -> str:
        """In-container working directory: configured, image default, then fallback.

        An image WorkingDir of ``/`` is ignored: mounting the project there
        would cover the container root.
        """
        if self.config.work_dir:
            return self.config.work_dir
        if user.work_dir and posixpath.normpath(user.work_dir) != "/":
            return user.work_dir
        if user.work_dir:
            logger.warning(f"Ignoring image working directory '/'; using {DEFAULT_WORKDIR}")
        return DEFAULT_WORKDIR

    def plan_mounts(self, user: UserConfig, work_dir: str) -> List[MountArg]:
        return self.mount_planner.plan(user, work_dir)

    def run_args(self, user: UserConfig) -> List[str]:
        """Engine arguments that create the sandbox container."""
        work_dir = self.resolve_work_dir(user)
        env = self.environment.compose(user.env, self.config.env, user, work_dir)

        args = [
            "run", "-d",
            "--name", self.container_name,
            "-w", work_dir,
            "--user", user.user_arg,
        ]
        if self.engine_service.is_rootless_capable:
            args.append("--userns=keep-id")
        args.extend(self.environment.to_args(env))
        for mount in self.plan_mounts(user, work_dir):
            args.extend(["-v", mount.to_arg()])
        args.extend(["--hostname", HOSTNAME, self.config.image_ref])
        args.extend(self.config.command)
        return args

    def create_container(self):
        """Create and start the sandbox container."""
        user = self.resolve_user()
        self.engine_service.run(self.run_args(user))
        logger.info(f"Created container {self.container_name}")

    def enter(self, env_forward: Sequence[str] = ()) -> int:
        """Open a login shell in the sandbox.

        Returns:
            Exit status of the shell
        """
        return self._exec_session(env_forward, list(LOGIN_SHELL))

    def exec(self, env_forward: Sequence[str], command: Sequence[str]) -> int:
        """Run a command in the sandbox.

        Returns:
            Exit status of the command

        Raises:
            ValueError: If the command is empty
        """
        if not command:
            raise ValueError("exec requires a command")
        return self._exec_session(env_forward, list(command))

    def _exec_session(self, env_forward: Sequence[str], command: List[str]) -> int:
        user = self.resolve_user()
        args = ["exec", *self._tty_flags(), "--user", user.user_arg]
        for pair in self.environment.forward(env_forward):
            args.extend(["-e", pair])
        args.append(self.container_name)
        args.extend(command)
        return self.engine_service.run(args, check=False).returncode

    @staticmethod
    def _tty_flags() -> List[str]:
        if sys.stdin.isatty():
            return ["-it"]
        return ["-i"]

    def down(self, target: Optional[str] = None) -> str:
        """Stop and remove a sandbox container.

        Both steps are best-effort, so removing an absent container
        succeeds.

        Args:
            target: Project or container name; defaults to this project's

        Returns:
            The container name acted on
        """
        name = container_target(target) if target else self.container_name
        for args in (["stop", name], ["rm", "-f", name]):
            try:
                self.engine_service.run(args, check=False)
            except EngineInvocationError as e:
                logger.warning(f"Ignoring failed cleanup step: {e}")
        return name

    def list(self) -> List[str]:
        """Names of running sandbox containers."""
        output = self.engine_service.output([
            "ps", "--filter", f"name=^{CONTAINER_PREFIX}", "--format", "{{.Names}}",
        ])
        return [line.strip() for line in output.splitlines() if line.strip()]

    def info(self) -> Dict[str, str]:
        """Summary of the resolved sandbox, in display order."""
        state = self.state()
        info = OrderedDict()
        info["engine"] = self.engine_service.binary
        info["name"] = self.config.name
        info["project dir"] = str(self.config.project_dir)
        info["container"] = self.container_name
        info["image"] = self.config.image_ref
        info["work dir"] = self.config.work_dir or "(image default)"
        info["home dir"] = str(self.config.home_dir)
        info["cache dir"] = str(self.config.cache_dir)
        info["state"] = state.value
        if state != ContainerState.ABSENT:
            info["note"] = "configuration changes apply after 'airlock down' and 'airlock up'"
        return info
