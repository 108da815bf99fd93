"""Environment composition for sandbox containers."""

import logging
import os
import posixpath
from typing import Dict, Iterable, List, Mapping, Optional

from ..models.container import UserConfig

logger = logging.getLogger(__name__)


class EnvironmentComposer:
    """Merges image, configuration and identity environment variables."""

    @staticmethod
    def identity_env(home: str, work_dir: str) -> Dict[str, str]:
        """Variables tied to the home/cache mounts; these always win."""
        return {
            'HOME': home,
            'XDG_CACHE_HOME': posixpath.join(home, '.cache'),
            'XDG_CONFIG_HOME': posixpath.join(home, '.config'),
            'XDG_DATA_HOME': posixpath.join(home, '.local', 'share'),
            'WORKDIR': work_dir,
        }

    def compose(self, image_env: Iterable[str], config_env: Mapping[str, str],
                user: UserConfig, work_dir: str) -> Dict[str, str]:
        """Compose the container environment.

        Args:
            image_env: The image's declared KEY=value entries
            config_env: Merged ``env`` from the project configuration
            user: Resolved sandbox user
            work_dir: Resolved in-container working directory

        Returns:
            Flat environment, lowest precedence first
        """
        env = {}
        for entry in image_env:
            key, sep, value = entry.partition('=')
            if sep:
                env[key] = value
        env.update(config_env)

        identity = self.identity_env(user.home, work_dir)
        overridden = sorted(key for key in identity if key in config_env)
        if overridden:
            logger.warning(f"Ignoring configured values for {', '.join(overridden)}; "
                           "they are derived from the sandbox user")
        for key in identity:
            env.pop(key, None)
        env.update(identity)
        return env

    @staticmethod
    def forward(names: Iterable[str], environ: Optional[Mapping[str, str]] = None) -> List[str]:
        """Build KEY=value pairs for host variables forwarded into a session.

        Values are read at call time. Entries already in KEY=value form pass
        through unchanged; names unset on the host are skipped.
        """
        if environ is None:
            environ = os.environ
        pairs = []
        for name in names:
            if '=' in name:
                pairs.append(name)
            elif name in environ:
                pairs.append(f"{name}={environ[name]}")
            else:
                logger.warning(f"Not forwarding {name}: not set in the host environment")
        return pairs

    @staticmethod
    def to_args(env: Mapping[str, str]) -> List[str]:
        """Render an environment as repeated -e arguments."""
        args = []
        for key, value in env.items():
            args.extend(['-e', f"{key}={value}"])
        return args
