"""Per-suite execution environment."""

import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Mapping, Optional

from ..config import RunnerConfig
from ..errors import EnvironmentSetupError
from ..suites.schema import SuiteDefinition

logger = logging.getLogger(__name__)

HOME_VAR = "ATOM_HOME"
JUNIT_PATH_VAR = "TEST_JUNIT_XML_PATH"


class EnvironmentBuilder:
    """Builds an isolated environment for each suite invocation.

    Every call allocates a fresh home directory, even for a suite name seen
    before. The directories are removed by cleanup().
    """

    def __init__(self, config: RunnerConfig, base_env: Optional[Mapping[str, str]] = None):
        self.config = config
        self.base_env = dict(os.environ if base_env is None else base_env)
        self._temp_dirs: list[Path] = []

    @property
    def temp_dirs(self) -> list[Path]:
        return list(self._temp_dirs)

    def build(self, suite: SuiteDefinition) -> dict[str, str]:
        """Build the environment for one invocation of suite.

        Raises:
            EnvironmentSetupError: If the home directory cannot be created.
        """
        try:
            home = Path(tempfile.mkdtemp(prefix=f"{suite.name}-"))
        except OSError as e:
            raise EnvironmentSetupError(
                f"Failed to create home directory for {suite.name}: {e}",
                {"suite": suite.name},
            ) from e
        self._temp_dirs.append(home)

        env = dict(self.base_env)
        env[HOME_VAR] = str(home)

        if self.config.junit_xml_root is not None:
            env[JUNIT_PATH_VAR] = str(self.config.junit_xml_root / f"{suite.name}.xml")

        env.update(suite.environment_overrides())
        return env

    def cleanup(self) -> None:
        """Remove every home directory created so far."""
        if self.config.keep_temp_dirs:
            logger.info("Keeping temporary home directories: %s", self._temp_dirs)
            return

        for path in self._temp_dirs:
            try:
                shutil.rmtree(path)
            except FileNotFoundError:
                pass
            except OSError as e:
                logger.warning("Failed to remove %s: %s", path, e)
        self._temp_dirs.clear()
