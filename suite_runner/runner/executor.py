"""Sequential suite executor.

Runs a plan strictly one suite at a time:
1. Build the suite's environment
2. Run the suite (including any dependency install and restore)
3. Record the result
A non-zero exit code is recorded and the run continues. A spawn failure
aborts the rest of the plan.
"""

import logging
import time
from typing import Iterable, Optional

from ..config import RunnerConfig
from ..installer.dependency_manager import DependencyManager
from ..suites.schema import SuiteDefinition
from .environment import EnvironmentBuilder
from .launcher import SuiteLauncher
from .result_collector import ResultCollector, RunOutcome

logger = logging.getLogger(__name__)


class SuiteExecutor:
    """Executes a run plan and aggregates the results."""

    def __init__(
        self,
        config: RunnerConfig,
        launcher: Optional[SuiteLauncher] = None,
        environment_builder: Optional[EnvironmentBuilder] = None,
        installer: Optional[DependencyManager] = None,
    ):
        """Initialize suite executor.

        Args:
            config: Runner configuration.
            launcher: Launches the executable (default: SuiteLauncher).
            environment_builder: Builds per-suite environments.
            installer: Installs package test runner dependencies.
        """
        self.config = config
        self.launcher = launcher or SuiteLauncher(config)
        self.environment_builder = environment_builder or EnvironmentBuilder(config)
        self.installer = installer or DependencyManager(config)

    def execute(self, plan: Iterable[SuiteDefinition]) -> RunOutcome:
        """Run every suite in plan, in order.

        Returns:
            RunOutcome with one result per suite.

        Raises:
            SpawnError: If a child process could not be started. No further
                suites are run.
            EnvironmentSetupError: If a suite environment cannot be built.
        """
        start_time = time.time()
        collector = ResultCollector()

        try:
            for suite in plan:
                env = self.environment_builder.build(suite)
                result = suite.run(self.launcher, env, self.installer)
                logger.info("%s finished with exit code %s", result.step, result.exit_code)
                collector.add(result)
        finally:
            self.environment_builder.cleanup()

        duration_ms = int((time.time() - start_time) * 1000)
        return collector.outcome(duration_ms=duration_ms)
