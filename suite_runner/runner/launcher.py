"""Single suite launcher.

Starts the application executable for one suite, waits for it to exit and
turns the exit code into an ExecutionResult.
"""

import logging
import subprocess

import click

from ..config import RunnerConfig
from ..errors import ConfigurationError, SpawnError
from ..suites.schema import ExecutionResult, SuiteDefinition

logger = logging.getLogger(__name__)


class SuiteLauncher:
    """Runs the application executable once per suite."""

    def __init__(self, config: RunnerConfig):
        self.config = config

    def command_for(self, suite: SuiteDefinition) -> list[str]:
        if self.config.executable_path is None:
            raise ConfigurationError("No application executable configured")
        return [str(self.config.executable_path), *suite.build_arguments(self.config)]

    def launch(self, suite: SuiteDefinition, env: dict[str, str]) -> ExecutionResult:
        """Run suite and wait for it to terminate.

        Inherited output streams straight to this process's stdout/stderr.
        Captured output is buffered and printed only if the suite fails.

        Raises:
            SpawnError: If the executable could not be started.
        """
        cmd = self.command_for(suite)
        logger.debug("Launching %s: %s", suite.name, cmd)

        try:
            if suite.inherit_output:
                result = subprocess.run(cmd, env=env)
            else:
                result = subprocess.run(
                    cmd,
                    env=env,
                    stdout=subprocess.PIPE,
                    stderr=subprocess.STDOUT,
                    text=True,
                    errors="replace",
                )
        except OSError as e:
            raise SpawnError(
                f"Failed to start {suite.name}: {e}",
                {"suite": suite.name, "command": cmd},
            ) from e

        logger.debug("%s exited with %s", suite.name, result.returncode)

        if not suite.inherit_output and result.returncode != 0:
            click.secho(f"Package tests failed for {suite.label}:", fg="red")
            click.echo(result.stdout)

        return ExecutionResult(step=suite.name, exit_code=result.returncode)
