"""Suite data models.

A suite is one invocation of the application executable. Core suites and
package suites share the same invocation interface so the runner can treat a
run plan as a flat sequence.
"""

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Optional

import click

from ..config import RunnerConfig
from ..discovery.packages import PackageContext

if TYPE_CHECKING:
    from ..installer.dependency_manager import DependencyManager
    from ..runner.launcher import SuiteLauncher


class SuiteCategory(str, Enum):
    """Suite categories, in the order explicit selections are run."""
    MAIN = "main"
    RENDERER = "renderer"
    BENCHMARK = "benchmark"
    PACKAGE = "package"


CATEGORY_ORDER = (
    SuiteCategory.MAIN,
    SuiteCategory.RENDERER,
    SuiteCategory.BENCHMARK,
    SuiteCategory.PACKAGE,
)


@dataclass(frozen=True)
class ExecutionResult:
    """Outcome of one suite invocation."""
    step: str
    exit_code: int

    @property
    def passed(self) -> bool:
        return self.exit_code == 0


@dataclass(frozen=True)
class SuiteDefinition:
    """Common interface of every runnable suite."""
    name: str
    category: SuiteCategory
    display_name: str = ""
    inherit_output: bool = True

    @property
    def label(self) -> str:
        return self.display_name or self.name

    def build_arguments(self, config: RunnerConfig) -> list[str]:
        """Arguments passed to the application executable."""
        raise NotImplementedError

    def environment_overrides(self) -> dict[str, str]:
        """Extra environment variables for this suite only."""
        return {}

    def run(
        self,
        launcher: "SuiteLauncher",
        env: dict[str, str],
        installer: Optional["DependencyManager"] = None,
    ) -> ExecutionResult:
        """Run the suite to completion.

        Raises:
            SpawnError: If the executable could not be started.
        """
        click.secho(f"Executing {self.label} tests", bold=True, fg="green")
        return launcher.launch(self, env)


@dataclass(frozen=True)
class CoreSuite(SuiteDefinition):
    """A suite living in the application repository itself.

    test_path is relative to the repository root.
    """
    test_path: str = "spec"
    extra_args: tuple[str, ...] = ()
    env: tuple[tuple[str, str], ...] = ()

    def build_arguments(self, config: RunnerConfig) -> list[str]:
        test_path = str(config.repository_root / self.test_path)
        if self.category == SuiteCategory.BENCHMARK:
            return ["--benchmark-test", test_path]
        return [
            "--resource-path",
            str(config.resource_path),
            "--test",
            *self.extra_args,
            test_path,
        ]

    def environment_overrides(self) -> dict[str, str]:
        return dict(self.env)


@dataclass(frozen=True)
class PackageSuite(SuiteDefinition):
    """Tests of one bundled package, run with captured output."""
    package: Optional[PackageContext] = None
    inherit_output: bool = False

    def build_arguments(self, config: RunnerConfig) -> list[str]:
        return [
            "--resource-path",
            str(config.resource_path),
            "--test",
            str(self.package.test_folder),
        ]

    def run(
        self,
        launcher: "SuiteLauncher",
        env: dict[str, str],
        installer: Optional["DependencyManager"] = None,
    ) -> ExecutionResult:
        """Run the package tests, installing test runner dependencies first
        when the package needs them.

        The package's dependency tree is restored on every exit path.
        """
        if not self.package.needs_dependency_install or installer is None:
            return super().run(launcher, env, installer)

        click.secho(
            f"Installing test runner dependencies for {self.label}",
            bold=True,
            fg="green",
        )
        with installer.prepared(self.package):
            install_code = installer.install(self.package)
            if install_code != 0:
                return ExecutionResult(step=self.name, exit_code=install_code)

            click.secho(f"Executing {self.label} tests", fg="green")
            return launcher.launch(self, env)
