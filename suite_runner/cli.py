"""CLI entry point for the suite runner.

Usage:
    suite-runner [--core-main | --skip-main] [--core-renderer]
                 [--core-benchmark] [--package] [options]
    python -m suite_runner.cli [options]
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from .config import RunnerConfig, load_config
from .discovery.app_locator import locate_executable
from .discovery.packages import discover_packages
from .errors import SuiteRunnerError
from .reporting.summary import RunReporter, print_failures
from .runner.executor import SuiteExecutor
from .runner.result_collector import RunOutcome
from .suites.catalog import SuiteCatalog
from .suites.selector import SuiteFlags, needs_package_catalog, select_suites

logger = logging.getLogger(__name__)


def build_catalog(flags: SuiteFlags, config: RunnerConfig) -> SuiteCatalog:
    """Build the suite catalog, reading package metadata only if needed."""
    if not needs_package_catalog(flags, config):
        return SuiteCatalog()
    packages = discover_packages(config.repository_root, config.packages_to_test)
    return SuiteCatalog.from_packages(packages)


def run_suites(
    flags: SuiteFlags,
    config: RunnerConfig,
    report_path: Optional[Path] = None,
    executor: Optional[SuiteExecutor] = None,
) -> RunOutcome:
    """Select, run and summarize the requested suites.

    Raises:
        SuiteRunnerError: On any fatal setup or spawn failure.
    """
    plan = select_suites(build_catalog(flags, config), flags, config)

    if not plan:
        click.secho("No test suites selected", fg="yellow")
        return RunOutcome()

    if config.executable_path is None:
        config = config.with_executable(locate_executable(config))
    logger.debug("Using executable %s", config.executable_path)

    executor = executor or SuiteExecutor(config)
    outcome = executor.execute(plan)

    print_failures(outcome)

    if report_path:
        reporter = RunReporter()
        saved = reporter.save(reporter.generate(plan, outcome), report_path)
        click.echo(f"Report saved: {saved}")

    return outcome


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("--core-main", is_flag=True, help="Run core main process tests.")
@click.option("--skip-main", is_flag=True, help="Skip main process tests.")
@click.option("--core-renderer", is_flag=True, help="Run core renderer tests.")
@click.option("--core-benchmark", is_flag=True, help="Run core benchmarks.")
@click.option("--package", is_flag=True, help="Run bundled package tests.")
@click.option(
    "--config",
    "config_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="YAML configuration file.",
)
@click.option(
    "--resource-path",
    type=click.Path(file_okay=False, path_type=Path),
    help="Application repository root.",
)
@click.option(
    "--executable",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Application executable (skips build output discovery).",
)
@click.option(
    "--report",
    "report_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write a JSON run report to this file.",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def main(
    core_main: bool,
    skip_main: bool,
    core_renderer: bool,
    core_benchmark: bool,
    package: bool,
    config_file: Optional[Path],
    resource_path: Optional[Path],
    executable: Optional[Path],
    report_path: Optional[Path],
    verbose: bool,
):
    """Run the application's test suites."""
    if core_main and skip_main:
        raise click.UsageError("--core-main and --skip-main are mutually exclusive")

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    flags = SuiteFlags(
        core_main=core_main,
        skip_main=skip_main,
        core_renderer=core_renderer,
        core_benchmark=core_benchmark,
        package=package,
    )

    try:
        config = load_config(
            config_file,
            repository_root=resource_path,
            executable_path=executable,
        )
        outcome = run_suites(flags, config, report_path=report_path)

    except SuiteRunnerError as e:
        logger.debug("Fatal error: %s", e.to_dict())
        click.secho(f"{e.error_type}: {e}", fg="red", err=True)
        sys.exit(1)

    except KeyboardInterrupt:
        click.secho("Test run interrupted by user", fg="red", err=True)
        sys.exit(130)

    sys.exit(outcome.exit_code)


if __name__ == "__main__":
    main()
