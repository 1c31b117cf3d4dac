"""Suite selection.

Resolves the ordered run plan from explicit flags, or from per-platform
defaults when no category was requested.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from ..config import RunnerConfig
from ..errors import UnsupportedPlatformError
from .catalog import SuiteCatalog
from .schema import CATEGORY_ORDER, SuiteCategory, SuiteDefinition

logger = logging.getLogger(__name__)

RunPlan = tuple[SuiteDefinition, ...]

SUPPORTED_PLATFORMS = ("darwin", "win32", "linux")


@dataclass(frozen=True)
class SuiteFlags:
    """Explicit category selections from the command line."""
    core_main: bool = False
    skip_main: bool = False
    core_renderer: bool = False
    core_benchmark: bool = False
    package: bool = False

    def requested(self) -> list[SuiteCategory]:
        """Requested categories, in run order."""
        selected = {
            SuiteCategory.MAIN: self.core_main,
            SuiteCategory.RENDERER: self.core_renderer,
            SuiteCategory.BENCHMARK: self.core_benchmark,
            SuiteCategory.PACKAGE: self.package,
        }
        return [category for category in CATEGORY_ORDER if selected[category]]

    @property
    def any_requested(self) -> bool:
        return bool(self.requested())


def shard_packages(
    package_suites: Sequence[SuiteDefinition],
    shard: Optional[str],
    shard_size: int,
) -> list[SuiteDefinition]:
    """Split the package suites into two shards.

    Shard "1" is the first shard_size suites, shard "2" is the rest; any other
    value returns every suite.
    """
    if shard == "1":
        return list(package_suites[:shard_size])
    if shard == "2":
        return list(package_suites[shard_size:])
    return list(package_suites)


def needs_package_catalog(flags: SuiteFlags, config: RunnerConfig) -> bool:
    """Whether selection can include package suites at all."""
    if flags.any_requested:
        return flags.package
    return config.platform == "darwin"


def default_suites(catalog: SuiteCatalog, config: RunnerConfig) -> list[SuiteDefinition]:
    """Platform default plan.

    Raises:
        UnsupportedPlatformError: If the platform has no default plan.
    """
    core = [catalog.main, catalog.renderer]

    if config.platform == "darwin":
        if config.run_core_tests:
            return core
        if config.run_package_tests in ("1", "2"):
            return shard_packages(
                catalog.packages, config.run_package_tests, config.shard_size
            )
        return core + list(catalog.packages)

    if config.platform == "win32":
        return core if config.arch == "x64" else [catalog.main]

    if config.platform == "linux":
        return [catalog.main]

    raise UnsupportedPlatformError(
        f"Unrecognized platform: {config.platform}",
        {"platform": config.platform, "supported": SUPPORTED_PLATFORMS},
    )


def select_suites(
    catalog: SuiteCatalog,
    flags: SuiteFlags,
    config: RunnerConfig,
) -> RunPlan:
    """Resolve the run plan.

    Args:
        catalog: Available suites; packages already filtered by allow-list.
        flags: Explicit category selections.
        config: Platform, architecture and shard settings.

    Returns:
        Ordered, possibly empty, tuple of suites.

    Raises:
        UnsupportedPlatformError: If defaults are needed on an unknown platform.
    """
    requested = flags.requested()
    if requested:
        suites = [
            suite
            for category in requested
            for suite in catalog.by_category(category)
        ]
    else:
        suites = default_suites(catalog, config)

    if flags.skip_main:
        suites = [suite for suite in suites if suite.category != SuiteCategory.MAIN]

    logger.debug("Selected suites: %s", [suite.name for suite in suites])
    return tuple(suites)
