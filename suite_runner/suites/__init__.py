"""Suites module - suite definitions, catalog and selection."""

from .catalog import (
    BENCHMARK_SUITE,
    MAIN_PROCESS_SUITE,
    RENDER_PROCESS_SUITE,
    SuiteCatalog,
    build_package_suites,
)
from .schema import (
    CoreSuite,
    ExecutionResult,
    PackageSuite,
    SuiteCategory,
    SuiteDefinition,
)
from .selector import RunPlan, SuiteFlags, select_suites, shard_packages

__all__ = [
    "BENCHMARK_SUITE",
    "MAIN_PROCESS_SUITE",
    "RENDER_PROCESS_SUITE",
    "SuiteCatalog",
    "build_package_suites",
    "CoreSuite",
    "ExecutionResult",
    "PackageSuite",
    "SuiteCategory",
    "SuiteDefinition",
    "RunPlan",
    "SuiteFlags",
    "select_suites",
    "shard_packages",
]
