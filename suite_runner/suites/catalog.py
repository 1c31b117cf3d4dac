"""Suite catalog: the fixed core suites plus one suite per bundled package."""

from dataclasses import dataclass, field
from typing import Iterable

from ..discovery.packages import PackageContext
from .schema import CoreSuite, PackageSuite, SuiteCategory, SuiteDefinition

INLINE_GIT_EXEC_VAR = "ATOM_GITHUB_INLINE_GIT_EXEC"

MAIN_PROCESS_SUITE = CoreSuite(
    name="core-main-process",
    category=SuiteCategory.MAIN,
    display_name="core main process",
    test_path="spec/main-process",
    extra_args=("--main-process",),
    env=((INLINE_GIT_EXEC_VAR, "true"),),
)

RENDER_PROCESS_SUITE = CoreSuite(
    name="core-render-process",
    category=SuiteCategory.RENDERER,
    display_name="core render process",
    test_path="spec",
)

BENCHMARK_SUITE = CoreSuite(
    name="core-benchmarks",
    category=SuiteCategory.BENCHMARK,
    display_name="core benchmark",
    test_path="benchmarks",
)


def build_package_suite(package: PackageContext) -> PackageSuite:
    return PackageSuite(
        name=f"package-{package.name}",
        category=SuiteCategory.PACKAGE,
        display_name=package.name,
        package=package,
    )


def build_package_suites(packages: Iterable[PackageContext]) -> tuple[PackageSuite, ...]:
    """One suite per catalog entry, preserving catalog order."""
    return tuple(build_package_suite(package) for package in packages)


@dataclass(frozen=True)
class SuiteCatalog:
    """Every suite available to a run, built once at startup."""
    packages: tuple[PackageSuite, ...] = field(default_factory=tuple)
    main: CoreSuite = MAIN_PROCESS_SUITE
    renderer: CoreSuite = RENDER_PROCESS_SUITE
    benchmark: CoreSuite = BENCHMARK_SUITE

    def by_category(self, category: SuiteCategory) -> list[SuiteDefinition]:
        if category == SuiteCategory.MAIN:
            return [self.main]
        if category == SuiteCategory.RENDERER:
            return [self.renderer]
        if category == SuiteCategory.BENCHMARK:
            return [self.benchmark]
        return list(self.packages)

    @classmethod
    def from_packages(cls, packages: Iterable[PackageContext]) -> "SuiteCatalog":
        return cls(packages=build_package_suites(packages))
