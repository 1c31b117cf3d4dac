"""Bundled package discovery.

Builds the read-only package catalog once at startup from the application's
package metadata.
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Optional

import click

from ..errors import ConfigurationError

logger = logging.getLogger(__name__)

METADATA_FILE = "package.json"
TEST_SUBDIRS = ("spec", "test")
TEST_RUNNER_KEY = "atomTestRunner"


@dataclass(frozen=True)
class PackageContext:
    """A bundled package that has tests to run."""
    name: str
    path: Path
    test_folder: Path
    needs_dependency_install: bool = False

    @property
    def node_modules_path(self) -> Path:
        return self.path / "node_modules"


def read_metadata(path: Path) -> dict[str, Any]:
    """Load a package.json file.

    Raises:
        ConfigurationError: If the file is not valid JSON or not an object.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid package metadata in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Package metadata must be an object: {path}")
    return data


def bundled_package_names(repository_root: Path) -> list[str]:
    """Names listed under packageDependencies, in declaration order."""
    metadata_path = Path(repository_root) / METADATA_FILE
    if not metadata_path.exists():
        raise ConfigurationError(
            f"Application metadata not found: {metadata_path}",
            {"path": metadata_path},
        )
    return list(read_metadata(metadata_path).get("packageDependencies") or {})


def find_test_folder(package_path: Path) -> Optional[Path]:
    for subdir in TEST_SUBDIRS:
        candidate = package_path / subdir
        if candidate.exists():
            return candidate
    return None


def needs_dependency_install(package_path: Path) -> bool:
    """Whether the package declares its own test runner."""
    metadata_path = package_path / METADATA_FILE
    if not metadata_path.exists():
        return False
    return bool(read_metadata(metadata_path).get(TEST_RUNNER_KEY))


def discover_packages(
    repository_root: Path,
    packages_to_test: Optional[Iterable[str]] = None,
) -> list[PackageContext]:
    """Build the package catalog.

    Args:
        repository_root: Application repository root.
        packages_to_test: Optional allow-list; other packages are skipped.

    Returns:
        One PackageContext per allowed package with a test folder.
    """
    repository_root = Path(repository_root)
    allowed = set(packages_to_test) if packages_to_test is not None else None
    catalog = []

    for name in bundled_package_names(repository_root):
        if allowed is not None and name not in allowed:
            continue

        package_path = repository_root / "node_modules" / name
        test_folder = find_test_folder(package_path)
        if test_folder is None:
            logger.warning("No test folder found for package: %s", name)
            click.secho(f"No test folder found for package: {name}", fg="yellow")
            continue

        catalog.append(PackageContext(
            name=name,
            path=package_path,
            test_folder=test_folder,
            needs_dependency_install=needs_dependency_install(package_path),
        ))

    logger.debug("Discovered %d testable packages", len(catalog))
    return catalog
