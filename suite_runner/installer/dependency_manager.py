"""Package dependency manager for the suite runner.

Installs a package's own test runner dependencies before its tests run and
puts the package's original dependency tree back afterwards.
"""

import logging
import shutil
import subprocess
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

import click

from ..config import RunnerConfig
from ..discovery.packages import PackageContext
from ..errors import DependencyBackupError, SpawnError

logger = logging.getLogger(__name__)

BACKUP_SUFFIX = ".bak"


class DependencyManager:
    """Manages the node_modules tree of a bundled package."""

    def __init__(self, config: RunnerConfig):
        """Initialize DependencyManager.

        Args:
            config: Runner configuration (package manager path, CI mode).
        """
        self.apm_bin_path = config.apm_bin_path
        self.ci = config.ci

    @staticmethod
    def backup_path(package: PackageContext) -> Path:
        modules = package.node_modules_path
        return modules.with_name(modules.name + BACKUP_SUFFIX)

    def install_command(self) -> list[str]:
        return [self.apm_bin_path, "--loglevel=error", "ci" if self.ci else "install"]

    def backup(self, package: PackageContext) -> bool:
        """Copy an existing dependency tree aside.

        Returns:
            True if a backup was taken, False if there was no tree to back up.

        Raises:
            DependencyBackupError: If a backup already exists or copying fails.
        """
        modules = package.node_modules_path
        if not modules.exists():
            return False

        backup = self.backup_path(package)
        if backup.exists():
            raise DependencyBackupError(
                f"Cannot back up {modules} because a backup path already "
                f"exists at {backup}",
                {"package": package.name, "backup_path": backup},
            )

        logger.debug("Backing up %s to %s", modules, backup)
        try:
            shutil.copytree(modules, backup, symlinks=True)
        except OSError as e:
            raise DependencyBackupError(
                f"Failed to back up {modules}: {e}", {"package": package.name}
            ) from e
        return True

    def restore(self, package: PackageContext, had_tree: bool) -> None:
        """Put the original dependency state back.

        With a backup, the installed tree is replaced by it; without one,
        whatever the install created is removed. Failures are logged only.
        """
        modules = package.node_modules_path
        backup = self.backup_path(package)

        try:
            if had_tree:
                if backup.exists():
                    if modules.exists():
                        shutil.rmtree(modules)
                    backup.rename(modules)
            elif modules.exists():
                shutil.rmtree(modules)
        except OSError as e:
            logger.warning("Failed to restore dependencies of %s: %s", package.name, e)
            click.secho(
                f"Warning: failed to restore dependencies of {package.name}: {e}",
                fg="yellow",
                err=True,
            )

    @contextmanager
    def prepared(self, package: PackageContext) -> Iterator[None]:
        """Scope in which the package's dependency tree may be replaced.

        The original tree is restored exactly once when the scope exits,
        whether it exits normally or with an exception.
        """
        had_tree = self.backup(package)
        try:
            yield
        finally:
            self.restore(package, had_tree)

    def install(self, package: PackageContext) -> int:
        """Install the package's dependencies.

        Returns:
            Exit code of the package manager.

        Raises:
            SpawnError: If the package manager could not be started.
        """
        cmd = self.install_command()
        logger.debug("Running %s in %s", cmd, package.path)

        try:
            result = subprocess.run(
                cmd,
                cwd=package.path,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                errors="replace",
            )
        except OSError as e:
            raise SpawnError(
                f"Failed to run {self.apm_bin_path} for {package.name}: {e}",
                {"command": cmd, "cwd": package.path},
            ) from e

        if result.returncode != 0:
            click.secho(
                f"Installing dependencies failed for {package.name}:", fg="red"
            )
            click.echo(result.stdout)

        return result.returncode
