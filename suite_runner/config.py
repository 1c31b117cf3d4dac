"""Runner configuration.

The configuration is resolved once at startup from, in increasing order of
precedence: built-in defaults, an optional YAML file, the process environment
and explicit overrides from the command line. The resulting RunnerConfig is
immutable and passed explicitly to every component.
"""

import os
import platform as platform_module
import sys
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Mapping, Optional, Union

import yaml

from .errors import ConfigurationError

DEFAULT_SHARD_SIZE = 23
DEFAULT_APM_BIN = "apm"
DEFAULT_BUILD_DIR = "out"

CONFIG_ENV_VAR = "SUITE_RUNNER_CONFIG"
JUNIT_ROOT_ENV_VAR = "TEST_JUNIT_XML_ROOT"
PACKAGES_TO_TEST_ENV_VAR = "ATOM_PACKAGES_TO_TEST"
RUN_CORE_TESTS_ENV_VAR = "ATOM_RUN_CORE_TESTS"
RUN_PACKAGE_TESTS_ENV_VAR = "ATOM_RUN_PACKAGE_TESTS"

FILE_KEYS = {
    "repository_root",
    "build_output_path",
    "apm_bin_path",
    "shard_size",
    "keep_temp_dirs",
}
PATH_KEYS = {"repository_root", "build_output_path"}

_ARCH_ALIASES = {
    "x86_64": "x64",
    "amd64": "x64",
    "x64": "x64",
    "i386": "ia32",
    "i686": "ia32",
    "x86": "ia32",
    "ia32": "ia32",
    "aarch64": "arm64",
    "arm64": "arm64",
}


def normalize_arch(machine: str) -> str:
    """Map a machine name to x64 / ia32 / arm64 where known."""
    machine = machine.lower()
    return _ARCH_ALIASES.get(machine, machine)


def normalize_platform(name: str) -> str:
    """Collapse sys.platform variants such as 'linux2' to their family."""
    if name.startswith("linux"):
        return "linux"
    return name


@dataclass(frozen=True)
class RunnerConfig:
    """Process-wide settings shared by the selector, builder and runner."""
    repository_root: Path
    build_output_path: Path
    platform: str
    arch: str
    executable_path: Optional[Path] = None
    apm_bin_path: str = DEFAULT_APM_BIN
    shard_size: int = DEFAULT_SHARD_SIZE
    junit_xml_root: Optional[Path] = None
    packages_to_test: Optional[tuple[str, ...]] = None
    run_core_tests: bool = False
    run_package_tests: Optional[str] = None
    ci: bool = False
    keep_temp_dirs: bool = False

    @property
    def resource_path(self) -> Path:
        """Path passed to the application as --resource-path."""
        return self.repository_root

    def with_executable(self, executable_path: Union[str, Path]) -> "RunnerConfig":
        """Return a copy bound to a resolved application executable."""
        return replace(self, executable_path=Path(executable_path))


def parse_packages_to_test(value: Optional[str]) -> Optional[tuple[str, ...]]:
    """Parse the comma-separated package allow-list.

    Returns None when no allow-list is configured, so that an unset variable
    and an allow-list are distinguishable.
    """
    if not value:
        return None
    names = [name.strip() for name in value.split(",")]
    return tuple(name for name in names if name)


def read_config_file(file_path: Union[str, Path]) -> dict[str, Any]:
    """Read the YAML configuration file.

    Args:
        file_path: Path to the YAML file.

    Returns:
        Mapping of recognized keys. Relative paths are resolved against the
        file's directory.

    Raises:
        ConfigurationError: If the file is missing, malformed or not a mapping.
    """
    file_path = Path(file_path)

    if not file_path.exists():
        raise ConfigurationError(
            f"Config file not found: {file_path}", {"path": file_path}
        )

    try:
        with open(file_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Invalid YAML in config file {file_path}: {e}", {"path": file_path}
        ) from e

    if data is None:
        return {}

    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Config must be a YAML mapping, got {type(data).__name__}",
            {"path": file_path},
        )

    values = {k: v for k, v in data.items() if k in FILE_KEYS}
    for key in PATH_KEYS & values.keys():
        path = Path(values[key]).expanduser()
        if not path.is_absolute():
            path = file_path.parent / path
        values[key] = path

    return values


def _shard_size(value: Any) -> int:
    try:
        size = int(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"shard_size must be an integer, got {value!r}") from e
    if size < 0:
        raise ConfigurationError(f"shard_size must not be negative, got {size}")
    return size


def load_config(
    config_file: Optional[Union[str, Path]] = None,
    environ: Optional[Mapping[str, str]] = None,
    **overrides: Any,
) -> RunnerConfig:
    """Resolve the runner configuration.

    Args:
        config_file: Optional YAML file. Falls back to $SUITE_RUNNER_CONFIG.
        environ: Environment to read from. Defaults to os.environ.
        **overrides: Explicit values (e.g. from CLI options); None values are
            ignored.

    Returns:
        Immutable RunnerConfig.

    Raises:
        ConfigurationError: On an unreadable file or invalid value.
    """
    environ = os.environ if environ is None else environ
    overrides = {k: v for k, v in overrides.items() if v is not None}

    config_file = config_file or environ.get(CONFIG_ENV_VAR)
    file_values = read_config_file(config_file) if config_file else {}

    def pick(key: str, default: Any = None) -> Any:
        if key in overrides:
            return overrides[key]
        return file_values.get(key, default)

    repository_root = Path(pick("repository_root", Path.cwd())).resolve()
    build_output_path = Path(pick("build_output_path", repository_root / DEFAULT_BUILD_DIR))

    junit_root = environ.get(JUNIT_ROOT_ENV_VAR)
    executable_path = overrides.get("executable_path")

    return RunnerConfig(
        repository_root=repository_root,
        build_output_path=build_output_path,
        platform=normalize_platform(overrides.get("platform", sys.platform)),
        arch=normalize_arch(overrides.get("arch", platform_module.machine())),
        executable_path=Path(executable_path) if executable_path else None,
        apm_bin_path=str(pick("apm_bin_path", DEFAULT_APM_BIN)),
        shard_size=_shard_size(pick("shard_size", DEFAULT_SHARD_SIZE)),
        junit_xml_root=Path(junit_root) if junit_root else None,
        packages_to_test=parse_packages_to_test(environ.get(PACKAGES_TO_TEST_ENV_VAR)),
        run_core_tests=environ.get(RUN_CORE_TESTS_ENV_VAR) == "true",
        run_package_tests=environ.get(RUN_PACKAGE_TESTS_ENV_VAR) or None,
        ci=bool(environ.get("CI")),
        keep_temp_dirs=bool(pick("keep_temp_dirs", False)),
    )
