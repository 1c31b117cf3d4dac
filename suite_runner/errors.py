"""Error taxonomy for the suite runner.

Setup-level failures are raised as one of these and reported once by the CLI.
Suite failures (non-zero exit codes) are never raised; they are collected.
"""

from typing import Any, Mapping, Optional


def _normalize(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {key: _normalize(val) for key, val in value.items()}
    if isinstance(value, (list, tuple)):
        return [_normalize(item) for item in value]
    if isinstance(value, (str, int, float, bool)) or value is None:
        return value
    return str(value)


class SuiteRunnerError(Exception):
    """Base error for fatal, non-test failures."""

    def __init__(self, message: str, context: Optional[Mapping[str, Any]] = None):
        super().__init__(message)
        self.context = _normalize(context or {})

    @property
    def error_type(self) -> str:
        return self.__class__.__name__

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.error_type, "message": str(self), "context": self.context}


class ConfigurationError(SuiteRunnerError):
    """Invalid configuration file or package metadata."""


class UnsupportedPlatformError(SuiteRunnerError):
    """No default test plan exists for the current platform."""


class ExecutableNotFoundError(SuiteRunnerError):
    """Zero or several candidate application executables were found."""


class EnvironmentSetupError(SuiteRunnerError):
    """A per-suite execution environment could not be prepared."""


class SpawnError(SuiteRunnerError):
    """A child process could not be started at all."""


class DependencyBackupError(SuiteRunnerError):
    """A package's dependency tree could not be backed up."""
