"""Runner module - suite environments, launching and aggregation."""

from .environment import EnvironmentBuilder
from .executor import SuiteExecutor
from .launcher import SuiteLauncher
from .result_collector import ResultCollector, RunOutcome

__all__ = [
    "EnvironmentBuilder",
    "SuiteExecutor",
    "SuiteLauncher",
    "ResultCollector",
    "RunOutcome",
]
