"""Result collector for suite runs.

Collects per-suite results in run order and computes the overall outcome.
"""

from dataclasses import dataclass, field

from ..suites.schema import ExecutionResult


@dataclass(frozen=True)
class RunOutcome:
    """Aggregated outcome of a run plan."""
    results: tuple[ExecutionResult, ...] = field(default_factory=tuple)
    duration_ms: int = 0

    @property
    def failed_steps(self) -> list[str]:
        return [r.step for r in self.results if not r.passed]

    @property
    def all_passed(self) -> bool:
        return all(r.passed for r in self.results)

    @property
    def exit_code(self) -> int:
        return 0 if self.all_passed else 1


class ResultCollector:
    """Collects suite results in the order they are recorded."""

    def __init__(self):
        self._results: list[ExecutionResult] = []

    def add(self, result: ExecutionResult) -> None:
        self._results.append(result)

    @property
    def results(self) -> list[ExecutionResult]:
        return list(self._results)

    @property
    def has_failures(self) -> bool:
        return any(not r.passed for r in self._results)

    def outcome(self, duration_ms: int = 0) -> RunOutcome:
        return RunOutcome(results=tuple(self._results), duration_ms=duration_ms)
