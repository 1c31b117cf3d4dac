"""Run summary and JSON report generation."""

import json
import platform
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Sequence

import click

from ..suites.schema import SuiteDefinition
from ..runner.result_collector import RunOutcome


def print_failures(outcome: RunOutcome) -> None:
    """Print one line per failed step to stderr."""
    for step in outcome.failed_steps:
        click.secho(
            f"Error! The '{step}' test step finished with a non-zero exit code",
            fg="red",
            err=True,
        )


class RunReporter:
    """Generates JSON reports from a finished run."""

    def generate(
        self,
        plan: Sequence[SuiteDefinition],
        outcome: RunOutcome,
    ) -> dict[str, Any]:
        """Generate a JSON report.

        Args:
            plan: The suites that were selected.
            outcome: Results of running them.

        Returns:
            Report dictionary ready for JSON serialization.
        """
        results = {r.step: r.exit_code for r in outcome.results}

        return {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "host": platform.node(),
            "status": "passed" if outcome.all_passed else "failed",
            "summary": {
                "selected": len(plan),
                "total": len(outcome.results),
                "passed": len(outcome.results) - len(outcome.failed_steps),
                "failed": len(outcome.failed_steps),
                "duration_ms": outcome.duration_ms,
            },
            "suites": [
                {
                    "step": suite.name,
                    "category": suite.category.value,
                    "exit_code": results.get(suite.name),
                    "status": _status(results.get(suite.name)),
                }
                for suite in plan
            ],
            "failed_steps": outcome.failed_steps,
        }

    def save(self, report: dict[str, Any], path: Path) -> Path:
        """Save report to a JSON file.

        Returns:
            Path to the saved file.
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w", encoding="utf-8") as f:
            json.dump(report, f, indent=2, ensure_ascii=False)

        return path


def _status(exit_code) -> str:
    if exit_code is None:
        return "not-run"
    return "pass" if exit_code == 0 else "fail"
