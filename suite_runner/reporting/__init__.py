"""Reporting module - failure summary and JSON run reports."""

from .summary import RunReporter, print_failures

__all__ = ["RunReporter", "print_failures"]
