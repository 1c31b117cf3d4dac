"""Test suite orchestrator for application builds."""

__version__ = "0.1.0"
