"""Installer module - package test runner dependencies."""

from .dependency_manager import DependencyManager

__all__ = ["DependencyManager"]
