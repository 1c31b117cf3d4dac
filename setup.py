"""Setup configuration for suite-runner tool."""

from setuptools import setup, find_packages

setup(
    name="suite-runner",
    version="0.1.0",
    description="Selects, isolates and runs application test suites",
    packages=find_packages(include=["suite_runner", "suite_runner.*"]),
    python_requires=">=3.10",
    install_requires=[
        "pyyaml>=6.0",
        "click>=8.1.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "suite-runner=suite_runner.cli:main",
        ],
    },
)
