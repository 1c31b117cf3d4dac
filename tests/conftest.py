import json
from pathlib import Path

import pytest

from suite_runner.config import RunnerConfig
from suite_runner.discovery.packages import PackageContext

from tests.helpers import write_fake_app


@pytest.fixture
def repo_root(tmp_path: Path) -> Path:
    root = tmp_path / "repo"
    root.mkdir()
    return root


@pytest.fixture
def make_config(tmp_path: Path, repo_root: Path):
    """Factory for RunnerConfig pinned to a temporary repository."""

    def _make(**overrides) -> RunnerConfig:
        values = {
            "repository_root": repo_root,
            "build_output_path": tmp_path / "out",
            "platform": "linux",
            "arch": "x64",
        }
        values.update(overrides)
        return RunnerConfig(**values)

    return _make


@pytest.fixture
def fake_app(tmp_path: Path) -> Path:
    return write_fake_app(tmp_path / "fake-app")


@pytest.fixture
def make_package(repo_root: Path):
    """Create node_modules/<name> with a test folder and optional metadata."""

    def _make(name: str, test_subdir="spec", test_runner=False) -> PackageContext:
        path = repo_root / "node_modules" / name
        path.mkdir(parents=True)
        metadata = {"name": name}
        if test_runner:
            metadata["atomTestRunner"] = "./test/runner"
        (path / "package.json").write_text(json.dumps(metadata), encoding="utf-8")
        test_folder = None
        if test_subdir:
            test_folder = path / test_subdir
            test_folder.mkdir()
        return PackageContext(
            name=name,
            path=path,
            test_folder=test_folder,
            needs_dependency_install=test_runner,
        )

    return _make


@pytest.fixture
def write_app_metadata(repo_root: Path):
    def _write(*package_names: str) -> Path:
        path = repo_root / "package.json"
        path.write_text(
            json.dumps({
                "name": "atom",
                "packageDependencies": {name: "1.0.0" for name in package_names},
            }),
            encoding="utf-8",
        )
        return path

    return _write
