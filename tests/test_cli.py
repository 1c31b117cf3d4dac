"""Tests for the command line interface."""

import functools
import json

import pytest
from click.testing import CliRunner

from suite_runner import cli as cli_mod
from suite_runner.cli import main
from suite_runner.config import load_config


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def app_log(tmp_path):
    return tmp_path / "app.log"


@pytest.fixture
def invoke(runner, repo_root, fake_app, app_log):
    """Invoke the CLI against the temporary repository and fake app."""

    def _invoke(*args, env=None, executable=True):
        argv = ["--resource-path", str(repo_root)]
        if executable:
            argv += ["--executable", str(fake_app)]
        full_env = {
            "FAKE_APP_LOG": str(app_log),
            "ATOM_PACKAGES_TO_TEST": None,
            "ATOM_RUN_CORE_TESTS": None,
            "ATOM_RUN_PACKAGE_TESTS": None,
            "TEST_JUNIT_XML_ROOT": None,
            "SUITE_RUNNER_CONFIG": None,
            "CI": None,
        }
        full_env.update(env or {})
        return runner.invoke(main, [*argv, *args], env=full_env)

    return _invoke


@pytest.fixture
def on_platform(monkeypatch):
    def _pin(platform, arch="x64"):
        monkeypatch.setattr(
            cli_mod,
            "load_config",
            functools.partial(load_config, platform=platform, arch=arch),
        )

    return _pin


def _ran(app_log):
    if not app_log.exists():
        return []
    return [json.loads(line)["argv"] for line in app_log.read_text().splitlines()]


def test_core_main_and_skip_main_conflict(invoke, app_log):
    result = invoke("--core-main", "--skip-main")

    assert result.exit_code == 2
    assert "mutually exclusive" in result.output
    assert _ran(app_log) == []


def test_default_linux_run_passes(invoke, on_platform, app_log):
    on_platform("linux")

    result = invoke()

    assert result.exit_code == 0, result.output
    runs = _ran(app_log)
    assert len(runs) == 1
    assert "--main-process" in runs[0]


def test_failing_suite_exits_one_with_summary(invoke, on_platform):
    on_platform("linux")

    result = invoke(env={"FAKE_APP_FAIL_ON": "--main-process"})

    assert result.exit_code == 1
    assert "Error! The 'core-main-process' test step finished with a non-zero exit code" in result.output


def test_packages_respect_allow_list(invoke, on_platform, make_package, write_app_metadata, app_log):
    on_platform("linux")
    write_app_metadata("tabs", "github")
    make_package("tabs")
    make_package("github")

    result = invoke("--core-renderer", "--package", env={"ATOM_PACKAGES_TO_TEST": "github"})

    assert result.exit_code == 0, result.output
    runs = _ran(app_log)
    assert len(runs) == 2
    assert runs[0][-1].endswith("spec")
    assert runs[1][-1].endswith("github/spec") or runs[1][-1].endswith("github\\spec")


def test_darwin_shard_two(invoke, on_platform, make_package, write_app_metadata, app_log):
    on_platform("darwin")
    names = [f"pkg{i:02d}" for i in range(25)]
    write_app_metadata(*names)
    for name in names:
        make_package(name)

    result = invoke(env={"ATOM_RUN_PACKAGE_TESTS": "2"})

    assert result.exit_code == 0, result.output
    assert [run[-1].split("node_modules")[1][1:6] for run in _ran(app_log)] == ["pkg23", "pkg24"]


def test_skip_main_on_linux_selects_nothing(invoke, on_platform, app_log):
    on_platform("linux")

    result = invoke("--skip-main")

    assert result.exit_code == 0
    assert "No test suites selected" in result.output
    assert _ran(app_log) == []


def test_unsupported_platform_is_fatal(invoke, on_platform):
    on_platform("sunos")

    result = invoke()

    assert result.exit_code == 1
    assert "UnsupportedPlatformError: Unrecognized platform: sunos" in result.output


def test_executable_discovery_failure_is_fatal(invoke, on_platform):
    on_platform("linux")

    result = invoke(executable=False)

    assert result.exit_code == 1
    assert "ExecutableNotFoundError" in result.output


def test_spawn_failure_is_fatal(runner, repo_root, tmp_path, on_platform):
    on_platform("win32")

    result = runner.invoke(main, [
        "--resource-path", str(repo_root),
        "--executable", str(tmp_path / "missing-app"),
    ])

    assert result.exit_code == 1
    assert "SpawnError: Failed to start core-main-process" in result.output
    assert "core-render-process" not in result.output


def test_report_is_written(invoke, on_platform, tmp_path):
    on_platform("linux")
    report_path = tmp_path / "reports" / "run.json"

    result = invoke("--core-benchmark", "--report", str(report_path))

    assert result.exit_code == 0, result.output
    report = json.loads(report_path.read_text())
    assert report["status"] == "passed"
    assert report["suites"] == [
        {"step": "core-benchmarks", "category": "benchmark", "exit_code": 0, "status": "pass"}
    ]
