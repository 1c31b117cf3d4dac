"""Shared fakes for suite runner tests."""

import os
import stat
import sys
from contextlib import contextmanager
from pathlib import Path

from suite_runner.errors import SpawnError
from suite_runner.suites.schema import ExecutionResult

# Stand-in for the application executable. Appends one JSON line per run to
# $FAKE_APP_LOG and exits 1 when any argument contains $FAKE_APP_FAIL_ON.
FAKE_APP_SOURCE = '''#!__PYTHON__
import json
import os
import sys

log = os.environ.get("FAKE_APP_LOG")
if log:
    with open(log, "a", encoding="utf-8") as f:
        f.write(json.dumps({
            "argv": sys.argv[1:],
            "home": os.environ.get("ATOM_HOME"),
            "junit": os.environ.get("TEST_JUNIT_XML_PATH"),
            "inline_git": os.environ.get("ATOM_GITHUB_INLINE_GIT_EXEC"),
        }) + "\\n")

print("fake app output for " + " ".join(sys.argv[1:]))
fail_on = os.environ.get("FAKE_APP_FAIL_ON")
if fail_on and any(fail_on in arg for arg in sys.argv[1:]):
    sys.exit(1)
sys.exit(0)
'''


def write_executable(path: Path, source: str) -> Path:
    path.write_text(source.replace("__PYTHON__", sys.executable), encoding="utf-8")
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return path


def write_fake_app(path: Path) -> Path:
    return write_executable(path, FAKE_APP_SOURCE)


class FakeLauncher:
    """Records launches and returns canned exit codes."""

    def __init__(self, exit_codes=None, spawn_error_on=None, events=None):
        self.exit_codes = exit_codes or {}
        self.spawn_error_on = spawn_error_on
        self.events = events if events is not None else []
        self.calls = []

    def launch(self, suite, env):
        self.events.append(("launch", suite.name))
        self.calls.append((suite.name, dict(env)))
        if suite.name == self.spawn_error_on:
            raise SpawnError(f"Failed to start {suite.name}: not found")
        return ExecutionResult(step=suite.name, exit_code=self.exit_codes.get(suite.name, 0))


class FakeInstaller:
    """Records prepare/install/restore calls without touching the disk."""

    def __init__(self, install_code=0, events=None):
        self.install_code = install_code
        self.events = events if events is not None else []

    @contextmanager
    def prepared(self, package):
        self.events.append(("backup", package.name))
        try:
            yield
        finally:
            self.events.append(("restore", package.name))

    def install(self, package):
        self.events.append(("install", package.name))
        return self.install_code


def base_env():
    """A minimal parent environment that still lets Python start."""
    keep = ("PATH", "SYSTEMROOT", "HOME", "TMPDIR", "TEMP", "TMP")
    return {key: os.environ[key] for key in keep if key in os.environ}
