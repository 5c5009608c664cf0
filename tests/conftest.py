"""Shared test fixtures for git-author-stats."""

import datetime as dt
import os
import shutil
import subprocess
import threading
import time
from collections import Counter

import pytest

from git_author_stats.exceptions import AttributionError
from git_author_stats.vcs import VersionControl


def pytest_addoption(parser):
    """Add --run-slow option for slow tests."""
    parser.addoption(
        "--run-slow",
        action="store_true",
        default=False,
        help="run slow tests",
    )


def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line("markers", "slow: mark test as slow to run")
    config.addinivalue_line("markers", "git: test needs a git executable")


def pytest_collection_modifyitems(config, items):
    """Skip slow tests unless --run-slow is given, and git tests without git."""
    skip_slow = pytest.mark.skip(reason="need --run-slow option to run")
    skip_git = pytest.mark.skip(reason="git not found")
    has_git = shutil.which("git") is not None
    for item in items:
        if "slow" in item.keywords and not config.getoption("--run-slow"):
            item.add_marker(skip_slow)
        if "git" in item.keywords and not has_git:
            item.add_marker(skip_git)


class FakeRepository(VersionControl):
    """In-memory repository.

    ``history`` is a list of ``(commit_time, sha, files)`` where ``files`` maps
    a path to a ``Counter`` of raw author -> lines, or to an exception that
    ``blame_authors`` raises for it.
    """

    def __init__(self, history, branches=("main",), delays=None):
        self.history = sorted(history, key=lambda c: c[0])
        self.branches = set(branches)
        self.delays = delays or {}
        self.blame_calls = []
        self.resolve_calls = []
        self._lock = threading.Lock()

    def resolve_snapshot(self, branch=None, at_or_before=None):
        self.resolve_calls.append((branch, at_or_before))
        if branch is not None and branch not in self.branches:
            return None
        found = None
        for when, sha, _ in self.history:
            if at_or_before is None or when <= at_or_before:
                found = sha
        return found

    def list_files(self, snapshot):
        return list(self._tree(snapshot))

    def blame_authors(self, snapshot, path):
        delay = self.delays.get(path)
        if delay:
            time.sleep(delay)
        with self._lock:
            self.blame_calls.append((snapshot, path))
        value = self._tree(snapshot)[path]
        if isinstance(value, Exception):
            raise value
        return Counter(value)

    def _tree(self, snapshot):
        for _, sha, files in self.history:
            if sha == snapshot:
                return files
        raise KeyError(snapshot)


@pytest.fixture
def fake_repo():
    """Factory for FakeRepository instances."""
    return FakeRepository


@pytest.fixture
def blame_failure():
    """Factory for a per-file blame failure."""

    def _make(path, snapshot="deadbeef", reason="fatal: no such path"):
        return AttributionError(path, snapshot, reason)

    return _make


class GitRepoBuilder:
    """Create commits with fixed dates and authors in a scratch repository."""

    def __init__(self, root):
        self.root = root
        self._git("init", "-q", "-b", "main")
        self._git("config", "user.email", "test@test.com")
        self._git("config", "user.name", "Test")
        self._git("config", "commit.gpgsign", "false")

    def write(self, rel_path, lines):
        target = self.root / rel_path
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text("".join(f"{line}\n" for line in lines))

    def commit(self, author, when, message="change"):
        stamp = when.strftime("%Y-%m-%dT%H:%M:%S")
        env = dict(
            os.environ,
            GIT_AUTHOR_NAME=author,
            GIT_AUTHOR_EMAIL=f"{author.lower()}@example.com",
            GIT_AUTHOR_DATE=stamp,
            GIT_COMMITTER_NAME=author,
            GIT_COMMITTER_EMAIL=f"{author.lower()}@example.com",
            GIT_COMMITTER_DATE=stamp,
        )
        self._git("add", "-A", env=env)
        self._git("commit", "-q", "-m", message, env=env)
        return self._git("rev-parse", "HEAD").strip()

    def _git(self, *args, env=None):
        result = subprocess.run(
            ["git", "-C", str(self.root), *args],
            capture_output=True,
            text=True,
            env=env,
            check=True,
        )
        return result.stdout


@pytest.fixture
def git_repo(tmp_path):
    """Empty git repository with a helper for dated commits."""
    root = tmp_path / "repo"
    root.mkdir()
    return GitRepoBuilder(root)


@pytest.fixture
def two_period_repo(git_repo):
    """X writes file1 (8 lines) in Jan 2016; Y adds file2 (3 lines) in Feb 2016."""
    git_repo.write("file1.txt", [f"x line {i}" for i in range(8)])
    git_repo.commit("X", dt.datetime(2016, 1, 10, 12, 0, 0), "add file1")
    git_repo.write("file2.txt", [f"y line {i}" for i in range(3)])
    git_repo.commit("Y", dt.datetime(2016, 2, 10, 12, 0, 0), "add file2")
    return git_repo
