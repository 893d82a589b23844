"""Pytest configuration and fixtures for mergespace tests."""

import shutil
import subprocess
import tempfile
from pathlib import Path

import pytest

from mergespace.core.log import ConsoleSink, setup_logger


@pytest.fixture(autouse=True, scope="session")
def configure_logging():
    """Configure console-only logging at debug level for test runs."""
    test_log_root = Path(tempfile.gettempdir()) / "mergespace-tests"
    setup_logger(
        log_root=test_log_root,
        run_name="test",
        console=ConsoleSink(level="debug"),
    )


def git(workdir, *args):
    """Run git in workdir and return its stripped stdout."""
    completed = subprocess.run(
        ["git", *args],
        cwd=workdir,
        check=True,
        capture_output=True,
        text=True,
    )
    return completed.stdout.strip()


@pytest.fixture
def conflict_repo(tmp_path):
    """Repository whose history holds one conflicting merge.

    main and feature both edit the middle line of greeting.txt.
    The merge commit resolves the conflict by keeping both lines,
    ours first. notes.txt changes only on feature and merges
    cleanly.
    """
    if shutil.which("git") is None:
        pytest.skip("git not installed")

    repo = tmp_path / "demo"
    repo.mkdir()
    git(repo, "init", "-q", "-b", "main")
    git(repo, "config", "user.email", "test@example.com")
    git(repo, "config", "user.name", "Test")
    git(repo, "config", "commit.gpgsign", "false")

    (repo / "greeting.txt").write_text("hello\nworld\nbye\n")
    (repo / "notes.txt").write_text("notes\n")
    git(repo, "add", ".")
    git(repo, "commit", "-q", "-m", "base")

    git(repo, "checkout", "-q", "-b", "feature")
    (repo / "greeting.txt").write_text("hello\nthere\nbye\n")
    (repo / "notes.txt").write_text("notes\nmore\n")
    git(repo, "commit", "-q", "-am", "feature")

    git(repo, "checkout", "-q", "main")
    (repo / "greeting.txt").write_text("hello\neveryone\nbye\n")
    git(repo, "commit", "-q", "-am", "main")

    subprocess.run(
        ["git", "merge", "-q", "feature"],
        cwd=repo,
        capture_output=True,
    )
    (repo / "greeting.txt").write_text("hello\neveryone\nthere\nbye\n")
    git(repo, "add", "greeting.txt")
    git(repo, "commit", "-q", "--no-edit")

    return repo


@pytest.fixture
def no_eol_repo(tmp_path):
    """Repository with a conflicting merge of files lacking a final newline.

    Both sides edit the last line of tail.txt, and the merge commit
    keeps ours unchanged, still without a newline at the end.
    """
    if shutil.which("git") is None:
        pytest.skip("git not installed")

    repo = tmp_path / "no-eol"
    repo.mkdir()
    git(repo, "init", "-q", "-b", "main")
    git(repo, "config", "user.email", "test@example.com")
    git(repo, "config", "user.name", "Test")
    git(repo, "config", "commit.gpgsign", "false")

    (repo / "tail.txt").write_text("a\nbase")
    git(repo, "add", ".")
    git(repo, "commit", "-q", "-m", "base")

    git(repo, "checkout", "-q", "-b", "feature")
    (repo / "tail.txt").write_text("a\ntheirs")
    git(repo, "commit", "-q", "-am", "feature")

    git(repo, "checkout", "-q", "main")
    (repo / "tail.txt").write_text("a\nours")
    git(repo, "commit", "-q", "-am", "main")

    subprocess.run(
        ["git", "merge", "-q", "feature"],
        cwd=repo,
        capture_output=True,
    )
    (repo / "tail.txt").write_text("a\nours")
    git(repo, "add", "tail.txt")
    git(repo, "commit", "-q", "--no-edit")

    return repo
