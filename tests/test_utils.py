"""Tests for utility helpers."""

import logging
import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest

from action_upgrader.utils import (
    find_workflow_files,
    get_git_remote_url,
    is_git_repository,
    parse_repository_slug,
    setup_logging,
)


class TestSetupLogging:
    """Tests for setup_logging."""

    @pytest.mark.parametrize(
        "verbosity, level",
        [(0, logging.WARNING), (1, logging.INFO), (2, logging.DEBUG), (3, logging.DEBUG)],
    )
    def test_levels(self, verbosity, level) -> None:
        setup_logging(verbosity)
        assert logging.getLogger().level == level

    def test_quiets_http_libraries(self) -> None:
        setup_logging(2)
        assert logging.getLogger("urllib3").level == logging.WARNING


class TestFindWorkflowFiles:
    """Tests for find_workflow_files."""

    def test_from_repository_root(self, tmp_path: Path) -> None:
        workflows = tmp_path / ".github" / "workflows"
        workflows.mkdir(parents=True)
        (workflows / "b.yml").write_text("jobs: {}")
        (workflows / "a.yaml").write_text("jobs: {}")
        (workflows / "notes.txt").write_text("")

        assert find_workflow_files(tmp_path) == [workflows / "a.yaml", workflows / "b.yml"]

    def test_from_workflows_directory(self, tmp_path: Path) -> None:
        workflows = tmp_path / ".github" / "workflows"
        workflows.mkdir(parents=True)
        (workflows / "ci.yml").write_text("jobs: {}")

        assert find_workflow_files(workflows) == [workflows / "ci.yml"]

    def test_nothing_found(self, tmp_path: Path) -> None:
        assert find_workflow_files(tmp_path) == []


class TestGitHelpers:
    """Tests for git helpers."""

    def test_not_a_repository(self, tmp_path: Path) -> None:
        assert not is_git_repository(tmp_path)
        assert get_git_remote_url(tmp_path) == ""

    def test_remote_url(self, tmp_path: Path) -> None:
        (tmp_path / ".git").mkdir()
        completed = subprocess.CompletedProcess([], 0, stdout="https://github.com/me/site.git\n")
        with patch("action_upgrader.utils.subprocess.run", return_value=completed):
            assert get_git_remote_url(tmp_path) == "https://github.com/me/site.git"

    def test_git_missing(self, tmp_path: Path) -> None:
        (tmp_path / ".git").mkdir()
        with patch("action_upgrader.utils.subprocess.run", side_effect=FileNotFoundError("git")):
            assert get_git_remote_url(tmp_path) == ""

    @pytest.mark.parametrize(
        "url, slug",
        [
            ("https://github.com/me/site.git", "me/site"),
            ("https://github.com/me/site", "me/site"),
            ("git@github.com:me/site.git", "me/site"),
            ("https://gitlab.com/me/site.git", None),
            ("", None),
        ],
    )
    def test_parse_repository_slug(self, url, slug) -> None:
        assert parse_repository_slug(url) == slug
