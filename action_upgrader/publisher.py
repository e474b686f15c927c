"""
Publishers apply a resolved update to the workflow file that pins it
"""

import logging
import os
import re
import time
from pathlib import Path
from typing import Optional

from .github_api import GitHubAPI
from .models import ActionReference

BRANCH_PREFIX = "gh-action-upgrader"


def rewrite_reference(content: str, reference: ActionReference, old: str, new: str) -> str:
    """Replace ``name@old`` with ``name@new`` on the reference's line."""
    lines = content.splitlines(keepends=True)
    index = reference.location.line - 1
    if not 0 <= index < len(lines):
        raise RuntimeError(f"{reference.location} is outside the file")

    # whole token only: @v3 must not match inside @v3.1
    pattern = re.compile(r'(?<![\w./-])' + re.escape(f"{reference.name}@{old}") + r'(?![\w.-])')
    replacement = f"{reference.name}@{new}"
    updated, count = pattern.subn(lambda _: replacement, lines[index], count=1)
    if count == 0:
        raise RuntimeError(f"{reference.name}@{old} not found at {reference.location}")

    lines[index] = updated
    return ''.join(lines)


class LocalPublisher:
    """Rewrites workflow files in place."""

    def __init__(self, dry_run: bool = False):
        self.dry_run = dry_run
        self.logger = logging.getLogger(__name__)

    def publish(self, reference: ActionReference, old: str, new: str) -> Optional[str]:
        """Update the pinned version in the local file."""
        file_path = reference.location.file_path
        if self.dry_run:
            self.logger.info(f"Would update {reference.name}@{old} -> {new} in {reference.location}")
            return None

        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                content = f.read()
            updated = rewrite_reference(content, reference, old, new)
            with open(file_path, 'w', encoding='utf-8') as f:
                f.write(updated)
        except (IOError, UnicodeDecodeError) as e:
            raise RuntimeError(f"Failed to update workflow file {file_path}: {e}")

        self.logger.info(f"Updated {reference.name}@{old} -> {new} in {reference.location}")
        return str(file_path)


class PullRequestPublisher:
    """Opens one pull request per update through the GitHub API."""

    def __init__(self, api: GitHubAPI, repository: str, base_branch: str = "main",
                 dry_run: bool = False, root: Optional[Path] = None):
        owner, _, repo = repository.partition('/')
        if not owner or not repo:
            raise ValueError(f"Repository must be in owner/repo form: {repository!r}")

        self.api = api
        self.owner = owner
        self.repo = repo
        self.base_branch = base_branch
        self.dry_run = dry_run
        self.root = root or Path.cwd()
        self.logger = logging.getLogger(__name__)

    def _repo_path(self, reference: ActionReference) -> str:
        path = Path(reference.location.file_path)
        if path.is_absolute():
            path = Path(os.path.relpath(path, self.root))
        return path.as_posix()

    def branch_name(self, reference: ActionReference, new: str) -> str:
        timestamp = int(time.time() * 1000)
        return f"{BRANCH_PREFIX}/{reference.owner}-{reference.repo}-{new}-{timestamp}"

    def publish(self, reference: ActionReference, old: str, new: str) -> Optional[str]:
        """Create a branch with the edited file and open a pull request for it."""
        title = f"Update {reference.slug} to {new}"
        body = f"Updates {reference.slug} from {old} to {new}."
        path = self._repo_path(reference)
        branch = self.branch_name(reference, new)

        if self.dry_run:
            self.logger.info(f"Would open pull request '{title}' from {branch} for {path}")
            return None

        self.logger.info(f"Creating pull request to update {reference.slug} to {new}")
        try:
            current = self.api.get_file(self.owner, self.repo, path, self.base_branch)
            updated = rewrite_reference(current['content'], reference, old, new)
            sha = self.api.get_branch_sha(self.owner, self.repo, self.base_branch)

            self.api.create_branch(self.owner, self.repo, branch, sha)
            self.api.update_file(self.owner, self.repo, path, updated, title, branch, current['sha'])
            url = self.api.create_pull_request(self.owner, self.repo, title, branch, self.base_branch, body)
        except (KeyError, TypeError, AttributeError, ValueError) as e:
            # undecodable content or an unexpected response shape
            raise RuntimeError(f"Unexpected GitHub response while updating {path}: {e!r}")

        self.logger.info(f"Pull request created: {url}")
        return url
