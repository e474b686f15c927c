"""
GitHub API integration module
"""

import base64
import requests
import time
import logging
import os
from typing import List, Optional
from urllib.parse import urljoin

DEFAULT_BASE_URL = "https://api.github.com"
REQUEST_TIMEOUT = 10
PER_PAGE = 100
MAX_PAGES = 10


class GitHubAPI:
    """GitHub API client for listing action versions and opening pull requests."""

    def __init__(self, token: Optional[str] = None, base_url: Optional[str] = None):
        self.token = token or os.getenv("GITHUB_TOKEN")
        self.base_url = (base_url or os.getenv("GITHUB_API_URL") or DEFAULT_BASE_URL).rstrip('/') + '/'
        self.session = requests.Session()
        self.logger = logging.getLogger(__name__)

        self.session.headers.update({"Accept": "application/vnd.github+json"})

        # Set up authentication
        if self.token:
            self.session.headers.update({"Authorization": f"token {self.token}"})
        else:
            self.logger.warning("No GitHub token provided. API rate limits will be lower.")

        # Rate limiting
        self.rate_limit_remaining = None
        self.rate_limit_reset = None

    def _make_request(self, endpoint: str, method: str = "GET", **kwargs) -> requests.Response:
        """Make a request to the GitHub API with rate limiting."""
        url = urljoin(self.base_url, endpoint.lstrip('/'))
        kwargs.setdefault("timeout", REQUEST_TIMEOUT)

        # Check rate limit
        self._check_rate_limit()

        try:
            response = self.session.request(method, url, **kwargs)

            # Update rate limit info
            if 'X-RateLimit-Remaining' in response.headers:
                self.rate_limit_remaining = int(response.headers['X-RateLimit-Remaining'])
                self.rate_limit_reset = int(response.headers.get('X-RateLimit-Reset', 0))

            response.raise_for_status()
            return response

        except requests.exceptions.RequestException as e:
            self.logger.error(f"GitHub API request failed: {e}")
            raise

    def _check_rate_limit(self) -> None:
        """Check and handle rate limiting."""
        if self.rate_limit_remaining is not None and self.rate_limit_remaining < 10:
            if self.rate_limit_reset:
                wait_time = max(0, self.rate_limit_reset - int(time.time()) + 1)
                if wait_time > 0:
                    self.logger.warning(f"Rate limit approaching. Waiting {wait_time} seconds...")
                    time.sleep(wait_time)

    def _get_paginated(self, endpoint: str) -> list:
        """Collect a list endpoint across pages by following the Link header."""
        response = self._make_request(endpoint, params={"per_page": PER_PAGE})
        items = list(response.json())
        pages = 1

        while "next" in response.links:
            if pages >= MAX_PAGES:
                self.logger.warning(f"Stopped after {pages} pages of {endpoint}")
                break
            response = self._make_request(response.links["next"]["url"])
            items.extend(response.json())
            pages += 1

        return items

    def list_releases(self, owner: str, repo: str) -> List[str]:
        """Get the tag names of a repository's releases."""
        releases = self._get_paginated(f"/repos/{owner}/{repo}/releases")
        return [release['tag_name'] for release in releases if release.get('tag_name')]

    def list_tags(self, owner: str, repo: str) -> List[str]:
        """Get a repository's git tag names."""
        tags = self._get_paginated(f"/repos/{owner}/{repo}/tags")
        return [tag['name'] for tag in tags if tag.get('name')]

    def get_candidate_names(self, owner: str, repo: str) -> List[str]:
        """Get release tag names, or plain tag names when the repository has no releases."""
        self.logger.debug(f"Fetching releases for {owner}/{repo}")
        names = self.list_releases(owner, repo)
        if names:
            return names

        self.logger.debug(f"No releases found for {owner}/{repo}, checking tags...")
        return self.list_tags(owner, repo)

    def get_default_branch(self, owner: str, repo: str) -> str:
        """Get the name of a repository's default branch."""
        response = self._make_request(f"/repos/{owner}/{repo}")
        return response.json()['default_branch']

    def get_branch_sha(self, owner: str, repo: str, branch: str) -> str:
        """Get the commit SHA a branch points at."""
        response = self._make_request(f"/repos/{owner}/{repo}/git/ref/heads/{branch}")
        return response.json()['object']['sha']

    def create_branch(self, owner: str, repo: str, branch: str, sha: str) -> None:
        """Create a branch pointing at ``sha``."""
        self._make_request(
            f"/repos/{owner}/{repo}/git/refs",
            method="POST",
            json={"ref": f"refs/heads/{branch}", "sha": sha}
        )
        self.logger.debug(f"Created branch {branch} at {sha[:12]}")

    def get_file(self, owner: str, repo: str, path: str, ref: str) -> dict:
        """Get a file's decoded ``content`` and blob ``sha`` at ``ref``."""
        response = self._make_request(f"/repos/{owner}/{repo}/contents/{path}", params={"ref": ref})
        data = response.json()
        return {
            "sha": data['sha'],
            "content": base64.b64decode(data.get('content', '')).decode('utf-8'),
        }

    def update_file(self, owner: str, repo: str, path: str, content: str,
                    message: str, branch: str, sha: str) -> None:
        """Commit new content for a file on ``branch``."""
        self._make_request(
            f"/repos/{owner}/{repo}/contents/{path}",
            method="PUT",
            json={
                "message": message,
                "content": base64.b64encode(content.encode('utf-8')).decode('ascii'),
                "branch": branch,
                "sha": sha,
            }
        )

    def create_pull_request(self, owner: str, repo: str, title: str, head: str,
                            base: str, body: str) -> str:
        """Open a pull request and return its URL."""
        response = self._make_request(
            f"/repos/{owner}/{repo}/pulls",
            method="POST",
            json={"title": title, "head": head, "base": base, "body": body}
        )
        return response.json().get('html_url', '')
