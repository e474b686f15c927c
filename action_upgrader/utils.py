"""
Utility functions for gh-action-upgrader
"""

import logging
import re
import subprocess
import sys
from pathlib import Path
from typing import List, Optional


def setup_logging(verbosity: int) -> None:
    """Set up logging based on verbosity level."""
    if verbosity == 0:
        level = logging.WARNING
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG

    # Configure logging format
    log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    if verbosity >= 2:
        log_format = "%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s"

    logging.basicConfig(
        level=level,
        format=log_format,
        handlers=[
            logging.StreamHandler(sys.stderr)
        ],
        force=True
    )

    # Reduce noise from external libraries
    if verbosity < 3:
        logging.getLogger("urllib3").setLevel(logging.WARNING)
        logging.getLogger("requests").setLevel(logging.WARNING)


def find_workflow_files(directory: Path) -> List[Path]:
    """Find all GitHub Actions workflow files in a directory."""
    workflow_files = []

    # Common workflow file patterns
    patterns = [
        "**/.github/workflows/*.yml",
        "**/.github/workflows/*.yaml",
        "**/workflows/*.yml",
        "**/workflows/*.yaml"
    ]

    for pattern in patterns:
        workflow_files.extend(directory.glob(pattern))

    # Also check if the directory itself contains workflow files
    if directory.name in ["workflows", ".github"]:
        for ext in ["yml", "yaml"]:
            workflow_files.extend(directory.glob(f"*.{ext}"))

    # Remove duplicates and sort
    unique_files = list(set(path for path in workflow_files if path.is_file()))
    unique_files.sort()

    return unique_files


def is_git_repository(directory: Path) -> bool:
    """Check if the directory is a Git repository."""
    git_dir = directory / ".git"
    return git_dir.exists() and (git_dir.is_dir() or git_dir.is_file())


def get_git_remote_url(directory: Path) -> str:
    """Get the Git remote URL for the repository."""
    if not is_git_repository(directory):
        return ""

    try:
        result = subprocess.run(
            ["git", "-C", str(directory), "remote", "get-url", "origin"],
            capture_output=True,
            text=True,
            timeout=10
        )
        if result.returncode == 0:
            return result.stdout.strip()
    except (OSError, subprocess.SubprocessError) as e:
        logging.getLogger(__name__).debug(f"Cannot read origin remote: {e}")

    return ""


def parse_repository_slug(remote_url: str) -> Optional[str]:
    """Extract ``owner/repo`` from a GitHub remote URL (https or ssh)."""
    match = re.search(r'github\.com[:/]([^/\s]+)/([^/\s]+?)(?:\.git)?/?$', remote_url.strip())
    if match:
        return f"{match.group(1)}/{match.group(2)}"
    return None
