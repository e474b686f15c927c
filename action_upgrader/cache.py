"""
On-disk cache of the version names published by each action
"""

import json
import logging
from datetime import datetime, timedelta
from pathlib import Path
from typing import List, Optional

CACHE_FILE = Path.home() / ".gh_action_upgrader_cache.json"
CACHE_EXPIRY_HOURS = 1


class CandidateCache:
    """Cache of release/tag names per ``owner/repo``, with expiry."""

    def __init__(self, path: Path = CACHE_FILE, expiry_hours: float = CACHE_EXPIRY_HOURS):
        self.path = Path(path)
        self.expiry = timedelta(hours=expiry_hours)
        self.logger = logging.getLogger(__name__)

    def load(self) -> dict:
        """Load the cache from disk."""
        if self.path.exists():
            try:
                with open(self.path, 'r') as f:
                    data = json.load(f)
                return data if isinstance(data, dict) else {}
            except (json.JSONDecodeError, IOError) as e:
                self.logger.debug(f"Ignoring unreadable cache {self.path}: {e}")
                return {}
        return {}

    def save(self, cache: dict) -> None:
        """Save the cache to disk."""
        try:
            with open(self.path, 'w') as f:
                json.dump(cache, f, indent=2)
        except IOError as e:
            self.logger.warning(f"Cannot write cache {self.path}: {e}")

    def get(self, owner: str, repo: str) -> Optional[List[str]]:
        """Get cached names if present and not expired."""
        entry = self.load().get(f"{owner}/{repo}")
        if not isinstance(entry, dict):
            return None

        try:
            cached_time = datetime.fromisoformat(entry.get('timestamp', '2000-01-01'))
        except (TypeError, ValueError):
            return None

        if datetime.now() - cached_time < self.expiry:
            names = entry.get('names')
            if isinstance(names, list):
                self.logger.debug(f"{owner}/{repo}: cache hit ({len(names)} versions)")
                return names

        return None

    def set(self, owner: str, repo: str, names: List[str]) -> None:
        """Save names for an action."""
        cache = self.load()
        cache[f"{owner}/{repo}"] = {
            'names': list(names),
            'timestamp': datetime.now().isoformat()
        }
        self.save(cache)
