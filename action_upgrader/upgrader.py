"""
Update pipeline: scan workflows, resolve each pinned action, publish upgrades
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional

import requests

from .cache import CandidateCache
from .models import ActionReference, MalformedVersion, ScannedAction, UpdateTo
from .resolver import is_newer, resolve
from .versioning import CandidateCatalog
from .workflow_parser import WorkflowParser


class ActionUpgrader:
    """Resolves and applies updates for every action pinned in a set of workflows."""

    def __init__(self, fetcher, publisher, cache: Optional[CandidateCache] = None,
                 parser: Optional[WorkflowParser] = None):
        self.fetcher = fetcher
        self.publisher = publisher
        self.cache = cache
        self.parser = parser or WorkflowParser()
        self.logger = logging.getLogger(__name__)
        self._names: Dict[str, List[str]] = {}

    def candidate_names(self, owner: str, repo: str) -> List[str]:
        """Get the published version names for an action, fetching at most once per run."""
        key = f"{owner}/{repo}"
        if key in self._names:
            return self._names[key]

        names = self.cache.get(owner, repo) if self.cache else None
        if names is None:
            names = self.fetcher.get_candidate_names(owner, repo)
            if self.cache:
                self.cache.set(owner, repo, names)

        self._names[key] = names
        return names

    def check(self, reference: ActionReference) -> Optional[str]:
        """Get the replacement text for a reference, or None when it is up to date."""
        catalog = CandidateCatalog.from_names(self.candidate_names(reference.owner, reference.repo))
        if not catalog:
            raise LookupError(f"No version tags found for {reference.slug}")

        self.logger.debug(f"{reference.slug}: candidates {catalog}")
        result = resolve(reference.current_version, catalog)
        if not isinstance(result, UpdateTo):
            return None

        new = result.render("v" if reference.has_prefix else "")
        if not is_newer(reference.current_version, result.rendered_spec):
            self.logger.warning(f"Rejected {reference.slug} update {reference.raw_version} -> {new}: not newer")
            return None

        return new

    def run(self, workflow_files: List[Path]) -> dict:
        """Process workflow files and return results."""
        results = {
            "processed_files": [],
            "updates": [],
            "up_to_date": [],
            "skipped": [],
            "errors": []
        }

        for workflow_file in workflow_files:
            self.logger.info(f"Processing workflow file: {workflow_file}")

            try:
                scanned = self.parser.scan(workflow_file)
            except (ValueError, IOError) as e:
                self.logger.error(f"Failed to process {workflow_file}: {e}")
                results["errors"].append({"file": str(workflow_file), "error": str(e)})
                continue

            for action in scanned:
                self._process_action(action, results)

            results["processed_files"].append({"file": str(workflow_file), "actions": len(scanned)})

        return results

    def _process_action(self, action: ScannedAction, results: dict) -> None:
        entry = {
            "file": str(action.location.file_path),
            "line": action.location.line,
            "action": action.name,
            "current": action.raw_version,
        }

        try:
            reference = action.to_reference()
        except MalformedVersion:
            self.logger.info(f"Skipping {action}: not a version tag")
            results["skipped"].append(dict(entry, reason="not a version tag"))
            return

        try:
            new = self.check(reference)
        except LookupError as e:
            self.logger.warning(str(e))
            results["skipped"].append(dict(entry, reason=str(e)))
            return
        except requests.exceptions.RequestException as e:
            self.logger.error(f"Failed to get versions for {reference.slug}: {e}")
            results["errors"].append(dict(entry, error=str(e)))
            return

        if new is None:
            self.logger.info(f"{reference.slug} is up to date")
            results["up_to_date"].append(entry)
            return

        self.logger.info(f"Update available for {reference.slug}: {reference.raw_version} -> {new}")
        try:
            published = self.publisher.publish(reference, reference.raw_version, new)
        except (RuntimeError, requests.exceptions.RequestException) as e:
            self.logger.error(f"Failed to update {reference.slug}: {e}")
            results["errors"].append(dict(entry, error=str(e)))
            return

        results["updates"].append(dict(entry, latest=new, published=published))
