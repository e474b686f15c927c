"""
GitHub Actions workflow parser module
"""

import re
import yaml
from pathlib import Path
from typing import List, Optional
import logging

from .models import Location, ScannedAction

# owner/repo[/path]@ref
USES_PATTERN = re.compile(r'^([^/@\s]+)/([^/@\s]+)(?:/([^@\s]+))?@([^@\s]+)$')


def parse_uses(uses: str, location: Location) -> Optional[ScannedAction]:
    """Parse a step's ``uses`` value; local and Docker actions yield None."""
    if uses.startswith('./') or uses.startswith('docker://'):
        return None

    match = USES_PATTERN.match(uses.strip())
    if not match:
        return None

    owner, repo, path, ref = match.groups()
    return ScannedAction(
        owner=owner,
        repo=repo,
        raw_version=ref,
        location=location,
        path=path or "",
    )


def _mapping_get(node: yaml.Node, key: str) -> Optional[yaml.Node]:
    if not isinstance(node, yaml.MappingNode):
        return None
    for key_node, value_node in node.value:
        if isinstance(key_node, yaml.ScalarNode) and key_node.value == key:
            return value_node
    return None


class WorkflowParser:
    """Parser for GitHub Actions workflow files."""

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    def scan(self, workflow_path: Path) -> List[ScannedAction]:
        """Find every action a workflow file's steps use, with its line number."""
        try:
            with open(workflow_path, 'r', encoding='utf-8') as f:
                # compose keeps the node marks that safe_load throws away
                root = yaml.compose(f, Loader=yaml.SafeLoader)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in workflow file {workflow_path}: {e}")

        if root is None:
            self.logger.debug(f"Empty workflow file: {workflow_path}")
            return []

        actions = self._extract_actions(root, workflow_path)
        self.logger.debug(f"Found {len(actions)} actions in {workflow_path}")
        return actions

    def _extract_actions(self, root: yaml.Node, workflow_path: Path) -> List[ScannedAction]:
        """Extract all action references from the composed workflow."""
        actions = []
        seen = set()

        jobs = _mapping_get(root, 'jobs')
        if not isinstance(jobs, yaml.MappingNode):
            return actions

        for job_key, job in jobs.value:
            steps = _mapping_get(job, 'steps')
            if not isinstance(steps, yaml.SequenceNode):
                continue

            self.logger.debug(f"Processing job: {job_key.value}")
            for step in steps.value:
                uses = _mapping_get(step, 'uses')
                if not isinstance(uses, yaml.ScalarNode):
                    continue

                location = Location(workflow_path, uses.start_mark.line + 1)
                action = parse_uses(uses.value, location)
                # aliased steps (steps: *common) hand back the same node
                if action and action not in seen:
                    seen.add(action)
                    actions.append(action)
                    self.logger.debug(f"Found action: {action} at {location}")

        return actions
