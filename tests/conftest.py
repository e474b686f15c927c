"""Shared fixtures for gh-action-upgrader tests."""

import textwrap
from pathlib import Path
from typing import Callable

import pytest


WORKFLOW = """\
name: CI
on: [push]
jobs:
  build:
    runs-on: ubuntu-latest
    steps:
      - uses: actions/checkout@v3
      - name: Setup
        uses: actions/setup-node@v3.1
      - uses: github/codeql-action/init@v2.1.0  # keep
      - uses: ./local-action
      - uses: docker://alpine:3.18
      - uses: actions/cache@main
      - run: echo hello
  lint:
    uses: octo/reusable/.github/workflows/lint.yml@v1
"""


@pytest.fixture
def write_workflow(tmp_path: Path) -> Callable[..., Path]:
    """Write a workflow file under tmp_path/.github/workflows and return its path."""

    def _write(content: str = WORKFLOW, name: str = "ci.yml") -> Path:
        workflows = tmp_path / ".github" / "workflows"
        workflows.mkdir(parents=True, exist_ok=True)
        path = workflows / name
        path.write_text(textwrap.dedent(content), encoding="utf-8")
        return path

    return _write
