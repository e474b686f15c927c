"""
gh-action-upgrader

A Python tool that finds pinned actions in GitHub Actions workflows,
resolves the newest published version for each, and proposes updates
that keep the precision the workflow author chose.
"""

__version__ = "1.0.0"
