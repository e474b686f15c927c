import argparse
import json
import logging
import os
from pathlib import Path
from typing import List, Optional

from .cache import CACHE_FILE, CandidateCache
from .github_api import GitHubAPI
from .publisher import LocalPublisher, PullRequestPublisher
from .upgrader import ActionUpgrader
from .utils import setup_logging, find_workflow_files, get_git_remote_url, parse_repository_slug


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser."""
    parser = argparse.ArgumentParser(
        prog="gh-action-upgrader",
        description="Update pinned GitHub Actions to their newest major version",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s --workflow-dir .github/workflows
  %(prog)s --workflow-file workflow.yml --dry-run -v
  %(prog)s --workflow-dir .github/workflows --create-pr --repository owner/repo
        """
    )

    # Input options
    input_group = parser.add_mutually_exclusive_group(required=True)
    input_group.add_argument(
        "--workflow-file", "-f",
        type=Path,
        help="Path to a specific workflow file"
    )
    input_group.add_argument(
        "--workflow-dir", "-d",
        type=Path,
        help="Directory containing workflow files (searches recursively)"
    )

    # Publishing options
    parser.add_argument(
        "--create-pr",
        action="store_true",
        help="Open a pull request per update instead of editing files in place"
    )
    parser.add_argument(
        "--repository",
        help="Repository to open pull requests against, as owner/repo "
             "(default: GITHUB_REPOSITORY or the origin remote)"
    )
    parser.add_argument(
        "--base-branch",
        default="main",
        help="Branch pull requests target (default: main)"
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be done without making changes"
    )

    # Cache options
    cache_group = parser.add_mutually_exclusive_group()
    cache_group.add_argument(
        "--cache-file",
        type=Path,
        default=CACHE_FILE,
        help=f"Version cache file (default: {CACHE_FILE})"
    )
    cache_group.add_argument(
        "--no-cache",
        action="store_true",
        help="Always fetch versions from GitHub"
    )

    # Output options
    parser.add_argument(
        "--output", "-o",
        type=Path,
        help="Output file for the update report (JSON format)"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="count",
        default=0,
        help="Increase verbosity (use -v, -vv, or -vvv)"
    )

    # GitHub API options
    parser.add_argument(
        "--github-token",
        help="GitHub API token (or set GITHUB_TOKEN environment variable)"
    )

    return parser


def validate_args(args: argparse.Namespace) -> None:
    """Validate command-line arguments."""
    if args.workflow_file and not args.workflow_file.exists():
        raise FileNotFoundError(f"Workflow file not found: {args.workflow_file}")

    if args.workflow_dir and not args.workflow_dir.exists():
        raise FileNotFoundError(f"Workflow directory not found: {args.workflow_dir}")


def resolve_repository(args: argparse.Namespace) -> str:
    """Find the repository pull requests should target."""
    repository = args.repository or os.getenv("GITHUB_REPOSITORY")
    if not repository:
        repository = parse_repository_slug(get_git_remote_url(Path.cwd()))
    if not repository:
        raise ValueError("Cannot determine repository: use --repository or set GITHUB_REPOSITORY")
    return repository


def print_summary(results: dict) -> None:
    print(f"\nSummary:")
    print(f"  Processed files: {len(results['processed_files'])}")
    print(f"  Actions updated: {len(results['updates'])}")
    for update in results['updates']:
        print(f"    - {update['action']}: {update['current']} -> {update['latest']}")
    print(f"  Up to date: {len(results['up_to_date'])}")
    print(f"  Skipped: {len(results['skipped'])}")

    if results['errors']:
        print(f"  Errors: {len(results['errors'])}")
        for error in results['errors']:
            print(f"    - {error['file']}: {error['error']}")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    # Setup logging
    setup_logging(args.verbose)

    try:
        # Validate arguments
        validate_args(args)

        # Find workflow files
        if args.workflow_file:
            workflow_files = [args.workflow_file]
        else:
            workflow_files = find_workflow_files(args.workflow_dir)
            if not workflow_files:
                logging.error(f"No workflow files found in {args.workflow_dir}")
                return 1

        logging.info(f"Found {len(workflow_files)} workflow file(s) to process")

        # Initialize GitHub API
        github_api = GitHubAPI(token=args.github_token)

        if args.create_pr:
            publisher = PullRequestPublisher(
                github_api,
                resolve_repository(args),
                base_branch=args.base_branch,
                dry_run=args.dry_run
            )
        else:
            publisher = LocalPublisher(dry_run=args.dry_run)

        cache = None if args.no_cache else CandidateCache(args.cache_file)

        # Process workflows
        results = ActionUpgrader(github_api, publisher, cache=cache).run(workflow_files)

        # Output results
        if args.output:
            with open(args.output, 'w') as f:
                json.dump(results, f, indent=2)
            logging.info(f"Results saved to {args.output}")

        print_summary(results)

        return 0 if not results['errors'] else 1

    except Exception as e:
        logging.error(f"Fatal error: {e}")
        return 1
