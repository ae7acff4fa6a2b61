"""
Pull Request Manager Module for GitOps Image Updater

This module handles the creation of GitHub pull requests for pushed update
branches and the optional auto-merge label.

Functions:
    publish_pull_request: Creates a GitHub PR and optionally labels it

Dependencies:
    github.Repository
    github.GithubException
"""

import logging

from github.GithubException import GithubException
from github.Repository import Repository

from .exceptions import LabelError, PullRequestError
from .models import PullRequestSpec

logger = logging.getLogger(__name__)


def publish_pull_request(github_repo: Repository, spec: PullRequestSpec) -> str:
    """Create a pull request and apply the auto-merge label.

    The label replaces the whole label set of the PR, so labels assigned
    by templates or repository automation are removed.

    Args:
        github_repo: Repository the PR is opened in
        spec: The pull request to create

    Returns:
        str: HTML URL of the created PR

    Raises:
        PullRequestError: If the PR cannot be created
        LabelError: If the PR was created but labelling failed
    """
    try:
        pr = github_repo.create_pull(
            title=spec.title,
            body=spec.body,
            head=spec.source_branch,
            base=spec.base_branch,
        )
    except GithubException as e:
        raise PullRequestError(
            f"Pull request creation from {spec.source_branch} into {spec.base_branch} failed: {e}"
        ) from e

    logger.info(f"PR created: {pr.html_url}")

    if spec.auto_merge_label:
        try:
            pr.set_labels(spec.auto_merge_label)
        except GithubException as e:
            raise LabelError(
                f"Failed to set label '{spec.auto_merge_label}' on {pr.html_url}: {e}",
                pr_url=pr.html_url,
            ) from e
        logger.info(f"Labelled PR #{pr.number} with '{spec.auto_merge_label}'")

    return pr.html_url
