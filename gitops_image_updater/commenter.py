"""
Commenter Module for GitOps Image Updater

Resolves the git reference that triggered an update (a commit SHA or a tag
name) to a commit SHA and posts a comment on that commit.
"""

import logging

from github.GithubException import GithubException
from github.Repository import Repository

from .exceptions import CommentError, ReferenceResolutionError
from .reference_classification import ReferenceType, classify_reference

logger = logging.getLogger(__name__)


def list_tags(github_repo: Repository) -> list:
    """Collect every tag of the repository, page by page."""
    try:
        return list(github_repo.get_tags())
    except GithubException as e:
        raise ReferenceResolutionError(
            f"Failed to list tags of {github_repo.full_name}: {e}"
        ) from e


def resolve_commit_sha(github_repo: Repository, ref: str) -> str:
    """
    Resolve a commit SHA or tag name to a commit SHA.

    Args:
        github_repo: Repository the reference belongs to
        ref: Commit SHA or tag name

    Returns:
        The commit SHA

    Raises:
        ReferenceResolutionError: If listing tags fails or no tag matches
    """
    if classify_reference(ref) == ReferenceType.COMMIT:
        return ref

    for tag in list_tags(github_repo):
        if tag.name == ref:
            logger.info(f"Resolved tag {ref} to {tag.commit.sha}")
            return tag.commit.sha

    raise ReferenceResolutionError(
        f"'{ref}' is neither a commit SHA nor a tag of {github_repo.full_name}"
    )


def comment_on_reference(github_repo: Repository, ref: str, body: str) -> str:
    """Post ``body`` as a comment on the commit ``ref`` resolves to.

    Returns:
        The commit SHA the comment was posted on
    """
    sha = resolve_commit_sha(github_repo, ref)
    try:
        github_repo.get_commit(sha).create_comment(body)
    except GithubException as e:
        raise CommentError(f"Failed to comment on commit {sha}: {e}", sha=sha) from e
    logger.info(f"Commented on {github_repo.full_name}@{sha[:7]}")
    return sha
