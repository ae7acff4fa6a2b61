"""
Git Operations Module for GitOps Image Updater

This module handles Git-related operations: cloning the target repository onto
a fresh update branch, committing and pushing the working tree, and setting up
the GitHub client.

Functions:
    stage_repository: Clones a repository and checks out a new branch at its HEAD
    commit_changes: Stages and commits every working tree change
    push_branch: Pushes the update branch to a remote
    setup_github_client: Sets up an authenticated GitHub client

Raises:
    CloneError, BranchError, CheckoutError: When staging fails
    CommitError, PushError: When committing or pushing fails
"""

import logging

from git import Actor, Repo, RemoteProgress
from git.exc import GitCommandError
from git.remote import PushInfo
from github import Auth, Github

from .config import REMOTE_NAME, TAG_PAGE_SIZE
from .credentials import GitCredentials
from .exceptions import (
    BranchError,
    CheckoutError,
    CloneError,
    CommitError,
    PushError,
)
from .models import StagedRepository

logger = logging.getLogger(__name__)

PUSH_FAILURE_FLAGS = PushInfo.ERROR | PushInfo.REJECTED | PushInfo.REMOTE_REJECTED | PushInfo.REMOTE_FAILURE


class CloneProgress(RemoteProgress):
    """Logs git clone progress lines."""

    def update(self, op_code, cur_count, max_count=None, message=""):
        if op_code & RemoteProgress.END:
            logger.debug(f"Clone progress: {cur_count}/{max_count} {message}".strip())


def stage_repository(
    remote_url: str,
    credentials: GitCredentials,
    source_ref: str,
    new_branch_name: str,
    workdir: str,
) -> StagedRepository:
    """Clone ``remote_url`` at ``source_ref`` and check out a new branch.

    The new branch points at the cloned HEAD commit; no commit is created.

    Args:
        remote_url: URL of the repository to clone
        credentials: Credentials used for HTTPS transport
        source_ref: Branch to clone
        new_branch_name: Name of the branch to create and check out
        workdir: Empty directory to clone into

    Returns:
        StagedRepository checked out on ``new_branch_name``
    """
    logger.info(f"Cloning {remote_url} at {source_ref} into {workdir}")
    try:
        repo = Repo.clone_from(
            credentials.authenticated_url(remote_url),
            workdir,
            branch=source_ref,
            progress=CloneProgress(),
        )
    except GitCommandError as e:
        raise CloneError(
            f"Failed to clone {remote_url} at {source_ref}: {credentials.redact(str(e))}"
        ) from e

    try:
        head_commit = repo.head.commit
        if new_branch_name in repo.heads:
            repo.close()
            raise BranchError(f"Branch {new_branch_name} already exists in {remote_url}")
        branch = repo.create_head(new_branch_name, head_commit)
    except (GitCommandError, OSError, ValueError) as e:
        repo.close()
        raise BranchError(f"Failed to create branch {new_branch_name}: {e}") from e

    try:
        branch.checkout()
    except GitCommandError as e:
        repo.close()
        raise CheckoutError(f"Failed to checkout branch {new_branch_name}: {e}") from e

    logger.info(f"Checked out {new_branch_name} at {head_commit.hexsha[:7]}")
    return StagedRepository(
        path=str(workdir),
        repo=repo,
        branch_name=new_branch_name,
        credentials=credentials,
    )


def commit_changes(
    staged: StagedRepository,
    author_name: str,
    author_email: str,
    message: str,
) -> str:
    """Stage every change in the working tree and commit it.

    Author and committer share the given name and email and the current time.

    Returns:
        SHA of the new commit
    """
    repo = staged.repo
    signature = Actor(author_name, author_email)
    try:
        repo.git.add(A=True)
        commit = repo.index.commit(message, author=signature, committer=signature)
    except (GitCommandError, OSError, ValueError) as e:
        raise CommitError(f"Failed to commit changes: {e}") from e
    logger.info(f"Committed {commit.hexsha[:7]}: {message}")
    return commit.hexsha


def push_branch(staged: StagedRepository, remote_name: str = REMOTE_NAME) -> None:
    """Push the staged branch to a remote.

    Args:
        staged: The staged repository
        remote_name: Remote name (default: origin)
    """
    refspec = f"refs/heads/{staged.branch_name}:refs/heads/{staged.branch_name}"
    try:
        push_infos = staged.repo.remote(remote_name).push(refspec=refspec)
    except (GitCommandError, ValueError) as e:
        raise PushError(
            f"Failed to push {staged.branch_name} to {remote_name}: "
            f"{staged.credentials.redact(str(e))}"
        ) from e

    if not push_infos:
        raise PushError(f"Push of {staged.branch_name} to {remote_name} returned no result")
    for info in push_infos:
        if info.flags & PUSH_FAILURE_FLAGS:
            raise PushError(
                f"Push of {staged.branch_name} to {remote_name} was rejected: "
                f"{staged.credentials.redact(info.summary.strip())}"
            )

    logger.info(f"Pushed {staged.branch_name} to {remote_name}")


def setup_github_client(token: str) -> Github:
    """Set up a GitHub client authenticated with ``token``."""
    return Github(auth=Auth.Token(token), per_page=TAG_PAGE_SIZE)
