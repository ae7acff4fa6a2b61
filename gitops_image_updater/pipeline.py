"""Pipeline - runs one update request from clone to commit comment."""

import logging
import tempfile
from typing import Optional

from github import Github
from github.GithubException import GithubException

from .commenter import comment_on_reference
from .config import UpdateRequest
from .config_mutator import mutate_documents
from .credentials import GitCredentials
from .exceptions import PullRequestError, ReferenceResolutionError
from .git_operations import commit_changes, push_branch, stage_repository
from .message_generation import (
    generate_branch_spec,
    generate_comment_body,
    generate_commit_message,
    generate_new_value,
    generate_pr_spec,
)
from .models import PipelineResult, PipelineState
from .pr_manager import publish_pull_request

logger = logging.getLogger(__name__)


def run_pipeline(
    request: UpdateRequest,
    credentials: GitCredentials,
    github_client: Optional[Github] = None,
) -> PipelineResult:
    """
    Run the update pipeline for a request.

    Stages the repository, mutates the config documents, commits and pushes,
    opens the pull request and comments on the triggering reference. The
    temporary working tree is removed on every exit path. Any error is
    propagated to the caller unchanged.

    Args:
        request: The update request
        credentials: Credentials for git transport
        github_client: Client for the GitHub API (not needed for dry runs)

    Returns:
        PipelineResult with the final state
    """
    result = PipelineResult(dry_run=request.dry_run)
    branch = generate_branch_spec(request)
    result.branch = branch

    with tempfile.TemporaryDirectory(prefix=f"{branch.new_branch_name.replace('/', '-')}-") as workdir:
        staged = stage_repository(
            remote_url=request.clone_url,
            credentials=credentials,
            source_ref=branch.base_branch,
            new_branch_name=branch.new_branch_name,
            workdir=workdir,
        )
        result.state = PipelineState.STAGED
        try:
            _run_staged(request, staged, branch, github_client, result)
        finally:
            staged.repo.close()

    if result.state != PipelineState.SHORT_CIRCUIT_EXIT:
        result.state = PipelineState.DONE
    return result


def _run_staged(request: UpdateRequest, staged, branch, github_client, result: PipelineResult) -> None:
    """Run every stage after the repository has been cloned."""
    if request.mutate_config:
        new_value = generate_new_value(request)
        result.mutations = mutate_documents(
            working_tree=staged.path,
            folder=request.config_folder,
            targets=request.targets,
            config_format=request.config_format,
            new_value=new_value,
        )
        if result.mutations and result.mutations[-1].already_set:
            logger.info(f"{new_value} already set, nothing to update")
            result.state = PipelineState.SHORT_CIRCUIT_EXIT
            return
    result.state = PipelineState.MUTATED

    message = generate_commit_message(request.repo_name, request.commit_message_suffix)
    pr_spec = generate_pr_spec(request, branch)

    if request.dry_run:
        _log_dry_run(request, branch.new_branch_name, message, pr_spec)
        return

    commit_changes(staged, request.author_name, request.author_email, message)
    result.state = PipelineState.COMMITTED
    push_branch(staged)
    result.state = PipelineState.PUSHED

    github_repo = _get_repo(github_client, request.org, request.clone_repo_name, PullRequestError)
    result.pr_url = publish_pull_request(github_repo, pr_spec)
    result.state = PipelineState.PR_CREATED

    if request.git_ref:
        source_repo = _get_repo(github_client, request.org, request.repo_name, ReferenceResolutionError)
        result.comment_sha = comment_on_reference(
            source_repo,
            request.git_ref,
            generate_comment_body(request, result.pr_url),
        )
        result.state = PipelineState.COMMENTED


def _get_repo(github_client: Github, org: str, name: str, error_class):
    """Fetch a repository, reporting failures as ``error_class``."""
    try:
        return github_client.get_repo(f"{org}/{name}")
    except GithubException as e:
        raise error_class(f"Failed to access repository {org}/{name}: {e}") from e


def _log_dry_run(request: UpdateRequest, branch_name: str, message: str, pr_spec) -> None:
    """Log the remote side effects a real run would perform."""
    logger.info(f"[DRY RUN] Would commit with message: {message}")
    logger.info(f"[DRY RUN] Would push {branch_name} to origin")
    logger.info(f"[DRY RUN] Would create PR: '{pr_spec.title}'")
    logger.info(f"[DRY RUN] Base: {pr_spec.base_branch}, Head: {pr_spec.source_branch}")
    logger.info(f"[DRY RUN] Body:\n{pr_spec.body}")
    if pr_spec.auto_merge_label:
        logger.info(f"[DRY RUN] Would set label: {pr_spec.auto_merge_label}")
    if request.git_ref:
        logger.info(f"[DRY RUN] Would comment on {request.org}/{request.repo_name}@{request.git_ref}")
