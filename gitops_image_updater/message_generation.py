"""
Message Generation Module

Pure functions for generating branch names, commit messages, PR bodies
and the values written into config documents.
This module contains no side effects - only text formatting logic.
"""

from . import config
from .config import UpdateMode, UpdateRequest
from .models import BranchSpec, PullRequestSpec


def generate_image_reference(image_prefix: str, repo_name: str, image_id: str) -> str:
    """Build the full image reference ``<prefix>/<repo>:<image id>``."""
    return f"{image_prefix}/{repo_name}:{image_id}"


def generate_new_value(request: UpdateRequest) -> str:
    """
    Determine the value written into every configured key.

    Args:
        request: The update request

    Returns:
        Full image reference in image mode, the raw image id in version mode
    """
    if request.update_mode == UpdateMode.VERSION:
        return request.image_id
    return generate_image_reference(request.image_prefix, request.repo_name, request.image_id)


def generate_branch_spec(request: UpdateRequest) -> BranchSpec:
    """Derive the update branch name from the repository and image id."""
    return BranchSpec(
        base_branch=request.base_branch,
        new_branch_name=f"{request.repo_name}-{request.image_id}",
    )


def generate_commit_message(repo_name: str, suffix: str) -> str:
    """Generate the commit message, which doubles as the PR title."""
    return f"feat({repo_name}): {suffix}"


def generate_pr_body(org: str, repo_name: str, image_id: str) -> str:
    """
    Generate the PR body.

    Both links are always included since the image id may name either a
    release tag or a commit.

    Args:
        org: GitHub organisation
        repo_name: Repository the image is built from
        image_id: The image id

    Returns:
        PR body string
    """
    repo_url = f"{config.GITHUB_SERVER_URL}/{org}/{repo_name}"
    return (
        f"Link to changes if tag:  {repo_url}/releases/tag/{image_id}\n"
        f"Link to changes if commit: {repo_url}/commit/{image_id}"
    )


def generate_pr_spec(request: UpdateRequest, branch: BranchSpec) -> PullRequestSpec:
    """Assemble the pull request to open for a request."""
    return PullRequestSpec(
        title=generate_commit_message(request.repo_name, request.commit_message_suffix),
        source_branch=branch.new_branch_name,
        base_branch=branch.base_branch,
        body=generate_pr_body(request.org, request.repo_name, request.image_id),
        auto_merge_label=request.auto_merge_label or None,
    )


def generate_comment_body(request: UpdateRequest, pr_url: str = None) -> str:
    """Generate the comment posted on the triggering commit."""
    value = generate_new_value(request)
    body = f"Update of `{value}` in {request.org}/{request.clone_repo_name}"
    if pr_url:
        body += f" opened: {pr_url}"
    return body
