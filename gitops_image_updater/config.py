"""
Configuration Module for GitOps Image Updater

This module contains configuration settings and the request value that is
passed through the update pipeline. The request is built once at process
entry and never mutated afterwards.

Constants:
    GITHUB_SERVER_URL: Base URL of the GitHub server (from environment)
    REMOTE_NAME: Name of the git remote the update branch is pushed to
    TAG_PAGE_SIZE: Page size used when listing repository tags
    DOCUMENT_EXTENSIONS: File extensions tried per config format

Classes:
    ConfigFormat: Supported config document formats
    UpdateMode: Which value gets written into the config documents
    ConfigTarget: A (document, key) pair to update
    UpdateRequest: Immutable settings for one pipeline run
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple
import os

# Constants
GITHUB_SERVER_URL = os.getenv("GITHUB_SERVER_URL", "https://github.com").rstrip("/")
REMOTE_NAME = "origin"
TAG_PAGE_SIZE = 100


class ConfigFormat(Enum):
    """Formats a config document can be read and written in."""
    YAML = "yaml"
    JSON = "json"


class UpdateMode(Enum):
    """Value written into the config documents."""
    IMAGE = "image"      # <prefix>/<repo>:<image id>
    VERSION = "version"  # raw image id


DOCUMENT_EXTENSIONS = {
    ConfigFormat.YAML: (".yaml", ".yml"),
    ConfigFormat.JSON: (".json",),
}


@dataclass(frozen=True)
class ConfigTarget:
    """A single key to update inside a config document."""

    document: str
    key: str


@dataclass(frozen=True)
class UpdateRequest:
    """Configuration for a single update pipeline run."""

    image_id: str
    image_prefix: str
    org: str
    repo_name: str
    clone_repo_name: str
    config_folder: str
    targets: Tuple[ConfigTarget, ...]
    config_format: ConfigFormat
    update_mode: UpdateMode
    commit_message_suffix: str
    author_name: str
    author_email: str
    base_branch: str
    mutate_config: bool = True
    auto_merge_label: Optional[str] = None
    git_ref: Optional[str] = None
    dry_run: bool = False

    @property
    def clone_url(self) -> str:
        """HTTPS URL of the repository that gets updated."""
        return f"{GITHUB_SERVER_URL}/{self.org}/{self.clone_repo_name}.git"
