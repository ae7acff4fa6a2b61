"""Data models shared between the pipeline stages."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional

from git import Repo

from .credentials import GitCredentials


class PipelineState(Enum):
    """States the update pipeline moves through, in order."""
    START = "start"
    STAGED = "staged"
    MUTATED = "mutated"
    SHORT_CIRCUIT_EXIT = "short_circuit_exit"  # value already set, nothing to do
    COMMITTED = "committed"
    PUSHED = "pushed"
    PR_CREATED = "pr_created"
    COMMENTED = "commented"
    DONE = "done"


@dataclass(frozen=True)
class BranchSpec:
    """Branch the update is pushed on and the branch it targets."""
    base_branch: str
    new_branch_name: str

    @property
    def new_branch_ref(self) -> str:
        return f"refs/heads/{self.new_branch_name}"


@dataclass
class PullRequestSpec:
    """Represents a pull request to be created."""
    title: str
    source_branch: str
    base_branch: str
    body: str
    auto_merge_label: Optional[str] = None


@dataclass
class StagedRepository:
    """A cloned repository checked out on the update branch."""
    path: str
    repo: Repo
    branch_name: str
    credentials: GitCredentials


@dataclass
class MutationResult:
    """Outcome of updating one key in one config document."""
    document_path: str
    key: str
    old_value: Any
    new_value: Any
    already_set: bool = False


@dataclass
class PipelineResult:
    """Result of running the update pipeline."""
    state: PipelineState = PipelineState.START
    branch: Optional[BranchSpec] = None
    pr_url: Optional[str] = None
    comment_sha: Optional[str] = None
    mutations: List[MutationResult] = field(default_factory=list)
    dry_run: bool = False

    @property
    def already_set(self) -> bool:
        """True if the run ended because the value was already in place."""
        return self.state == PipelineState.SHORT_CIRCUIT_EXIT
