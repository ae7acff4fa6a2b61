"""Custom exceptions for GitOps Image Updater."""


class UpdaterError(Exception):
    """Base class for every error raised by the update pipeline."""


class ConfigurationError(UpdaterError):
    """Raised when required settings are missing or invalid."""

    def __init__(self, message: str, errors: list = None):
        self.errors = errors or []
        super().__init__(message)


class CloneError(UpdaterError):
    """Raised when the target repository cannot be cloned."""


class BranchError(UpdaterError):
    """Raised when the update branch cannot be created."""


class CheckoutError(UpdaterError):
    """Raised when the update branch cannot be checked out."""


class DocumentError(UpdaterError):
    """Raised when a config document cannot be found, parsed or written."""


class CommitError(UpdaterError):
    """Raised when staging or committing the working tree fails."""


class PushError(UpdaterError):
    """Raised when the update branch cannot be pushed."""


class PullRequestError(UpdaterError):
    """Raised when the pull request cannot be created."""


class LabelError(UpdaterError):
    """Raised when labelling an already created pull request fails."""

    def __init__(self, message: str, pr_url: str = None):
        self.pr_url = pr_url
        super().__init__(message)


class ReferenceResolutionError(UpdaterError):
    """Raised when a git reference cannot be resolved to a commit SHA."""


class CommentError(UpdaterError):
    """Raised when posting the commit comment fails."""

    def __init__(self, message: str, sha: str = None):
        self.sha = sha
        super().__init__(message)
