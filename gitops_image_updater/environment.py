"""
Environment Configuration Module

Handles parsing and validation of environment variables.
This is a pure module - no side effects, just data transformation.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional
import logging

from .config import ConfigFormat, ConfigTarget, UpdateMode, UpdateRequest
from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

REQUIRED_VARIABLES = {
    "image_id": "IMAGE_ID",
    "image_prefix": "IMAGE_PREFIX",
    "org": "GITHUB_ORG",
    "repo_name": "REPO_NAME",
    "clone_repo_name": "REPO_CLONE",
    "config_folder": "CONFIG_FOLDER",
    "config_type": "CONFIG_TYPE",
    "commit_message": "COMMIT_MESSAGE",
    "github_username": "GITHUB_USERNAME",
    "github_email": "GITHUB_EMAIL",
    "head_branch_name": "HEAD_BRANCH_NAME",
}


def _parse_bool(value: Optional[str], default: bool) -> bool:
    if value is None or not value.strip():
        return default
    return value.strip().lower() == "true"


def _parse_list(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


@dataclass
class EnvironmentConfig:
    """Configuration parsed from environment variables."""

    image_id: str
    image_prefix: str
    org: str
    repo_name: str
    clone_repo_name: str
    config_folder: str
    config_type: str
    commit_message: str
    github_username: str
    github_email: str
    head_branch_name: str
    config_names: List[str] = field(default_factory=list)
    search_keys: List[str] = field(default_factory=list)
    update_image: bool = True
    update_version: bool = False
    custom: bool = False
    auto_merge_label: str = ""
    git_ref: str = ""
    dry_run: bool = False
    _update_image_explicit: bool = field(default=False, init=False, repr=False)

    @classmethod
    def from_env(cls, env: Dict[str, str]) -> "EnvironmentConfig":
        """Create configuration from environment variables.

        Args:
            env: Dictionary of environment variables (typically os.environ)

        Returns:
            EnvironmentConfig instance
        """
        values = {attr: env.get(name, "").strip() for attr, name in REQUIRED_VARIABLES.items()}

        config = cls(
            **values,
            config_names=_parse_list(env.get("CONFIG_NAMES", "")),
            search_keys=_parse_list(env.get("SEARCH_KEYS", "")),
            update_image=_parse_bool(env.get("UPDATE_IMAGE"), True),
            update_version=_parse_bool(env.get("UPDATE_VERSION"), False),
            custom=_parse_bool(env.get("CUSTOM"), False),
            auto_merge_label=env.get("AUTO_MERGE_LABEL", "").strip(),
            git_ref=env.get("GIT_REF", "").strip(),
            dry_run=_parse_bool(env.get("DRY_RUN"), False),
        )
        config._update_image_explicit = _parse_bool(env.get("UPDATE_IMAGE"), False)
        return config

    @property
    def update_mode(self) -> UpdateMode:
        if self.update_version:
            return UpdateMode.VERSION
        return UpdateMode.IMAGE

    def validate(self) -> List[str]:
        """Validate the configuration.

        Returns:
            List of error messages (empty if valid)
        """
        errors = []

        # Required fields
        for attr, name in REQUIRED_VARIABLES.items():
            if not getattr(self, attr):
                errors.append(f"{name} is required")

        if self.config_type and self.config_type.lower() not in [f.value for f in ConfigFormat]:
            errors.append(f"CONFIG_TYPE must be yaml or json, got '{self.config_type}'")

        if not self.config_names:
            errors.append("CONFIG_NAMES is required")
        if not self.search_keys:
            errors.append("SEARCH_KEYS is required")
        if self.config_names and self.search_keys and len(self.config_names) != len(self.search_keys):
            errors.append(
                f"CONFIG_NAMES has {len(self.config_names)} entries but "
                f"SEARCH_KEYS has {len(self.search_keys)}; they must match"
            )

        if self._update_image_explicit and self.update_version:
            errors.append("UPDATE_IMAGE and UPDATE_VERSION are mutually exclusive")
        elif self.custom and not self.update_image and not self.update_version:
            errors.append("CUSTOM requires UPDATE_IMAGE or UPDATE_VERSION")

        return errors

    def to_request(self) -> UpdateRequest:
        """Build the immutable update request.

        Raises:
            ConfigurationError: If the configuration is invalid
        """
        errors = self.validate()
        if errors:
            raise ConfigurationError("; ".join(errors), errors=errors)

        if not self.custom:
            logger.info("CUSTOM is not set, config documents will not be modified")

        return UpdateRequest(
            image_id=self.image_id,
            image_prefix=self.image_prefix,
            org=self.org,
            repo_name=self.repo_name,
            clone_repo_name=self.clone_repo_name,
            config_folder=self.config_folder,
            targets=tuple(
                ConfigTarget(document=name, key=key)
                for name, key in zip(self.config_names, self.search_keys)
            ),
            config_format=ConfigFormat(self.config_type.lower()),
            update_mode=self.update_mode,
            commit_message_suffix=self.commit_message,
            author_name=self.github_username,
            author_email=self.github_email,
            base_branch=self.head_branch_name,
            mutate_config=self.custom,
            auto_merge_label=self.auto_merge_label or None,
            git_ref=self.git_ref or None,
            dry_run=self.dry_run,
        )
