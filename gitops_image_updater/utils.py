"""
Utility Functions Module for GitOps Image Updater

This module provides helper functions used by the command line entry point.

Functions:
    setup_logging: Configures application logging
    print_request_summary: Displays the settings of an update request
"""

import logging

from .config import UpdateRequest

logger = logging.getLogger(__name__)


def setup_logging(level: int = logging.INFO) -> None:
    """Configure logging for the application."""
    logging.basicConfig(
        level=level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


def print_request_summary(request: UpdateRequest) -> None:
    """Print the settings of an update request."""
    print(
        f"Updating image {request.image_id} for {request.repo_name} "
        f"by cloning {request.clone_repo_name} ({request.base_branch})"
    )
    print(f"Update mode: {request.update_mode.value}")
    print(f"Config format: {request.config_format.value}")
    if request.mutate_config:
        print("Config keys to update:")
        for target in request.targets:
            print(f"  - {request.config_folder}/{target.document}: {target.key}")
    if request.auto_merge_label:
        print(f"Auto-merge label: {request.auto_merge_label}")
    if request.git_ref:
        print(f"Comment on: {request.git_ref}")
    print(f"Dry run: {request.dry_run}")
