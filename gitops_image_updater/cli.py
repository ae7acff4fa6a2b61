#!/usr/bin/env python3

"""
GitOps Image Update Script

Reads the update request from environment variables, runs the update
pipeline and reports the created pull request.
"""

import os
import sys

from .credentials import EnvironmentTokenProvider
from .environment import EnvironmentConfig
from .exceptions import UpdaterError
from .git_operations import setup_github_client
from .pipeline import run_pipeline
from .utils import print_request_summary, setup_logging


def main():
    """Main entry point."""
    setup_logging()
    try:
        # Step 1: Parse environment
        config = EnvironmentConfig.from_env(os.environ)

        # Step 2: Validate configuration
        errors = config.validate()
        if errors:
            for error in errors:
                print(f"Error: {error}")
            sys.exit(1)
        request = config.to_request()
        print_request_summary(request)

        # Step 3: Setup credentials and GitHub client
        credentials = EnvironmentTokenProvider(os.environ).get_credentials(request.author_name)
        github_client = None if request.dry_run else setup_github_client(credentials.token)

        # Step 4: Run the pipeline
        result = run_pipeline(request, credentials, github_client)

        if result.already_set:
            print("Value already set, no changes needed")
        elif result.pr_url:
            print(f"PR created: {result.pr_url}")
        elif result.dry_run:
            print("Dry run completed, no remote changes were made")

        print("Image update process completed")
    except UpdaterError as e:
        print(f"Error: {e}")
        sys.exit(1)
    except Exception as e:
        print(f"Unexpected error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
