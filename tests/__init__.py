"""Test suite for GitOps Image Updater.

This package contains test modules and fixtures for verifying the functionality
of the GitOps Image Updater tool. It includes tests for:
- Config document mutation
- Git staging, commit and push
- Pull request creation and labelling
- Reference resolution and commenting
- Environment configuration handling
- The end-to-end pipeline

The test suite uses pytest and provides fixtures for common test scenarios.
"""
