"""GitOps Image Updater.

Rewrites an image reference or version inside YAML/JSON config documents of a
git repository and opens a pull request with the change.
"""
