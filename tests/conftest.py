"""Test fixtures for GitOps Image Updater.

This module provides shared fixtures used across multiple test modules.
It sets up config documents, local git repositories acting as remotes,
and update requests.

Fixtures:
    sample_values_yaml: Creates a temporary values.yaml config document
    origin_repo: Creates a local git repository acting as the remote
    make_request: Factory for UpdateRequest objects
"""

import json
from unittest.mock import MagicMock

import pytest
import yaml
from git import Actor, Repo

from gitops_image_updater.config import (
    ConfigFormat,
    ConfigTarget,
    UpdateMode,
    UpdateRequest,
)
from gitops_image_updater.credentials import GitCredentials

AUTHOR = Actor("test-bot", "test-bot@example.com")


@pytest.fixture
def sample_values_yaml(tmp_path):
    """Creates a temporary config folder with a values.yaml document.

    tmp_path/
    └── deploy/
        └── values.yaml

    Returns:
        dict: A dictionary containing:
            - folder (Path): Path to the config folder
            - document (Path): Path to values.yaml
            - initial_data (dict): The initial document content
    """
    folder = tmp_path / "deploy"
    folder.mkdir()
    document = folder / "values.yaml"
    data = {"image": {"repository": "registry.example.com/svc-a", "tag": "v1.0.0"}, "replicas": 2}

    with document.open("w") as f:
        yaml.dump(data, f, sort_keys=False)

    return {"folder": folder, "document": document, "initial_data": data}


@pytest.fixture
def sample_config_json(tmp_path):
    """Creates a temporary config folder with a config.json document."""
    folder = tmp_path / "deploy"
    folder.mkdir(exist_ok=True)
    document = folder / "config.json"
    data = {"service": {"image": "registry.example.com/svc-a:v1.0.0", "version": "v1.0.0"}}
    document.write_text(json.dumps(data, indent=2))
    return {"folder": folder, "document": document, "initial_data": data}


@pytest.fixture
def origin_repo(tmp_path):
    """Creates a local git repository that acts as the remote.

    The repository lives at ``tmp_path/remote/acme/svc-config.git`` so that
    ``<server>/<org>/<repo>.git`` resolves to it when the server URL is
    ``tmp_path/remote``. Its ``main`` branch holds ``deploy/values.yaml``.

    Returns:
        dict: server (str), path (Path) and repo (Repo)
    """
    server = tmp_path / "remote"
    path = server / "acme" / "svc-config.git"
    path.mkdir(parents=True)
    repo = Repo.init(path)

    (path / "deploy").mkdir()
    with (path / "deploy" / "values.yaml").open("w") as f:
        yaml.dump({"image": {"tag": "v1.0.0"}}, f, sort_keys=False)
    (path / "README.md").write_text("svc-config\n")

    repo.index.add(["deploy/values.yaml", "README.md"])
    repo.index.commit("initial commit", author=AUTHOR, committer=AUTHOR)
    repo.git.branch("-M", "main")

    return {"server": str(server), "path": path, "repo": repo}


@pytest.fixture
def credentials():
    """Provides dummy git credentials."""
    return GitCredentials(username="test-bot", token="fake-token")


@pytest.fixture
def make_request():
    """Factory for UpdateRequest objects with sensible defaults."""

    def _make(**overrides):
        values = {
            "image_id": "v1.1.0",
            "image_prefix": "registry.example.com",
            "org": "acme",
            "repo_name": "svc-a",
            "clone_repo_name": "svc-config",
            "config_folder": "/deploy",
            "targets": (ConfigTarget(document="values.yaml", key="image.tag"),),
            "config_format": ConfigFormat.YAML,
            "update_mode": UpdateMode.VERSION,
            "commit_message_suffix": "bump",
            "author_name": "test-bot",
            "author_email": "test-bot@example.com",
            "base_branch": "main",
            "mutate_config": True,
        }
        values.update(overrides)
        return UpdateRequest(**values)

    return _make


@pytest.fixture
def mock_github_client():
    """Provides a mock GitHub client returning mock repositories.

    Returns:
        tuple: (client, config repo mock, source repo mock, pull request mock)
    """
    client = MagicMock()
    config_repo = MagicMock()
    source_repo = MagicMock()
    source_repo.full_name = "acme/svc-a"

    pull = MagicMock()
    pull.html_url = "https://github.com/acme/svc-config/pull/7"
    pull.number = 7
    config_repo.create_pull.return_value = pull

    def get_repo(full_name):
        return config_repo if full_name == "acme/svc-config" else source_repo

    client.get_repo.side_effect = get_repo
    return client, config_repo, source_repo, pull
