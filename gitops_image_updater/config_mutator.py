"""
Config Mutator Module for GitOps Image Updater

This module handles the core functionality of rewriting a value inside
YAML or JSON config documents. Keys are dotted paths (``image.tag``)
resolved with dpath.

Functions:
    find_document: Locates a config document inside a folder
    load_document: Reads and parses a document in the declared format
    dump_document: Writes a document back in the declared format
    mutate_document: Updates a single key in a single document
    mutate_documents: Updates every (document, key) pair in order

Writes are best-effort and not transactional: when a later pair fails,
documents already written stay on disk.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List

import dpath
import yaml
from dpath.exceptions import PathNotFound

from .config import ConfigFormat, ConfigTarget, DOCUMENT_EXTENSIONS
from .exceptions import DocumentError
from .models import MutationResult

logger = logging.getLogger(__name__)

def find_document(folder, document: str, config_format: ConfigFormat) -> Path:
    """Locate ``document`` inside ``folder``.

    The name is used as-is first, then as a base name with each extension
    of the format appended.

    Raises:
        DocumentError: If no matching file exists
    """
    folder = Path(folder)
    candidates = [folder / document]
    candidates += [folder / f"{document}{ext}" for ext in DOCUMENT_EXTENSIONS[config_format]]
    for candidate in candidates:
        if candidate.is_file():
            return candidate
    raise DocumentError(
        f"Config document '{document}' ({config_format.value}) not found in {folder}"
    )


def load_document(path: Path, config_format: ConfigFormat) -> Dict[str, Any]:
    """Read a config document and return its contents as a mapping."""
    try:
        with path.open(encoding="utf-8") as f:
            if config_format == ConfigFormat.JSON:
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise DocumentError(f"Failed to parse {path} as {config_format.value}: {e}") from e
    except OSError as e:
        raise DocumentError(f"Failed to read {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise DocumentError(f"{path} does not contain a {config_format.value} mapping")
    return data


def dump_document(path: Path, data: Dict[str, Any], config_format: ConfigFormat) -> None:
    """Write ``data`` to ``path`` in the given format."""
    try:
        with path.open("w", encoding="utf-8") as f:
            if config_format == ConfigFormat.JSON:
                json.dump(data, f, indent=2, ensure_ascii=False)
                f.write("\n")
            else:
                yaml.dump(data, f, default_flow_style=False, sort_keys=False)
    except (OSError, TypeError, yaml.YAMLError) as e:
        raise DocumentError(f"Failed to write {path}: {e}") from e


def read_value(data: Dict[str, Any], key: str) -> Any:
    """Return the value at dotted ``key`` or None if it is absent.

    Raises:
        DocumentError: If ``key`` matches more than one value
    """
    try:
        return dpath.get(data, key, separator=".")
    except KeyError:
        return None
    except ValueError as e:
        raise DocumentError(f"Key {key} does not name a single value: {e}") from e


def mutate_document(
    folder,
    target: ConfigTarget,
    config_format: ConfigFormat,
    new_value: Any,
) -> MutationResult:
    """Set ``target.key`` to ``new_value`` in ``target.document``.

    An absent key is written fresh. If the current value already equals
    ``new_value`` the document is left untouched and the result is
    flagged ``already_set``.

    Args:
        folder: Folder containing the document
        target: The document and key to update
        config_format: Format the document is read and written in
        new_value: Value to write

    Returns:
        MutationResult describing the change

    Raises:
        DocumentError: If the document is missing, unparsable or unwritable,
            or the key cannot be read or set
    """
    path = find_document(folder, target.document, config_format)
    data = load_document(path, config_format)

    old_value = read_value(data, target.key)
    if old_value == new_value:
        logger.info(f"{target.key} in {path.name} already set to {new_value}")
        return MutationResult(
            document_path=str(path),
            key=target.key,
            old_value=old_value,
            new_value=new_value,
            already_set=True,
        )

    try:
        dpath.new(data, target.key, new_value, separator=".")
    except (PathNotFound, TypeError, ValueError) as e:
        raise DocumentError(f"Cannot set {target.key} in {path}: {e}") from e
    dump_document(path, data, config_format)
    logger.info(f"Updated {target.key} in {path.name} from {old_value} to {new_value}")

    return MutationResult(
        document_path=str(path),
        key=target.key,
        old_value=old_value,
        new_value=new_value,
    )


def mutate_documents(
    working_tree,
    folder: str,
    targets: Iterable[ConfigTarget],
    config_format: ConfigFormat,
    new_value: Any,
) -> List[MutationResult]:
    """Apply ``new_value`` to every target in order.

    Processing stops at the first target whose value is already set; the
    last result is then flagged ``already_set`` and the caller is expected
    to end the run without committing.

    Args:
        working_tree: Root of the cloned repository
        folder: Config folder relative to the working tree root
        targets: (document, key) pairs to update
        config_format: Format of every document
        new_value: Value to write

    Returns:
        List of MutationResult, one per processed target
    """
    config_dir = Path(working_tree) / folder.strip("/")
    results = []
    for target in targets:
        result = mutate_document(config_dir, target, config_format, new_value)
        results.append(result)
        if result.already_set:
            break
    return results
