"""
Reference Classification Module

Pure functions for telling commit SHAs apart from tag names.
This module contains no side effects - only string analysis logic.
"""

import re
from enum import Enum

COMMIT_SHA_PATTERN = re.compile(r"[0-9a-f]{5,40}")


class ReferenceType(Enum):
    """Enum for different git reference types."""
    COMMIT = "commit"
    TAG = "tag"


def is_commit_sha(ref: str) -> bool:
    """Return True if ``ref`` is 5 to 40 lowercase hex characters."""
    return bool(ref) and COMMIT_SHA_PATTERN.fullmatch(ref) is not None


def classify_reference(ref: str) -> ReferenceType:
    """
    Determine whether a reference is a raw commit SHA or a tag name.

    Anything that is not a full lowercase hex token of the right length
    is looked up as a tag.

    Args:
        ref: The reference string supplied by the caller

    Returns:
        ReferenceType enum value
    """
    if is_commit_sha(ref):
        return ReferenceType.COMMIT
    return ReferenceType.TAG
