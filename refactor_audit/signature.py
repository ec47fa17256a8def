"""Pool signatures: collapse issue messages that differ only in variable parts.

Quoted literals, numbers, home-directory paths and the feature segment of
workflow-doc paths are erased so the same finding in different files or on
different lines lands in one pool.
"""
from __future__ import annotations

import re

from refactor_audit.models import Issue

MAX_KEY_LENGTH = 500
MAX_SLUG_LENGTH = 120

# Applied in order. The bare feature rule runs first and also rewrites the
# tail of nested paths; the nested rule then finds them already normalized.
_NORMALIZERS: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"'[^']*'"), "''"),
    (re.compile(r'"[^"]*"'), '""'),
    (re.compile(r"\b\d+\b"), "0"),
    (re.compile(r"/Users/[^ ]+"), "/Users/..."),
    (re.compile(r"/home/[^ ]+"), "/home/..."),
    (re.compile(r"project-manager/features/[^/]+"), "project-manager/features/<feature>"),
    (re.compile(r"\.cursor/project-manager/features/[^/]+"), ".cursor/project-manager/features/<feature>"),
]

_NON_SLUG = re.compile(r"[^a-z0-9]+")


def normalize_message(message: str) -> str:
    for pattern, replacement in _NORMALIZERS:
        message = pattern.sub(replacement, message)
    return message


def stable_pool_key(issue: Issue) -> str:
    """``kind::normalized message``, cut at MAX_KEY_LENGTH.

    The cut is lossy: two long messages sharing their first 500 characters
    share a pool.
    """
    return f"{issue.kind}::{normalize_message(issue.message or '')}"[:MAX_KEY_LENGTH]


def slugify(value: str, max_len: int = MAX_SLUG_LENGTH) -> str:
    return _NON_SLUG.sub("-", str(value).lower()).strip("-")[:max_len]
