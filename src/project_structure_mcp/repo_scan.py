from __future__ import annotations

import os
import re
from pathlib import Path

from .types import Language

EXCLUDE_DIRS = {"node_modules"}

HIDDEN_PREFIX = "."

LANGUAGE_BY_SUFFIX: dict[str, Language] = {
    ".ts": "typescript",
    ".tsx": "typescript",
    ".js": "javascript",
    ".jsx": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
    ".json": "json",
    ".svelte": "svelte",
}

# Files the compiler can take as program roots (declaration files end in .ts too)
COMPILABLE_FILE_RE = re.compile(r"\.(ts|tsx|js|jsx|mjs|cjs|json)$")


def is_excluded(name: str) -> bool:
    return name in EXCLUDE_DIRS or name.startswith(HIDDEN_PREFIX)


def classify_language(file_name: str) -> Language:
    suffix = os.path.splitext(file_name)[1].lower()
    return LANGUAGE_BY_SUFFIX.get(suffix, "other")


def is_compilable(file_name: str) -> bool:
    return COMPILABLE_FILE_RE.search(file_name) is not None


def collect_compilable_files(root: str | Path) -> list[str]:
    """
    Walk `root` and return absolute paths of every file the compiler could load.
    Excluded entries are skipped at every level; order follows the directory listing.
    """
    found: list[str] = []
    _collect(os.path.abspath(root), found)
    return found


def _collect(directory: str, found: list[str]) -> None:
    with os.scandir(directory) as entries:
        for entry in entries:
            if is_excluded(entry.name):
                continue
            if entry.is_dir(follow_symlinks=False):
                _collect(entry.path, found)
            elif is_compilable(entry.name):
                found.append(entry.path)
