from __future__ import annotations

import os
from typing import Any, Iterable

from .types import ProgramSummary

# Same suffixes, with the same case sensitivity, as repo_scan.COMPILABLE_FILE_RE
TS_SUFFIXES = (".ts", ".tsx")
JS_SUFFIXES = (".js", ".jsx", ".mjs", ".cjs")
JSON_SUFFIXES = (".json",)


def create_program(root_files: Iterable[str], options: dict[str, Any]) -> ProgramSummary:
    """
    Check a set of root files against compiler options.

    Only tells which roots the compiler would load as sources under these
    options. Nothing is parsed or type-checked.
    """
    allow_js = bool(options.get("allowJs"))
    allow_json = bool(options.get("resolveJsonModule"))

    roots = list(root_files)
    sources: list[str] = []
    ignored: list[str] = []
    for path in roots:
        name = os.path.basename(path)
        if name.endswith(TS_SUFFIXES):
            sources.append(path)
        elif name.endswith(JS_SUFFIXES) and allow_js:
            sources.append(path)
        elif name.endswith(JSON_SUFFIXES) and allow_json:
            sources.append(path)
        else:
            ignored.append(path)

    return ProgramSummary(root_files=len(roots), source_files=sources, ignored_files=ignored)
