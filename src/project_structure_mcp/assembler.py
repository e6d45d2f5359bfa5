"""
Project structure analysis entry points.

`assemble` runs the whole analysis for one root and is the only place
exceptions are turned into a result value. `analyze_project` is the
operation exposed to clients: a structure on success, None otherwise.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional, Union

from .config_loader import AnalyzerSettings
from .errors import InvalidRootError
from .program import create_program
from .repo_scan import collect_compilable_files
from .tree_builder import TreeBuilder
from .tsconfig import resolve_config
from .types import AnalysisFailure, DirectoryNode, NodeIndex, ProjectStructure
from .utils import birthtime_iso, new_id, now_iso

logger = logging.getLogger(__name__)


def _validate_root(project_path: str | Path) -> str:
    root = os.path.abspath(project_path)
    if not os.path.isdir(root):
        raise InvalidRootError(root)
    return root


def _build_structure(root: str, settings: AnalyzerSettings) -> ProjectStructure:
    project_name = os.path.basename(root)
    analyzed_at = now_iso()
    root_id = new_id()

    config = resolve_config(root)
    if not config.overlay_applied and config.config_path:
        logger.info("Analyzing %s with default compiler options", root)

    # Second walk below is independent of this one; only the summary is kept.
    program_files = collect_compilable_files(root)
    summary = create_program(program_files, config.options)
    logger.debug(
        "Program check for %s: %d roots, %d sources, %d ignored",
        root, summary.root_files, len(summary.source_files), len(summary.ignored_files),
    )

    index = NodeIndex()
    builder = TreeBuilder(
        root,
        index,
        sort_children=settings.sort_children,
        max_depth=settings.max_depth,
    )
    files, dirs = builder.build(root, root_id)

    root_dir = DirectoryNode(
        id=root_id,
        name=project_name,
        path="",
        parent_id=None,
        created_at=birthtime_iso(os.stat(root)),
        child_file_nodes=files,
        child_directory_nodes=dirs,
    )
    index.add_directory(root_dir)

    logger.info(
        "Analyzed %s: %d directories, %d files",
        root, len(index.directories) - 1, len(index.files),
    )
    return ProjectStructure(
        id=new_id(),
        name=project_name,
        root_path=root,
        created_at=analyzed_at,
        root_directory=root_dir,
    )


def assemble(
    project_path: str | Path,
    settings: Optional[AnalyzerSettings] = None,
) -> Union[ProjectStructure, AnalysisFailure]:
    settings = settings or AnalyzerSettings()
    root = os.fspath(project_path)
    try:
        root = _validate_root(root)
        return _build_structure(root, settings)
    except InvalidRootError as e:
        logger.error("%s", e)
        return AnalysisFailure(kind="invalid_root", message=str(e), root_path=e.path)
    except OSError as e:
        logger.exception("I/O error analyzing project %s", root)
        return AnalysisFailure(kind="io_error", message=str(e), root_path=root)
    except Exception as e:
        logger.exception("Unexpected error analyzing project %s", root)
        return AnalysisFailure(kind="unexpected", message=str(e), root_path=root)


def analyze_project(
    project_path: str | Path,
    settings: Optional[AnalyzerSettings] = None,
) -> Optional[ProjectStructure]:
    result = assemble(project_path, settings)
    if isinstance(result, AnalysisFailure):
        return None
    return result
