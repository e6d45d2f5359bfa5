from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from .errors import TraversalDepthError
from .repo_scan import classify_language, is_excluded
from .types import DirectoryNode, FileNode, NodeIndex
from .utils import birthtime_iso, join_rel, new_id


class TreeBuilder:
    """
    Builds the directory/file model below a project root.

    - One instance per analysis; the NodeIndex it fills is owned by the caller.
    - Children keep the order of the directory listing unless sort_children is set.
    - Symlinks are listed as files and never descended into.
    """

    def __init__(
        self,
        root: str | Path,
        index: NodeIndex,
        sort_children: bool = False,
        max_depth: Optional[int] = None,
    ) -> None:
        self.root = os.path.abspath(root)
        self.index = index
        self.sort_children = sort_children
        self.max_depth = max_depth

    def build(
        self,
        directory: str,
        parent_id: str,
        parent_path: str = "",
        depth: int = 1,
    ) -> tuple[list[FileNode], list[DirectoryNode]]:
        if self.max_depth is not None and depth > self.max_depth:
            raise TraversalDepthError(directory, self.max_depth)

        files: list[FileNode] = []
        dirs: list[DirectoryNode] = []

        with os.scandir(directory) as it:
            entries = [e for e in it if not is_excluded(e.name)]
        if self.sort_children:
            entries.sort(key=lambda e: e.name)

        for entry in entries:
            rel = join_rel(parent_path, entry.name)
            entry_id = new_id()
            created_at = birthtime_iso(entry.stat())

            if entry.is_dir(follow_symlinks=False):
                child_files, child_dirs = self.build(entry.path, entry_id, rel, depth + 1)
                node = DirectoryNode(
                    id=entry_id,
                    name=entry.name,
                    path=rel,
                    parent_id=parent_id,
                    created_at=created_at,
                    child_file_nodes=child_files,
                    child_directory_nodes=child_dirs,
                )
                dirs.append(node)
                self.index.add_directory(node)
            else:
                file_node = FileNode(
                    id=entry_id,
                    name=entry.name,
                    path=rel,
                    language=classify_language(entry.name),
                    created_at=created_at,
                    directory_id=parent_id,
                )
                files.append(file_node)
                self.index.add_file(file_node)

        return files, dirs
