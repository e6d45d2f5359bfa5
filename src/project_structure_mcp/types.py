from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal, Optional


Language = Literal["typescript", "javascript", "json", "svelte", "other"]

FailureKind = Literal["invalid_root", "io_error", "unexpected"]

DiagnosticCode = Literal["read-error", "parse-error", "conversion-error"]


@dataclass
class FileNode:
    id: str
    name: str
    path: str
    language: Language
    created_at: str
    directory_id: Optional[str]

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "path": self.path,
            "language": self.language,
            "createdAt": self.created_at,
            "directoryId": self.directory_id,
        }


@dataclass
class DirectoryNode:
    id: str
    name: str
    path: str
    parent_id: Optional[str]
    created_at: str
    child_file_nodes: list[FileNode] = field(default_factory=list)
    child_directory_nodes: list[DirectoryNode] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "path": self.path,
            "parentId": self.parent_id,
            "createdAt": self.created_at,
            "childFileNodes": [f.to_dict() for f in self.child_file_nodes],
            "childDirectoryNodes": [d.to_dict() for d in self.child_directory_nodes],
        }


@dataclass
class ProjectStructure:
    id: str
    name: str
    root_path: str
    created_at: str
    root_directory: DirectoryNode

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "rootPath": self.root_path,
            "createdAt": self.created_at,
            "rootDirectory": self.root_directory.to_dict(),
        }


@dataclass
class NodeIndex:
    """
    Path -> node lookup filled while a single tree is built.
    Owned by one analysis call; never shared between calls.
    """

    directories: dict[str, DirectoryNode] = field(default_factory=dict)
    files: dict[str, FileNode] = field(default_factory=dict)

    def add_directory(self, node: DirectoryNode) -> None:
        self.directories[node.path] = node

    def add_file(self, node: FileNode) -> None:
        self.files[node.path] = node


@dataclass
class ConfigDiagnostic:
    code: DiagnosticCode
    message: str
    option: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {"code": self.code, "message": self.message, "option": self.option}


@dataclass
class ResolvedConfig:
    options: dict[str, Any]
    diagnostics: list[ConfigDiagnostic] = field(default_factory=list)
    config_path: Optional[str] = None
    overlay_applied: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "options": dict(self.options),
            "diagnostics": [d.to_dict() for d in self.diagnostics],
            "configPath": self.config_path,
            "overlayApplied": self.overlay_applied,
        }


@dataclass
class ProgramSummary:
    root_files: int
    source_files: list[str]
    ignored_files: list[str]


@dataclass
class AnalysisFailure:
    kind: FailureKind
    message: str
    root_path: str
