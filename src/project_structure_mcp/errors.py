from __future__ import annotations


class ProjectStructureError(Exception):
    pass


class InvalidRootError(ProjectStructureError):
    def __init__(self, path: str) -> None:
        super().__init__(f"Project path {path} does not exist or is not a directory.")
        self.path = path


class TraversalDepthError(ProjectStructureError):
    def __init__(self, path: str, max_depth: int) -> None:
        super().__init__(f"Directory nesting deeper than {max_depth} levels at {path}")
        self.path = path
        self.max_depth = max_depth


class ConfigParseError(ProjectStructureError):
    """tsconfig.json is not valid (lenient) JSON."""


class ConfigConversionError(ProjectStructureError):
    """compilerOptions contains unknown options or values of the wrong type."""

    def __init__(self, errors: list[tuple[str, str]]) -> None:
        super().__init__("; ".join(msg for _, msg in errors))
        self.errors = errors
