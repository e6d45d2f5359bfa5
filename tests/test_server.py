import pytest

from project_structure_mcp import server
from project_structure_mcp.config_loader import AnalyzerSettings


@pytest.fixture
def lifespan_context(monkeypatch):
    monkeypatch.setattr(server, "_ctx", lambda: {"settings": AnalyzerSettings(sort_children=True)})


def test_analyze_project_requires_path():
    with pytest.raises(ValueError, match="No projectPath provided"):
        server.analyze_project("")


def test_analyze_project_returns_wire_shape(make_project, lifespan_context):
    root = make_project({"src/app.ts": "", "package.json": "{}"})
    data = server.analyze_project(str(root))
    assert data["name"] == root.name
    assert data["rootDirectory"]["childFileNodes"][0]["name"] == "package.json"
    assert data["rootDirectory"]["childDirectoryNodes"][0]["name"] == "src"


def test_analyze_project_failure_is_server_error(tmp_path, lifespan_context):
    with pytest.raises(RuntimeError, match="Failed to analyze project"):
        server.analyze_project(str(tmp_path / "missing"))


def test_resolve_compiler_config(make_project):
    root = make_project({"tsconfig.json": '{"compilerOptions": {"strict": true}}'})
    data = server.resolve_compiler_config(str(root))
    assert data["overlayApplied"] is True
    assert data["options"]["strict"] is True
    assert data["options"]["noEmit"] is True
    assert data["diagnostics"] == []


def test_resolve_compiler_config_requires_path():
    with pytest.raises(ValueError):
        server.resolve_compiler_config("")
