from pathlib import Path

import pytest


def _write(root: Path, files: dict[str, str]) -> Path:
    for rel, content in files.items():
        p = root / rel
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(content, encoding="utf-8")
    return root


@pytest.fixture
def make_project(tmp_path):
    def _make(files: dict[str, str], name: str = "demo") -> Path:
        root = tmp_path / name
        root.mkdir()
        return _write(root, files)

    return _make
