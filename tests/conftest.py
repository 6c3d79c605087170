"""Pytest configuration and fixtures for impact estimator tests."""

import os
import shutil
import tempfile
from pathlib import Path
from typing import Callable, Dict, Generator

import pytest

# Tests import GitPython directly; let them load on machines without git
os.environ.setdefault("GIT_PYTHON_REFRESH", "quiet")


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    tmp = Path(tempfile.mkdtemp())
    yield tmp
    shutil.rmtree(tmp, ignore_errors=True)


@pytest.fixture
def make_project(temp_dir: Path) -> Callable[[Dict[str, str]], Path]:
    """Build a project tree from a {relative path: content} mapping."""

    def _make(files: Dict[str, str]) -> Path:
        root = temp_dir / "project"
        for relative, content in files.items():
            path = root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        root.mkdir(exist_ok=True)
        return root

    return _make


@pytest.fixture
def widget_project(make_project) -> Path:
    """A target declaring class Widget, one contextual caller and one unrelated caller."""
    return make_project({
        "src/widget.js": "export class Widget {\n  render() {\n    return 1;\n  }\n}\n",
        "src/app.js": "const widget = new Widget();\nwidget.render();\n",
        "src/other.js": "function draw() {\n  chart.render();\n}\n",
        "src/readme.md": "widget.js is documented here\n",
    })
