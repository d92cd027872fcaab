"""Shared test fixtures for safe-router."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

PAGE_SOURCE = "export default function Page() { return null; }\n"


def write_files(root: Path, files: dict[str, str] | list[str]) -> Path:
    """Create *files* (relative paths) under *root* and return *root*."""
    if isinstance(files, list):
        files = dict.fromkeys(files, PAGE_SOURCE)
    for rel, content in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
    return root


@pytest.fixture
def next_app_project(tmp_path: Path) -> Path:
    """App Router project: dashboard, user/[id], user/[id]/posts/[postId]."""
    return write_files(tmp_path, [
        "app/dashboard/page.tsx",
        "app/user/[id]/page.tsx",
        "app/user/[id]/posts/[postId]/page.tsx",
    ])


@pytest.fixture
def next_page_project(tmp_path: Path) -> Path:
    """Pages Router project with index pages, a catch-all and _app."""
    return write_files(tmp_path, [
        "pages/_app.tsx",
        "pages/index.tsx",
        "pages/about.tsx",
        "pages/blog/index.tsx",
        "pages/blog/[slug].tsx",
        "pages/docs/[[...path]].tsx",
    ])


@pytest.fixture
def react_project(tmp_path: Path) -> Path:
    """React project declaring its routes in routes.json."""
    routes = [
        {"path": "/"},
        {"path": "/dashboard"},
        {"path": "/user/:id", "params": ["id"]},
        {"path": "/files/*path"},
        {"path": "/shop", "children": [
            {"index": True},
            {"path": ":itemId"},
        ]},
    ]
    (tmp_path / "routes.json").write_text(json.dumps(routes))
    return tmp_path


@pytest.fixture
def make_tree(tmp_path: Path):
    """Factory writing files under tmp_path; returns the project root."""

    def _make(files: dict[str, str] | list[str]) -> Path:
        return write_files(tmp_path, files)

    return _make


@pytest.fixture
def vanish_once(monkeypatch: pytest.MonkeyPatch):
    """Make the first listing of a directory named *name* fail as if just removed.

    Returns the list of directories that failed (at most one).
    """
    real_iterdir = Path.iterdir

    def _install(name: str) -> list[Path]:
        hits: list[Path] = []

        def iterdir(self: Path):
            if self.name == name and not hits:
                hits.append(self)
                raise FileNotFoundError(2, "No such file or directory", str(self))
            return real_iterdir(self)

        monkeypatch.setattr(Path, "iterdir", iterdir)
        return hits

    return _install
