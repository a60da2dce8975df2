from __future__ import annotations

import os
from pathlib import Path

import pytest

from hybrid_html import paths
from hybrid_html.paths import resolve_reference_path, safe_relpath_under


def test_leading_slash_resolves_against_project_root(tmp_path: Path) -> None:
    project_root = tmp_path / "site"
    nested = project_root / "components" / "cards"

    resolved = resolve_reference_path("/shared/util.js", nested, project_root)

    assert resolved == project_root / "shared" / "util.js"


def test_leading_slash_ignores_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    project_root = tmp_path / "site"
    elsewhere = tmp_path / "elsewhere"
    elsewhere.mkdir()
    monkeypatch.chdir(elsewhere)

    resolved = resolve_reference_path("/img/logo.png", project_root / "a" / "b" / "c", project_root)

    assert resolved == project_root / "img" / "logo.png"


def test_relative_resolves_against_base_dir(tmp_path: Path) -> None:
    project_root = tmp_path / "site"
    component_dir = project_root / "components" / "header"

    assert resolve_reference_path("logo.png", component_dir, project_root) == component_dir / "logo.png"
    assert resolve_reference_path("./nav/menu.comp", component_dir, project_root) == (
        component_dir / "nav" / "menu.comp"
    )


def test_relative_parent_segments_are_normalized(tmp_path: Path) -> None:
    project_root = tmp_path / "site"
    component_dir = project_root / "components" / "header"

    resolved = resolve_reference_path("../../assets/app.js", component_dir, project_root)

    assert resolved == project_root / "assets" / "app.js"
    assert ".." not in resolved.parts


def test_system_absolute_path_is_returned_unchanged(monkeypatch: pytest.MonkeyPatch) -> None:
    # Drive-letter paths only count as absolute on Windows; emulate that here.
    monkeypatch.setattr(paths.os.path, "isabs", lambda p: str(p).startswith("C:"))

    resolved = resolve_reference_path("C:/tools/shared.js", "/base", "/project")

    assert str(resolved) == os.path.normpath("C:/tools/shared.js")


def test_project_root_check_precedes_absolute_check(tmp_path: Path) -> None:
    project_root = tmp_path / "site"

    resolved = resolve_reference_path("/etc/passwd.comp", project_root / "x", project_root)

    assert resolved == project_root / "etc" / "passwd.comp"


def test_resolution_does_not_touch_filesystem(tmp_path: Path) -> None:
    missing_root = tmp_path / "does" / "not" / "exist"

    resolved = resolve_reference_path("a/b.comp", missing_root, missing_root)

    assert resolved == missing_root / "a" / "b.comp"
    assert not missing_root.exists()


def test_safe_relpath_under(tmp_path: Path) -> None:
    assert safe_relpath_under(tmp_path, tmp_path / "a" / "b.txt") == "a/b.txt"
    with pytest.raises(ValueError):
        safe_relpath_under(tmp_path / "a", tmp_path / "b" / "c.txt")
