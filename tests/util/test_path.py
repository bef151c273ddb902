from __future__ import annotations

import os
from pathlib import Path

import pytest

from buildsrc.util.path import canonicalize, expand_user


def test_absolute_path_is_kept(tmp_path: Path) -> None:
    assert canonicalize(tmp_path / "a.txt") == tmp_path / "a.txt"


def test_relative_path_resolves_against_cwd(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(tmp_path)
    assert canonicalize("x.txt") == Path(os.getcwd()) / "x.txt"


def test_dot_segments_collapse(tmp_path: Path) -> None:
    raw = f"{tmp_path}/sub/./../b.txt"
    assert canonicalize(raw) == tmp_path / "b.txt"


def test_missing_path_is_fine(tmp_path: Path) -> None:
    missing = tmp_path / "nope" / "c.txt"
    assert canonicalize(missing) == missing
    assert not missing.exists()


def test_reject_empty() -> None:
    with pytest.raises(ValueError):
        canonicalize("")


def test_reject_bytes() -> None:
    with pytest.raises(TypeError):
        canonicalize(b"/tmp/a.txt")  # type: ignore[arg-type]


def test_expand_user(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))
    assert expand_user("~/cfg.xml") == tmp_path / "cfg.xml"


def test_reject_nul() -> None:
    with pytest.raises(ValueError, match="NUL"):
        canonicalize("/tmp/a\x00b")
