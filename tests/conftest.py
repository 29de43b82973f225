from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest

from dotgrid.core.runtime_config import set_config_path


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """CWD/HOME を tmp_path 配下へ移し、config の探索とキャッシュを初期化する。"""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    set_config_path(None)
    yield
    set_config_path(None)
