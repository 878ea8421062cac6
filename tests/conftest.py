"""テスト共通フィクスチャ"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

import pytest
import structlog

WriteJson = Callable[[str, Any], Path]


@pytest.fixture(autouse=True)
def _structlog_to_stdlib() -> Iterator[None]:
    """ログを標準ライブラリ経由にし、標準出力を汚さないようにする。"""
    root = logging.getLogger()
    level = root.level
    structlog.configure(
        processors=[structlog.processors.add_log_level, structlog.processors.JSONRenderer()],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )
    yield
    # new_logger の basicConfig が追加したハンドラだけを外す
    for handler in [h for h in root.handlers if type(h) is logging.StreamHandler]:
        root.removeHandler(handler)
    root.setLevel(level)


@pytest.fixture
def cfn_dir(tmp_path: Path) -> Path:
    """空の cfn 設定フォルダ。"""
    folder = tmp_path / "cfn"
    folder.mkdir()
    return folder


@pytest.fixture
def write_json(cfn_dir: Path) -> WriteJson:
    """cfn フォルダ配下に JSON ファイルを書き込むヘルパー。"""

    def _write(relative: str, data: Any) -> Path:
        path = cfn_dir / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(data if isinstance(data, str) else json.dumps(data), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def descriptor_data() -> dict[str, str]:
    return {"project": "myapp", "template": "template.yaml", "stack-prefix": "api"}
