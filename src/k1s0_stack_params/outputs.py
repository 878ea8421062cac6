"""GitHub Actions 出力ファイルへの書き込み"""

from __future__ import annotations

import uuid
from collections.abc import Mapping
from pathlib import Path

from .exceptions import StackParamsError, StackParamsErrorCodes


def format_output(name: str, value: str) -> str:
    """1 件の出力を GITHUB_OUTPUT の書式に変換する。

    改行を含む値はヒアドキュメント形式で書き出す。
    """
    if "\n" not in value and "\r" not in value:
        return f"{name}={value}\n"
    delimiter = f"ghadelimiter_{uuid.uuid4()}"
    return f"{name}<<{delimiter}\n{value}\n{delimiter}\n"


def write_outputs(path: str | Path, outputs: Mapping[str, str]) -> None:
    """出力値を GITHUB_OUTPUT ファイルに追記する。"""
    text = "".join(format_output(name, value) for name, value in outputs.items())
    try:
        with Path(path).open("a", encoding="utf-8") as f:
            f.write(text)
    except OSError as e:
        raise StackParamsError(
            code=StackParamsErrorCodes.WRITE_OUTPUT,
            message=f"Failed to write action outputs to {path}: {e}",
            cause=e,
        ) from e
