"""CI ビルド ID 生成ユーティリティ"""

from __future__ import annotations

import random
import re
import string

from .exceptions import GeneratorError, StackParamsErrorCodes

MIN_ID_LENGTH = 6
MAX_ID_LENGTH = 10
DEFAULT_ID_LENGTH = 8

_ALPHABET = string.ascii_lowercase
_ID_RE = re.compile(r"^[a-z]+$")


def validate_id_format(value: object) -> bool:
    """ID が 6〜10 文字の英小文字のみで構成されているか確認する。"""
    if not isinstance(value, str):
        return False
    if not MIN_ID_LENGTH <= len(value) <= MAX_ID_LENGTH:
        return False
    return _ID_RE.match(value) is not None


def generate_ci_build_id(length: int = DEFAULT_ID_LENGTH) -> str:
    """英小文字のランダムな CI ビルド ID を生成する。

    一意性は保証しない。
    """
    if isinstance(length, bool) or not isinstance(length, (int, float)):
        raise GeneratorError(
            code=StackParamsErrorCodes.INVALID_LENGTH,
            message=f"Random ID length must be a number, got {type(length).__name__}",
        )
    if not isinstance(length, int):
        raise GeneratorError(
            code=StackParamsErrorCodes.INVALID_LENGTH,
            message="Random ID length must be an integer",
        )
    if not MIN_ID_LENGTH <= length <= MAX_ID_LENGTH:
        raise GeneratorError(
            code=StackParamsErrorCodes.INVALID_LENGTH,
            message=(
                f"Random ID length must be between {MIN_ID_LENGTH} and {MAX_ID_LENGTH} "
                f"characters, got {length}"
            ),
        )

    result = "".join(random.choices(_ALPHABET, k=length))

    if not validate_id_format(result) or len(result) != length:
        raise GeneratorError(
            code=StackParamsErrorCodes.INTERNAL,
            message=f"Generated ID failed validation: {result}",
        )
    return result
