"""stack-params ライブラリの例外型定義"""

from __future__ import annotations


class StackParamsError(Exception):
    """stack-params ライブラリのエラー基底クラス。"""

    def __init__(
        self,
        code: str,
        message: str,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return f"{self.code}: {super().__str__()}"


class InputError(StackParamsError):
    """アクション入力の検証エラー。"""


class DocumentError(StackParamsError):
    """設定ドキュメントの読み込みエラー。"""

    def __init__(
        self,
        code: str,
        message: str,
        *,
        path: str | None = None,
        field: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(code, message, cause)
        self.path = path
        self.field = field


class MergeError(StackParamsError):
    """パラメータ・タグのマージ／整形エラー。"""

    def __init__(
        self,
        code: str,
        message: str,
        *,
        key: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(code, message, cause)
        self.key = key


class NamingError(StackParamsError):
    """スタック名生成エラー。"""


class GeneratorError(StackParamsError):
    """CI ビルド ID 生成エラー。"""


class StackParamsErrorCodes:
    """StackParamsError のエラーコード定数。"""

    INVALID_INPUT: str = "INVALID_INPUT"

    INVALID_PATH: str = "INVALID_PATH"
    NOT_FOUND: str = "NOT_FOUND"
    NOT_A_FILE: str = "NOT_A_FILE"
    PERMISSION_DENIED: str = "PERMISSION_DENIED"
    READ_FILE: str = "READ_FILE_ERROR"
    WRITE_OUTPUT: str = "WRITE_OUTPUT_ERROR"
    EMPTY: str = "EMPTY_DOCUMENT"
    INVALID_JSON: str = "INVALID_JSON"
    NOT_AN_OBJECT: str = "NOT_AN_OBJECT"
    MISSING_FIELD: str = "MISSING_FIELD"
    VALIDATION: str = "VALIDATION_ERROR"

    INVALID_MAP: str = "INVALID_MAP"
    TOO_MANY_KEYS: str = "TOO_MANY_KEYS"
    INVALID_KEY: str = "INVALID_KEY"
    NULL_VALUE: str = "NULL_VALUE"
    VALUE_TOO_LONG: str = "VALUE_TOO_LONG"

    INVALID_NAME: str = "INVALID_NAME"
    NAME_TOO_LONG: str = "NAME_TOO_LONG"
    BRANCH_RESOLUTION_FAILED: str = "BRANCH_RESOLUTION_FAILED"
    SANITIZATION_EMPTY: str = "SANITIZATION_EMPTY"

    INVALID_LENGTH: str = "INVALID_LENGTH"
    INTERNAL: str = "INTERNAL_ERROR"
