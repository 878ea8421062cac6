"""設定ドキュメント読み込み

{root}/cloudformation.json と params/・tags/ 配下のマップを読み込む。
環境別ドキュメントはファイルが存在しない場合のみ None を返し、
存在するが不正な場合はエラーとする。
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Union

import structlog
from pydantic import ValidationError

from .exceptions import DocumentError, StackParamsErrorCodes
from .models import ParamMap, RootDescriptor

logger = structlog.get_logger(__name__)

ROOT_DESCRIPTOR_FILE = "cloudformation.json"
PARAMS_DIR = "params"
TAGS_DIR = "tags"
DEFAULT_DOCUMENT = "default.json"
REQUIRED_FIELDS: tuple[str, ...] = ("project", "template", "stack-prefix")

PathLike = Union[str, os.PathLike]


def _root(root_path: Any) -> Path:
    if isinstance(root_path, os.PathLike):
        root_path = os.fspath(root_path)
    if not isinstance(root_path, str) or not root_path.strip():
        raise DocumentError(
            code=StackParamsErrorCodes.INVALID_PATH,
            message="Folder path must be a non-empty string",
        )
    return Path(root_path)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Unsupported JSON constant: {name}")


def _read_json_object(path: Path, label: str) -> dict[str, Any]:
    """JSON オブジェクトのドキュメントを読み込む。

    FileNotFoundError はそのまま送出し、呼び出し側で必須／任意を判定する。
    """
    try:
        path.stat()
        if not path.is_file():
            raise DocumentError(
                code=StackParamsErrorCodes.NOT_A_FILE,
                message=f"Path exists but is not a file: {path}",
                path=str(path),
            )
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise
    except PermissionError as e:
        raise DocumentError(
            code=StackParamsErrorCodes.PERMISSION_DENIED,
            message=f"Permission denied accessing {label} file: {path}",
            path=str(path),
            cause=e,
        ) from e
    except IsADirectoryError as e:
        raise DocumentError(
            code=StackParamsErrorCodes.NOT_A_FILE,
            message=f"Expected file but found directory: {path}",
            path=str(path),
            cause=e,
        ) from e
    except (OSError, UnicodeDecodeError) as e:
        raise DocumentError(
            code=StackParamsErrorCodes.READ_FILE,
            message=f"Failed to read {label} from {path}: {e}",
            path=str(path),
            cause=e,
        ) from e

    if not text.strip():
        raise DocumentError(
            code=StackParamsErrorCodes.EMPTY,
            message=f"{label.capitalize()} file is empty: {path}",
            path=str(path),
        )

    try:
        data = json.loads(text, parse_constant=_reject_constant)
    except ValueError as e:
        raise DocumentError(
            code=StackParamsErrorCodes.INVALID_JSON,
            message=f"Invalid JSON format in {path.name} at {path}: {e}",
            path=str(path),
            cause=e,
        ) from e

    if not isinstance(data, dict):
        raise DocumentError(
            code=StackParamsErrorCodes.NOT_AN_OBJECT,
            message=f"{label.capitalize()} must be a JSON object, got {_json_type(data)}",
            path=str(path),
        )
    return data


def _json_type(data: Any) -> str:
    if data is None:
        return "null"
    if isinstance(data, list):
        return "array"
    if isinstance(data, bool):
        return "boolean"
    if isinstance(data, (int, float)):
        return "number"
    if isinstance(data, str):
        return "string"
    return type(data).__name__


def load_root_descriptor(root_path: PathLike) -> RootDescriptor:
    """cloudformation.json を読み込んで RootDescriptor を返す。"""
    path = _root(root_path) / ROOT_DESCRIPTOR_FILE
    try:
        data = _read_json_object(path, "CloudFormation configuration")
    except FileNotFoundError as e:
        raise DocumentError(
            code=StackParamsErrorCodes.NOT_FOUND,
            message=f"CloudFormation configuration file not found: {path}",
            path=str(path),
            cause=e,
        ) from e

    for name in REQUIRED_FIELDS:
        if data.get(name) in (None, ""):
            raise DocumentError(
                code=StackParamsErrorCodes.MISSING_FIELD,
                message=f"Missing required field: {name}",
                path=str(path),
                field=name,
            )

    try:
        descriptor = RootDescriptor.model_validate(data)
    except ValidationError as e:
        raise DocumentError(
            code=StackParamsErrorCodes.VALIDATION,
            message=f"CloudFormation configuration validation failed: {e}",
            path=str(path),
            cause=e,
        ) from e
    logger.debug("root descriptor loaded", path=str(path), project=descriptor.project)
    return descriptor


def load_required_map(root_path: PathLike, subfolder: str, filename: str) -> ParamMap:
    """必須のマップドキュメントを読み込む。空オブジェクト {} も有効。"""
    path = _root(root_path) / subfolder / filename
    try:
        return _read_json_object(path, f"{subfolder} document")
    except FileNotFoundError as e:
        raise DocumentError(
            code=StackParamsErrorCodes.NOT_FOUND,
            message=f"Required {subfolder} file not found: {path}",
            path=str(path),
            cause=e,
        ) from e


def load_optional_map(root_path: PathLike, subfolder: str, environment: Any) -> ParamMap | None:
    """環境別のマップドキュメントを読み込む。

    environment が空・非文字列の場合、またはファイルが存在しない場合は None。
    """
    base = _root(root_path)
    if not isinstance(environment, str) or not environment.strip():
        return None
    path = base / subfolder / f"{environment}.json"
    try:
        return _read_json_object(path, f"environment {subfolder} document")
    except FileNotFoundError:
        logger.debug("environment document not found", path=str(path))
        return None


def load_default_parameters(root_path: PathLike) -> ParamMap:
    """params/default.json を読み込む（必須）。"""
    return load_required_map(root_path, PARAMS_DIR, DEFAULT_DOCUMENT)


def load_environment_parameters(root_path: PathLike, environment: Any) -> ParamMap | None:
    """params/{environment}.json を読み込む（任意）。"""
    return load_optional_map(root_path, PARAMS_DIR, environment)


def load_default_tags(root_path: PathLike) -> ParamMap:
    """tags/default.json を読み込む。存在しない場合は空の辞書。"""
    try:
        return load_required_map(root_path, TAGS_DIR, DEFAULT_DOCUMENT)
    except DocumentError as e:
        if e.code != StackParamsErrorCodes.NOT_FOUND:
            raise
        logger.debug("default tags not found", path=e.path)
        return {}


def load_environment_tags(root_path: PathLike, environment: Any) -> ParamMap | None:
    """tags/{environment}.json を読み込む（任意）。"""
    return load_optional_map(root_path, TAGS_DIR, environment)
