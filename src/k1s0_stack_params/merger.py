"""パラメータ・タグのマージとワイヤ形式への変換"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

from .exceptions import MergeError, StackParamsErrorCodes
from .models import ParameterRecord, ParamMap, TagRecord, stringify_value

WireRecord = Union[ParameterRecord, TagRecord]


class MapKind(str, Enum):
    """マップの種別。"""

    PARAMETER = "parameter"
    TAG = "tag"


@dataclass(frozen=True)
class MapLimits:
    """マップ種別ごとの CloudFormation 制約。"""

    max_keys: int
    max_key_length: int
    max_value_length: int
    key_pattern: re.Pattern[str] | None = None


_PARAMETER_NAME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9]*$")

LIMITS: dict[MapKind, MapLimits] = {
    MapKind.PARAMETER: MapLimits(
        max_keys=200,
        max_key_length=255,
        max_value_length=4096,
        key_pattern=_PARAMETER_NAME_RE,
    ),
    MapKind.TAG: MapLimits(max_keys=50, max_key_length=128, max_value_length=256),
}


def validate_map(data: Any, kind: MapKind, source: str) -> None:
    """マップの構造・キー・値を検証する。

    source はエラーメッセージ用の名前（"default" / "environment" / "merged"）。
    """
    label = f"{source} {kind.value}s"
    if not isinstance(data, dict):
        raise MergeError(
            code=StackParamsErrorCodes.INVALID_MAP,
            message=f"{label} must be a valid object (not an array), got {type(data).__name__}",
        )

    limits = LIMITS[kind]
    if len(data) > limits.max_keys:
        raise MergeError(
            code=StackParamsErrorCodes.TOO_MANY_KEYS,
            message=(
                f"Too many {label} ({len(data)}). "
                f"Maximum supported is {limits.max_keys} {kind.value}s."
            ),
        )

    for key, value in data.items():
        if not isinstance(key, str) or not key.strip():
            raise MergeError(
                code=StackParamsErrorCodes.INVALID_KEY,
                message=f"Invalid {source} {kind.value} name: '{key}'. Names must be non-empty strings.",
                key=str(key),
            )
        if len(key) > limits.max_key_length:
            raise MergeError(
                code=StackParamsErrorCodes.INVALID_KEY,
                message=(
                    f"{source} {kind.value} name '{key}' is too long ({len(key)} characters). "
                    f"Maximum length is {limits.max_key_length} characters."
                ),
                key=key,
            )
        if limits.key_pattern is not None and not limits.key_pattern.match(key):
            raise MergeError(
                code=StackParamsErrorCodes.INVALID_KEY,
                message=(
                    f"{source} {kind.value} name '{key}' contains invalid characters. "
                    "Names must start with a letter and contain only alphanumeric characters."
                ),
                key=key,
            )
        if value is None:
            raise MergeError(
                code=StackParamsErrorCodes.NULL_VALUE,
                message=f"{source} {kind.value} '{key}' has null or undefined value",
                key=key,
            )
        try:
            rendered = stringify_value(value)
        except TypeError as e:
            raise MergeError(
                code=StackParamsErrorCodes.INVALID_MAP,
                message=f"{source} {kind.value} '{key}' has an unsupported value: {e}",
                key=key,
                cause=e,
            ) from e
        if len(rendered) > limits.max_value_length:
            raise MergeError(
                code=StackParamsErrorCodes.VALUE_TOO_LONG,
                message=(
                    f"{source} {kind.value} '{key}' value is too long ({len(rendered)} characters). "
                    f"Maximum length is {limits.max_value_length} characters."
                ),
                key=key,
            )


def merge(base: ParamMap, override: ParamMap | None, kind: MapKind) -> ParamMap:
    """base と override をマージして新しい辞書を返す。

    override のキーは値が 0 / False / "" であっても常に優先される。
    override が None の場合は base のコピーを返す。
    """
    validate_map(base, kind, "default")
    if override is not None:
        validate_map(override, kind, "environment")

    result: ParamMap = dict(base)
    if override is None:
        return result
    for key, value in override.items():
        result[key] = value
    return result


def merge_parameters(base: ParamMap, override: ParamMap | None) -> ParamMap:
    """デフォルトパラメータに環境別パラメータをマージする。"""
    return merge(base, override, MapKind.PARAMETER)


def merge_tags(base: ParamMap, override: ParamMap | None) -> ParamMap:
    """デフォルトタグに環境別タグをマージする。"""
    return merge(base, override, MapKind.TAG)


def to_wire_format(merged: ParamMap, kind: MapKind) -> list[WireRecord]:
    """マージ済みマップを CloudFormation のレコード配列に変換する。"""
    validate_map(merged, kind, "merged")
    if kind is MapKind.PARAMETER:
        return [ParameterRecord(name=k, value=stringify_value(v)) for k, v in merged.items()]
    return [TagRecord(key=k, value=stringify_value(v)) for k, v in merged.items()]


def format_parameters(merged: ParamMap) -> list[ParameterRecord]:
    """パラメータを {ParameterName, ParameterValue} レコードに変換する。"""
    return to_wire_format(merged, MapKind.PARAMETER)  # type: ignore[return-value]


def format_tags(merged: ParamMap) -> list[TagRecord]:
    """タグを {Key, Value} レコードに変換する。"""
    return to_wire_format(merged, MapKind.TAG)  # type: ignore[return-value]
