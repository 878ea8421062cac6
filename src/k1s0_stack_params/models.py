"""stack-params データモデル"""

from __future__ import annotations

import json
import math
from dataclasses import dataclass, field
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field

# JSON ドキュメントから読み込まれる値の型。dict / list は構造化値として扱う。
ParamValue = Union[str, int, float, bool, list, dict]
ParamMap = dict[str, Any]


class RootDescriptor(BaseModel):
    """cloudformation.json のルート記述子。"""

    model_config = ConfigDict(populate_by_name=True, extra="allow", frozen=True)

    project: str = Field(min_length=1)
    template: str = Field(min_length=1)
    stack_prefix: str = Field(alias="stack-prefix", min_length=1)


# 1e21 以上の数値は整数表記にせず指数表記のまま出力する
_MAX_PLAIN_INTEGER = 1e21


def _normalize_number(value: Any) -> Any:
    """整数値の float を int に置き換える。dict / list は再帰的に処理する。"""
    if isinstance(value, float):
        if math.isfinite(value) and value.is_integer() and abs(value) < _MAX_PLAIN_INTEGER:
            return int(value)
        return value
    if isinstance(value, dict):
        return {k: _normalize_number(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_normalize_number(v) for v in value]
    return value


def stringify_value(value: ParamValue) -> str:
    """パラメータ値をワイヤ形式の文字列に変換する。

    bool は "true"/"false"、整数値の float は 1e21 未満なら小数部なし、
    dict / list はコンパクトな JSON 文字列になる (ネストした float も同じ規則)。
    """
    if value is None:
        raise TypeError("None cannot be rendered as a wire value")
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return json.dumps(_normalize_number(value))
    if isinstance(value, str):
        return value
    if isinstance(value, (dict, list)):
        return json.dumps(_normalize_number(value), separators=(",", ":"), ensure_ascii=False)
    raise TypeError(f"Unsupported value type: {type(value).__name__}")


@dataclass(frozen=True)
class ParameterRecord:
    """CloudFormation パラメータレコード。"""

    name: str
    value: str

    def to_dict(self) -> dict[str, str]:
        return {"ParameterName": self.name, "ParameterValue": self.value}


@dataclass(frozen=True)
class TagRecord:
    """CloudFormation タグレコード。"""

    key: str
    value: str

    def to_dict(self) -> dict[str, str]:
        return {"Key": self.key, "Value": self.value}


@dataclass
class StackParamsResult:
    """解決済みのスタックパラメータ一式。"""

    parameters: list[ParameterRecord]
    tags: list[TagRecord]
    stack_name: str
    template: str
    ci_build_id: str = ""
    merged_parameters: ParamMap = field(default_factory=dict)
    merged_tags: ParamMap = field(default_factory=dict)

    def to_outputs(self) -> dict[str, str]:
        """GitHub Actions の出力値に変換する。"""
        return {
            "parameters": json.dumps([p.to_dict() for p in self.parameters]),
            "stack-name": self.stack_name,
            "template": self.template,
            "tags": json.dumps([t.to_dict() for t in self.tags]),
            "ci-build-id": self.ci_build_id,
        }
