"""データモデルのユニットテスト"""

import json

import pytest
from k1s0_stack_params.models import (
    ParameterRecord,
    RootDescriptor,
    StackParamsResult,
    TagRecord,
    stringify_value,
)
from pydantic import ValidationError


def test_root_descriptor_alias() -> None:
    """stack-prefix エイリアスで生成できること。"""
    descriptor = RootDescriptor.model_validate(
        {"project": "p", "template": "t.yaml", "stack-prefix": "s", "region": "us-east-1"}
    )
    assert descriptor.stack_prefix == "s"


def test_root_descriptor_requires_fields() -> None:
    """必須フィールドが無い場合 ValidationError になること。"""
    with pytest.raises(ValidationError):
        RootDescriptor.model_validate({"project": "p", "template": "t.yaml"})


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("text", "text"),
        ("", ""),
        (42, "42"),
        (-7, "-7"),
        (1.0, "1"),
        (2.5, "2.5"),
        (1e20, "100000000000000000000"),
        (1e21, "1e+21"),
        (-1e21, "-1e+21"),
        (1e300, "1e+300"),
        (True, "true"),
        (False, "false"),
        ([1, "a"], '[1,"a"]'),
        ({"k": {"n": None}}, '{"k":{"n":null}}'),
        ({"name": "東京"}, '{"name":"東京"}'),
        ({"k": 1.0}, '{"k":1}'),
        ([2.0, 2.5, {"n": 1e21}], '[2,2.5,{"n":1e+21}]'),
    ],
)
def test_stringify_value(value, expected: str) -> None:
    """値が CloudFormation の文字列表現に変換されること。"""
    assert stringify_value(value) == expected


def test_stringify_value_rejects_none() -> None:
    """None は変換できないこと。"""
    with pytest.raises(TypeError):
        stringify_value(None)


def test_result_to_outputs() -> None:
    """結果が GitHub Actions の出力値に変換されること。"""
    result = StackParamsResult(
        parameters=[ParameterRecord(name="VpcId", value="vpc-1")],
        tags=[TagRecord(key="Team", value="platform")],
        stack_name="myapp-api-prod",
        template="template.yaml",
    )
    outputs = result.to_outputs()
    assert json.loads(outputs["parameters"]) == [
        {"ParameterName": "VpcId", "ParameterValue": "vpc-1"}
    ]
    assert json.loads(outputs["tags"]) == [{"Key": "Team", "Value": "platform"}]
    assert outputs["stack-name"] == "myapp-api-prod"
    assert outputs["template"] == "template.yaml"
    assert outputs["ci-build-id"] == ""
