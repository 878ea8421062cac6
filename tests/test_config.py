"""アクション入力設定のユニットテスト"""

import pytest
from k1s0_stack_params.config import (
    UNKNOWN,
    ActionInputs,
    GitHubContext,
    parse_boolean_input,
    validate_inputs,
)
from k1s0_stack_params.exceptions import InputError, StackParamsErrorCodes


@pytest.mark.parametrize(
    ("value", "expected"),
    [("true", True), ("TRUE", True), (" True ", True), ("false", False), ("", False), (None, False)],
)
def test_parse_boolean_input(value, expected: bool) -> None:
    """true / false の入力が解釈されること。"""
    assert parse_boolean_input(value) is expected


@pytest.mark.parametrize("value", ["yes", "1", "maybe"])
def test_parse_boolean_input_invalid(value: str) -> None:
    """true / false 以外は INVALID_INPUT になること。"""
    with pytest.raises(InputError) as exc_info:
        parse_boolean_input(value)
    assert exc_info.value.code == StackParamsErrorCodes.INVALID_INPUT


def test_action_inputs_from_env_defaults() -> None:
    """環境変数が無い場合のデフォルト値。"""
    inputs = ActionInputs.from_env({})
    assert inputs == ActionInputs(cfn_directory="cfn", ci_build=False, environment="")


def test_action_inputs_from_env() -> None:
    """INPUT_* 環境変数から入力を組み立てること。"""
    inputs = ActionInputs.from_env(
        {
            "INPUT_CFN_DIRECTORY": "infra/cfn",
            "INPUT_CI_BUILD": "true",
            "INPUT_ENVIRONMENT": "prod",
        }
    )
    assert inputs.cfn_directory == "infra/cfn"
    assert inputs.ci_build is True
    assert inputs.environment == "prod"


def test_github_context_defaults_to_unknown() -> None:
    """GitHub 環境変数が無い場合は unknown になること。"""
    context = GitHubContext.from_env({})
    assert context.sha == UNKNOWN
    assert context.actor == UNKNOWN
    assert context.workflow == UNKNOWN
    assert context.org == UNKNOWN
    assert context.repo == UNKNOWN


def test_github_context_repository_split() -> None:
    """owner/repo が組織名とリポジトリ名に分割されること。"""
    context = GitHubContext.from_env({"GITHUB_REPOSITORY": "acme/widgets"})
    assert context.org == "acme"
    assert context.repo == "widgets"


@pytest.mark.parametrize(
    "inputs",
    [
        ActionInputs(cfn_directory="", environment="prod"),
        ActionInputs(cfn_directory="../cfn", environment="prod"),
        ActionInputs(cfn_directory="~/cfn", environment="prod"),
        ActionInputs(cfn_directory="/etc/cfn", environment="prod"),
        ActionInputs(cfn_directory="c" * 256, environment="prod"),
        ActionInputs(ci_build=False, environment=""),
        ActionInputs(ci_build=False, environment="   "),
        ActionInputs(environment="e" * 101),
        ActionInputs(environment="prod/eu"),
        ActionInputs(ci_build=True, environment="bad name"),
    ],
)
def test_validate_inputs_rejects(inputs: ActionInputs) -> None:
    """不正な入力をファイル I/O 前に拒否すること。"""
    with pytest.raises(InputError) as exc_info:
        validate_inputs(inputs)
    assert exc_info.value.code == StackParamsErrorCodes.INVALID_INPUT


@pytest.mark.parametrize(
    "inputs",
    [
        ActionInputs(environment="sb-prod-us-east-1"),
        ActionInputs(environment="dev_eu"),
        ActionInputs(ci_build=True),
        ActionInputs(ci_build=True, environment="prod"),
        ActionInputs(cfn_directory="infra/cfn", environment="prod"),
    ],
)
def test_validate_inputs_accepts(inputs: ActionInputs) -> None:
    """有効な入力を受け付けること。"""
    validate_inputs(inputs)
