"""アクション入力と GitHub コンテキストの設定"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass

import structlog

from .exceptions import InputError, StackParamsErrorCodes

logger = structlog.get_logger(__name__)

UNKNOWN = "unknown"
DEFAULT_CFN_DIRECTORY = "cfn"
MAX_DIRECTORY_LENGTH = 255
MAX_ENVIRONMENT_LENGTH = 100

_ENVIRONMENT_RE = re.compile(r"^[A-Za-z0-9_-]+$")


def parse_boolean_input(value: str | None) -> bool:
    """"true" / "false" の入力値を bool に変換する。空の場合は False。"""
    if not value:
        return False
    normalized = value.strip().lower()
    if normalized == "true":
        return True
    if normalized == "false":
        return False
    raise InputError(
        code=StackParamsErrorCodes.INVALID_INPUT,
        message=f"Invalid boolean value for ci-build: {value}. Must be 'true' or 'false'",
    )


@dataclass(frozen=True)
class ActionInputs:
    """アクション入力。"""

    cfn_directory: str = DEFAULT_CFN_DIRECTORY
    ci_build: bool = False
    environment: str = ""

    @classmethod
    def from_env(cls, environ: Mapping[str, str]) -> ActionInputs:
        """INPUT_* 環境変数から入力を組み立てる。"""
        return cls(
            cfn_directory=environ.get("INPUT_CFN_DIRECTORY") or DEFAULT_CFN_DIRECTORY,
            ci_build=parse_boolean_input(environ.get("INPUT_CI_BUILD") or "false"),
            environment=environ.get("INPUT_ENVIRONMENT") or "",
        )


@dataclass(frozen=True)
class GitHubContext:
    """プロビナンスタグ用の GitHub ワークフロー情報。"""

    sha: str = UNKNOWN
    actor: str = UNKNOWN
    workflow: str = UNKNOWN
    repository: str = UNKNOWN

    @classmethod
    def from_env(cls, environ: Mapping[str, str]) -> GitHubContext:
        return cls(
            sha=environ.get("GITHUB_SHA") or UNKNOWN,
            actor=environ.get("GITHUB_ACTOR") or UNKNOWN,
            workflow=environ.get("GITHUB_WORKFLOW") or UNKNOWN,
            repository=environ.get("GITHUB_REPOSITORY") or UNKNOWN,
        )

    @property
    def org(self) -> str:
        owner, _, _ = self.repository.partition("/")
        return owner or UNKNOWN

    @property
    def repo(self) -> str:
        parts = self.repository.split("/")
        if len(parts) < 2 or not parts[1]:
            return UNKNOWN
        return parts[1]


def validate_inputs(inputs: ActionInputs) -> None:
    """ファイル I/O の前にアクション入力を検証する。"""
    folder = inputs.cfn_directory
    if not isinstance(folder, str) or not folder.strip():
        raise InputError(
            code=StackParamsErrorCodes.INVALID_INPUT,
            message="Folder input cannot be empty and must be a valid string",
        )
    if ".." in folder or "~" in folder or folder.startswith("/"):
        raise InputError(
            code=StackParamsErrorCodes.INVALID_INPUT,
            message="Folder path contains potentially unsafe characters. Use relative paths only.",
        )
    if len(folder) > MAX_DIRECTORY_LENGTH:
        raise InputError(
            code=StackParamsErrorCodes.INVALID_INPUT,
            message=f"Folder path is too long. Maximum length is {MAX_DIRECTORY_LENGTH} characters.",
        )

    environment = inputs.environment.strip() if isinstance(inputs.environment, str) else ""
    if not inputs.ci_build and not environment:
        raise InputError(
            code=StackParamsErrorCodes.INVALID_INPUT,
            message="Environment input is required when ci-build is false and must be a valid string",
        )
    if environment:
        if len(environment) > MAX_ENVIRONMENT_LENGTH:
            raise InputError(
                code=StackParamsErrorCodes.INVALID_INPUT,
                message=(
                    "Environment name is too long. "
                    f"Maximum length is {MAX_ENVIRONMENT_LENGTH} characters."
                ),
            )
        if not _ENVIRONMENT_RE.match(environment):
            raise InputError(
                code=StackParamsErrorCodes.INVALID_INPUT,
                message=(
                    "Environment name contains invalid characters. Only alphanumeric "
                    "characters, hyphens, and underscores are allowed."
                ),
            )
    if inputs.ci_build and environment:
        logger.warning("environment input is ignored for stack naming when ci-build is true")
