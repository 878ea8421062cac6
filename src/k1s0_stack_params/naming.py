"""スタック名生成とブランチ名解決"""

from __future__ import annotations

import re
import subprocess
from abc import ABC, abstractmethod
from pathlib import Path

import structlog

from .exceptions import NamingError, StackParamsErrorCodes

logger = structlog.get_logger(__name__)

MAX_STACK_NAME_LENGTH = 128
MAX_COMPONENT_LENGTH = 50
MAX_BRANCH_NAME_LENGTH = 100

_VALID_NAME_RE = re.compile(r"^[A-Za-z0-9-]+$")
_INVALID_CHARS_RE = re.compile(r"[^A-Za-z0-9-]")
_HYPHEN_RUN_RE = re.compile(r"-+")


class BranchResolver(ABC):
    """現在のブランチ名を解決する抽象基底クラス。"""

    @abstractmethod
    def current_branch(self) -> str:
        """現在チェックアウトされているブランチ名を返す。

        解決できない場合は NamingError(BRANCH_RESOLUTION_FAILED)。
        """
        ...


class GitBranchResolver(BranchResolver):
    """git rev-parse を使うブランチ名リゾルバ。"""

    def __init__(self, cwd: str | Path | None = None, timeout: float = 5.0) -> None:
        self._cwd = cwd
        self._timeout = timeout

    def current_branch(self) -> str:
        try:
            completed = subprocess.run(
                ["git", "rev-parse", "--abbrev-ref", "HEAD"],
                cwd=self._cwd,
                check=False,
                capture_output=True,
                text=True,
                timeout=self._timeout,
            )
        except FileNotFoundError as e:
            raise _branch_error(
                "Git command not found. Please ensure Git is installed and available in PATH.",
                e,
            ) from e
        except subprocess.TimeoutExpired as e:
            raise _branch_error(
                f"Git command timed out after {self._timeout} seconds. "
                "The repository may be corrupted or inaccessible.",
                e,
            ) from e
        except OSError as e:
            raise _branch_error(f"Failed to determine current branch name: {e}", e) from e

        if completed.returncode == 128:
            raise _branch_error(
                "Not a Git repository or Git repository is corrupted. "
                "Please ensure you are running in a valid Git repository."
            )
        if completed.returncode == 129:
            raise _branch_error(
                "Invalid Git command or Git version is too old. "
                "Please ensure you have a recent version of Git installed."
            )
        if completed.returncode != 0:
            detail = completed.stderr.strip() or f"exit status {completed.returncode}"
            raise _branch_error(
                f"Failed to determine current branch name: {detail}. "
                "Please ensure you are in a valid Git repository with at least one commit."
            )
        return completed.stdout.strip()


class StaticBranchResolver(BranchResolver):
    """固定のブランチ名を返すリゾルバ（テスト・既知ブランチ用）。"""

    def __init__(self, branch: str) -> None:
        self._branch = branch

    def current_branch(self) -> str:
        return self._branch


def _branch_error(message: str, cause: Exception | None = None) -> NamingError:
    return NamingError(
        code=StackParamsErrorCodes.BRANCH_RESOLUTION_FAILED,
        message=message,
        cause=cause,
    )


def resolve_branch_name(resolver: BranchResolver) -> str:
    """ブランチ名を解決し、detached HEAD と長すぎる名前を拒否する。"""
    branch = (resolver.current_branch() or "").strip()
    if not branch or branch == "HEAD":
        raise _branch_error(
            "Unable to determine current branch name. You may be in a detached HEAD state "
            "or the repository may not have any commits."
        )
    if len(branch) > MAX_BRANCH_NAME_LENGTH:
        raise _branch_error(
            f"Branch name is too long ({len(branch)} characters). "
            f"Maximum supported length is {MAX_BRANCH_NAME_LENGTH} characters."
        )
    return branch


def sanitize_branch_name(branch_name: str) -> str:
    """ブランチ名を CloudFormation のスタック名で使える文字列に変換する。

    英数字とハイフン以外をハイフンに置換し、連続するハイフンを 1 つにまとめ、
    先頭・末尾のハイフンを除去して小文字化する。結果は空文字列になり得る。
    """
    result = _INVALID_CHARS_RE.sub("-", branch_name)
    result = _HYPHEN_RUN_RE.sub("-", result)
    return result.strip("-").lower()


def _validate_component(value: object, label: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise NamingError(
            code=StackParamsErrorCodes.INVALID_NAME,
            message=f"{label} is required and must be a non-empty string",
        )
    if not _VALID_NAME_RE.match(value):
        raise NamingError(
            code=StackParamsErrorCodes.INVALID_NAME,
            message=(
                f"{label} '{value}' contains invalid characters. "
                "Only alphanumeric characters and hyphens are allowed."
            ),
        )
    if len(value) > MAX_COMPONENT_LENGTH:
        raise NamingError(
            code=StackParamsErrorCodes.INVALID_NAME,
            message=(
                f"{label} is too long ({len(value)} characters). "
                f"Maximum length is {MAX_COMPONENT_LENGTH} characters."
            ),
        )
    return value


def generate_stack_name(
    project: str,
    stack_prefix: str,
    *,
    ci_build: bool,
    environment: str | None = None,
    branch_resolver: BranchResolver | None = None,
) -> str:
    """スタック名を生成する。

    CI ビルド: {project}-{stack_prefix}-{サニタイズ済みブランチ名}
    環境デプロイ: {project}-{stack_prefix}-{environment}
    """
    _validate_component(project, "Project name")
    _validate_component(stack_prefix, "Stack prefix")
    if not isinstance(ci_build, bool):
        raise NamingError(
            code=StackParamsErrorCodes.INVALID_NAME,
            message="CI build flag must be a boolean value",
        )

    if ci_build:
        resolver = branch_resolver if branch_resolver is not None else GitBranchResolver()
        branch = resolve_branch_name(resolver)
        suffix = sanitize_branch_name(branch)
        if not suffix:
            raise NamingError(
                code=StackParamsErrorCodes.SANITIZATION_EMPTY,
                message=(
                    f"Branch name '{branch}' resulted in empty string after sanitization. "
                    "Please use a branch name with alphanumeric characters."
                ),
            )
        logger.debug("branch name sanitized", branch=branch, sanitized=suffix)
    else:
        suffix = _validate_component(environment, "Environment name")

    stack_name = f"{project}-{stack_prefix}-{suffix}"
    if len(stack_name) > MAX_STACK_NAME_LENGTH:
        raise NamingError(
            code=StackParamsErrorCodes.NAME_TOO_LONG,
            message=(
                f"Generated stack name is too long ({len(stack_name)} characters). "
                f"CloudFormation stack names must be {MAX_STACK_NAME_LENGTH} characters or less."
            ),
        )
    return stack_name


def append_build_id(stack_name: str, ci_build_id: str) -> str:
    """スタック名に CI ビルド ID を付与し、128 文字に切り詰める。"""
    if not ci_build_id:
        return stack_name
    result = f"{stack_name}-{ci_build_id}"
    if len(result) > MAX_STACK_NAME_LENGTH:
        result = result[:MAX_STACK_NAME_LENGTH]
        logger.warning("stack name trimmed", stack_name=result, limit=MAX_STACK_NAME_LENGTH)
    return result
