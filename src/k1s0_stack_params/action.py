"""スタックパラメータ解決パイプライン

入力検証 → ドキュメント読み込み → マージ → スタック名生成 の順に実行し、
途中で失敗した場合は部分的な出力を一切返さない。
"""

from __future__ import annotations

import json
import os
import sys
from collections.abc import Callable, Mapping
from datetime import datetime, timezone
from pathlib import Path

import structlog

from .config import ActionInputs, GitHubContext, validate_inputs
from .exceptions import StackParamsError
from .generator import generate_ci_build_id
from .loader import (
    load_default_parameters,
    load_default_tags,
    load_environment_parameters,
    load_environment_tags,
    load_root_descriptor,
)
from .logger import new_logger
from .merger import format_parameters, format_tags, merge_parameters, merge_tags
from .models import ParamMap, StackParamsResult
from .naming import BranchResolver, GitBranchResolver, append_build_id, generate_stack_name
from .outputs import write_outputs

logger = structlog.get_logger(__name__)

CI_BUILD_ID_PARAMETER = "CiBuildId"


def _iso_timestamp(now: datetime) -> str:
    return now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def provenance_tags(github: GitHubContext, now: datetime) -> ParamMap:
    """GitHub ワークフロー由来のプロビナンスタグを返す。"""
    return {
        "GitCommit": github.sha[:8],
        "GitLastModifiedBy": github.actor,
        "GitLastModifiedAt": _iso_timestamp(now),
        "GitFile": github.workflow,
        "GitOrg": github.org,
        "GitRepo": github.repo,
    }


def resolve_stack_params(
    inputs: ActionInputs,
    github: GitHubContext | None = None,
    *,
    workspace: str | Path | None = None,
    branch_resolver: BranchResolver | None = None,
    id_generator: Callable[[], str] = generate_ci_build_id,
    now: datetime | None = None,
) -> StackParamsResult:
    """アクション入力からスタックパラメータ一式を解決する。"""
    validate_inputs(inputs)
    github = github if github is not None else GitHubContext()
    folder = Path(inputs.cfn_directory)
    if workspace is not None:
        folder = Path(workspace) / folder
    environment = inputs.environment.strip()
    log = logger.bind(folder=str(folder), ci_build=inputs.ci_build, environment=environment or None)
    if branch_resolver is None and inputs.ci_build:
        branch_resolver = GitBranchResolver(cwd=workspace)

    descriptor = load_root_descriptor(folder)
    log.info(
        "configuration loaded",
        project=descriptor.project,
        template=descriptor.template,
        stack_prefix=descriptor.stack_prefix,
    )

    default_params = load_default_parameters(folder)
    env_params = load_environment_parameters(folder, environment)
    default_tags = load_default_tags(folder)
    env_tags = load_environment_tags(folder, environment)
    log.info(
        "documents loaded",
        default_parameters=len(default_params),
        environment_parameters=None if env_params is None else len(env_params),
        default_tags=len(default_tags),
        environment_tags=None if env_tags is None else len(env_tags),
    )

    ci_build_id = id_generator() if inputs.ci_build else ""

    merged_params = merge_parameters(default_params, env_params)
    if ci_build_id:
        merged_params[CI_BUILD_ID_PARAMETER] = f"-{ci_build_id}"
    parameters = format_parameters(merged_params)

    merged_tags = merge_tags(default_tags, env_tags)
    merged_tags.update(provenance_tags(github, now or datetime.now(timezone.utc)))
    tags = format_tags(merged_tags)

    stack_name = generate_stack_name(
        descriptor.project,
        descriptor.stack_prefix,
        ci_build=inputs.ci_build,
        environment=environment,
        branch_resolver=branch_resolver,
    )
    stack_name = append_build_id(stack_name, ci_build_id)
    log.info(
        "stack parameters resolved",
        stack_name=stack_name,
        parameters=len(parameters),
        tags=len(tags),
        ci_build_id=ci_build_id or None,
    )

    return StackParamsResult(
        parameters=parameters,
        tags=tags,
        stack_name=stack_name,
        template=descriptor.template,
        ci_build_id=ci_build_id,
        merged_parameters=merged_params,
        merged_tags=merged_tags,
    )


def run(
    environ: Mapping[str, str] | None = None,
    inputs: ActionInputs | None = None,
    output_path: str | Path | None = None,
    branch_resolver: BranchResolver | None = None,
) -> int:
    """アクションを実行して出力を書き出す。終了コードを返す。"""
    # 未設定の structlog は標準出力に書くため、出力 JSON と混ざらないよう標準エラーに向ける
    if not structlog.is_configured():
        new_logger()
    environ = os.environ if environ is None else environ
    try:
        if inputs is None:
            inputs = ActionInputs.from_env(environ)
        result = resolve_stack_params(
            inputs,
            GitHubContext.from_env(environ),
            workspace=environ.get("GITHUB_WORKSPACE") or None,
            branch_resolver=branch_resolver,
        )
        outputs = result.to_outputs()
        output_path = output_path or environ.get("GITHUB_OUTPUT") or None
        if output_path is not None:
            write_outputs(output_path, outputs)
        else:
            sys.stdout.write(json.dumps(outputs, indent=2) + "\n")
    except StackParamsError as e:
        logger.error("action failed", code=e.code, error=e.message)
        return 1
    logger.info("action completed")
    return 0
