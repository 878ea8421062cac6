"""k1s0-stack-params コマンドラインエントリポイント"""

from __future__ import annotations

import argparse
import os
import sys

from .action import run
from .config import ActionInputs, parse_boolean_input
from .exceptions import StackParamsError
from .logger import new_logger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="k1s0-stack-params",
        description="Merge CloudFormation parameters and tags and generate the stack name.",
    )
    parser.add_argument(
        "--cfn-directory",
        help="configuration folder (default: $INPUT_CFN_DIRECTORY or 'cfn')",
    )
    parser.add_argument(
        "--ci-build",
        nargs="?",
        const="true",
        help="derive the stack name from the current git branch ('true' or 'false')",
    )
    parser.add_argument("--environment", help="target environment name")
    parser.add_argument(
        "--output",
        help="GitHub output file (default: $GITHUB_OUTPUT, otherwise JSON on stdout)",
    )
    parser.add_argument("--log-level", default="INFO")
    parser.add_argument("--log-format", choices=("json", "text"), default="text")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logger = new_logger(level=args.log_level, format=args.log_format)

    environ = dict(os.environ)
    try:
        defaults = ActionInputs.from_env(environ)
        inputs = ActionInputs(
            cfn_directory=args.cfn_directory or defaults.cfn_directory,
            ci_build=(
                parse_boolean_input(args.ci_build) if args.ci_build is not None else defaults.ci_build
            ),
            environment=args.environment if args.environment is not None else defaults.environment,
        )
    except StackParamsError as e:
        logger.error("invalid input", code=e.code, error=e.message)
        return 1
    return run(environ, inputs=inputs, output_path=args.output)


if __name__ == "__main__":
    sys.exit(main())
