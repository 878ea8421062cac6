"""k1s0 stack-params library."""

from .action import provenance_tags, resolve_stack_params, run
from .config import ActionInputs, GitHubContext, parse_boolean_input, validate_inputs
from .exceptions import (
    DocumentError,
    GeneratorError,
    InputError,
    MergeError,
    NamingError,
    StackParamsError,
    StackParamsErrorCodes,
)
from .generator import generate_ci_build_id, validate_id_format
from .loader import (
    load_default_parameters,
    load_default_tags,
    load_environment_parameters,
    load_environment_tags,
    load_optional_map,
    load_required_map,
    load_root_descriptor,
)
from .logger import new_logger
from .merger import (
    MapKind,
    format_parameters,
    format_tags,
    merge,
    merge_parameters,
    merge_tags,
    to_wire_format,
)
from .models import (
    ParameterRecord,
    RootDescriptor,
    StackParamsResult,
    TagRecord,
    stringify_value,
)
from .naming import (
    BranchResolver,
    GitBranchResolver,
    StaticBranchResolver,
    generate_stack_name,
    sanitize_branch_name,
)

__all__ = [
    "RootDescriptor",
    "ParameterRecord",
    "TagRecord",
    "StackParamsResult",
    "stringify_value",
    "load_root_descriptor",
    "load_required_map",
    "load_optional_map",
    "load_default_parameters",
    "load_environment_parameters",
    "load_default_tags",
    "load_environment_tags",
    "MapKind",
    "merge",
    "merge_parameters",
    "merge_tags",
    "to_wire_format",
    "format_parameters",
    "format_tags",
    "BranchResolver",
    "GitBranchResolver",
    "StaticBranchResolver",
    "generate_stack_name",
    "sanitize_branch_name",
    "generate_ci_build_id",
    "validate_id_format",
    "ActionInputs",
    "GitHubContext",
    "parse_boolean_input",
    "validate_inputs",
    "resolve_stack_params",
    "provenance_tags",
    "run",
    "new_logger",
    "StackParamsError",
    "StackParamsErrorCodes",
    "InputError",
    "DocumentError",
    "MergeError",
    "NamingError",
    "GeneratorError",
]
