"""Rule definitions for architecture checks."""

from rules.checker import CONTROLLER_REPOSITORY_RULE, check_file
from rules.config import (
    ArchitectConfig,
    ConfigError,
    ForbiddenRule,
    RuleContext,
    ViolationPolicy,
    load_config,
    write_default_config,
)
from rules.violations import ForbiddenImport, MethodTooLong, ParseFailure, Violation

__all__ = [
    "CONTROLLER_REPOSITORY_RULE",
    "ArchitectConfig",
    "ConfigError",
    "ForbiddenImport",
    "ForbiddenRule",
    "MethodTooLong",
    "ParseFailure",
    "RuleContext",
    "Violation",
    "ViolationPolicy",
    "check_file",
    "load_config",
    "write_default_config",
]
