"""Plan checking and execution for semcommit.

This package turns an LLM plan into commits:
- sensitive: SENSITIVE_PATTERNS, is_sensitive, filter_sensitive_files
- validation: validate_plan, ValidationResult, PlanValidationError
- executor: execute_plan, ExecutionError
- preview: preview_plan
"""

# Sensitive filter
from semcommit.compose.sensitive import (
    SENSITIVE_PATTERNS,
    filter_sensitive_files,
    is_sensitive,
)

# Validation
from semcommit.compose.validation import (
    PlanValidationError,
    ValidationResult,
    validate_plan,
)

# Executor
from semcommit.compose.executor import (
    ExecutionError,
    ProgressCallback,
    execute_plan,
)

# Preview
from semcommit.compose.preview import preview_plan


__all__ = [
    # Sensitive filter
    "SENSITIVE_PATTERNS",
    "filter_sensitive_files",
    "is_sensitive",
    # Validation
    "PlanValidationError",
    "ValidationResult",
    "validate_plan",
    # Executor
    "ExecutionError",
    "ProgressCallback",
    "execute_plan",
    # Preview
    "preview_plan",
]
