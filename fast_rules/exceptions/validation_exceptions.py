"""Validation exceptions for fast-rules.

Three kinds are kept apart on purpose so callers can catch them separately:

- `ModelValidationException`: expected outcome of a failed run, carries the report.
- `RuleConfigurationException`: broken rule declaration, raised at class setup.
- `RuleExecutionException`: a rule's collaborator (e.g. a database lookup) failed.
"""

from typing import Optional

from fast_rules.exceptions.model_exceptions import ModelException


class ModelValidationException(ModelException):
    """Raised when at least one field collected an error."""

    def __init__(self, errors: dict[str, list[str]], model_name: Optional[str] = None) -> None:
        self.errors = errors
        self.model_name = model_name
        fields = ", ".join(errors.keys())
        message = f"{model_name} validation failed: {fields}" if model_name else f"Validation failed: {fields}"
        super().__init__(message, http_status_code=422, data={"errors": errors})


class RuleExecutionException(ModelException):
    """A rule failed to run (not a failed check). The original error is chained as `__cause__`."""

    def __init__(self, field: str, rule: str) -> None:
        self.field = field
        self.rule = rule
        super().__init__(f"Rule `{rule}` failed while validating `{field}`", http_status_code=500)


class RuleConfigurationException(ValueError):
    def __init__(self, message: str) -> None:
        super().__init__(f"[RULES] {message}")
        self.message = message
