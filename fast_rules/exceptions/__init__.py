"""Custom exceptions for fast-rules."""

from .common_exceptions import (
    AppException,
    ValidationRuleException,
    DatabaseNotInitializedException,
    EnvMissingException,
)
from .http_exceptions import HttpException
from .model_exceptions import (
    ModelException,
    ModelNotFoundException,
)
from .validation_exceptions import (
    ModelValidationException,
    RuleConfigurationException,
    RuleExecutionException,
)


__all__ = [
    # common
    "AppException",
    "ValidationRuleException",
    "DatabaseNotInitializedException",
    "EnvMissingException",
    # http
    "HttpException",
    # model
    "ModelException",
    "ModelNotFoundException",
    # validation
    "ModelValidationException",
    "RuleConfigurationException",
    "RuleExecutionException",
]
