"""Validation engine re-exported for convenient access."""

from .localization import __, set_locale, get_locale, set_locale_path, trans
from .model_validator import ModelValidator
from .result_cache import ResultCache
from .rule_book import RuleBook
from .rule_chain import run_chain
from .rule_spec import BuiltinRule, BuiltinRuleSpec, CustomRule, builtin, normalize, normalize_chain
from .validation_context import ValidationContext
from .validation_rules import ExistsValidatorRule, UniqueValidatorRule
from .validator_registry import ValidatorRegistry, build_default_registry, default_registry

__all__ = [
    "__",
    "set_locale",
    "get_locale",
    "set_locale_path",
    "trans",
    "ModelValidator",
    "ResultCache",
    "RuleBook",
    "run_chain",
    "BuiltinRule",
    "BuiltinRuleSpec",
    "CustomRule",
    "builtin",
    "normalize",
    "normalize_chain",
    "ValidationContext",
    "ExistsValidatorRule",
    "UniqueValidatorRule",
    "ValidatorRegistry",
    "build_default_registry",
    "default_registry",
]
