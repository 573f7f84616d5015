"""
Basic package tests to ensure fast-rules can be imported and exposes its public API.
"""

import fast_rules


def test_package_version():
    assert hasattr(fast_rules, '__version__')
    assert fast_rules.__version__ == "0.1.0"
    assert fast_rules.__license__ == "MIT"


def test_public_api_is_exported():
    for name in (
        "Model",
        "Observer",
        "ValidatorRule",
        "ValidationContext",
        "ModelValidator",
        "RuleBook",
        "ResultCache",
        "UniqueValidatorRule",
        "ExistsValidatorRule",
        "ModelValidationException",
        "RuleConfigurationException",
        "RuleExecutionException",
        "register_rules",
        "register_observer",
        "builtin",
    ):
        assert hasattr(fast_rules, name), name
