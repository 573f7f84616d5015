from .exists_validator_rule import ExistsValidatorRule
from .unique_validator_rule import UniqueValidatorRule

__all__ = [
    "ExistsValidatorRule",
    "UniqueValidatorRule",
]
