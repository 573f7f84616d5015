"""Contract classes and abstract interfaces.

These are the building blocks used across the package and are exported so
they can be imported directly from :mod:`fast_rules`.
"""

from .model import Model
from .observer import Observer
from .validator_rule import ValidatorRule

__all__ = [
    "Model",
    "Observer",
    "ValidatorRule",
]
