from .model_decorators import (
    register_observer,
    register_rules,
)

__all__ = [
    "register_observer",
    "register_rules",
]
