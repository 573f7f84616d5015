from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from fast_rules.core.validation_context import ValidationContext


class ValidatorRule(ABC):
    """
    Contract for class-based rules placed in a model's rule chain.

    Report a failed check with `context.add_error(...)` (or by raising
    `ValidationRuleException`); call `context.yield_()` to skip the rest of
    the chain. Any other exception aborts the whole validation run.
    """

    @abstractmethod
    async def validate(self, *, value: Any, context: 'ValidationContext') -> None:
        """
        Validate a value of the model being saved.

        Args:
            value: The field value at the start of the chain.
            context: The per-field context (model, field, errors, yield flag).
        """
        raise NotImplementedError

    @property
    def name(self) -> str:
        return self.__class__.__name__
