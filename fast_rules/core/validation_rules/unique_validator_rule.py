from __future__ import annotations

from typing import Any, Optional

from fast_rules.contracts.validator_rule import ValidatorRule
from fast_rules.core.localization import __
from fast_rules.core.validation_context import ValidationContext


class UniqueValidatorRule(ValidatorRule):
    """No other document of the model's collection holds the same value.

    The lookup goes through the model's own `exists()` query, so the rule
    never touches the database driver directly. Empty values are left to
    `not_empty`.
    """

    def __init__(self, *, message: str = "{field} already exists", db_key: Optional[str] = None) -> None:
        self.message = message
        self.db_key = db_key

    async def validate(self, *, value: Any, context: ValidationContext) -> None:
        if value is None or value == "":
            return

        model = context.model
        query: dict[str, Any] = {self.db_key or context.field: value}
        if not model.is_new():
            query["_id"] = {"$ne": model.id}

        if await type(model).exists(query):
            context.add_error(__(self.message, {"field": context.field, "value": value}))
