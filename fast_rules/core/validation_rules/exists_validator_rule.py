from __future__ import annotations

from typing import Any

from bson import ObjectId

from fast_rules.contracts.validator_rule import ValidatorRule
from fast_rules.core.localization import __
from fast_rules.core.validation_context import ValidationContext


class ExistsValidatorRule(ValidatorRule):
    """The value references an existing document of `model` (e.g. a foreign key)."""

    def __init__(
        self,
        model: type,
        *,
        db_key: str = "_id",
        allow_null: bool = False,
        is_object_id: bool = True,
        each: bool = False,
        message: str = "{model} (`{field}`) not found.",
    ) -> None:
        self.model = model
        self.db_key = db_key
        self.allow_null = allow_null
        self.is_object_id = is_object_id
        self.each = each
        self.message = message

    async def validate(self, *, value: Any, context: ValidationContext) -> None:
        params = {"field": context.field, "model": self.model.__name__}

        if value is None or value == "":
            if not self.allow_null:
                context.add_error(__("{field} is required.", params))
            return

        items = value if (self.each and isinstance(value, list)) else [value]

        for item in items:
            if self.is_object_id:
                if not isinstance(item, ObjectId):
                    if not isinstance(item, str) or not ObjectId.is_valid(item):
                        context.add_error(__("Invalid ObjectId at `{field}`.", params))
                        return
                    item = ObjectId(item)
            if not await self.model.exists({self.db_key: item}):
                context.add_error(__(self.message, params))
                return
