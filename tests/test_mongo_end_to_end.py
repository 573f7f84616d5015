import os
import re
from typing import Optional

import pytest

from fast_rules import Model, ModelValidationException, UniqueValidatorRule
from fast_rules.database.mongo import clear, get_db

pytestmark = pytest.mark.skipif(not os.getenv("MONGO_URI"), reason="requires a running MongoDB (set MONGO_URI)")


class Warehouse(Model):
    name: Optional[str]
    quantity: Optional[int]

    validation = {
        "name": [
            {"validator": "not_empty", "message": "name is required"},
            {"validator": "matches", "args": [r"^[a-z0-9 ]+$", re.IGNORECASE], "message": "name format incorrect"},
            UniqueValidatorRule(),
        ],
        "quantity": [{"validator": "is_int", "message": "quantity must be integer"}],
    }


@pytest.mark.asyncio
async def test_unique_name_against_real_database():
    os.environ["TEST_ENV"] = "1"
    os.environ["TEST_DB_NAME"] = "fast_rules_validation_test"

    await clear()
    db = await get_db()
    await db.drop_collection(Warehouse.collection_name())

    first = await Warehouse.create({"name": "Main", "quantity": 1})
    assert (await Warehouse.find_by_id(first.id)).name == "Main"

    with pytest.raises(ModelValidationException) as exc_info:
        await Warehouse.create({"name": "Main", "quantity": 2})
    assert exc_info.value.errors == {"name": ["name already exists"]}

    await first.update({"quantity": 5})
    assert (await Warehouse.find_by_id(first.id)).quantity == 5

    await clear()
