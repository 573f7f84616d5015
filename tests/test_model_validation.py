import re
from typing import Optional

import pytest

from fast_rules import Model, ModelValidationException, UniqueValidatorRule

name_rule_runs: list[str] = []
update_rule_runs: list[str] = []


def keep_name_on_update(value, context):
    name_rule_runs.append(value)
    if not context.model.is_new():
        context.model.unset("name")
        context.yield_()


async def unique_name(value, context):
    if value and await Obj.exists({"name": value}):
        context.add_error("name already exists")


def count_update(value, context):
    update_rule_runs.append(value)


class Obj(Model):
    name: Optional[str]
    quantity: Optional[int]
    secret: Optional[str]

    validation = {
        "name": [
            keep_name_on_update,
            {"validator": "not_empty", "message": "name is required"},
            {"validator": "matches", "args": [r"^[a-z0-9 ]+$", re.IGNORECASE], "message": "name format incorrect"},
            unique_name,
        ],
        "quantity": [
            {"validator": "isInt", "message": "quantity must be integer"},
        ],
    }


Obj.add_rules({"quantity": count_update}, "update")


@pytest.mark.asyncio
async def test_empty_object_reports_every_failed_rule(fake_db):
    with pytest.raises(ModelValidationException) as exc_info:
        await Obj().save()

    errors = exc_info.value.errors
    assert set(errors.keys()) == {"name", "quantity"}
    assert errors["name"] == ["name is required", "name format incorrect"]
    assert errors["quantity"] == ["quantity must be integer"]
    assert fake_db["obj"].documents == []


@pytest.mark.asyncio
async def test_second_object_with_same_name_fails(fake_db):
    first = await Obj.create({"name": "Name", "quantity": 1, "secret": "secret"})
    assert first.id is not None

    with pytest.raises(ModelValidationException) as exc_info:
        await Obj(name="Name", quantity=1).save()

    assert exc_info.value.errors == {"name": ["name already exists"]}
    assert await Obj.count() == 1


@pytest.mark.asyncio
async def test_update_rule_can_drop_pending_value_and_yield(fake_db):
    saved = await Obj.create({"name": "Name", "quantity": 1, "secret": "secret"})

    # "!!" would fail the format rule, but the first rule yields on persisted models
    await saved.update({"name": "!! Another Name", "quantity": 8})

    model = await Obj.find_by_id(saved.id)
    assert model.name == "Name"
    assert model.secret == "secret"
    assert model.quantity == 8
    assert saved.name == "Name"


@pytest.mark.asyncio
async def test_result_cache_skips_rules_until_validated_field_changes(fake_db):
    saved = await Obj.create({"name": "Name 3", "quantity": 1, "secret": "secret"})
    runs = len(name_rule_runs)
    update_runs = len(update_rule_runs)

    await saved.validate()
    assert len(name_rule_runs) == runs

    # the pass after create did not cover the update rules
    await saved.validate("update")
    assert len(name_rule_runs) == runs + 1
    assert len(update_rule_runs) == update_runs + 1

    await saved.validate("update")
    await saved.validate()
    assert len(name_rule_runs) == runs + 1

    saved.secret = "not validated"
    await saved.validate()
    assert len(name_rule_runs) == runs + 1

    await saved.update({"quantity": 222})
    assert len(name_rule_runs) == runs + 2

    await saved.validate()
    assert len(name_rule_runs) == runs + 2


@pytest.mark.asyncio
async def test_update_scenario_rule_runs_only_on_update(fake_db):
    runs = len(update_rule_runs)

    saved = await Obj.create({"name": "Name 4", "quantity": 1})
    assert len(update_rule_runs) == runs

    saved.quantity = 666
    await saved.save()
    assert update_rule_runs[-1] == 666
    assert len(update_rule_runs) == runs + 1


@pytest.mark.asyncio
async def test_failed_save_leaves_model_unsaved_and_revalidates(fake_db):
    model = Obj(name="bad name!", quantity=1)
    runs = len(name_rule_runs)

    with pytest.raises(ModelValidationException):
        await model.save()
    with pytest.raises(ModelValidationException):
        await model.save()

    assert model.is_new()
    assert len(name_rule_runs) == runs + 2

    model.name = "good name"
    await model.save()
    assert not model.is_new()


@pytest.mark.asyncio
async def test_unique_validator_rule_ignores_own_document(fake_db, product_name):
    class Product(Model):
        name: Optional[str]
        validation = {"name": [UniqueValidatorRule()]}

    product = await Product.create({"name": product_name})
    product.name = product_name
    await product.save()

    with pytest.raises(ModelValidationException) as exc_info:
        await Product.create({"name": product_name})
    assert exc_info.value.errors == {"name": ["name already exists"]}
