from __future__ import annotations

import asyncio
import logging
from functools import partial
from typing import TYPE_CHECKING, Awaitable, Callable, Optional

from fast_rules import config
from fast_rules.core.rule_book import RuleBook
from fast_rules.core.rule_chain import run_chain
from fast_rules.core.validation_context import ValidationContext
from fast_rules.exceptions.validation_exceptions import ModelValidationException

if TYPE_CHECKING:
    from fast_rules.contracts.model import Model


class ModelValidator:
    """Runs every field chain of a rule book against one model.

    Chains of different fields run as concurrent tasks on the event loop (or
    one after another when `concurrent=False`); a single chain is always
    sequential. The run either passes and stamps the model's result cache, or
    raises `ModelValidationException` with every collected message.
    """

    def __init__(self, rule_book: RuleBook, *, use_cache: Optional[bool] = None, concurrent: Optional[bool] = None) -> None:
        self.rule_book = rule_book
        self.use_cache = config.VALIDATION_RESULT_CACHE if use_cache is None else use_cache
        self.concurrent = config.VALIDATION_CONCURRENT_FIELDS if concurrent is None else concurrent

    async def validate(self, model: 'Model', scenario: Optional[str] = None) -> bool:
        """Validate `model`; returns False when the cached pass was reused, True when the rules ran."""
        scenario = scenario or config.SCENARIO_DEFAULT
        rule_set = self.rule_book.effective(scenario)
        cache = model.validation_cache
        model_name = type(model).__name__

        if self.use_cache and cache.is_valid(model, rule_set):
            logging.debug(f"[VALIDATION] {model_name}: nothing changed since last pass, skipping ({scenario})")
            return False

        cache.invalidate()
        logging.debug(f"[VALIDATION] {model_name}: running {len(rule_set)} chain(s) ({scenario})")

        contexts = [ValidationContext(model, field, scenario) for field in rule_set.keys()]
        values = [model.get(context.field) for context in contexts]
        runs = [partial(run_chain, rule_set[context.field], value, context) for context, value in zip(contexts, values)]

        if self.concurrent:
            await self._run_concurrently(runs)
        else:
            for run in runs:
                await run()

        errors = {context.field: list(context.errors) for context in contexts if context.errors}
        if errors:
            logging.info(f"[VALIDATION] {model_name} failed: {errors}")
            raise ModelValidationException(errors, model_name)

        if self.use_cache:
            cache.record(model, rule_set)
        return True

    @staticmethod
    async def _run_concurrently(runs: list[Callable[[], Awaitable[None]]]) -> None:
        tasks = [asyncio.ensure_future(run()) for run in runs]
        try:
            await asyncio.gather(*tasks)
        except Exception:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise
