import logging
from typing import Any, Sequence

from fast_rules.core.rule_spec import Rule
from fast_rules.core.validation_context import ValidationContext
from fast_rules.exceptions.common_exceptions import ValidationRuleException
from fast_rules.exceptions.validation_exceptions import RuleExecutionException


async def run_chain(chain: Sequence[Rule], value: Any, context: ValidationContext) -> None:
    """
    Run one field's rules strictly in declaration order.

    Each rule is awaited before the next one starts. The chain stops as soon as
    a rule yields. Failed checks end up in `context.errors`; any other error
    raised by a rule aborts the run as `RuleExecutionException`.
    """
    for rule in chain:
        if context.yielded:
            logging.debug(f"[VALIDATION] `{context.field}` yielded, skipping remaining rules")
            break
        try:
            await rule(value, context)
        except ValidationRuleException as e:
            context.add_error(e.message)
        except Exception as e:
            logging.exception(f"[VALIDATION] Rule `{rule.name}` crashed on `{context.field}`", exc_info=e)
            raise RuleExecutionException(context.field, rule.name) from e
