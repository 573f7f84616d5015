"""
Per-model rule sets with additive scenarios.

The base chains apply to every run. Rules added under a scenario name are
appended to the end of the field's base chain and only run when validation is
invoked with that scenario:

    book = RuleBook.from_specs({"name": [builtin("not_empty", message="required")]}, registry)
    book.add_rules({"name": touch_updated_by}, "update")
    book.effective("update")["name"]   # (not_empty, touch_updated_by)
    book.effective("create")["name"]   # (not_empty,)
"""

from types import MappingProxyType
from typing import Any, Mapping, Optional

from fast_rules.config import SCENARIO_DEFAULT
from fast_rules.core.rule_spec import Rule, normalize_chain
from fast_rules.core.validator_registry import ValidatorRegistry
from fast_rules.exceptions.validation_exceptions import RuleConfigurationException

RuleSet = Mapping[str, tuple[Rule, ...]]


class RuleBook:

    def __init__(self, registry: ValidatorRegistry) -> None:
        self.registry = registry
        self._base: dict[str, tuple[Rule, ...]] = {}
        self._scenarios: dict[str, dict[str, tuple[Rule, ...]]] = {}
        self._effective: dict[str, RuleSet] = {}
        self._fields: Optional[frozenset[str]] = None
        self._frozen = False

    @classmethod
    def from_specs(cls, specs: Optional[Mapping[str, Any]], registry: ValidatorRegistry) -> 'RuleBook':
        book = cls(registry)
        book.add_rules(specs or {})
        return book

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        self._frozen = True

    def add_rules(self, specs: Mapping[str, Any], scenario: Optional[str] = None) -> None:
        """Append rules per field; `scenario=None` extends the base chains."""
        if self._frozen:
            raise RuleConfigurationException("Rules can only be added while the model class is being set up.")
        if not isinstance(specs, Mapping):
            raise RuleConfigurationException(f"Rules must be a mapping of field name to rules, got `{type(specs).__name__}`.")

        target = self._base if scenario in (None, SCENARIO_DEFAULT) else self._scenarios.setdefault(scenario, {})
        for field, field_specs in specs.items():
            if not isinstance(field, str) or not field:
                raise RuleConfigurationException(f"Invalid field name {field!r}.")
            target[field] = target.get(field, ()) + normalize_chain(field_specs, self.registry)

        self._effective.clear()
        self._fields = None

    def effective(self, scenario: Optional[str] = None) -> RuleSet:
        scenario = scenario or SCENARIO_DEFAULT
        if scenario in self._effective:
            return self._effective[scenario]

        merged = dict(self._base)
        for field, rules in self._scenarios.get(scenario, {}).items():
            merged[field] = merged.get(field, ()) + rules

        rule_set = MappingProxyType(merged)
        if self._frozen:
            self._effective[scenario] = rule_set
        return rule_set

    @property
    def scenarios(self) -> list[str]:
        return [SCENARIO_DEFAULT, *self._scenarios.keys()]

    @property
    def fields(self) -> frozenset[str]:
        """Every field that has a rule in any scenario."""
        if self._fields is None:
            names = set(self._base.keys())
            for rules in self._scenarios.values():
                names.update(rules.keys())
            self._fields = frozenset(names)
        return self._fields

    def copy(self) -> 'RuleBook':
        clone = RuleBook(self.registry)
        clone._base = dict(self._base)
        clone._scenarios = {name: dict(rules) for name, rules in self._scenarios.items()}
        return clone
