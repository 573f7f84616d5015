from __future__ import annotations

from typing import TYPE_CHECKING, Any, Hashable, Mapping, Optional, Sequence

if TYPE_CHECKING:
    from fast_rules.contracts.model import Model

RuleKeys = frozenset[tuple[str, int]]


class ResultCache:
    """Remembers the fingerprint of a model's last passing validation.

    One instance lives on each model instance. The model calls `invalidate()`
    whenever a validated field is written, and `ModelValidator` consults
    `is_valid()` before running any rule.

    A pass also remembers which rules it ran. A later run is only skipped when
    every rule of its rule set was part of that pass, so a pass under the base
    rules never stands in for a scenario that appends more.
    """

    __slots__ = ("_fingerprint", "_covered")

    def __init__(self) -> None:
        self._fingerprint: Optional[tuple[Any, ...]] = None
        self._covered: RuleKeys = frozenset()

    @staticmethod
    def fingerprint(model: 'Model') -> tuple[Hashable, int, frozenset[str]]:
        validated = type(model).rule_book().fields
        return (
            model.identity(),
            model.revision,
            frozenset(key for key in model.dirty_fields() if key in validated),
        )

    @staticmethod
    def rule_keys(rule_set: Mapping[str, Sequence[Any]]) -> RuleKeys:
        # Rules live for as long as their class's rule book, so identity is stable.
        return frozenset((field, id(rule)) for field, chain in rule_set.items() for rule in chain)

    def is_valid(self, model: 'Model', rule_set: Optional[Mapping[str, Sequence[Any]]] = None) -> bool:
        if self._fingerprint is None or self._fingerprint != self.fingerprint(model):
            return False
        return rule_set is None or self.rule_keys(rule_set) <= self._covered

    def record(self, model: 'Model', rule_set: Optional[Mapping[str, Sequence[Any]]] = None) -> None:
        """Stamp the current state as passing; without `rule_set` the rules of the last pass are kept."""
        if rule_set is not None:
            self._covered = self.rule_keys(rule_set)
        self._fingerprint = self.fingerprint(model)

    def invalidate(self) -> None:
        self._fingerprint = None
        self._covered = frozenset()

    @property
    def is_empty(self) -> bool:
        return self._fingerprint is None
