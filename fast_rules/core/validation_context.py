from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from fast_rules.contracts.model import Model


class ValidationContext:
    """Per-field, per-run control object handed to every rule of a chain.

    - `model`: the entity being validated; rules may read or mutate it.
    - `field`: name of the field whose chain is running.
    - `errors`: messages collected for the field so far, in the order they were added.
    - `yielded`: once set, the remaining rules of this chain are skipped.
    """

    __slots__ = ("model", "field", "scenario", "errors", "yielded")

    def __init__(self, model: 'Model', field: str, scenario: str) -> None:
        self.model = model
        self.field = field
        self.scenario = scenario
        self.errors: list[str] = []
        self.yielded = False

    def yield_(self) -> None:
        """Stop the chain after the current rule without recording an error."""
        self.yielded = True

    def add_error(self, message: str) -> None:
        """Append a message for this field; the chain keeps running."""
        self.errors.append(message)

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    def get(self, key: str, default: Any = None) -> Any:
        return self.model.get(key, default)

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"ValidationContext(field={self.field!r}, scenario={self.scenario!r}, errors={self.errors!r}, yielded={self.yielded!r})"
