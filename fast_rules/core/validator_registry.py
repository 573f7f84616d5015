"""
Named predicates usable from declarative rule specs.

A predicate has the signature `(value, *args) -> bool`. Values are coerced to
text first (`None` becomes `""`), so a missing value fails every format check:

    registry = build_default_registry()
    registry.resolve("matches")("Name 1", r"^[a-z0-9 ]+$", re.I)   # True
    registry.resolve("is_int")(None)                               # False
"""

import re
from typing import Any, Callable, Iterable, Optional

from fast_rules.exceptions.validation_exceptions import RuleConfigurationException

Predicate = Callable[..., bool]

_INT_RE = re.compile(r"^[-+]?(?:[1-9]\d*|0)$")
_FLOAT_RE = re.compile(r"^[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?$")
_NUMERIC_RE = re.compile(r"^[-+]?\d+$")
_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]{2,}$")
_URL_RE = re.compile(r"^(?:https?|ftp)://[^\s/$.?#][^\s]*$", re.IGNORECASE)


def to_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class ValidatorRegistry:
    """Append-only name -> predicate table.

    Names are resolved when a model declares its rules; an unknown name is a
    configuration error, never a per-run failure.
    """

    def __init__(self) -> None:
        self._predicates: dict[str, Predicate] = {}

    def register(self, name: str, predicate: Predicate, aliases: Iterable[str] = ()) -> Predicate:
        if not callable(predicate):
            raise RuleConfigurationException(f"Validator `{name}` must be callable.")
        for key in (name, *aliases):
            if key in self._predicates:
                raise RuleConfigurationException(f"Validator `{key}` is already registered.")
        for key in (name, *aliases):
            self._predicates[key] = predicate
        return predicate

    def resolve(self, name: str) -> Predicate:
        try:
            return self._predicates[name]
        except KeyError:
            raise RuleConfigurationException(f"Unknown validator `{name}`.") from None

    def names(self) -> list[str]:
        return sorted(self._predicates.keys())

    def copy(self) -> 'ValidatorRegistry':
        clone = ValidatorRegistry()
        clone._predicates = dict(self._predicates)
        return clone

    def __contains__(self, name: object) -> bool:
        return name in self._predicates

    def __len__(self) -> int:
        return len(self._predicates)


#
# Predicates
#
def not_empty(value: Any) -> bool:
    return to_text(value).strip() != ""


def matches(value: Any, pattern: str | re.Pattern, flags: int = 0) -> bool:
    if isinstance(pattern, re.Pattern):
        return pattern.search(to_text(value)) is not None
    return re.search(pattern, to_text(value), flags) is not None


def is_int(value: Any, options: Optional[dict] = None) -> bool:
    text = to_text(value)
    if not _INT_RE.match(text):
        return False
    options = options or {}
    number = int(text)
    if "min" in options and number < options["min"]:
        return False
    if "max" in options and number > options["max"]:
        return False
    return True


def is_float(value: Any, options: Optional[dict] = None) -> bool:
    text = to_text(value)
    if not text or not _FLOAT_RE.match(text):
        return False
    options = options or {}
    number = float(text)
    if "min" in options and number < options["min"]:
        return False
    if "max" in options and number > options["max"]:
        return False
    return True


def is_numeric(value: Any) -> bool:
    return _NUMERIC_RE.match(to_text(value)) is not None


def is_alpha(value: Any) -> bool:
    text = to_text(value)
    return text.isascii() and text.isalpha()


def is_alphanumeric(value: Any) -> bool:
    text = to_text(value)
    return text.isascii() and text.isalnum()


def is_email(value: Any) -> bool:
    return _EMAIL_RE.match(to_text(value)) is not None


def is_url(value: Any) -> bool:
    return _URL_RE.match(to_text(value)) is not None


def is_length(value: Any, minimum: int = 0, maximum: Optional[int] = None) -> bool:
    length = len(to_text(value))
    return length >= minimum and (maximum is None or length <= maximum)


def equals(value: Any, comparison: Any) -> bool:
    return to_text(value) == to_text(comparison)


def contains(value: Any, seed: Any) -> bool:
    return to_text(seed) in to_text(value)


def is_in(value: Any, values: Iterable[Any]) -> bool:
    return to_text(value) in {to_text(v) for v in values}


def is_lowercase(value: Any) -> bool:
    text = to_text(value)
    return text == text.lower()


def is_uppercase(value: Any) -> bool:
    text = to_text(value)
    return text == text.upper()


def is_boolean(value: Any) -> bool:
    return to_text(value) in ("true", "false", "1", "0")


def build_default_registry() -> ValidatorRegistry:
    registry = ValidatorRegistry()
    registry.register("not_empty", not_empty, aliases=("notEmpty",))
    registry.register("matches", matches)
    registry.register("is_int", is_int, aliases=("isInt",))
    registry.register("is_float", is_float, aliases=("isFloat",))
    registry.register("is_numeric", is_numeric, aliases=("isNumeric",))
    registry.register("is_alpha", is_alpha, aliases=("isAlpha",))
    registry.register("is_alphanumeric", is_alphanumeric, aliases=("isAlphanumeric",))
    registry.register("is_email", is_email, aliases=("isEmail",))
    registry.register("is_url", is_url, aliases=("isURL",))
    registry.register("is_length", is_length, aliases=("isLength", "len"))
    registry.register("equals", equals)
    registry.register("contains", contains)
    registry.register("is_in", is_in, aliases=("isIn",))
    registry.register("is_lowercase", is_lowercase, aliases=("isLowercase",))
    registry.register("is_uppercase", is_uppercase, aliases=("isUppercase",))
    registry.register("is_boolean", is_boolean, aliases=("isBoolean",))
    return registry


default_registry = build_default_registry()
