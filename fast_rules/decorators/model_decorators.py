from functools import wraps
from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:  # pragma: no cover - imported for type checking only
    from fast_rules import Observer

def register_observer(observer_cls: type['Observer']):
    def decorator(model_cls):
        original_init = model_cls.__init__

        @wraps(original_init)
        def new_init(self, *args, **kwargs):
            original_init(self, *args, **kwargs)
            self.register_observer(observer_cls())

        model_cls.__init__ = new_init
        return model_cls
    return decorator


def register_rules(rules: dict[str, Any], scenario: Optional[str] = None):
    """
    Add rules to a model class at definition time.

        @register_rules({"name": keep_name_on_update}, scenario="update")
        class Product(Model):
            ...
    """
    def decorator(model_cls):
        model_cls.add_rules(rules, scenario)
        return model_cls
    return decorator
