"""
fast-rules - declarative, asynchronous validation for MongoDB models

Rules are declared per field on the model class and run before every save:
- Built-in checks by name (`not_empty`, `matches`, `is_int`, ...) with message templates
- Custom sync or async functions and `ValidatorRule` classes (uniqueness, references)
- Per-field chains run in order and can stop early with `context.yield_()`
- Scenario rules ("create", "update", custom) appended to the base chains
- Results cached per instance until a validated field changes
"""

__version__ = "0.1.0"
__license__ = "MIT"

from .contracts import *  # noqa: F401,F403
from .core import *  # noqa: F401,F403
from .core.localization import __, set_locale, get_locale
from .database import *  # noqa: F401,F403
from .decorators import *  # noqa: F401,F403
from .exceptions import *  # noqa: F401,F403
