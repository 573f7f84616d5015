from typing import Optional

from fast_rules.exceptions.http_exceptions import HttpException
from fast_rules.utils.serialisation import get_exception_error_type


class AppException(Exception):
    def __init__(self,
        message: str,
        *,
        http_status_code: Optional[int] = None,
        error_type: Optional[str] = None,
        data: Optional[dict] = None
    ):
        """
        Base exception which can be converted to an HTTP response by the caller of `save()`.

        Args:
            message: The error message.
            http_status_code: The HTTP status code to return.
            error_type: The error type to return (if not provided, it will be inferred from the exception class name).
            data: The data to return.
        """
        self.message = message
        self.http_status_code = http_status_code
        self.error_type = error_type or get_exception_error_type(self)
        self.data = data
        super().__init__(message)

    def to_http_exception(self):
        return HttpException(status_code=self.http_status_code, error_type=self.error_type, message=self.message, data=self.data)

    def to_response(self):
        return self.to_http_exception().to_response()

class ValidationRuleException(ValueError):
    """
    Raised by a custom rule to report a failed check.

    The chain executor converts it into an error message for the field and
    continues with the next rule, so it never escapes a validation run.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

class DatabaseNotInitializedException(RuntimeError):
    def __init__(self):
        super().__init__("Database is not initialized.")

class EnvMissingException(ValueError):
    def __init__(self, env_name: str):
        super().__init__(f"[ENV MISSING] Missing required environment variable: `{env_name}`")
