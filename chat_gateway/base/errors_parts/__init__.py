"""One module per error building block; re-exported by ``chat_gateway.base.errors``."""

from .error_code import ErrorCode
from .provider_error import ProviderError
from .classification import classify_exception, classify_status, is_connection_failure

__all__ = [
    "ErrorCode",
    "ProviderError",
    "classify_exception",
    "classify_status",
    "is_connection_failure",
]
