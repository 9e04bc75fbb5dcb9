"""Error taxonomy: codes, the in-flight exception and the classifiers.

Import from here; the ``errors_parts`` modules are an implementation detail.
"""

from .errors_parts import (
    ErrorCode,
    ProviderError,
    classify_exception,
    classify_status,
    is_connection_failure,
)

__all__ = [
    "ErrorCode",
    "ProviderError",
    "classify_exception",
    "classify_status",
    "is_connection_failure",
]
