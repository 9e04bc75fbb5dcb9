"""
GenerationResult DTO: the only value that crosses back out of an adapter.

Failures are encoded in-band. ``error_code`` makes the distinction explicit so
callers need not parse the display text, while ``to_dict`` preserves the
two-field ``{"response", "model"}`` shape callers display.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..constants import ERROR_LABEL_SUFFIX
from ..errors import ErrorCode


@dataclass(frozen=True)
class GenerationResult:
    """Normalized reply from a provider.

    Attributes:
        response: Reply text on success; display-safe diagnostic on failure.
        model: ``"<ProviderName> <model>"`` on success,
            ``"<ProviderName> (Error)"`` on failure.
        error_code: ``None`` on success, otherwise the failure category.
    """

    response: str
    model: str
    error_code: Optional[ErrorCode] = None

    @property
    def ok(self) -> bool:
        return self.error_code is None

    @classmethod
    def success(cls, text: str, provider_label: str, model: Optional[str]) -> "GenerationResult":
        label = f"{provider_label} {model}" if model else provider_label
        return cls(response=text, model=label)

    @classmethod
    def failure(cls, message: str, provider_label: str, code: ErrorCode) -> "GenerationResult":
        return cls(
            response=message,
            model=f"{provider_label} {ERROR_LABEL_SUFFIX}",
            error_code=code,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Return the caller-facing ``{"response", "model"}`` mapping."""
        return {"response": self.response, "model": self.model}


__all__ = ["GenerationResult"]
