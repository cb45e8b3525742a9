# marketdash/services/results.py
"""
Explicit success/failure results for upstream calls.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class FailureReason(str, Enum):
    UNAVAILABLE = "unavailable"
    INVALID_RESPONSE = "invalid_response"
    RATE_LIMITED = "rate_limited"


@dataclass(frozen=True)
class ServiceResult(Generic[T]):
    """Either a value or a named failure reason, never both."""
    value: Optional[T] = None
    failure: Optional[FailureReason] = None
    detail: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    @classmethod
    def success(cls, value: T) -> "ServiceResult[T]":
        return cls(value=value)

    @classmethod
    def fail(cls, reason: FailureReason, detail: Optional[str] = None) -> "ServiceResult[T]":
        return cls(failure=reason, detail=detail)
