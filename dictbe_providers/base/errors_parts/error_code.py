"""
Normalized provider error codes (taxonomy).

Defines the `ErrorCode` enumeration used across provider adapters and error
handling utilities. Values are lowercase snake_case and are considered a stable
public contract for logging and analytics.
"""
from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Enumerated normalized error codes representing failure categories.

    Every adapter failure maps to exactly one of these. Handler failures are
    not represented: the caller's own exception is re-raised unchanged.
    """

    CONFIGURATION = "configuration"
    TRANSPORT = "transport"
    DECODE = "decode"
    PROVIDER = "provider"
    PROTOCOL = "protocol"
    CANCELLED = "cancelled"


__all__ = ["ErrorCode"]
