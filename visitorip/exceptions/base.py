"""
Base exception classes and types for visitorip.
"""

from enum import IntEnum
from dataclasses import dataclass, field
from typing import Any, Optional


class VisitorIPError(Exception):
    """
    Base exception for all visitorip errors.

    Provides context about the header that could not be resolved.

    Attributes:
        message: Error message
        header_name: Name of the forwarded header
        header_value: Raw header value as received
        reason: Reason code (ParseFailure)
        metadata: Additional context information
    """

    def __init__(
        self,
        message: str,
        header_name: Optional[str] = None,
        header_value: Optional[str] = None,
        reason: Optional[IntEnum] = None,
        **metadata
    ):
        super().__init__(message)
        self.header_name = header_name
        self.header_value = header_value
        self.reason = reason
        self.metadata = metadata

    def __repr__(self):
        parts = [f"{self.__class__.__name__}('{str(self)}')"]
        if self.header_name:
            parts.append(f"header_name='{self.header_name}'")
        if self.reason is not None:
            parts.append(f"reason={self.reason.name if hasattr(self.reason, 'name') else self.reason}")
        return f"<{', '.join(parts)}>"


@dataclass
class ResolutionContext:
    """
    Context information attached to resolution diagnostics.

    Attributes:
        header_name: Name of the forwarded header
        header_value: Raw header value as received
        reason: Reason code why the header was rejected
        index: Selection index in effect, if any
        metadata: Additional context data
    """
    header_name: str
    header_value: Optional[str]
    reason: IntEnum
    index: Optional[int] = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert context to dictionary for logging/debugging"""
        return {
            "header_name": self.header_name,
            "header_value": self.header_value,
            "reason": self.reason.name if hasattr(self.reason, "name") else str(self.reason),
            "index": self.index,
            "metadata": self.metadata,
        }
