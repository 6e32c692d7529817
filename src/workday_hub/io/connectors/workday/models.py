"""
Workday Connector Models and Exceptions.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class Operation(str, Enum):
    """Remote operations of the Human_Resources service used by this client."""

    MAINTAIN_CONTACT_INFORMATION = "Maintain_Contact_Information"
    PUT_WORKER_PHOTO = "Put_Worker_Photo"
    ADD_WORKDAY_ACCOUNT = "Add_Workday_Account"
    UPDATE_WORKDAY_ACCOUNT = "Update_Workday_Account"


class ErrorKind(str, Enum):
    TRANSPORT = "transport"
    FAULT = "fault"
    VALIDATION = "validation"


class WorkdayClientError(Exception):
    """Base exception for Workday client errors."""

    kind: Optional[ErrorKind] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to structured dict for logging."""
        return {
            "error_type": type(self).__name__,
            "error_kind": self.kind.value if self.kind else None,
            "message": str(self),
        }


class WorkdayConfigurationError(WorkdayClientError):
    """Raised when a client cannot be constructed from the given settings."""


class WorkdayTransportError(WorkdayClientError):
    """HTTP, connection or XML-level failure while talking to Workday."""

    kind = ErrorKind.TRANSPORT

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        content: Optional[str] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.content = content

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["status_code"] = self.status_code
        return data


class WorkdayFaultError(WorkdayClientError):
    """SOAP Fault returned by Workday (validation or processing fault)."""

    kind = ErrorKind.FAULT

    def __init__(
        self,
        message: str,
        *,
        code: Optional[str] = None,
        detail: Optional[str] = None,
    ):
        super().__init__(message)
        self.code = code
        self.detail = detail

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["fault_code"] = self.code
        return data


class WorkdayValidationError(WorkdayClientError):
    """Raised locally before any request is sent (e.g. unreadable photo)."""

    kind = ErrorKind.VALIDATION


@dataclass(frozen=True)
class CallRecord:
    """
    Outcome of one remote invocation.

    Attributes:
        operation: Operation that was invoked.
        request_text: Raw SOAP request envelope, None if nothing was sent.
        response_text: Raw SOAP response envelope, None if nothing came back.
        error: Captured failure, None on success.
        result: Deserialized response object on success.
    """

    operation: Operation
    request_text: Optional[str] = None
    response_text: Optional[str] = None
    error: Optional[WorkdayClientError] = None
    result: Any = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def error_kind(self) -> Optional[ErrorKind]:
        return self.error.kind if self.error is not None else None

    def summary(self) -> Dict[str, Any]:
        """Small JSON-friendly description used by logs and the CLI."""
        return {
            "operation": self.operation.value,
            "ok": self.ok,
            "error": self.error.to_dict() if self.error is not None else None,
            "request_sent": self.request_text is not None,
            "response_received": self.response_text is not None,
        }
