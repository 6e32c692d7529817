"""
Workday Connector package.
"""

from .core import WorkdayClient
from .invoker import CallInvoker
from .models import (
    CallRecord,
    ErrorKind,
    Operation,
    WorkdayClientError,
    WorkdayConfigurationError,
    WorkdayFaultError,
    WorkdayTransportError,
    WorkdayValidationError,
)
from .transport import EnvelopeCapturePlugin, SoapTransport, ZeepTransport

__all__ = [
    "WorkdayClient",
    "CallInvoker",
    "CallRecord",
    "ErrorKind",
    "Operation",
    "WorkdayClientError",
    "WorkdayConfigurationError",
    "WorkdayFaultError",
    "WorkdayTransportError",
    "WorkdayValidationError",
    "EnvelopeCapturePlugin",
    "SoapTransport",
    "ZeepTransport",
]
