"""WS-Security authentication for Workday web service calls."""

from .models import Credential, PasswordType
from .wsse import (
    SecurityHeader,
    SecurityHeaderBuilder,
    compute_password_digest,
    format_timestamp,
)

__all__ = [
    "Credential",
    "PasswordType",
    "SecurityHeader",
    "SecurityHeaderBuilder",
    "compute_password_digest",
    "format_timestamp",
]
