"""Pytest configuration and shared fixtures for Workday Hub tests.

An optional .wday_env file at the project root is loaded first (override=True)
so local test runs never pick up production WDAY_* credentials from the shell.
"""

from __future__ import annotations

from pathlib import Path

from dotenv import load_dotenv

_WDAY_ENV_FILE = Path(__file__).parent.parent / ".wday_env"
if _WDAY_ENV_FILE.exists():
    load_dotenv(_WDAY_ENV_FILE, override=True)

from datetime import datetime, timezone
from types import SimpleNamespace
from typing import Any, Dict, List, Optional

import pytest
from lxml import etree

from workday_hub.auth.models import Credential, PasswordType
from workday_hub.auth.wsse import SecurityHeaderBuilder
from workday_hub.io.connectors.workday import WorkdayClient

FIXED_NONCE = bytes(range(16))
FIXED_NOW = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)


class FakeTransport:
    """In-memory SoapTransport that records calls instead of sending them.

    The captured request text is the rendered security header(s) followed by
    the operation name, which is enough for tests to inspect the header that
    went out with each call.
    """

    def __init__(
        self,
        result: Any = None,
        error: Optional[Exception] = None,
        response_text: Optional[str] = "<response/>",
        send_before_error: bool = True,
    ):
        self.result = result
        self.error = error
        self.response_text = response_text
        self.send_before_error = send_before_error
        self.calls: List[SimpleNamespace] = []
        self.last_request_text: Optional[str] = "<stale-request/>"
        self.last_response_text: Optional[str] = "<stale-response/>"

    def reset_capture(self) -> None:
        self.last_request_text = None
        self.last_response_text = None

    def send(
        self, operation: str, arguments: Dict[str, Any], soap_headers: List[Any]
    ) -> Any:
        self.calls.append(
            SimpleNamespace(
                operation=operation, arguments=arguments, soap_headers=soap_headers
            )
        )
        if self.error is not None:
            if self.send_before_error:
                self.last_request_text = self._render(operation, soap_headers)
            raise self.error
        self.last_request_text = self._render(operation, soap_headers)
        self.last_response_text = self.response_text
        return self.result

    @staticmethod
    def _render(operation: str, soap_headers: List[Any]) -> str:
        headers = "".join(
            etree.tostring(header, encoding="unicode") for header in soap_headers
        )
        return f"<envelope><header>{headers}</header><body>{operation}</body></envelope>"


@pytest.fixture
def text_credential() -> Credential:
    return Credential(
        username="isu_hr@acme", password="s3cret!", password_type=PasswordType.TEXT
    )


@pytest.fixture
def digest_credential() -> Credential:
    return Credential(
        username="isu_hr@acme", password="s3cret!", password_type=PasswordType.DIGEST
    )


@pytest.fixture
def fixed_header_builder() -> SecurityHeaderBuilder:
    return SecurityHeaderBuilder(
        nonce_factory=lambda: FIXED_NONCE, clock=lambda: FIXED_NOW
    )


@pytest.fixture
def fake_transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def client(text_credential: Credential, fake_transport: FakeTransport) -> WorkdayClient:
    return WorkdayClient(text_credential, fake_transport)


@pytest.fixture
def make_transport():
    """Factory for FakeTransport instances with custom results or errors."""
    return FakeTransport
