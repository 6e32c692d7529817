"""
Workday Human_Resources web service client core implementation.
"""

import threading
from pathlib import Path
from typing import BinaryIO, List, Optional, Union

from pydantic import ValidationError

from workday_hub.auth.models import Credential
from workday_hub.auth.wsse import SecurityHeaderBuilder
from workday_hub.config.settings import WorkdaySettings, get_settings
from workday_hub.domain.models import ContactInfo, PhoneNumber
from workday_hub.domain.payload import Fields
from workday_hub.utils.logging import get_logger

from .builders import (
    build_add_account_request,
    build_contact_information_request,
    build_update_account_request,
    build_worker_photo_request,
)
from .invoker import CallInvoker
from .models import (
    CallRecord,
    Operation,
    WorkdayClientError,
    WorkdayConfigurationError,
    WorkdayValidationError,
)
from .transport import SoapTransport, ZeepTransport

logger = get_logger(__name__)

PhotoSource = Union[str, Path, BinaryIO, bytes]


class WorkdayClient:
    """
    Synchronous client for the Workday Human_Resources web service.

    Every operation returns its ``CallRecord``. The most recent record is also
    kept as ``last_call`` for convenience; callers sharing a client between
    threads should rely on the returned records instead.
    """

    def __init__(
        self,
        credential: Credential,
        transport: SoapTransport,
        *,
        header_builder: Optional[SecurityHeaderBuilder] = None,
    ):
        self.credential = credential
        self.transport = transport
        self.invoker = CallInvoker(transport, credential, header_builder)
        self._lock = threading.Lock()
        self._last_call: Optional[CallRecord] = None

    @classmethod
    def from_settings(
        cls,
        settings: Optional[WorkdaySettings] = None,
        *,
        transport: Optional[SoapTransport] = None,
    ) -> "WorkdayClient":
        """
        Construct a client from WDAY_* settings.

        Raises:
            WorkdayConfigurationError: If credentials or the WSDL location are
                missing or invalid, or the WSDL cannot be loaded
        """
        try:
            settings = settings or get_settings()
        except ValidationError as e:
            raise WorkdayConfigurationError(f"Invalid Workday settings: {e}") from e

        required = {
            "WDAY_API_USERNAME": settings.api_username,
            "WDAY_API_PASSWORD": settings.api_password,
        }
        if transport is None:
            required["WDAY_WSDL"] = settings.wsdl
        missing = [name for name, value in required.items() if not value.strip()]
        if missing:
            raise WorkdayConfigurationError(
                f"Missing required Workday settings: {', '.join(missing)}"
            )

        try:
            credential = Credential(
                username=settings.api_username,
                password=settings.api_password,
                password_type=settings.api_password_type,
            )
        except ValidationError as e:
            raise WorkdayConfigurationError(f"Invalid Workday credentials: {e}") from e

        if transport is None:
            transport = ZeepTransport.from_settings(settings)

        logger.info(
            "workday.client.initialized",
            username=credential.username,
            auth_mode=credential.password_type.value,
        )
        return cls(credential, transport)

    # ------------------------------------------------------------------
    # Diagnostics
    # ------------------------------------------------------------------

    @property
    def last_call(self) -> Optional[CallRecord]:
        with self._lock:
            return self._last_call

    def get_client_request(self) -> Optional[str]:
        """Raw request envelope of the last call, None if nothing was sent."""
        record = self.last_call
        return record.request_text if record is not None else None

    def get_server_response(self) -> Optional[str]:
        """Raw response envelope of the last call, None if none was received."""
        record = self.last_call
        return record.response_text if record is not None else None

    def get_last_error(self) -> Optional[WorkdayClientError]:
        record = self.last_call
        return record.error if record is not None else None

    def list_operations(self) -> List[str]:
        return self._introspect("list_operations")

    def list_types(self) -> List[str]:
        return self._introspect("list_types")

    def _introspect(self, name: str) -> List[str]:
        method = getattr(self.transport, name, None)
        if method is None:
            raise WorkdayClientError(
                f"{type(self.transport).__name__} does not support WSDL introspection"
            )
        return method()

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def maintain_contact_information(
        self, worker_id: str, contact: ContactInfo
    ) -> CallRecord:
        """
        Update a worker's work email and/or work phone.

        Args:
            worker_id: Employee ID or contingent worker ID (``CON...``)
            contact: Fields to maintain; an empty ContactInfo is passed through,
                a blank email is rejected locally
        """
        operation = Operation.MAINTAIN_CONTACT_INFORMATION
        error = self._check_worker_id(worker_id)
        if error is None and contact.email is not None and not contact.email:
            error = WorkdayValidationError("Email address cannot be empty")
        if error is not None:
            return self._remember(self.invoker.reject(operation, error))
        return self._invoke(*build_contact_information_request(worker_id, contact))

    def update_email(self, worker_id: str, email: str) -> CallRecord:
        return self.maintain_contact_information(worker_id, ContactInfo(email=email))

    def update_work_phone(self, worker_id: str, phone: PhoneNumber) -> CallRecord:
        return self.maintain_contact_information(worker_id, ContactInfo(phone=phone))

    def update_photo(self, worker_id: str, source: PhotoSource) -> CallRecord:
        """
        Replace a worker's photo.

        Args:
            worker_id: Employee ID or contingent worker ID
            source: Image path, open binary file, or raw bytes
        """
        operation = Operation.PUT_WORKER_PHOTO
        error = self._check_worker_id(worker_id)
        if error is not None:
            return self._remember(self.invoker.reject(operation, error))

        try:
            content, filename = _read_photo(source)
        except WorkdayValidationError as e:
            return self._remember(self.invoker.reject(operation, e))

        return self._invoke(*build_worker_photo_request(worker_id, content, filename))

    def add_workday_account(self, worker_id: str, username: str) -> CallRecord:
        """Create an account (random password, SSO assumed) for a worker."""
        operation = Operation.ADD_WORKDAY_ACCOUNT
        error = self._check_worker_id(worker_id) or _check_username(username)
        if error is not None:
            return self._remember(self.invoker.reject(operation, error))
        return self._invoke(*build_add_account_request(worker_id, username))

    def update_username(self, worker_id: str, username: str) -> CallRecord:
        """Rename an existing Workday account."""
        operation = Operation.UPDATE_WORKDAY_ACCOUNT
        error = self._check_worker_id(worker_id) or _check_username(username)
        if error is not None:
            return self._remember(self.invoker.reject(operation, error))
        return self._invoke(*build_update_account_request(worker_id, username))

    def _invoke(self, operation: Operation, payload: Fields) -> CallRecord:
        # The transport's capture slots are per client; hold the lock for the
        # whole call so concurrent callers cannot swap envelopes.
        with self._lock:
            record = self.invoker.invoke(operation, payload)
            self._last_call = record
        return record

    def _remember(self, record: CallRecord) -> CallRecord:
        with self._lock:
            self._last_call = record
        return record

    @staticmethod
    def _check_worker_id(worker_id: str) -> Optional[WorkdayValidationError]:
        if not worker_id or not worker_id.strip():
            return WorkdayValidationError("Worker ID cannot be empty")
        return None


def _check_username(username: str) -> Optional[WorkdayValidationError]:
    if not username or not username.strip():
        return WorkdayValidationError("Username cannot be empty")
    return None


def _read_photo(source: PhotoSource):
    """Return ``(content, filename)`` for a photo source."""
    if isinstance(source, bytes):
        content, filename = source, None
    elif isinstance(source, (str, Path)):
        path = Path(source)
        try:
            content = path.read_bytes()
        except OSError as e:
            raise WorkdayValidationError(f"Cannot read photo {path}: {e}") from e
        filename = path.name
    else:
        try:
            content = source.read()
        except (OSError, ValueError) as e:
            raise WorkdayValidationError(f"Cannot read photo stream: {e}") from e
        name = getattr(source, "name", None)
        filename = Path(name).name if isinstance(name, str) else None

    if not isinstance(content, bytes):
        raise WorkdayValidationError("Photo source must provide binary content")
    if not content:
        raise WorkdayValidationError("Photo source is empty")
    return content, filename
