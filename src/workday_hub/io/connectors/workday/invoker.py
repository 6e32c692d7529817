"""
Generic call pipeline: security header -> dispatch -> capture.

``CallInvoker.invoke`` never raises for transport, fault or local validation
failures; they end up in ``CallRecord.error`` next to whatever raw request and
response text the transport managed to capture.
"""

from typing import Optional

from workday_hub.auth.models import Credential
from workday_hub.auth.wsse import SecurityHeaderBuilder
from workday_hub.domain.payload import Fields, to_zeep
from workday_hub.utils.logging import get_logger

from .models import CallRecord, Operation, WorkdayClientError, WorkdayTransportError
from .transport import SoapTransport

logger = get_logger(__name__)


class CallInvoker:
    """
    Performs one authenticated operation per ``invoke`` call.

    The credential is bound once; a new security header is generated for each
    invocation and handed to the transport for that call only.
    """

    def __init__(
        self,
        transport: SoapTransport,
        credential: Credential,
        header_builder: Optional[SecurityHeaderBuilder] = None,
    ):
        self.transport = transport
        self.credential = credential
        self.header_builder = header_builder or SecurityHeaderBuilder()

    def invoke(self, operation: Operation, payload: Fields) -> CallRecord:
        """
        Invoke ``operation`` with ``payload`` as its argument tree.

        Args:
            operation: Remote operation to perform
            payload: Children of the operation's request element

        Returns:
            CallRecord with captured envelopes and, on failure, the error
        """
        header = self.header_builder.build(self.credential)
        soap_headers = [header.to_element()] if header is not None else []
        if header is None:
            logger.warning(
                "workday.call.unauthenticated",
                operation=operation.value,
                auth_mode=self.credential.password_type.value,
            )

        self.transport.reset_capture()
        logger.info(
            "workday.call.started",
            operation=operation.value,
            fields=list(payload.names()),
        )

        result = None
        error: Optional[WorkdayClientError] = None
        try:
            result = self.transport.send(operation.value, to_zeep(payload), soap_headers)
        except WorkdayClientError as e:
            error = e
        finally:
            request_text = self.transport.last_request_text
            response_text = self.transport.last_response_text

        if (
            response_text is None
            and isinstance(error, WorkdayTransportError)
            and error.content
        ):
            response_text = error.content

        record = CallRecord(
            operation=operation,
            request_text=request_text,
            response_text=response_text,
            error=error,
            result=result,
        )

        if error is not None:
            logger.error("workday.call.failed", **record.summary())
        else:
            logger.info("workday.call.completed", **record.summary())
        return record

    def reject(self, operation: Operation, error: WorkdayClientError) -> CallRecord:
        """Record a call that failed local validation and was never sent."""
        logger.warning(
            "workday.call.rejected", operation=operation.value, **error.to_dict()
        )
        return CallRecord(operation=operation, error=error)
