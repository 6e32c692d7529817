"""Tests for the call pipeline: header injection, dispatch and capture."""

from unittest.mock import Mock

import pytest
from lxml import etree
from zeep.exceptions import Fault

from workday_hub.auth.models import Credential
from workday_hub.auth.wsse import WSSE_NS, SecurityHeaderBuilder
from workday_hub.domain.payload import Fields, Scalar
from workday_hub.io.connectors.workday.invoker import CallInvoker
from workday_hub.io.connectors.workday.models import (
    ErrorKind,
    Operation,
    WorkdayFaultError,
    WorkdayTransportError,
    WorkdayValidationError,
)
from workday_hub.io.connectors.workday.transport import ZeepTransport

PAYLOAD = Fields.of(Worker_Reference=Fields.of(ID=Scalar.of("5001", type="Employee_ID")))


def _token_from_request(request_text):
    envelope = etree.fromstring(request_text)
    return envelope.find(f".//{{{WSSE_NS}}}UsernameToken")


@pytest.mark.unit
class TestInvokeSuccess:
    def test_record_captures_envelopes_and_result(self, text_credential, make_transport):
        transport = make_transport(result={"Worker": "ok"}, response_text="<ok/>")
        record = CallInvoker(transport, text_credential).invoke(
            Operation.PUT_WORKER_PHOTO, PAYLOAD
        )

        assert record.ok
        assert record.error is None
        assert record.error_kind is None
        assert record.operation is Operation.PUT_WORKER_PHOTO
        assert record.result == {"Worker": "ok"}
        assert record.response_text == "<ok/>"
        assert "Put_Worker_Photo" in record.request_text

    def test_payload_converted_for_transport(self, text_credential, fake_transport):
        CallInvoker(fake_transport, text_credential).invoke(
            Operation.PUT_WORKER_PHOTO, PAYLOAD
        )
        call = fake_transport.calls[0]
        assert call.operation == "Put_Worker_Photo"
        assert call.arguments == {
            "Worker_Reference": {"ID": {"_value_1": "5001", "type": "Employee_ID"}}
        }

    def test_header_attached_per_call(self, digest_credential, fake_transport):
        invoker = CallInvoker(fake_transport, digest_credential)
        invoker.invoke(Operation.PUT_WORKER_PHOTO, PAYLOAD)
        invoker.invoke(Operation.PUT_WORKER_PHOTO, PAYLOAD)

        first, second = fake_transport.calls
        assert len(first.soap_headers) == 1
        assert len(second.soap_headers) == 1
        assert first.soap_headers[0] is not second.soap_headers[0]

    def test_plaintext_round_trip(self, text_credential, fake_transport):
        invoker = CallInvoker(fake_transport, text_credential)
        first = invoker.invoke(Operation.UPDATE_WORKDAY_ACCOUNT, PAYLOAD)
        second = invoker.invoke(Operation.UPDATE_WORKDAY_ACCOUNT, PAYLOAD)

        first_token = _token_from_request(first.request_text)
        second_token = _token_from_request(second.request_text)

        assert first_token.findtext(f"{{{WSSE_NS}}}Password") == "s3cret!"
        assert second_token.findtext(f"{{{WSSE_NS}}}Password") == "s3cret!"
        assert first_token.findtext(f"{{{WSSE_NS}}}Nonce") != second_token.findtext(
            f"{{{WSSE_NS}}}Nonce"
        )

    def test_records_are_independent(self, text_credential, make_transport):
        transport = make_transport(response_text="<first/>")
        invoker = CallInvoker(transport, text_credential)
        first = invoker.invoke(Operation.PUT_WORKER_PHOTO, PAYLOAD)
        transport.response_text = "<second/>"
        second = invoker.invoke(Operation.PUT_WORKER_PHOTO, PAYLOAD)

        assert first.response_text == "<first/>"
        assert second.response_text == "<second/>"

    def test_no_header_when_builder_returns_none(self, text_credential, fake_transport):
        builder = Mock(spec=SecurityHeaderBuilder)
        builder.build.return_value = None

        record = CallInvoker(fake_transport, text_credential, builder).invoke(
            Operation.PUT_WORKER_PHOTO, PAYLOAD
        )

        assert record.ok
        assert fake_transport.calls[0].soap_headers == []


@pytest.mark.unit
class TestInvokeFailures:
    def test_fault_is_captured_not_raised(self, text_credential, make_transport):
        fault = WorkdayFaultError("SOAP fault: Invalid ID value", code="SOAP-ENV:Client.validationError")
        transport = make_transport(error=fault)

        record = CallInvoker(transport, text_credential).invoke(
            Operation.MAINTAIN_CONTACT_INFORMATION, PAYLOAD
        )

        assert not record.ok
        assert record.error is fault
        assert record.error_kind is ErrorKind.FAULT
        assert record.request_text is not None

    def test_transport_failure_keeps_request_text(self, text_credential, make_transport):
        transport = make_transport(error=WorkdayTransportError("Request failed: timed out"))

        record = CallInvoker(transport, text_credential).invoke(
            Operation.ADD_WORKDAY_ACCOUNT, PAYLOAD
        )

        assert record.error_kind is ErrorKind.TRANSPORT
        assert record.request_text is not None
        assert record.response_text is None

    def test_transport_error_content_used_as_response(self, text_credential, make_transport):
        error = WorkdayTransportError(
            "HTTP transport error: Server Error", status_code=503, content="<html>busy</html>"
        )
        record = CallInvoker(make_transport(error=error), text_credential).invoke(
            Operation.ADD_WORKDAY_ACCOUNT, PAYLOAD
        )
        assert record.response_text == "<html>busy</html>"
        assert record.summary()["error"]["status_code"] == 503

    def test_stale_capture_is_not_reported(self, text_credential, make_transport):
        transport = make_transport(
            error=WorkdayValidationError("Request does not match the WSDL"),
            send_before_error=False,
        )
        record = CallInvoker(transport, text_credential).invoke(
            Operation.PUT_WORKER_PHOTO, PAYLOAD
        )

        assert record.error_kind is ErrorKind.VALIDATION
        assert record.request_text is None
        assert record.response_text is None

    def test_programming_errors_propagate(self, text_credential, make_transport):
        transport = make_transport(error=RuntimeError("boom"))
        with pytest.raises(RuntimeError):
            CallInvoker(transport, text_credential).invoke(
                Operation.PUT_WORKER_PHOTO, PAYLOAD
            )

    def test_reject_records_local_failure(self, text_credential, fake_transport):
        error = WorkdayValidationError("Worker ID cannot be empty")
        record = CallInvoker(fake_transport, text_credential).reject(
            Operation.PUT_WORKER_PHOTO, error
        )

        assert record.error is error
        assert record.request_text is None
        assert fake_transport.calls == []


def test_invoker_binds_credential(fake_transport):
    credential = Credential(username="isu", password="pw")
    invoker = CallInvoker(fake_transport, credential)
    assert invoker.credential is credential
    assert isinstance(invoker.header_builder, SecurityHeaderBuilder)


def test_gateway_error_page_is_recorded_as_fault(text_credential):
    client = Mock()
    client.plugins = []
    client.service = Mock(spec=[Operation.PUT_WORKER_PHOTO.value])
    client.service.Put_Worker_Photo.side_effect = Fault(
        "Unknown fault occured", detail=b"<html><body>Bad Gateway</body></html>"
    )
    transport = ZeepTransport("file:///tmp/hr.wsdl", client=client)

    record = CallInvoker(transport, text_credential).invoke(
        Operation.PUT_WORKER_PHOTO, PAYLOAD
    )

    assert record.error_kind is ErrorKind.FAULT
    assert "Bad Gateway" in record.error.detail
