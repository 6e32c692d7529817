"""
SOAP transport layer for the Workday connector.

Wraps a zeep ``Client`` loaded from the Workday WSDL. zeep owns WSDL parsing,
XML (de)serialization and HTTP (through a ``requests`` session); this module
adds envelope capture for diagnostics and translates zeep/requests failures
into the connector's exception types.
"""

from typing import Any, Dict, List, Optional, Protocol

import requests
from lxml import etree
from zeep import Client, Plugin, Settings
from zeep.exceptions import Error as ZeepError
from zeep.exceptions import Fault, TransportError, ValidationError
from zeep.transports import Transport

from workday_hub.config.settings import WorkdaySettings
from workday_hub.utils.logging import get_logger, mask_envelope

from .models import (
    WorkdayConfigurationError,
    WorkdayFaultError,
    WorkdayTransportError,
    WorkdayValidationError,
)

logger = get_logger(__name__)


class SoapTransport(Protocol):
    """Protocol for transports the call invoker can drive."""

    def send(
        self, operation: str, arguments: Dict[str, Any], soap_headers: List[Any]
    ) -> Any:
        """
        Perform one operation.

        Raises:
            WorkdayTransportError: HTTP/connection/XML failure
            WorkdayFaultError: SOAP Fault in the response
            WorkdayValidationError: Arguments rejected before sending
        """
        ...

    def reset_capture(self) -> None:
        """Forget the envelopes of the previous call."""
        ...

    @property
    def last_request_text(self) -> Optional[str]: ...

    @property
    def last_response_text(self) -> Optional[str]: ...


class EnvelopeCapturePlugin(Plugin):
    """Zeep plugin recording the outgoing and incoming envelopes as text."""

    def __init__(self, pretty_print: bool = False):
        self.pretty_print = pretty_print
        self.last_sent: Optional[str] = None
        self.last_received: Optional[str] = None

    def reset(self) -> None:
        self.last_sent = None
        self.last_received = None

    def _to_text(self, envelope: Any) -> str:
        return etree.tostring(
            envelope, encoding="unicode", pretty_print=self.pretty_print
        )

    def egress(self, envelope, http_headers, operation, binding_options):
        self.last_sent = self._to_text(envelope)
        return envelope, http_headers

    def ingress(self, envelope, http_headers, operation):
        self.last_received = self._to_text(envelope)
        return envelope, http_headers


class ZeepTransport:
    """
    Production transport backed by zeep.

    Construction loads the WSDL; failure to do so is a configuration error so
    no half-initialized transport escapes.
    """

    def __init__(
        self,
        wsdl: str,
        *,
        timeout: int = 300,
        operation_timeout: Optional[int] = None,
        strict: bool = False,
        debug: bool = False,
        session: Optional[requests.Session] = None,
        client: Optional[Client] = None,
    ):
        self.wsdl = wsdl
        self.debug = debug
        self.capture = EnvelopeCapturePlugin(pretty_print=debug)

        if client is not None:
            client.plugins.append(self.capture)
            self.client = client
        else:
            if not wsdl:
                raise WorkdayConfigurationError("WSDL location is required")
            transport = Transport(
                session=session or requests.Session(),
                timeout=timeout,
                operation_timeout=operation_timeout,
            )
            try:
                self.client = Client(
                    wsdl,
                    transport=transport,
                    settings=Settings(strict=strict, xml_huge_tree=True),
                    plugins=[self.capture],
                )
            except (ZeepError, requests.RequestException, OSError) as e:
                logger.error("workday.wsdl.load_failed", wsdl=wsdl, error=str(e))
                raise WorkdayConfigurationError(
                    f"Unable to load Workday WSDL from {wsdl}: {e}"
                ) from e

        logger.info(
            "workday.transport.initialized",
            wsdl=wsdl,
            strict=strict,
            debug=debug,
        )

    @classmethod
    def from_settings(cls, settings: WorkdaySettings) -> "ZeepTransport":
        return cls(
            settings.wsdl,
            timeout=settings.timeout,
            operation_timeout=settings.operation_timeout,
            strict=settings.strict_schema,
            debug=settings.debug,
        )

    @property
    def last_request_text(self) -> Optional[str]:
        return self.capture.last_sent

    @property
    def last_response_text(self) -> Optional[str]:
        return self.capture.last_received

    def reset_capture(self) -> None:
        self.capture.reset()

    def send(
        self, operation: str, arguments: Dict[str, Any], soap_headers: List[Any]
    ) -> Any:
        try:
            method = getattr(self.client.service, operation)
        except AttributeError as e:
            raise WorkdayTransportError(
                f"Operation {operation} is not defined by the WSDL"
            ) from e

        try:
            return method(_soapheaders=soap_headers, **arguments)
        except Fault as e:
            raise WorkdayFaultError(
                f"SOAP fault: {e.message}", code=e.code, detail=_fault_detail(e.detail)
            ) from e
        except (ValidationError, TypeError) as e:
            raise WorkdayValidationError(
                f"Request for {operation} does not match the WSDL: {e}"
            ) from e
        except TransportError as e:
            content = e.content
            if isinstance(content, bytes):
                content = content.decode("utf-8", errors="replace")
            raise WorkdayTransportError(
                f"HTTP transport error: {e.message}",
                status_code=e.status_code,
                content=content,
            ) from e
        except ZeepError as e:
            raise WorkdayTransportError(f"SOAP protocol error: {e}") from e
        except requests.RequestException as e:
            raise WorkdayTransportError(f"Request failed: {e}") from e
        finally:
            if self.debug:
                logger.debug(
                    "workday.transport.envelopes",
                    operation=operation,
                    request=mask_envelope(self.capture.last_sent or ""),
                    response=mask_envelope(self.capture.last_received or ""),
                )

    def list_operations(self) -> List[str]:
        """Operation signatures declared by the WSDL, one per binding."""
        signatures: List[str] = []
        for service in self.client.wsdl.services.values():
            for port in service.ports.values():
                # Bound operations are only reachable privately; zeep's own
                # `python -m zeep` dump walks them the same way.
                for operation in port.binding._operations.values():
                    signatures.append(str(operation))
        return sorted(set(signatures))

    def list_types(self) -> List[str]:
        """Type signatures declared by the WSDL schemas."""
        types = self.client.wsdl.types
        return [
            type_.signature(schema=types)
            for type_ in sorted(types.types, key=lambda t: str(t.qname))
        ]


def _fault_detail(detail: Any) -> Optional[str]:
    """Fault detail as text; zeep gives bytes for non-SOAP error bodies."""
    if detail is None:
        return None
    if isinstance(detail, etree._Element):
        return etree.tostring(detail, encoding="unicode")
    if isinstance(detail, bytes):
        return detail.decode("utf-8", errors="replace")
    return str(detail)
