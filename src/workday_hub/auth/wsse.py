"""
WS-Security UsernameToken header generation.

Each call gets its own header built from the session ``Credential``, a fresh
random nonce and the current UTC time. Two password modes are supported by the
OASIS username-token profile:

- PasswordText: the password travels as is. A nonce is still sent because some
  servers (Axis/WSS4J) insist on one.
- PasswordDigest: ``Base64(SHA-1(nonce + created + password))`` travels instead
  of the password, with ``wsu:Created`` carrying the timestamp.

The raw nonce bytes are hashed, as the profile prescribes, and the nonce
element carries their Base64 encoding.
"""

from __future__ import annotations

import base64
import hashlib
import secrets
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Optional

from lxml import etree

from .models import Credential, PasswordType

OASIS = "http://docs.oasis-open.org/wss/2004/01"
WSSE_NS = f"{OASIS}/oasis-200401-wss-wssecurity-secext-1.0.xsd"
WSU_NS = f"{OASIS}/oasis-200401-wss-wssecurity-utility-1.0.xsd"
USERNAME_TOKEN_PROFILE = f"{OASIS}/oasis-200401-wss-username-token-profile-1.0"
BASE64_ENCODING_TYPE = (
    f"{OASIS}/oasis-200401-wss-soap-message-security-1.0#Base64Binary"
)
SOAP_ENV_NS = "http://schemas.xmlsoap.org/soap/envelope/"

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"
NONCE_SIZE = 16


def generate_nonce(size: int = NONCE_SIZE) -> bytes:
    """Return ``size`` bytes from the OS CSPRNG."""
    return secrets.token_bytes(size)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(moment: datetime) -> str:
    """Format an instant as ``YYYY-MM-DDTHH:MM:SSZ`` in UTC."""
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    return moment.strftime(TIMESTAMP_FORMAT)


def compute_password_digest(nonce: bytes, created: str, password: str) -> str:
    """
    Compute the UsernameToken password digest.

    Args:
        nonce: Raw nonce bytes (not their Base64 text)
        created: Timestamp string exactly as sent in ``wsu:Created``
        password: Clear-text password

    Returns:
        Base64 encoded SHA-1 of ``nonce || created || password``
    """
    digest = hashlib.sha1(
        nonce + created.encode("utf-8") + password.encode("utf-8")
    ).digest()
    return base64.b64encode(digest).decode("ascii")


@dataclass(frozen=True)
class SecurityHeader:
    """A single-use UsernameToken; ``created`` is only set in digest mode."""

    username: str
    password_value: str
    password_type: PasswordType
    nonce: str
    created: Optional[str] = None

    def to_element(self) -> etree._Element:
        """Render the ``wsse:Security`` header element, marked mustUnderstand."""
        security = etree.Element(
            etree.QName(WSSE_NS, "Security"),
            nsmap={"wsse": WSSE_NS, "soap-env": SOAP_ENV_NS},
        )
        security.set(etree.QName(SOAP_ENV_NS, "mustUnderstand"), "1")

        token = etree.SubElement(security, etree.QName(WSSE_NS, "UsernameToken"))
        etree.SubElement(token, etree.QName(WSSE_NS, "Username")).text = self.username

        password = etree.SubElement(token, etree.QName(WSSE_NS, "Password"))
        password.set("Type", f"{USERNAME_TOKEN_PROFILE}#{self.password_type.value}")
        password.text = self.password_value

        nonce = etree.SubElement(token, etree.QName(WSSE_NS, "Nonce"))
        nonce.set("EncodingType", BASE64_ENCODING_TYPE)
        nonce.text = self.nonce

        if self.created is not None:
            created = etree.SubElement(
                token, etree.QName(WSU_NS, "Created"), nsmap={"wsu": WSU_NS}
            )
            created.text = self.created

        return security


class SecurityHeaderBuilder:
    """
    Builds a fresh ``SecurityHeader`` for every outgoing call.

    The nonce and clock sources can be replaced to make header generation
    reproducible in tests; production code uses the defaults.
    """

    def __init__(
        self,
        nonce_factory: Callable[[], bytes] = generate_nonce,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._nonce_factory = nonce_factory
        self._clock = clock

    def build(self, credential: Credential) -> Optional[SecurityHeader]:
        """
        Build the header for one call.

        Returns:
            The header, or None when the credential's password type is not
            one this builder knows (no authentication is attached then).
        """
        nonce_bytes = self._nonce_factory()
        nonce_text = base64.b64encode(nonce_bytes).decode("ascii")

        if credential.password_type is PasswordType.DIGEST:
            created = format_timestamp(self._clock())
            return SecurityHeader(
                username=credential.username,
                password_value=compute_password_digest(
                    nonce_bytes, created, credential.password
                ),
                password_type=PasswordType.DIGEST,
                nonce=nonce_text,
                created=created,
            )

        if credential.password_type is PasswordType.TEXT:
            return SecurityHeader(
                username=credential.username,
                password_value=credential.password,
                password_type=PasswordType.TEXT,
                nonce=nonce_text,
            )

        return None
