"""
Pydantic models for WS-Security UsernameToken authentication.

A ``Credential`` is validated once when a client session is created and never
changes afterwards; every outgoing call derives a fresh ``SecurityHeader`` from
it (see ``workday_hub.auth.wsse``).
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PasswordType(str, Enum):
    """UsernameToken password types; values are the profile's Type suffixes."""

    TEXT = "PasswordText"
    DIGEST = "PasswordDigest"

    @classmethod
    def parse(cls, value: str) -> "PasswordType":
        """
        Accept either the wire name or the short alias, case-insensitively.

        Raises:
            ValueError: If the value names no supported password type
        """
        normalized = value.strip().lower()
        for member in cls:
            if normalized == member.value.lower():
                return member
        aliases = {"plaintext": cls.TEXT, "text": cls.TEXT, "digest": cls.DIGEST}
        if normalized in aliases:
            return aliases[normalized]
        raise ValueError(
            f"Unsupported password type {value!r}; "
            "expected PasswordText (PlainText) or PasswordDigest (Digest)"
        )


class Credential(BaseModel):
    """
    WS-Security credentials of the integration user.

    Attributes:
        username: Integration system user name (e.g. ``isu_hr@tenant``).
        password: Password of the integration user.
        password_type: Whether the password travels as text or as a digest.
    """

    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)
    password_type: PasswordType = PasswordType.TEXT

    @field_validator("username")
    @classmethod
    def normalize_username(cls, value: str) -> str:
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("Username must not be blank")
        return cleaned

    @field_validator("password_type", mode="before")
    @classmethod
    def parse_password_type(cls, value: object) -> object:
        if isinstance(value, str):
            return PasswordType.parse(value)
        return value

    def __repr__(self) -> str:
        return (
            f"Credential(username={self.username!r}, password='***', "
            f"password_type={self.password_type.value!r})"
        )

    __str__ = __repr__

    model_config = ConfigDict(frozen=True)


__all__ = [
    "Credential",
    "PasswordType",
]
