"""
Pydantic models for caller-supplied worker data.

Only shape is checked here; Workday itself validates addresses and numbers.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class PhoneNumber(BaseModel):
    """
    Work phone as Workday splits it.

    Attributes:
        number: Subscriber number, already formatted for the country.
        intl_code: International dialling code without ``+`` (``"1"``).
        area_code: Area code (``"408"``).
        extension: Optional extension.
    """

    number: str = Field(..., min_length=1)
    intl_code: Optional[str] = None
    area_code: Optional[str] = None
    extension: Optional[str] = None

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)


class ContactInfo(BaseModel):
    """Contact details to maintain; absent fields are left untouched."""

    email: Optional[str] = None
    phone: Optional[PhoneNumber] = None

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    @property
    def is_empty(self) -> bool:
        return self.email is None and self.phone is None
