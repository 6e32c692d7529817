"""
Worker reference construction.

Workday addresses a worker in two shapes depending on the operation:

- ``SimpleIdReference``: ``<ID type="Employee_ID">5001</ID>`` (contact info,
  photos)
- ``IntegrationIdReference``: ``<Employee_Reference><Integration_ID_Reference>
  <ID System_ID="wd-emplid">5001</ID>...`` (Workday accounts)

Contingent workers (contractors) use the ``Contingent_Worker_*`` variants. A
worker is taken to be a contractor when the identifier is not purely numeric
(contractor IDs are issued as ``CON######``). This is a naming convention, not
a lookup.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

from .payload import Fields, Scalar

INTEGRATION_SYSTEM_ID = "wd-emplid"


class ReferenceStyle(str, Enum):
    SIMPLE_ID = "ID"
    INTEGRATION_ID = "Integration_ID_Reference"


class SimpleIdKind(str, Enum):
    EMPLOYEE = "Employee_ID"
    CONTINGENT_WORKER = "Contingent_Worker_ID"


class IntegrationReferenceKind(str, Enum):
    EMPLOYEE = "Employee_Reference"
    CONTINGENT_WORKER = "Contingent_Worker_Reference"


def is_contractor(identifier: str) -> bool:
    """True when the identifier contains anything other than ASCII digits."""
    return not (identifier.isascii() and identifier.isdigit())


@dataclass(frozen=True)
class SimpleIdReference:
    value: str
    kind: SimpleIdKind

    def to_node(self) -> Fields:
        return Fields.of(ID=Scalar.of(self.value, type=self.kind.value))


@dataclass(frozen=True)
class IntegrationIdReference:
    value: str
    kind: IntegrationReferenceKind
    system_id: str = INTEGRATION_SYSTEM_ID

    def to_node(self) -> Fields:
        return Fields(
            (
                (
                    self.kind.value,
                    Fields.of(
                        Integration_ID_Reference=Fields.of(
                            ID=Scalar.of(self.value, System_ID=self.system_id)
                        )
                    ),
                ),
            )
        )


WorkerReference = Union[SimpleIdReference, IntegrationIdReference]


def resolve_worker_reference(identifier: str, style: ReferenceStyle) -> WorkerReference:
    """
    Build the reference shape ``style`` for a worker identifier.

    Args:
        identifier: Employee ID (``"5001"``) or contingent worker ID
            (``"CON900"``)
        style: Reference shape required by the target operation

    Returns:
        A reference whose kind matches the contractor classification
    """
    contractor = is_contractor(identifier)
    if style is ReferenceStyle.INTEGRATION_ID:
        return IntegrationIdReference(
            value=identifier,
            kind=(
                IntegrationReferenceKind.CONTINGENT_WORKER
                if contractor
                else IntegrationReferenceKind.EMPLOYEE
            ),
        )
    return SimpleIdReference(
        value=identifier,
        kind=SimpleIdKind.CONTINGENT_WORKER if contractor else SimpleIdKind.EMPLOYEE,
    )
