"""Worker references, request payload trees and caller-facing models."""

from .models import ContactInfo, PhoneNumber
from .payload import Fields, Items, Node, Scalar, to_zeep
from .worker_reference import (
    INTEGRATION_SYSTEM_ID,
    IntegrationIdReference,
    IntegrationReferenceKind,
    ReferenceStyle,
    SimpleIdKind,
    SimpleIdReference,
    WorkerReference,
    is_contractor,
    resolve_worker_reference,
)

__all__ = [
    "ContactInfo",
    "PhoneNumber",
    "Fields",
    "Items",
    "Node",
    "Scalar",
    "to_zeep",
    "INTEGRATION_SYSTEM_ID",
    "IntegrationIdReference",
    "IntegrationReferenceKind",
    "ReferenceStyle",
    "SimpleIdKind",
    "SimpleIdReference",
    "WorkerReference",
    "is_contractor",
    "resolve_worker_reference",
]
