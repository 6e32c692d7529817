"""Tests for contractor classification and worker reference shapes."""

import pytest

from workday_hub.domain.payload import to_zeep
from workday_hub.domain.worker_reference import (
    INTEGRATION_SYSTEM_ID,
    IntegrationIdReference,
    IntegrationReferenceKind,
    ReferenceStyle,
    SimpleIdKind,
    SimpleIdReference,
    is_contractor,
    resolve_worker_reference,
)


@pytest.mark.unit
class TestIsContractor:
    @pytest.mark.parametrize("identifier", ["12345", "0", "5001"])
    def test_numeric_ids_are_employees(self, identifier):
        assert is_contractor(identifier) is False

    @pytest.mark.parametrize(
        "identifier", ["CON12345", "12a45", "123 45", "-5", "1.5", "", "١٢٣"]
    )
    def test_anything_else_is_a_contractor(self, identifier):
        assert is_contractor(identifier) is True


@pytest.mark.unit
class TestResolveWorkerReference:
    def test_simple_id_employee(self):
        reference = resolve_worker_reference("12345", ReferenceStyle.SIMPLE_ID)
        assert isinstance(reference, SimpleIdReference)
        assert reference.kind is SimpleIdKind.EMPLOYEE
        assert reference.value == "12345"

    def test_simple_id_contractor(self):
        reference = resolve_worker_reference("CON12345", ReferenceStyle.SIMPLE_ID)
        assert reference.kind is SimpleIdKind.CONTINGENT_WORKER

    def test_integration_reference_employee(self):
        reference = resolve_worker_reference("12345", ReferenceStyle.INTEGRATION_ID)
        assert isinstance(reference, IntegrationIdReference)
        assert reference.kind is IntegrationReferenceKind.EMPLOYEE
        assert reference.system_id == INTEGRATION_SYSTEM_ID == "wd-emplid"

    def test_integration_reference_contractor(self):
        reference = resolve_worker_reference("CON900", ReferenceStyle.INTEGRATION_ID)
        assert reference.kind is IntegrationReferenceKind.CONTINGENT_WORKER

    def test_resolution_is_deterministic(self):
        assert resolve_worker_reference(
            "CON1", ReferenceStyle.SIMPLE_ID
        ) == resolve_worker_reference("CON1", ReferenceStyle.SIMPLE_ID)


@pytest.mark.unit
class TestReferenceNodes:
    def test_simple_id_node(self):
        node = resolve_worker_reference("5001", ReferenceStyle.SIMPLE_ID).to_node()
        assert to_zeep(node) == {"ID": {"_value_1": "5001", "type": "Employee_ID"}}

    def test_integration_node(self):
        node = resolve_worker_reference("CON900", ReferenceStyle.INTEGRATION_ID).to_node()
        assert to_zeep(node) == {
            "Contingent_Worker_Reference": {
                "Integration_ID_Reference": {
                    "ID": {"_value_1": "CON900", "System_ID": "wd-emplid"}
                }
            }
        }
