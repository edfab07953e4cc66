"""Unit tests for payment commands."""

from datetime import datetime
from unittest.mock import Mock

import pytest

from bulkscan_orchestrator.ccd.payments_processor import PaymentsProcessor
from bulkscan_orchestrator.domain.callbacks.models import ExceptionRecord
from bulkscan_orchestrator.domain.envelopes.models import Classification
from bulkscan_orchestrator.domain.payments.models import CreatePaymentsCommand, UpdatePaymentsCommand
from bulkscan_orchestrator.domain.payments.ports import PaymentsPublisherPort, PaymentsPublishingError

from fixtures.envelopes import envelope


def exception_record(contains_payments: bool) -> ExceptionRecord:
    return ExceptionRecord(
        id="1539007368674001",
        case_type_id="BULKSCAN_ExceptionRecord",
        po_box="12625",
        po_box_jurisdiction="BULKSCAN",
        journey_classification=Classification.NEW_APPLICATION,
        form_type="PERSONAL",
        delivery_date=datetime(2026, 3, 2, 10, 15),
        opening_date=datetime(2026, 3, 2, 11, 30),
        envelope_id="env-1",
        contains_payments=contains_payments,
    )


class TestPaymentsProcessor:
    """Test PaymentsProcessor create and update commands."""

    @pytest.fixture
    def publisher(self):
        return Mock(spec=PaymentsPublisherPort)

    @pytest.fixture
    def processor(self, publisher):
        return PaymentsProcessor(publisher)

    def test_create_payments(self, processor, publisher):
        """Test payments are registered against the case."""
        processor.create_payments(envelope(payments=("154565768", "154565769")), 1539007368674001, False)

        publisher.send_create.assert_called_once_with(CreatePaymentsCommand(
            envelope_id="env-1",
            ccd_reference="1539007368674001",
            jurisdiction="BULKSCAN",
            service="bulkscan",
            po_box="12625",
            is_exception_record=False,
            payments=("154565768", "154565769"),
        ))

    def test_create_payments_for_exception_record(self, processor, publisher):
        """Test exception record flag is passed on."""
        processor.create_payments(envelope(payments=("154565768",)), 1539007368674002, True)

        command = publisher.send_create.call_args[0][0]
        assert command.is_exception_record is True

    def test_no_payments(self, processor, publisher):
        """Test nothing is sent for envelopes without payments."""
        processor.create_payments(envelope(), 1539007368674001, False)

        publisher.send_create.assert_not_called()

    def test_create_failure_propagates(self, processor, publisher):
        """Test publishing failure is raised."""
        publisher.send_create.side_effect = PaymentsPublishingError("down")

        with pytest.raises(PaymentsPublishingError):
            processor.create_payments(envelope(payments=("154565768",)), 1539007368674001, False)

    def test_update_payments(self, processor, publisher):
        """Test payments move from the exception record to the new case."""
        processor.update_payments(exception_record(True), "BULKSCAN", "1539007368674001", 1539007368674099)

        publisher.send_update.assert_called_once_with(UpdatePaymentsCommand(
            exception_record_ref="1539007368674001",
            new_case_ref="1539007368674099",
            envelope_id="env-1",
            jurisdiction="BULKSCAN",
        ))

    def test_update_without_payments(self, processor, publisher):
        """Test nothing is sent when the record has no payments."""
        processor.update_payments(exception_record(False), "BULKSCAN", "1539007368674001", 1539007368674099)

        publisher.send_update.assert_not_called()


class TestPaymentCommands:
    """Test payment command bodies."""

    def test_create_command_body(self):
        """Test payments are sent as document control numbers."""
        command = CreatePaymentsCommand(
            envelope_id="env-1",
            ccd_reference="1539007368674001",
            jurisdiction="BULKSCAN",
            service="bulkscan",
            po_box="12625",
            is_exception_record=True,
            payments=("154565768",),
        )

        assert command.to_dict()["payments"] == [{"document_control_number": "154565768"}]
        assert command.to_dict()["is_exception_record"] is True
