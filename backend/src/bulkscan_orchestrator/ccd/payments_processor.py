"""Notifies the payments service about payments found in envelopes."""

import logging

from ..domain.callbacks.models import ExceptionRecord
from ..domain.envelopes.models import Envelope
from ..domain.payments.models import CreatePaymentsCommand, UpdatePaymentsCommand
from ..domain.payments.ports import PaymentsPublisherPort


logger = logging.getLogger(__name__)


class PaymentsProcessor:

    def __init__(self, payments_publisher: PaymentsPublisherPort):
        self.payments_publisher = payments_publisher

    def create_payments(self, envelope: Envelope, case_id: int, is_exception_record: bool) -> None:
        """
        Register the envelope's payments against a case or exception record.

        Does nothing for envelopes without payments.

        Raises:
            PaymentsPublishingError: If the command was not delivered
        """
        if not envelope.payments:
            logger.info(f"Envelope has no payments, not sending create command. Envelope ID: {envelope.id}")
            return

        command = CreatePaymentsCommand(
            envelope_id=envelope.id,
            ccd_reference=str(case_id),
            jurisdiction=envelope.jurisdiction,
            service=envelope.container,
            po_box=envelope.po_box,
            is_exception_record=is_exception_record,
            payments=tuple(envelope.payments),
        )

        logger.info(
            f"Sending create payments command. Envelope ID: {envelope.id}, CCD reference: {case_id}",
            extra={"envelope_id": envelope.id, "case_id": case_id}
        )
        self.payments_publisher.send_create(command)

    def update_payments(
        self,
        exception_record: ExceptionRecord,
        jurisdiction: str,
        exception_record_id: str,
        new_case_id: int
    ) -> None:
        """
        Move payments from an exception record to the case created from it.

        Does nothing when the exception record contains no payments.

        Raises:
            PaymentsPublishingError: If the command was not delivered
        """
        if not exception_record.contains_payments:
            return

        command = UpdatePaymentsCommand(
            exception_record_ref=exception_record_id,
            new_case_ref=str(new_case_id),
            envelope_id=exception_record.envelope_id,
            jurisdiction=jurisdiction,
        )

        logger.info(
            f"Sending update payments command. Exception record: {exception_record_id}, new case: {new_case_id}",
            extra={"exception_record_id": exception_record_id, "case_id": new_case_id}
        )
        self.payments_publisher.send_update(command)
