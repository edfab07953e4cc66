"""
Envelope routing - one CCD action per envelope

Routing by classification:
- SUPPLEMENTARY_EVIDENCE: attach to the referenced case, else exception record
- SUPPLEMENTARY_EVIDENCE_WITH_OCR, EXCEPTION: exception record
- NEW_APPLICATION: automatic case creation, else exception record

The payments service is notified after every successful action.
"""

import logging

from ..domain.envelopes.models import (
    Classification,
    Envelope,
    EnvelopeCcdAction,
    EnvelopeProcessingResult,
)
from .auto_case_creator import AutoCaseCreator
from .case_finder import CaseFinder
from .errors import UnknownClassificationError
from .evidence_attacher import EvidenceAttacher
from .exception_record_creator import ExceptionRecordCreator
from .payments_processor import PaymentsProcessor


logger = logging.getLogger(__name__)


class EnvelopeHandler:
    """
    Decides and performs the CCD action for an envelope.

    Usage:
        handler = EnvelopeHandler(...)
        result = handler.handle_envelope(envelope)
        # result.ccd_action, result.case_id
    """

    def __init__(
        self,
        evidence_attacher: EvidenceAttacher,
        exception_record_creator: ExceptionRecordCreator,
        case_finder: CaseFinder,
        payments_processor: PaymentsProcessor,
        case_creator: AutoCaseCreator
    ):
        self.evidence_attacher = evidence_attacher
        self.exception_record_creator = exception_record_creator
        self.case_finder = case_finder
        self.payments_processor = payments_processor
        self.case_creator = case_creator

    def handle_envelope(self, envelope: Envelope) -> EnvelopeProcessingResult:
        """
        Route the envelope.

        Raises:
            UnknownClassificationError: Classification outside the supported set
        """
        classification = envelope.classification

        if classification == Classification.SUPPLEMENTARY_EVIDENCE:
            return self._process_supplementary_evidence(envelope)

        if classification in (Classification.SUPPLEMENTARY_EVIDENCE_WITH_OCR, Classification.EXCEPTION):
            return self._exception_record_result(envelope)

        if classification == Classification.NEW_APPLICATION:
            return self._process_new_application(envelope)

        raise UnknownClassificationError(
            f"Cannot determine CCD action for envelope - unknown classification: {classification}"
        )

    def _process_supplementary_evidence(self, envelope: Envelope) -> EnvelopeProcessingResult:
        existing_case = self.case_finder.find_case(envelope)

        if existing_case is None:
            return self._exception_record_result(envelope)

        if self.evidence_attacher.attach(envelope, existing_case):
            self.payments_processor.create_payments(envelope, existing_case.id, False)
            return EnvelopeProcessingResult(existing_case.id, EnvelopeCcdAction.AUTO_ATTACHED_TO_CASE)

        logger.info(
            f"Creating exception record as supplementary evidence failed for envelope {envelope.id} "
            f"case {existing_case.id}",
            extra={"envelope_id": envelope.id, "case_id": existing_case.id}
        )
        return self._exception_record_result(envelope)

    def _process_new_application(self, envelope: Envelope) -> EnvelopeProcessingResult:
        result = self.case_creator.create_case(envelope)

        if result.has_case:
            self.payments_processor.create_payments(envelope, result.case_id, False)
            return EnvelopeProcessingResult(result.case_id, EnvelopeCcdAction.CASE_CREATION)

        return self._exception_record_result(envelope)

    def _exception_record_result(self, envelope: Envelope) -> EnvelopeProcessingResult:
        return EnvelopeProcessingResult(self._create_exception_record(envelope), EnvelopeCcdAction.EXCEPTION_RECORD)

    def _create_exception_record(self, envelope: Envelope) -> int:
        exception_record_id = self.exception_record_creator.try_create_from(envelope)
        self.payments_processor.create_payments(envelope, exception_record_id, True)
        return exception_record_id
