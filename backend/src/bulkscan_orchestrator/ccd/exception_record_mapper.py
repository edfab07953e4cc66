"""Maps an envelope to exception record case data."""

from typing import Any

from ..domain.envelopes.models import Envelope
from .dates import format_ccd_datetime
from .documents import map_documents
from .fields import ExceptionRecordFields as Fields, YesNo


class ExceptionRecordMapper:

    def __init__(self, document_management_url: str, context_path: str):
        self.document_management_url = document_management_url
        self.context_path = context_path

    def map_envelope(self, envelope: Envelope) -> dict[str, Any]:
        contains_payments = YesNo.YES if envelope.payments else YesNo.NO
        return {
            Fields.JOURNEY_CLASSIFICATION: envelope.classification.value,
            Fields.PO_BOX: envelope.po_box,
            Fields.PO_BOX_JURISDICTION: envelope.jurisdiction,
            Fields.DELIVERY_DATE: format_ccd_datetime(envelope.delivery_date),
            Fields.OPENING_DATE: format_ccd_datetime(envelope.opening_date),
            Fields.SCANNED_DOCUMENTS: map_documents(
                envelope.documents,
                self.document_management_url,
                self.context_path,
                envelope.delivery_date
            ),
            Fields.SCAN_OCR_DATA: [
                {"value": {"key": field.name, "value": field.value}}
                for field in envelope.ocr_data
            ],
            Fields.FORM_TYPE: envelope.form_type,
            Fields.ENVELOPE_ID: envelope.id,
            Fields.CONTAINS_PAYMENTS: contains_payments,
            # payment DCNs are processed asynchronously after the record is created
            Fields.AWAITING_PAYMENT_DCN_PROCESSING: contains_payments,
            Fields.ENVELOPE_CASE_REFERENCE: envelope.case_ref,
            Fields.ENVELOPE_LEGACY_CASE_REFERENCE: envelope.legacy_case_ref,
            Fields.DISPLAY_WARNINGS: YesNo.NO,
            Fields.OCR_DATA_VALIDATION_WARNINGS: [],
        }
