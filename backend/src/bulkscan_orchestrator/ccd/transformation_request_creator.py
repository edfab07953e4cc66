"""Builds transformation service requests from envelopes and exception records."""

from typing import Any, Optional

from ..domain.callbacks.models import ExceptionRecord
from ..domain.envelopes.models import Envelope
from ..domain.transformation.models import (
    DocumentUrl,
    OcrField,
    TransformationDocument,
    TransformationRequest,
)
from .dates import parse_ccd_datetime
from .documents import map_document


class TransformationRequestCreator:

    def __init__(self, document_management_url: str, context_path: str):
        self.document_management_url = document_management_url
        self.context_path = context_path

    def from_envelope(self, envelope: Envelope) -> TransformationRequest:
        """Request for automatic case creation (no exception record exists)."""
        return TransformationRequest(
            exception_record_id=None,
            exception_record_case_type_id=None,
            envelope_id=envelope.id,
            is_automated_process=True,
            po_box=envelope.po_box,
            po_box_jurisdiction=envelope.jurisdiction,
            journey_classification=envelope.classification.value,
            form_type=envelope.form_type,
            delivery_date=envelope.delivery_date,
            opening_date=envelope.opening_date,
            scanned_documents=[
                self._to_transformation_document(
                    map_document(doc, self.document_management_url, self.context_path, envelope.delivery_date)
                )
                for doc in envelope.documents
            ],
            ocr_data_fields=[OcrField(name=field.name, value=field.value) for field in envelope.ocr_data],
        )

    def from_exception_record(self, exception_record: ExceptionRecord) -> TransformationRequest:
        """Request for case creation driven by a caseworker from an exception record."""
        return TransformationRequest(
            exception_record_id=exception_record.id,
            exception_record_case_type_id=exception_record.case_type_id,
            envelope_id=exception_record.envelope_id,
            is_automated_process=exception_record.is_automated_process,
            po_box=exception_record.po_box,
            po_box_jurisdiction=exception_record.po_box_jurisdiction,
            journey_classification=exception_record.journey_classification.value,
            form_type=exception_record.form_type,
            delivery_date=exception_record.delivery_date,
            opening_date=exception_record.opening_date,
            scanned_documents=[
                self._to_transformation_document(element)
                for element in exception_record.scanned_documents
            ],
            ocr_data_fields=[
                OcrField(name=value.get("key"), value=value.get("value"))
                for value in (_element_value(element) for element in exception_record.ocr_data_fields)
                if value.get("key")
            ],
        )

    @staticmethod
    def _to_transformation_document(element: dict[str, Any]) -> TransformationDocument:
        value = _element_value(element)
        url = value.get("url")
        return TransformationDocument(
            type=value.get("type"),
            subtype=value.get("subtype"),
            url=_to_document_url(url),
            control_number=value.get("controlNumber"),
            file_name=value.get("fileName"),
            scanned_date=parse_ccd_datetime(value.get("scannedDate")),
            delivery_date=parse_ccd_datetime(value.get("deliveryDate")),
        )


def _element_value(element: Any) -> dict[str, Any]:
    value = element.get("value") if isinstance(element, dict) else None
    return value if isinstance(value, dict) else {}


def _to_document_url(url: Any) -> Optional[DocumentUrl]:
    if not isinstance(url, dict) or not url.get("document_url"):
        return None
    return DocumentUrl(
        document_url=url["document_url"],
        document_binary_url=url.get("document_binary_url") or f"{url['document_url']}/binary",
        document_filename=url.get("document_filename"),
    )
