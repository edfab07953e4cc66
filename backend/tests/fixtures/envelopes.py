"""Envelope and exception record builders for tests."""

from datetime import datetime
from typing import Any

from bulkscan_orchestrator.domain.envelopes.models import Classification, Document, Envelope, OcrDataField


DELIVERY_DATE = datetime(2026, 3, 2, 10, 15, 0)
OPENING_DATE = datetime(2026, 3, 2, 11, 30, 0)


def document(uuid: str = "uuid1", control_number: str = "1000001", **overrides: Any) -> Document:
    values = dict(
        uuid=uuid,
        control_number=control_number,
        file_name=f"{control_number}.pdf",
        type="other",
        subtype=None,
        scanned_at=datetime(2026, 3, 1, 9, 0, 0),
    )
    values.update(overrides)
    return Document(**values)


def envelope(classification: Classification = Classification.NEW_APPLICATION, **overrides: Any) -> Envelope:
    values = dict(
        id="env-1",
        container="bulkscan",
        classification=classification,
        jurisdiction="BULKSCAN",
        documents=(document(),),
        case_ref=None,
        zip_file_name="1_24-06-2026-10-10-10.zip",
        delivery_date=DELIVERY_DATE,
        legacy_case_ref=None,
        po_box="12625",
        form_type="PERSONAL",
        opening_date=OPENING_DATE,
        ocr_data=(OcrDataField("first_name", "John"), OcrDataField("last_name", "Smith")),
        payments=(),
    )
    values.update(overrides)
    return Envelope(**values)


def scanned_document_element(uuid: str, control_number: str) -> dict[str, Any]:
    document_url = f"http://localhost:3453/documents/{uuid}"
    return {
        "value": {
            "type": "other",
            "subtype": None,
            "url": {
                "document_url": document_url,
                "document_binary_url": f"{document_url}/binary",
                "document_filename": f"{control_number}.pdf",
            },
            "controlNumber": control_number,
            "fileName": f"{control_number}.pdf",
            "scannedDate": "2026-02-01T09:00:00.000",
            "deliveryDate": "2026-02-01T10:00:00.000",
        }
    }


def exception_record_data(**overrides: Any) -> dict[str, Any]:
    """Case data of a valid NEW_APPLICATION exception record."""
    data = {
        "journeyClassification": "NEW_APPLICATION",
        "poBox": "12625",
        "poBoxJurisdiction": "BULKSCAN",
        "formType": "PERSONAL",
        "deliveryDate": "2026-03-02T10:15:00.000Z",
        "openingDate": "2026-03-02T11:30:00.000Z",
        "scannedDocuments": [scanned_document_element("uuid1", "1000001")],
        "scanOCRData": [{"value": {"key": "first_name", "value": "John"}}],
        "envelopeId": "env-1",
        "isAutomatedProcess": "No",
        "containsPayments": "No",
        "awaitingPaymentDCNProcessing": "No",
        "displayWarnings": "Yes",
        "ocrDataValidationWarnings": [{"value": "warning 1"}],
    }
    data.update(overrides)
    return data
