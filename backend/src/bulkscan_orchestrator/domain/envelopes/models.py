"""Envelope domain models.

An envelope is one scanned paper submission delivered through the envelopes
queue. It is immutable once received and lives only for the duration of its
processing.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional


class Classification(str, Enum):
    """Journey classification of an envelope (closed set)."""
    NEW_APPLICATION = "NEW_APPLICATION"
    EXCEPTION = "EXCEPTION"
    SUPPLEMENTARY_EVIDENCE = "SUPPLEMENTARY_EVIDENCE"
    SUPPLEMENTARY_EVIDENCE_WITH_OCR = "SUPPLEMENTARY_EVIDENCE_WITH_OCR"


class EnvelopeCcdAction(str, Enum):
    """Action taken in CCD for a processed envelope."""
    CASE_CREATION = "CASE_CREATION"
    AUTO_ATTACHED_TO_CASE = "AUTO_ATTACHED_TO_CASE"
    EXCEPTION_RECORD = "EXCEPTION_RECORD"


@dataclass(frozen=True)
class Document:
    """Scanned document carried by an envelope.

    Attributes:
        uuid: Identity of the document in document management
        control_number: Document control number (DCN) printed on the paper
        file_name: Name of the PDF in the zip file
        type: Document type (form, cherished, other, ...)
        subtype: Optional document subtype
        scanned_at: When the document was scanned
        delivery_date: When the envelope was delivered
    """
    uuid: str
    control_number: str
    file_name: Optional[str] = None
    type: Optional[str] = None
    subtype: Optional[str] = None
    scanned_at: Optional[datetime] = None
    delivery_date: Optional[datetime] = None


@dataclass(frozen=True)
class OcrDataField:
    """Single key/value pair read from a scanned form."""
    name: str
    value: Optional[str] = None


@dataclass(frozen=True)
class Envelope:
    """Inbound scanned submission.

    Attributes:
        id: Envelope identity assigned by the bulk scan processor
        container: Service (tenant) the envelope belongs to
        classification: Journey classification, decides routing
        jurisdiction: CCD jurisdiction of the service
        documents: Ordered documents in the envelope
        case_ref: CCD case reference supplied with the envelope
        zip_file_name: Name of the zip file the envelope came from
        delivery_date: When the envelope was delivered
        legacy_case_ref: Case reference in the service's previous system
        po_box: PO box the envelope was sent to
        form_type: Form type of the scanned form, if any
        opening_date: When the envelope was opened
        ocr_data: Data read from the scanned form
        payments: Document control numbers of payment documents
    """
    id: str
    container: str
    classification: Classification
    jurisdiction: str
    documents: tuple[Document, ...] = ()
    case_ref: Optional[str] = None
    zip_file_name: Optional[str] = None
    delivery_date: Optional[datetime] = None
    legacy_case_ref: Optional[str] = None
    po_box: Optional[str] = None
    form_type: Optional[str] = None
    opening_date: Optional[datetime] = None
    ocr_data: tuple[OcrDataField, ...] = ()
    payments: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class EnvelopeProcessingResult:
    """Terminal output of routing one envelope."""
    case_id: int
    ccd_action: EnvelopeCcdAction
