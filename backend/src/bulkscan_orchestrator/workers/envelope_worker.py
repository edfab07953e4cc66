"""Envelope Worker - Background job turning queued envelopes into CCD actions.

Each message carries one envelope. The worker parses it, routes it through
EnvelopeHandler and reports the outcome in the task result and metrics.

Failure handling:
- invalid message, unknown classification, several exception records for the
  envelope: logged and dropped, never retried
- any other failure: retried with exponential backoff, at most MAX_RETRIES times
"""

import logging
import time
from datetime import datetime
from typing import Any, Dict, Optional

from celery import shared_task
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError

from ..ccd.errors import MultipleCasesFoundError, UnknownClassificationError
from ..dependencies import get_envelope_handler
from ..domain.envelopes.models import Classification, Document, Envelope, OcrDataField
from ..observability.metrics import envelope_processing_duration_seconds, envelopes_processed_total
from ..observability.request_id import correlation_scope

logger = logging.getLogger(__name__)

MAX_RETRIES = 3

# Retrying cannot change the outcome; the envelope is dropped
UNRECOVERABLE_ERRORS = (UnknownClassificationError, MultipleCasesFoundError)


class DocumentMessage(BaseModel):
    model_config = ConfigDict(extra="ignore")

    uuid: str
    control_number: str
    file_name: Optional[str] = None
    type: Optional[str] = None
    subtype: Optional[str] = None
    scanned_at: Optional[datetime] = None
    delivery_date: Optional[datetime] = None


class OcrDataFieldMessage(BaseModel):
    name: str = Field(..., validation_alias=AliasChoices("name", "metadata_field_name"))
    value: Optional[str] = Field(default=None, validation_alias=AliasChoices("value", "metadata_field_value"))


class PaymentMessage(BaseModel):
    document_control_number: str


class EnvelopeMessage(BaseModel):
    """Envelope as published on the envelopes queue."""
    model_config = ConfigDict(extra="ignore")

    id: str
    container: str
    classification: Classification
    jurisdiction: str
    documents: list[DocumentMessage] = Field(default_factory=list)
    case_ref: Optional[str] = None
    zip_file_name: Optional[str] = None
    delivery_date: Optional[datetime] = None
    previous_service_case_reference: Optional[str] = None
    po_box: Optional[str] = None
    form_type: Optional[str] = None
    opening_date: Optional[datetime] = None
    ocr_data: list[OcrDataFieldMessage] = Field(default_factory=list)
    payments: list[PaymentMessage] = Field(default_factory=list)

    def to_envelope(self) -> Envelope:
        return Envelope(
            id=self.id,
            container=self.container,
            classification=self.classification,
            jurisdiction=self.jurisdiction,
            documents=tuple(Document(**doc.model_dump()) for doc in self.documents),
            case_ref=self.case_ref,
            zip_file_name=self.zip_file_name,
            delivery_date=self.delivery_date,
            legacy_case_ref=self.previous_service_case_reference,
            po_box=self.po_box,
            form_type=self.form_type,
            opening_date=self.opening_date,
            ocr_data=tuple(OcrDataField(name=field.name, value=field.value) for field in self.ocr_data),
            payments=tuple(payment.document_control_number for payment in self.payments),
        )


@shared_task(name="envelopes.process_envelope", bind=True, acks_late=True, max_retries=MAX_RETRIES)
def process_envelope(self, message: Dict[str, Any]) -> Dict[str, Any]:
    """Process one envelope message.

    Args:
        message: Envelope JSON as published by the bulk scan processor

    Returns:
        Dict with processing result:
            - status: 'success' or 'rejected'
            - envelope_id: Envelope ID (if parsed)
            - case_id: CCD id of the case or exception record (if successful)
            - ccd_action: CASE_CREATION | AUTO_ATTACHED_TO_CASE | EXCEPTION_RECORD
            - error: Error message (if rejected)

    Raises:
        Retry: Processing failed and is scheduled again
        Exception: The last failure, once MAX_RETRIES is exhausted

    Example:
        process_envelope.delay(envelope_json)
    """
    try:
        envelope = EnvelopeMessage.model_validate(message).to_envelope()
    except ValidationError as e:
        logger.error(f"Rejecting invalid envelope message: {e}")
        envelopes_processed_total.labels(
            container=_raw_field(message, "container"),
            classification=_raw_field(message, "classification"),
            ccd_action="INVALID_MESSAGE",
        ).inc()
        return {"status": "rejected", "envelope_id": _raw_field(message, "id"), "error": str(e)}

    with correlation_scope(envelope.id):
        return _process(self, envelope)


def _process(task, envelope: Envelope) -> Dict[str, Any]:
    log_extra = {
        "envelope_id": envelope.id,
        "container": envelope.container,
        "classification": envelope.classification.value,
    }
    start_time = time.time()

    try:
        logger.info(f"Processing envelope {envelope.id}. File name: {envelope.zip_file_name}", extra=log_extra)
        result = get_envelope_handler().handle_envelope(envelope)
    except UNRECOVERABLE_ERRORS as e:
        logger.error(f"Rejecting envelope {envelope.id}: {e}", extra=log_extra)
        _count(envelope, "UNRECOVERABLE")
        return {"status": "rejected", "envelope_id": envelope.id, "error": str(e)}
    except Exception as e:
        retries = task.request.retries
        logger.error(
            f"Failed to process envelope {envelope.id} (attempt {retries + 1} of {MAX_RETRIES + 1}): {e}",
            extra=log_extra,
            exc_info=True
        )
        _count(envelope, "FAILED")

        # Retry with exponential backoff
        raise task.retry(exc=e, countdown=2 ** retries)
    finally:
        envelope_processing_duration_seconds.labels(
            classification=envelope.classification.value
        ).observe(time.time() - start_time)

    _count(envelope, result.ccd_action.value)
    logger.info(
        f"Processed envelope {envelope.id}. CCD action: {result.ccd_action.value}, CCD ID: {result.case_id}",
        extra={**log_extra, "case_id": result.case_id}
    )

    return {
        "status": "success",
        "envelope_id": envelope.id,
        "case_id": result.case_id,
        "ccd_action": result.ccd_action.value,
    }


def _count(envelope: Envelope, ccd_action: str) -> None:
    envelopes_processed_total.labels(
        container=envelope.container,
        classification=envelope.classification.value,
        ccd_action=ccd_action,
    ).inc()


def _raw_field(message: Any, name: str) -> str:
    if isinstance(message, dict) and message.get(name) is not None:
        return str(message[name])
    return "unknown"
