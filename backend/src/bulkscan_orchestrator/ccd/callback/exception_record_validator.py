"""Validates exception record case data received by callbacks."""

from dataclasses import dataclass, field
from typing import Any, Optional

from ...domain.callbacks.models import ExceptionRecord
from ...domain.cases.models import CaseDetails
from ...domain.envelopes.models import Classification
from ..dates import parse_ccd_datetime
from ..fields import EventIds, ExceptionRecordFields as Fields, is_yes


@dataclass
class ExceptionRecordValidation:
    """Either a valid exception record or the list of problems found."""
    exception_record: Optional[ExceptionRecord] = None
    errors: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors


class ExceptionRecordValidator:
    """
    Checks the fields of an exception record and the journey classification.

    All problems are collected, not just the first one.
    """

    def get_validation(self, case_details: CaseDetails, event_id: str = EventIds.CREATE_NEW_CASE) -> ExceptionRecordValidation:
        data = case_details.data or {}
        errors: list[str] = []

        if case_details.id is None:
            errors.append("Missing exception record id")

        po_box = data.get(Fields.PO_BOX)
        if not po_box:
            errors.append(f"Missing {Fields.PO_BOX}")

        classification = self._classification(data, errors)
        delivery_date = self._required_date(data, Fields.DELIVERY_DATE, errors)
        opening_date = self._required_date(data, Fields.OPENING_DATE, errors)

        ocr_data_fields = _collection(data.get(Fields.SCAN_OCR_DATA))

        if classification is not None:
            classification_error = self._classification_error(classification, ocr_data_fields, event_id)
            if classification_error:
                errors.append(classification_error)

        if errors:
            return ExceptionRecordValidation(errors=errors)

        return ExceptionRecordValidation(
            exception_record=ExceptionRecord(
                id=str(case_details.id),
                case_type_id=case_details.case_type_id,
                po_box=po_box,
                po_box_jurisdiction=data.get(Fields.PO_BOX_JURISDICTION),
                journey_classification=classification,
                form_type=data.get(Fields.FORM_TYPE),
                delivery_date=delivery_date,
                opening_date=opening_date,
                envelope_id=data.get(Fields.ENVELOPE_ID),
                is_automated_process=is_yes(data.get(Fields.IS_AUTOMATED_PROCESS)),
                scanned_documents=_collection(data.get(Fields.SCANNED_DOCUMENTS)),
                ocr_data_fields=ocr_data_fields,
                contains_payments=is_yes(data.get(Fields.CONTAINS_PAYMENTS)),
                awaiting_payment_dcn_processing=is_yes(data.get(Fields.AWAITING_PAYMENT_DCN_PROCESSING)),
            )
        )

    @staticmethod
    def _classification(data: dict[str, Any], errors: list[str]) -> Optional[Classification]:
        value = data.get(Fields.JOURNEY_CLASSIFICATION)
        if not value:
            errors.append(f"Missing {Fields.JOURNEY_CLASSIFICATION}")
            return None
        try:
            return Classification(value)
        except ValueError:
            errors.append(f"Invalid {Fields.JOURNEY_CLASSIFICATION}. Error: unknown classification {value}")
            return None

    @staticmethod
    def _required_date(data: dict[str, Any], field_name: str, errors: list[str]):
        value = data.get(field_name)
        if not value:
            errors.append(f"Missing {field_name}")
            return None
        try:
            return parse_ccd_datetime(value)
        except ValueError:
            errors.append(f"Invalid {field_name}: {value}")
            return None

    @staticmethod
    def _classification_error(
        classification: Classification,
        ocr_data_fields: list[dict[str, Any]],
        event_id: str
    ) -> Optional[str]:
        if classification == Classification.SUPPLEMENTARY_EVIDENCE:
            return f"Event {event_id} not allowed for the current journey classification {classification.value}"

        if classification in (Classification.NEW_APPLICATION, Classification.SUPPLEMENTARY_EVIDENCE_WITH_OCR) \
                and not ocr_data_fields:
            return (
                f"Event {event_id} not allowed for the current journey classification "
                f"{classification.value} without OCR"
            )

        return None


def _collection(value: Any) -> list[dict[str, Any]]:
    if not isinstance(value, list):
        return []
    return [element for element in value if isinstance(element, dict)]
