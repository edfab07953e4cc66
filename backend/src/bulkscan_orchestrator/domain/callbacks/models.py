"""Models for the CCD "create new case" callback.

The callback is a single validation pass. Warnings and errors are collected
as plain strings; any error means nothing was persisted by the call.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from ..cases.models import CaseDetails
from ..envelopes.models import Classification


class CallbackException(Exception):
    """Fatal, non-retryable callback failure reported to the caller as an error."""
    pass


@dataclass
class CcdCallbackRequest:
    event_id: str
    case_details: Optional[CaseDetails]
    ignore_warnings: bool = False


@dataclass
class ExceptionRecord:
    """Validated exception record case data."""
    id: str
    case_type_id: str
    po_box: str
    po_box_jurisdiction: Optional[str]
    journey_classification: Classification
    form_type: Optional[str]
    delivery_date: datetime
    opening_date: datetime
    envelope_id: Optional[str] = None
    is_automated_process: bool = False
    scanned_documents: list[dict[str, Any]] = field(default_factory=list)
    ocr_data_fields: list[dict[str, Any]] = field(default_factory=list)
    contains_payments: bool = False
    awaiting_payment_dcn_processing: bool = False


@dataclass
class CreateCaseResult:
    """Outcome of creating a case from an exception record.

    Either case_id is set, or warnings/errors explain why no case was created.
    """
    case_id: Optional[int] = None
    warnings: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)


@dataclass
class ProcessResult:
    """Result of a callback pass.

    Attributes:
        exception_record_data: Finalized exception record data to persist
        warnings: Non-fatal messages, shown unless the caller ignores warnings
        errors: Fatal messages; when present nothing is persisted
        case_id: Id of a case created in this pass even though an error is
            reported (payments could not be processed after case creation)
    """
    exception_record_data: dict[str, Any] = field(default_factory=dict)
    warnings: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    case_id: Optional[int] = None

    @classmethod
    def with_errors(cls, errors: list[str], case_id: Optional[int] = None) -> "ProcessResult":
        return cls(errors=list(errors), case_id=case_id)

    @classmethod
    def with_warnings_and_errors(cls, warnings: list[str], errors: list[str]) -> "ProcessResult":
        return cls(warnings=list(warnings), errors=list(errors))

    def to_dict(self) -> dict[str, Any]:
        """Convert to the callback response body."""
        return {
            "data": self.exception_record_data,
            "warnings": self.warnings,
            "errors": self.errors,
        }
