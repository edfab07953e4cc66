"""Synchronous callbacks driven by the CCD user interface."""

from .create_case_callback_service import (
    AWAITING_PAYMENTS_MESSAGE,
    PAYMENTS_NOT_PROCESSED_MESSAGE,
    CreateCaseCallbackService,
)
from .exception_record_finalizer import ExceptionRecordFinalizer
from .exception_record_validator import ExceptionRecordValidation, ExceptionRecordValidator
from .new_case_creator import CcdNewCaseCreator

__all__ = [
    "AWAITING_PAYMENTS_MESSAGE",
    "PAYMENTS_NOT_PROCESSED_MESSAGE",
    "CreateCaseCallbackService",
    "ExceptionRecordFinalizer",
    "ExceptionRecordValidation",
    "ExceptionRecordValidator",
    "CcdNewCaseCreator",
]
