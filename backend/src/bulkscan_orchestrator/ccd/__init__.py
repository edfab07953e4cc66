"""CCD application services: envelope routing, case creation and evidence attachment."""

from .auto_case_creator import AutoCaseCreator
from .case_finder import CaseFinder
from .ccd_api import CcdApi
from .envelope_handler import EnvelopeHandler
from .errors import (
    CaseNotFoundError,
    CcdCallError,
    InvalidCaseIdError,
    MultipleCasesFoundError,
    UnableToAttachDocumentsError,
    UnknownClassificationError,
)
from .evidence_attacher import EvidenceAttacher
from .exception_record_creator import ExceptionRecordCreator
from .payments_processor import PaymentsProcessor

__all__ = [
    "AutoCaseCreator",
    "CaseFinder",
    "CcdApi",
    "EnvelopeHandler",
    "CaseNotFoundError",
    "CcdCallError",
    "InvalidCaseIdError",
    "MultipleCasesFoundError",
    "UnableToAttachDocumentsError",
    "UnknownClassificationError",
    "EvidenceAttacher",
    "ExceptionRecordCreator",
    "PaymentsProcessor",
]
