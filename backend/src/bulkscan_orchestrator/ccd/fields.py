"""Names of CCD fields and events used by the orchestrator."""

# reference to the exception record a case was created from
BULK_SCAN_CASE_REFERENCE = "bulkScanCaseReference"

# collection of references to envelopes that affected the case
BULK_SCAN_ENVELOPES = "bulkScanEnvelopes"

SCANNED_DOCUMENTS = "scannedDocuments"

EXCEPTION_RECORD_CASE_TYPE_SUFFIX = "_ExceptionRecord"


class EventIds:
    CREATE_NEW_CASE = "createNewCase"
    ATTACH_SCANNED_DOCS = "attachScannedDocs"
    CREATE_EXCEPTION = "createException"


class CaseAction:
    """Action recorded against an envelope in bulkScanEnvelopes."""
    CREATE = "create"
    UPDATE = "update"


class YesNo:
    YES = "Yes"
    NO = "No"


class ExceptionRecordFields:
    JOURNEY_CLASSIFICATION = "journeyClassification"
    PO_BOX = "poBox"
    PO_BOX_JURISDICTION = "poBoxJurisdiction"
    FORM_TYPE = "formType"
    DELIVERY_DATE = "deliveryDate"
    OPENING_DATE = "openingDate"
    SCANNED_DOCUMENTS = SCANNED_DOCUMENTS
    SCAN_OCR_DATA = "scanOCRData"
    ENVELOPE_ID = "envelopeId"
    IS_AUTOMATED_PROCESS = "isAutomatedProcess"
    CONTAINS_PAYMENTS = "containsPayments"
    AWAITING_PAYMENT_DCN_PROCESSING = "awaitingPaymentDCNProcessing"
    ENVELOPE_CASE_REFERENCE = "envelopeCaseReference"
    ENVELOPE_LEGACY_CASE_REFERENCE = "envelopeLegacyCaseReference"
    CASE_REFERENCE = "caseReference"
    DISPLAY_WARNINGS = "displayWarnings"
    OCR_DATA_VALIDATION_WARNINGS = "ocrDataValidationWarnings"


def exception_record_case_type(service: str) -> str:
    """Case type id of exception records of a service, e.g. BULKSCAN_ExceptionRecord."""
    return f"{service.upper()}{EXCEPTION_RECORD_CASE_TYPE_SUFFIX}"


def is_yes(value) -> bool:
    return isinstance(value, str) and value.strip().lower() == YesNo.YES.lower()
