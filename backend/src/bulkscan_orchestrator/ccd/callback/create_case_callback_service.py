"""
"Create new case" callback - caseworker turns an exception record into a case

Single pass over the request:
1. Guard clauses: event, case type, service configuration, caller identity
2. Exception record validation
3. Pending payments gating
4. Case lookup by bulk scan case reference, or case creation
5. Exception record finalization

Fatal problems raise CallbackException; problems the caseworker can act on
are returned as ProcessResult warnings/errors.
"""

import logging
from typing import Optional

from ...domain.callbacks.models import (
    CallbackException,
    CcdCallbackRequest,
    ExceptionRecord,
    ProcessResult,
)
from ...domain.cases.models import CaseDetails
from ...domain.payments.ports import PaymentsPublishingError
from ...service_config import ServiceConfigItem, ServiceConfigProvider, ServiceNotConfiguredError
from ..case_finder import CaseFinder
from ..errors import MultipleCasesFoundError
from ..fields import EXCEPTION_RECORD_CASE_TYPE_SUFFIX, EventIds
from ..payments_processor import PaymentsProcessor
from .exception_record_finalizer import ExceptionRecordFinalizer
from .exception_record_validator import ExceptionRecordValidator
from .new_case_creator import CcdNewCaseCreator


logger = logging.getLogger(__name__)

AWAITING_PAYMENTS_MESSAGE = "Payments for this Exception Record have not been processed yet"
PAYMENTS_NOT_PROCESSED_MESSAGE = "Payment references cannot be processed. Please try again later"


class CreateCaseCallbackService:
    """
    Orchestrates the createNewCase callback.

    Usage:
        service = CreateCaseCallbackService(...)
        result = service.process(request, idam_token, user_id)
        return result.to_dict()
    """

    def __init__(
        self,
        validator: ExceptionRecordValidator,
        service_config_provider: ServiceConfigProvider,
        case_finder: CaseFinder,
        new_case_creator: CcdNewCaseCreator,
        exception_record_finalizer: ExceptionRecordFinalizer,
        payments_processor: PaymentsProcessor
    ):
        self.validator = validator
        self.service_config_provider = service_config_provider
        self.case_finder = case_finder
        self.new_case_creator = new_case_creator
        self.exception_record_finalizer = exception_record_finalizer
        self.payments_processor = payments_processor

    def process(
        self,
        request: CcdCallbackRequest,
        idam_token: Optional[str],
        user_id: Optional[str]
    ) -> ProcessResult:
        """
        Create a case from the exception record in the request.

        Raises:
            CallbackException: Request cannot be processed at all
            MultipleCasesFoundError: Several cases were already created from the record
        """
        self._assert_allowed_to_process_event(request.event_id)

        case_details = request.case_details
        service = get_service_name_from_case_type_id(case_details)
        config_item = self._get_config_item(service)

        if not idam_token:
            raise CallbackException("Callback has no Idam token received in the header")
        if not user_id:
            raise CallbackException("Callback has no user id received in the header")

        validation = self.validator.get_validation(case_details, request.event_id)
        if not validation.is_valid:
            return ProcessResult.with_errors(validation.errors)

        exception_record = validation.exception_record

        if exception_record.awaiting_payment_dcn_processing:
            if not config_item.allow_creating_case_before_payments_are_processed:
                return ProcessResult.with_errors([AWAITING_PAYMENTS_MESSAGE])
            if not request.ignore_warnings:
                return ProcessResult.with_warnings_and_errors([AWAITING_PAYMENTS_MESSAGE], [])

        return self._create_new_case_from_exception_record(
            exception_record,
            config_item,
            case_details,
            request.ignore_warnings,
            idam_token,
            user_id
        )

    @staticmethod
    def _assert_allowed_to_process_event(event_id: str) -> None:
        if event_id != EventIds.CREATE_NEW_CASE:
            raise CallbackException(f"The {event_id} event is not supported. Please contact service team")

    def _get_config_item(self, service: str) -> ServiceConfigItem:
        try:
            config_item = self.service_config_provider.get_config(service)
        except ServiceNotConfiguredError as e:
            raise CallbackException(str(e)) from None

        if not config_item.transformation_url:
            raise CallbackException("Transformation URL is not configured")
        return config_item

    def _create_new_case_from_exception_record(
        self,
        exception_record: ExceptionRecord,
        config_item: ServiceConfigItem,
        case_details: CaseDetails,
        ignore_warnings: bool,
        idam_token: str,
        user_id: str
    ) -> ProcessResult:
        case_ids = self.case_finder.find_cases(exception_record, config_item)

        if len(case_ids) == 1:
            logger.info(
                f"Case {case_ids[0]} already exists for exception record {exception_record.id}",
                extra={"exception_record_id": exception_record.id, "case_id": case_ids[0]}
            )
            return ProcessResult(
                exception_record_data=self._finalize(case_details, case_ids[0])
            )

        if len(case_ids) > 1:
            raise MultipleCasesFoundError(
                f"Multiple cases ({', '.join(str(case_id) for case_id in case_ids)}) found for the given "
                f"bulk scan case reference: {exception_record.id}"
            )

        result = self.new_case_creator.create_new_case(
            exception_record,
            config_item,
            ignore_warnings,
            idam_token,
            user_id
        )

        if result.case_id is None:
            return ProcessResult.with_warnings_and_errors(result.warnings, result.errors)

        try:
            self.payments_processor.update_payments(
                exception_record,
                case_details.jurisdiction,
                str(case_details.id),
                result.case_id
            )
        except PaymentsPublishingError:
            logger.error(
                f"Failed to send update to payment processor for {exception_record.id} exception record",
                extra={"exception_record_id": exception_record.id, "case_id": result.case_id},
                exc_info=True
            )
            return ProcessResult.with_errors([PAYMENTS_NOT_PROCESSED_MESSAGE], case_id=result.case_id)

        return ProcessResult(
            exception_record_data=self._finalize(case_details, result.case_id),
            case_id=result.case_id
        )

    def _finalize(self, case_details: CaseDetails, case_id: int) -> dict:
        return self.exception_record_finalizer.finalize_exception_record(
            case_details.data,
            str(case_id)
        )


def get_service_name_from_case_type_id(case_details: Optional[CaseDetails]) -> str:
    """Service of an exception record, e.g. "bulkscan" for BULKSCAN_ExceptionRecord.

    Raises:
        CallbackException: Case type id is missing or is not an exception record case type
    """
    case_type_id = case_details.case_type_id if case_details is not None else None

    if case_type_id is None:
        raise CallbackException("No case type ID supplied")

    if not case_type_id.endswith(EXCEPTION_RECORD_CASE_TYPE_SUFFIX) \
            or len(case_type_id) == len(EXCEPTION_RECORD_CASE_TYPE_SUFFIX):
        raise CallbackException(f"Case type ID ({case_type_id}) has invalid format")

    return case_type_id[:-len(EXCEPTION_RECORD_CASE_TYPE_SUFFIX)].lower()
