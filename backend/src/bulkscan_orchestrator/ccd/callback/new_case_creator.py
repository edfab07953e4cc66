"""Creates a service case from an exception record on behalf of a caseworker."""

import logging
from typing import Any

from ...domain.auth.ports import ServiceTokenGeneratorPort
from ...domain.callbacks.models import CallbackException, CreateCaseResult, ExceptionRecord
from ...domain.cases.models import CaseDataContent, Event, StartEventResponse
from ...domain.cases.ports import CaseBackendError
from ...domain.transformation.ports import (
    InvalidCaseDataError,
    TransformationClientError,
    TransformationPort,
    TransformationResponseInvalidError,
)
from ...service_config import ServiceConfigItem
from ..ccd_api import CcdApi
from ..envelope_references import EnvelopeReferenceHelper
from ..fields import BULK_SCAN_CASE_REFERENCE, BULK_SCAN_ENVELOPES, CaseAction
from ..transformation_request_creator import TransformationRequestCreator


logger = logging.getLogger(__name__)


class CcdNewCaseCreator:

    def __init__(
        self,
        transformation_client: TransformationPort,
        request_creator: TransformationRequestCreator,
        s2s_token_generator: ServiceTokenGeneratorPort,
        ccd_api: CcdApi,
        envelope_reference_helper: EnvelopeReferenceHelper
    ):
        self.transformation_client = transformation_client
        self.request_creator = request_creator
        self.s2s_token_generator = s2s_token_generator
        self.ccd_api = ccd_api
        self.envelope_reference_helper = envelope_reference_helper

    def create_new_case(
        self,
        exception_record: ExceptionRecord,
        config_item: ServiceConfigItem,
        ignore_warnings: bool,
        idam_token: str,
        user_id: str
    ) -> CreateCaseResult:
        """
        Transform the exception record and create the case in CCD.

        Returns:
            CreateCaseResult with case_id on success, otherwise the warnings
            or errors reported by the transformation service

        Raises:
            CallbackException: Transformation or case creation failed in a way
                the caseworker cannot fix
        """
        logging_context = (
            f"Exception record ID: {exception_record.id}. Service: {config_item.service}. "
            f"Envelope ID: {exception_record.envelope_id}."
        )

        try:
            s2s_token = self.s2s_token_generator.generate()
            transformation_response = self.transformation_client.transform_case_data(
                config_item.transformation_url,
                self.request_creator.from_exception_record(exception_record),
                s2s_token
            )
        except InvalidCaseDataError as e:
            if e.status_code == 422:
                logger.info(f"Transformation service rejected exception record. {logging_context}")
                return CreateCaseResult(warnings=e.warnings, errors=e.errors)
            raise CallbackException(
                f"Failed to transform exception record. Service responded with status {e.status_code}"
            ) from e
        except TransformationResponseInvalidError as e:
            raise CallbackException(
                f"Invalid response received from transformation service. Violations: {', '.join(e.violations)}"
            ) from e
        except TransformationClientError as e:
            raise CallbackException(
                f"Failed to call {config_item.service} service Case Transformation API to create case"
            ) from e

        if not ignore_warnings and transformation_response.warnings:
            return CreateCaseResult(warnings=list(transformation_response.warnings))

        details = transformation_response.case_creation_details

        try:
            case_id = self.ccd_api.create_new_case_from_callback(
                idam_token,
                s2s_token,
                user_id,
                config_item.jurisdiction,
                details.case_type_id,
                details.event_id,
                lambda start_response: self._prepare_case_data(
                    details.case_data,
                    exception_record,
                    config_item,
                    start_response
                ),
                logging_context
            )
        except CaseBackendError as e:
            raise CallbackException(
                f"Failed to create new case for {config_item.jurisdiction} jurisdiction"
            ) from e

        logger.info(f"Created new case {case_id} from exception record. {logging_context}")
        return CreateCaseResult(case_id=case_id)

    def _prepare_case_data(
        self,
        case_data: dict[str, Any],
        exception_record: ExceptionRecord,
        config_item: ServiceConfigItem,
        start_response: StartEventResponse
    ) -> CaseDataContent:
        data = dict(case_data)
        data[BULK_SCAN_CASE_REFERENCE] = exception_record.id

        if exception_record.envelope_id and \
                self.envelope_reference_helper.service_supports_envelope_references(config_item.service):
            data[BULK_SCAN_ENVELOPES] = self.envelope_reference_helper.single_envelope_reference_list(
                exception_record.envelope_id,
                CaseAction.CREATE
            )

        return CaseDataContent(
            data=data,
            event=Event(
                id=start_response.event_id,
                summary="Case created",
                description=f"Case created from exception record ref {exception_record.id}",
            ),
            event_token=start_response.token,
        )
