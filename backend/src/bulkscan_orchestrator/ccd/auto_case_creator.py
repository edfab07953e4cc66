"""
Automatic case creation from NEW_APPLICATION envelopes

Steps:
1. Skip when automatic case creation is disabled for the service
2. Search CCD for a case already created from the envelope (idempotency)
3. Transform the envelope into case data
4. Create the case in CCD (start event -> submit event)

Every failure is converted into a CaseCreationResult; nothing is raised to the
caller except configuration errors.
"""

import logging
from typing import Any, Optional

from ..domain.auth.ports import ServiceTokenGeneratorPort
from ..domain.cases.models import CaseDataContent, Event, StartEventResponse
from ..domain.cases.ports import CaseBackendError
from ..domain.cases.results import CaseCreationResult
from ..domain.envelopes.models import Envelope
from ..domain.transformation.models import SuccessfulTransformationResponse
from ..domain.transformation.ports import (
    InvalidCaseDataError,
    TransformationPort,
    TransformationResponseInvalidError,
)
from ..observability.metrics import case_creation_results_total
from ..service_config import ServiceConfigProvider
from .ccd_api import CcdApi
from .envelope_references import EnvelopeReferenceHelper
from .fields import BULK_SCAN_ENVELOPES, CaseAction
from .transformation_request_creator import TransformationRequestCreator


logger = logging.getLogger(__name__)

# Response bodies are truncated in logs
MAX_LOGGED_BODY_LENGTH = 10000


class AutoCaseCreator:
    """
    Creates service cases from envelopes without caseworker involvement.

    Usage:
        creator = AutoCaseCreator(...)
        result = creator.create_case(envelope)
        if result.has_case:
            ...
    """

    def __init__(
        self,
        transformation_client: TransformationPort,
        request_creator: TransformationRequestCreator,
        s2s_token_generator: ServiceTokenGeneratorPort,
        ccd_api: CcdApi,
        service_config_provider: ServiceConfigProvider,
        envelope_reference_helper: EnvelopeReferenceHelper
    ):
        self.transformation_client = transformation_client
        self.request_creator = request_creator
        self.s2s_token_generator = s2s_token_generator
        self.ccd_api = ccd_api
        self.service_config_provider = service_config_provider
        self.envelope_reference_helper = envelope_reference_helper

    def create_case(self, envelope: Envelope) -> CaseCreationResult:
        logging_context = get_logging_context(envelope)
        logger.info(f"Started attempt to automatically create a new case from envelope. {logging_context}")

        if self.service_config_provider.get_config(envelope.container).auto_case_creation_enabled:
            result = self._create_case_from_envelope(envelope, logging_context)
        else:
            logger.info(f"Automatic case creation is disabled for the service - skipping. {logging_context}")
            result = CaseCreationResult.abort_without_failure()

        case_creation_results_total.labels(
            container=envelope.container,
            result=result.result_type.value
        ).inc()
        return result

    def _create_case_from_envelope(self, envelope: Envelope, logging_context: str) -> CaseCreationResult:
        case_ids = self.ccd_api.get_case_refs_by_envelope_id(envelope.id, envelope.container)

        if not case_ids:
            return self._create_case(envelope, logging_context)

        if len(case_ids) == 1:
            case_id = case_ids[0]
            logger.warning(
                f"Case already exists for envelope - skipping creation. Case ID: {case_id}. {logging_context}"
            )
            return CaseCreationResult.case_already_exists(case_id)

        logger.error(
            f"Multiple cases exist for envelope. Case Ids: [{','.join(str(case_id) for case_id in case_ids)}]. "
            f"{logging_context}"
        )
        return CaseCreationResult.unrecoverable_failure()

    def _create_case(self, envelope: Envelope, logging_context: str) -> CaseCreationResult:
        try:
            transformation_response = self._transform_envelope(envelope, logging_context)
        except TransformationResponseInvalidError as e:
            logger.error(
                f"Received malformed response from transformation endpoint called for envelope. "
                f"{logging_context} Violations: [{', '.join(e.violations)}]."
            )
            return CaseCreationResult.unrecoverable_failure()
        except InvalidCaseDataError as e:
            if e.status_code == 422:
                logger.info(
                    f"Received validation error response from transformation endpoint called for envelope. "
                    f"{logging_context} Errors: {e.errors}. Warnings: {e.warnings}"
                )
            else:
                logger.error(
                    f"Received a response with status {e.status_code} from transformation endpoint "
                    f"called for envelope. {logging_context}. "
                    f"Response starts with: [{e.response_body[:MAX_LOGGED_BODY_LENGTH]}]"
                )
            return CaseCreationResult.unrecoverable_failure()
        except Exception:
            logger.exception(f"An error occurred when transforming envelope into case data. {logging_context}")
            return CaseCreationResult.potentially_recoverable_failure()

        return self._create_case_in_ccd(transformation_response, envelope, logging_context)

    def _transform_envelope(self, envelope: Envelope, logging_context: str) -> SuccessfulTransformationResponse:
        s2s_token = self.s2s_token_generator.generate()
        transformation_url = self.service_config_provider.get_config(envelope.container).transformation_url

        response = self.transformation_client.transform_case_data(
            transformation_url,
            self.request_creator.from_envelope(envelope),
            s2s_token
        )

        logger.info(f"Received successful transformation response for envelope. {logging_context}")
        return response

    def _create_case_in_ccd(
        self,
        transformation_response: SuccessfulTransformationResponse,
        envelope: Envelope,
        logging_context: str
    ) -> CaseCreationResult:
        details = transformation_response.case_creation_details

        try:
            case_id = self.ccd_api.create_case(
                envelope.jurisdiction,
                details.case_type_id,
                details.event_id,
                lambda start_response: self._get_case_data_content(details.case_data, envelope.id, start_response),
                logging_context
            )
        except CaseBackendError as e:
            if e.status_code in (400, 422):
                logger.error(
                    f"Received a response with status {e.status_code} when trying to create "
                    f"a CCD case from an envelope. {logging_context}",
                    exc_info=True
                )
                return CaseCreationResult.unrecoverable_failure()

            logger.exception(f"An error occurred when trying to create a case in CCD from envelope. {logging_context}")
            return CaseCreationResult.potentially_recoverable_failure()
        except Exception:
            logger.exception(f"An error occurred when trying to create a case in CCD from envelope. {logging_context}")
            return CaseCreationResult.potentially_recoverable_failure()

        logger.info(f"Created case in CCD. Case ID: {case_id}. {logging_context}", extra={"case_id": case_id})
        return CaseCreationResult.created_case(case_id)

    def _get_case_data_content(
        self,
        case_data: dict[str, Any],
        envelope_id: str,
        start_response: StartEventResponse
    ) -> CaseDataContent:
        data = dict(case_data)
        data[BULK_SCAN_ENVELOPES] = self.envelope_reference_helper.single_envelope_reference_list(
            envelope_id,
            CaseAction.CREATE
        )

        return CaseDataContent(
            data=data,
            event=Event(
                id=start_response.event_id,
                summary="Case created",
                description=f"Case created from envelope {envelope_id}",
            ),
            event_token=start_response.token,
        )


def get_logging_context(envelope: Envelope, case_id: Optional[int] = None) -> str:
    context = f"Envelope ID: {envelope.id}. File name: {envelope.zip_file_name}. Service: {envelope.container}."
    if case_id is not None:
        context += f" Case ID: {case_id}."
    return context
