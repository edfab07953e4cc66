"""
CCD API facade - single entry point for all orchestrator -> CCD calls

Wraps CaseBackendPort with:
- case searches by correlation key (legacy id, envelope id, bulk scan case reference)
- the two-phase write protocol (start event -> build payload -> submit event)
- credential cache eviction when CCD rejects a credential (401/403)
- named failures for case retrieval (not found / invalid id)

Services compose CcdApi; there is no shared base class for event publishers.
"""

import json
import logging
from typing import Callable, Optional

from ..domain.cases.models import CaseDataContent, CaseDetails, StartEventResponse
from ..domain.cases.ports import CaseBackendError, CaseBackendPort
from ..service_config import ServiceConfigItem, ServiceConfigProvider
from .authenticator import CcdAuthenticator, CcdAuthenticatorFactory
from .errors import CaseNotFoundError, CcdCallError, InvalidCaseIdError, UnableToAttachDocumentsError
from .fields import exception_record_case_type


logger = logging.getLogger(__name__)

LEGACY_ID_FIELD = "alias.previousServiceCaseReference"
EXCEPTION_RECORD_ENVELOPE_ID_FIELD = "data.envelopeId"
CASE_ENVELOPE_ID_FIELD = "data.bulkScanEnvelopes.value.id"
BULK_SCAN_CASE_REFERENCE_FIELD = "data.bulkScanCaseReference"

CaseDataContentBuilder = Callable[[StartEventResponse], CaseDataContent]


def match_phrase_query(field: str, value: str) -> str:
    """Elasticsearch query matching a phrase in a single field."""
    return json.dumps({"query": {"match_phrase": {field: value}}})


class CcdApi:
    """
    Facade over the CCD data store.

    Usage:
        ccd_api = CcdApi(case_backend, authenticator_factory, service_config_provider)
        case_ids = ccd_api.get_case_refs_by_envelope_id(envelope.id, envelope.container)
    """

    def __init__(
        self,
        case_backend: CaseBackendPort,
        authenticator_factory: CcdAuthenticatorFactory,
        service_config_provider: ServiceConfigProvider
    ):
        self.case_backend = case_backend
        self.authenticator_factory = authenticator_factory
        self.service_config_provider = service_config_provider

    # ------------------------------------------------------------------
    # Authentication
    # ------------------------------------------------------------------

    def authenticate_jurisdiction(self, jurisdiction: str) -> CcdAuthenticator:
        return self.authenticator_factory.create_for_jurisdiction(jurisdiction)

    def _remove_from_idam_cache_if_auth_problem(self, status_code: Optional[int], jurisdiction: str) -> None:
        if status_code in (401, 403):
            self.authenticator_factory.invalidate(jurisdiction)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get_case(self, case_ref: str, jurisdiction: str) -> CaseDetails:
        """
        Retrieve a case.

        Raises:
            CaseNotFoundError: CCD answered 404
            InvalidCaseIdError: CCD answered 400
            CcdCallError: Any other failure
        """
        authenticator = self.authenticate_jurisdiction(jurisdiction)
        try:
            return self.case_backend.get_case(
                authenticator.user_token,
                authenticator.get_service_token(),
                case_ref
            )
        except CaseBackendError as e:
            logger.debug(f"Failed to call 'get_case': {e}")
            self._remove_from_idam_cache_if_auth_problem(e.status_code, jurisdiction)

            if e.status_code == 404:
                raise CaseNotFoundError(f"Could not find case: {case_ref}", e.status_code) from e
            if e.status_code == 400:
                raise InvalidCaseIdError(f"Invalid case ID: {case_ref}", e.status_code) from e
            raise CcdCallError(
                f"Internal Error: Could not retrieve case: {case_ref} Error: {e.status_code}",
                e.status_code
            ) from e

    def get_case_refs_by_legacy_id(self, legacy_id: str, service: str) -> list[int]:
        service_config = self.service_config_provider.get_config(service)

        if not service_config.case_type_ids:
            logger.info(
                f"Skipping case search by legacy ID ({legacy_id}) for service {service} "
                f"because it has no case type ID configured"
            )
            return []

        return self._get_case_refs(
            service_config,
            ",".join(service_config.case_type_ids),
            match_phrase_query(LEGACY_ID_FIELD, legacy_id)
        )

    def get_case_refs_by_envelope_id(self, envelope_id: str, service: str) -> list[int]:
        """Ids of service cases created or updated from the envelope."""
        service_config = self.service_config_provider.get_config(service)

        if not service_config.case_type_ids:
            logger.info(
                f"Skipping case search by envelope ID ({envelope_id}) for service {service} "
                f"because it has no case type ID configured"
            )
            return []

        return self._get_case_refs(
            service_config,
            ",".join(service_config.case_type_ids),
            match_phrase_query(CASE_ENVELOPE_ID_FIELD, envelope_id)
        )

    def get_exception_record_refs_by_envelope_id(self, envelope_id: str, service: str) -> list[int]:
        service_config = self.service_config_provider.get_config(service)
        return self._get_case_refs(
            service_config,
            exception_record_case_type(service),
            match_phrase_query(EXCEPTION_RECORD_ENVELOPE_ID_FIELD, envelope_id)
        )

    def get_case_refs_by_bulk_scan_case_reference(self, bulk_scan_case_reference: str, service: str) -> list[int]:
        """Ids of service cases created from the given exception record."""
        service_config = self.service_config_provider.get_config(service)
        return self._get_case_refs(
            service_config,
            ",".join(service_config.case_type_ids),
            match_phrase_query(BULK_SCAN_CASE_REFERENCE_FIELD, bulk_scan_case_reference)
        )

    def _get_case_refs(self, service_config: ServiceConfigItem, case_type_ids: str, query: str) -> list[int]:
        cases = self._search_cases(service_config.jurisdiction, case_type_ids, query)
        return [case.id for case in cases]

    def _search_cases(self, jurisdiction: str, case_type_ids: str, query: str) -> list[CaseDetails]:
        authenticator = self.authenticate_jurisdiction(jurisdiction)
        try:
            return self.case_backend.search_cases(
                authenticator.user_token,
                authenticator.get_service_token(),
                case_type_ids,
                query
            )
        except CaseBackendError as e:
            logger.debug(f"Failed to call 'search_cases': {e}")
            self._remove_from_idam_cache_if_auth_problem(e.status_code, jurisdiction)
            raise

    # ------------------------------------------------------------------
    # Two-phase writes
    # ------------------------------------------------------------------

    def create_case(
        self,
        jurisdiction: str,
        case_type_id: str,
        event_id: str,
        case_data_content_builder: CaseDataContentBuilder,
        log_context: str
    ) -> int:
        """
        Create a service case as the jurisdiction's system user.

        Returns:
            Id assigned to the case by CCD

        Raises:
            CaseBackendError: Start or submit failed (status_code tells why)
        """
        authenticator = self.authenticate_jurisdiction(jurisdiction)
        try:
            created = self._start_and_submit_create(
                authenticator.user_token,
                authenticator.get_service_token(),
                authenticator.user_id,
                jurisdiction,
                case_type_id,
                event_id,
                case_data_content_builder,
                log_context
            )
        except CaseBackendError as e:
            logger.debug(f"Failed to call 'create_case': {e}")
            self._remove_from_idam_cache_if_auth_problem(e.status_code, jurisdiction)
            raise
        return created.id

    def create_exception_record(
        self,
        authenticator: CcdAuthenticator,
        jurisdiction: str,
        case_type_id: str,
        event_id: str,
        case_data_content_builder: CaseDataContentBuilder,
        log_context: str
    ) -> CaseDetails:
        try:
            return self._start_and_submit_create(
                authenticator.user_token,
                authenticator.get_service_token(),
                authenticator.user_id,
                jurisdiction,
                case_type_id,
                event_id,
                case_data_content_builder,
                log_context
            )
        except CaseBackendError as e:
            logger.debug(f"Failed to call 'create_exception_record': {e}")
            self._remove_from_idam_cache_if_auth_problem(e.status_code, jurisdiction)
            raise

    def attach_scanned_docs(
        self,
        authenticator: CcdAuthenticator,
        jurisdiction: str,
        case_type_id: str,
        case_ref: str,
        event_id: str,
        case_data_content_builder: CaseDataContentBuilder,
        log_context: str
    ) -> None:
        """
        Run an update event on an existing case.

        Raises:
            UnableToAttachDocumentsError: CCD answered 404
            CcdCallError: Any other failure
        """
        try:
            self._start_and_submit_update(
                authenticator.user_token,
                authenticator.get_service_token(),
                authenticator.user_id,
                jurisdiction,
                case_type_id,
                case_ref,
                event_id,
                case_data_content_builder,
                log_context
            )
        except CaseBackendError as e:
            if e.status_code == 404:
                raise UnableToAttachDocumentsError(
                    f"Event failed. Event: {event_id}, case type: {case_type_id}, case ref: {case_ref}",
                    e.status_code
                ) from e

            logger.debug(f"Failed to call 'attach_scanned_docs': {e}")
            self._remove_from_idam_cache_if_auth_problem(e.status_code, jurisdiction)
            raise CcdCallError(
                f"Could not attach documents for case ref: {case_ref} Error: {e.status_code}",
                e.status_code
            ) from e

    def create_new_case_from_callback(
        self,
        idam_token: str,
        s2s_token: str,
        user_id: str,
        jurisdiction: str,
        case_type_id: str,
        event_id: str,
        case_data_content_builder: CaseDataContentBuilder,
        log_context: str
    ) -> int:
        """Create a case with the credentials of the caseworker driving the callback.

        The caller's token is not cached, so a 401/403 does not touch the cache.
        """
        try:
            created = self._start_and_submit_create(
                idam_token,
                s2s_token,
                user_id,
                jurisdiction,
                case_type_id,
                event_id,
                case_data_content_builder,
                log_context
            )
        except CaseBackendError as e:
            logger.debug(f"Failed to call 'create_new_case_from_callback': {e}")
            raise
        return created.id

    def _start_and_submit_create(
        self,
        user_token: str,
        service_token: str,
        user_id: str,
        jurisdiction: str,
        case_type_id: str,
        event_id: str,
        case_data_content_builder: CaseDataContentBuilder,
        log_context: str
    ) -> CaseDetails:
        start_response = self.case_backend.start_for_create(
            user_token,
            service_token,
            user_id,
            jurisdiction,
            case_type_id,
            event_id
        )

        logger.info(f"Started event in CCD. Event: {event_id}, case type: {case_type_id}. {log_context}")

        return self.case_backend.submit_for_create(
            user_token,
            service_token,
            user_id,
            jurisdiction,
            case_type_id,
            case_data_content_builder(start_response)
        )

    def _start_and_submit_update(
        self,
        user_token: str,
        service_token: str,
        user_id: str,
        jurisdiction: str,
        case_type_id: str,
        case_ref: str,
        event_id: str,
        case_data_content_builder: CaseDataContentBuilder,
        log_context: str
    ) -> CaseDetails:
        start_response = self.case_backend.start_event_for_case(
            user_token,
            service_token,
            user_id,
            jurisdiction,
            case_type_id,
            case_ref,
            event_id
        )

        logger.info(
            f"Started event in CCD. Event: {event_id}, case type: {case_type_id}, "
            f"case ref: {case_ref}. {log_context}"
        )

        return self.case_backend.submit_event_for_case(
            user_token,
            service_token,
            user_id,
            jurisdiction,
            case_type_id,
            case_ref,
            case_data_content_builder(start_response)
        )
