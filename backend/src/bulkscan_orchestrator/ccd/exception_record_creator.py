"""Creates exception records: the fallback for envelopes that cannot be processed automatically."""

import logging

from ..domain.cases.models import CaseDataContent, Event, StartEventResponse
from ..domain.envelopes.models import Envelope
from .ccd_api import CcdApi
from .errors import MultipleCasesFoundError
from .exception_record_mapper import ExceptionRecordMapper
from .fields import EventIds, exception_record_case_type


logger = logging.getLogger(__name__)

EVENT_SUMMARY = "Create an exception record"


class ExceptionRecordCreator:
    """
    Creates at most one exception record per envelope.

    A redelivered envelope whose exception record already exists gets the id
    of that record back instead of a second record.
    """

    def __init__(self, ccd_api: CcdApi, mapper: ExceptionRecordMapper):
        self.ccd_api = ccd_api
        self.mapper = mapper

    def try_create_from(self, envelope: Envelope) -> int:
        """
        Create an exception record from the envelope, unless one exists.

        Returns:
            CCD id of the (new or existing) exception record

        Raises:
            MultipleCasesFoundError: More than one record exists for the envelope
            CaseBackendError: CCD call failed (the envelope will be redelivered)
        """
        ids = self.ccd_api.get_exception_record_refs_by_envelope_id(envelope.id, envelope.container)

        if len(ids) == 1:
            logger.info(
                f"Exception record for envelope {envelope.id} already exists: {ids[0]}",
                extra={"envelope_id": envelope.id, "exception_record_id": ids[0]}
            )
            return ids[0]

        if len(ids) > 1:
            raise MultipleCasesFoundError(
                f"Multiple exception records found for envelope {envelope.id}: "
                f"{', '.join(str(record_id) for record_id in ids)}"
            )

        return self._create(envelope)

    def _create(self, envelope: Envelope) -> int:
        case_type_id = exception_record_case_type(envelope.container)
        logger.info(
            f"Creating exception record for envelope {envelope.id}. Case type: {case_type_id}",
            extra={"envelope_id": envelope.id}
        )

        authenticator = self.ccd_api.authenticate_jurisdiction(envelope.jurisdiction)
        created = self.ccd_api.create_exception_record(
            authenticator,
            envelope.jurisdiction,
            case_type_id,
            EventIds.CREATE_EXCEPTION,
            lambda start_response: self._build_case_data_content(envelope, start_response),
            f"Envelope ID: {envelope.id}. File name: {envelope.zip_file_name}. Service: {envelope.container}."
        )

        logger.info(
            f"Created exception record. Envelope ID: {envelope.id}. Exception record ID: {created.id}",
            extra={"envelope_id": envelope.id, "exception_record_id": created.id}
        )
        return created.id

    def _build_case_data_content(self, envelope: Envelope, start_response: StartEventResponse) -> CaseDataContent:
        return CaseDataContent(
            data=self.mapper.map_envelope(envelope),
            event=Event(id=start_response.event_id, summary=EVENT_SUMMARY),
            event_token=start_response.token,
        )
