"""Attaches supplementary evidence from an envelope to an existing case."""

import logging
from typing import Any

from ..domain.auth.ports import AuthenticationError
from ..domain.cases.models import CaseDataContent, CaseDetails, Event, StartEventResponse
from ..domain.envelopes.models import Envelope
from .ccd_api import CcdApi
from .documents import concat_documents, get_documents, get_docs_to_add, get_scanned_documents, map_documents
from .envelope_references import EnvelopeReferenceHelper
from .errors import CcdCallError
from .fields import BULK_SCAN_ENVELOPES, SCANNED_DOCUMENTS, CaseAction, EventIds


logger = logging.getLogger(__name__)

EVENT_SUMMARY = "Attach scanned documents"


class EvidenceAttacher:
    """
    Runs the attachScannedDocs event against an existing case.

    Documents already on the case (same uuid OR same control number) are
    never attached twice.
    """

    def __init__(
        self,
        ccd_api: CcdApi,
        envelope_reference_helper: EnvelopeReferenceHelper,
        document_management_url: str,
        context_path: str
    ):
        self.ccd_api = ccd_api
        self.envelope_reference_helper = envelope_reference_helper
        self.document_management_url = document_management_url
        self.context_path = context_path

    def attach(self, envelope: Envelope, existing_case: CaseDetails) -> bool:
        """
        Attach the envelope's new documents to the case.

        Returns:
            True if the case was updated, False if there was nothing to attach
            or CCD refused the update
        """
        if not get_docs_to_add(get_documents(existing_case), envelope.documents):
            logger.warning(
                f"Envelope {envelope.id} has no new documents. CCD Case {existing_case.id} not updated",
                extra={"envelope_id": envelope.id, "case_id": existing_case.id}
            )
            return False

        logger.info(
            f"Attaching supplementary evidence from envelope {envelope.id} to case {existing_case.id}",
            extra={"envelope_id": envelope.id, "case_id": existing_case.id}
        )

        try:
            authenticator = self.ccd_api.authenticate_jurisdiction(envelope.jurisdiction)
            self.ccd_api.attach_scanned_docs(
                authenticator,
                envelope.jurisdiction,
                existing_case.case_type_id,
                str(existing_case.id),
                EventIds.ATTACH_SCANNED_DOCS,
                lambda start_response: self._build_case_data_content(envelope, start_response),
                f"Envelope ID: {envelope.id}. File name: {envelope.zip_file_name}. Case ref: {existing_case.id}"
            )
        except (CcdCallError, AuthenticationError) as e:
            logger.error(
                f"Failed to attach documents from envelope {envelope.id} to case {existing_case.id}: {e}",
                extra={"envelope_id": envelope.id, "case_id": existing_case.id},
                exc_info=True
            )
            return False

        logger.info(
            f"Attached documents from envelope to case. Case ID: {existing_case.id}, envelope ID: {envelope.id}",
            extra={"envelope_id": envelope.id, "case_id": existing_case.id}
        )
        return True

    def _build_case_data_content(self, envelope: Envelope, start_response: StartEventResponse) -> CaseDataContent:
        # merge into the start-event snapshot, not the case found by the router
        snapshot = start_response.case_details
        docs_to_add = get_docs_to_add(get_documents(snapshot), envelope.documents)

        data: dict[str, Any] = {
            SCANNED_DOCUMENTS: concat_documents(
                map_documents(docs_to_add, self.document_management_url, self.context_path, envelope.delivery_date),
                get_scanned_documents(snapshot)
            )
        }

        if self.envelope_reference_helper.service_supports_envelope_references(envelope.container):
            existing_references = snapshot.data.get(BULK_SCAN_ENVELOPES) if snapshot else None
            data[BULK_SCAN_ENVELOPES] = (
                self.envelope_reference_helper.parse_envelope_references(existing_references)
                + self.envelope_reference_helper.single_envelope_reference_list(envelope.id, CaseAction.UPDATE)
            )

        return CaseDataContent(
            data=data,
            event=Event(id=EventIds.ATTACH_SCANNED_DOCS, summary=EVENT_SUMMARY),
            event_token=start_response.token,
        )
