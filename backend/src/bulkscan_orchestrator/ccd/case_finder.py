"""Finds existing CCD cases related to envelopes and exception records."""

import logging
from typing import Optional

from ..domain.callbacks.models import ExceptionRecord
from ..domain.cases.models import CaseDetails
from ..domain.envelopes.models import Envelope
from ..service_config import ServiceConfigItem
from .ccd_api import CcdApi
from .errors import CaseNotFoundError, InvalidCaseIdError


logger = logging.getLogger(__name__)


class CaseFinder:
    """
    Resolves the case an envelope refers to.

    The CCD case reference carried by the envelope is tried first, then the
    reference of the case in the service's previous system (legacy id).
    """

    def __init__(self, ccd_api: CcdApi):
        self.ccd_api = ccd_api

    def find_case(self, envelope: Envelope) -> Optional[CaseDetails]:
        case_details = self._find_by_ccd_id(envelope)

        if case_details is None and envelope.legacy_case_ref:
            case_details = self._find_by_legacy_id(envelope)

        return case_details

    def find_cases(self, exception_record: ExceptionRecord, config_item: ServiceConfigItem) -> list[int]:
        """Ids of the cases already created from the exception record."""
        return self.ccd_api.get_case_refs_by_bulk_scan_case_reference(
            exception_record.id,
            config_item.service
        )

    def _find_by_ccd_id(self, envelope: Envelope) -> Optional[CaseDetails]:
        if not envelope.case_ref:
            return None

        try:
            return self.ccd_api.get_case(envelope.case_ref.strip(), envelope.jurisdiction)
        except CaseNotFoundError:
            logger.info(
                f"Case not found. Ref: {envelope.case_ref}, jurisdiction: {envelope.jurisdiction}",
                extra={"envelope_id": envelope.id}
            )
        except InvalidCaseIdError:
            logger.info(
                f"Invalid case ID. Ref: {envelope.case_ref}, jurisdiction: {envelope.jurisdiction}",
                extra={"envelope_id": envelope.id}
            )
        return None

    def _find_by_legacy_id(self, envelope: Envelope) -> Optional[CaseDetails]:
        case_ids = self.ccd_api.get_case_refs_by_legacy_id(envelope.legacy_case_ref, envelope.container)

        if len(case_ids) == 1:
            return self.ccd_api.get_case(str(case_ids[0]), envelope.jurisdiction)

        if len(case_ids) > 1:
            logger.warning(
                f"Multiple cases found by legacy ID {envelope.legacy_case_ref}: "
                f"{', '.join(str(case_id) for case_id in case_ids)}",
                extra={"envelope_id": envelope.id}
            )
        return None
