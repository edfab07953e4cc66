"""Callback API endpoints.

CCD calls these synchronously while a caseworker submits an event. Problems
are reported in the response body (errors/warnings), never as HTTP errors, so
that CCD can show them to the caseworker.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Header

from ....ccd.callback import CreateCaseCallbackService
from ....ccd.errors import MultipleCasesFoundError
from ....dependencies import get_create_case_callback_service
from ....domain.callbacks.models import CallbackException
from ....observability.metrics import callback_results_total
from .schemas import CallbackResponse, CcdCallbackRequestSchema

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/callback", tags=["callbacks"])


@router.post("/create-new-case", response_model=CallbackResponse)
def create_new_case(
    request: CcdCallbackRequestSchema,
    authorization: Optional[str] = Header(default=None),
    user_id: Optional[str] = Header(default=None),
    service: CreateCaseCallbackService = Depends(get_create_case_callback_service),
):
    """Create a service case from an exception record.

    Args:
        request: CCD callback body
        authorization: IDAM token of the caseworker
        user_id: IDAM id of the caseworker

    Returns:
        Finalized exception record data, or warnings/errors
    """
    case_id = request.case_details.id if request.case_details else None
    logger.info(
        f"Processing callback. Event ID: {request.event_id}. Exception record ID: {case_id}",
        extra={"event_id": request.event_id, "exception_record_id": case_id}
    )

    try:
        result = service.process(request.to_domain(), authorization, user_id)
    except (CallbackException, MultipleCasesFoundError) as e:
        logger.error(
            f"Failed to process callback for exception record {case_id}: {e}",
            extra={"event_id": request.event_id, "exception_record_id": case_id}
        )
        callback_results_total.labels(event_id=request.event_id, outcome="failed").inc()
        return CallbackResponse(errors=[str(e)])

    if result.errors:
        outcome = "errors"
    elif result.warnings:
        outcome = "warnings"
    else:
        outcome = "success"
    callback_results_total.labels(event_id=request.event_id, outcome=outcome).inc()

    if result.case_id is not None and result.errors:
        logger.warning(
            f"Case {result.case_id} created from exception record {case_id} but callback reported errors",
            extra={"exception_record_id": case_id, "case_id": result.case_id}
        )

    return CallbackResponse(**result.to_dict())
