"""Transformation domain module: request/response schemas and port."""

from .models import (
    CaseCreationDetails,
    ClientServiceErrorResponse,
    SuccessfulTransformationResponse,
    TransformationRequest,
)
from .ports import (
    InvalidCaseDataError,
    TransformationClientError,
    TransformationError,
    TransformationPort,
    TransformationResponseInvalidError,
)

__all__ = [
    "CaseCreationDetails",
    "ClientServiceErrorResponse",
    "SuccessfulTransformationResponse",
    "TransformationRequest",
    "InvalidCaseDataError",
    "TransformationClientError",
    "TransformationError",
    "TransformationPort",
    "TransformationResponseInvalidError",
]
