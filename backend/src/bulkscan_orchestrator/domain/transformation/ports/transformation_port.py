"""TransformationPort - Port interface for the service transformation endpoint.

Each service exposes an endpoint that turns an envelope or exception record
into case data for its own case type. Failures are reported as one of three
exception types so callers can tell retryable failures from permanent ones.
"""

from abc import ABC, abstractmethod
from typing import Optional

from ..models import SuccessfulTransformationResponse, TransformationRequest


class TransformationError(Exception):
    """Base exception for transformation failures."""
    pass


class TransformationResponseInvalidError(TransformationError):
    """The service answered 2xx with a body that fails schema validation.

    Permanent: calling again returns the same invalid data.
    """

    def __init__(self, message: str, violations: Optional[list[str]] = None):
        super().__init__(message)
        self.violations = violations or []


class InvalidCaseDataError(TransformationError):
    """The service rejected the input (HTTP 400 or 422).

    Attributes:
        status_code: 400 or 422
        errors: Validation errors reported by the service
        warnings: Validation warnings reported by the service
        response_body: Raw response body, for logging
    """

    def __init__(
        self,
        status_code: int,
        errors: Optional[list[str]] = None,
        warnings: Optional[list[str]] = None,
        response_body: str = ""
    ):
        super().__init__(f"Transformation service rejected the request with status {status_code}")
        self.status_code = status_code
        self.errors = errors or []
        self.warnings = warnings or []
        self.response_body = response_body


class TransformationClientError(TransformationError):
    """Any other failure: network error, timeout, 5xx, unexpected status."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class TransformationPort(ABC):
    """Abstract interface for the transformation service."""

    @abstractmethod
    def transform_case_data(
        self,
        url: str,
        request: TransformationRequest,
        s2s_token: str
    ) -> SuccessfulTransformationResponse:
        """
        Transform an envelope or exception record into case data.

        Args:
            url: Transformation URL configured for the service
            request: Request body
            s2s_token: Freshly generated service-to-service token

        Returns:
            Validated SuccessfulTransformationResponse

        Raises:
            TransformationResponseInvalidError: Response failed validation
            InvalidCaseDataError: Service answered 400 or 422
            TransformationClientError: Any other failure
        """
        pass
