"""
Transformation service HTTP adapter

Calls the transformation URL configured for a service and validates the
response with pydantic. Failure mapping:
- 2xx violating the schema -> TransformationResponseInvalidError
- 400 / 422                -> InvalidCaseDataError (errors/warnings parsed from the body)
- anything else (including a 2xx body that is not JSON) -> TransformationClientError
"""

import logging
from typing import Optional

import httpx
from pydantic import ValidationError

from ...domain.transformation.models import (
    ClientServiceErrorResponse,
    SuccessfulTransformationResponse,
    TransformationRequest,
)
from ...domain.transformation.ports import (
    InvalidCaseDataError,
    TransformationClientError,
    TransformationPort,
    TransformationResponseInvalidError,
)


logger = logging.getLogger(__name__)


class TransformationClient(TransformationPort):

    def __init__(self, timeout: float = 30.0, client: Optional[httpx.Client] = None):
        self.client = client or httpx.Client(timeout=timeout)

    def transform_case_data(
        self,
        url: str,
        request: TransformationRequest,
        s2s_token: str
    ) -> SuccessfulTransformationResponse:
        try:
            response = self.client.post(
                url,
                content=request.model_dump_json(),
                headers={
                    "ServiceAuthorization": s2s_token,
                    "Content-Type": "application/json",
                    "Accept": "application/json",
                },
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            if status_code in (400, 422):
                raise self._invalid_case_data(e.response) from e
            raise TransformationClientError(
                f"Transformation service responded with status {status_code}",
                status_code
            ) from e
        except httpx.RequestError as e:
            raise TransformationClientError(f"Failed to call transformation service: {e}") from e

        try:
            body = response.json()
        except ValueError as e:
            raise TransformationClientError(
                f"Transformation service returned a body that is not JSON (status {response.status_code})",
                response.status_code
            ) from e

        try:
            return SuccessfulTransformationResponse.model_validate(body)
        except ValidationError as e:
            violations = [
                f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
                for error in e.errors()
            ]
            raise TransformationResponseInvalidError(
                f"Invalid transformation response: {'; '.join(violations)}",
                violations
            ) from e

    @staticmethod
    def _invalid_case_data(response: httpx.Response) -> InvalidCaseDataError:
        try:
            body = ClientServiceErrorResponse.model_validate_json(response.content)
        except ValidationError:
            logger.warning(f"Unparseable {response.status_code} response from transformation service")
            body = ClientServiceErrorResponse()

        return InvalidCaseDataError(
            response.status_code,
            errors=body.errors,
            warnings=body.warnings,
            response_body=response.text,
        )
