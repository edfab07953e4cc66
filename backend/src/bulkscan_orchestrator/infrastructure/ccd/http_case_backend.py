"""
CCD data store HTTP adapter

Implements CaseBackendPort over the CCD REST API using httpx. Every failure
is reported as CaseBackendError carrying the HTTP status (None for transport
failures), which is what the application services branch on.
"""

import logging
from typing import Any, Callable, Optional, TypeVar

import httpx

from ...domain.cases.models import CaseDataContent, CaseDetails, StartEventResponse
from ...domain.cases.ports import CaseBackendError, CaseBackendPort


logger = logging.getLogger(__name__)

T = TypeVar("T")


class HttpCaseBackend(CaseBackendPort):
    """
    CaseBackendPort implementation calling the CCD data store.

    Usage:
        backend = HttpCaseBackend(settings.CCD_API_URL, timeout=settings.HTTP_TIMEOUT_SECONDS)
        cases = backend.search_cases(user_token, s2s_token, "BULKSCAN_ExceptionRecord", query)
    """

    def __init__(self, base_url: str, timeout: float = 30.0, client: Optional[httpx.Client] = None):
        self.base_url = base_url.rstrip("/")
        self.client = client or httpx.Client(timeout=timeout)

    def search_cases(
        self,
        user_token: str,
        service_token: str,
        case_type_ids: str,
        query: str
    ) -> list[CaseDetails]:
        body = self._request(
            "POST",
            "/searchCases",
            user_token,
            service_token,
            params={"ctid": case_type_ids},
            content=query,
        )
        return _parse(_case_list, body)

    def get_case(self, user_token: str, service_token: str, case_ref: str) -> CaseDetails:
        body = self._request(
            "GET",
            f"/cases/{case_ref}",
            user_token,
            service_token,
            headers={"experimental": "true"},
        )
        return _parse(CaseDetails.from_dict, body)

    def start_event_for_case(
        self,
        user_token: str,
        service_token: str,
        user_id: str,
        jurisdiction: str,
        case_type_id: str,
        case_ref: str,
        event_id: str
    ) -> StartEventResponse:
        body = self._request(
            "GET",
            f"{self._case_type_path(user_id, jurisdiction, case_type_id)}"
            f"/cases/{case_ref}/event-triggers/{event_id}/token",
            user_token,
            service_token,
        )
        return _parse(StartEventResponse.from_dict, body)

    def start_for_create(
        self,
        user_token: str,
        service_token: str,
        user_id: str,
        jurisdiction: str,
        case_type_id: str,
        event_id: str
    ) -> StartEventResponse:
        body = self._request(
            "GET",
            f"{self._case_type_path(user_id, jurisdiction, case_type_id)}/event-triggers/{event_id}/token",
            user_token,
            service_token,
        )
        return _parse(StartEventResponse.from_dict, body)

    def submit_event_for_case(
        self,
        user_token: str,
        service_token: str,
        user_id: str,
        jurisdiction: str,
        case_type_id: str,
        case_ref: str,
        content: CaseDataContent
    ) -> CaseDetails:
        body = self._request(
            "POST",
            f"{self._case_type_path(user_id, jurisdiction, case_type_id)}/cases/{case_ref}/events",
            user_token,
            service_token,
            json=content.to_dict(),
        )
        return _parse(CaseDetails.from_dict, body)

    def submit_for_create(
        self,
        user_token: str,
        service_token: str,
        user_id: str,
        jurisdiction: str,
        case_type_id: str,
        content: CaseDataContent
    ) -> CaseDetails:
        body = self._request(
            "POST",
            f"{self._case_type_path(user_id, jurisdiction, case_type_id)}/cases",
            user_token,
            service_token,
            json=content.to_dict(),
        )
        return _parse(CaseDetails.from_dict, body)

    @staticmethod
    def _case_type_path(user_id: str, jurisdiction: str, case_type_id: str) -> str:
        return f"/caseworkers/{user_id}/jurisdictions/{jurisdiction}/case-types/{case_type_id}"

    def _request(
        self,
        method: str,
        path: str,
        user_token: str,
        service_token: str,
        headers: Optional[dict[str, str]] = None,
        **kwargs: Any
    ) -> dict[str, Any]:
        request_headers = {
            "Authorization": user_token,
            "ServiceAuthorization": service_token,
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        request_headers.update(headers or {})

        try:
            response = self.client.request(method, f"{self.base_url}{path}", headers=request_headers, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.debug(f"CCD responded {e.response.status_code} to {method} {path}: {e.response.text}")
            raise CaseBackendError(
                f"CCD call {method} {path} failed with status {e.response.status_code}",
                e.response.status_code
            ) from e
        except httpx.RequestError as e:
            raise CaseBackendError(f"CCD call {method} {path} failed: {e}") from e

        try:
            body = response.json()
        except ValueError as e:
            raise CaseBackendError(
                f"CCD call {method} {path} returned a body that is not JSON",
                response.status_code
            ) from e

        if not isinstance(body, dict):
            raise CaseBackendError(
                f"CCD call {method} {path} returned an unexpected body: {response.text[:200]}",
                response.status_code
            )
        return body


def _case_list(body: dict[str, Any]) -> list[CaseDetails]:
    return [CaseDetails.from_dict(case) for case in body.get("cases") or []]


def _parse(builder: Callable[[dict[str, Any]], T], body: dict[str, Any]) -> T:
    try:
        return builder(body)
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise CaseBackendError(f"Unexpected CCD response: {e!r}") from e
