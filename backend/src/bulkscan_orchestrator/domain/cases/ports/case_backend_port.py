"""CaseBackendPort - Port interface for the CCD data store.

Application services depend only on this port. The HTTP adapter lives in
infrastructure.ccd; tests use an in-memory implementation.

Architecture: Hexagonal - Port interface in domain layer
"""

from abc import ABC, abstractmethod
from typing import Optional

from ..models import CaseDataContent, CaseDetails, StartEventResponse


class CaseBackendError(Exception):
    """
    Raised by CaseBackendPort implementations when a call fails.

    Attributes:
        status_code: HTTP status returned by CCD, None for transport failures
            (connection refused, timeout, ...)
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code

    @property
    def is_auth_failure(self) -> bool:
        return self.status_code in (401, 403)


class CaseBackendPort(ABC):
    """
    Abstract interface for the case-management backend.

    Every mutation follows the two-phase protocol:
    1. start an event, receiving a single-use token and the case snapshot
    2. submit the event with the full payload and that same token

    Implementations MUST NOT cache or reuse event tokens. A submit carrying a
    stale or already used token fails with CaseBackendError.
    """

    @abstractmethod
    def search_cases(
        self,
        user_token: str,
        service_token: str,
        case_type_ids: str,
        query: str
    ) -> list[CaseDetails]:
        """
        Search cases of the given (comma separated) case types.

        Args:
            user_token: IDAM token of the caller
            service_token: Service-to-service token
            case_type_ids: Comma separated case type ids
            query: Elasticsearch query (JSON string)

        Returns:
            Matching cases, possibly empty

        Raises:
            CaseBackendError: If the search fails
        """
        pass

    @abstractmethod
    def get_case(self, user_token: str, service_token: str, case_ref: str) -> CaseDetails:
        """Retrieve a case by its CCD reference."""
        pass

    @abstractmethod
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
        """Start an event on an existing case."""
        pass

    @abstractmethod
    def start_for_create(
        self,
        user_token: str,
        service_token: str,
        user_id: str,
        jurisdiction: str,
        case_type_id: str,
        event_id: str
    ) -> StartEventResponse:
        """Start a case creation event."""
        pass

    @abstractmethod
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
        """Submit a previously started event on an existing case."""
        pass

    @abstractmethod
    def submit_for_create(
        self,
        user_token: str,
        service_token: str,
        user_id: str,
        jurisdiction: str,
        case_type_id: str,
        content: CaseDataContent
    ) -> CaseDetails:
        """Submit a previously started case creation event.

        Returns:
            The created case, including the id assigned by CCD
        """
        pass
