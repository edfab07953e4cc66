"""
CCD authentication - per-jurisdiction credential cache

CCD calls made by the orchestrator itself (not on behalf of a caseworker) use a
system user configured per jurisdiction. Logging that user in is expensive, so
the resulting credential is cached per jurisdiction and shared by all workers
in the process.

The cache is invalidated only when CCD rejects a credential (401/403); it is
never expired proactively. Service-to-service tokens are generated fresh for
every authenticator.
"""

import logging
import threading
from dataclasses import dataclass
from typing import Callable, Mapping

from ..config import IdamUserCredentials
from ..domain.auth.ports import (
    AuthenticationError,
    IdamClientPort,
    ServiceTokenGeneratorPort,
    UserDetails,
)
from ..observability.metrics import ccd_credentials_invalidated_total


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IdamCredential:
    access_token: str
    user_details: UserDetails


@dataclass(frozen=True)
class CcdAuthenticator:
    """Credentials for one sequence of CCD calls."""
    service_token_supplier: Callable[[], str]
    user_details: UserDetails
    user_token: str

    def get_service_token(self) -> str:
        return self.service_token_supplier()

    @property
    def user_id(self) -> str:
        return self.user_details.id


class CcdAuthenticatorFactory:
    """
    Creates CcdAuthenticators, caching the system-user credential per jurisdiction.

    Usage:
        factory = CcdAuthenticatorFactory(s2s_generator, idam_client, settings.IDAM_USERS)
        authenticator = factory.create_for_jurisdiction("BULKSCAN")

        # after CCD answered 401/403 for that jurisdiction
        factory.invalidate("BULKSCAN")

    Thread-safety: the cache is guarded by a lock. Logging in happens outside
    the lock; if two threads log in concurrently the first stored credential wins.
    """

    def __init__(
        self,
        s2s_token_generator: ServiceTokenGeneratorPort,
        idam_client: IdamClientPort,
        users: Mapping[str, IdamUserCredentials]
    ):
        self.s2s_token_generator = s2s_token_generator
        self.idam_client = idam_client
        self._users = {jurisdiction.lower(): creds for jurisdiction, creds in users.items()}
        self._cache: dict[str, IdamCredential] = {}
        self._lock = threading.Lock()

    def create_for_jurisdiction(self, jurisdiction: str) -> CcdAuthenticator:
        """
        Build an authenticator for the jurisdiction's system user.

        Raises:
            AuthenticationError: If no user is configured for the jurisdiction
                or IDAM rejects the login
        """
        credential = self._get_idam_credential(jurisdiction)
        return CcdAuthenticator(
            service_token_supplier=self.s2s_token_generator.generate,
            user_details=credential.user_details,
            user_token=credential.access_token,
        )

    def invalidate(self, jurisdiction: str) -> None:
        """Drop the cached credential of a jurisdiction, forcing a new login next time."""
        with self._lock:
            removed = self._cache.pop(jurisdiction.lower(), None)

        if removed is not None:
            ccd_credentials_invalidated_total.labels(jurisdiction=jurisdiction.lower()).inc()
            logger.info(f"Removed cached IDAM credential for jurisdiction {jurisdiction}")

    def is_cached(self, jurisdiction: str) -> bool:
        with self._lock:
            return jurisdiction.lower() in self._cache

    def _get_idam_credential(self, jurisdiction: str) -> IdamCredential:
        key = jurisdiction.lower()
        with self._lock:
            cached = self._cache.get(key)
        if cached is not None:
            return cached

        user = self._users.get(key)
        if user is None:
            raise AuthenticationError(f"No IDAM user configured for jurisdiction {jurisdiction}")

        logger.info(f"Logging in IDAM user for jurisdiction {jurisdiction}")
        token = self.idam_client.authenticate_user(user.username, user.password)
        credential = IdamCredential(
            access_token=token,
            user_details=self.idam_client.get_user_details(token),
        )

        with self._lock:
            return self._cache.setdefault(key, credential)
