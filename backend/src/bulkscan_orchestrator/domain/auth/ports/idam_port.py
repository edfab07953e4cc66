"""Authentication ports: IDAM user tokens and service-to-service tokens.

Token acquisition details live in the infrastructure adapters; the
orchestrator only needs these two contracts.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


class AuthenticationError(Exception):
    """Raised when a token cannot be obtained."""
    pass


@dataclass(frozen=True)
class UserDetails:
    id: str
    email: Optional[str] = None


class IdamClientPort(ABC):

    @abstractmethod
    def authenticate_user(self, username: str, password: str) -> str:
        """Log a system user in and return a bearer token ("Bearer ...")."""
        pass

    @abstractmethod
    def get_user_details(self, user_token: str) -> UserDetails:
        """Return details of the user owning the token."""
        pass


class ServiceTokenGeneratorPort(ABC):

    @abstractmethod
    def generate(self) -> str:
        """Generate a fresh service-to-service token."""
        pass
