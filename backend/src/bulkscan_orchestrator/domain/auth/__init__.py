"""Authentication domain module."""

from .ports import AuthenticationError, IdamClientPort, ServiceTokenGeneratorPort, UserDetails

__all__ = ["AuthenticationError", "IdamClientPort", "ServiceTokenGeneratorPort", "UserDetails"]
