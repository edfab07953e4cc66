from .idam_port import AuthenticationError, IdamClientPort, ServiceTokenGeneratorPort, UserDetails

__all__ = ["AuthenticationError", "IdamClientPort", "ServiceTokenGeneratorPort", "UserDetails"]
