"""Fake IDAM and S2S adapters counting how often tokens are obtained."""

from bulkscan_orchestrator.domain.auth.ports import (
    AuthenticationError,
    IdamClientPort,
    ServiceTokenGeneratorPort,
    UserDetails,
)


class FakeIdamClient(IdamClientPort):
    """Issues a new token on every login and remembers who logged in."""

    def __init__(self):
        self.logins: list[str] = []
        self.rejected_users: set[str] = set()

    def authenticate_user(self, username: str, password: str) -> str:
        if username in self.rejected_users:
            raise AuthenticationError(f"IDAM rejected login of {username}")
        self.logins.append(username)
        return f"Bearer user-token-{len(self.logins)}"

    def get_user_details(self, user_token: str) -> UserDetails:
        return UserDetails(id=f"user-{user_token.rsplit('-', 1)[-1]}", email="system@example.com")


class FakeS2STokenGenerator(ServiceTokenGeneratorPort):

    def __init__(self):
        self.generated = 0

    def generate(self) -> str:
        self.generated += 1
        return f"Bearer s2s-token-{self.generated}"
