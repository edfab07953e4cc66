"""Service-to-service token adapter."""

from typing import Optional

import httpx

from ...domain.auth.ports import AuthenticationError, ServiceTokenGeneratorPort


class S2STokenGenerator(ServiceTokenGeneratorPort):
    """Leases a fresh service token from the S2S provider on every call."""

    def __init__(
        self,
        base_url: str,
        microservice: str,
        timeout: float = 30.0,
        client: Optional[httpx.Client] = None
    ):
        self.base_url = base_url.rstrip("/")
        self.microservice = microservice
        self.client = client or httpx.Client(timeout=timeout)

    def generate(self) -> str:
        try:
            response = self.client.post(
                f"{self.base_url}/lease",
                json={"microservice": self.microservice},
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise AuthenticationError(
                f"S2S lease for {self.microservice} failed with status {e.response.status_code}"
            ) from e
        except httpx.RequestError as e:
            raise AuthenticationError(f"S2S lease for {self.microservice} failed: {e}") from e

        return f"Bearer {response.text.strip()}"
