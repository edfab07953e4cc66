"""IDAM HTTP adapter: system user login and user details."""

import logging
from typing import Optional

import httpx

from ...domain.auth.ports import AuthenticationError, IdamClientPort, UserDetails


logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


class IdamClient(IdamClientPort):
    """
    OAuth2 password grant against IDAM.

    Usage:
        idam = IdamClient(settings.IDAM_API_URL, settings.IDAM_CLIENT_ID, ...)
        token = idam.authenticate_user("system.user@example.com", "password")
    """

    def __init__(
        self,
        base_url: str,
        client_id: str,
        client_secret: str,
        redirect_uri: str,
        timeout: float = 30.0,
        client: Optional[httpx.Client] = None
    ):
        self.base_url = base_url.rstrip("/")
        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_uri = redirect_uri
        self.client = client or httpx.Client(timeout=timeout)

    def authenticate_user(self, username: str, password: str) -> str:
        try:
            response = self.client.post(
                f"{self.base_url}/o/token",
                data={
                    "grant_type": "password",
                    "username": username,
                    "password": password,
                    "client_id": self.client_id,
                    "client_secret": self.client_secret,
                    "redirect_uri": self.redirect_uri,
                    "scope": "openid profile roles",
                },
            )
            response.raise_for_status()
            access_token = response.json()["access_token"]
        except httpx.HTTPStatusError as e:
            raise AuthenticationError(
                f"IDAM rejected login of {username} with status {e.response.status_code}"
            ) from e
        except (httpx.RequestError, KeyError, ValueError) as e:
            raise AuthenticationError(f"Failed to log in {username}: {e}") from e

        return f"{BEARER_PREFIX}{access_token}"

    def get_user_details(self, user_token: str) -> UserDetails:
        try:
            response = self.client.get(
                f"{self.base_url}/o/userinfo",
                headers={"Authorization": user_token},
            )
            response.raise_for_status()
            body = response.json()
        except httpx.HTTPStatusError as e:
            raise AuthenticationError(
                f"IDAM rejected user info request with status {e.response.status_code}"
            ) from e
        except (httpx.RequestError, ValueError) as e:
            raise AuthenticationError(f"Failed to retrieve user info: {e}") from e

        if not body.get("uid"):
            raise AuthenticationError("IDAM user info has no uid")
        return UserDetails(id=body["uid"], email=body.get("sub"))
