"""Payments HTTP adapter: sends payment commands to the payments processor API."""

import logging
from typing import Any, Optional

import httpx

from ...domain.payments.models import CreatePaymentsCommand, UpdatePaymentsCommand
from ...domain.payments.ports import PaymentsPublisherPort, PaymentsPublishingError


logger = logging.getLogger(__name__)


class HttpPaymentsPublisher(PaymentsPublisherPort):

    def __init__(self, base_url: str, timeout: float = 30.0, client: Optional[httpx.Client] = None):
        self.base_url = base_url.rstrip("/")
        self.client = client or httpx.Client(timeout=timeout)

    def send_create(self, command: CreatePaymentsCommand) -> None:
        self._send("POST", command.to_dict(), f"envelope {command.envelope_id}")

    def send_update(self, command: UpdatePaymentsCommand) -> None:
        self._send("PUT", command.to_dict(), f"exception record {command.exception_record_ref}")

    def _send(self, method: str, payload: dict[str, Any], description: str) -> None:
        try:
            response = self.client.request(method, f"{self.base_url}/payments", json=payload)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise PaymentsPublishingError(
                f"Payments API responded {e.response.status_code} to {method} for {description}"
            ) from e
        except httpx.RequestError as e:
            raise PaymentsPublishingError(f"Failed to send payments {method} for {description}: {e}") from e

        logger.info(f"Sent payments {method} for {description}")
