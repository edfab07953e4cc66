"""The bulkScanEnvelopes collection: which envelopes created or updated a case."""

from typing import Any, Optional

from ..service_config import ServiceConfigProvider, ServiceNotConfiguredError


class EnvelopeReferenceHelper:

    def __init__(self, service_config_provider: ServiceConfigProvider):
        self.service_config_provider = service_config_provider

    def service_supports_envelope_references(self, service: str) -> bool:
        """True if the service case definition has the bulkScanEnvelopes field."""
        try:
            return self.service_config_provider.get_config(service).case_definition_has_envelope_ids
        except ServiceNotConfiguredError:
            return False

    @staticmethod
    def single_envelope_reference_list(envelope_id: str, action: str) -> list[dict[str, Any]]:
        return [envelope_reference(envelope_id, action)]

    @staticmethod
    def parse_envelope_references(raw_references: Optional[list[Any]]) -> list[dict[str, Any]]:
        """Keep well-formed collection elements of an existing bulkScanEnvelopes value."""
        return [
            {"value": {"id": ref["value"].get("id"), "action": ref["value"].get("action")}}
            for ref in raw_references or []
            if isinstance(ref, dict) and isinstance(ref.get("value"), dict)
        ]


def envelope_reference(envelope_id: str, action: str) -> dict[str, Any]:
    return {"value": {"id": envelope_id, "action": action}}
