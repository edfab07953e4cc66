"""Per-service configuration.

Each service (envelope container) has its own jurisdiction, case types and
transformation endpoint, plus feature flags controlling automation.
"""

import logging
from typing import Iterable, Optional

from pydantic import BaseModel, Field


logger = logging.getLogger(__name__)


class ServiceNotConfiguredError(Exception):
    """Raised when no configuration exists for a service."""
    pass


class ServiceConfigItem(BaseModel):
    """Configuration of a single service.

    Attributes:
        service: Service name, equal to the envelope container
        jurisdiction: CCD jurisdiction of the service
        transformation_url: Endpoint turning envelopes/exception records into case data
        case_type_ids: Service case types searched for existing cases
        auto_case_creation_enabled: Create cases automatically from NEW_APPLICATION envelopes
        allow_creating_case_before_payments_are_processed: Allow the callback to create
            a case while payment DCNs are still being processed
        case_definition_has_envelope_ids: Service case type has the bulkScanEnvelopes field
    """
    service: Optional[str] = None
    jurisdiction: Optional[str] = None
    transformation_url: Optional[str] = None
    case_type_ids: list[str] = Field(default_factory=list)
    auto_case_creation_enabled: bool = False
    allow_creating_case_before_payments_are_processed: bool = False
    case_definition_has_envelope_ids: bool = False


class ServiceConfigProvider:
    """
    Lookup of service configuration by service name.

    Usage:
        provider = ServiceConfigProvider(settings.SERVICE_CONFIG)
        config = provider.get_config("bulkscan")
    """

    def __init__(self, items: Iterable[ServiceConfigItem]):
        self._services = {item.service: item for item in items if item.service}

    def get_config(self, service: str) -> ServiceConfigItem:
        """
        Get configuration of a service.

        Args:
            service: Service name (case-sensitive, lower case by convention)

        Returns:
            ServiceConfigItem for the service

        Raises:
            ServiceNotConfiguredError: If the service is not configured
        """
        config = self._services.get(service)
        if config is None:
            raise ServiceNotConfiguredError(f"Service {service} is not configured")
        return config

    @property
    def services(self) -> list[str]:
        return sorted(self._services)
