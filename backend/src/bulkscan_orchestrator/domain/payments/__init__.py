"""Payments domain module."""

from .models import CreatePaymentsCommand, UpdatePaymentsCommand
from .ports import PaymentsPublisherPort, PaymentsPublishingError

__all__ = [
    "CreatePaymentsCommand",
    "UpdatePaymentsCommand",
    "PaymentsPublisherPort",
    "PaymentsPublishingError",
]
