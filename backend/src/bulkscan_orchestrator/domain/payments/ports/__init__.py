from .payments_publisher_port import PaymentsPublisherPort, PaymentsPublishingError

__all__ = ["PaymentsPublisherPort", "PaymentsPublishingError"]
