from .http_payments_publisher import HttpPaymentsPublisher

__all__ = ["HttpPaymentsPublisher"]
