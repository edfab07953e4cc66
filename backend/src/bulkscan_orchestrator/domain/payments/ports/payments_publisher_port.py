"""PaymentsPublisherPort - Port interface for publishing payment commands."""

from abc import ABC, abstractmethod

from ..models import CreatePaymentsCommand, UpdatePaymentsCommand


class PaymentsPublishingError(Exception):
    """Raised when a payment command could not be delivered."""
    pass


class PaymentsPublisherPort(ABC):

    @abstractmethod
    def send_create(self, command: CreatePaymentsCommand) -> None:
        """
        Publish a create-payments command.

        Raises:
            PaymentsPublishingError: If the command was not delivered
        """
        pass

    @abstractmethod
    def send_update(self, command: UpdatePaymentsCommand) -> None:
        """
        Publish an update-payments command.

        Raises:
            PaymentsPublishingError: If the command was not delivered
        """
        pass
