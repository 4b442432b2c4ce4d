"""Exception hierarchy for the consumer."""

from typing import Optional


class ConsumerError(Exception):
    """Base exception for all consumer errors."""


class ConfigError(ConsumerError):
    """Configuration could not be loaded or is invalid."""


class BrokerConnectionError(ConsumerError):
    """Connecting to the broker or opening a channel failed."""


class ChannelSetupError(ConsumerError):
    """A channel setup stage was rejected by the broker."""

    def __init__(self, stage: str, message: str, queue: Optional[str] = None) -> None:
        self.stage = stage
        self.queue = queue
        super().__init__(message)


class DeliveryAlreadySettledError(ConsumerError):
    """A delivery was acknowledged or rejected more than once."""

    def __init__(self, delivery_tag: int) -> None:
        self.delivery_tag = delivery_tag
        super().__init__(f"Delivery {delivery_tag} has already been settled")
