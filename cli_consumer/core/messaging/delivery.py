"""Inbound message abstraction."""

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from cli_consumer.core.exceptions import DeliveryAlreadySettledError

if TYPE_CHECKING:
    from pika.adapters.blocking_connection import BlockingChannel
    from pika.spec import Basic, BasicProperties


@runtime_checkable
class Delivery(Protocol):
    """A delivered message that must be settled exactly once."""

    def body(self) -> bytes: ...

    def ack(self, multiple: bool) -> None: ...

    def nack(self, multiple: bool, requeue: bool) -> None: ...


class PikaDelivery:
    """Delivery received through a pika ``on_message_callback``."""

    def __init__(
        self,
        channel: "BlockingChannel",
        method: "Basic.Deliver",
        properties: "BasicProperties",
        body: bytes,
    ) -> None:
        self.channel = channel
        self.method = method
        self.properties = properties
        self._body = body
        self.settled = False

    @property
    def delivery_tag(self) -> int:
        return self.method.delivery_tag

    def body(self) -> bytes:
        return self._body

    def _settle(self) -> None:
        if self.settled:
            raise DeliveryAlreadySettledError(self.delivery_tag)
        self.settled = True

    def ack(self, multiple: bool) -> None:
        self._settle()
        self.channel.basic_ack(delivery_tag=self.delivery_tag, multiple=multiple)

    def nack(self, multiple: bool, requeue: bool) -> None:
        self._settle()
        self.channel.basic_nack(
            delivery_tag=self.delivery_tag, multiple=multiple, requeue=requeue
        )
