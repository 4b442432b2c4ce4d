"""Broker channel operations needed to prepare a queue for consumption."""

from typing import TYPE_CHECKING, Any, Dict, Optional, Protocol, runtime_checkable

if TYPE_CHECKING:
    from pika.adapters.blocking_connection import BlockingChannel


@runtime_checkable
class Channel(Protocol):
    """Minimal channel surface used by the initializer."""

    def qos(self, prefetch_count: int, prefetch_size: int, global_qos: bool) -> None: ...

    def queue_declare(
        self,
        name: str,
        durable: bool,
        auto_delete: bool,
        exclusive: bool,
        no_wait: bool,
        arguments: Dict[str, Any],
    ) -> Any: ...

    def exchange_declare(
        self,
        name: str,
        kind: str,
        durable: bool,
        auto_delete: bool,
        internal: bool,
        no_wait: bool,
        arguments: Dict[str, Any],
    ) -> None: ...

    def queue_bind(
        self,
        name: str,
        key: str,
        exchange: str,
        no_wait: bool,
        arguments: Dict[str, Any],
    ) -> None: ...


class PikaChannel:
    """Channel backed by a pika BlockingChannel.

    Blocking channels always wait for the broker's confirmation, so
    ``no_wait`` must be False.
    """

    def __init__(self, channel: "BlockingChannel") -> None:
        self.channel = channel

    @staticmethod
    def _check_no_wait(no_wait: bool) -> None:
        if no_wait:
            raise ValueError("Blocking channels cannot skip broker confirmation")

    def qos(self, prefetch_count: int, prefetch_size: int, global_qos: bool) -> None:
        self.channel.basic_qos(
            prefetch_size=prefetch_size,
            prefetch_count=prefetch_count,
            global_qos=global_qos,
        )

    def queue_declare(
        self,
        name: str,
        durable: bool,
        auto_delete: bool,
        exclusive: bool,
        no_wait: bool,
        arguments: Optional[Dict[str, Any]],
    ) -> Any:
        self._check_no_wait(no_wait)
        return self.channel.queue_declare(
            queue=name,
            durable=durable,
            exclusive=exclusive,
            auto_delete=auto_delete,
            arguments=arguments or None,
        )

    def exchange_declare(
        self,
        name: str,
        kind: str,
        durable: bool,
        auto_delete: bool,
        internal: bool,
        no_wait: bool,
        arguments: Optional[Dict[str, Any]],
    ) -> None:
        self._check_no_wait(no_wait)
        self.channel.exchange_declare(
            exchange=name,
            exchange_type=kind,
            durable=durable,
            auto_delete=auto_delete,
            internal=internal,
            arguments=arguments or None,
        )

    def queue_bind(
        self,
        name: str,
        key: str,
        exchange: str,
        no_wait: bool,
        arguments: Optional[Dict[str, Any]],
    ) -> None:
        self._check_no_wait(no_wait)
        self.channel.queue_bind(
            queue=name,
            exchange=exchange,
            routing_key=key,
            arguments=arguments or None,
        )
