"""Consumes deliveries and hands each one to an external command."""

import base64
import logging
import zlib
from typing import TYPE_CHECKING, Optional

import pika
from pika.exceptions import AMQPConnectionError, AMQPError

from cli_consumer.command.executer import Executer
from cli_consumer.command.factory import CommandFactory
from cli_consumer.core.config import Config
from cli_consumer.core.exceptions import BrokerConnectionError
from cli_consumer.core.messaging.channel import PikaChannel
from cli_consumer.core.messaging.delivery import Delivery, PikaDelivery
from cli_consumer.core.messaging.initializer import initialize
from cli_consumer.core.messaging.uri import build_uri
from cli_consumer.core.observability.metrics import (
    log_connection_event,
    log_counter_increment,
    log_processing_event,
)

if TYPE_CHECKING:
    from pika.adapters.blocking_connection import BlockingChannel

CONSUMER_TAG = "rabbitmq-cli-consumer"


class Consumer:
    """Runs the configured command for every delivery and settles it."""

    def __init__(
        self,
        executer: Executer,
        factory: CommandFactory,
        err_logger: logging.Logger,
        info_logger: logging.Logger,
        compression: bool = False,
        queue: Optional[str] = None,
        channel: Optional["BlockingChannel"] = None,
        connection: Optional[pika.BlockingConnection] = None,
    ) -> None:
        self.executer = executer
        self.factory = factory
        self.err_logger = err_logger
        self.info_logger = info_logger
        self.compression = compression
        self.queue = queue
        self.channel = channel
        self.connection = connection

    @classmethod
    def connect(
        cls,
        config: Config,
        factory: CommandFactory,
        executer: Executer,
        err_logger: logging.Logger,
        info_logger: logging.Logger,
        compression: bool = False,
    ) -> "Consumer":
        """
        Connect to the broker and prepare the queue.

        Raises:
            BrokerConnectionError: The connection or channel could not be opened
            ChannelSetupError: Setting up the channel failed
        """
        rabbitmq = config.rabbitmq
        uri = build_uri(
            rabbitmq.username,
            rabbitmq.password,
            rabbitmq.host,
            rabbitmq.port,
            rabbitmq.vhost,
        )

        info_logger.info("Connecting RabbitMQ...")
        try:
            connection = pika.BlockingConnection(pika.URLParameters(uri))
        except AMQPConnectionError as e:
            err_logger.error("Failed connecting RabbitMQ: %s", e)
            log_connection_event("connection_failed", "rabbitmq", host=rabbitmq.host)
            raise BrokerConnectionError(f"Failed connecting RabbitMQ: {e}") from e
        info_logger.info("Connected.")
        log_connection_event("connected", "rabbitmq", host=rabbitmq.host)

        info_logger.info("Opening channel...")
        try:
            channel = connection.channel()
        except AMQPError as e:
            err_logger.error("Failed to open channel: %s", e)
            connection.close()
            raise BrokerConnectionError(f"Failed to open channel: {e}") from e
        info_logger.info("Done.")

        try:
            initialize(config, PikaChannel(channel), err_logger, info_logger)
        except Exception:
            connection.close()
            raise

        return cls(
            executer,
            factory,
            err_logger,
            info_logger,
            compression=compression,
            queue=rabbitmq.queue,
            channel=channel,
            connection=connection,
        )

    def _settle(self, delivery: Delivery, success: bool) -> None:
        try:
            if success:
                delivery.ack(True)
            else:
                delivery.nack(True, True)
        except Exception as e:
            action = "acknowledge" if success else "reject"
            self.err_logger.error("Could not %s message: %s", action, e)
            log_counter_increment(
                "processing_errors_total", labels={"error_type": "disposition"}
            )

    def process_message(self, delivery: Delivery) -> None:
        """Run the command for one delivery, then ack or nack-and-requeue it."""
        tag = getattr(delivery, "delivery_tag", None)
        body = delivery.body()

        if self.compression:
            self.info_logger.info("Compressed message, decompressing...")
            try:
                body = zlib.decompress(body)
            except zlib.error as e:
                self.err_logger.error("Could not decompress message: %s", e)
                log_counter_increment(
                    "processing_errors_total", labels={"error_type": "decompression"}
                )
                log_processing_event("processing_failed", tag, error_type="decompression")
                self._settle(delivery, False)
                return

        payload = base64.b64encode(body).decode("ascii")
        command = self.factory.create(payload)

        try:
            success = self.executer.execute(command)
        except Exception as e:
            self.err_logger.error("Error executing command: %s", e)
            success = False

        log_counter_increment(
            "messages_processed_total",
            labels={"status": "success" if success else "failure"},
        )
        log_processing_event(
            "processing_completed" if success else "processing_failed", tag
        )
        self._settle(delivery, success)

    def _on_message(self, channel, method, properties, body) -> None:
        self.process_message(PikaDelivery(channel, method, properties, body))

    def consume(self) -> None:
        """Process deliveries until interrupted. Always closes the connection."""
        if self.channel is None or self.queue is None:
            raise BrokerConnectionError("Consumer is not connected")

        self.info_logger.info("Registering consumer... ")
        try:
            self.channel.basic_consume(
                queue=self.queue,
                on_message_callback=self._on_message,
                auto_ack=False,
                consumer_tag=CONSUMER_TAG,
            )
            self.info_logger.info("Succeeded registering consumer.")
            self.info_logger.info("Waiting for messages...")
            self.channel.start_consuming()
        except KeyboardInterrupt:
            self.info_logger.info("Received interrupt signal, stopping consumer...")
            self.channel.stop_consuming()
        except AMQPError as e:
            self.err_logger.error("Consuming from %s failed: %s", self.queue, e)
            raise
        finally:
            self.close()

    def close(self) -> None:
        try:
            if self.connection and not self.connection.is_closed:
                self.connection.close()
                self.info_logger.info("RabbitMQ connection closed")
        except AMQPError as e:
            self.err_logger.error("Error closing RabbitMQ connection: %s", e)
