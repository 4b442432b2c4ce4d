"""One-shot channel setup: QoS, queue, optional exchange and binding."""

import logging

from cli_consumer.core.config import Config
from cli_consumer.core.exceptions import ChannelSetupError
from cli_consumer.core.messaging.channel import Channel


def _fail(
    stage: str, description: str, error: Exception, queue: str, err_logger: logging.Logger
) -> ChannelSetupError:
    message = f"Failed to {description}: {error}"
    err_logger.error(message)
    return ChannelSetupError(stage, message, queue=queue)


def initialize(
    config: Config,
    channel: Channel,
    err_logger: logging.Logger,
    info_logger: logging.Logger,
) -> None:
    """
    Prepare a channel for consumption.

    Sets QoS, declares the queue and, when an exchange name is configured,
    declares the exchange and binds the queue to it. Stops at the first
    failing step.

    Args:
        config: Consumer configuration
        channel: Channel to prepare
        err_logger: Error log
        info_logger: Info log

    Raises:
        ChannelSetupError: A step was rejected; ``stage`` names which one
    """
    queue = config.rabbitmq.queue

    info_logger.info("Setting QoS... ")
    try:
        channel.qos(config.prefetch.count, 0, config.prefetch.global_)
    except Exception as e:
        raise _fail("qos", "set QoS", e, queue, err_logger) from e
    info_logger.info("Succeeded setting QoS.")

    info_logger.info('Declaring queue "%s"...', queue)
    try:
        channel.queue_declare(queue, True, False, False, False, {})
    except Exception as e:
        raise _fail("queue_declare", "declare queue", e, queue, err_logger) from e
    info_logger.info("Succeeded declaring queue.")

    exchange = config.exchange
    if not exchange.name:
        return

    info_logger.info('Declaring exchange "%s"...', exchange.name)
    try:
        channel.exchange_declare(
            exchange.name,
            exchange.type,
            exchange.durable,
            exchange.autodelete,
            False,
            False,
            {},
        )
    except Exception as e:
        raise _fail("exchange_declare", "declare exchange", e, queue, err_logger) from e
    info_logger.info("Succeeded declaring exchange.")

    info_logger.info('Binding queue "%s" to exchange "%s"...', queue, exchange.name)
    try:
        channel.queue_bind(
            queue, config.queuesettings.routingkey, exchange.name, False, {}
        )
    except Exception as e:
        raise _fail("queue_bind", "bind queue to exchange", e, queue, err_logger) from e
    info_logger.info("Succeeded binding queue.")
