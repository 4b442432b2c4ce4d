"""
RabbitMQ CLI consumer

Consumes messages from a queue and passes each one, base64 encoded, as the
last argument to an external executable.
"""

import os
import sys

import click
from pika.exceptions import AMQPError

from cli_consumer import __version__
from cli_consumer.command import CommandExecuter, CommandFactory
from cli_consumer.core.config import load_config
from cli_consumer.core.envparse import override_config
from cli_consumer.core.exceptions import ConfigError, ConsumerError
from cli_consumer.core.logging import setup_logging
from cli_consumer.core.messaging import Consumer


@click.command()
@click.version_option(version=__version__, prog_name="rabbitmq-cli-consumer")
@click.option(
    "-e",
    "--executable",
    required=True,
    help="Location of executable, with optional fixed arguments.",
)
@click.option(
    "-c",
    "--configuration",
    "configuration",
    required=True,
    type=click.Path(dir_okay=False),
    help="Location of configuration file.",
)
@click.option("-V", "--verbose", is_flag=True, help="Enable verbose mode (logs to stdout and stderr).")
@click.option("-C", "--compression", is_flag=True, help="Enable compressed messages.")
def main(executable: str, configuration: str, verbose: bool, compression: bool) -> None:
    """Consume a RabbitMQ queue and run EXECUTABLE for every message."""
    try:
        environ = dict(os.environ)
        config = override_config(load_config(configuration), environ)
        err_logger, info_logger = setup_logging(
            config.logs, verbose=verbose, environ=environ
        )
    except ConfigError as e:
        click.echo(f"Failed parsing configuration: {e}", err=True)
        sys.exit(1)

    info_logger.info("Started")

    try:
        factory = CommandFactory.from_string(executable)
    except ValueError as e:
        err_logger.error("Invalid executable %r: %s", executable, e)
        sys.exit(1)

    executer = CommandExecuter(err_logger, info_logger, verbose=verbose)

    try:
        consumer = Consumer.connect(
            config,
            factory,
            executer,
            err_logger,
            info_logger,
            compression=compression or config.rabbitmq.compression,
        )
    except ConsumerError as e:
        err_logger.error("Failed creating consumer: %s", e)
        click.echo(f"Failed creating consumer: {e}", err=True)
        sys.exit(1)

    try:
        consumer.consume()
    except (AMQPError, ConsumerError) as e:
        err_logger.error("Consumer stopped: %s", e)
        click.echo(f"Consumer stopped: {e}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
