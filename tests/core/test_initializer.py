"""Tests for channel initialization."""

from unittest.mock import Mock

import pytest
from pika.exceptions import AMQPChannelError

from cli_consumer.core.config import Config
from cli_consumer.core.exceptions import ChannelSetupError
from cli_consumer.core.messaging.channel import Channel
from cli_consumer.core.messaging.initializer import initialize


@pytest.fixture
def channel():
    return Mock(spec=Channel)


class TestInitialize:
    """Test the channel setup sequence."""

    def test_set_qos_fails(self, config, channel, err_logger, info_logger):
        """A QoS failure stops before any declaration."""
        channel.qos.side_effect = AMQPChannelError("Error occured")

        with pytest.raises(ChannelSetupError) as exc_info:
            initialize(config, channel, err_logger, info_logger)

        channel.qos.assert_called_once_with(3, 0, True)
        channel.queue_declare.assert_not_called()
        channel.exchange_declare.assert_not_called()
        channel.queue_bind.assert_not_called()
        assert exc_info.value.stage == "qos"
        assert "Failed to set QoS" in str(exc_info.value)
        err_logger.error.assert_called_once()

    def test_set_qos_succeeds(self, config, channel, err_logger, info_logger):
        """After QoS the queue is declared."""
        channel.queue_declare.side_effect = AMQPChannelError("error")

        with pytest.raises(ChannelSetupError):
            initialize(config, channel, err_logger, info_logger)

        channel.qos.assert_called_once_with(3, 0, True)
        channel.queue_declare.assert_called_once_with(
            "worker", True, False, False, False, {}
        )

    def test_declare_queue_fails(self, config, channel, err_logger, info_logger):
        """A queue declaration failure stops before the exchange."""
        channel.queue_declare.side_effect = AMQPChannelError("error")

        with pytest.raises(ChannelSetupError) as exc_info:
            initialize(config, channel, err_logger, info_logger)

        channel.exchange_declare.assert_not_called()
        channel.queue_bind.assert_not_called()
        assert exc_info.value.stage == "queue_declare"
        assert exc_info.value.queue == "worker"

    def test_declare_queue_succeeds(self, config, channel, err_logger, info_logger):
        """After the queue the configured exchange is declared."""
        channel.exchange_declare.side_effect = AMQPChannelError("error")

        with pytest.raises(ChannelSetupError):
            initialize(config, channel, err_logger, info_logger)

        channel.exchange_declare.assert_called_once_with(
            "worker", "test", True, False, False, False, {}
        )

    def test_declare_exchange_fails(self, config, channel, err_logger, info_logger):
        """An exchange declaration failure stops before binding."""
        channel.exchange_declare.side_effect = AMQPChannelError("error")

        with pytest.raises(ChannelSetupError) as exc_info:
            initialize(config, channel, err_logger, info_logger)

        channel.queue_bind.assert_not_called()
        assert exc_info.value.stage == "exchange_declare"

    def test_bind_queue_fails(self, config, channel, err_logger, info_logger):
        """A binding failure is raised."""
        channel.queue_bind.side_effect = AMQPChannelError("error")

        with pytest.raises(ChannelSetupError) as exc_info:
            initialize(config, channel, err_logger, info_logger)

        channel.queue_bind.assert_called_once_with("worker", "", "worker", False, {})
        assert exc_info.value.stage == "queue_bind"
        assert isinstance(exc_info.value.__cause__, AMQPChannelError)

    def test_non_broker_error_is_wrapped(self, config, channel, err_logger, info_logger):
        """Errors other than AMQP errors are logged and wrapped with their stage."""
        channel.qos.side_effect = RuntimeError("Error occured")

        with pytest.raises(ChannelSetupError) as exc_info:
            initialize(config, channel, err_logger, info_logger)

        assert exc_info.value.stage == "qos"
        assert isinstance(exc_info.value.__cause__, RuntimeError)
        channel.queue_declare.assert_not_called()
        err_logger.error.assert_called_once()

    def test_rejected_argument_is_wrapped(self, config, channel, err_logger, info_logger):
        """An adapter refusing its arguments still fails the stage."""
        channel.exchange_declare.side_effect = ValueError("no_wait not supported")

        with pytest.raises(ChannelSetupError) as exc_info:
            initialize(config, channel, err_logger, info_logger)

        assert exc_info.value.stage == "exchange_declare"
        channel.queue_bind.assert_not_called()
        err_logger.error.assert_called_once()

    def test_each_stage_logs_success(self, config, channel, err_logger, info_logger):
        initialize(config, channel, err_logger, info_logger)

        info_logger.info.assert_any_call("Succeeded setting QoS.")
        info_logger.info.assert_any_call("Succeeded declaring queue.")
        info_logger.info.assert_any_call("Succeeded declaring exchange.")
        info_logger.info.assert_any_call("Succeeded binding queue.")

    def test_bind_queue_succeeds(self, config, channel, err_logger, info_logger):
        """All four steps succeed."""
        result = initialize(config, channel, err_logger, info_logger)

        assert result is None
        channel.qos.assert_called_once_with(3, 0, True)
        channel.queue_declare.assert_called_once_with(
            "worker", True, False, False, False, {}
        )
        channel.exchange_declare.assert_called_once_with(
            "worker", "test", True, False, False, False, {}
        )
        channel.queue_bind.assert_called_once_with("worker", "", "worker", False, {})
        err_logger.error.assert_not_called()

    def test_no_exchange_configured(self, config_text, channel, err_logger, info_logger):
        """Without an exchange name only QoS and the queue are set up."""
        config = Config.from_string(config_text.replace("name=worker", "name="))

        initialize(config, channel, err_logger, info_logger)

        channel.qos.assert_called_once()
        channel.queue_declare.assert_called_once()
        channel.exchange_declare.assert_not_called()
        channel.queue_bind.assert_not_called()

    def test_routing_key_is_used_for_binding(
        self, config_text, channel, err_logger, info_logger
    ):
        """The configured routing key is passed to the binding."""
        config = Config.from_string(
            config_text + "\n[queuesettings]\nroutingkey=orders.*\n"
        )

        initialize(config, channel, err_logger, info_logger)

        channel.queue_bind.assert_called_once_with(
            "worker", "orders.*", "worker", False, {}
        )
