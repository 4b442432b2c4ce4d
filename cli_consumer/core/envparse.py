"""Environment variable overrides for the consumer configuration."""

from typing import Dict, Mapping, Tuple

from cli_consumer.core.config import Config

# Environment variable -> (section, key)
ENV_OVERRIDES: Dict[str, Tuple[str, str]] = {
    "RMQ_HOST": ("rabbitmq", "host"),
    "RMQ_USER": ("rabbitmq", "username"),
    "RMQ_PASSWORD": ("rabbitmq", "password"),
    "RMQ_PORT": ("rabbitmq", "port"),
    "RMQ_VHOST": ("rabbitmq", "vhost"),
    "RMQ_QUEUE": ("rabbitmq", "queue"),
    "RMQ_EXCHANGE": ("exchange", "name"),
    "RMQ_ROUTING_KEY": ("queuesettings", "routingkey"),
    "RMQ_LOG_INFO": ("logs", "info"),
    "RMQ_LOG_ERR": ("logs", "error"),
}


def override_config(config: Config, environ: Mapping[str, str]) -> Config:
    """
    Apply environment overrides to a configuration.

    Only non-empty variables override their field. The given config is left
    untouched; a new, re-validated Config is returned.

    Args:
        config: Configuration loaded from file
        environ: Snapshot of the environment (usually ``os.environ``)

    Returns:
        Configuration with overrides applied
    """
    data = config.to_mapping()
    for variable, (section, key) in ENV_OVERRIDES.items():
        value = environ.get(variable, "")
        if value:
            data[section][key] = value

    return Config.from_mapping(data)
