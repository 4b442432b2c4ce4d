"""Consumer configuration.

The configuration lives in an INI file with one section per concern::

    [rabbitmq]
    host=localhost
    username=guest
    password=guest
    vhost=/
    port=5672
    queue=worker
    compression=Off

    [prefetch]
    count=3
    global=On

    [exchange]
    name=worker
    type=direct
    durable=On
    autodelete=Off

    [queuesettings]
    routingkey=worker

    [logs]
    error=/var/log/rabbitmq-cli-consumer/error.log
    info=/var/log/rabbitmq-cli-consumer/info.log
"""

import configparser
from pathlib import Path
from typing import Any, Dict, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from cli_consumer.core.exceptions import ConfigError


class RabbitMqConfig(BaseModel):
    """Broker connection settings."""

    model_config = ConfigDict(frozen=True)

    host: str = "localhost"
    username: str = "guest"
    password: str = "guest"
    port: int = 5672
    vhost: str = "/"
    queue: str
    compression: bool = False


class PrefetchConfig(BaseModel):
    """Quality of service settings."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    count: int = 0
    global_: bool = Field(default=False, alias="global")


class ExchangeConfig(BaseModel):
    """Exchange to declare and bind the queue to. Empty name means none."""

    model_config = ConfigDict(frozen=True)

    name: str = ""
    type: str = "direct"
    durable: bool = False
    autodelete: bool = False


class QueueSettingsConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    routingkey: str = ""


class LogsConfig(BaseModel):
    """Destinations of the error and info logs."""

    model_config = ConfigDict(frozen=True)

    error: str
    info: str


class Config(BaseModel):
    """Complete consumer configuration."""

    model_config = ConfigDict(frozen=True)

    rabbitmq: RabbitMqConfig
    prefetch: PrefetchConfig = PrefetchConfig()
    exchange: ExchangeConfig = ExchangeConfig()
    queuesettings: QueueSettingsConfig = QueueSettingsConfig()
    logs: LogsConfig

    @classmethod
    def from_mapping(cls, data: Dict[str, Any]) -> "Config":
        """Validate a section mapping into a Config."""
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration: {e}") from e

    @classmethod
    def from_string(cls, text: str) -> "Config":
        """Parse INI text into a Config."""
        parser = configparser.ConfigParser(interpolation=None)
        try:
            parser.read_string(text)
        except configparser.Error as e:
            raise ConfigError(f"Could not parse configuration: {e}") from e

        return cls.from_mapping(
            {section: dict(parser.items(section)) for section in parser.sections()}
        )

    def to_mapping(self) -> Dict[str, Any]:
        """Section mapping using the INI key names."""
        return self.model_dump(by_alias=True)


def load_config(path: Union[str, Path]) -> Config:
    """Load configuration from an INI file."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Could not read configuration file {path}: {e}") from e

    return Config.from_string(text)
