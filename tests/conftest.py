"""Shared fixtures."""

import logging
from unittest.mock import Mock

import pytest

from cli_consumer.core.config import Config

CONFIG_TEXT = """[rabbitmq]
host=localhost
username=ricbra
password=t3st
vhost=staging
queue=worker
port=123

[prefetch]
count=3
global=On

[exchange]
name=worker
autodelete=Off
type=test
durable=On

[logs]
error=a
info=b
"""


@pytest.fixture
def config_text():
    return CONFIG_TEXT


@pytest.fixture
def config():
    """Configuration with an exchange and no routing key."""
    return Config.from_string(CONFIG_TEXT)


@pytest.fixture
def err_logger():
    return Mock(spec=logging.Logger)


@pytest.fixture
def info_logger():
    return Mock(spec=logging.Logger)
