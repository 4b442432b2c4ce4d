"""Logging configuration for the consumer."""

import logging
import logging.config
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

import yaml

from cli_consumer.core.config import LogsConfig
from cli_consumer.core.exceptions import ConfigError

ERROR_LOGGER = "cli_consumer.errors"
INFO_LOGGER = "cli_consumer.info"

LOG_FORMAT = "%(asctime)s %(message)s"
LOG_DATE_FORMAT = "%Y/%m/%d %H:%M:%S"


def build_logging_config(logs: LogsConfig, verbose: bool = False) -> Dict[str, Any]:
    """
    Build a dictConfig mapping for the error and info logs.

    Args:
        logs: Log destinations from the consumer configuration
        verbose: Also write both logs to stdout

    Returns:
        Mapping accepted by logging.config.dictConfig
    """
    console = ["console"] if verbose else []
    handlers: Dict[str, Dict[str, Any]] = {
        "error_file": {
            "class": "logging.FileHandler",
            "formatter": "plain",
            "filename": logs.error,
            "mode": "a",
            "encoding": "utf-8",
        },
        "info_file": {
            "class": "logging.FileHandler",
            "formatter": "plain",
            "filename": logs.info,
            "mode": "a",
            "encoding": "utf-8",
        },
    }
    if verbose:
        handlers["console"] = {
            "class": "logging.StreamHandler",
            "formatter": "plain",
            "stream": "ext://sys.stdout",
        }

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "plain": {"format": LOG_FORMAT, "datefmt": LOG_DATE_FORMAT},
        },
        "handlers": handlers,
        "loggers": {
            ERROR_LOGGER: {
                "level": "INFO",
                "handlers": ["error_file", *console],
                "propagate": False,
            },
            INFO_LOGGER: {
                "level": "INFO",
                "handlers": ["info_file", *console],
                "propagate": False,
            },
            # Metric lines and any other module logger end up in the info log
            "cli_consumer": {
                "level": "INFO",
                "handlers": ["info_file"],
                "propagate": False,
            },
            "pika": {"level": "WARNING", "handlers": ["error_file"], "propagate": False},
        },
    }


def setup_logging(
    logs: LogsConfig,
    verbose: bool = False,
    config_path: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
    env_key: str = "LOG_CFG",
) -> Tuple[logging.Logger, logging.Logger]:
    """
    Setup the error and info loggers.

    A YAML dictConfig file named by ``env_key`` in ``environ`` (or by
    ``config_path``) replaces the built-in configuration entirely; it must define the
    ``cli_consumer.errors`` and ``cli_consumer.info`` loggers.

    Args:
        logs: Log destinations from the consumer configuration
        verbose: Also write both logs to stdout
        config_path: Path to a YAML logging config file
        environ: Snapshot of the environment (usually ``os.environ``)
        env_key: Environment variable name for config path override

    Returns:
        Tuple of (error logger, info logger)
    """
    path_str = (environ or {}).get(env_key) or config_path

    try:
        if path_str:
            path = Path(path_str)
            with open(path, "r") as f:
                config = yaml.safe_load(f.read())
        else:
            config = build_logging_config(logs, verbose)
        logging.config.dictConfig(config)
    except (OSError, ValueError, yaml.YAMLError) as e:
        raise ConfigError(f"Failed to configure logging: {e}") from e

    return get_error_logger(), get_info_logger()


def get_error_logger() -> logging.Logger:
    return logging.getLogger(ERROR_LOGGER)


def get_info_logger() -> logging.Logger:
    return logging.getLogger(INFO_LOGGER)
