"""Core modules: configuration, logging and messaging."""

from .logging import ERROR_LOGGER, INFO_LOGGER, setup_logging

__all__ = ["setup_logging", "ERROR_LOGGER", "INFO_LOGGER"]
