"""RabbitMQ consumer that hands every message to an external command."""

__version__ = "1.0.0"
