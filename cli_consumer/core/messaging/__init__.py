"""Messaging infrastructure for the consumer."""

from .channel import Channel, PikaChannel
from .consumer import Consumer
from .delivery import Delivery, PikaDelivery
from .initializer import initialize
from .uri import build_uri

__all__ = [
    "Channel",
    "PikaChannel",
    "Consumer",
    "Delivery",
    "PikaDelivery",
    "initialize",
    "build_uri",
]
