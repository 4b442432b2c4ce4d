"""External command construction and execution."""

from .executer import CommandExecuter, ExecutionOutcome, Executer
from .factory import Command, CommandFactory

__all__ = [
    "Command",
    "CommandFactory",
    "CommandExecuter",
    "ExecutionOutcome",
    "Executer",
]
