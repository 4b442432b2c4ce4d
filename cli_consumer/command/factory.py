"""Builds the command invoked for each message."""

import shlex
import subprocess
from dataclasses import dataclass, field
from typing import Sequence, Tuple


@dataclass(frozen=True)
class Command:
    """An executable, its fixed arguments and the message payload."""

    executable: str
    args: Tuple[str, ...] = ()
    payload: str = ""

    @property
    def argv(self) -> Tuple[str, ...]:
        return (self.executable, *self.args, self.payload)

    def combined_output(self) -> bytes:
        """
        Run the command and return stdout and stderr interleaved.

        Raises:
            subprocess.CalledProcessError: The command exited non-zero
            OSError: The command could not be started
        """
        return subprocess.run(
            self.argv,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            check=True,
        ).stdout

    def __str__(self) -> str:
        return shlex.join(self.argv)


@dataclass(frozen=True)
class CommandFactory:
    """Template for the per-message command."""

    executable: str
    args: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        # Accept any sequence but store an immutable copy
        object.__setattr__(self, "args", tuple(self.args))

    @classmethod
    def from_string(cls, base_command: str) -> "CommandFactory":
        """Split a command line such as ``"php app.php --env=prod"``."""
        parts: Sequence[str] = shlex.split(base_command)
        if not parts:
            raise ValueError("Executable must not be empty")
        return cls(parts[0], tuple(parts[1:]))

    def create(self, payload: str) -> Command:
        return Command(self.executable, self.args, payload)
