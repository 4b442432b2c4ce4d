"""Runs commands to completion and reports whether they succeeded."""

import logging
import subprocess
import time
from dataclasses import dataclass
from typing import Optional, Protocol, runtime_checkable

from cli_consumer.command.factory import Command
from cli_consumer.core.observability.metrics import log_histogram_record


@dataclass(frozen=True)
class ExecutionOutcome:
    """Result of one command run."""

    success: bool
    output: bytes
    returncode: Optional[int]
    duration_ms: float
    error: Optional[str] = None


@runtime_checkable
class Executer(Protocol):
    def execute(self, command: Command) -> bool: ...


class CommandExecuter:
    """Executes commands in a subprocess, blocking until they exit."""

    def __init__(
        self,
        err_logger: logging.Logger,
        info_logger: logging.Logger,
        verbose: bool = False,
    ) -> None:
        self.err_logger = err_logger
        self.info_logger = info_logger
        self.verbose = verbose

    def run(self, command: Command) -> ExecutionOutcome:
        """Run the command and capture its outcome. Never raises for command failures."""
        start_time = time.time()
        try:
            output = command.combined_output()
        except subprocess.CalledProcessError as e:
            return ExecutionOutcome(
                success=False,
                output=e.output or b"",
                returncode=e.returncode,
                duration_ms=(time.time() - start_time) * 1000,
                error=str(e),
            )
        except OSError as e:
            return ExecutionOutcome(
                success=False,
                output=b"",
                returncode=None,
                duration_ms=(time.time() - start_time) * 1000,
                error=str(e),
            )

        return ExecutionOutcome(
            success=True,
            output=output,
            returncode=0,
            duration_ms=(time.time() - start_time) * 1000,
        )

    def execute(self, command: Command) -> bool:
        self.info_logger.info("Processing message...")
        outcome = self.run(command)

        log_histogram_record(
            "command_duration_ms",
            outcome.duration_ms,
            labels={"status": "success" if outcome.success else "failure"},
        )

        output = outcome.output.decode("utf-8", errors="replace")
        if not outcome.success:
            self.info_logger.info("Failed. Check error log for details.")
            self.err_logger.error("Failed: %s", output)
            self.err_logger.error("Error: %s", outcome.error)
            return False

        if self.verbose and output:
            self.info_logger.info("Output: %s", output)
        self.info_logger.info("Processed!")
        return True
