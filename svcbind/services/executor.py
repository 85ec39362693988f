"""Process executor for cluster and service-catalog CLI calls.

This module provides:
- Interface for running a CLI command and capturing its output
- Subprocess implementation used by the command line tool
"""

import logging
import subprocess
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Sequence


logger = logging.getLogger(__name__)


class ExecutionError(RuntimeError):
    """Raised when a CLI process could not be started or did not finish."""
    pass


@dataclass
class ExecResult:
    """Result of running a CLI command.

    Attributes:
        exit_code: Process exit status
        stdout: Captured standard output
        stderr: Captured standard error
    """
    exit_code: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.exit_code == 0


class ProcessExecutorInterface(ABC):
    """Abstract interface for invoking external CLIs."""

    @abstractmethod
    def run(self, args: Sequence[str]) -> ExecResult:
        """Run a command and capture its output.

        Args:
            args: Command and arguments, e.g. ["kubectl", "get", "svc"]

        Returns:
            ExecResult with exit code, stdout and stderr

        Raises:
            ExecutionError: If the process could not be run
        """
        pass


class SubprocessExecutor(ProcessExecutorInterface):
    """Runs commands with subprocess.run."""

    def __init__(self, timeout: Optional[int] = None):
        self.timeout = timeout

    def run(self, args: Sequence[str]) -> ExecResult:
        command = list(args)
        logger.debug("Running %s", " ".join(command))
        try:
            result = subprocess.run(
                command,
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired as e:
            raise ExecutionError(
                f"{command[0]} timed out after {self.timeout} seconds"
            ) from e
        except FileNotFoundError as e:
            raise ExecutionError(f"{command[0]} not found") from e
        except OSError as e:
            raise ExecutionError(f"Could not run {command[0]}: {e}") from e

        logger.debug("%s exited with %d", command[0], result.returncode)
        return ExecResult(
            exit_code=result.returncode,
            stdout=result.stdout or "",
            stderr=result.stderr or "",
        )
