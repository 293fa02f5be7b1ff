"""Thin async wrapper around external command execution."""

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass

logger = logging.getLogger(__name__)


class ProcessTimeoutError(Exception):
    """Raised when an external process runs past its timeout and is killed."""

    def __init__(self, program: str, timeout: float):
        self.program = program
        self.timeout = timeout
        super().__init__(f"'{program}' did not finish within {timeout:g}s")


@dataclass(frozen=True)
class ProcessResult:
    """Captured outcome of one external process run."""

    returncode: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class ProcessInvoker:
    """Runs an argument vector to completion and captures its output."""

    async def run(self, args: Sequence[str], timeout: float | None = None) -> ProcessResult:
        """Start the process, wait for it to exit and return its output.

        Raises:
            OSError: If the executable cannot be started (e.g. not installed).
            ProcessTimeoutError: If ``timeout`` elapses before the process exits.
        """
        logger.debug("Running process", extra={"command": list(args)})
        proc = await asyncio.create_subprocess_exec(
            *args,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
        try:
            stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout=timeout)
        except asyncio.TimeoutError:
            proc.kill()
            await proc.wait()
            raise ProcessTimeoutError(args[0], timeout) from None

        return ProcessResult(
            returncode=proc.returncode,
            stdout=stdout.decode("utf-8", errors="replace"),
            stderr=stderr.decode("utf-8", errors="replace"),
        )
