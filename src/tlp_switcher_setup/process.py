"""Asynchronous subprocess execution."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)


class ProcessSpawnError(Exception):
    """The program could not be started."""

    pass


@dataclass(frozen=True)
class ProcessResult:
    """Exit status and captured output of a finished process."""

    returncode: int
    stdout: str = ""
    stderr: str = ""


class AsyncProcessRunner:
    """Runs commands on the asyncio event loop.

    Satisfies the ProcessRunner protocol structurally. The caller's loop
    stays free while the child runs; there is no timeout because the
    elevation front-end may wait on an interactive prompt.
    """

    def __init__(self, encoding: str = "utf-8") -> None:
        self.encoding = encoding

    async def run(self, argv: list[str]) -> ProcessResult:
        """Run a command and capture both output streams in full.

        Args:
            argv: Program and arguments.

        Returns:
            ProcessResult with decoded stdout/stderr.

        Raises:
            ProcessSpawnError: If the program could not be started.
        """
        logger.debug("Running %s", argv)
        try:
            proc = await asyncio.create_subprocess_exec(
                *argv,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except (OSError, ValueError) as e:
            # ValueError: embedded NUL in an argument
            raise ProcessSpawnError(f"{argv[0]}: {getattr(e, 'strerror', None) or e}") from e

        stdout, stderr = await proc.communicate()
        return ProcessResult(
            returncode=proc.returncode if proc.returncode is not None else -1,
            stdout=stdout.decode(self.encoding, errors="replace"),
            stderr=stderr.decode(self.encoding, errors="replace"),
        )
