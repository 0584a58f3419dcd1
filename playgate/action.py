"""Runs the media play/pause command."""

import asyncio
import logging

logger = logging.getLogger(__name__)


class ActionInvoker:
    """Execute a fixed command and report (succeeded, diagnostic).

    Never raises for a failing command; a missing binary, a non-zero exit
    status or a timeout all come back as ``(False, reason)``.
    """

    def __init__(self, command: list[str], timeout: float = 5.0) -> None:
        if not command:
            raise ValueError("action command must not be empty")
        self.command = list(command)
        self.timeout = timeout

    async def invoke(self) -> tuple[bool, str]:
        try:
            proc = await asyncio.create_subprocess_exec(
                *self.command,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            logger.error("Failed to start %s: %s", self.command[0], e)
            return False, f"failed to start {self.command[0]}: {e}"

        try:
            stdout, stderr = await asyncio.wait_for(
                proc.communicate(), timeout=self.timeout
            )
        except asyncio.TimeoutError:
            proc.kill()
            await proc.wait()
            logger.error("%s timed out after %.1fs", self.command[0], self.timeout)
            return False, f"{self.command[0]} timed out after {self.timeout}s"

        if proc.returncode != 0:
            diagnostic = stderr.decode("utf-8", errors="replace").strip()
            logger.warning(
                "%s exited with %d: %s", self.command[0], proc.returncode, diagnostic
            )
            return False, diagnostic or f"exit status {proc.returncode}"

        return True, stdout.decode("utf-8", errors="replace").strip()
