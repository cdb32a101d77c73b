"""kubectl subprocess runner.

Every cluster query and remote execution goes through :class:`KubectlRunner`.
Calls are awaited one at a time; cancelling the awaiting task kills the
kubectl child process before the cancellation propagates.
"""

from __future__ import annotations

import asyncio
import logging
import shlex
from collections.abc import Sequence
from contextlib import suppress
from typing import Any, BinaryIO

from kubelinstor.constants.defaults import KUBECTL_BINARY_DEFAULT
from kubelinstor.models.errors import KubectlCommandError, TransportError

logger = logging.getLogger(__name__)

COPY_CHUNK_SIZE = 64 * 1024


def _exit_status(returncode: int) -> int:
    """Map a signal death (negative return code) to the shell's 128+N status."""
    if returncode < 0:
        return 128 - returncode
    return returncode


async def _terminate(process: asyncio.subprocess.Process) -> None:
    """Kill a still-running child and reap it."""
    if process.returncode is None:
        with suppress(ProcessLookupError):
            process.kill()
    await process.wait()


async def _pump(reader: asyncio.StreamReader, sink: BinaryIO) -> None:
    while True:
        chunk = await reader.read(COPY_CHUNK_SIZE)
        if not chunk:
            return
        sink.write(chunk)


class KubectlRunner:
    """Runs kubectl commands as child processes."""

    def __init__(self, binary: str = KUBECTL_BINARY_DEFAULT, context: str | None = None) -> None:
        """Initialize the runner.

        Args:
            binary: kubectl executable name or path
            context: Kubernetes context to use, or None for the current one
        """
        self.binary = binary
        self.context = context

    def build_command(self, args: Sequence[str]) -> list[str]:
        """Return the full command line for kubectl ``args``."""
        cmd = [self.binary]
        if self.context:
            cmd.extend(["--context", self.context])
        cmd.extend(args)
        return cmd

    async def _spawn(self, cmd: list[str], **kwargs: Any) -> asyncio.subprocess.Process:
        logger.debug("Running: %s", shlex.join(cmd))
        try:
            return await asyncio.create_subprocess_exec(*cmd, **kwargs)
        except OSError as exc:
            raise TransportError(f"failed to run {cmd[0]}: {exc}") from exc

    async def run_bytes(self, args: Sequence[str]) -> bytes:
        """Run kubectl and return its raw standard output.

        Raises:
            KubectlCommandError: If kubectl exits with a non-zero status.
            TransportError: If kubectl cannot be started.
        """
        cmd = self.build_command(args)
        process = await self._spawn(
            cmd,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
        try:
            stdout, stderr = await process.communicate()
        except asyncio.CancelledError:
            await _terminate(process)
            raise

        if process.returncode != 0:
            message = stderr.decode(errors="replace").strip()
            logger.debug("kubectl exited with %s: %s", process.returncode, message)
            raise KubectlCommandError(cmd, process.returncode, message)
        return stdout

    async def copy_stdout(self, args: Sequence[str], sink: BinaryIO) -> None:
        """Run kubectl and write its standard output to ``sink`` as it arrives.

        Used for large binary payloads that should not be held in memory.

        Raises:
            KubectlCommandError: If kubectl exits with a non-zero status.
            TransportError: If kubectl cannot be started.
        """
        cmd = self.build_command(args)
        process = await self._spawn(
            cmd,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
        try:
            stderr, _ = await asyncio.gather(
                process.stderr.read(), _pump(process.stdout, sink)
            )
            returncode = await process.wait()
        except (asyncio.CancelledError, OSError):
            await _terminate(process)
            raise

        if returncode != 0:
            message = stderr.decode(errors="replace").strip()
            logger.debug("kubectl exited with %s: %s", returncode, message)
            raise KubectlCommandError(cmd, returncode, message)

    async def run(self, args: Sequence[str]) -> str:
        """Run kubectl and return its standard output as text."""
        output = await self.run_bytes(args)
        return output.decode(errors="replace")

    async def stream(self, args: Sequence[str]) -> int:
        """Run kubectl attached to this process' stdin, stdout and stderr.

        Returns:
            kubectl's exit status, 128+N when it was killed by signal N.
        """
        process = await self._spawn(self.build_command(args))
        try:
            returncode = await process.wait()
        except asyncio.CancelledError:
            await _terminate(process)
            raise
        logger.debug("Remote command exited with %s", returncode)
        return _exit_status(returncode)
