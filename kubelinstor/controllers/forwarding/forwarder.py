"""Command forwarder - runs the LINSTOR client inside the controller."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from kubelinstor.constants.defaults import REMOTE_COMMAND_DEFAULT
from kubelinstor.constants.values import SOS_DOWNLOAD_TOKENS, SOS_REPORT_TOKENS
from kubelinstor.controllers.arguments import ArgumentExpander
from kubelinstor.controllers.kubectl.runner import KubectlRunner
from kubelinstor.models.endpoint import ControllerEndpoint

logger = logging.getLogger(__name__)


def is_sos_report_download(args: Sequence[str]) -> bool:
    """Return True for ``sos|sos-report dl|download ...`` invocations."""
    if len(args) < 2:
        return False
    return args[0] in SOS_REPORT_TOKENS and args[1] in SOS_DOWNLOAD_TOKENS


class CommandForwarder:
    """Forwards a command line to the LINSTOR client via ``kubectl exec``."""

    def __init__(
        self,
        runner: KubectlRunner,
        expander: ArgumentExpander,
        remote_command: str = REMOTE_COMMAND_DEFAULT,
    ) -> None:
        self._runner = runner
        self._expander = expander
        self.remote_command = remote_command

    @staticmethod
    def build_exec_args(endpoint: ControllerEndpoint, *, interactive: bool) -> list[str]:
        """Build the ``kubectl exec`` arguments up to and including ``--``.

        ``--tty`` is only requested when ``interactive`` is set, i.e. when the
        plugin's stdout is a terminal.
        """
        args = ["exec", "--namespace", endpoint.namespace, "--stdin"]
        if interactive:
            args.append("--tty")
        args.extend([endpoint.exec_target, "--"])
        return args

    async def build_command(
        self, endpoint: ControllerEndpoint, args: Sequence[str], *, interactive: bool
    ) -> list[str]:
        """Return the full kubectl argument list with expanded user arguments."""
        command = self.build_exec_args(endpoint, interactive=interactive)
        command.append(self.remote_command)
        command.extend(await self._expander.expand_all(args))
        return command

    async def forward(
        self, endpoint: ControllerEndpoint, args: Sequence[str], *, interactive: bool
    ) -> int:
        """Run the command remotely with inherited stdio and return its exit code."""
        command = await self.build_command(endpoint, args, interactive=interactive)
        return await self._runner.stream(command)
