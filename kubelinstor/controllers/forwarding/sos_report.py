"""SOS report download - creates a report in the controller and copies it out."""

from __future__ import annotations

import argparse
import logging
import shutil
import sys
import tarfile
import tempfile
from collections.abc import Sequence
from pathlib import Path, PurePosixPath
from typing import BinaryIO, NoReturn

from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from kubelinstor.constants.defaults import REMOTE_COMMAND_DEFAULT
from kubelinstor.controllers.forwarding.forwarder import CommandForwarder
from kubelinstor.controllers.kubectl.runner import KubectlRunner
from kubelinstor.models.endpoint import ControllerEndpoint
from kubelinstor.models.errors import KubectlCommandError, SosReportError
from kubelinstor.models.sos_report import LINSTOR_MESSAGES_ADAPTER

logger = logging.getLogger(__name__)


class DownloadParserExit(Exception):
    """Raised when the download parser finished early, e.g. after ``--help``."""

    def __init__(self, status: int) -> None:
        super().__init__(status)
        self.status = status


class DownloadArgumentParser(argparse.ArgumentParser):
    """Argument parser that raises instead of exiting the process."""

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        raise SosReportError(f"failed to parse flags: {message}")

    def exit(self, status: int = 0, message: str | None = None) -> NoReturn:
        if message:
            self._print_message(message, sys.stderr)
        raise DownloadParserExit(status)


def build_download_parser(prog: str = "kubectl linstor sos-report download") -> DownloadArgumentParser:
    """Create parser for the sos-report download flags."""
    parser = DownloadArgumentParser(
        prog=prog,
        description="Create a sos-report in the LINSTOR controller and download it",
    )
    parser.add_argument(
        "--since", "-s",
        help='Create sos-report with logs since n days. e.g. "3days"',
    )
    parser.add_argument(
        "--nodes", "-n",
        action="append",
        default=[],
        help="Only include the given nodes in the sos-report",
    )
    parser.add_argument(
        "--resources", "-r",
        action="append",
        default=[],
        help="Only include nodes that have the given resources deployed in the sos-report",
    )
    parser.add_argument(
        "--exclude-nodes", "-e",
        action="append",
        default=[],
        help="Do not include the given nodes in the sos-report",
    )
    parser.add_argument(
        "--no-controller",
        action="store_true",
        help="Do not include the controller in the sos-report",
    )
    parser.add_argument(
        "path",
        nargs="*",
        help="Destination file or directory (default: current directory)",
    )
    return parser


def resolve_destination(report_path: str, target: str | None) -> Path:
    """Pick the local file the report is written to.

    No target keeps the report's file name in the working directory, a missing
    target is used as the file name, and an existing directory receives the
    report under its own name.
    """
    basename = PurePosixPath(report_path).name
    if target is None:
        return Path(basename)
    target_path = Path(target)
    if not target_path.exists():
        return target_path
    if target_path.is_dir():
        return target_path / basename
    return Path(basename)


def parse_report_path(output: str | bytes) -> str:
    """Extract the report path from the ``sos-report create`` JSON reply."""
    try:
        messages = LINSTOR_MESSAGES_ADAPTER.validate_json(output)
    except ValidationError as exc:
        raise SosReportError(f"failed to parse LINSTOR message: {exc}") from exc
    if len(messages) != 1:
        raise SosReportError(f"expected exactly one LINSTOR message, got {len(messages)}")
    path = messages[0].obj_refs.path
    if not path:
        raise SosReportError("LINSTOR message does not have sos-report path")
    return path


def extract_first_member(stream: BinaryIO, dest: Path) -> None:
    """Write the first file of the tar stream read from ``stream`` to ``dest``."""
    try:
        with tarfile.open(fileobj=stream, mode="r|*") as archive:
            member = archive.next()
            if member is None:
                raise SosReportError("failed to read tar header: archive is empty")
            source = archive.extractfile(member)
            if source is None:
                raise SosReportError(f"tar entry {member.name} is not a regular file")
            try:
                with dest.open("wb") as target:
                    shutil.copyfileobj(source, target)
            except OSError as exc:
                raise SosReportError(f"failed to write destination file {dest}: {exc}") from exc
    except tarfile.TarError as exc:
        raise SosReportError(f"failed to read tar stream: {exc}") from exc


class SosReportDownloader:
    """Handles ``sos-report download`` locally instead of forwarding it."""

    def __init__(
        self,
        runner: KubectlRunner,
        remote_command: str = REMOTE_COMMAND_DEFAULT,
        console: Console | None = None,
    ) -> None:
        self._runner = runner
        self.remote_command = remote_command
        self._console = console or Console(highlight=False)

    def build_create_command(self, options: argparse.Namespace) -> list[str]:
        """Build the remote ``sos-report create`` invocation."""
        command = [
            self.remote_command,
            "-m",
            "--output-version",
            "v1",
            "sos-report",
            "create",
        ]
        if options.since:
            command.extend(["--since", options.since])
        if options.nodes:
            command.extend(["--nodes", *options.nodes])
        if options.resources:
            command.extend(["--resources", *options.resources])
        if options.exclude_nodes:
            command.extend(["--exclude-nodes", *options.exclude_nodes])
        if options.no_controller:
            command.append("--no-controller")
        return command

    async def download(self, endpoint: ControllerEndpoint, args: Sequence[str]) -> int:
        """Run the download for ``args`` (``sos-report download ...``)."""
        parser = build_download_parser(prog=f"kubectl linstor {args[0]} {args[1]}")
        try:
            options = parser.parse_intermixed_args(list(args[2:]))
        except DownloadParserExit as exc:
            return exc.status
        if len(options.path) > 1:
            parser.print_usage()
            raise SosReportError("Expected at most one path argument")

        # Output is captured, so never request a TTY here.
        exec_args = CommandForwarder.build_exec_args(endpoint, interactive=False)

        try:
            output = await self._runner.run_bytes(exec_args + self.build_create_command(options))
        except KubectlCommandError as exc:
            raise SosReportError(f"failed to create sos-report: {exc}") from exc

        report_path = parse_report_path(output)
        dest = resolve_destination(report_path, options.path[0] if options.path else None)
        logger.info("Copying %s to %s", report_path, dest)

        # The archive is spooled to disk; reports can be larger than memory.
        with tempfile.TemporaryFile() as spool:
            try:
                await self._runner.copy_stdout(
                    [*exec_args, "tar", "-cf", "-", report_path], spool
                )
            except (KubectlCommandError, OSError) as exc:
                raise SosReportError(f"failed to copy sos-report to host: {exc}") from exc
            spool.seek(0)
            extract_first_member(spool, dest)
        self._console.print(
            f"[bold green]SUCCESS:[/bold green]\n    File saved to: {escape(str(dest))}",
            soft_wrap=True,
        )
        return 0
