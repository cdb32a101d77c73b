"""Command-line entry point for ``kubectl linstor``.

Locates the LINSTOR controller, expands ``pvc:``/``pod:`` arguments and runs
the LINSTOR client inside the controller. This is the only place that turns
errors into exit codes.
"""

from __future__ import annotations

import asyncio
import logging
import signal
import sys
from collections.abc import Sequence
from contextlib import suppress

from kubelinstor.constants.defaults import LOG_FORMAT
from kubelinstor.controllers import (
    ArgumentExpander,
    ClaimResolver,
    CommandForwarder,
    ControllerLocator,
    KubectlRunner,
    PodResolver,
    ResourceLookup,
    SosReportDownloader,
    is_sos_report_download,
)
from kubelinstor.models.errors import KubectlLinstorError
from kubelinstor.models.state import ConfigError, ConfigManager, PluginSettings

logger = logging.getLogger(__name__)

EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130


def configure_logging(level: str) -> None:
    """Send log records to stderr at ``level``."""
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)


async def run(
    args: Sequence[str],
    settings: PluginSettings,
    *,
    interactive: bool,
    runner: KubectlRunner | None = None,
) -> int:
    """Locate the controller and run ``args`` in it; returns the exit code."""
    runner = runner or KubectlRunner(settings.kubectl_binary, settings.context)
    endpoint = await ControllerLocator(runner.run, settings).locate()

    if is_sos_report_download(args):
        downloader = SosReportDownloader(runner, settings.remote_command)
        return await downloader.download(endpoint, args)

    lookup = ResourceLookup(runner.run)
    claims = ClaimResolver(lookup)
    expander = ArgumentExpander(claims, PodResolver(lookup, claims))
    forwarder = CommandForwarder(runner, expander, settings.remote_command)
    return await forwarder.forward(endpoint, args, interactive=interactive)


async def _run_cancellable(
    args: Sequence[str], settings: PluginSettings, *, interactive: bool
) -> int:
    task = asyncio.current_task()
    if task is not None:
        # Interrupts cancel the whole invocation, killing any running kubectl.
        with suppress(NotImplementedError):
            asyncio.get_running_loop().add_signal_handler(signal.SIGINT, task.cancel)
    return await run(args, settings, interactive=interactive)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the plugin with ``argv`` (defaults to ``sys.argv[1:]``)."""
    args = list(sys.argv[1:] if argv is None else argv)

    try:
        settings = ConfigManager.load()
    except ConfigError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_FAILURE

    configure_logging(settings.log_level)
    interactive = sys.stdout.isatty()

    try:
        return asyncio.run(_run_cancellable(args, settings, interactive=interactive))
    except (asyncio.CancelledError, KeyboardInterrupt):
        logger.info("Interrupted")
        return EXIT_INTERRUPTED
    except KubectlLinstorError as exc:
        logger.debug("Aborting", exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_FAILURE
