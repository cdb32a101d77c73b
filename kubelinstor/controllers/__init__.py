"""Controllers module for kubectl-linstor.

This module provides the components that talk to the cluster: reference
resolvers, the argument expander, controller discovery and command
forwarding.
"""

from __future__ import annotations

from kubelinstor.controllers.arguments import ArgumentExpander
from kubelinstor.controllers.base import BaseResolver
from kubelinstor.controllers.discovery import ControllerLocator
from kubelinstor.controllers.forwarding import (
    CommandForwarder,
    SosReportDownloader,
    is_sos_report_download,
)
from kubelinstor.controllers.kubectl import KubectlRunner, ResourceLookup
from kubelinstor.controllers.resolvers import ClaimResolver, PodResolver

__all__ = [
    "ArgumentExpander",
    "BaseResolver",
    "ClaimResolver",
    "CommandForwarder",
    "ControllerLocator",
    "KubectlRunner",
    "PodResolver",
    "ResourceLookup",
    "SosReportDownloader",
    "is_sos_report_download",
]
