"""Remote execution of LINSTOR client commands."""

from kubelinstor.controllers.forwarding.forwarder import (
    CommandForwarder,
    is_sos_report_download,
)
from kubelinstor.controllers.forwarding.sos_report import SosReportDownloader

__all__ = ["CommandForwarder", "SosReportDownloader", "is_sos_report_download"]
