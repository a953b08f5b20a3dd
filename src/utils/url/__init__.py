"""URL utilities package."""

from .url_utils import ReportTarget, parse_report_url

__all__ = ["ReportTarget", "parse_report_url"]
