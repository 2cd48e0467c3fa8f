"""Reports and filters package."""

from finance_tracker.queries.reports import ReportGenerator

__all__ = ["ReportGenerator"]
