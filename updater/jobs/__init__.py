"""Job-layer reporting workflows."""

from .update_reporter import UpdateJobReporter

__all__ = ["UpdateJobReporter"]
