"""Google Calendar integration for workhours.

This module provides a clean public API for the Google Calendar source.
It re-exports the implementation from `workhours.sources.gcsa`.

Example:
    >>> from workhours.gcsa import GoogleCalendarSource
    >>> from workhours import WorkHoursCalculator
    >>>
    >>> calc = WorkHoursCalculator(GoogleCalendarSource())
    >>> calc.bootstrap()
    >>> report = calc.calculate()
    >>> print(report.total_formatted)
"""

# Re-export public API from sources.gcsa
from workhours.sources.gcsa import GoogleCalendarSource

__all__ = ["GoogleCalendarSource"]
