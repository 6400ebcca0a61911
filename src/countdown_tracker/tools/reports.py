"""MCP tools for calendar, summary and countdown views."""

from typing import Any, Optional

from countdown_tracker.bucketing import monthly_summary, weekly_target_for
from countdown_tracker.exceptions import ApplicationException
from countdown_tracker.service import countdown_view, month_view, overview
from countdown_tracker.utils.dates import parse_date


def register_report_tools(mcp, service, settings):
    """Register read-only report MCP tools."""

    @mcp.tool()
    def get_month_calendar(year: int, month: int) -> dict[str, Any]:
        """
        Get the calendar grid for a month (Sunday to Saturday weeks).

        Each day lists whether it is past, its highlight labels, the recorded
        run and weight, and the planned target distance.

        Args:
            year: Year, e.g. 2026
            month: Month number 1-12

        Returns:
            Dictionary with days, the monthly summary and monthly weight progress
        """
        if not 1 <= month <= 12:
            return {"error": f"Invalid month: {month}"}
        try:
            view = month_view(
                service.load(),
                year,
                month,
                service.today(),
                settings.highlight_ranges,
                tz=service.tz,
            )
            return {"data": view}
        except ApplicationException as e:
            return {"error": e.message}

    @mcp.tool()
    def get_monthly_summary(year: Optional[int] = None, month: Optional[int] = None) -> dict[str, Any]:
        """
        Get run totals for one month, or overall totals and goal progress.

        Args:
            year: Year; omit together with month for the overall summary
            month: Month number 1-12

        Returns:
            Dictionary containing summary statistics
        """
        try:
            snapshot = service.load()
            if year is None or month is None:
                return {"data": overview(snapshot, settings, service.tz)}
            summary = monthly_summary(snapshot.activity_entries, year, month, service.tz)
            return {"data": summary.model_dump(by_alias=True)}
        except ApplicationException as e:
            return {"error": e.message}

    @mcp.tool()
    def get_weekly_target(day: str) -> dict[str, Any]:
        """
        Get the planned training distance for a date.

        Args:
            day: Date in ISO format (YYYY-MM-DD)

        Returns:
            Dictionary with distanceKm, or null when no run is planned
        """
        try:
            target_day = parse_date(day)
        except ValueError as e:
            return {"error": str(e)}
        return {"data": {"date": target_day.isoformat(), "distanceKm": weekly_target_for(target_day)}}

    @mcp.tool()
    def get_countdown() -> dict[str, Any]:
        """
        Get the time left until the configured countdown end.

        Returns:
            Dictionary with days, hours, minutes, progress and the list of days
        """
        try:
            return {"data": countdown_view(settings)}
        except ValueError as e:
            return {"error": str(e)}
