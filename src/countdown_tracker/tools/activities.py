"""MCP tools for reading and logging tracker entries."""

from typing import Any, Optional

from countdown_tracker.entries import ActivitySubmission, WeightSubmission
from countdown_tracker.exceptions import ApplicationException
from countdown_tracker.utils.dates import parse_date


def register_activity_tools(mcp, service):
    """Register entry-related MCP tools."""

    @mcp.tool()
    def get_tracker_data() -> dict[str, Any]:
        """
        Get all recorded runs and weights.

        Returns:
            Dictionary with activityEntries and weightEntries, sorted by date
        """
        try:
            return {"data": service.load().to_payload()}
        except ApplicationException as e:
            return {"error": e.message}

    @mcp.tool()
    def log_activity(
        distance: Optional[float] = None,
        time: Optional[str] = None,
        pace: Optional[str] = None,
        avg_heart_rate: Optional[float] = None,
        max_heart_rate: Optional[float] = None,
        vo2_max: Optional[int] = None,
        day: Optional[str] = None,
    ) -> dict[str, Any]:
        """
        Record the run for a day. Updating a day keeps fields that are left out.

        Args:
            distance: Distance in km
            time: Duration as hh:mm:ss, mm:ss or minutes
            pace: Pace as mm:ss or minutes per km (derived from time/distance if omitted)
            avg_heart_rate: Average heart rate in bpm
            max_heart_rate: Maximum heart rate in bpm
            vo2_max: VO2 max estimate
            day: Date in ISO format (YYYY-MM-DD); defaults to today

        Returns:
            Dictionary with the number of stored activities
        """
        try:
            submission = ActivitySubmission(
                distance=distance,
                time=time,
                pace=pace,
                avg_heart_rate=avg_heart_rate,
                max_heart_rate=max_heart_rate,
                vo2_max=vo2_max,
            )
            snapshot = service.log_activity(submission, parse_date(day) if day else None)
            return {"data": {"saved": True, "activityCount": len(snapshot.activity_entries)}}
        except ApplicationException as e:
            return {"error": e.message}
        except ValueError as e:
            return {"error": str(e)}

    @mcp.tool()
    def log_weight(weight: float, day: Optional[str] = None) -> dict[str, Any]:
        """
        Record the body weight for a day, replacing any earlier reading that day.

        Args:
            weight: Weight in kg
            day: Date in ISO format (YYYY-MM-DD); defaults to today

        Returns:
            Dictionary with the number of stored weights
        """
        try:
            snapshot = service.log_weight(
                WeightSubmission(weight=weight), parse_date(day) if day else None
            )
            return {"data": {"saved": True, "weightCount": len(snapshot.weight_entries)}}
        except ApplicationException as e:
            return {"error": e.message}
        except ValueError as e:
            return {"error": str(e)}
