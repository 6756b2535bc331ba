"""
Time Utilities
Helper functions for session timestamps
"""
from datetime import datetime, timedelta, timezone


def now() -> datetime:
    """
    Get current UTC time

    Returns:
        Current datetime in UTC
    """
    return datetime.now(timezone.utc)


def is_older_than(moment: datetime, seconds: float) -> bool:
    """Whether more than `seconds` have passed since `moment`"""
    return now() - moment > timedelta(seconds=seconds)
