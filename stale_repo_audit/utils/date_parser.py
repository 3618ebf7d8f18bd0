"""Date parsing and formatting utilities for the stale repository audit."""

from datetime import date, datetime, timedelta, timezone

DAYS_PER_YEAR = 365


def parse_date_input(date_str: str) -> datetime:
    """Parse a run date override into a UTC datetime.

    Supports:
    - ISO dates: 2024-01-01, 2024-01-01T10:00:00Z
    - Common formats: January 1, 2024, Jan 1 2024

    Args:
        date_str: Date string to parse

    Returns:
        Parsed timezone-aware datetime in UTC

    Raises:
        ValueError: If date format is not recognized
    """
    formats = [
        "%Y-%m-%d",  # 2024-01-01
        "%Y-%m-%dT%H:%M:%SZ",  # 2024-01-01T10:00:00Z
        "%Y-%m-%dT%H:%M:%S",  # 2024-01-01T10:00:00
        "%B %d, %Y",  # January 1, 2024
        "%b %d, %Y",  # Jan 1, 2024
        "%B %d %Y",  # January 1 2024
        "%b %d %Y",  # Jan 1 2024
        "%Y/%m/%d",  # 2024/01/01
    ]

    for fmt in formats:
        try:
            return datetime.strptime(date_str, fmt).replace(tzinfo=timezone.utc)
        except ValueError:
            continue

    raise ValueError(
        f"Unable to parse date '{date_str}'. "
        f"Supported formats include: YYYY-MM-DD, YYYY-MM-DDTHH:MM:SSZ, "
        f"'January 1, 2024', 'Jan 1 2024', YYYY/MM/DD"
    )


def stale_cutoff(now: datetime, years: int) -> datetime:
    """Return the oldest commit time that still counts as recent.

    Years are a flat 365 days; leap days are ignored.

    Args:
        now: Reference time of the run
        years: Size of the staleness window in years

    Raises:
        ValueError: If years is not positive
    """
    if years <= 0:
        raise ValueError("Years must be a positive integer")
    return now - timedelta(days=DAYS_PER_YEAR * years)


def format_rfc3339(dt: datetime) -> str:
    """Format datetime for the ``since`` filter of the GitHub API.

    Naive datetimes are assumed to be UTC.
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def format_issue_date(day: date) -> str:
    """Format the date embedded in tracking issue titles."""
    return day.strftime("%Y-%m-%d")
