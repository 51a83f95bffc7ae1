from datetime import datetime
import pytz

DANISH_TIMEZONE = 'Europe/Copenhagen'
danish_tz = pytz.timezone(DANISH_TIMEZONE)


def to_danish_time(moment):
    """Convert a datetime to Danish local time. Naive input is taken as UTC."""
    if moment.tzinfo is None:
        moment = pytz.utc.localize(moment)
    return moment.astimezone(danish_tz)


def danish_now():
    """Current time in Denmark, timezone-aware."""
    return to_danish_time(datetime.now(pytz.utc))


def danish_now_naive():
    """Danish wall-clock time without tzinfo, for comparing with dataset timestamps."""
    return danish_now().replace(tzinfo=None)
