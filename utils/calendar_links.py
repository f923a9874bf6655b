# utils/calendar_links.py
from datetime import datetime, timedelta, timezone
from urllib.parse import quote, urlencode

CALENDAR_URL = "https://calendar.google.com/calendar/render"
DEFAULT_DURATION = timedelta(hours=1)


def _stamp(dt: datetime) -> str:
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).strftime("%Y%m%dT%H%M%SZ")


def google_calendar_link(title: str, start: datetime, duration: timedelta = DEFAULT_DURATION,
                         details: str = "", location: str = "") -> str:
    """"Add to Google Calendar" link. Naive datetimes are taken as UTC."""
    params = {
        "action": "TEMPLATE",
        "text": title,
        "dates": f"{_stamp(start)}/{_stamp(start + duration)}",
    }
    if details:
        params["details"] = details
    if location:
        params["location"] = location
    return f"{CALENDAR_URL}?{urlencode(params, quote_via=quote, safe='/')}"


def interview_link(interview) -> str:
    return google_calendar_link(
        f"Interview: {interview.person_interviewed}",
        interview.scheduled_date,
        details=f"Interviewer: {interview.interviewer}\nPurpose: {interview.purpose}",
    )


def reunion_link(reunion) -> str:
    return google_calendar_link(
        f"Reunión: {reunion.reason}",
        reunion.scheduled_at,
        details=f"Participants: {', '.join(reunion.participants)}",
    )
