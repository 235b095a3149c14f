"""
Event list view model.

Filters, sorts and groups a raw event list for the grid, table and timeline
views of the events page. Nothing here performs I/O; missing fields degrade
(undated events sort last, a missing name compares as an empty string).
"""

from datetime import date, timedelta
from functools import cmp_to_key
from typing import Dict, Iterable, List, Optional

from dashboard.schemas.event import Event
from dashboard.schemas.views import (
    EventDayGroup,
    EventFilterCriteria,
    EventListView,
    SortOrder,
    ViewMode,
)
from dashboard.time_utils import local_day, today_tz

UNDATED_LABEL = "No date"


def _cmp(a, b) -> int:
    return (a > b) - (a < b)


def event_day(event: Event) -> Optional[date]:
    if event.start_date is None:
        return None
    return local_day(event.start_date)


def _start_time(event: Event) -> str:
    return (event.start_time or "").strip()


def _name_key(event: Event) -> str:
    return (event.name or "").lower()


def compare_events_by_datetime(a: Event, b: Event) -> int:
    """
    Order two events for display.

    Dated events come before undated ones and compare by calendar day. On the
    same day a timed event comes before an untimed one, and two timed events
    compare by their HH:MM strings. Ties fall back to the name, ignoring case.
    """
    a_day, b_day = event_day(a), event_day(b)
    if a_day is None or b_day is None:
        if a_day is not None:
            return -1
        if b_day is not None:
            return 1
        return _cmp(_name_key(a), _name_key(b))

    if a_day != b_day:
        return _cmp(a_day, b_day)

    a_time, b_time = _start_time(a), _start_time(b)
    if a_time and not b_time:
        return -1
    if b_time and not a_time:
        return 1
    if a_time != b_time:
        return _cmp(a_time, b_time)

    return _cmp(_name_key(a), _name_key(b))


def sort_events(events: Iterable[Event], ascending: bool = True) -> List[Event]:
    """Sort ascending; descending is the exact reverse of the ascending order."""
    ordered = sorted(events, key=cmp_to_key(compare_events_by_datetime))
    if not ascending:
        ordered.reverse()
    return ordered


def matches_search(event: Event, query: Optional[str]) -> bool:
    needle = (query or "").lower()
    if not needle.strip():
        return True
    fields = (event.name, event.description, event.location, event.organisers)
    return any(needle in (value or "").lower() for value in fields)


def is_past(event: Event, today: date) -> bool:
    day = event_day(event)
    return day is not None and day < today


def filter_events(
    events: Iterable[Event],
    criteria: EventFilterCriteria,
    today: Optional[date] = None,
) -> List[Event]:
    today = today or today_tz()
    result = [e for e in events if matches_search(e, criteria.search)]

    if criteria.hide_past:
        result = [e for e in result if not is_past(e, today)]

    flag_filters = (
        (criteria.not_highlighted, "is_highlighted"),
        (criteria.not_linkedin_posted, "linkedin_posted"),
        (criteria.not_whatsapp_posted, "whatsapp_posted"),
        (criteria.not_newsletter_posted, "newsletter_posted"),
    )
    for enabled, flag in flag_filters:
        if enabled:
            result = [e for e in result if not getattr(e, flag)]

    return result


def format_date_label(day: date, today: Optional[date] = None) -> str:
    today = today or today_tz()
    if day == today:
        return "Today"
    if day == today + timedelta(days=1):
        return "Tomorrow"
    return f"{day:%b} {day.day}"


def day_of_week_label(day: date) -> str:
    return day.strftime("%A")


def group_events_by_day(
    events: Iterable[Event],
    ascending: bool = True,
    today: Optional[date] = None,
) -> List[EventDayGroup]:
    """
    Bucket events per calendar day for the timeline.

    Day buckets follow the sort toggle; events inside a bucket are always in
    comparator order. Undated events end up in one trailing bucket.
    """
    today = today or today_tz()
    buckets: Dict[date, List[Event]] = {}
    undated: List[Event] = []
    for event in events:
        day = event_day(event)
        if day is None:
            undated.append(event)
        else:
            buckets.setdefault(day, []).append(event)

    groups = [
        EventDayGroup(
            day=day,
            label=format_date_label(day, today),
            day_of_week=day_of_week_label(day),
            events=sort_events(buckets[day]),
        )
        for day in sorted(buckets, reverse=not ascending)
    ]
    if undated:
        groups.append(EventDayGroup(day=None, label=UNDATED_LABEL, events=sort_events(undated)))
    return groups


def build_event_list_view(
    events: Iterable[Event],
    criteria: Optional[EventFilterCriteria] = None,
    mode: ViewMode = ViewMode.GRID,
    order: SortOrder = SortOrder.ASC,
    today: Optional[date] = None,
) -> EventListView:
    today = today or today_tz()
    ascending = order == SortOrder.ASC
    filtered = filter_events(events, criteria or EventFilterCriteria(), today)
    ordered = sort_events(filtered, ascending)

    groups = None
    if mode == ViewMode.TIMELINE:
        groups = group_events_by_day(ordered, ascending, today)

    return EventListView(mode=mode, order=order, total=len(ordered), events=ordered, groups=groups)
