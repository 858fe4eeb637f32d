from __future__ import annotations

import calendar
from collections import defaultdict
from datetime import date, datetime, timedelta
from typing import Iterable, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from venuedesk.errors import InvalidInputError

VIEWS = ("month", "week", "year")
MONTH_GRID_DAYS = 42


def resolve_timezone(name: str) -> ZoneInfo:
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise InvalidInputError("Invalid time zone") from exc


def parse_anchor(value: Optional[str], tz: ZoneInfo, today: Optional[date] = None) -> date:
    if not value:
        return today if today is not None else datetime.now(tz).date()
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise InvalidInputError("Invalid date") from exc


def week_start(day: date) -> date:
    return day - timedelta(days=(day.weekday() + 1) % 7)


def shift(anchor: date, view: str, step: int) -> date:
    if view == "week":
        return anchor + timedelta(days=7 * step)
    if view == "month":
        month_index = anchor.year * 12 + anchor.month - 1 + step
        year, month = divmod(month_index, 12)
        month += 1
    else:
        year, month = anchor.year + step, anchor.month
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(anchor.day, last_day))


def group_by_date(events: Iterable, tz: ZoneInfo) -> dict[date, list]:
    buckets = defaultdict(list)
    for event in events:
        if event.start_ is None:
            continue
        buckets[event.start_.astimezone(tz).date()].append(event)
    for day_events in buckets.values():
        day_events.sort(key=lambda event: event.start_)
    return buckets


def _days(buckets: dict[date, list], first: date, count: int, month: Optional[int] = None) -> list[dict]:
    days = []
    for offset in range(count):
        day = first + timedelta(days=offset)
        entry = {"date": day.isoformat(), "events": buckets.get(day, [])}
        if month is not None:
            entry["in_month"] = day.month == month
        days.append(entry)
    return days


def build_calendar(events: Iterable, view: str, anchor: date, tz: ZoneInfo) -> dict:
    if view not in VIEWS:
        raise InvalidInputError("Invalid calendar view")
    buckets = group_by_date(events, tz)
    result = {
        "view": view,
        "anchor": anchor.isoformat(),
        "timezone": tz.key,
        "previous": shift(anchor, view, -1).isoformat(),
        "next": shift(anchor, view, 1).isoformat(),
    }

    if view == "month":
        first = anchor.replace(day=1)
        result["title"] = first.strftime("%B %Y")
        result["days"] = _days(buckets, week_start(first), MONTH_GRID_DAYS, month=anchor.month)
    elif view == "week":
        first = week_start(anchor)
        last = first + timedelta(days=6)
        result["title"] = f"{first.strftime('%b')} {first.day} - {last.strftime('%b')} {last.day}, {last.year}"
        result["days"] = _days(buckets, first, 7)
    else:
        result["title"] = str(anchor.year)
        months = []
        for month in range(1, 13):
            month_events = [
                event
                for day, day_events in sorted(buckets.items())
                if day.year == anchor.year and day.month == month
                for event in day_events
            ]
            months.append({"month": f"{anchor.year:04d}-{month:02d}", "events": month_events})
        result["months"] = months
    return result
