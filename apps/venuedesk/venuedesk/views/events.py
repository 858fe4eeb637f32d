from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request

from venuedesk import queries
from venuedesk.bookings import parse_artist_ids, replace_event_artists
from venuedesk.calendar_view import build_calendar, parse_anchor, resolve_timezone
from venuedesk.errors import InvalidInputError, NotFoundError
from venuedesk.images import ImageStore
from venuedesk.models import EventCreate, EventOut
from venuedesk.scheduling import time_warnings
from venuedesk.views.common import get_image_store, get_runner_dep, read_json, row_id, validate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/events", tags=["events"])


def _with_user_names(event: EventOut, names: dict[int, str]) -> EventOut:
    return event.model_copy(
        update={
            "responsible_name": names.get(event.responsible_id),
            "light_name": names.get(event.light_id),
            "sound_name": names.get(event.sound_id),
            "artist_care_name": names.get(event.artist_care_id),
        }
    )


def _get_event_or_404(runner, event_id: int) -> EventOut:
    event = queries.get_event(runner, event_id)
    if event is None:
        raise NotFoundError("Event not found")
    return _with_user_names(event, queries.user_names(runner))


def _check_user_refs(runner, event_in: EventCreate) -> None:
    names = queries.user_names(runner)
    for user_id in event_in.user_ids():
        if user_id not in names:
            raise InvalidInputError(f"Unknown user ID: {user_id}")


def _saved_response(runner, event_id: int, event_in: EventCreate) -> dict:
    event = _get_event_or_404(runner, event_id)
    data = event.model_dump(mode="json")
    data["warnings"] = time_warnings(event_in.start_, event_in.end_, event_in.doors_open)
    return data


@router.get("")
def list_events(runner=Depends(get_runner_dep)):
    names = queries.user_names(runner)
    return [_with_user_names(event, names) for event in queries.list_events(runner)]


@router.get("/calendar")
def event_calendar(
    request: Request,
    view: str = "month",
    date: Optional[str] = None,
    tz: Optional[str] = None,
    runner=Depends(get_runner_dep),
):
    zone = resolve_timezone(tz or request.app.state.config.CALENDAR_TZ)
    anchor = parse_anchor(date, zone)
    names = queries.user_names(runner)
    events = [_with_user_names(event, names) for event in queries.list_events(runner)]
    return build_calendar(events, view, anchor, zone)


@router.get("/{event_id}")
def get_event(event_id: int = row_id(), runner=Depends(get_runner_dep)):
    return _get_event_or_404(runner, event_id)


@router.post("", status_code=201)
async def create_event(request: Request, runner=Depends(get_runner_dep)):
    event_in = validate(EventCreate, await read_json(request))
    _check_user_refs(runner, event_in)

    event_id = queries.create_event(runner, event_in.model_dump(mode="json"))
    logger.info("Created event %s", event_id)
    return _saved_response(runner, event_id, event_in)


@router.put("/{event_id}")
async def update_event(request: Request, event_id: int = row_id(), runner=Depends(get_runner_dep)):
    event_in = validate(EventCreate, await read_json(request))
    if not queries.event_exists(runner, event_id):
        raise NotFoundError("Event not found")
    _check_user_refs(runner, event_in)

    queries.update_event(runner, event_id, event_in.model_dump(mode="json"))
    logger.info("Updated event %s", event_id)
    return _saved_response(runner, event_id, event_in)


@router.delete("/{event_id}")
def delete_event(
    event_id: int = row_id(),
    runner=Depends(get_runner_dep),
    image_store: ImageStore = Depends(get_image_store),
):
    if not queries.event_exists(runner, event_id):
        raise NotFoundError("Event not found")
    with runner.transaction():
        queries.delete_event(runner, event_id)
    image_store.purge_event(event_id)
    logger.info("Deleted event %s with its bookings and images", event_id)
    return {"message": "Event deleted successfully"}


@router.get("/{event_id}/artists")
def list_event_artists(event_id: int = row_id(), runner=Depends(get_runner_dep)):
    if not queries.event_exists(runner, event_id):
        raise NotFoundError("Event not found")
    return queries.list_event_artists(runner, event_id)


@router.post("/{event_id}/artists")
async def replace_artists(request: Request, event_id: int = row_id(), runner=Depends(get_runner_dep)):
    artist_ids = parse_artist_ids(await read_json(request))
    count = replace_event_artists(runner, event_id, artist_ids)
    return {"message": "Artist bookings updated successfully", "artist_count": count}
