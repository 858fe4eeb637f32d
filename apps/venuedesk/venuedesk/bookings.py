from __future__ import annotations

import logging
from typing import Any

from venuedesk import queries
from venuedesk.db import is_row_id
from venuedesk.errors import InvalidInputError, NotFoundError

logger = logging.getLogger(__name__)


def _as_artist_id(value: Any) -> int:
    # bool is an int subclass but never a valid id
    if isinstance(value, bool):
        raise InvalidInputError(f"Invalid artist ID: {value}")
    if isinstance(value, int) and is_row_id(value):
        return value
    if isinstance(value, float) and value.is_integer() and is_row_id(int(value)):
        return int(value)
    raise InvalidInputError(f"Invalid artist ID: {value}")


def parse_artist_ids(payload: Any) -> list[int]:
    """Extract the distinct artist ids of a roster payload, keeping submission order."""
    artist_ids = payload.get("artist_ids") if isinstance(payload, dict) else None
    if not isinstance(artist_ids, list):
        raise InvalidInputError("Invalid artist_ids provided - must be an array")
    distinct = []
    for value in artist_ids:
        artist_id = _as_artist_id(value)
        if artist_id not in distinct:
            distinct.append(artist_id)
    return distinct


def replace_event_artists(runner, event_id: int, artist_ids: list[int]) -> int:
    if not queries.event_exists(runner, event_id):
        raise NotFoundError("Event not found")
    for artist_id in artist_ids:
        if not queries.artist_exists(runner, artist_id):
            raise InvalidInputError(f"Unknown artist ID: {artist_id}")

    with runner.transaction():
        queries.delete_event_bookings(runner, event_id)
        for artist_id in artist_ids:
            queries.create_event_booking(runner, event_id, artist_id)

    logger.info("Event %s roster replaced with %d artist(s)", event_id, len(artist_ids))
    return len(artist_ids)
