from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request

from venuedesk import queries
from venuedesk.errors import ConflictError, NotFoundError
from venuedesk.models import ArtistCreate
from venuedesk.views.common import get_runner_dep, read_json, row_id, validate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/artists", tags=["artists"])


def _get_artist_or_404(runner, artist_id: int):
    artist = queries.get_artist(runner, artist_id)
    if artist is None:
        raise NotFoundError("Artist not found")
    return artist


@router.get("")
def list_artists(runner=Depends(get_runner_dep)):
    return queries.list_artists(runner)


@router.get("/{artist_id}")
def get_artist(artist_id: int = row_id(), runner=Depends(get_runner_dep)):
    return _get_artist_or_404(runner, artist_id)


@router.get("/{artist_id}/events")
def list_artist_events(artist_id: int = row_id(), runner=Depends(get_runner_dep)):
    artist = _get_artist_or_404(runner, artist_id)
    return {"artist": artist, "events": queries.list_artist_events(runner, artist_id)}


@router.post("", status_code=201)
async def create_artist(request: Request, runner=Depends(get_runner_dep)):
    artist_in = validate(ArtistCreate, await read_json(request))
    if queries.artist_name_taken(runner, artist_in.name):
        raise ConflictError("Artist name already exists")

    artist_id = queries.create_artist(runner, artist_in.model_dump(mode="json"))
    logger.info("Created artist %s", artist_id)
    return queries.get_artist(runner, artist_id)


@router.put("/{artist_id}")
async def update_artist(request: Request, artist_id: int = row_id(), runner=Depends(get_runner_dep)):
    artist_in = validate(ArtistCreate, await read_json(request))
    _get_artist_or_404(runner, artist_id)
    if queries.artist_name_taken(runner, artist_in.name, exclude_id=artist_id):
        raise ConflictError("Artist name already exists")

    queries.update_artist(runner, artist_id, artist_in.model_dump(mode="json"))
    logger.info("Updated artist %s", artist_id)
    return queries.get_artist(runner, artist_id)


@router.delete("/{artist_id}")
def delete_artist(artist_id: int = row_id(), runner=Depends(get_runner_dep)):
    _get_artist_or_404(runner, artist_id)
    with runner.transaction():
        queries.delete_artist(runner, artist_id)
    logger.info("Deleted artist %s", artist_id)
    return {"message": "Artist deleted successfully"}
