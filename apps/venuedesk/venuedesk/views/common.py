from __future__ import annotations

from typing import Iterator

from fastapi import Path
from pydantic import ValidationError
from sqlstratum.runner import Runner
from starlette.requests import Request

from venuedesk.db import MAX_ROW_ID
from venuedesk.errors import InvalidInputError
from venuedesk.images import ImageStore
from venuedesk.models import validation_message


def row_id():
    return Path(ge=-MAX_ROW_ID - 1, le=MAX_ROW_ID)


def get_runner_dep(request: Request) -> Iterator[Runner]:
    with request.app.state.database.runner() as runner:
        yield runner


def get_image_store(request: Request) -> ImageStore:
    return request.app.state.image_store


async def read_json(request: Request) -> dict:
    try:
        payload = await request.json()
    except ValueError as exc:
        raise InvalidInputError("Invalid JSON body") from exc
    if not isinstance(payload, dict):
        raise InvalidInputError("Invalid JSON body")
    return payload


def validate(model, payload: dict):
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise InvalidInputError(validation_message(exc)) from exc
