from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Request
from starlette.datastructures import UploadFile

from venuedesk import queries
from venuedesk.db import is_row_id
from venuedesk.errors import InvalidInputError, NotFoundError
from venuedesk.images import ImageStore
from venuedesk.views.common import get_image_store, get_runner_dep, row_id

router = APIRouter(prefix="/api/events/{event_id}/images", tags=["images"])


def _require_event(runner, event_id: int) -> None:
    if not queries.event_exists(runner, event_id):
        raise NotFoundError("Event not found")


@router.get("")
def list_images(event_id: int = row_id(), runner=Depends(get_runner_dep)):
    _require_event(runner, event_id)
    return queries.list_event_images(runner, event_id)


@router.post("", status_code=201)
async def upload_image(
    request: Request,
    event_id: int = row_id(),
    runner=Depends(get_runner_dep),
    image_store: ImageStore = Depends(get_image_store),
):
    _require_event(runner, event_id)

    form = await request.form()
    upload = form.get("image")
    if not isinstance(upload, UploadFile):
        raise InvalidInputError("No image file provided")
    if not (upload.content_type or "").startswith("image/"):
        raise InvalidInputError("File must be an image")

    content = await upload.read()
    return image_store.save(runner, event_id, upload.filename or "image", content)


@router.delete("")
def delete_image(
    event_id: int = row_id(),
    imageId: Optional[str] = None,
    runner=Depends(get_runner_dep),
    image_store: ImageStore = Depends(get_image_store),
):
    if not imageId:
        raise InvalidInputError("Image ID is required")
    try:
        image_id = int(imageId)
    except ValueError as exc:
        raise InvalidInputError("Invalid image ID") from exc
    if not is_row_id(image_id):
        raise InvalidInputError("Invalid image ID")

    image_store.delete(runner, event_id, image_id)
    return {"message": "Image deleted successfully"}
