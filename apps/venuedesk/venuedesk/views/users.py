from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request

from venuedesk import queries
from venuedesk.auth import hash_password
from venuedesk.errors import ConflictError, NotFoundError
from venuedesk.models import UserCreate, UserUpdate
from venuedesk.views.common import get_runner_dep, read_json, row_id, validate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users", tags=["users"])


def _get_user_or_404(runner, user_id: int):
    user = queries.get_user(runner, user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


@router.get("")
def list_users(runner=Depends(get_runner_dep)):
    return queries.list_users(runner)


@router.get("/{user_id}")
def get_user(user_id: int = row_id(), runner=Depends(get_runner_dep)):
    return _get_user_or_404(runner, user_id)


@router.post("", status_code=201)
async def create_user(request: Request, runner=Depends(get_runner_dep)):
    user_in = validate(UserCreate, await read_json(request))
    if queries.email_taken(runner, user_in.email):
        raise ConflictError("Email already exists")

    user_id = queries.create_user(
        runner,
        role=user_in.role.value,
        name=user_in.name,
        email=user_in.email,
        phone=user_in.phone,
        password_hash=hash_password(user_in.password),
    )
    logger.info("Created user %s", user_id)
    return queries.get_user(runner, user_id)


@router.put("/{user_id}")
async def update_user(request: Request, user_id: int = row_id(), runner=Depends(get_runner_dep)):
    user_in = validate(UserUpdate, await read_json(request))
    _get_user_or_404(runner, user_id)
    if queries.email_taken(runner, user_in.email, exclude_id=user_id):
        raise ConflictError("Email already exists")

    queries.update_user(
        runner,
        user_id,
        role=user_in.role.value,
        name=user_in.name,
        email=user_in.email,
        phone=user_in.phone,
        password_hash=hash_password(user_in.password) if user_in.password else None,
    )
    logger.info("Updated user %s", user_id)
    return queries.get_user(runner, user_id)


@router.delete("/{user_id}")
def delete_user(user_id: int = row_id(), runner=Depends(get_runner_dep)):
    _get_user_or_404(runner, user_id)
    queries.delete_user(runner, user_id)
    logger.info("Deleted user %s", user_id)
    return {"message": "User deleted successfully"}
