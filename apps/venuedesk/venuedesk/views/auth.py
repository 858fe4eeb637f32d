from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request

from venuedesk import queries
from venuedesk.auth import authenticate, get_session_user, hash_password, login_user, logout_user
from venuedesk.errors import AuthenticationError, ConflictError
from venuedesk.models import LoginRequest, RegisterRequest
from venuedesk.views.common import get_runner_dep, read_json, validate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])

EMAIL_EXISTS = "User with this email already exists"


@router.post("/register", status_code=201)
async def register(request: Request, runner=Depends(get_runner_dep)):
    user_in = validate(RegisterRequest, await read_json(request))
    if queries.email_taken(runner, user_in.email):
        raise ConflictError(EMAIL_EXISTS)

    try:
        user_id = queries.create_user(
            runner,
            role=user_in.role.value,
            name=user_in.name,
            email=user_in.email,
            phone=user_in.phone,
            password_hash=hash_password(user_in.password),
        )
    except ConflictError as exc:
        raise ConflictError(EMAIL_EXISTS) from exc

    logger.info("Registered user %s", user_id)
    return {"message": "User created successfully", "user": queries.get_user(runner, user_id)}


@router.post("/login")
async def login(request: Request, runner=Depends(get_runner_dep)):
    credentials = validate(LoginRequest, await read_json(request))
    user = authenticate(runner, credentials.email, credentials.password)
    login_user(request, user["id"], user["role"], user["name"])
    logger.info("User %s signed in", user["id"])
    return {"user": user}


@router.post("/logout")
def logout(request: Request):
    logout_user(request)
    return {"message": "Signed out"}


@router.get("/session")
def session(request: Request):
    user = get_session_user(request)
    if user is None:
        raise AuthenticationError("Not authenticated")
    return {"user": user}
