from __future__ import annotations

import logging
from typing import Optional

import bcrypt
from starlette.requests import Request

from venuedesk import queries
from venuedesk.errors import AuthenticationError

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"

# Checked when the email is unknown so both failure paths cost one bcrypt round.
_DUMMY_HASH = bcrypt.hashpw(b"venuedesk-dummy-password", bcrypt.gensalt()).decode("utf-8")


def hash_password(plain_password: str) -> str:
    hashed = bcrypt.hashpw(plain_password.encode("utf-8"), bcrypt.gensalt())
    return hashed.decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))


def authenticate(runner, email: str, password: str) -> dict:
    """Return the user row for valid credentials.

    Unknown email and wrong password raise the same AuthenticationError.
    """
    row = queries.get_user_credentials(runner, email)
    if row is None:
        verify_password(password, _DUMMY_HASH)
        logger.info("Sign-in failed for unknown email")
        raise AuthenticationError(INVALID_CREDENTIALS)
    if not verify_password(password, row["password"]):
        logger.info("Sign-in failed for user %s", row["id"])
        raise AuthenticationError(INVALID_CREDENTIALS)
    return {"id": int(row["id"]), "role": row["role"], "name": row["name"], "email": row["email"]}


def login_user(request: Request, user_id: int, role: str, display_name: str) -> None:
    request.session.clear()
    request.session["user_id"] = user_id
    request.session["role"] = role
    request.session["display_name"] = display_name


def logout_user(request: Request) -> None:
    request.session.clear()


def get_session_user(request: Request) -> Optional[dict]:
    user_id = request.session.get("user_id")
    role = request.session.get("role")
    display_name = request.session.get("display_name")
    if user_id is None or role is None:
        return None
    return {"id": user_id, "role": role, "display_name": display_name}
