from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, EmailStr, Field, ValidationError, field_validator, model_validator
from pydantic_core import PydanticCustomError

MIN_PASSWORD_LENGTH = 6


class UserRole(str, Enum):
    admin = "Admin"
    booker = "Booker"
    door = "Door"
    event_manager = "Event Manager"
    other = "Other"


class ArtistType(str, Enum):
    dj = "DJ"
    live = "Live"
    drag_performance = "Drag Performance"


class EventCategory(str, Enum):
    concert = "Concert"
    rave = "Rave"


class EventState(str, Enum):
    confirmed = "Confirmed"
    option = "Option"
    idea = "Idea"
    cancelled = "Cancelled"


class EventFloor(str, Enum):
    eli = "Eli"
    xxs = "Xxs"
    garderobenfloor = "Garderobenfloor"
    open_air = "Open Air"


# Error types whose message already reads as a full sentence.
PLAIN_ERROR_TYPES = {
    "missing_fields",
    "invalid_role",
    "invalid_artist_type",
    "invalid_category",
    "invalid_state",
    "invalid_floor",
    "password_too_short",
}


def validation_message(exc: ValidationError) -> str:
    messages = []
    for err in exc.errors():
        field = ".".join(str(part) for part in err["loc"])
        if err["type"] in PLAIN_ERROR_TYPES or not field:
            messages.append(err["msg"])
        else:
            messages.append(f"{field}: {err['msg']}")
    return "; ".join(messages)


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _blank_to_none(data: Any, fields: tuple[str, ...]) -> Any:
    if not isinstance(data, dict):
        return data
    data = dict(data)
    for field in fields:
        if field in data and _is_blank(data[field]):
            data[field] = None
    return data


def _require(data: Any, *fields: str) -> Any:
    if isinstance(data, dict) and any(_is_blank(data.get(field)) for field in fields):
        raise PydanticCustomError("missing_fields", "Missing required fields")
    return data


def _check_choice(value: Any, choices: type[Enum], error_type: str, message: str) -> Any:
    if value is None or isinstance(value, choices):
        return value
    if not isinstance(value, str) or value not in {member.value for member in choices}:
        raise PydanticCustomError(error_type, message)
    return value


def _check_password(value: Optional[str]) -> Optional[str]:
    if value is not None and len(value) < MIN_PASSWORD_LENGTH:
        raise PydanticCustomError(
            "password_too_short",
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters",
        )
    return value


def _check_user_fields(data: Any) -> Any:
    # role before password, stopping at the first failure
    if isinstance(data, dict):
        _check_choice(data.get("role"), UserRole, "invalid_role", "Invalid role")
        if isinstance(data.get("password"), str):
            _check_password(data["password"])
    return data


class UserCreate(BaseModel):
    role: UserRole
    name: str
    email: EmailStr
    phone: Optional[str] = None
    password: str

    @model_validator(mode="before")
    @classmethod
    def _check_required(cls, data: Any):
        data = _blank_to_none(data, ("phone",))
        return _check_user_fields(_require(data, "role", "name", "email", "password"))


class RegisterRequest(UserCreate):
    """Self-service sign-up payload, validated like an admin-created user."""


class UserUpdate(BaseModel):
    role: UserRole
    name: str
    email: EmailStr
    phone: Optional[str] = None
    password: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def _check_required(cls, data: Any):
        data = _blank_to_none(data, ("phone", "password"))
        return _check_user_fields(_require(data, "role", "name", "email"))


class UserOut(BaseModel):
    id: int
    role: UserRole
    name: str
    email: str
    phone: Optional[str] = None


class LoginRequest(BaseModel):
    email: str
    password: str

    @model_validator(mode="before")
    @classmethod
    def _check_required(cls, data: Any):
        return _require(data, "email", "password")


ARTIST_OPTIONAL_FIELDS = ("label", "members", "agency", "notes", "email", "phone", "web")


class ArtistCreate(BaseModel):
    name: str
    type: ArtistType
    label: Optional[str] = None
    members: Optional[str] = None
    agency: Optional[str] = None
    notes: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    web: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def _check_required(cls, data: Any):
        data = _blank_to_none(data, ARTIST_OPTIONAL_FIELDS)
        return _require(data, "name", "type")

    @field_validator("type", mode="before")
    @classmethod
    def _validate_type(cls, value: Any):
        return _check_choice(value, ArtistType, "invalid_artist_type", "Invalid artist type")


class ArtistOut(BaseModel):
    id: int
    name: str
    type: ArtistType
    label: Optional[str] = None
    members: Optional[str] = None
    agency: Optional[str] = None
    notes: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    web: Optional[str] = None
    event_count: Optional[int] = None


EVENT_TIME_FIELDS = ("start_", "end_", "doors_open")
EVENT_USER_FIELDS = ("responsible_id", "light_id", "sound_id", "artist_care_id")
EVENT_OPTIONAL_FIELDS = (
    "end_",
    "doors_open",
    "state",
    "floor",
    "admission",
    "break_even",
    "presstext",
    "notes_internal",
    "technical_notes",
    "api_notes",
)


class EventCreate(BaseModel):
    category: EventCategory = EventCategory.concert
    title: str
    start_: datetime
    end_: Optional[datetime] = None
    doors_open: Optional[datetime] = None
    state: Optional[EventState] = None
    floor: Optional[EventFloor] = None
    responsible_id: Optional[int] = None
    light_id: Optional[int] = None
    sound_id: Optional[int] = None
    artist_care_id: Optional[int] = None
    admission: Optional[int] = Field(default=None, ge=0, le=100)
    break_even: Optional[int] = Field(default=None, ge=0, le=100)
    presstext: Optional[str] = None
    notes_internal: Optional[str] = None
    technical_notes: Optional[str] = None
    api_notes: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def _normalize(cls, data: Any):
        if not isinstance(data, dict):
            return data
        data = _blank_to_none(data, EVENT_OPTIONAL_FIELDS + EVENT_USER_FIELDS)
        if _is_blank(data.get("category")):
            data["category"] = EventCategory.concert.value
        for field in EVENT_USER_FIELDS:
            # 0 is the "nobody assigned" choice of the event form
            if data.get(field) in (0, "0"):
                data[field] = None
        return _require(data, "title", "start_")

    @field_validator("category", mode="before")
    @classmethod
    def _validate_category(cls, value: Any):
        return _check_choice(value, EventCategory, "invalid_category", "Invalid event category")

    @field_validator("state", mode="before")
    @classmethod
    def _validate_state(cls, value: Any):
        return _check_choice(value, EventState, "invalid_state", "Invalid event state")

    @field_validator("floor", mode="before")
    @classmethod
    def _validate_floor(cls, value: Any):
        return _check_choice(value, EventFloor, "invalid_floor", "Invalid floor")

    @field_validator(*EVENT_TIME_FIELDS)
    @classmethod
    def _as_utc(cls, value: Optional[datetime]):
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    def user_ids(self) -> list[int]:
        return [value for value in (getattr(self, field) for field in EVENT_USER_FIELDS) if value is not None]


class EventOut(BaseModel):
    id: int
    category: EventCategory
    title: str
    start_: datetime
    end_: Optional[datetime] = None
    doors_open: Optional[datetime] = None
    state: Optional[EventState] = None
    floor: Optional[EventFloor] = None
    responsible_id: Optional[int] = None
    light_id: Optional[int] = None
    sound_id: Optional[int] = None
    artist_care_id: Optional[int] = None
    admission: Optional[int] = None
    break_even: Optional[int] = None
    presstext: Optional[str] = None
    notes_internal: Optional[str] = None
    technical_notes: Optional[str] = None
    api_notes: Optional[str] = None
    created_at: datetime
    responsible_name: Optional[str] = None
    light_name: Optional[str] = None
    sound_name: Optional[str] = None
    artist_care_name: Optional[str] = None


class EventImageOut(BaseModel):
    id: int
    event_id: int
    filename: str
    url: str
    uploaded_at: datetime
