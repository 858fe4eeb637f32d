from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from sqlstratum import (
    SELECT,
    INSERT,
    UPDATE,
    DELETE,
    COUNT,
    Table,
    col,
)
from sqlstratum.hydrate.pydantic import using_pydantic

from venuedesk.db import unique_violation
from venuedesk.models import ArtistOut, EventImageOut, EventOut, UserOut


users = Table(
    "users",
    col("id", int),
    col("role", str),
    col("name", str),
    col("email", str),
    col("phone", str),
    col("password", str),
    col("created_at", str),
)

artists = Table(
    "artists",
    col("id", int),
    col("name", str),
    col("type", str),
    col("label", str),
    col("members", str),
    col("agency", str),
    col("notes", str),
    col("email", str),
    col("phone", str),
    col("web", str),
    col("created_at", str),
)

events = Table(
    "events",
    col("id", int),
    col("category", str),
    col("title", str),
    col("start_", str),
    col("end_", str),
    col("doors_open", str),
    col("state", str),
    col("floor", str),
    col("responsible_id", int),
    col("light_id", int),
    col("sound_id", int),
    col("artist_care_id", int),
    col("admission", int),
    col("break_even", int),
    col("presstext", str),
    col("notes_internal", str),
    col("technical_notes", str),
    col("api_notes", str),
    col("created_at", str),
)

event_bookings = Table(
    "event_bookings",
    col("event_id", int),
    col("artist_id", int),
)

event_images = Table(
    "event_images",
    col("id", int),
    col("event_id", int),
    col("filename", str),
    col("url", str),
    col("uploaded_at", str),
)

EVENT_WRITE_FIELDS = (
    "category",
    "title",
    "start_",
    "end_",
    "doors_open",
    "state",
    "floor",
    "responsible_id",
    "light_id",
    "sound_id",
    "artist_care_id",
    "admission",
    "break_even",
    "presstext",
    "notes_internal",
    "technical_notes",
    "api_notes",
)

ARTIST_WRITE_FIELDS = ("name", "type", "label", "members", "agency", "notes", "email", "phone", "web")


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _user_columns():
    return (
        users.c.id.AS("id"),
        users.c.role.AS("role"),
        users.c.name.AS("name"),
        users.c.email.AS("email"),
        users.c.phone.AS("phone"),
    )


def _artist_columns():
    return (
        artists.c.id.AS("id"),
        artists.c.name.AS("name"),
        artists.c.type.AS("type"),
        artists.c.label.AS("label"),
        artists.c.members.AS("members"),
        artists.c.agency.AS("agency"),
        artists.c.notes.AS("notes"),
        artists.c.email.AS("email"),
        artists.c.phone.AS("phone"),
        artists.c.web.AS("web"),
    )


def _event_columns():
    return (
        events.c.id.AS("id"),
        events.c.category.AS("category"),
        events.c.title.AS("title"),
        events.c.start_.AS("start_"),
        events.c.end_.AS("end_"),
        events.c.doors_open.AS("doors_open"),
        events.c.state.AS("state"),
        events.c.floor.AS("floor"),
        events.c.responsible_id.AS("responsible_id"),
        events.c.light_id.AS("light_id"),
        events.c.sound_id.AS("sound_id"),
        events.c.artist_care_id.AS("artist_care_id"),
        events.c.admission.AS("admission"),
        events.c.break_even.AS("break_even"),
        events.c.presstext.AS("presstext"),
        events.c.notes_internal.AS("notes_internal"),
        events.c.technical_notes.AS("technical_notes"),
        events.c.api_notes.AS("api_notes"),
        events.c.created_at.AS("created_at"),
    )


# Users


def list_users(runner):
    q = using_pydantic(
        SELECT(*_user_columns())
        .FROM(users)
        .ORDER_BY(users.c.name.ASC())
    ).hydrate(UserOut)
    return runner.fetch_all(q)


def get_user(runner, user_id: int):
    q = using_pydantic(
        SELECT(*_user_columns())
        .FROM(users)
        .WHERE(users.c.id == user_id)
        .LIMIT(1)
    ).hydrate(UserOut)
    return runner.fetch_one(q)


def get_user_credentials(runner, email: str):
    q = (
        SELECT(
            users.c.id.AS("id"),
            users.c.role.AS("role"),
            users.c.name.AS("name"),
            users.c.email.AS("email"),
            users.c.password.AS("password"),
        )
        .FROM(users)
        .WHERE(users.c.email == email)
        .LIMIT(1)
    )
    return runner.fetch_one(q)


def email_taken(runner, email: str, exclude_id: Optional[int] = None) -> bool:
    predicates = [users.c.email == email]
    if exclude_id is not None:
        predicates.append(users.c.id != exclude_id)
    q = SELECT(users.c.id.AS("id")).FROM(users).WHERE(*predicates).LIMIT(1)
    return runner.fetch_one(q) is not None


def user_names(runner) -> dict[int, str]:
    rows = runner.fetch_all(SELECT(users.c.id.AS("id"), users.c.name.AS("name")).FROM(users))
    return {int(row["id"]): row["name"] for row in rows}


def create_user(runner, role: str, name: str, email: str, phone: Optional[str], password_hash: str) -> int:
    with unique_violation("Email already exists"):
        result = runner.execute(
            INSERT(users).VALUES(
                role=role,
                name=name,
                email=email,
                phone=phone,
                password=password_hash,
                created_at=_now(),
            )
        )
    return int(result.lastrowid)


def update_user(
    runner,
    user_id: int,
    role: str,
    name: str,
    email: str,
    phone: Optional[str],
    password_hash: Optional[str] = None,
) -> None:
    values = {"role": role, "name": name, "email": email, "phone": phone}
    if password_hash is not None:
        values["password"] = password_hash
    with unique_violation("Email already exists"):
        runner.execute(UPDATE(users).SET(**values).WHERE(users.c.id == user_id))


def delete_user(runner, user_id: int) -> None:
    runner.execute(DELETE(users).WHERE(users.c.id == user_id))


# Artists


def list_artists(runner):
    q = using_pydantic(
        SELECT(*_artist_columns(), COUNT(event_bookings.c.event_id).AS("event_count"))
        .FROM(artists)
        .LEFT_JOIN(event_bookings, ON=event_bookings.c.artist_id == artists.c.id)
        .GROUP_BY(artists.c.id)
        .ORDER_BY(artists.c.name.ASC())
    ).hydrate(ArtistOut)
    return runner.fetch_all(q)


def get_artist(runner, artist_id: int):
    q = using_pydantic(
        SELECT(*_artist_columns(), COUNT(event_bookings.c.event_id).AS("event_count"))
        .FROM(artists)
        .LEFT_JOIN(event_bookings, ON=event_bookings.c.artist_id == artists.c.id)
        .WHERE(artists.c.id == artist_id)
        .GROUP_BY(artists.c.id)
        .LIMIT(1)
    ).hydrate(ArtistOut)
    return runner.fetch_one(q)


def artist_exists(runner, artist_id: int) -> bool:
    q = SELECT(artists.c.id.AS("id")).FROM(artists).WHERE(artists.c.id == artist_id).LIMIT(1)
    return runner.fetch_one(q) is not None


def artist_name_taken(runner, name: str, exclude_id: Optional[int] = None) -> bool:
    predicates = [artists.c.name == name]
    if exclude_id is not None:
        predicates.append(artists.c.id != exclude_id)
    q = SELECT(artists.c.id.AS("id")).FROM(artists).WHERE(*predicates).LIMIT(1)
    return runner.fetch_one(q) is not None


def create_artist(runner, data: dict) -> int:
    values = {field: data.get(field) for field in ARTIST_WRITE_FIELDS}
    with unique_violation("Artist name already exists"):
        result = runner.execute(INSERT(artists).VALUES(**values, created_at=_now()))
    return int(result.lastrowid)


def update_artist(runner, artist_id: int, data: dict) -> None:
    values = {field: data.get(field) for field in ARTIST_WRITE_FIELDS}
    with unique_violation("Artist name already exists"):
        runner.execute(UPDATE(artists).SET(**values).WHERE(artists.c.id == artist_id))


def delete_artist(runner, artist_id: int) -> None:
    runner.execute(DELETE(event_bookings).WHERE(event_bookings.c.artist_id == artist_id))
    runner.execute(DELETE(artists).WHERE(artists.c.id == artist_id))


def list_artist_events(runner, artist_id: int):
    q = using_pydantic(
        SELECT(*_event_columns())
        .FROM(events)
        .JOIN(event_bookings, ON=event_bookings.c.event_id == events.c.id)
        .WHERE(event_bookings.c.artist_id == artist_id)
        .ORDER_BY(events.c.start_.DESC())
    ).hydrate(EventOut)
    return runner.fetch_all(q)


# Events


def list_events(runner):
    q = using_pydantic(
        SELECT(*_event_columns())
        .FROM(events)
        .ORDER_BY(events.c.start_.DESC())
    ).hydrate(EventOut)
    return runner.fetch_all(q)


def get_event(runner, event_id: int):
    q = using_pydantic(
        SELECT(*_event_columns())
        .FROM(events)
        .WHERE(events.c.id == event_id)
        .LIMIT(1)
    ).hydrate(EventOut)
    return runner.fetch_one(q)


def event_exists(runner, event_id: int) -> bool:
    q = SELECT(events.c.id.AS("id")).FROM(events).WHERE(events.c.id == event_id).LIMIT(1)
    return runner.fetch_one(q) is not None


def list_event_ids(runner) -> list[int]:
    rows = runner.fetch_all(SELECT(events.c.id.AS("id")).FROM(events))
    return [int(row["id"]) for row in rows]


def create_event(runner, data: dict) -> int:
    values = {field: data.get(field) for field in EVENT_WRITE_FIELDS}
    result = runner.execute(INSERT(events).VALUES(**values, created_at=_now()))
    return int(result.lastrowid)


def update_event(runner, event_id: int, data: dict) -> None:
    values = {field: data.get(field) for field in EVENT_WRITE_FIELDS}
    runner.execute(UPDATE(events).SET(**values).WHERE(events.c.id == event_id))


def delete_event(runner, event_id: int) -> None:
    runner.execute(DELETE(event_bookings).WHERE(event_bookings.c.event_id == event_id))
    runner.execute(DELETE(event_images).WHERE(event_images.c.event_id == event_id))
    runner.execute(DELETE(events).WHERE(events.c.id == event_id))


# Bookings


def list_event_artists(runner, event_id: int):
    q = using_pydantic(
        SELECT(*_artist_columns())
        .FROM(artists)
        .JOIN(event_bookings, ON=event_bookings.c.artist_id == artists.c.id)
        .WHERE(event_bookings.c.event_id == event_id)
        .ORDER_BY(artists.c.name.ASC())
    ).hydrate(ArtistOut)
    return runner.fetch_all(q)


def delete_event_bookings(runner, event_id: int) -> None:
    runner.execute(DELETE(event_bookings).WHERE(event_bookings.c.event_id == event_id))


def create_event_booking(runner, event_id: int, artist_id: int) -> None:
    runner.execute(INSERT(event_bookings).VALUES(event_id=event_id, artist_id=artist_id))


# Images


def list_event_images(runner, event_id: int):
    q = using_pydantic(
        SELECT(
            event_images.c.id.AS("id"),
            event_images.c.event_id.AS("event_id"),
            event_images.c.filename.AS("filename"),
            event_images.c.url.AS("url"),
            event_images.c.uploaded_at.AS("uploaded_at"),
        )
        .FROM(event_images)
        .WHERE(event_images.c.event_id == event_id)
        .ORDER_BY(event_images.c.id.ASC())
    ).hydrate(EventImageOut)
    return runner.fetch_all(q)


def get_event_image(runner, event_id: int, image_id: int):
    q = using_pydantic(
        SELECT(
            event_images.c.id.AS("id"),
            event_images.c.event_id.AS("event_id"),
            event_images.c.filename.AS("filename"),
            event_images.c.url.AS("url"),
            event_images.c.uploaded_at.AS("uploaded_at"),
        )
        .FROM(event_images)
        .WHERE(event_images.c.id == image_id, event_images.c.event_id == event_id)
        .LIMIT(1)
    ).hydrate(EventImageOut)
    return runner.fetch_one(q)


def list_image_files(runner) -> set[tuple[int, str]]:
    rows = runner.fetch_all(
        SELECT(event_images.c.event_id.AS("event_id"), event_images.c.filename.AS("filename")).FROM(event_images)
    )
    return {(int(row["event_id"]), row["filename"]) for row in rows}


def create_event_image(runner, event_id: int, filename: str, url: str) -> int:
    result = runner.execute(
        INSERT(event_images).VALUES(
            event_id=event_id,
            filename=filename,
            url=url,
            uploaded_at=_now(),
        )
    )
    return int(result.lastrowid)


def delete_event_image(runner, event_id: int, image_id: int) -> None:
    runner.execute(
        DELETE(event_images).WHERE(event_images.c.id == image_id, event_images.c.event_id == event_id)
    )


def ping(runner) -> bool:
    return runner.fetch_one(SELECT(COUNT(users.c.id).AS("n")).FROM(users)) is not None
