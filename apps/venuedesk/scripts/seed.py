from __future__ import annotations

import argparse
import random
from datetime import datetime, timedelta, timezone
from pathlib import Path

from faker import Faker

from venuedesk import queries
from venuedesk.auth import hash_password
from venuedesk.bookings import replace_event_artists
from venuedesk.config import Config
from venuedesk.db import Database
from venuedesk.models import ArtistType, EventCategory, EventFloor, EventState, UserRole

DEMO_EMAIL = "admin@example.com"
DEMO_PASSWORD = "admin123"


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Seed VenueDesk data")
    parser.add_argument("--seed", type=int, default=42, help="Random seed")
    parser.add_argument("--users", type=int, default=8, help="Number of staff users besides the demo admin")
    parser.add_argument("--artists", type=int, default=60, help="Number of artists")
    parser.add_argument("--events", type=int, default=80, help="Number of events")
    parser.add_argument("--max-artists", type=int, default=4, help="Max artists booked per event")
    parser.add_argument("--reset", action="store_true", help="Delete existing DB before seeding")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    random.seed(args.seed)
    faker = Faker()
    Faker.seed(args.seed)

    db_path = Path(Config.DB_PATH)
    if args.reset and db_path.exists():
        db_path.unlink()

    database = Database(Config.DB_PATH)
    database.init_schema()

    with database.runner() as runner:
        if not queries.email_taken(runner, DEMO_EMAIL):
            queries.create_user(
                runner,
                role=UserRole.admin.value,
                name="Demo Admin",
                email=DEMO_EMAIL,
                phone=None,
                password_hash=hash_password(DEMO_PASSWORD),
            )

        # one hash for all generated staff keeps seeding fast
        staff_hash = hash_password(DEMO_PASSWORD)
        user_ids = []
        for _ in range(args.users):
            email = faker.unique.email()
            if queries.email_taken(runner, email):
                continue
            user_ids.append(
                queries.create_user(
                    runner,
                    role=random.choice([r.value for r in UserRole]),
                    name=faker.name(),
                    email=email,
                    phone=faker.phone_number() if random.random() < 0.6 else None,
                    password_hash=staff_hash,
                )
            )

        artist_ids = []
        for _ in range(args.artists):
            name = faker.unique.company()
            if queries.artist_name_taken(runner, name):
                continue
            artist_ids.append(
                queries.create_artist(
                    runner,
                    {
                        "name": name,
                        "type": random.choice([t.value for t in ArtistType]),
                        "label": faker.company() if random.random() < 0.4 else None,
                        "agency": faker.company() if random.random() < 0.3 else None,
                        "email": faker.email() if random.random() < 0.5 else None,
                        "web": faker.url() if random.random() < 0.5 else None,
                    },
                )
            )

        now = datetime.now(timezone.utc).replace(minute=0, second=0, microsecond=0)
        booking_count = 0
        for _ in range(args.events):
            start = now + timedelta(days=random.randint(-90, 180), hours=random.randint(0, 6))
            event_id = queries.create_event(
                runner,
                {
                    "category": random.choice([c.value for c in EventCategory]),
                    "title": faker.catch_phrase(),
                    "start_": start.isoformat(),
                    "end_": (start + timedelta(hours=random.randint(3, 9))).isoformat(),
                    "doors_open": (start - timedelta(minutes=random.choice([0, 30, 60]))).isoformat(),
                    "state": random.choice([s.value for s in EventState]),
                    "floor": random.choice([f.value for f in EventFloor]),
                    "responsible_id": random.choice(user_ids) if user_ids else None,
                    "admission": random.randint(0, 100),
                    "break_even": random.randint(0, 100),
                    "presstext": faker.paragraph(nb_sentences=3),
                },
            )
            if artist_ids:
                roster = random.sample(artist_ids, k=min(len(artist_ids), random.randint(0, args.max_artists)))
                booking_count += replace_event_artists(runner, event_id, roster)

    print("Seed complete")
    print(f"Users: {len(user_ids) + 1}")
    print(f"Artists: {len(artist_ids)}")
    print(f"Events: {args.events}")
    print(f"Bookings: {booking_count}")
    print(f"Demo login: {DEMO_EMAIL} / {DEMO_PASSWORD}")


if __name__ == "__main__":
    main()
