from __future__ import annotations

import argparse
import logging

from venuedesk.config import Config
from venuedesk.db import Database
from venuedesk.images import ImageStore


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Remove uploaded files that no event_images row refers to")
    parser.add_argument("--upload-dir", default=Config.UPLOAD_DIR, help="Upload root directory")
    parser.add_argument("--dry-run", action="store_true", help="List orphans without deleting them")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    logging.basicConfig(level=logging.DEBUG if Config.DEBUG else logging.INFO)

    database = Database(Config.DB_PATH)
    database.init_schema()
    with database.runner() as runner:
        removed = ImageStore(args.upload_dir).sweep_orphans(runner, dry_run=args.dry_run)

    label = "Would remove" if args.dry_run else "Removed"
    for path in removed:
        print(f"{label}: {path}")
    print(f"{label} {len(removed)} orphan(s)")


if __name__ == "__main__":
    main()
