from __future__ import annotations

import logging
import re
import shutil
import uuid
from pathlib import Path

from venuedesk import queries
from venuedesk.errors import NotFoundError

logger = logging.getLogger(__name__)

URL_PREFIX = "/uploads"


def make_filename(original_name: str) -> str:
    basename = Path(original_name.replace("\\", "/")).name
    basename = re.sub(r"\s+", "-", basename).lower() or "image"
    return f"{uuid.uuid4()}-{basename}"


class ImageStore:
    def __init__(self, upload_dir: str) -> None:
        self.root = Path(upload_dir)

    def event_dir(self, event_id: int) -> Path:
        return self.root / "events" / str(event_id)

    def url_for(self, event_id: int, filename: str) -> str:
        return f"{URL_PREFIX}/events/{event_id}/{filename}"

    def save(self, runner, event_id: int, original_name: str, content: bytes):
        """Write the file, then record it. The file is removed again if the row cannot be written."""
        target_dir = self.event_dir(event_id)
        target_dir.mkdir(parents=True, exist_ok=True)
        filename = make_filename(original_name)
        path = target_dir / filename
        path.write_bytes(content)
        try:
            image_id = queries.create_event_image(runner, event_id, filename, self.url_for(event_id, filename))
        except Exception:
            path.unlink(missing_ok=True)
            raise
        logger.info("Stored image %s for event %s (%d bytes)", filename, event_id, len(content))
        return queries.get_event_image(runner, event_id, image_id)

    def delete(self, runner, event_id: int, image_id: int) -> None:
        image = queries.get_event_image(runner, event_id, image_id)
        if image is None:
            raise NotFoundError("Image not found")
        with runner.transaction():
            queries.delete_event_image(runner, event_id, image_id)
        self._remove_file(self.event_dir(event_id) / image.filename)
        logger.info("Deleted image %s of event %s", image_id, event_id)

    def purge_event(self, event_id: int) -> None:
        target_dir = self.event_dir(event_id)
        if target_dir.exists():
            shutil.rmtree(target_dir)
            logger.info("Removed upload directory of event %s", event_id)

    def sweep_orphans(self, runner, dry_run: bool = False) -> list[Path]:
        """Delete files without an ``event_images`` row and directories of deleted events."""
        events_root = self.root / "events"
        if not events_root.is_dir():
            return []
        known_files = queries.list_image_files(runner)
        known_events = set(queries.list_event_ids(runner))
        removed = []
        for event_dir in sorted(p for p in events_root.iterdir() if p.is_dir()):
            event_id = int(event_dir.name) if event_dir.name.isdigit() else None
            if event_id is None or event_id not in known_events:
                removed.append(event_dir)
                if not dry_run:
                    shutil.rmtree(event_dir)
                continue
            for path in sorted(p for p in event_dir.iterdir() if p.is_file()):
                if (event_id, path.name) not in known_files:
                    removed.append(path)
                    if not dry_run:
                        path.unlink()
        logger.info("Upload sweep %s %d orphan(s)", "found" if dry_run else "removed", len(removed))
        return removed

    def _remove_file(self, path: Path) -> None:
        try:
            path.unlink(missing_ok=True)
        except OSError:
            # the row is already gone; sweep_orphans picks the file up later
            logger.warning("Could not remove %s", path, exc_info=True)
