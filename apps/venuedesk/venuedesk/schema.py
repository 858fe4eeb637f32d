from __future__ import annotations

SCHEMA_SQL = """
PRAGMA foreign_keys = ON;

CREATE TABLE IF NOT EXISTS users (
  id INTEGER PRIMARY KEY AUTOINCREMENT,
  role TEXT NOT NULL,
  name TEXT NOT NULL,
  email TEXT NOT NULL UNIQUE,
  phone TEXT,
  password TEXT NOT NULL,
  created_at TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS artists (
  id INTEGER PRIMARY KEY AUTOINCREMENT,
  name TEXT NOT NULL UNIQUE,
  type TEXT NOT NULL,
  label TEXT,
  members TEXT,
  agency TEXT,
  notes TEXT,
  email TEXT,
  phone TEXT,
  web TEXT,
  created_at TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS events (
  id INTEGER PRIMARY KEY AUTOINCREMENT,
  category TEXT NOT NULL DEFAULT 'Concert',
  title TEXT NOT NULL,
  start_ TEXT NOT NULL,
  end_ TEXT,
  doors_open TEXT,
  state TEXT,
  floor TEXT,
  responsible_id INTEGER,
  light_id INTEGER,
  sound_id INTEGER,
  artist_care_id INTEGER,
  admission INTEGER CHECK (admission BETWEEN 0 AND 100),
  break_even INTEGER CHECK (break_even BETWEEN 0 AND 100),
  presstext TEXT,
  notes_internal TEXT,
  technical_notes TEXT,
  api_notes TEXT,
  created_at TEXT NOT NULL,
  FOREIGN KEY(responsible_id) REFERENCES users(id) ON DELETE SET NULL,
  FOREIGN KEY(light_id) REFERENCES users(id) ON DELETE SET NULL,
  FOREIGN KEY(sound_id) REFERENCES users(id) ON DELETE SET NULL,
  FOREIGN KEY(artist_care_id) REFERENCES users(id) ON DELETE SET NULL
);

CREATE TABLE IF NOT EXISTS event_bookings (
  event_id INTEGER NOT NULL,
  artist_id INTEGER NOT NULL,
  PRIMARY KEY (event_id, artist_id),
  FOREIGN KEY(event_id) REFERENCES events(id) ON DELETE CASCADE,
  FOREIGN KEY(artist_id) REFERENCES artists(id) ON DELETE CASCADE
);

CREATE TABLE IF NOT EXISTS event_images (
  id INTEGER PRIMARY KEY AUTOINCREMENT,
  event_id INTEGER NOT NULL,
  filename TEXT NOT NULL,
  url TEXT NOT NULL,
  uploaded_at TEXT NOT NULL,
  FOREIGN KEY(event_id) REFERENCES events(id) ON DELETE CASCADE
);

CREATE INDEX IF NOT EXISTS idx_events_start ON events(start_);
CREATE INDEX IF NOT EXISTS idx_event_bookings_artist_id ON event_bookings(artist_id);
CREATE INDEX IF NOT EXISTS idx_event_images_event_id ON event_images(event_id);
"""
