# SQL schema for PhraseCoach database

SCHEMA_VERSION = 1

SCHEMA_SQL = """
-- JSON state blobs (review states, daily goal) keyed by name
CREATE TABLE IF NOT EXISTS kv_store (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL,
    updated_at TEXT NOT NULL DEFAULT (datetime('now'))
);
"""
