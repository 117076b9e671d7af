"""Ledger schema: four tables and their supporting indexes."""

TABLES = ("inputs", "notes", "links", "events")

SCHEMA_STATEMENTS = (
    """
    CREATE TABLE IF NOT EXISTS inputs (
        input_id TEXT PRIMARY KEY,
        content TEXT,
        content_sha256 TEXT NOT NULL,
        state TEXT NOT NULL DEFAULT 'active' CHECK(state IN ('active','redacted')),
        created_at TEXT NOT NULL,
        meta_json TEXT,
        CHECK((state = 'redacted') = (content IS NULL))
    )
    """,
    "CREATE INDEX IF NOT EXISTS idx_inputs_sha256 ON inputs(content_sha256)",
    """
    CREATE UNIQUE INDEX IF NOT EXISTS idx_inputs_active_sha256
    ON inputs(content_sha256) WHERE state = 'active'
    """,
    "CREATE INDEX IF NOT EXISTS idx_inputs_state ON inputs(state)",
    """
    CREATE TABLE IF NOT EXISTS notes (
        note_id TEXT PRIMARY KEY,
        created_at TEXT NOT NULL,
        last_seen_at TEXT NOT NULL,
        meta_json TEXT
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS links (
        input_id TEXT NOT NULL REFERENCES inputs(input_id),
        note_id TEXT NOT NULL REFERENCES notes(note_id),
        created_at TEXT NOT NULL,
        PRIMARY KEY (input_id, note_id)
    )
    """,
    "CREATE INDEX IF NOT EXISTS idx_links_input ON links(input_id)",
    "CREATE INDEX IF NOT EXISTS idx_links_note ON links(note_id)",
    """
    CREATE TABLE IF NOT EXISTS events (
        event_id INTEGER PRIMARY KEY AUTOINCREMENT,
        event_type TEXT NOT NULL,
        timestamp TEXT NOT NULL,
        payload TEXT NOT NULL
    )
    """,
    "CREATE INDEX IF NOT EXISTS idx_events_type ON events(event_type)",
    "CREATE INDEX IF NOT EXISTS idx_events_ts ON events(timestamp)",
)

INDEXES = (
    "idx_inputs_sha256",
    "idx_inputs_active_sha256",
    "idx_inputs_state",
    "idx_links_input",
    "idx_links_note",
    "idx_events_type",
    "idx_events_ts",
)
