"""DuckDB schema definition and migration."""

import duckdb


def ensure_schema(conn: duckdb.DuckDBPyConnection) -> None:
    """Create tables and indexes if they do not exist."""
    conn.execute("CREATE SEQUENCE IF NOT EXISTS attachments_id_seq START 1")
    conn.execute("""
        CREATE TABLE IF NOT EXISTS attachments (
            id          INTEGER PRIMARY KEY DEFAULT nextval('attachments_id_seq'),
            file        VARCHAR NOT NULL UNIQUE,
            width       INTEGER NOT NULL,
            height      INTEGER NOT NULL,
            mime_type   VARCHAR,
            created_at  TIMESTAMP DEFAULT current_timestamp
        )
    """)

    # cdn_assets table (0..1 per attachment, written once the image is mirrored)
    conn.execute("""
        CREATE TABLE IF NOT EXISTS cdn_assets (
            attachment_id INTEGER PRIMARY KEY,
            public_id     VARCHAR NOT NULL,
            width         INTEGER NOT NULL,
            height        INTEGER NOT NULL,
            bytes         BIGINT,
            url           VARCHAR NOT NULL,
            secure_url    VARCHAR NOT NULL,
            uploaded_at   TIMESTAMP DEFAULT current_timestamp,
            FOREIGN KEY (attachment_id) REFERENCES attachments(id)
        )
    """)

    # cdn_breakpoints table (1:N with cdn_assets; position keeps insertion order)
    conn.execute("""
        CREATE TABLE IF NOT EXISTS cdn_breakpoints (
            attachment_id INTEGER NOT NULL,
            width         INTEGER NOT NULL,
            height        INTEGER NOT NULL,
            secure_url    VARCHAR NOT NULL,
            position      INTEGER NOT NULL,
            PRIMARY KEY (attachment_id, width),
            FOREIGN KEY (attachment_id) REFERENCES attachments(id)
        )
    """)
    conn.execute(
        "CREATE INDEX IF NOT EXISTS idx_breakpoints_attachment ON cdn_breakpoints(attachment_id)"
    )

    _migrate(conn)


def _migrate(conn: duckdb.DuckDBPyConnection) -> None:
    """Add columns that may not exist in older schemas."""
    migrations = [
        "ALTER TABLE attachments ADD COLUMN IF NOT EXISTS mime_type VARCHAR",
        "ALTER TABLE cdn_assets ADD COLUMN IF NOT EXISTS bytes BIGINT",
    ]
    for sql in migrations:
        conn.execute(sql)
