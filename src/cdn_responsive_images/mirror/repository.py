"""CRUD operations for attachment and CDN metadata in DuckDB."""

import duckdb

from cdn_responsive_images.models import CdnData, ImageMetadata, Variant


def insert_attachment(
    conn: duckdb.DuckDBPyConnection,
    file: str,
    width: int,
    height: int,
    mime_type: str | None = None,
) -> int:
    """Insert an attachment and return its ID. Returns the existing ID on file conflict."""
    existing = conn.execute("SELECT id FROM attachments WHERE file = ?", [file]).fetchone()
    if existing is not None:
        return existing[0]
    row = conn.execute(
        """
        INSERT INTO attachments (file, width, height, mime_type)
        VALUES (?, ?, ?, ?)
        RETURNING id
        """,
        [file, width, height, mime_type],
    ).fetchone()
    return row[0]


def save_cdn_data(conn: duckdb.DuckDBPyConnection, attachment_id: int, cdn: CdnData) -> None:
    """Store the CDN data of an attachment, replacing any previous mirror."""
    conn.execute("DELETE FROM cdn_breakpoints WHERE attachment_id = ?", [attachment_id])
    conn.execute("DELETE FROM cdn_assets WHERE attachment_id = ?", [attachment_id])
    conn.execute(
        """
        INSERT INTO cdn_assets (
            attachment_id, public_id, width, height, bytes, url, secure_url
        ) VALUES (?, ?, ?, ?, ?, ?, ?)
        """,
        [
            attachment_id,
            cdn.public_id,
            cdn.width,
            cdn.height,
            cdn.bytes,
            cdn.url,
            cdn.secure_url,
        ],
    )
    for position, variant in enumerate(cdn.variants.values()):
        conn.execute(
            """
            INSERT INTO cdn_breakpoints (attachment_id, width, height, secure_url, position)
            VALUES (?, ?, ?, ?, ?)
            """,
            [attachment_id, variant.width, variant.height, variant.secure_url, position],
        )


def get_attachment(conn: duckdb.DuckDBPyConnection, attachment_id: int) -> ImageMetadata | None:
    """Look up a single attachment with its CDN data."""
    return get_attachments(conn, [attachment_id]).get(attachment_id)


def get_attachments(
    conn: duckdb.DuckDBPyConnection, attachment_ids: list[int]
) -> dict[int, ImageMetadata]:
    """Load several attachments in one round of queries, keyed by ID."""
    if not attachment_ids:
        return {}
    placeholders = ", ".join(["?"] * len(attachment_ids))
    rows = conn.execute(
        f"""
        SELECT a.id, a.file, a.width, a.height,
               c.public_id, c.width, c.height, c.bytes, c.url, c.secure_url
        FROM attachments a
        LEFT JOIN cdn_assets c ON c.attachment_id = a.id
        WHERE a.id IN ({placeholders})
        """,
        list(attachment_ids),
    ).fetchall()
    bp_rows = conn.execute(
        f"""
        SELECT attachment_id, width, height, secure_url
        FROM cdn_breakpoints
        WHERE attachment_id IN ({placeholders})
        ORDER BY attachment_id, position
        """,
        list(attachment_ids),
    ).fetchall()

    variants: dict[int, dict[int, Variant]] = {}
    for attachment_id, width, height, secure_url in bp_rows:
        variants.setdefault(attachment_id, {})[width] = Variant(
            width=width, height=height, secure_url=secure_url
        )

    return {row[0]: _row_to_metadata(row, variants.get(row[0], {})) for row in rows}


def list_attachments(
    conn: duckdb.DuckDBPyConnection, mirrored: bool | None = None
) -> list[ImageMetadata]:
    """List attachments, optionally only mirrored or only unmirrored ones."""
    query = "SELECT a.id FROM attachments a LEFT JOIN cdn_assets c ON c.attachment_id = a.id"
    if mirrored is True:
        query += " WHERE c.attachment_id IS NOT NULL"
    elif mirrored is False:
        query += " WHERE c.attachment_id IS NULL"
    query += " ORDER BY a.id"
    ids = [row[0] for row in conn.execute(query).fetchall()]
    found = get_attachments(conn, ids)
    return [found[i] for i in ids]


def get_unmirrored_attachment_ids(conn: duckdb.DuckDBPyConnection) -> list[int]:
    """Return IDs of attachments that have no CDN data yet."""
    rows = conn.execute(
        """
        SELECT a.id
        FROM attachments a
        LEFT JOIN cdn_assets c ON c.attachment_id = a.id
        WHERE c.attachment_id IS NULL
        ORDER BY a.id
        """
    ).fetchall()
    return [row[0] for row in rows]


def _row_to_metadata(row: tuple, variants: dict[int, Variant]) -> ImageMetadata:
    """Convert a joined attachments/cdn_assets row to ImageMetadata.

    Column order:
    0:id, 1:file, 2:width, 3:height,
    4:public_id, 5:cdn width, 6:cdn height, 7:bytes, 8:url, 9:secure_url

    An attachment without a secure URL is treated as not mirrored.
    """
    cdn_data = None
    if row[9]:
        cdn_data = CdnData(
            public_id=row[4],
            width=row[5],
            height=row[6],
            url=row[8],
            secure_url=row[9],
            bytes=row[7],
            variants=variants,
        )
    return ImageMetadata(
        id=row[0],
        file=row[1],
        width=row[2],
        height=row[3],
        cdn_data=cdn_data,
    )
