"""Register local images and mirror them to Cloudinary."""

import logging
from pathlib import Path

import duckdb
from PIL import Image
from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn

from cdn_responsive_images.config import UPLOADS_DIR
from cdn_responsive_images.mirror.cloudinary_client import CloudinaryClient
from cdn_responsive_images.mirror.repository import get_attachment, insert_attachment, save_cdn_data
from cdn_responsive_images.models import CdnData

log = logging.getLogger(__name__)


def register_file(
    conn: duckdb.DuckDBPyConnection,
    path: str | Path,
    uploads_dir: Path | None = None,
) -> int:
    """Register an image under the uploads directory and return its attachment ID.

    The stored file path is relative to ``uploads_dir``; pixel dimensions and
    MIME type are read from the file.
    """
    base = uploads_dir or UPLOADS_DIR
    path = Path(path)
    if not path.is_absolute():
        path = base / path
    relative = path.resolve().relative_to(base.resolve()).as_posix()

    with Image.open(path) as img:
        width, height = img.size
        mime_type = Image.MIME.get(img.format) if img.format else None

    return insert_attachment(conn, relative, width, height, mime_type)


def mirror_attachment(
    conn: duckdb.DuckDBPyConnection,
    attachment_id: int,
    client: CloudinaryClient,
    uploads_dir: Path | None = None,
) -> CdnData | None:
    """Upload an attachment and store its CDN data.

    Returns None, leaving the attachment unmirrored, if it does not exist or
    the upload failed.
    """
    meta = get_attachment(conn, attachment_id)
    if meta is None or not meta.file:
        log.debug("Attachment %s has no file to mirror", attachment_id)
        return None

    file_path = (uploads_dir or UPLOADS_DIR) / meta.file
    result = client.upload(file_path)
    if result is None:
        return None

    cdn = CdnData.from_upload(result)
    save_cdn_data(conn, attachment_id, cdn)
    log.info(
        "Mirrored attachment %s as %s (%d breakpoints)",
        attachment_id,
        cdn.public_id,
        len(cdn.variants),
    )
    return cdn


def mirror_attachments(
    conn: duckdb.DuckDBPyConnection,
    attachment_ids: list[int],
    client: CloudinaryClient,
    uploads_dir: Path | None = None,
) -> int:
    """Mirror several attachments with a progress bar. Returns how many succeeded."""
    mirrored = 0
    with Progress(
        SpinnerColumn(),
        TextColumn("[bold blue]{task.description}"),
        BarColumn(),
        TextColumn("[progress.percentage]{task.percentage:>3.0f}%"),
        TextColumn("{task.completed}/{task.total}"),
    ) as progress:
        task = progress.add_task("Mirroring", total=len(attachment_ids))
        for attachment_id in attachment_ids:
            if mirror_attachment(conn, attachment_id, client, uploads_dir) is not None:
                mirrored += 1
            progress.advance(task)
    return mirrored
