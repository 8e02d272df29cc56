"""Register every image under the uploads directory and mirror it to Cloudinary."""

import time

from cdn_responsive_images.config import LOG_LEVEL, UPLOADS_DIR
from cdn_responsive_images.db import get_connection
from cdn_responsive_images.log import configure_logging
from cdn_responsive_images.mirror.cloudinary_client import CloudinaryClient, is_configured
from cdn_responsive_images.mirror.repository import get_unmirrored_attachment_ids
from cdn_responsive_images.mirror.uploader import mirror_attachment, register_file

IMAGE_SUFFIXES = {".jpg", ".jpeg", ".png", ".gif", ".webp"}


def main() -> None:
    configure_logging(LOG_LEVEL)
    if not is_configured():
        print("Error: Cloudinary credentials not set in .env")
        return

    client = CloudinaryClient()
    conn = get_connection()

    files = sorted(p for p in UPLOADS_DIR.rglob("*") if p.suffix.lower() in IMAGE_SUFFIXES)
    print(f"Found {len(files)} images under {UPLOADS_DIR}\n")
    for path in files:
        try:
            register_file(conn, path)
        except Exception as e:
            print(f"  -> Skipping {path}: {e}")

    ids = get_unmirrored_attachment_ids(conn)
    print(f"{len(ids)} attachments to mirror\n")

    total_mirrored = 0
    for i, attachment_id in enumerate(ids, 1):
        cdn = mirror_attachment(conn, attachment_id, client)
        if cdn is None:
            print(f"[{i}/{len(ids)}] attachment {attachment_id}: upload failed")
        else:
            total_mirrored += 1
            print(f"[{i}/{len(ids)}] attachment {attachment_id}: {len(cdn.variants)} breakpoints")

        # Rate limit: pause between uploads
        time.sleep(0.5)

    conn.close()
    print(f"\nDone! Total attachments mirrored: {total_mirrored}")


if __name__ == "__main__":
    main()
