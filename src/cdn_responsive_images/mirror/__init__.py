"""Attachment management CLI: register local images and mirror them to Cloudinary."""

import argparse


def main() -> None:
    """CLI entry point for attachment management."""
    parser = argparse.ArgumentParser(description="CDN image mirror manager")
    parser.add_argument("--db", help="DuckDB file (default: project-root DB)")
    subparsers = parser.add_subparsers(dest="command")

    # init-db
    subparsers.add_parser("init-db", help="Initialize the database schema")

    # register
    reg_parser = subparsers.add_parser("register", help="Register a local image as an attachment")
    reg_parser.add_argument(
        "file", help="Image path, absolute or relative to the uploads directory"
    )
    reg_parser.add_argument(
        "--mirror", action="store_true", help="Upload to Cloudinary right after registering"
    )

    # mirror
    mirror_parser = subparsers.add_parser("mirror", help="Upload attachments to Cloudinary")
    mirror_parser.add_argument(
        "--attachment-id", type=int, help="Mirror only this attachment (default: all unmirrored)"
    )

    # list
    list_parser = subparsers.add_parser("list", help="List attachments in DB")
    group = list_parser.add_mutually_exclusive_group()
    group.add_argument("--mirrored", action="store_true", help="Only mirrored attachments")
    group.add_argument("--unmirrored", action="store_true", help="Only unmirrored attachments")

    args = parser.parse_args()

    if args.command is None:
        parser.print_help()
        return

    from cdn_responsive_images.config import LOG_LEVEL
    from cdn_responsive_images.log import configure_logging

    configure_logging(LOG_LEVEL)

    if args.command == "init-db":
        from cdn_responsive_images.db import get_connection

        conn = get_connection(args.db)
        conn.close()
        print("Database initialized successfully.")

    elif args.command == "register":
        _cmd_register(args)

    elif args.command == "mirror":
        _cmd_mirror(args)

    elif args.command == "list":
        from cdn_responsive_images.db import get_connection
        from cdn_responsive_images.mirror.repository import list_attachments

        mirrored = True if args.mirrored else False if args.unmirrored else None
        conn = get_connection(args.db)
        attachments = list_attachments(conn, mirrored=mirrored)
        conn.close()
        for meta in attachments:
            cdn_info = meta.cdn_data.secure_url if meta.is_mirrored else "(local only)"
            variants = len(meta.cdn_data.variants) if meta.is_mirrored else 0
            print(
                f"  {meta.id:>5}  {meta.width}x{meta.height}  {meta.file}"
                f"  {cdn_info}  [{variants} breakpoints]"
            )


def _make_client():
    """Build a Cloudinary client, or report missing credentials."""
    from cdn_responsive_images.mirror.cloudinary_client import CloudinaryClient, is_configured

    if not is_configured():
        print("Error: Cloudinary credentials missing (set CLOUDINARY_* in .env)")
        return None
    return CloudinaryClient()


def _cmd_register(args: argparse.Namespace) -> None:
    """Register a local image and optionally mirror it."""
    from cdn_responsive_images.db import get_connection
    from cdn_responsive_images.mirror.uploader import mirror_attachment, register_file

    conn = get_connection(args.db)
    attachment_id = register_file(conn, args.file)
    print(f"Registered attachment {attachment_id}.")

    if args.mirror:
        client = _make_client()
        if client is not None:
            cdn = mirror_attachment(conn, attachment_id, client)
            if cdn is None:
                print("Upload failed; the image will be served locally.")
            else:
                print(f"Mirrored as {cdn.secure_url} ({len(cdn.variants)} breakpoints).")
    conn.close()


def _cmd_mirror(args: argparse.Namespace) -> None:
    """Upload one or all unmirrored attachments."""
    from cdn_responsive_images.db import get_connection
    from cdn_responsive_images.mirror.repository import get_unmirrored_attachment_ids
    from cdn_responsive_images.mirror.uploader import mirror_attachments

    client = _make_client()
    if client is None:
        return

    conn = get_connection(args.db)
    if args.attachment_id is not None:
        ids = [args.attachment_id]
    else:
        ids = get_unmirrored_attachment_ids(conn)

    if not ids:
        print("Nothing to mirror.")
        conn.close()
        return

    mirrored = mirror_attachments(conn, ids, client)
    conn.close()
    print(f"Mirrored {mirrored} of {len(ids)} attachments.")
