"""Render CLI: resolve CDN URLs and rewrite HTML content against the attachment DB."""

import argparse
import re
import sys


def main() -> None:
    """CLI entry point for rendering helpers."""
    parser = argparse.ArgumentParser(description="Serve attachment images from the CDN")
    parser.add_argument("--db", help="DuckDB file (default: project-root DB)")
    subparsers = parser.add_subparsers(dest="command")

    rw_parser = subparsers.add_parser("rewrite", help="Add srcset/sizes to images in an HTML file")
    rw_parser.add_argument("file", help="HTML file to rewrite")
    rw_parser.add_argument("-o", "--output", help="Write here instead of stdout")

    url_parser = subparsers.add_parser("url", help="Resolve the URL of an attachment")
    url_parser.add_argument("attachment_id", type=int)
    url_parser.add_argument("local_url", help="URL to use when the image is not mirrored")

    ds_parser = subparsers.add_parser("downsize", help="Resolve a CDN rendition for a size")
    ds_parser.add_argument("attachment_id", type=int)
    ds_parser.add_argument("size", help="Size name (e.g. medium) or WIDTHxHEIGHT")

    args = parser.parse_args()

    if args.command is None:
        parser.print_help()
        return

    from cdn_responsive_images.config import LOG_LEVEL
    from cdn_responsive_images.db import get_connection
    from cdn_responsive_images.integration import CdnImageIntegration
    from cdn_responsive_images.log import configure_logging
    from cdn_responsive_images.store import AttachmentStore

    configure_logging(LOG_LEVEL)

    conn = get_connection(args.db)
    integration = CdnImageIntegration(AttachmentStore(conn))

    if args.command == "rewrite":
        with open(args.file, encoding="utf-8") as f:
            content = f.read()
        result = integration.rewrite_content(content)
        if args.output:
            with open(args.output, "w", encoding="utf-8") as f:
                f.write(result)
        else:
            sys.stdout.write(result)

    elif args.command == "url":
        print(integration.resolve_attachment_url(args.attachment_id, args.local_url))

    elif args.command == "downsize":
        result = integration.resolve_downsize(args.attachment_id, parse_size_arg(args.size))
        if result is None:
            print("No CDN rendition; render locally.")
        else:
            print(f"{result.url} {result.width}x{result.height}")

    conn.close()


def parse_size_arg(value: str) -> str | tuple[int, int]:
    """Parse "300x200" into a (width, height) pair; anything else is a size name."""
    match = re.fullmatch(r"(\d+)x(\d+)", value.strip())
    if match:
        return int(match.group(1)), int(match.group(2))
    return value
