"""Add CDN ``srcset``/``sizes`` attributes to image tags in HTML content.

Tags are found with a flat regex scan rather than an HTML parser: a tag is
``<img `` up to the first ``>``. Tags that already carry ``srcset`` are left
alone, which makes rewriting idempotent.
"""

import posixpath
import re

from cdn_responsive_images.models import ImageMetadata
from cdn_responsive_images.responsive.selector import FILL_CROP
from cdn_responsive_images.responsive.srcset import (
    SizesHook,
    build_responsive_attributes,
    default_sizes_hook,
)
from cdn_responsive_images.store import MetadataStore

IMG_TAG_RE = re.compile(r"<img [^>]+>")
ATTACHMENT_CLASS_RE = re.compile(r"wp-image-([0-9]+)", re.IGNORECASE)
SRC_RE = re.compile(r'src="([^"]+)"')
WIDTH_RE = re.compile(r' width="([0-9]+)"')
HEIGHT_RE = re.compile(r' height="([0-9]+)"')


def find_image_tags(content: str) -> list[str]:
    return IMG_TAG_RE.findall(content)


def select_images(tags: list[str]) -> dict[str, int]:
    """Map each distinct, not yet responsive, managed tag to its attachment ID."""
    selected: dict[str, int] = {}
    for tag in tags:
        if " srcset=" in tag:
            continue
        match = ATTACHMENT_CLASS_RE.search(tag)
        if not match:
            continue
        attachment_id = int(match.group(1))
        if attachment_id:
            selected[tag] = attachment_id
    return selected


def _int_attr(pattern: re.Pattern, tag: str) -> int:
    match = pattern.search(tag)
    return int(match.group(1)) if match else 0


def add_srcset_and_sizes(
    tag: str,
    metadata: ImageMetadata | None,
    attachment_id: int,
    sizes_hook: SizesHook = default_sizes_hook,
) -> str:
    """Return ``tag`` with ``srcset`` and ``sizes`` inserted after ``src``.

    The tag is returned unchanged unless its ``src`` points at the mirrored
    file and is not already a fill-cropped rendition.
    """
    if metadata is None or not metadata.is_mirrored:
        return tag

    src_match = SRC_RE.search(tag)
    src = src_match.group(1) if src_match else ""
    filename = posixpath.basename(metadata.cdn_data.url)
    if not filename or filename not in src or FILL_CROP in src:
        return tag

    width = _int_attr(WIDTH_RE, tag)
    height = _int_attr(HEIGHT_RE, tag)

    attributes = build_responsive_attributes(metadata, width)
    if attributes is None:
        return tag
    sizes = sizes_hook(attributes.sizes, (width, height), src, metadata, attachment_id)
    attributes = attributes.with_sizes(sizes)

    return SRC_RE.sub(
        lambda m: f'{m.group(0)} srcset="{attributes.srcset}" sizes="{attributes.sizes}"',
        tag,
        count=1,
    )


def rewrite_content(
    content: str,
    store: MetadataStore,
    sizes_hook: SizesHook = default_sizes_hook,
) -> str:
    """Make every managed image in ``content`` responsive."""
    tags = find_image_tags(content)
    if not tags:
        return content

    selected = select_images(tags)

    attachment_ids = list(dict.fromkeys(selected.values()))
    if len(attachment_ids) > 1:
        store.prefetch(attachment_ids)

    for tag, attachment_id in selected.items():
        metadata = store.get_attachment_metadata(attachment_id)
        rewritten = add_srcset_and_sizes(tag, metadata, attachment_id, sizes_hook)
        if rewritten != tag:
            content = content.replace(tag, rewritten)
    return content
