"""Entry points the rendering layer calls to serve images from the CDN.

Build one ``CdnImageIntegration`` when wiring the application and hand it to
whatever renders attachments and content. Every method falls back to the
caller's local rendering (by returning None or its input unchanged) when an
image is not mirrored.
"""

import logging
from pathlib import Path

from cdn_responsive_images.mirror.cloudinary_client import CloudinaryClient
from cdn_responsive_images.mirror.uploader import mirror_attachment
from cdn_responsive_images.models import CdnData, DownsizeResult
from cdn_responsive_images.responsive.rewriter import rewrite_content
from cdn_responsive_images.responsive.selector import RequestedSize, select_for_size
from cdn_responsive_images.responsive.sizes import SizeRegistry, resolve_sizes
from cdn_responsive_images.responsive.srcset import (
    SizesHook,
    build_responsive_attributes,
    default_sizes_hook,
)
from cdn_responsive_images.store import AttachmentStore, MetadataStore

log = logging.getLogger(__name__)


class CdnImageIntegration:
    """Resolve attachment URLs, sizes and responsive attributes against CDN data."""

    def __init__(
        self,
        store: MetadataStore,
        registry: SizeRegistry | None = None,
        sizes_hook: SizesHook = default_sizes_hook,
    ) -> None:
        self.store = store
        self.registry = registry or SizeRegistry()
        self.sizes_hook = sizes_hook

    def resolve_downsize(self, attachment_id: int, size: RequestedSize) -> DownsizeResult | None:
        metadata = self.store.get_attachment_metadata(attachment_id)
        return select_for_size(metadata, size, self.registry)

    def resolve_attachment_url(self, attachment_id: int, local_url: str) -> str:
        """The CDN URL of the master image, or ``local_url`` if not mirrored."""
        metadata = self.store.get_attachment_metadata(attachment_id)
        if metadata is not None and metadata.is_mirrored:
            return metadata.cdn_data.secure_url
        return local_url

    def build_image_attributes(
        self, attachment_id: int, size: RequestedSize, attributes: dict[str, str]
    ) -> dict[str, str]:
        """Return ``attributes`` with ``srcset`` and ``sizes`` for a rendered image.

        Cropped and unknown named sizes are returned unchanged, as are images
        without CDN breakpoints.
        """
        metadata = self.store.get_attachment_metadata(attachment_id)
        if metadata is None:
            return attributes

        if isinstance(size, str):
            if size == "full":
                width, height = metadata.width, metadata.height
            else:
                definition = resolve_sizes(size, self.registry).get(size)
                if definition is None or definition.crop:
                    return attributes
                width, height = definition.width, definition.height
        elif isinstance(size, (tuple, list)) and len(size) == 2:
            width, height = int(size[0]), int(size[1])
        else:
            return attributes

        responsive = build_responsive_attributes(metadata, width)
        if responsive is None:
            return attributes

        src = attributes.get("src", "")
        sizes = self.sizes_hook(responsive.sizes, (width, height), src, metadata, attachment_id)

        result = dict(attributes)
        result["srcset"] = responsive.srcset
        result["sizes"] = sizes
        return result

    def rewrite_content(self, content: str) -> str:
        return rewrite_content(content, self.store, self.sizes_hook)

    def generate_cdn_data(
        self,
        attachment_id: int,
        client: CloudinaryClient,
        uploads_dir: Path | None = None,
    ) -> CdnData | None:
        """Mirror a newly stored attachment. Only works with an ``AttachmentStore``."""
        if not isinstance(self.store, AttachmentStore):
            raise TypeError("generate_cdn_data needs an AttachmentStore")
        cdn = mirror_attachment(self.store.conn, attachment_id, client, uploads_dir)
        self.store.invalidate(attachment_id)
        return cdn
