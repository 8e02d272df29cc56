"""Pick the CDN URL and dimensions for a single requested image size."""

import logging

from cdn_responsive_images.config import CDN_UPLOAD_MARKER
from cdn_responsive_images.models import DownsizeResult, ImageMetadata
from cdn_responsive_images.responsive.resize import image_resize_dimensions
from cdn_responsive_images.responsive.sizes import SizeRegistry, resolve_sizes

log = logging.getLogger(__name__)

FILL_CROP = "c_lfill"
LIMIT = "c_limit"

RequestedSize = str | tuple[int, int] | list[int]


def build_transformation_url(secure_url: str, width: int, height: int, crop: bool = False) -> str:
    """Insert a resize transformation after the upload path of a CDN URL.

    ``crop`` fills the box exactly, otherwise the image is limited to fit in it.
    A URL without the upload marker is returned unchanged.
    """
    mode = FILL_CROP if crop else LIMIT
    if CDN_UPLOAD_MARKER not in secure_url:
        log.debug("No %s segment in %s, leaving URL untransformed", CDN_UPLOAD_MARKER, secure_url)
    return secure_url.replace(
        CDN_UPLOAD_MARKER, f"{CDN_UPLOAD_MARKER}/w_{width},h_{height},{mode}"
    )


def select_for_size(
    metadata: ImageMetadata | None,
    size: RequestedSize,
    registry: SizeRegistry,
) -> DownsizeResult | None:
    """Resolve a size name or an explicit (width, height) to a CDN rendition.

    Returns None whenever local rendering should be used instead: the image is
    not mirrored, the name is unknown or cropped, or the size does not fit in
    the CDN master.
    """
    if metadata is None or not metadata.is_mirrored:
        return None
    cdn = metadata.cdn_data

    if isinstance(size, str):
        definition = resolve_sizes(size, registry).get(size)
        if definition is None or definition.crop:
            return None
        if definition.width > cdn.width or definition.height > cdn.height:
            return None

        width, height = definition.width, definition.height
        dims = image_resize_dimensions(
            metadata.width, metadata.height, definition.width, definition.height, definition.crop
        )
        if dims:
            width, height = dims[4], dims[5]

        return DownsizeResult(
            url=build_transformation_url(cdn.secure_url, width, height, crop=definition.crop),
            width=width,
            height=height,
            is_constrained=True,
        )

    if isinstance(size, (tuple, list)) and len(size) == 2:
        width, height = int(size[0]), int(size[1])
        return DownsizeResult(
            url=build_transformation_url(cdn.secure_url, width, height),
            width=width,
            height=height,
            is_constrained=True,
        )

    return None
