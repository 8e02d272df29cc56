"""Build ``srcset`` and ``sizes`` values from CDN breakpoints."""

from collections.abc import Mapping
from typing import Protocol

from cdn_responsive_images.models import ImageMetadata, ResponsiveAttributes, Variant


class SizesHook(Protocol):
    """Adjusts the default ``sizes`` value before it is written out."""

    def __call__(
        self,
        sizes: str,
        size: tuple[int, int],
        src: str,
        metadata: ImageMetadata,
        attachment_id: int,
    ) -> str: ...


def default_sizes_hook(
    sizes: str,
    size: tuple[int, int],
    src: str,
    metadata: ImageMetadata,
    attachment_id: int,
) -> str:
    return sizes


def build_srcset(variants: Mapping[int, Variant]) -> str:
    """One ``"<url> <width>w"`` candidate per variant, in mapping order."""
    return ", ".join(
        f"{variant.secure_url.replace(' ', '%20')} {variant.width}w"
        for variant in variants.values()
    )


def default_sizes(display_width: int) -> str:
    return f"(max-width: {display_width}px) 100vw, {display_width}px"


def build_responsive_attributes(
    metadata: ImageMetadata | None, display_width: int
) -> ResponsiveAttributes | None:
    """Build ``srcset`` and the default ``sizes`` for an image.

    Returns None when the image has no CDN breakpoints.
    """
    if metadata is None or not metadata.is_mirrored or not metadata.cdn_data.variants:
        return None
    return ResponsiveAttributes(
        srcset=build_srcset(metadata.cdn_data.variants),
        sizes=default_sizes(int(display_width or 0)),
    )
