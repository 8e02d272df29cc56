"""Shared test fixtures."""

import duckdb
import pytest

from cdn_responsive_images.mirror.schema import ensure_schema
from cdn_responsive_images.models import CdnData, ImageMetadata, Variant
from cdn_responsive_images.responsive.sizes import SizeRegistry

CDN_BASE = "https://res.cloudinary.com/demo/image/upload"


@pytest.fixture
def db_conn():
    """In-memory DuckDB connection with schema initialized."""
    conn = duckdb.connect(":memory:")
    ensure_schema(conn)
    yield conn
    conn.close()


@pytest.fixture
def registry() -> SizeRegistry:
    """Registry with the built-in default sizes only."""
    return SizeRegistry()


@pytest.fixture
def sample_metadata() -> ImageMetadata:
    """A 1200x800 image mirrored with 300w and 600w breakpoints."""
    return make_metadata(5, filename="img.jpg")


def make_cdn_data(
    filename: str = "img.jpg",
    width: int = 1200,
    height: int = 800,
    breakpoints: tuple[int, ...] = (300, 600),
) -> CdnData:
    """Helper to create CdnData whose breakpoints keep the master aspect ratio."""
    variants = {
        w: Variant(
            width=w,
            height=round(w * height / width),
            secure_url=f"{CDN_BASE}/c_scale,w_{w}/v1/{filename}",
        )
        for w in breakpoints
    }
    return CdnData(
        public_id=filename.rsplit(".", 1)[0],
        width=width,
        height=height,
        url=f"http://res.cloudinary.com/demo/image/upload/v1/{filename}",
        secure_url=f"{CDN_BASE}/v1/{filename}",
        bytes=120000,
        variants=variants,
    )


def make_metadata(
    attachment_id: int,
    filename: str = "img.jpg",
    width: int = 1200,
    height: int = 800,
    mirrored: bool = True,
    breakpoints: tuple[int, ...] = (300, 600),
) -> ImageMetadata:
    """Helper to create ImageMetadata, mirrored or local only."""
    return ImageMetadata(
        id=attachment_id,
        file=f"2024/01/{filename}",
        width=width,
        height=height,
        cdn_data=make_cdn_data(filename, width, height, breakpoints) if mirrored else None,
    )


class FakeStore:
    """In-memory metadata store that records every call."""

    def __init__(self, items: dict[int, ImageMetadata] | None = None) -> None:
        self.items = items or {}
        self.lookups: list[int] = []
        self.prefetched: list[list[int]] = []

    def get_attachment_metadata(self, attachment_id: int) -> ImageMetadata | None:
        self.lookups.append(attachment_id)
        return self.items.get(attachment_id)

    def prefetch(self, attachment_ids) -> None:
        self.prefetched.append(list(attachment_ids))
