"""Tests for picking CDN renditions for a requested size."""

from dataclasses import replace

from conftest import CDN_BASE, make_cdn_data, make_metadata

from cdn_responsive_images.models import DownsizeResult, ImageMetadata
from cdn_responsive_images.responsive.selector import build_transformation_url, select_for_size


def test_build_transformation_url_limit():
    url = build_transformation_url(f"{CDN_BASE}/v1/img.jpg", 300, 200)
    assert url == f"{CDN_BASE}/w_300,h_200,c_limit/v1/img.jpg"


def test_build_transformation_url_fill():
    url = build_transformation_url(f"{CDN_BASE}/v1/img.jpg", 150, 150, crop=True)
    assert url == f"{CDN_BASE}/w_150,h_150,c_lfill/v1/img.jpg"


def test_build_transformation_url_without_marker_is_unchanged():
    url = "https://cdn.example.com/assets/img.jpg"
    assert build_transformation_url(url, 300, 200) == url


def test_explicit_dimensions(sample_metadata, registry):
    result = select_for_size(sample_metadata, (300, 200), registry)
    assert result == DownsizeResult(
        url=f"{CDN_BASE}/w_300,h_200,c_limit/v1/img.jpg",
        width=300,
        height=200,
        is_constrained=True,
    )


def test_explicit_dimensions_always_limit(sample_metadata, registry):
    result = select_for_size(sample_metadata, [150, 150], registry)
    assert "c_limit" in result.url
    assert "c_lfill" not in result.url


def test_named_size_uses_fitted_dimensions(sample_metadata, registry):
    result = select_for_size(sample_metadata, "medium", registry)
    assert result.width == 300
    assert result.height == 200
    assert result.url == f"{CDN_BASE}/w_300,h_200,c_limit/v1/img.jpg"
    assert result.is_constrained is True


def test_named_size_with_unconstrained_height(sample_metadata, registry):
    result = select_for_size(sample_metadata, "medium_large", registry)
    assert (result.width, result.height) == (768, 512)


def test_named_size_falls_back_to_registry_dimensions(registry):
    # Original smaller than the box: no fit, registry values are used as-is
    meta = ImageMetadata(1, "x.jpg", 200, 100, make_cdn_data(width=1200, height=800))
    result = select_for_size(meta, "medium", registry)
    assert (result.width, result.height) == (300, 300)
    assert result.url == f"{CDN_BASE}/w_300,h_300,c_limit/v1/img.jpg"


def test_named_size_equal_to_original_uses_registry_dimensions(registry):
    meta = make_metadata(1, width=300, height=300)
    result = select_for_size(meta, "medium", registry)
    assert (result.width, result.height) == (300, 300)


def test_cropped_size_is_left_to_local_rendering(sample_metadata, registry):
    assert select_for_size(sample_metadata, "thumbnail", registry) is None


def test_size_larger_than_master_is_left_to_local_rendering(sample_metadata, registry):
    # large is 1024x1024, taller than the 800px master
    assert select_for_size(sample_metadata, "large", registry) is None


def test_unknown_or_full_size_is_left_to_local_rendering(sample_metadata, registry):
    assert select_for_size(sample_metadata, "poster", registry) is None
    assert select_for_size(sample_metadata, "full", registry) is None


def test_unmirrored_image_returns_none(registry):
    meta = make_metadata(1, mirrored=False)
    assert select_for_size(meta, "medium", registry) is None
    assert select_for_size(meta, (300, 200), registry) is None
    assert select_for_size(None, (300, 200), registry) is None


def test_partial_cdn_data_counts_as_unmirrored(sample_metadata, registry):
    meta = replace(sample_metadata, cdn_data=replace(sample_metadata.cdn_data, secure_url=""))
    assert select_for_size(meta, (300, 200), registry) is None
