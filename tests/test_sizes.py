"""Tests for size registry resolution."""

from cdn_responsive_images.models import SizeDefinition
from cdn_responsive_images.responsive.sizes import SizeRegistry, resolve_sizes


def test_resolve_all_default_sizes(registry):
    sizes = resolve_sizes(None, registry)
    assert list(sizes) == ["thumbnail", "medium", "medium_large", "large"]
    assert sizes["thumbnail"] == SizeDefinition("thumbnail", 150, 150, True)
    assert sizes["medium_large"] == SizeDefinition("medium_large", 768, 0, False)


def test_resolve_single_size(registry):
    sizes = resolve_sizes("medium", registry)
    assert sizes == {"medium": SizeDefinition("medium", 300, 300, False)}


def test_resolve_unknown_size_is_empty(registry):
    assert resolve_sizes("poster", registry) == {}
    assert resolve_sizes("full", registry) == {}


def test_theme_size_overrides_default(registry):
    registry.add_image_size("medium", 400, 0, crop=False)
    assert resolve_sizes("medium", registry)["medium"] == SizeDefinition("medium", 400, 0, False)


def test_theme_size_is_registered(registry):
    registry.add_image_size("hero", 1000, 400, crop=True)
    assert registry.get_registered_size_names()[-1] == "hero"
    assert resolve_sizes("hero", registry)["hero"] == SizeDefinition("hero", 1000, 400, True)

    registry.remove_image_size("hero")
    assert resolve_sizes("hero", registry) == {}


def test_missing_options_resolve_to_zero():
    registry = SizeRegistry(default_names=["custom"], default_options={})
    assert resolve_sizes("custom", registry)["custom"] == SizeDefinition("custom", 0, 0, False)
