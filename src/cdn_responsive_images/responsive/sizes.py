"""Registered image sizes and their resolution into concrete dimensions."""

from cdn_responsive_images.config import DEFAULT_SIZE_NAMES, DEFAULT_SIZE_OPTIONS
from cdn_responsive_images.models import SizeDefinition

_OPTION_SUFFIXES = {"width": "size_w", "height": "size_h", "crop": "crop"}


class SizeRegistry:
    """Built-in sizes configured through options, plus theme-registered sizes.

    A theme-registered size overrides the options of a built-in size with the
    same name.
    """

    def __init__(
        self,
        default_names: list[str] | None = None,
        default_options: dict[str, int] | None = None,
    ) -> None:
        self.default_names = list(DEFAULT_SIZE_NAMES if default_names is None else default_names)
        self.default_options = dict(
            DEFAULT_SIZE_OPTIONS if default_options is None else default_options
        )
        self._additional: dict[str, SizeDefinition] = {}

    def add_image_size(
        self, name: str, width: int = 0, height: int = 0, crop: bool = False
    ) -> None:
        self._additional[name] = SizeDefinition(name=name, width=width, height=height, crop=crop)

    def remove_image_size(self, name: str) -> None:
        self._additional.pop(name, None)

    def get_registered_size_names(self) -> list[str]:
        """Names of all intermediate sizes, built-in ones first."""
        names = list(self.default_names)
        names.extend(n for n in self._additional if n not in names)
        return names

    def get_size_override(self, name: str) -> SizeDefinition | None:
        return self._additional.get(name)

    def get_default_size_option(self, name: str, dimension: str) -> int | None:
        """Read a default option; ``dimension`` is "width", "height" or "crop"."""
        return self.default_options.get(f"{name}_{_OPTION_SUFFIXES[dimension]}")


def resolve_sizes(size: str | None, registry: SizeRegistry) -> dict[str, SizeDefinition]:
    """Resolve registered sizes into concrete definitions.

    With ``size`` given, only that name is resolved; an unknown name yields an
    empty result. Missing values resolve to 0 / False.
    """
    sizes: dict[str, SizeDefinition] = {}
    for name in registry.get_registered_size_names():
        if size and size != name:
            continue

        override = registry.get_size_override(name)
        if override is not None:
            sizes[name] = SizeDefinition(
                name=name,
                width=int(override.width or 0),
                height=int(override.height or 0),
                crop=bool(override.crop),
            )
            continue

        sizes[name] = SizeDefinition(
            name=name,
            width=int(registry.get_default_size_option(name, "width") or 0),
            height=int(registry.get_default_size_option(name, "height") or 0),
            crop=bool(registry.get_default_size_option(name, "crop")),
        )
    return sizes
