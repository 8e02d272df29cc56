"""Data models for attachments mirrored to the CDN."""

from dataclasses import dataclass, field, replace


@dataclass(frozen=True)
class Variant:
    """One CDN-generated breakpoint of an image."""

    width: int
    height: int
    secure_url: str


@dataclass(frozen=True)
class Breakpoint:
    """A breakpoint as reported by the upload API."""

    width: int
    height: int
    bytes: int | None
    url: str | None
    secure_url: str


@dataclass(frozen=True)
class UploadResult:
    """The parts of an upload response we keep."""

    public_id: str
    width: int
    height: int
    bytes: int | None
    url: str
    secure_url: str
    breakpoints: list[Breakpoint] = field(default_factory=list)


@dataclass
class CdnData:
    """The CDN master asset of an image and its breakpoint variants.

    ``variants`` is keyed by width. Iteration follows insertion order, which is
    the order the breakpoints were received in.
    """

    public_id: str
    width: int
    height: int
    url: str
    secure_url: str
    bytes: int | None = None
    variants: dict[int, Variant] = field(default_factory=dict)

    @classmethod
    def from_upload(cls, result: UploadResult) -> "CdnData":
        """Build CDN data from an upload response.

        A breakpoint repeating an earlier width overwrites that entry.
        """
        variants: dict[int, Variant] = {}
        for bp in result.breakpoints:
            variants[bp.width] = Variant(width=bp.width, height=bp.height, secure_url=bp.secure_url)
        return cls(
            public_id=result.public_id,
            width=result.width,
            height=result.height,
            url=result.url,
            secure_url=result.secure_url,
            bytes=result.bytes,
            variants=variants,
        )


@dataclass
class ImageMetadata:
    """Metadata for a single attachment."""

    id: int | None
    file: str
    width: int
    height: int
    cdn_data: CdnData | None = None

    @property
    def is_mirrored(self) -> bool:
        """True when the image has usable CDN data."""
        return self.cdn_data is not None and bool(self.cdn_data.secure_url)


@dataclass(frozen=True)
class SizeDefinition:
    """A registered image size. 0 leaves a dimension unconstrained."""

    name: str
    width: int
    height: int
    crop: bool = False


@dataclass(frozen=True)
class DownsizeResult:
    """A final CDN URL and dimensions for a requested size."""

    url: str
    width: int
    height: int
    is_constrained: bool = True


@dataclass(frozen=True)
class ResponsiveAttributes:
    """``srcset`` and ``sizes`` values for an image tag."""

    srcset: str
    sizes: str

    def with_sizes(self, sizes: str) -> "ResponsiveAttributes":
        return replace(self, sizes=sizes)
