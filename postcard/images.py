"""Sized image references for Postcard.

A sized image is an image asset that has already been rendered at one or
more widths. Postcard does not resize anything; it only describes the
variants it is given so the summary view can emit a responsive <img>.

Key classes:
- ImageVariant: One rendered width of an image.
- SizedImage: A set of variants plus the ``sizes`` hint and aspect ratio.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from PIL import Image

_SRCSET_ENTRY_RE = re.compile(r"^(?P<src>\S+)\s+(?P<width>\d+)w$")


@dataclass(frozen=True)
class ImageVariant:
    """One pre-rendered resolution of an image.

    Attributes:
        src: URL of the rendered file.
        width: Pixel width.
        height: Pixel height, if known.
    """

    src: str
    width: int
    height: int | None = None

    def __post_init__(self):
        if not self.src:
            raise ValueError("Image variant needs a src")
        if self.width < 1:
            raise ValueError(f"Image variant width must be positive, got {self.width}")


def parse_srcset(text: str) -> list[ImageVariant]:
    """Parse a srcset attribute value into variants.

    Args:
        text: Value such as ``"/a-400.jpg 400w, /a-800.jpg 800w"``.

    Returns:
        List of ImageVariant in the order written.

    Raises:
        ValueError: If an entry has no width descriptor.
    """
    variants: list[ImageVariant] = []
    for entry in text.split(","):
        entry = entry.strip()
        if not entry:
            continue
        match = _SRCSET_ENTRY_RE.match(entry)
        if not match:
            raise ValueError(f"Unsupported srcset entry: {entry!r}")
        variants.append(ImageVariant(match.group("src"), int(match.group("width"))))
    return variants


@dataclass(frozen=True)
class SizedImage:
    """Reference to an image with one or more responsive size variants.

    Attributes:
        variants: Rendered widths, sorted ascending on construction.
        sizes_hint: Explicit ``sizes`` attribute value, if the source gave one.
        explicit_aspect_ratio: Width/height ratio, if the source gave one.
        alt: Alternative text; the summary falls back to the post title.
    """

    variants: tuple[ImageVariant, ...]
    sizes_hint: str | None = None
    explicit_aspect_ratio: float | None = None
    alt: str = ""

    def __post_init__(self):
        ordered = tuple(sorted(self.variants, key=lambda v: v.width))
        if not ordered:
            raise ValueError("Sized image needs at least one size variant")
        object.__setattr__(self, "variants", ordered)

    @property
    def _largest(self) -> ImageVariant:
        return self.variants[-1]

    @property
    def src(self) -> str:
        """URL of the largest variant, used as the plain ``src`` fallback."""
        return self._largest.src

    @property
    def srcset(self) -> str:
        return ", ".join(f"{v.src} {v.width}w" for v in self.variants)

    @property
    def sizes(self) -> str:
        if self.sizes_hint:
            return self.sizes_hint
        width = self._largest.width
        return f"(max-width: {width}px) 100vw, {width}px"

    @property
    def aspect_ratio(self) -> float | None:
        if self.explicit_aspect_ratio:
            return self.explicit_aspect_ratio
        if self._largest.height:
            return self._largest.width / self._largest.height
        return None

    @classmethod
    def from_variants(
        cls,
        variants: Iterable[ImageVariant],
        sizes: str | None = None,
        aspect_ratio: float | None = None,
        alt: str = "",
    ) -> SizedImage:
        return cls(tuple(variants), sizes, aspect_ratio, alt)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> SizedImage:
        """Build a sized image from processed-image metadata.

        Accepts ``{src, srcSet, sizes, aspectRatio, alt}``, optionally nested
        under ``childImageSharp.sizes`` as image plugins emit it. ``srcSet``
        takes precedence; a lone ``src`` needs a ``width``.

        Raises:
            ValueError: If no variant can be derived.
        """
        nested = data.get("childImageSharp")
        if isinstance(nested, Mapping):
            inner = nested.get("sizes") or nested.get("fluid") or {}
            merged = dict(inner)
            if "alt" in data:
                merged.setdefault("alt", data["alt"])
            data = merged

        variants: list[ImageVariant] = []
        srcset = data.get("srcSet") or data.get("srcset")
        if srcset:
            variants = parse_srcset(str(srcset))
        elif data.get("src"):
            width = data.get("width")
            if not isinstance(width, int):
                raise ValueError("Image with a single src needs an integer width")
            height = data.get("height")
            variants = [
                ImageVariant(
                    str(data["src"]), width, height if isinstance(height, int) else None
                )
            ]

        ratio = data.get("aspectRatio")
        return cls.from_variants(
            variants,
            sizes=data.get("sizes"),
            aspect_ratio=float(ratio) if ratio else None,
            alt=str(data.get("alt") or ""),
        )

    @classmethod
    def from_file(cls, path: Path, url: str, alt: str = "") -> SizedImage:
        """Describe an image file served at ``url`` as a single variant.

        Only the header is read to get the pixel dimensions; the file is not
        resampled or rewritten.

        Raises:
            ValueError: If the file is not a readable image.
        """
        try:
            with Image.open(path) as img:
                width, height = img.size
        except OSError as exc:
            raise ValueError(f"Cannot read image {path}: {exc}") from exc
        return cls.from_variants([ImageVariant(url, width, height)], alt=alt)
