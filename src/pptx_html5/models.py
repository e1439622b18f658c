"""Domain models for presentation conversion."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True, slots=True)
class SlideDescriptor:
    """One slide part discovered in the package."""

    ordinal: int
    raw_markup: str
    source_key: str


@dataclass(frozen=True, slots=True)
class MediaAsset:
    """An extracted media entry and where it landed on disk."""

    source_key: str
    file_name: str
    destination_path: Path
    relative_path: str


@dataclass(frozen=True, slots=True)
class SlideFragment:
    """Standalone HTML for one slide."""

    ordinal: int
    html_markup: str

    @property
    def file_name(self) -> str:
        return f"slide-{self.ordinal}.html"

    def to_html(self, *, active: bool = False) -> str:
        classes = "slide active" if active else "slide"
        return (
            f'<div class="{classes}" data-slide="{self.ordinal}">\n'
            f"{self.html_markup}\n"
            "</div>"
        )


@dataclass(slots=True)
class MediaExtraction:
    assets: list[MediaAsset]
    warnings: list[str] = field(default_factory=list)


@dataclass(slots=True)
class ConversionOptions:
    """Per-call overrides for a single conversion."""

    timeout_s: float | None = None
    size_limit_mb: int | None = None
    title: str | None = None


@dataclass(slots=True)
class ConversionResult:
    """Result metadata for an individual conversion."""

    run_id: str
    slide_count: int
    media_count: int
    html_file_path: Path
    css_file_paths: list[Path]
    output_directory: Path
    fragment_paths: list[Path] = field(default_factory=list)
    media: list[MediaAsset] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    success: bool = True

    def to_payload(self) -> dict[str, object]:
        return {
            "success": self.success,
            "slides": self.slide_count,
            "mediaFiles": self.media_count,
            "htmlFile": str(self.html_file_path),
            "cssFiles": [str(path) for path in self.css_file_paths],
            "outputDirectory": str(self.output_directory),
        }


__all__ = [
    "SlideDescriptor",
    "MediaAsset",
    "SlideFragment",
    "MediaExtraction",
    "ConversionOptions",
    "ConversionResult",
]
