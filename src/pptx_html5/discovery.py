from __future__ import annotations

import re
from dataclasses import dataclass

from .container import Package
from .errors import DuplicateSlideOrdinalError, MalformedSlideKeyError, SlideLimitError
from .models import SlideDescriptor
from .utils import join_all

SLIDE_PREFIX = "ppt/slides/slide"
SLIDE_SUFFIX = ".xml"
SLIDE_KEY_RE = re.compile(r"^ppt/slides/slide(\d+)\.xml$")


@dataclass(frozen=True, slots=True)
class OrdinalParse:
    key: str
    ordinal: int | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.ordinal is not None


def is_slide_candidate(key: str) -> bool:
    return key.startswith(SLIDE_PREFIX) and key.endswith(SLIDE_SUFFIX)


def parse_slide_ordinal(key: str) -> OrdinalParse:
    match = SLIDE_KEY_RE.match(key)
    if match is None:
        return OrdinalParse(key=key, error="name does not match slide<N>.xml")
    ordinal = int(match.group(1))
    if ordinal < 1:
        return OrdinalParse(key=key, error="ordinal must be at least 1")
    return OrdinalParse(key=key, ordinal=ordinal)


def _check_duplicates(parsed: list[OrdinalParse]) -> None:
    claimed: dict[int, list[str]] = {}
    for item in parsed:
        claimed.setdefault(item.ordinal, []).append(item.key)  # type: ignore[arg-type]
    for ordinal, keys in sorted(claimed.items()):
        if len(keys) > 1:
            raise DuplicateSlideOrdinalError(ordinal, keys)


async def discover_slides(package: Package, *, max_slides: int | None = None) -> list[SlideDescriptor]:
    parsed = [parse_slide_ordinal(key) for key in package.list_entries() if is_slide_candidate(key)]
    failures = [item.key for item in parsed if not item.ok]
    if failures:
        raise MalformedSlideKeyError(failures)
    _check_duplicates(parsed)
    if max_slides is not None and max_slides > 0 and len(parsed) > max_slides:
        raise SlideLimitError(f"Package has {len(parsed)} slides; the limit is {max_slides}")

    texts = await join_all(*(package.read_text(item.key) for item in parsed))
    descriptors = [
        SlideDescriptor(ordinal=item.ordinal, raw_markup=text, source_key=item.key)  # type: ignore[arg-type]
        for item, text in zip(parsed, texts)
    ]
    descriptors.sort(key=lambda descriptor: descriptor.ordinal)
    return descriptors


__all__ = [
    "OrdinalParse",
    "SLIDE_KEY_RE",
    "discover_slides",
    "is_slide_candidate",
    "parse_slide_ordinal",
]
