from __future__ import annotations

import asyncio
from collections.abc import Iterable, Sequence
from pathlib import Path

from .models import SlideDescriptor, SlideFragment
from .utils import atomic_write, join_all

PLACEHOLDER_TEXT = "Content parsed from PPTX slide XML"


def render_slide(descriptor: SlideDescriptor) -> SlideFragment:
    # Only the ordinal is used; slide markup is not interpreted.
    markup = (
        '  <div class="slide-content">\n'
        f"    <h2>Slide {descriptor.ordinal}</h2>\n"
        f"    <p>{PLACEHOLDER_TEXT}</p>\n"
        "  </div>"
    )
    return SlideFragment(ordinal=descriptor.ordinal, html_markup=markup)


def render_slides(descriptors: Iterable[SlideDescriptor]) -> list[SlideFragment]:
    return [render_slide(descriptor) for descriptor in descriptors]


async def write_fragments(fragments: Sequence[SlideFragment], output_dir: Path) -> list[Path]:
    paths = [output_dir / fragment.file_name for fragment in fragments]
    await join_all(
        *(
            asyncio.to_thread(atomic_write, path, fragment.to_html() + "\n")
            for fragment, path in zip(fragments, paths)
        )
    )
    return paths


__all__ = ["PLACEHOLDER_TEXT", "render_slide", "render_slides", "write_fragments"]
