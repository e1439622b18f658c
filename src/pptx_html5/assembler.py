from __future__ import annotations

import html
import os
from collections.abc import Sequence
from pathlib import Path

from .models import SlideFragment
from .utils import atomic_write

INDEX_NAME = "index.html"
DEFAULT_TITLE = "PPTX to HTML5 Presentation"

NAVIGATION_SCRIPT = """\
    <script>
        (function () {
            const slides = document.querySelectorAll('.presentation-container .slide');
            const prevBtn = document.getElementById('prevBtn');
            const nextBtn = document.getElementById('nextBtn');
            const current = document.getElementById('currentSlide');
            const state = { index: 0, total: slides.length };

            document.getElementById('totalSlides').textContent = state.total;

            function showSlide(state, index) {
                if (state.total === 0) {
                    current.textContent = 0;
                    prevBtn.disabled = true;
                    nextBtn.disabled = true;
                    return;
                }
                state.index = Math.max(0, Math.min(index, state.total - 1));
                slides.forEach(function (slide, position) {
                    slide.classList.toggle('active', position === state.index);
                });
                current.textContent = state.index + 1;
                prevBtn.disabled = state.index === 0;
                nextBtn.disabled = state.index === state.total - 1;
            }

            function nextSlide() {
                if (state.index < state.total - 1) {
                    showSlide(state, state.index + 1);
                }
            }

            function prevSlide() {
                if (state.index > 0) {
                    showSlide(state, state.index - 1);
                }
            }

            prevBtn.addEventListener('click', prevSlide);
            nextBtn.addEventListener('click', nextSlide);

            document.addEventListener('keydown', function (e) {
                if (e.key === 'ArrowRight' || e.key === ' ') {
                    nextSlide();
                } else if (e.key === 'ArrowLeft') {
                    prevSlide();
                }
            });

            showSlide(state, 0);
        })();
    </script>"""


def _stylesheet_links(stylesheets: Sequence[Path], output_dir: Path | None) -> str:
    links = []
    for path in stylesheets:
        href = Path(os.path.relpath(path, output_dir)) if output_dir is not None else Path(path.name)
        links.append(f'    <link rel="stylesheet" href="{html.escape(href.as_posix())}">')
    return "\n".join(links)


def _indent(block: str, prefix: str) -> str:
    return "\n".join(prefix + line if line else line for line in block.splitlines())


def build_document(
    fragments: Sequence[SlideFragment],
    stylesheets: Sequence[Path],
    *,
    title: str = DEFAULT_TITLE,
    output_dir: Path | None = None,
) -> str:
    slides_html = "\n".join(
        _indent(fragment.to_html(active=index == 0), " " * 8) for index, fragment in enumerate(fragments)
    )
    total = len(fragments)
    first = 1 if total else 0
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{html.escape(title)}</title>
{_stylesheet_links(stylesheets, output_dir)}
</head>
<body>
    <div class="presentation-container">
{slides_html}

        <div class="nav-controls">
            <button class="nav-btn" id="prevBtn">Previous</button>
            <button class="nav-btn" id="nextBtn">Next</button>
        </div>

        <div class="slide-indicator">
            <span id="currentSlide">{first}</span> / <span id="totalSlides">{total}</span>
        </div>
    </div>

{NAVIGATION_SCRIPT}
</body>
</html>
"""


def assemble_presentation(
    fragments: Sequence[SlideFragment],
    stylesheets: Sequence[Path],
    output_dir: Path,
    *,
    title: str = DEFAULT_TITLE,
) -> Path:
    document = build_document(fragments, stylesheets, title=title, output_dir=output_dir)
    path = output_dir / INDEX_NAME
    atomic_write(path, document)
    return path


__all__ = ["DEFAULT_TITLE", "INDEX_NAME", "assemble_presentation", "build_document"]
