import asyncio
import json
import re
from pathlib import Path

import pytest

from conftest import slide_xml
from pptx_html5.config import AppConfig
from pptx_html5.core import ConversionService, convert_pptx_to_html
from pptx_html5.errors import (
    ContainerError,
    ConversionFailedError,
    ConversionTimeoutError,
    InputError,
    MalformedSlideKeyError,
)
from pptx_html5.models import ConversionOptions


def _tree(root: Path) -> list[str]:
    return sorted(path.relative_to(root).as_posix() for path in root.rglob("*"))


def test_two_slides_without_media(build_pptx, app_config: AppConfig, tmp_path: Path) -> None:
    source = build_pptx({"ppt/slides/slide2.xml": slide_xml(2), "ppt/slides/slide1.xml": slide_xml(1)})
    output = tmp_path / "out"
    result = ConversionService(app_config).convert(source, output)

    assert result.to_payload()["slides"] == 2
    assert result.to_payload()["mediaFiles"] == 0
    document = result.html_file_path.read_text(encoding="utf-8")
    assert re.findall(r'data-slide="(\d+)"', document) == ["1", "2"]
    assert '<div class="slide active" data-slide="1">' in document
    assert '<div class="slide" data-slide="2">' in document
    assert _tree(output) == ["index.html", "media", "presentation.css", "slide-1.html", "slide-2.html"]
    assert result.css_file_paths == [output / "presentation.css"]


def test_media_only_package(build_pptx, app_config: AppConfig, tmp_path: Path) -> None:
    source = build_pptx({"ppt/media/image1.png": b"\x89PNG"})
    output = tmp_path / "out"
    result = ConversionService(app_config).convert(source, output)

    assert result.slide_count == 0
    assert result.media_count == 1
    assert (output / "media" / "image1.png").read_bytes() == b"\x89PNG"
    assert '<span id="totalSlides">0</span>' in result.html_file_path.read_text(encoding="utf-8")


def test_malformed_archive_leaves_output_empty(app_config: AppConfig, tmp_path: Path) -> None:
    source = tmp_path / "broken.pptx"
    source.write_bytes(b"PK not really")
    output = tmp_path / "out"
    with pytest.raises(ConversionFailedError) as exc:
        ConversionService(app_config).convert(source, output)
    assert isinstance(exc.value.cause, ContainerError)
    assert isinstance(exc.value.__cause__, ContainerError)
    assert exc.value.code == "INVALID_ARCHIVE"
    assert str(exc.value).startswith("PPTX conversion failed:")
    assert output.is_dir()
    assert list(output.iterdir()) == []


def test_missing_input(app_config: AppConfig, tmp_path: Path) -> None:
    with pytest.raises(ConversionFailedError) as exc:
        ConversionService(app_config).convert(tmp_path / "absent.pptx", tmp_path / "out")
    assert isinstance(exc.value.cause, InputError)
    assert exc.value.code == "NOT_FOUND"


def test_malformed_slide_name_fails_whole_conversion(build_pptx, app_config: AppConfig, tmp_path: Path) -> None:
    source = build_pptx({"ppt/slides/slide1.xml": slide_xml(1), "ppt/slides/slideA.xml": "<x/>"})
    with pytest.raises(ConversionFailedError) as exc:
        ConversionService(app_config).convert(source, tmp_path / "out")
    assert isinstance(exc.value.cause, MalformedSlideKeyError)
    assert not (tmp_path / "out" / "index.html").exists()


def test_repeated_conversion_is_deterministic(build_pptx, app_config: AppConfig, tmp_path: Path) -> None:
    entries = {f"ppt/slides/slide{n}.xml": slide_xml(n) for n in (3, 1, 2)}
    entries["ppt/media/image1.png"] = b"img"
    source = build_pptx(entries)
    service = ConversionService(app_config)
    first = service.convert(source, tmp_path / "a")
    second = service.convert(source, tmp_path / "b")

    assert _tree(tmp_path / "a") == _tree(tmp_path / "b")
    for name in ("index.html", "presentation.css", "slide-1.html", "slide-2.html", "slide-3.html"):
        assert (tmp_path / "a" / name).read_text(encoding="utf-8") == (tmp_path / "b" / name).read_text(encoding="utf-8")
    assert first.slide_count == second.slide_count == 3


def test_progress_and_run_log(build_pptx, app_config: AppConfig, tmp_path: Path) -> None:
    source = build_pptx({"ppt/slides/slide1.xml": slide_xml(1)})
    seen: list[float] = []
    ConversionService(app_config).convert(source, tmp_path / "out", progress=seen.append)
    with pytest.raises(ConversionFailedError):
        ConversionService(app_config).convert(tmp_path / "absent.pptx", tmp_path / "out2")

    assert seen[0] == 0.0
    assert seen[-1] == 1.0
    assert seen == sorted(seen)
    lines = app_config.runtime.log_path.read_text(encoding="utf-8").splitlines()
    entries = [json.loads(line) for line in lines]
    assert [entry["status"] for entry in entries] == ["success", "failure"]
    assert entries[0]["slides"] == 1
    assert entries[1]["error_code"] == "NOT_FOUND"


def test_size_limit_option(build_pptx, app_config: AppConfig, tmp_path: Path) -> None:
    source = build_pptx({"ppt/media/big.bin": b"\x00" * (2 * 1024 * 1024)})
    source.write_bytes(source.read_bytes() + b"\x00" * (2 * 1024 * 1024))
    with pytest.raises(ConversionFailedError) as exc:
        ConversionService(app_config).convert(source, tmp_path / "out", options=ConversionOptions(size_limit_mb=1))
    assert exc.value.code == "SIZE_LIMIT"


def test_convert_helper_uses_default_title(build_pptx, app_config: AppConfig, tmp_path: Path) -> None:
    source = build_pptx({"ppt/slides/slide1.xml": slide_xml(1)})
    result = convert_pptx_to_html(source, tmp_path / "out", config=app_config)
    assert "<title>PPTX to HTML5 Presentation</title>" in result.html_file_path.read_text(encoding="utf-8")


def test_deadline_expiry_raises_timeout(build_pptx, app_config: AppConfig, tmp_path: Path, monkeypatch) -> None:
    async def slow_discovery(package, **kwargs):
        await asyncio.sleep(5)
        return []

    monkeypatch.setattr("pptx_html5.core.discover_slides", slow_discovery)
    source = build_pptx({"ppt/slides/slide1.xml": slide_xml(1)})
    with pytest.raises(ConversionFailedError) as exc:
        ConversionService(app_config).convert(source, tmp_path / "out", options=ConversionOptions(timeout_s=0.05))
    assert isinstance(exc.value.cause, ConversionTimeoutError)
    assert exc.value.code == "TIMEOUT"


def test_unwritable_run_log_becomes_warning(build_pptx, app_config: AppConfig, tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("file, not a directory", encoding="utf-8")
    app_config.runtime.log_path = blocker / "conversions.jsonl"
    source = build_pptx({"ppt/slides/slide1.xml": slide_xml(1)})
    output = tmp_path / "out"

    result = ConversionService(app_config).convert(source, output)

    assert result.slide_count == 1
    assert (output / "index.html").exists()
    assert any(warning.startswith("RUN_LOG_UNWRITABLE:") for warning in result.warnings)


def test_unwritable_run_log_keeps_pipeline_error(app_config: AppConfig, tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("file, not a directory", encoding="utf-8")
    app_config.runtime.log_path = blocker / "conversions.jsonl"
    source = tmp_path / "broken.pptx"
    source.write_bytes(b"PK not really")

    with pytest.raises(ConversionFailedError) as exc:
        ConversionService(app_config).convert(source, tmp_path / "out")

    assert isinstance(exc.value.cause, ContainerError)
    assert exc.value.code == "INVALID_ARCHIVE"
    assert any(note.startswith("Run log not written:") for note in exc.value.__notes__)
