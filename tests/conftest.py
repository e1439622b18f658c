from __future__ import annotations

import io
import zipfile
from pathlib import Path
from typing import Callable, Mapping

import pytest

from pptx_html5.config import AppConfig, RuntimeConfig

BuildPackage = Callable[..., Path]


def pptx_bytes(entries: Mapping[str, bytes | str]) -> bytes:
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as archive:
        archive.writestr("[Content_Types].xml", "<Types/>")
        for name, payload in entries.items():
            archive.writestr(name, payload)
    return buffer.getvalue()


def slide_xml(ordinal: int) -> str:
    return f'<p:sld xmlns:p="http://schemas.openxmlformats.org/presentationml/2006/main"><!-- {ordinal} --></p:sld>'


@pytest.fixture
def build_pptx(tmp_path: Path) -> BuildPackage:
    def _build(entries: Mapping[str, bytes | str], name: str = "deck.pptx") -> Path:
        path = tmp_path / name
        path.write_bytes(pptx_bytes(entries))
        return path

    return _build


@pytest.fixture
def app_config(tmp_path: Path) -> AppConfig:
    runtime = RuntimeConfig(
        output_dir=tmp_path / "output",
        upload_dir=tmp_path / "uploads",
        log_path=tmp_path / "logs" / "conversions.jsonl",
    )
    return AppConfig(runtime=runtime)
