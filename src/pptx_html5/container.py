"""Read-only access to the zip container of a presentation package."""

from __future__ import annotations

import asyncio
import io
import zipfile
import zlib
from dataclasses import dataclass
from pathlib import Path
from types import TracebackType

from .errors import ContainerError, EntryNotFoundError


@dataclass(frozen=True, slots=True)
class EntryInfo:
    name: str
    size: int
    compressed_size: int


class Package:
    """An opened presentation container.

    The directory table is read once when the package is opened. Entry payloads
    stay compressed until ``read_bytes``/``read_text`` asks for them, and the
    decompression runs in a worker thread so several reads can be in flight.
    """

    def __init__(self, archive: zipfile.ZipFile) -> None:
        self._archive = archive
        self._entries: dict[str, zipfile.ZipInfo] = {
            info.filename: info for info in archive.infolist() if not info.is_dir()
        }

    @classmethod
    def open(cls, data: bytes) -> Package:
        try:
            archive = zipfile.ZipFile(io.BytesIO(data))
        except (zipfile.BadZipFile, zipfile.LargeZipFile) as exc:
            raise ContainerError(f"Input is not a valid compressed archive: {exc}") from exc
        return cls(archive)

    @classmethod
    def from_path(cls, path: Path) -> Package:
        return cls.open(path.read_bytes())

    def list_entries(self) -> list[str]:
        return list(self._entries)

    def has_entry(self, key: str) -> bool:
        return key in self._entries

    async def lookup(self, key: str) -> EntryInfo:
        info = self._info(key)
        return EntryInfo(name=info.filename, size=info.file_size, compressed_size=info.compress_size)

    async def read_bytes(self, key: str) -> bytes:
        info = self._info(key)
        return await asyncio.to_thread(self._read, info)

    async def read_text(self, key: str, encoding: str = "utf-8") -> str:
        payload = await self.read_bytes(key)
        try:
            return payload.decode(encoding)
        except UnicodeDecodeError as exc:
            raise ContainerError(f"Entry {key} is not valid {encoding}") from exc

    def close(self) -> None:
        self._archive.close()

    def __enter__(self) -> Package:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def _info(self, key: str) -> zipfile.ZipInfo:
        info = self._entries.get(key)
        if info is None:
            raise EntryNotFoundError(key)
        return info

    def _read(self, info: zipfile.ZipInfo) -> bytes:
        try:
            return self._archive.read(info)
        except (zipfile.BadZipFile, zlib.error, NotImplementedError, RuntimeError) as exc:
            raise ContainerError(f"Cannot decompress entry {info.filename}: {exc}") from exc


__all__ = ["EntryInfo", "Package"]
