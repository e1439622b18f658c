from __future__ import annotations

import asyncio
import posixpath
from pathlib import Path

from .config import CollisionPolicy
from .container import Package
from .models import MediaAsset, MediaExtraction
from .utils import atomic_write_bytes, ensure_directory, join_all, short_digest

MEDIA_PREFIX = "ppt/media/"
MEDIA_DIRNAME = "media"


def is_media_entry(key: str) -> bool:
    return key.startswith(MEDIA_PREFIX) and not key.endswith("/")


def _plan_names(keys: list[str], policy: CollisionPolicy) -> tuple[dict[str, str], list[str]]:
    basenames = {key: posixpath.basename(key) for key in keys}
    seen: dict[str, list[str]] = {}
    for key, name in basenames.items():
        seen.setdefault(name, []).append(key)
    warnings: list[str] = []
    for name, owners in seen.items():
        if len(owners) < 2:
            continue
        if policy == "namespace":
            for key in owners:
                basenames[key] = f"{short_digest(key)}-{name}"
            warnings.append(f"MEDIA_NAME_NAMESPACED:{name}")
        else:
            warnings.append(f"MEDIA_NAME_COLLISION:{name}")
    return basenames, warnings


async def _copy_entry(package: Package, key: str, destination: Path) -> None:
    payload = await package.read_bytes(key)
    await asyncio.to_thread(atomic_write_bytes, destination, payload)


async def extract_media(
    package: Package,
    destination_root: Path,
    *,
    collision_policy: CollisionPolicy = "overwrite",
) -> MediaExtraction:
    """Copy every ``ppt/media/`` entry into ``destination_root/media``.

    The manifest lists one asset per media entry in archive order. When two
    entries share a base name and the policy is ``overwrite``, the entry that
    comes last in the archive is the one left on disk.
    """

    media_dir = ensure_directory(destination_root / MEDIA_DIRNAME)
    keys = [key for key in package.list_entries() if is_media_entry(key)]
    names, warnings = _plan_names(keys, collision_policy)

    assets: list[MediaAsset] = []
    writers: dict[str, str] = {}
    for key in keys:
        file_name = names[key]
        destination = (media_dir / file_name).resolve()
        assets.append(
            MediaAsset(
                source_key=key,
                file_name=file_name,
                destination_path=destination,
                relative_path=f"{MEDIA_DIRNAME}/{file_name}",
            )
        )
        writers[file_name] = key

    await join_all(
        *(_copy_entry(package, key, media_dir / file_name) for file_name, key in writers.items())
    )
    return MediaExtraction(assets=assets, warnings=warnings)


__all__ = ["MEDIA_DIRNAME", "MEDIA_PREFIX", "extract_media", "is_media_entry"]
