from __future__ import annotations

import json
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal, Mapping


CONFIG_FILE = Path("config.toml")

CollisionPolicy = Literal["overwrite", "namespace"]
COLLISION_POLICIES: tuple[str, ...] = ("overwrite", "namespace")


@dataclass(slots=True)
class LimitConfig:
    max_slides: int = 500


@dataclass(slots=True)
class MediaConfig:
    collision_policy: CollisionPolicy = "overwrite"


@dataclass(slots=True)
class RuntimeConfig:
    output_dir: Path = Path("output")
    upload_dir: Path = Path("uploads")
    log_path: Path | None = Path("logs/conversions.jsonl")
    max_file_size_mb: int = 50
    convert_timeout_s: int = 100
    enable_local_api: bool = True
    title: str = "PPTX to HTML5 Presentation"
    limits: LimitConfig = field(default_factory=LimitConfig)
    media: MediaConfig = field(default_factory=MediaConfig)


@dataclass(slots=True)
class APIConfig:
    host: str = "localhost"
    port: int = 3000


@dataclass(slots=True)
class AppConfig:
    runtime: RuntimeConfig = field(default_factory=RuntimeConfig)
    api: APIConfig = field(default_factory=APIConfig)
    allowed_mime_types: tuple[str, ...] = (
        "application/vnd.openxmlformats-officedocument.presentationml.presentation",
    )


def _read_toml(path: Path) -> Mapping[str, object]:
    if not path.exists():
        return {}
    with path.open("rb") as handle:
        return tomllib.load(handle)


def _build_limits(data: Mapping[str, object] | None) -> LimitConfig:
    if not data:
        return LimitConfig()
    return LimitConfig(max_slides=int(data.get("max_slides", 500)))


def _build_media(data: Mapping[str, object] | None) -> MediaConfig:
    if not data:
        return MediaConfig()
    policy = str(data.get("collision_policy", "overwrite"))
    if policy not in COLLISION_POLICIES:
        raise ValueError(f"Unsupported media collision policy: {policy!r}")
    return MediaConfig(collision_policy=policy)  # type: ignore[arg-type]


def _optional_path(value: object | None, default: Path | None) -> Path | None:
    if value is None:
        return default
    text = str(value).strip()
    if not text:
        return None
    return Path(text)


def _build_runtime(data: Mapping[str, object] | None) -> RuntimeConfig:
    if not data:
        return RuntimeConfig()
    limits = data.get("limits")
    media = data.get("media")
    return RuntimeConfig(
        output_dir=Path(str(data.get("output_dir", "output"))),
        upload_dir=Path(str(data.get("upload_dir", "uploads"))),
        log_path=_optional_path(data.get("log_path"), RuntimeConfig().log_path),
        max_file_size_mb=int(data.get("max_file_size_mb", 50)),
        convert_timeout_s=int(data.get("convert_timeout_s", 100)),
        enable_local_api=bool(data.get("enable_local_api", True)),
        title=str(data.get("title", RuntimeConfig().title)),
        limits=_build_limits(limits if isinstance(limits, Mapping) else None),
        media=_build_media(media if isinstance(media, Mapping) else None),
    )


def _build_api(data: Mapping[str, object] | None) -> APIConfig:
    if not data:
        return APIConfig()
    return APIConfig(host=str(data.get("host", "localhost")), port=int(data.get("port", 3000)))


def load_config(path: Path | None = None) -> AppConfig:
    path = path or CONFIG_FILE
    raw = _read_toml(path)
    runtime_data = raw.get("runtime") if isinstance(raw, Mapping) else None
    api_data = raw.get("api") if isinstance(raw, Mapping) else None
    runtime = _build_runtime(runtime_data if isinstance(runtime_data, Mapping) else None)
    api = _build_api(api_data if isinstance(api_data, Mapping) else None)
    return AppConfig(runtime=runtime, api=api)


def dump_config(config: AppConfig) -> str:
    payload = {
        "runtime": {
            "output_dir": str(config.runtime.output_dir),
            "upload_dir": str(config.runtime.upload_dir),
            "log_path": str(config.runtime.log_path) if config.runtime.log_path else "",
            "max_file_size_mb": config.runtime.max_file_size_mb,
            "convert_timeout_s": config.runtime.convert_timeout_s,
            "enable_local_api": config.runtime.enable_local_api,
            "title": config.runtime.title,
            "limits": {
                "max_slides": config.runtime.limits.max_slides,
            },
            "media": {
                "collision_policy": config.runtime.media.collision_policy,
            },
        },
        "api": {
            "host": config.api.host,
            "port": config.api.port,
        },
    }
    return json.dumps(payload, indent=2)
