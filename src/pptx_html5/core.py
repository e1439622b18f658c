from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from .assembler import assemble_presentation
from .config import AppConfig
from .container import Package
from .discovery import discover_slides
from .errors import (
    ConversionError,
    ConversionFailedError,
    ConversionTimeoutError,
    InputError,
    OutputWriteError,
)
from .logging import RunLogEntry, RunLogger, StageTimings
from .media import extract_media
from .models import ConversionOptions, ConversionResult
from .renderer import render_slides, write_fragments
from .stylesheet import write_stylesheet
from .utils import ensure_directory, generate_run_id, join_all, size_within_limit

ProgressCallback = Callable[[float], None]


@dataclass(slots=True)
class _ConversionContext:
    run_id: str
    source: Path
    output_dir: Path
    options: ConversionOptions
    callback: ProgressCallback
    timings: StageTimings = field(default_factory=StageTimings)
    size_bytes: int = 0


def _elapsed_ms(start: float) -> float:
    return (time.perf_counter() - start) * 1000


class ConversionService:
    def __init__(self, config: AppConfig | None = None) -> None:
        self._config = config or AppConfig()
        self._logger = RunLogger(self._config.runtime.log_path)

    def convert(
        self,
        input_path: Path | str,
        output_dir: Path | str,
        *,
        options: ConversionOptions | None = None,
        progress: ProgressCallback | None = None,
    ) -> ConversionResult:
        return asyncio.run(self.convert_async(input_path, output_dir, options=options, progress=progress))

    async def convert_async(
        self,
        input_path: Path | str,
        output_dir: Path | str,
        *,
        options: ConversionOptions | None = None,
        progress: ProgressCallback | None = None,
    ) -> ConversionResult:
        context = _ConversionContext(
            run_id=generate_run_id("convert"),
            source=Path(input_path),
            output_dir=Path(output_dir),
            options=options or ConversionOptions(),
            callback=progress or (lambda _: None),
        )
        context.callback(0.0)
        try:
            result = await self._run_with_deadline(context)
        except ConversionFailedError as exc:
            self._log_failure(context, exc)
            raise
        except Exception as exc:
            failure = ConversionFailedError(exc)
            self._log_failure(context, failure)
            raise failure from exc
        self._log_success(context, result)
        context.callback(1.0)
        return result

    async def _run_with_deadline(self, context: _ConversionContext) -> ConversionResult:
        timeout = self._compute_timeout(context.options)
        try:
            return await asyncio.wait_for(self._convert_internal(context), timeout=timeout)
        except asyncio.TimeoutError as exc:
            raise ConversionTimeoutError(
                f"Conversion of {context.source.name} exceeded {timeout:g}s"
            ) from exc

    async def _convert_internal(self, context: _ConversionContext) -> ConversionResult:
        output_dir = ensure_directory(context.output_dir)

        read_start = time.perf_counter()
        data = await asyncio.to_thread(self._read_source, context)
        context.timings.read_ms = _elapsed_ms(read_start)
        context.callback(0.1)

        parse_start = time.perf_counter()
        with Package.open(data) as package:
            slides, media = await join_all(
                discover_slides(package, max_slides=self._config.runtime.limits.max_slides),
                extract_media(
                    package,
                    output_dir,
                    collision_policy=self._config.runtime.media.collision_policy,
                ),
            )
        context.timings.parse_ms = _elapsed_ms(parse_start)
        context.callback(0.5)

        render_start = time.perf_counter()
        fragments = render_slides(slides)
        fragment_paths = await write_fragments(fragments, output_dir)
        context.timings.render_ms = _elapsed_ms(render_start)
        context.callback(0.7)

        write_start = time.perf_counter()
        stylesheet = await asyncio.to_thread(write_stylesheet, output_dir)
        title = context.options.title or self._config.runtime.title
        html_file = await asyncio.to_thread(
            assemble_presentation, fragments, [stylesheet], output_dir, title=title
        )
        context.timings.write_ms = _elapsed_ms(write_start)
        context.callback(0.9)

        return ConversionResult(
            run_id=context.run_id,
            slide_count=len(slides),
            media_count=len(media.assets),
            html_file_path=html_file,
            css_file_paths=[stylesheet],
            output_directory=output_dir,
            fragment_paths=fragment_paths,
            media=media.assets,
            warnings=media.warnings,
        )

    def _read_source(self, context: _ConversionContext) -> bytes:
        path = context.source
        if not path.is_file():
            raise InputError(f"Input file does not exist: {path}", code="NOT_FOUND")
        limit = self._effective_size_limit(context.options)
        if not size_within_limit(path, limit):
            raise InputError(f"File exceeds configured limit of {limit} MB: {path.name}", code="SIZE_LIMIT")
        data = path.read_bytes()
        context.size_bytes = len(data)
        return data

    def _compute_timeout(self, options: ConversionOptions) -> float | None:
        candidate = float(self._config.runtime.convert_timeout_s)
        if options.timeout_s is not None:
            candidate = min(candidate, float(options.timeout_s)) if candidate > 0 else float(options.timeout_s)
        if candidate <= 0:
            return None
        return candidate

    def _effective_size_limit(self, options: ConversionOptions) -> int:
        limit = self._config.runtime.max_file_size_mb
        candidate = options.size_limit_mb
        if candidate is not None and candidate > 0:
            limit = min(limit, candidate)
        return max(1, limit)

    def _log_success(self, context: _ConversionContext, result: ConversionResult) -> None:
        entry = RunLogEntry(
            run_id=context.run_id,
            source=str(context.source),
            status="success",
            output_directory=str(context.output_dir),
            slides=result.slide_count,
            media_files=result.media_count,
            warnings=list(result.warnings),
            error_code=None,
            error_message=None,
            timings=context.timings,
            size_bytes=context.size_bytes,
        )
        try:
            self._logger.append(entry)
        except OutputWriteError as log_exc:
            result.warnings.append(f"RUN_LOG_UNWRITABLE:{log_exc}")

    def _log_failure(self, context: _ConversionContext, exc: ConversionError) -> None:
        entry = RunLogEntry(
            run_id=context.run_id,
            source=str(context.source),
            status="failure",
            output_directory=str(context.output_dir),
            slides=0,
            media_files=0,
            warnings=[],
            error_code=exc.code,
            error_message=str(exc),
            timings=context.timings,
            size_bytes=context.size_bytes,
        )
        try:
            self._logger.append(entry)
        except OutputWriteError as log_exc:
            # The pipeline failure stays the raised error.
            exc.add_note(f"Run log not written: {log_exc}")


def convert_pptx_to_html(
    input_path: Path | str,
    output_dir: Path | str,
    config: AppConfig | None = None,
) -> ConversionResult:
    return ConversionService(config).convert(input_path, output_dir)


__all__ = [
    "ConversionService",
    "ProgressCallback",
    "convert_pptx_to_html",
]
