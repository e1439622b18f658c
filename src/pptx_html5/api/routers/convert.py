from __future__ import annotations

import asyncio
from pathlib import Path

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from fastapi.responses import JSONResponse

from ...config import AppConfig
from ...core import ConversionService
from ...detection import accepts_upload
from ...errors import ConversionFailedError, OutputWriteError, is_client_error
from ...utils import atomic_write_bytes, generate_run_id
from ..dependencies import get_config, get_service
from ..schemas import ConversionPayload, ConvertResponse, ErrorResponse

router = APIRouter(tags=["conversion"])


@router.post(
    "/convert",
    summary="Upload and convert a PPTX file",
    response_model=ConvertResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def convert_presentation(
    pptx: UploadFile | None = File(None),
    service: ConversionService = Depends(get_service),
    config: AppConfig = Depends(get_config),
) -> ConvertResponse | JSONResponse:
    if pptx is None:
        raise HTTPException(status_code=400, detail="No PPTX file uploaded")
    if not accepts_upload(pptx.filename, pptx.content_type, config.allowed_mime_types):
        raise HTTPException(status_code=400, detail="Only PPTX files are allowed")

    content = await pptx.read()
    _enforce_size_limit(content, config)
    upload_path: Path | None = None
    try:
        upload_path = await asyncio.to_thread(_store_upload, content, pptx.filename, config)
        output_dir = config.runtime.output_dir / upload_path.stem
        result = await service.convert_async(upload_path, output_dir)
    except OutputWriteError as exc:
        body = ErrorResponse(error="Conversion failed", details=str(exc))
        return JSONResponse(status_code=500, content=body.model_dump())
    except ConversionFailedError as exc:
        status_code = 400 if is_client_error(exc) else 500
        body = ErrorResponse(error="Conversion failed", details=str(exc.cause))
        return JSONResponse(status_code=status_code, content=body.model_dump())
    finally:
        if upload_path is not None:
            upload_path.unlink(missing_ok=True)

    return ConvertResponse(
        message="Conversion completed successfully",
        input_file=pptx.filename or upload_path.name,
        output_directory=str(output_dir),
        result=ConversionPayload(
            success=result.success,
            slides=result.slide_count,
            media_files=result.media_count,
            html_file=str(result.html_file_path),
            css_files=[str(path) for path in result.css_file_paths],
            output_directory=str(result.output_directory),
        ),
    )


def _enforce_size_limit(payload: bytes, config: AppConfig) -> None:
    max_bytes = config.runtime.max_file_size_mb * 1024 * 1024
    if len(payload) > max_bytes:
        raise HTTPException(status_code=413, detail="SIZE_LIMIT")


def _store_upload(payload: bytes, filename: str | None, config: AppConfig) -> Path:
    suffix = Path(filename or "upload.pptx").suffix.lower() or ".pptx"
    path = config.runtime.upload_dir / f"{generate_run_id('upload')}{suffix}"
    atomic_write_bytes(path, payload)
    return path


__all__ = ["router"]
